"""
Shared building blocks used by every API area.

Key components:
- auth: ``OpenAIAuth`` and ``AzureAuth`` providers plus ``from_env`` and
  ``from_url`` detection.
- http: ``HttpClient`` over a ``requests.Session`` with error mapping.
- client: ``BaseClient``, the base class of the REST clients.
- models: Model identifiers and the per-model parameter policy.
- message, tool, structured_output, usage, pagination: Shared wire types.
- errors: The library's exception hierarchy.
"""

# Common module initialization
