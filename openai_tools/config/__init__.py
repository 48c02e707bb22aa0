"""
Configuration module for the openai_tools library.

This module provides centralized configuration management for the library,
including constants, logging setup, and environment-based settings.

Key components:
- constants: Library-wide constants such as default models, endpoint URLs,
  environment variable names and realtime websocket settings.
- logging_config: Opt-in logging setup with a console handler and an optional
  rotating file handler.
- settings: A frozen snapshot of the environment (``.env`` aware) that the
  authentication layer resolves credentials from.

Usage examples:
```python
from openai_tools.config.logging_config import configure_logging
logger = configure_logging(level="DEBUG")

from openai_tools.config.settings import load_settings
settings = load_settings()
print(settings.has_azure_credentials)
```
"""
