"""
Base class shared by the REST API clients.

Every client owns an ``HttpClient`` built from an authentication provider. When
no provider is passed, credentials are resolved from the environment once, at
construction time.
"""

import logging
from typing import Optional

from openai_tools.common.auth import AuthProvider, AzureAuth, from_env, from_url
from openai_tools.common.http import HttpClient
from openai_tools.config.constants import LOGGER_NAME
from openai_tools.config.settings import Settings, load_settings

logger = logging.getLogger(LOGGER_NAME)


class BaseClient:
    """Holds the auth provider and HTTP transport for one API area."""

    def __init__(
        self,
        auth: Optional[AuthProvider] = None,
        timeout: Optional[float] = None,
        settings: Optional[Settings] = None,
    ):
        if auth is None or timeout is None:
            settings = settings or load_settings()
        if auth is None:
            auth = from_env(settings)
        if timeout is None:
            timeout = settings.timeout
        self.http = HttpClient(auth, timeout=timeout)
        logger.debug(f"{type(self).__name__} initialized with {auth!r}")

    @classmethod
    def azure(cls, settings: Optional[Settings] = None, **kwargs):
        """Client using Azure OpenAI credentials from the environment."""
        return cls(auth=AzureAuth.from_env(settings), settings=settings, **kwargs)

    @classmethod
    def detect_provider(cls, settings: Optional[Settings] = None, **kwargs):
        """Client using whichever provider the environment configures."""
        return cls(auth=from_env(settings), settings=settings, **kwargs)

    @classmethod
    def with_url(cls, base_url: str, api_key: str, **kwargs):
        """Client for an explicit base URL; the provider follows the URL's host."""
        return cls(auth=from_url(base_url, api_key=api_key), **kwargs)

    @classmethod
    def from_url(cls, url: str, deployment_name: Optional[str] = None, **kwargs):
        """Client for a URL, taking credentials from the environment."""
        return cls(auth=from_url(url, deployment_name=deployment_name), **kwargs)

    @property
    def auth(self) -> AuthProvider:
        return self.http.auth

    def with_timeout(self, seconds: Optional[float]):
        """Set the per-request timeout; None means no limit."""
        self.http.timeout = seconds
        return self
