"""
Authentication providers.

Two providers exist: ``OpenAIAuth`` (bearer token against api.openai.com or any
OpenAI-compatible host) and ``AzureAuth`` (``api-key`` header or Entra ID bearer
token against an Azure OpenAI resource). Each resolves a request path to a full
URL and produces the headers for that request; both also resolve the realtime
websocket URL.

Providers are created explicitly, from the environment (``from_env``), or from a
URL whose host decides the provider (``from_url``).
"""

import logging
from typing import Dict, Optional, Union
from urllib.parse import urlsplit, urlunsplit

from openai_tools.common.errors import ConfigError
from openai_tools.config import constants
from openai_tools.config.constants import LOGGER_NAME
from openai_tools.config.settings import Settings, load_settings

logger = logging.getLogger(LOGGER_NAME)


def _to_websocket_scheme(url: str) -> str:
    if url.startswith("https://"):
        return "wss://" + url[len("https://"):]
    if url.startswith("http://"):
        return "ws://" + url[len("http://"):]
    return url


def _mask(secret: str) -> str:
    if len(secret) <= 8:
        return "***"
    return f"{secret[:4]}...{secret[-4:]}"


class OpenAIAuth:
    """Bearer-token authentication for OpenAI or an OpenAI-compatible host."""

    def __init__(self, api_key: str, base_url: Optional[str] = None):
        if not api_key:
            raise ConfigError("OpenAI API key is required")
        self.api_key = api_key
        self.base_url = (base_url or constants.OPENAI_BASE_URL).rstrip("/")

    @classmethod
    def from_env(cls, settings: Optional[Settings] = None) -> "OpenAIAuth":
        settings = settings or load_settings()
        if not settings.openai_api_key:
            raise ConfigError(f"{constants.ENV_OPENAI_API_KEY} is not set")
        return cls(settings.openai_api_key, settings.openai_base_url)

    @property
    def is_azure(self) -> bool:
        return False

    def endpoint(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def realtime_url(self, model: str) -> str:
        if self.base_url == constants.OPENAI_BASE_URL:
            return f"{constants.OPENAI_REALTIME_URL}?model={model}"
        return f"{_to_websocket_scheme(self.base_url)}/realtime?model={model}"

    def realtime_headers(self) -> Dict[str, str]:
        headers = self.headers()
        name, value = constants.REALTIME_BETA_HEADER
        headers[name] = value
        return headers

    def __repr__(self) -> str:
        return f"OpenAIAuth(base_url={self.base_url!r}, api_key={_mask(self.api_key)!r})"


class AzureAuth:
    """
    Azure OpenAI authentication.

    In the default mode the URL is assembled from the resource (or endpoint),
    the deployment and the API version. A raw base URL created with
    ``with_base_url`` is used as is, with the request path inserted in front of
    its query string.
    """

    def __init__(
        self,
        api_key: str,
        deployment_name: Optional[str] = None,
        resource_name: Optional[str] = None,
        base_url: Optional[str] = None,
        api_version: str = constants.AZURE_DEFAULT_API_VERSION,
        entra_id: bool = False,
    ):
        if not api_key:
            raise ConfigError("Azure OpenAI API key or token is required")
        self.api_key = api_key
        self.deployment_name = deployment_name
        self.resource_name = resource_name
        self.base_url = base_url.rstrip("/") if base_url else None
        self.api_version = api_version
        self.entra_id = entra_id
        self._raw_base_url = False

    @classmethod
    def with_base_url(cls, api_key: str, base_url: str, entra_id: bool = False) -> "AzureAuth":
        """Use a complete deployment URL (optionally with ``?api-version=``)."""
        auth = cls(api_key, base_url=base_url, entra_id=entra_id)
        auth._raw_base_url = True
        return auth

    @classmethod
    def from_env(cls, settings: Optional[Settings] = None) -> "AzureAuth":
        settings = settings or load_settings()
        if settings.azure_api_key:
            key, entra_id = settings.azure_api_key, False
        elif settings.azure_token:
            key, entra_id = settings.azure_token, True
        else:
            raise ConfigError(
                f"{constants.ENV_AZURE_API_KEY} or {constants.ENV_AZURE_TOKEN} is not set"
            )
        if not (settings.azure_endpoint or settings.azure_resource_name):
            raise ConfigError(
                f"{constants.ENV_AZURE_ENDPOINT} or {constants.ENV_AZURE_RESOURCE_NAME} is not set"
            )
        return cls(
            key,
            deployment_name=settings.azure_deployment_name,
            resource_name=settings.azure_resource_name,
            base_url=settings.azure_endpoint,
            api_version=settings.azure_api_version,
            entra_id=entra_id,
        )

    @property
    def is_azure(self) -> bool:
        return True

    def _host_url(self) -> str:
        if self.base_url:
            return self.base_url
        if self.resource_name:
            return f"https://{self.resource_name}{constants.AZURE_HOST_SUFFIX}"
        raise ConfigError("Azure endpoint or resource name is required")

    def endpoint(self, path: str) -> str:
        path = path.lstrip("/")
        if self._raw_base_url:
            base, _, query = self.base_url.partition("?")
            url = f"{base.rstrip('/')}/{path}"
            return f"{url}?{query}" if query else url
        if not self.deployment_name:
            raise ConfigError("Azure deployment name is required")
        return (
            f"{self._host_url()}/openai/deployments/{self.deployment_name}/{path}"
            f"?api-version={self.api_version}"
        )

    def headers(self) -> Dict[str, str]:
        if self.entra_id:
            return {"Authorization": f"Bearer {self.api_key}"}
        return {"api-key": self.api_key}

    def realtime_url(self, model: str) -> str:
        if self._raw_base_url:
            return _to_websocket_scheme(self.base_url)
        parts = urlsplit(self._host_url())
        scheme = "ws" if parts.scheme == "http" else "wss"
        deployment = self.deployment_name or model
        query = f"api-version={self.api_version}&deployment={deployment}"
        return urlunsplit((scheme, parts.netloc, "/openai/realtime", query, ""))

    def realtime_headers(self) -> Dict[str, str]:
        headers = self.headers()
        name, value = constants.REALTIME_BETA_HEADER
        headers[name] = value
        return headers

    def __repr__(self) -> str:
        target = self.base_url or self.resource_name
        return (
            f"AzureAuth(target={target!r}, deployment={self.deployment_name!r}, "
            f"api_version={self.api_version!r}, entra_id={self.entra_id})"
        )


AuthProvider = Union[OpenAIAuth, AzureAuth]


def is_azure_url(url: str) -> bool:
    return constants.AZURE_HOST_SUFFIX in url.lower()


def from_env(settings: Optional[Settings] = None) -> AuthProvider:
    """Azure when Azure credentials are present in the environment, else OpenAI."""
    settings = settings or load_settings()
    if settings.has_azure_credentials:
        logger.debug("Using Azure OpenAI credentials from environment")
        return AzureAuth.from_env(settings)
    return OpenAIAuth.from_env(settings)


def from_url(
    url: str,
    api_key: Optional[str] = None,
    deployment_name: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> AuthProvider:
    """
    Pick the provider from the URL's host.

    ``*.openai.azure.com`` selects Azure; every other URL is treated as an
    OpenAI-compatible base URL. Missing keys and deployments fall back to the
    environment.
    """
    if not url:
        raise ConfigError("URL is required")
    needs_env = api_key is None or (is_azure_url(url) and deployment_name is None)
    if needs_env and settings is None:
        settings = load_settings()

    if is_azure_url(url):
        entra_id = False
        if api_key is None:
            if settings.azure_api_key:
                api_key = settings.azure_api_key
            elif settings.azure_token:
                api_key, entra_id = settings.azure_token, True
            else:
                raise ConfigError(f"{constants.ENV_AZURE_API_KEY} is not set")
        if "/openai/deployments/" in url:
            return AzureAuth.with_base_url(api_key, url, entra_id=entra_id)
        deployment_name = deployment_name or settings.azure_deployment_name
        if not deployment_name:
            raise ConfigError(
                f"Azure deployment name is required ({constants.ENV_AZURE_DEPLOYMENT_NAME})"
            )
        return AzureAuth(
            api_key,
            deployment_name=deployment_name,
            base_url=url,
            api_version=settings.azure_api_version if settings else constants.AZURE_DEFAULT_API_VERSION,
            entra_id=entra_id,
        )

    if api_key is None:
        api_key = settings.openai_api_key
        if not api_key:
            raise ConfigError(f"{constants.ENV_OPENAI_API_KEY} is not set")
    return OpenAIAuth(api_key, base_url=url)
