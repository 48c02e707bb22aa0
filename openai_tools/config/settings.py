"""
Environment-backed settings.

Settings are read once, when a client is constructed, into an immutable
``Settings`` object that is then passed around explicitly. A ``.env`` file in the
working directory is loaded first without overriding variables that are already
set in the process environment.
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from openai_tools.config import constants
from openai_tools.config.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


class Settings(BaseModel):
    """Snapshot of the environment variables the library understands."""

    model_config = ConfigDict(frozen=True)

    openai_api_key: Optional[str] = Field(None, description="OPENAI_API_KEY")
    openai_base_url: Optional[str] = Field(None, description="OPENAI_BASE_URL")
    azure_api_key: Optional[str] = Field(None, description="AZURE_OPENAI_API_KEY")
    azure_token: Optional[str] = Field(None, description="AZURE_OPENAI_TOKEN (Entra ID)")
    azure_endpoint: Optional[str] = Field(None, description="AZURE_OPENAI_ENDPOINT")
    azure_resource_name: Optional[str] = Field(None, description="AZURE_OPENAI_RESOURCE_NAME")
    azure_deployment_name: Optional[str] = Field(None, description="AZURE_OPENAI_DEPLOYMENT_NAME")
    azure_api_version: str = Field(constants.AZURE_DEFAULT_API_VERSION)
    log_level: str = Field("INFO")
    timeout: Optional[float] = Field(None, description="OPENAI_TIMEOUT in seconds")

    @field_validator("timeout", mode="before")
    def parse_timeout(cls, v):
        """Treat an empty OPENAI_TIMEOUT as unset."""
        if v in ("", None):
            return None
        return v

    @property
    def has_azure_credentials(self) -> bool:
        return bool(self.azure_api_key or self.azure_token)

    @classmethod
    def from_mapping(cls, env: Mapping[str, str]) -> "Settings":
        """Build settings from an environment-like mapping."""

        def get(name: str) -> Optional[str]:
            value = env.get(name)
            return value if value else None

        return cls(
            openai_api_key=get(constants.ENV_OPENAI_API_KEY),
            openai_base_url=get(constants.ENV_OPENAI_BASE_URL),
            azure_api_key=get(constants.ENV_AZURE_API_KEY),
            azure_token=get(constants.ENV_AZURE_TOKEN),
            azure_endpoint=get(constants.ENV_AZURE_ENDPOINT),
            azure_resource_name=get(constants.ENV_AZURE_RESOURCE_NAME),
            azure_deployment_name=get(constants.ENV_AZURE_DEPLOYMENT_NAME),
            azure_api_version=get(constants.ENV_AZURE_API_VERSION)
            or constants.AZURE_DEFAULT_API_VERSION,
            log_level=(get("LOG_LEVEL") or "INFO").upper(),
            timeout=get(constants.ENV_TIMEOUT),
        )


def load_settings(env_file: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load ``.env`` (if present) and snapshot the environment.

    Args:
        env_file: Explicit dotenv path; defaults to ``./.env``

    Returns:
        Settings: The captured settings
    """
    env_path = Path(env_file) if env_file is not None else Path(".") / ".env"
    if env_path.exists():
        logger.debug(f"Loading environment from {env_path}")
        load_dotenv(dotenv_path=env_path, override=False)
    return Settings.from_mapping(os.environ)
