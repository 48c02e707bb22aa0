"""
Constants and configuration values used throughout the library.

This module defines constants that are used across different parts of the library,
providing a centralized location for default models, endpoints and transport
settings so that every API client reads the same values.
"""

# Logger name used throughout the library
LOGGER_NAME = "openai_tools"

# Default models
DEFAULT_CHAT_MODEL = "gpt-4o-mini"
DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"
DEFAULT_MODERATION_MODEL = "omni-moderation-latest"
DEFAULT_REALTIME_MODEL = "gpt-4o-realtime-preview"

# OpenAI endpoints
OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENAI_REALTIME_URL = "wss://api.openai.com/v1/realtime"

# Azure OpenAI
AZURE_DEFAULT_API_VERSION = "2024-08-01-preview"
AZURE_HOST_SUFFIX = ".openai.azure.com"

# Environment variable names
ENV_OPENAI_API_KEY = "OPENAI_API_KEY"
ENV_OPENAI_BASE_URL = "OPENAI_BASE_URL"
ENV_AZURE_API_KEY = "AZURE_OPENAI_API_KEY"
ENV_AZURE_TOKEN = "AZURE_OPENAI_TOKEN"
ENV_AZURE_ENDPOINT = "AZURE_OPENAI_ENDPOINT"
ENV_AZURE_RESOURCE_NAME = "AZURE_OPENAI_RESOURCE_NAME"
ENV_AZURE_DEPLOYMENT_NAME = "AZURE_OPENAI_DEPLOYMENT_NAME"
ENV_AZURE_API_VERSION = "AZURE_OPENAI_API_VERSION"
ENV_TIMEOUT = "OPENAI_TIMEOUT"

# Realtime protocol header
REALTIME_BETA_HEADER = ("OpenAI-Beta", "realtime=v1")

# WebSocket configuration for the realtime channel
WS_MAX_SIZE = 16 * 1024 * 1024  # 16MB - large enough for audio chunks
WS_PING_INTERVAL = 20  # seconds between pings
WS_PING_TIMEOUT = 20
WS_MAX_QUEUE = 32  # frames buffered by websockets before it stops reading
EVENT_QUEUE_SIZE = 256  # decoded events waiting for recv()
CONNECTION_TIMEOUT = 30  # seconds
SESSION_CREATED_TIMEOUT = 15  # seconds to wait for session.created
CLOSE_TIMEOUT = 10  # seconds to wait for the close handshake

# Realtime audio (PCM16 mono, little endian)
REALTIME_SAMPLE_RATE = 24000
PCM16_SAMPLE_WIDTH = 2
