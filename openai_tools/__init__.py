"""
openai_tools: typed clients for the OpenAI HTTP and WebSocket APIs.

This package maps typed request builders to JSON wire payloads, issues the HTTP
or WebSocket calls, and maps the responses back to pydantic models.

Key components:
- realtime: The realtime session engine. One ``RealtimeSession`` owns a
  websocket connection, sends typed client events and yields typed server
  events in arrival order.
- chat, responses: Request builders for chat completions and the responses
  API, including tools and structured output. Both apply the per-model
  parameter policy before sending.
- conversations, embedding, models, files, moderation, images, audio,
  batch, fine_tuning: Thin clients for the remaining REST areas.
- common: Authentication providers (OpenAI, Azure), the HTTP transport,
  shared message/tool/schema types and the error hierarchy.
- config: Constants, ``.env``-aware settings and opt-in logging setup.

Usage examples:
```python
from openai_tools import ChatCompletion, Message, Role

chat = ChatCompletion().model("gpt-4o-mini").messages(
    [Message.from_string(Role.USER, "Hello!")]
)
print(chat.chat().content)

# Realtime text session
import asyncio
from openai_tools import RealtimeClient

async def main():
    client = RealtimeClient().modalities(["text"])
    async with client.session() as session:
        await session.send_text("Hello!")
        await session.create_response()
        async for event in session:
            if event.type == "response.done":
                break

asyncio.run(main())
```
"""

from openai_tools.audio.request import Audio
from openai_tools.batch.request import Batches
from openai_tools.chat.request import ChatCompletion
from openai_tools.common.auth import AzureAuth, OpenAIAuth
from openai_tools.common.errors import (
    ApiError,
    AuthError,
    ConfigError,
    DecodeError,
    OpenAIToolError,
    RealtimeConnectionError,
    RealtimeError,
    ReceiveError,
    SendError,
    SerializationError,
    TransportError,
)
from openai_tools.common.message import Content, Message, Role
from openai_tools.common.structured_output import Schema
from openai_tools.common.tool import ParameterProperty, Tool
from openai_tools.conversations.request import Conversations
from openai_tools.embedding.request import Embedding
from openai_tools.files.request import FilePurpose, Files
from openai_tools.fine_tuning.request import FineTuning
from openai_tools.images.request import Images
from openai_tools.models.request import Models
from openai_tools.moderation.request import Moderations
from openai_tools.realtime.client import RealtimeClient, RealtimeSession
from openai_tools.responses.request import Responses

__version__ = "0.1.0"
