"""
Realtime API support.

Key components:
- client: ``RealtimeClient`` (builder) and ``RealtimeSession`` (one live
  websocket connection with typed send/receive and deterministic close).
- events: Pydantic models for every client and server event, and
  ``parse_server_event`` with an ``UnknownServerEvent`` fallback.
- session, vad, conversation: Session configuration, turn detection and
  conversation items.
- handler: ``EventHandler`` callback dispatch by event type.
- audio: Base64 PCM16 helpers.

Usage examples:
```python
from openai_tools.realtime import RealtimeClient, EventHandler

handler = EventHandler().on_text_delta(lambda e: print(e.delta, end=""))
session = await RealtimeClient().modalities(["text"]).connect()
await session.send_text("Hi")
await session.create_response()
await session.run(handler)
```
"""

from openai_tools.realtime.client import CloseKind, RealtimeClient, RealtimeSession, SessionState
from openai_tools.realtime.conversation import ContentPart, ConversationItem
from openai_tools.realtime.handler import EventHandler
from openai_tools.realtime.session import (
    InputAudioTranscription,
    NoiseReduction,
    RealtimeTool,
    ResponseCreateConfig,
    SessionConfig,
)
from openai_tools.realtime.vad import SemanticVad, ServerVad
