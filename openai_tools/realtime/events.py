"""
Pydantic models for the realtime event protocol.

Every frame is a JSON object whose ``type`` field names the event. Client events
are what the caller sends; server events are decoded with
``parse_server_event``, which looks the discriminant up in ``SERVER_EVENT_TYPES``
and falls back to ``UnknownServerEvent`` for anything it cannot map, so a single
odd frame never ends a session.
"""

import json
import logging
from typing import Any, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, Field, ValidationError

from openai_tools.common.errors import SerializationError
from openai_tools.config.constants import LOGGER_NAME
from openai_tools.realtime.conversation import ContentPart, ConversationItem
from openai_tools.realtime.session import ResponseCreateConfig, SessionConfig

logger = logging.getLogger(LOGGER_NAME)


# Client events


class ClientEvent(BaseModel):
    """Base model for events sent to the server."""

    type: str
    event_id: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)

    def to_json(self) -> str:
        try:
            return json.dumps(self.to_wire())
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Could not encode {self.type}: {e}") from e


class SessionUpdate(ClientEvent):
    type: Literal["session.update"] = "session.update"
    session: SessionConfig

    def to_wire(self) -> Dict[str, Any]:
        data = super().to_wire()
        data["session"] = self.session.to_wire()
        return data


class InputAudioBufferAppend(ClientEvent):
    type: Literal["input_audio_buffer.append"] = "input_audio_buffer.append"
    audio: str = Field(..., description="Base64 encoded audio")


class InputAudioBufferCommit(ClientEvent):
    type: Literal["input_audio_buffer.commit"] = "input_audio_buffer.commit"


class InputAudioBufferClear(ClientEvent):
    type: Literal["input_audio_buffer.clear"] = "input_audio_buffer.clear"


class OutputAudioBufferClear(ClientEvent):
    type: Literal["output_audio_buffer.clear"] = "output_audio_buffer.clear"


class ConversationItemCreate(ClientEvent):
    type: Literal["conversation.item.create"] = "conversation.item.create"
    previous_item_id: Optional[str] = None
    item: ConversationItem


class ConversationItemRetrieve(ClientEvent):
    type: Literal["conversation.item.retrieve"] = "conversation.item.retrieve"
    item_id: str


class ConversationItemTruncate(ClientEvent):
    type: Literal["conversation.item.truncate"] = "conversation.item.truncate"
    item_id: str
    content_index: int
    audio_end_ms: int


class ConversationItemDelete(ClientEvent):
    type: Literal["conversation.item.delete"] = "conversation.item.delete"
    item_id: str


class ResponseCreate(ClientEvent):
    type: Literal["response.create"] = "response.create"
    response: Optional[ResponseCreateConfig] = None


class ResponseCancel(ClientEvent):
    type: Literal["response.cancel"] = "response.cancel"
    response_id: Optional[str] = None


# Server event payloads


class ErrorDetail(BaseModel):
    """Error object carried by ``error`` and transcription failure events."""

    type: Optional[str] = None
    code: Optional[str] = None
    message: str = ""
    param: Optional[str] = None
    event_id: Optional[str] = None


class SessionInfo(BaseModel):
    """Session state reported by the server."""

    id: Optional[str] = None
    object: Optional[str] = None
    model: Optional[str] = None
    modalities: Optional[List[str]] = None
    instructions: Optional[str] = None
    voice: Optional[str] = None
    input_audio_format: Optional[str] = None
    output_audio_format: Optional[str] = None
    input_audio_transcription: Optional[Dict[str, Any]] = None
    turn_detection: Optional[Dict[str, Any]] = None
    tools: Optional[List[Dict[str, Any]]] = None
    tool_choice: Optional[Union[str, Dict[str, Any]]] = None
    temperature: Optional[float] = None
    max_response_output_tokens: Optional[Union[int, str]] = None
    expires_at: Optional[int] = None


class ConversationInfo(BaseModel):
    id: str
    object: Optional[str] = None


class RealtimeInputTokenDetails(BaseModel):
    cached_tokens: Optional[int] = None
    text_tokens: Optional[int] = None
    audio_tokens: Optional[int] = None


class RealtimeOutputTokenDetails(BaseModel):
    text_tokens: Optional[int] = None
    audio_tokens: Optional[int] = None


class RealtimeUsage(BaseModel):
    total_tokens: Optional[int] = None
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    input_token_details: Optional[RealtimeInputTokenDetails] = None
    output_token_details: Optional[RealtimeOutputTokenDetails] = None


class ResponseInfo(BaseModel):
    """A response as reported by ``response.created`` and ``response.done``."""

    id: Optional[str] = None
    object: Optional[str] = None
    status: Optional[str] = Field(
        None, description="in_progress, completed, cancelled, incomplete or failed"
    )
    status_details: Optional[Dict[str, Any]] = None
    output: List[ConversationItem] = Field(default_factory=list)
    usage: Optional[RealtimeUsage] = None
    conversation_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @property
    def text(self) -> str:
        return "".join(item.text for item in self.output)


class RateLimit(BaseModel):
    name: str
    limit: int
    remaining: int
    reset_seconds: float


# Server events


class ServerEvent(BaseModel):
    """Base model for events received from the server."""

    type: str
    event_id: Optional[str] = None

    @property
    def correlation_id(self) -> Optional[str]:
        """Identifier routing the event: response id, else item id, else event id."""
        for name in ("response_id", "item_id"):
            value = getattr(self, name, None)
            if value:
                return value
        return self.event_id


class ErrorEvent(ServerEvent):
    type: Literal["error"] = "error"
    error: ErrorDetail


class SessionCreated(ServerEvent):
    type: Literal["session.created"] = "session.created"
    session: SessionInfo


class SessionUpdated(ServerEvent):
    type: Literal["session.updated"] = "session.updated"
    session: SessionInfo


class ConversationCreated(ServerEvent):
    type: Literal["conversation.created"] = "conversation.created"
    conversation: ConversationInfo


class ConversationItemCreated(ServerEvent):
    type: Literal["conversation.item.created"] = "conversation.item.created"
    previous_item_id: Optional[str] = None
    item: ConversationItem

    @property
    def item_id(self) -> Optional[str]:
        return self.item.id


class ConversationItemRetrieved(ServerEvent):
    type: Literal["conversation.item.retrieved"] = "conversation.item.retrieved"
    item: ConversationItem

    @property
    def item_id(self) -> Optional[str]:
        return self.item.id


class InputAudioTranscriptionCompleted(ServerEvent):
    type: Literal["conversation.item.input_audio_transcription.completed"] = (
        "conversation.item.input_audio_transcription.completed"
    )
    item_id: str
    content_index: int
    transcript: str


class InputAudioTranscriptionDelta(ServerEvent):
    type: Literal["conversation.item.input_audio_transcription.delta"] = (
        "conversation.item.input_audio_transcription.delta"
    )
    item_id: str
    content_index: Optional[int] = None
    delta: str


class InputAudioTranscriptionFailed(ServerEvent):
    type: Literal["conversation.item.input_audio_transcription.failed"] = (
        "conversation.item.input_audio_transcription.failed"
    )
    item_id: str
    content_index: int
    error: ErrorDetail


class ConversationItemTruncated(ServerEvent):
    type: Literal["conversation.item.truncated"] = "conversation.item.truncated"
    item_id: str
    content_index: int
    audio_end_ms: int


class ConversationItemDeleted(ServerEvent):
    type: Literal["conversation.item.deleted"] = "conversation.item.deleted"
    item_id: str


class InputAudioBufferCommitted(ServerEvent):
    type: Literal["input_audio_buffer.committed"] = "input_audio_buffer.committed"
    previous_item_id: Optional[str] = None
    item_id: str


class InputAudioBufferCleared(ServerEvent):
    type: Literal["input_audio_buffer.cleared"] = "input_audio_buffer.cleared"


class InputAudioBufferSpeechStarted(ServerEvent):
    type: Literal["input_audio_buffer.speech_started"] = "input_audio_buffer.speech_started"
    audio_start_ms: int
    item_id: str


class InputAudioBufferSpeechStopped(ServerEvent):
    type: Literal["input_audio_buffer.speech_stopped"] = "input_audio_buffer.speech_stopped"
    audio_end_ms: int
    item_id: Optional[str] = None


class OutputAudioBufferStarted(ServerEvent):
    type: Literal["output_audio_buffer.started"] = "output_audio_buffer.started"
    response_id: str


class OutputAudioBufferStopped(ServerEvent):
    type: Literal["output_audio_buffer.stopped"] = "output_audio_buffer.stopped"
    response_id: str
    audio_end_ms: Optional[int] = None
    item_id: Optional[str] = None


class OutputAudioBufferCleared(ServerEvent):
    type: Literal["output_audio_buffer.cleared"] = "output_audio_buffer.cleared"
    response_id: str


class ResponseCreated(ServerEvent):
    type: Literal["response.created"] = "response.created"
    response: ResponseInfo

    @property
    def response_id(self) -> Optional[str]:
        return self.response.id


class ResponseDone(ServerEvent):
    type: Literal["response.done"] = "response.done"
    response: ResponseInfo

    @property
    def response_id(self) -> Optional[str]:
        return self.response.id


class ResponseOutputItemAdded(ServerEvent):
    type: Literal["response.output_item.added"] = "response.output_item.added"
    response_id: str
    output_index: int
    item: ConversationItem


class ResponseOutputItemDone(ServerEvent):
    type: Literal["response.output_item.done"] = "response.output_item.done"
    response_id: str
    output_index: int
    item: ConversationItem


class _ContentEvent(ServerEvent):
    """Fields locating a content part within a response."""

    response_id: str
    item_id: str
    output_index: int
    content_index: int


class ResponseContentPartAdded(_ContentEvent):
    type: Literal["response.content_part.added"] = "response.content_part.added"
    part: ContentPart


class ResponseContentPartDone(_ContentEvent):
    type: Literal["response.content_part.done"] = "response.content_part.done"
    part: ContentPart


class ResponseTextDelta(_ContentEvent):
    type: Literal["response.text.delta"] = "response.text.delta"
    delta: str


class ResponseTextDone(_ContentEvent):
    type: Literal["response.text.done"] = "response.text.done"
    text: str


class ResponseAudioTranscriptDelta(_ContentEvent):
    type: Literal["response.audio_transcript.delta"] = "response.audio_transcript.delta"
    delta: str


class ResponseAudioTranscriptDone(_ContentEvent):
    type: Literal["response.audio_transcript.done"] = "response.audio_transcript.done"
    transcript: str


class ResponseAudioDelta(_ContentEvent):
    type: Literal["response.audio.delta"] = "response.audio.delta"
    delta: str = Field(..., description="Base64 encoded audio")


class ResponseAudioDone(_ContentEvent):
    type: Literal["response.audio.done"] = "response.audio.done"


class ResponseFunctionCallArgumentsDelta(ServerEvent):
    type: Literal["response.function_call_arguments.delta"] = "response.function_call_arguments.delta"
    response_id: str
    item_id: str
    output_index: int
    call_id: str
    delta: str


class ResponseFunctionCallArgumentsDone(ServerEvent):
    type: Literal["response.function_call_arguments.done"] = "response.function_call_arguments.done"
    response_id: str
    item_id: str
    output_index: int
    call_id: str
    name: Optional[str] = None
    arguments: str


class RateLimitsUpdated(ServerEvent):
    type: Literal["rate_limits.updated"] = "rate_limits.updated"
    rate_limits: List[RateLimit]


class UnknownServerEvent(ServerEvent):
    """
    A frame that could not be mapped to a known event.

    ``raw`` keeps the frame text; ``payload`` the decoded JSON when it parsed;
    ``decode_error`` describes why decoding failed, and is None for
    well-formed events of a type this library does not know.
    """

    type: str = ""
    raw: str
    payload: Optional[Dict[str, Any]] = None
    decode_error: Optional[str] = None


SERVER_EVENT_TYPES: Dict[str, Type[ServerEvent]] = {
    cls.model_fields["type"].default: cls
    for cls in (
        ErrorEvent,
        SessionCreated,
        SessionUpdated,
        ConversationCreated,
        ConversationItemCreated,
        ConversationItemRetrieved,
        InputAudioTranscriptionCompleted,
        InputAudioTranscriptionDelta,
        InputAudioTranscriptionFailed,
        ConversationItemTruncated,
        ConversationItemDeleted,
        InputAudioBufferCommitted,
        InputAudioBufferCleared,
        InputAudioBufferSpeechStarted,
        InputAudioBufferSpeechStopped,
        OutputAudioBufferStarted,
        OutputAudioBufferStopped,
        OutputAudioBufferCleared,
        ResponseCreated,
        ResponseDone,
        ResponseOutputItemAdded,
        ResponseOutputItemDone,
        ResponseContentPartAdded,
        ResponseContentPartDone,
        ResponseTextDelta,
        ResponseTextDone,
        ResponseAudioTranscriptDelta,
        ResponseAudioTranscriptDone,
        ResponseAudioDelta,
        ResponseAudioDone,
        ResponseFunctionCallArgumentsDelta,
        ResponseFunctionCallArgumentsDone,
        RateLimitsUpdated,
    )
}


def parse_server_event(raw: Union[str, bytes]) -> ServerEvent:
    """
    Decode one frame into its server event model.

    Args:
        raw: Frame text (bytes are decoded as UTF-8)

    Returns:
        ServerEvent: The typed event, or ``UnknownServerEvent`` when the frame
        is not JSON, has an unknown type, or does not match its type's shape
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    try:
        payload = json.loads(raw)
    except ValueError as e:
        logger.warning(f"Received invalid JSON: {raw[:100]}...")
        return UnknownServerEvent(raw=raw, decode_error=f"invalid JSON: {e}")
    if not isinstance(payload, dict):
        return UnknownServerEvent(raw=raw, decode_error="frame is not a JSON object")

    event_type = payload.get("type")
    event_id = payload.get("event_id") if isinstance(payload.get("event_id"), str) else None
    event_cls = SERVER_EVENT_TYPES.get(event_type) if isinstance(event_type, str) else None
    if event_cls is None:
        logger.debug(f"Received unrecognized event type: {event_type}")
        return UnknownServerEvent(
            type=event_type if isinstance(event_type, str) else "",
            event_id=event_id,
            raw=raw,
            payload=payload,
        )
    try:
        return event_cls.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Could not decode {event_type} event: {e}")
        return UnknownServerEvent(
            type=event_type, event_id=event_id, raw=raw, payload=payload, decode_error=str(e)
        )
