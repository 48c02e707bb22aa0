"""
Realtime API client.

``RealtimeClient`` collects the model and session settings; ``connect()`` opens a
``RealtimeSession``, which owns one websocket connection. A background task reads
frames, decodes them into server events and queues them for ``recv()``, so the
receive path never blocks ``send()``. The queue is bounded: a caller that stops
consuming events stops the reader, and websockets then stops reading from the
socket.

Cancelling the task that runs ``connect()`` closes the connection, as does
calling ``close()`` before the handshake has finished.

A session supports one writer and one reader at a time: callers that send from
several tasks must serialize their sends themselves, and ``recv()`` refuses a
second concurrent caller.

Example:
```python
client = RealtimeClient().modalities(["text"]).instructions("Be brief.")
async with client.session() as session:
    await session.send_text("Hello!")
    await session.create_response()
    async for event in session:
        if event.type == "response.text.delta":
            print(event.delta, end="")
        elif event.type == "response.done":
            break
```
"""

import asyncio
import logging
import time
import traceback
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import websockets
from websockets.exceptions import (
    ConnectionClosed,
    ConnectionClosedError,
    ConnectionClosedOK,
    InvalidStatus,
    WebSocketException,
)

from openai_tools.common.auth import AuthProvider, AzureAuth, from_env, from_url
from openai_tools.common.errors import (
    ApiError,
    AuthError,
    ConfigError,
    RealtimeConnectionError,
    RealtimeError,
    ReceiveError,
    SendError,
)
from openai_tools.common.tool import Tool
from openai_tools.config.constants import (
    CLOSE_TIMEOUT,
    CONNECTION_TIMEOUT,
    DEFAULT_REALTIME_MODEL,
    EVENT_QUEUE_SIZE,
    LOGGER_NAME,
    SESSION_CREATED_TIMEOUT,
    WS_MAX_QUEUE,
    WS_MAX_SIZE,
    WS_PING_INTERVAL,
    WS_PING_TIMEOUT,
)
from openai_tools.config.settings import Settings
from openai_tools.realtime.audio import encode_audio
from openai_tools.realtime.conversation import ConversationItem
from openai_tools.realtime.events import (
    ClientEvent,
    ConversationCreated,
    ConversationItemCreate,
    ConversationItemDelete,
    ConversationItemRetrieve,
    ConversationItemTruncate,
    ErrorEvent,
    InputAudioBufferAppend,
    InputAudioBufferClear,
    InputAudioBufferCommit,
    OutputAudioBufferClear,
    ResponseCancel,
    ResponseCreate,
    ResponseCreated,
    ResponseDone,
    ServerEvent,
    SessionCreated,
    SessionUpdate,
    SessionUpdated,
    parse_server_event,
)
from openai_tools.realtime.handler import EventHandler
from openai_tools.realtime.session import (
    AudioFormat,
    InputAudioTranscription,
    MaxTokens,
    Modality,
    NoiseReduction,
    ResponseCreateConfig,
    SessionConfig,
    ToolChoice,
    Voice,
)
from openai_tools.realtime.vad import TurnDetection

logger = logging.getLogger(LOGGER_NAME)

# Queued after the last event once the connection is gone
_END_OF_STREAM = object()


class SessionState(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"


class CloseKind(str, Enum):
    """How a session reached CLOSED."""
    GRACEFUL = "graceful"
    ABNORMAL = "abnormal"


class RealtimeSession:
    """
    One live connection to the Realtime API.

    Attributes:
        state: Current ``SessionState``
        model: Model reported by the server (requested model until then)
        session_id: Id from ``session.created``
        conversation_id: Id from ``conversation.created``
        response_id: Id of the response in progress, None when idle
        config: Copy of the configuration sent in the initial ``session.update``
        close_kind: GRACEFUL or ABNORMAL once closed
        close_error: Transport error that ended an abnormal session
    """

    def __init__(
        self,
        url: str,
        headers: Dict[str, str],
        model: str,
        config: Optional[SessionConfig] = None,
    ):
        self.url = url
        self._headers = headers
        self.model = model
        self.config = (config or SessionConfig()).model_copy(deep=True)
        self.ws = None
        self.state = SessionState.IDLE
        self.session_id: Optional[str] = None
        self.conversation_id: Optional[str] = None
        self.response_id: Optional[str] = None
        self.close_kind: Optional[CloseKind] = None
        self.close_error: Optional[BaseException] = None
        self._events: asyncio.Queue = asyncio.Queue(maxsize=EVENT_QUEUE_SIZE)
        self._recv_task: Optional[asyncio.Task] = None
        self._handshake: Optional[asyncio.Future] = None
        self._closed = asyncio.Event()
        self._end_queued = False
        self._end_pending = False
        self._stream_ended = False
        self._receiving = False

    @property
    def is_open(self) -> bool:
        return self.state == SessionState.OPEN

    @property
    def closed_abnormally(self) -> bool:
        return self.close_kind == CloseKind.ABNORMAL

    async def open(self, timeout: float = CONNECTION_TIMEOUT) -> "RealtimeSession":
        """
        Perform the websocket handshake and wait for ``session.created``.

        Sends ``session.update`` with the configuration when any setting is
        present.

        Raises:
            AuthError: The server rejected the credentials
            RealtimeConnectionError: The handshake failed or timed out
            ApiError: The server answered with an error event
        """
        if self.state != SessionState.IDLE:
            raise RealtimeError(f"Session is already {self.state.value}")
        self.state = SessionState.CONNECTING

        logger.info(f"Connecting to OpenAI Realtime API with model: {self.model}")
        logger.debug(f"WebSocket URL: {self.url}")
        connection_start = time.time()
        try:
            self.ws = await asyncio.wait_for(
                websockets.connect(
                    self.url,
                    additional_headers=self._headers,
                    max_size=WS_MAX_SIZE,
                    max_queue=WS_MAX_QUEUE,
                    ping_interval=WS_PING_INTERVAL,
                    ping_timeout=WS_PING_TIMEOUT,
                    compression=None,
                ),
                timeout=timeout,
            )
        except InvalidStatus as e:
            status = e.response.status_code
            self._mark_closed(CloseKind.ABNORMAL, e)
            if status in (401, 403):
                raise AuthError(f"Realtime handshake rejected with HTTP {status}") from e
            raise RealtimeConnectionError(f"Realtime handshake failed with HTTP {status}") from e
        except asyncio.TimeoutError as e:
            logger.error(f"Timeout while connecting to OpenAI Realtime API (after {timeout}s)")
            self._mark_closed(CloseKind.ABNORMAL, e)
            raise RealtimeConnectionError(f"Timed out connecting after {timeout}s") from e
        except (WebSocketException, OSError) as e:
            logger.error(f"Failed to connect to OpenAI Realtime API: {e}")
            self._mark_closed(CloseKind.ABNORMAL, e)
            raise RealtimeConnectionError(f"Realtime handshake failed: {e}") from e
        except asyncio.CancelledError:
            logger.info("Connect cancelled")
            self._mark_closed(CloseKind.GRACEFUL, None)
            raise
        logger.debug(f"WebSocket connection established in {time.time() - connection_start:.2f} seconds")

        # From here on the socket is ours: any failure or cancellation closes it
        try:
            await self._start()
        except asyncio.CancelledError:
            logger.info("Connect cancelled, closing the connection")
            self._mark_closed(CloseKind.GRACEFUL, None)
            await self._shutdown_transport()
            raise
        except Exception as e:
            await self._abort(e)
            raise
        return self

    def _ensure_connecting(self) -> None:
        if self.state != SessionState.CONNECTING:
            raise RealtimeConnectionError(f"Session was {self.state.value} while connecting")

    async def _start(self) -> None:
        """Start the reader, wait for ``session.created`` and send the configuration."""
        self._ensure_connecting()
        self._handshake = asyncio.get_running_loop().create_future()
        self._recv_task = asyncio.create_task(self._recv_loop())

        try:
            first = await asyncio.wait_for(asyncio.shield(self._handshake), timeout=SESSION_CREATED_TIMEOUT)
        except asyncio.TimeoutError as e:
            raise RealtimeConnectionError("Timed out waiting for session.created") from e
        if isinstance(first, ErrorEvent):
            raise ApiError(first.error.message, first.error.type, first.error.code, first.error.param)
        if first is None:
            raise RealtimeConnectionError("Connection closed before session.created") from self.close_error
        self._ensure_connecting()

        self.state = SessionState.OPEN
        logger.info(f"Realtime session {self.session_id} open")

        if not self.config.is_empty():
            for warning in self.config.advisory_warnings():
                logger.warning(f"Session config: {warning}")
            await self.send(SessionUpdate(session=self.config))

    async def _recv_loop(self) -> None:
        """Read frames until the connection ends, queueing decoded events."""
        logger.debug("Receive loop started")
        try:
            while True:
                message = await self.ws.recv()
                event = parse_server_event(message)
                self._track(event)
                await self._events.put(event)
        except ConnectionClosedOK:
            logger.info("WebSocket connection closed normally")
            self._mark_closed(CloseKind.GRACEFUL, None)
        except ConnectionClosedError as e:
            logger.warning(f"Connection closed unexpectedly: {e}")
            self._mark_closed(CloseKind.ABNORMAL, e)
        except asyncio.CancelledError:
            self._mark_closed(CloseKind.GRACEFUL, None)
            raise
        except Exception as e:
            logger.error(f"Error in receive loop: {e}")
            logger.debug(f"Receive loop error details: {traceback.format_exc()}")
            self._mark_closed(CloseKind.ABNORMAL, e)
        finally:
            if self._handshake is not None and not self._handshake.done():
                self._handshake.set_result(None)
            logger.info("Receive loop exited")

    def _track(self, event: ServerEvent) -> None:
        if isinstance(event, (SessionCreated, SessionUpdated)):
            self.session_id = event.session.id or self.session_id
            self.model = event.session.model or self.model
            if isinstance(event, SessionCreated) and not self._handshake.done():
                self._handshake.set_result(event)
        elif isinstance(event, ConversationCreated):
            self.conversation_id = event.conversation.id
        elif isinstance(event, ResponseCreated):
            self.response_id = event.response.id
        elif isinstance(event, ResponseDone):
            if self.response_id == event.response.id:
                self.response_id = None
        elif isinstance(event, ErrorEvent):
            logger.error(f"Received error from OpenAI: {event.error.message}")
            if not self._handshake.done():
                self._handshake.set_result(event)

    def _mark_closed(self, kind: CloseKind, error: Optional[BaseException]) -> None:
        if self.state == SessionState.CLOSED:
            return
        if self.state == SessionState.CLOSING:
            kind = CloseKind.GRACEFUL
        self.close_kind = kind
        self.close_error = error
        self.state = SessionState.CLOSED
        self.response_id = None
        if not self._end_queued:
            self._end_queued = True
            self._queue_end_of_stream()
        self._closed.set()

    def _queue_end_of_stream(self) -> None:
        try:
            self._events.put_nowait(_END_OF_STREAM)
        except asyncio.QueueFull:
            # recv() queues it as soon as it frees a slot
            self._end_pending = True

    async def _abort(self, error: BaseException) -> None:
        self._mark_closed(CloseKind.ABNORMAL, error)
        await self._shutdown_transport()

    async def _shutdown_transport(self) -> None:
        if self.ws is not None:
            try:
                await asyncio.wait_for(self.ws.close(), timeout=CLOSE_TIMEOUT)
            except asyncio.TimeoutError:
                logger.warning(f"Close handshake did not finish within {CLOSE_TIMEOUT}s")
        if self._recv_task is not None and not self._recv_task.done():
            # A reader blocked on a full queue cannot see the close
            if not self._events.full():
                await asyncio.wait({self._recv_task}, timeout=CLOSE_TIMEOUT)
            if not self._recv_task.done():
                logger.debug("Cancelling receive task")
                self._recv_task.cancel()
                await asyncio.gather(self._recv_task, return_exceptions=True)

    async def send(self, event: ClientEvent) -> None:
        """
        Write one client event as a text frame.

        Raises:
            SendError: The session is not open, or the connection dropped
            SerializationError: The event could not be encoded
        """
        if self.state != SessionState.OPEN:
            raise SendError(f"Cannot send {event.type}: session is {self.state.value}")
        payload = event.to_json()
        try:
            await self.ws.send(payload)
        except ConnectionClosed as e:
            raise SendError(f"Connection closed while sending {event.type}") from e
        logger.debug(f"Sent {event.type}")

    async def recv(self) -> Optional[ServerEvent]:
        """
        Wait for the next server event.

        Returns:
            ServerEvent: Next event in arrival order, or None once the
            connection has closed and every queued event was consumed. Every
            later call also returns None.

        Raises:
            ReceiveError: The session was never opened, or another ``recv()``
            is already waiting
        """
        if self._stream_ended:
            return None
        if self.state == SessionState.IDLE:
            raise ReceiveError("Session is not connected")
        if self._receiving:
            raise ReceiveError("recv() is already pending on this session")
        self._receiving = True
        try:
            item = await self._events.get()
        finally:
            self._receiving = False
        if self._end_pending:
            self._end_pending = False
            self._events.put_nowait(_END_OF_STREAM)
        if item is _END_OF_STREAM:
            self._stream_ended = True
            return None
        return item

    def __aiter__(self):
        return self

    async def __anext__(self) -> ServerEvent:
        event = await self.recv()
        if event is None:
            raise StopAsyncIteration
        return event

    async def run(self, handler: EventHandler) -> None:
        """Dispatch every event to ``handler`` until the stream ends."""
        async for event in self:
            await handler.dispatch(event)

    async def close(self) -> None:
        """Close the connection; calling it again is a no-op."""
        if self.state == SessionState.CLOSED:
            return
        if self.state == SessionState.CLOSING:
            await self._closed.wait()
            return
        if self.state == SessionState.IDLE:
            self._mark_closed(CloseKind.GRACEFUL, None)
            return

        logger.info("Closing OpenAI Realtime session")
        self.state = SessionState.CLOSING
        await self._shutdown_transport()
        self._mark_closed(CloseKind.GRACEFUL, None)
        logger.info("OpenAI Realtime session closed")

    async def __aenter__(self) -> "RealtimeSession":
        if self.state == SessionState.IDLE:
            await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # Convenience helpers, one client event each

    async def update_session(self, config: SessionConfig) -> None:
        await self.send(SessionUpdate(session=config))

    async def append_audio(self, audio: str) -> None:
        """Append base64 encoded audio to the input buffer."""
        await self.send(InputAudioBufferAppend(audio=audio))

    async def append_audio_bytes(self, pcm: bytes) -> None:
        await self.append_audio(encode_audio(pcm))

    async def commit_audio(self) -> None:
        await self.send(InputAudioBufferCommit())

    async def clear_audio(self) -> None:
        await self.send(InputAudioBufferClear())

    async def clear_output_audio(self) -> None:
        await self.send(OutputAudioBufferClear())

    async def create_item(self, item: ConversationItem, previous_item_id: Optional[str] = None) -> None:
        await self.send(ConversationItemCreate(item=item, previous_item_id=previous_item_id))

    async def send_text(self, text: str) -> None:
        """Add a user text message to the conversation."""
        await self.create_item(ConversationItem.user_text(text))

    async def create_response(self, options: Optional[ResponseCreateConfig] = None) -> None:
        await self.send(ResponseCreate(response=options))

    async def cancel_response(self, response_id: Optional[str] = None) -> None:
        await self.send(ResponseCancel(response_id=response_id))

    async def submit_function_output(self, call_id: str, output: str) -> None:
        """Return a function result; call ``create_response`` to let the model continue."""
        await self.create_item(ConversationItem.function_call_output(call_id, output))

    async def retrieve_item(self, item_id: str) -> None:
        await self.send(ConversationItemRetrieve(item_id=item_id))

    async def delete_item(self, item_id: str) -> None:
        await self.send(ConversationItemDelete(item_id=item_id))

    async def truncate_item(self, item_id: str, content_index: int, audio_end_ms: int) -> None:
        await self.send(
            ConversationItemTruncate(item_id=item_id, content_index=content_index, audio_end_ms=audio_end_ms)
        )


class RealtimeClient:
    """
    Builder for realtime sessions.

    Credentials are resolved from the environment unless an auth provider is
    passed. Setters return the client so calls can be chained.
    """

    def __init__(
        self,
        auth: Optional[AuthProvider] = None,
        model: str = DEFAULT_REALTIME_MODEL,
        settings: Optional[Settings] = None,
    ):
        if auth is None:
            try:
                auth = from_env(settings)
            except ConfigError as e:
                raise AuthError(f"No realtime credentials: {e}") from e
        self.auth = auth
        self.model_id = model
        self.config = SessionConfig()
        logger.info(f"RealtimeClient initialized with model: {model}")

    @classmethod
    def azure(cls, model: str = DEFAULT_REALTIME_MODEL, settings: Optional[Settings] = None) -> "RealtimeClient":
        return cls(auth=AzureAuth.from_env(settings), model=model)

    @classmethod
    def with_url(cls, base_url: str, api_key: str, model: str = DEFAULT_REALTIME_MODEL) -> "RealtimeClient":
        return cls(auth=from_url(base_url, api_key=api_key), model=model)

    def model(self, model: str) -> "RealtimeClient":
        self.model_id = model
        return self

    def session_config(self, config: SessionConfig) -> "RealtimeClient":
        self.config = config.model_copy(deep=True)
        return self

    def modalities(self, modalities: List[Modality]) -> "RealtimeClient":
        self.config.modalities = list(modalities)
        return self

    def instructions(self, instructions: str) -> "RealtimeClient":
        self.config.instructions = instructions
        return self

    def voice(self, voice: Voice) -> "RealtimeClient":
        self.config.voice = voice
        return self

    def input_audio_format(self, audio_format: AudioFormat) -> "RealtimeClient":
        self.config.input_audio_format = audio_format
        return self

    def output_audio_format(self, audio_format: AudioFormat) -> "RealtimeClient":
        self.config.output_audio_format = audio_format
        return self

    def input_audio_transcription(self, transcription: InputAudioTranscription) -> "RealtimeClient":
        self.config.input_audio_transcription = transcription
        return self

    def noise_reduction(self, noise_reduction: NoiseReduction) -> "RealtimeClient":
        self.config.input_audio_noise_reduction = noise_reduction
        return self

    def turn_detection(self, turn_detection: TurnDetection) -> "RealtimeClient":
        self.config.turn_detection = turn_detection
        self.config.turn_detection_disabled = False
        return self

    def disable_turn_detection(self) -> "RealtimeClient":
        self.config.turn_detection = None
        self.config.turn_detection_disabled = True
        return self

    def tools(self, tools: List[Union[Tool, Any]]) -> "RealtimeClient":
        self.config.tools = list(tools)
        return self

    def tool_choice(self, tool_choice: ToolChoice) -> "RealtimeClient":
        self.config.tool_choice = tool_choice
        return self

    def temperature(self, temperature: float) -> "RealtimeClient":
        self.config.temperature = temperature
        return self

    def max_response_output_tokens(self, max_tokens: MaxTokens) -> "RealtimeClient":
        self.config.max_response_output_tokens = max_tokens
        return self

    def session(self) -> RealtimeSession:
        """An unopened session; ``async with`` opens and closes it."""
        return RealtimeSession(
            url=self.auth.realtime_url(self.model_id),
            headers=self.auth.realtime_headers(),
            model=self.model_id,
            config=self.config,
        )

    async def connect(self) -> RealtimeSession:
        session = self.session()
        await session.open()
        return session
