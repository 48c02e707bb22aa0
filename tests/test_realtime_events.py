"""
Unit tests for the realtime event models.

These tests validate that client events serialize to the expected wire shape and
that every server event type decodes into its model, with unknown or malformed
frames falling back to UnknownServerEvent.
"""

import json
from typing import Any

import pytest

from openai_tools.common.errors import SerializationError
from openai_tools.realtime.conversation import ConversationItem
from openai_tools.realtime.events import (
    SERVER_EVENT_TYPES,
    ClientEvent,
    ConversationItemCreate,
    ErrorEvent,
    InputAudioBufferAppend,
    RateLimitsUpdated,
    ResponseCancel,
    ResponseCreate,
    ResponseDone,
    ResponseFunctionCallArgumentsDone,
    SessionUpdate,
    UnknownServerEvent,
    parse_server_event,
)
from openai_tools.realtime.session import ResponseCreateConfig, SessionConfig

_CONTENT = {"response_id": "resp_1", "item_id": "item_1", "output_index": 0, "content_index": 0}
_ITEM = {"id": "item_1", "object": "realtime.item", "type": "message", "role": "assistant", "content": []}
_RESPONSE = {"id": "resp_1", "object": "realtime.response", "status": "in_progress", "output": []}

SAMPLES = {
    "error": {"error": {"type": "invalid_request_error", "message": "bad"}},
    "session.created": {"session": {"id": "sess_1", "model": "gpt-4o-realtime-preview"}},
    "session.updated": {"session": {"id": "sess_1", "voice": "coral"}},
    "conversation.created": {"conversation": {"id": "conv_1", "object": "realtime.conversation"}},
    "conversation.item.created": {"previous_item_id": None, "item": _ITEM},
    "conversation.item.retrieved": {"item": _ITEM},
    "conversation.item.input_audio_transcription.completed": {
        "item_id": "item_1",
        "content_index": 0,
        "transcript": "hello",
    },
    "conversation.item.input_audio_transcription.delta": {"item_id": "item_1", "delta": "hel"},
    "conversation.item.input_audio_transcription.failed": {
        "item_id": "item_1",
        "content_index": 0,
        "error": {"message": "unsupported audio"},
    },
    "conversation.item.truncated": {"item_id": "item_1", "content_index": 0, "audio_end_ms": 1200},
    "conversation.item.deleted": {"item_id": "item_1"},
    "input_audio_buffer.committed": {"previous_item_id": "item_0", "item_id": "item_1"},
    "input_audio_buffer.cleared": {},
    "input_audio_buffer.speech_started": {"audio_start_ms": 100, "item_id": "item_1"},
    "input_audio_buffer.speech_stopped": {"audio_end_ms": 900, "item_id": "item_1"},
    "output_audio_buffer.started": {"response_id": "resp_1"},
    "output_audio_buffer.stopped": {"response_id": "resp_1"},
    "output_audio_buffer.cleared": {"response_id": "resp_1"},
    "response.created": {"response": _RESPONSE},
    "response.done": {"response": dict(_RESPONSE, status="completed")},
    "response.output_item.added": {"response_id": "resp_1", "output_index": 0, "item": _ITEM},
    "response.output_item.done": {"response_id": "resp_1", "output_index": 0, "item": _ITEM},
    "response.content_part.added": dict(_CONTENT, part={"type": "text", "text": ""}),
    "response.content_part.done": dict(_CONTENT, part={"type": "text", "text": "Hi"}),
    "response.text.delta": dict(_CONTENT, delta="Hi"),
    "response.text.done": dict(_CONTENT, text="Hi"),
    "response.audio_transcript.delta": dict(_CONTENT, delta="Hi"),
    "response.audio_transcript.done": dict(_CONTENT, transcript="Hi"),
    "response.audio.delta": dict(_CONTENT, delta="AAA="),
    "response.audio.done": dict(_CONTENT),
    "response.function_call_arguments.delta": {
        "response_id": "resp_1",
        "item_id": "item_2",
        "output_index": 1,
        "call_id": "call_1",
        "delta": '{"ci',
    },
    "response.function_call_arguments.done": {
        "response_id": "resp_1",
        "item_id": "item_2",
        "output_index": 1,
        "call_id": "call_1",
        "name": "get_weather",
        "arguments": '{"city": "Oslo"}',
    },
    "rate_limits.updated": {
        "rate_limits": [
            {"name": "requests", "limit": 1000, "remaining": 999, "reset_seconds": 0.06},
            {"name": "tokens", "limit": 50000, "remaining": 49000, "reset_seconds": 1.2},
        ]
    },
}


class TestClientEvents:
    """Tests for client event serialization."""

    def test_append_audio(self):
        event = InputAudioBufferAppend(audio="AAE=", event_id="evt_1")
        assert json.loads(event.to_json()) == {
            "type": "input_audio_buffer.append",
            "event_id": "evt_1",
            "audio": "AAE=",
        }

    def test_session_update_disables_turn_detection(self):
        """An explicitly disabled turn detection is sent as null."""
        event = SessionUpdate(session=SessionConfig(instructions="Hi", turn_detection_disabled=True))
        assert event.to_wire() == {
            "type": "session.update",
            "session": {"instructions": "Hi", "turn_detection": None},
        }

    def test_item_create(self):
        event = ConversationItemCreate(item=ConversationItem.user_text("Hello"), previous_item_id="item_0")
        assert event.to_wire() == {
            "type": "conversation.item.create",
            "previous_item_id": "item_0",
            "item": {"type": "message", "role": "user", "content": [{"type": "input_text", "text": "Hello"}]},
        }

    def test_response_create(self):
        assert ResponseCreate().to_wire() == {"type": "response.create"}
        event = ResponseCreate(response=ResponseCreateConfig(modalities=["text"], instructions="Short"))
        assert event.to_wire()["response"] == {"modalities": ["text"], "instructions": "Short"}

    def test_response_cancel(self):
        assert ResponseCancel(response_id="resp_1").to_wire() == {
            "type": "response.cancel",
            "response_id": "resp_1",
        }

    def test_unencodable_event(self):
        class CustomEvent(ClientEvent):
            type: str = "custom.event"
            payload: Any = None

        with pytest.raises(SerializationError):
            CustomEvent(payload=object()).to_json()


class TestServerEvents:
    """Tests for parse_server_event."""

    def test_every_type_has_a_sample(self):
        assert set(SAMPLES) == set(SERVER_EVENT_TYPES)

    @pytest.mark.parametrize("event_type", sorted(SAMPLES))
    def test_decodes_known_type(self, event_type):
        frame = dict(SAMPLES[event_type], type=event_type, event_id="event_1")

        event = parse_server_event(json.dumps(frame))

        assert type(event) is SERVER_EVENT_TYPES[event_type]
        assert event.type == event_type
        assert event.event_id == "event_1"

    def test_bytes_frame(self):
        frame = json.dumps(dict(SAMPLES["input_audio_buffer.cleared"], type="input_audio_buffer.cleared"))
        assert parse_server_event(frame.encode()).type == "input_audio_buffer.cleared"

    def test_error_event(self):
        event = parse_server_event(json.dumps({"type": "error", "error": {"code": "x", "message": "boom"}}))
        assert isinstance(event, ErrorEvent)
        assert event.error.code == "x"
        assert event.error.message == "boom"

    def test_function_call_done(self):
        frame = dict(SAMPLES["response.function_call_arguments.done"], type="response.function_call_arguments.done")
        event = parse_server_event(json.dumps(frame))
        assert isinstance(event, ResponseFunctionCallArgumentsDone)
        assert json.loads(event.arguments) == {"city": "Oslo"}
        assert event.correlation_id == "resp_1"

    def test_response_done_text(self):
        frame = {
            "type": "response.done",
            "response": {
                "id": "resp_1",
                "status": "completed",
                "output": [
                    {
                        "id": "item_1",
                        "type": "message",
                        "role": "assistant",
                        "content": [{"type": "audio", "transcript": "Hello "}, {"type": "text", "text": "there"}],
                    }
                ],
                "usage": {"total_tokens": 30, "input_tokens": 20, "output_tokens": 10},
            },
        }
        event = parse_server_event(json.dumps(frame))
        assert isinstance(event, ResponseDone)
        assert event.response.text == "Hello there"
        assert event.response.usage.output_tokens == 10

    def test_rate_limits(self):
        frame = dict(SAMPLES["rate_limits.updated"], type="rate_limits.updated")
        event = parse_server_event(json.dumps(frame))
        assert isinstance(event, RateLimitsUpdated)
        assert [limit.name for limit in event.rate_limits] == ["requests", "tokens"]

    def test_correlation_falls_back_to_event_id(self):
        event = parse_server_event(json.dumps({"type": "input_audio_buffer.cleared", "event_id": "event_7"}))
        assert event.correlation_id == "event_7"

    def test_unknown_type(self):
        event = parse_server_event('{"type": "response.new_thing", "event_id": "event_2", "x": 1}')
        assert isinstance(event, UnknownServerEvent)
        assert event.type == "response.new_thing"
        assert event.event_id == "event_2"
        assert event.payload["x"] == 1
        assert event.decode_error is None

    @pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '"text"'])
    def test_malformed_frames(self, raw):
        event = parse_server_event(raw)
        assert isinstance(event, UnknownServerEvent)
        assert event.raw == raw
        assert event.decode_error

    def test_missing_type(self):
        event = parse_server_event('{"event_id": "event_3"}')
        assert isinstance(event, UnknownServerEvent)
        assert event.type == ""

    def test_shape_mismatch(self):
        event = parse_server_event('{"type": "conversation.item.deleted"}')
        assert isinstance(event, UnknownServerEvent)
        assert event.type == "conversation.item.deleted"
        assert "item_id" in event.decode_error


ROUND_TRIP_EVENTS = [
    SessionUpdate(session=SessionConfig(instructions="Hi", turn_detection_disabled=True)),
    InputAudioBufferAppend(audio="AAE=", event_id="evt_1"),
    ConversationItemCreate(item=ConversationItem.function_call_output("call_1", "{}"), previous_item_id="item_0"),
    ResponseCreate(response=ResponseCreateConfig(instructions="Short", conversation="none")),
    ResponseCancel(response_id="resp_1"),
]


class TestClientEventRoundTrip:
    @pytest.mark.parametrize("event", ROUND_TRIP_EVENTS, ids=lambda e: e.type)
    def test_decode_encoded_event(self, event):
        wire = event.to_wire()
        restored = type(event).model_validate(json.loads(event.to_json()))
        assert restored.to_wire() == wire
