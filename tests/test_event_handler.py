"""
Unit tests for EventHandler dispatch and RealtimeSession.run.
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from openai_tools.realtime.client import RealtimeClient
from openai_tools.realtime.events import parse_server_event
from openai_tools.realtime.handler import EventHandler


def _event(frame):
    return parse_server_event(json.dumps(frame))


TEXT_DELTA = {
    "type": "response.text.delta",
    "response_id": "resp_1",
    "item_id": "item_1",
    "output_index": 0,
    "content_index": 0,
    "delta": "Hi",
}


class TestDispatch:
    """Tests for EventHandler.dispatch."""

    @pytest.mark.asyncio
    async def test_sync_and_async_callbacks(self):
        sync_callback = MagicMock()
        async_callback = AsyncMock()
        handler = EventHandler().on_text_delta(sync_callback).on("response.text.delta", async_callback)

        event = _event(TEXT_DELTA)
        count = await handler.dispatch(event)

        assert count == 2
        sync_callback.assert_called_once_with(event)
        async_callback.assert_awaited_once_with(event)

    @pytest.mark.asyncio
    async def test_any_runs_first(self):
        calls = []
        handler = (
            EventHandler()
            .on_text_delta(lambda e: calls.append("typed"))
            .on_any(lambda e: calls.append("any"))
        )

        await handler.dispatch(_event(TEXT_DELTA))

        assert calls == ["any", "typed"]

    @pytest.mark.asyncio
    async def test_unknown_events(self):
        unknown = MagicMock()
        handler = EventHandler().on_unknown(unknown).on("response.new_thing", MagicMock())

        event = _event({"type": "response.new_thing"})
        count = await handler.dispatch(event)

        assert count == 1
        unknown.assert_called_once_with(event)

    @pytest.mark.asyncio
    async def test_unknown_callbacks_accumulate(self):
        """Each on_unknown registration adds a callback, like on and on_any."""
        first, second = MagicMock(), MagicMock()
        handler = EventHandler().on_unknown(first).on_unknown(second)

        event = _event({"type": "response.new_thing"})
        count = await handler.dispatch(event)

        assert count == 2
        first.assert_called_once_with(event)
        second.assert_called_once_with(event)

    @pytest.mark.asyncio
    async def test_no_handler(self):
        assert await EventHandler().dispatch(_event({"type": "input_audio_buffer.cleared"})) == 0

    @pytest.mark.asyncio
    async def test_shortcuts(self):
        handler = (
            EventHandler()
            .on_error(MagicMock())
            .on_audio_delta(MagicMock())
            .on_transcript_delta(MagicMock())
            .on_function_call(MagicMock())
            .on_response_done(MagicMock())
        )
        assert set(handler.handlers) == {
            "error",
            "response.audio.delta",
            "response.audio_transcript.delta",
            "response.function_call_arguments.done",
            "response.done",
        }


class TestRun:
    """Tests for RealtimeSession.run."""

    @pytest.mark.asyncio
    async def test_run_until_end_of_stream(self, openai_auth, fake_ws):
        fake_ws.push(TEXT_DELTA)
        fake_ws.push(dict(TEXT_DELTA, delta=" there"))
        fake_ws.peer_close()
        deltas = []
        handler = EventHandler().on_text_delta(lambda e: deltas.append(e.delta))

        with patch("websockets.connect", new=AsyncMock(return_value=fake_ws)):
            session = await RealtimeClient(auth=openai_auth).connect()
        await session.run(handler)

        assert "".join(deltas) == "Hi there"
        assert not session.closed_abnormally
