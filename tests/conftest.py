import asyncio
import json
import logging
from unittest.mock import MagicMock

import pytest
from websockets.exceptions import ConnectionClosedError, ConnectionClosedOK

from openai_tools.common.auth import OpenAIAuth
from openai_tools.config.constants import LOGGER_NAME


def _reset_library_logger():
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before and after each test"""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    logging.basicConfig(level=logging.NOTSET)
    _reset_library_logger()
    yield
    _reset_library_logger()


@pytest.fixture
def openai_auth():
    """OpenAI provider with a fake key."""
    return OpenAIAuth("sk-test-key-123456")


@pytest.fixture
def make_response():
    """Build a fake requests.Response."""

    def _make(status_code=200, json_data=None, content=b"", text=None, reason="OK"):
        response = MagicMock()
        response.status_code = status_code
        response.reason = reason
        if json_data is not None:
            response.json.return_value = json_data
            response.text = json.dumps(json_data)
            response.content = response.text.encode()
        else:
            response.json.side_effect = ValueError("No JSON")
            response.text = text if text is not None else content.decode(errors="replace")
            response.content = content
        return response

    return _make


@pytest.fixture
def mock_session(make_response):
    """A MagicMock requests.Session answering 200 with an empty JSON object."""
    session = MagicMock()
    session.request.return_value = make_response(json_data={})
    return session


class FakeWebSocket:
    """In-memory stand-in for a websockets client connection."""

    def __init__(self, frames=None):
        self.sent = []
        self.close_calls = 0
        self.closed = False
        self.incoming = asyncio.Queue()
        for frame in frames or []:
            self.push(frame)

    def push(self, frame):
        """Queue a server frame; dicts are JSON encoded."""
        self.incoming.put_nowait(json.dumps(frame) if isinstance(frame, dict) else frame)

    def peer_close(self):
        self.incoming.put_nowait(ConnectionClosedOK(None, None))

    def drop(self):
        self.incoming.put_nowait(ConnectionClosedError(None, None))

    async def send(self, message):
        if self.closed:
            raise ConnectionClosedOK(None, None)
        self.sent.append(json.loads(message))

    async def recv(self):
        item = await self.incoming.get()
        if isinstance(item, Exception):
            self.closed = True
            raise item
        return item

    async def close(self):
        self.close_calls += 1
        if not self.closed:
            self.closed = True
            self.incoming.put_nowait(ConnectionClosedOK(None, None))

    @property
    def sent_types(self):
        return [message["type"] for message in self.sent]


SESSION_CREATED = {
    "type": "session.created",
    "event_id": "event_001",
    "session": {
        "id": "sess_001",
        "object": "realtime.session",
        "model": "gpt-4o-realtime-preview-2024-12-17",
        "modalities": ["text", "audio"],
    },
}


@pytest.fixture
def fake_ws():
    """A fake connection whose first frame is session.created."""
    return FakeWebSocket([SESSION_CREATED])


@pytest.fixture
def make_fake_ws():
    """Factory for fake connections with arbitrary initial frames."""
    return FakeWebSocket
