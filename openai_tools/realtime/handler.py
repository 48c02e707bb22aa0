"""
Callback dispatch for realtime server events.

``EventHandler`` maps event types to callbacks, in the same spirit as a
websocket message handler table. Callbacks may be plain functions or
coroutines.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Union

from openai_tools.config.constants import LOGGER_NAME
from openai_tools.realtime.events import ServerEvent, UnknownServerEvent

logger = logging.getLogger(LOGGER_NAME)

Callback = Callable[[ServerEvent], Union[None, Awaitable[None]]]


class EventHandler:
    """Registry of callbacks keyed by server event type."""

    def __init__(self):
        self.handlers: Dict[str, List[Callback]] = {}
        self._unknown: List[Callback] = []
        self._any: List[Callback] = []

    def on(self, event_type: str, callback: Callback) -> "EventHandler":
        self.handlers.setdefault(event_type, []).append(callback)
        return self

    def on_unknown(self, callback: Callback) -> "EventHandler":
        """Called for frames that decoded to ``UnknownServerEvent``."""
        self._unknown.append(callback)
        return self

    def on_any(self, callback: Callback) -> "EventHandler":
        """Called for every event, before the type-specific callbacks."""
        self._any.append(callback)
        return self

    # Shortcuts for the most common events

    def on_error(self, callback: Callback) -> "EventHandler":
        return self.on("error", callback)

    def on_text_delta(self, callback: Callback) -> "EventHandler":
        return self.on("response.text.delta", callback)

    def on_audio_delta(self, callback: Callback) -> "EventHandler":
        return self.on("response.audio.delta", callback)

    def on_transcript_delta(self, callback: Callback) -> "EventHandler":
        return self.on("response.audio_transcript.delta", callback)

    def on_function_call(self, callback: Callback) -> "EventHandler":
        return self.on("response.function_call_arguments.done", callback)

    def on_response_done(self, callback: Callback) -> "EventHandler":
        return self.on("response.done", callback)

    async def dispatch(self, event: ServerEvent) -> int:
        """
        Run the callbacks registered for ``event``.

        Returns:
            int: Number of callbacks invoked
        """
        callbacks = list(self._any)
        if isinstance(event, UnknownServerEvent):
            callbacks.extend(self._unknown)
        else:
            callbacks.extend(self.handlers.get(event.type, []))

        if not callbacks:
            logger.debug(f"No handler for event type: {event.type}")
        for callback in callbacks:
            result = callback(event)
            if asyncio.iscoroutine(result):
                await result
        return len(callbacks)
