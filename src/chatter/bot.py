"""Conversation router: one root handler per conversation id."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import anyio
from anyio.abc import ObjectReceiveStream

from .handlers.dispatch import Handler, handle_message, resolve_result
from .logging import get_logger
from .response import normalize_response

logger = get_logger("chatter.bot")


def _field(raw_message: Any, key: str) -> Any:
    if isinstance(raw_message, dict):
        return raw_message.get(key)
    return getattr(raw_message, key, None)


def default_conversation_id(raw_message: Any) -> Any:
    return _field(raw_message, "conversation_id")


def default_message_text(raw_message: Any) -> Any:
    if isinstance(raw_message, str):
        return raw_message
    return _field(raw_message, "text")


class Bot:
    """Routes incoming messages to per-conversation handlers.

    ``create_message_handler(conversation_id)`` builds the root handler for a
    conversation. Handlers with a truthy ``has_state`` are cached and reused
    for later messages with the same id; everything else is rebuilt on every
    message.

    ``get_conversation_id``, ``get_message_text`` and ``send_response`` are
    the seams a transport plugs into.
    """

    normalize_response = staticmethod(normalize_response)

    def __init__(
        self,
        *,
        create_message_handler: Callable[[Any], Handler] | None = None,
        get_conversation_id: Callable[[Any], Any] | None = None,
        get_message_text: Callable[[Any], Any] | None = None,
        send_response: Callable[[Any, Any], Any] | None = None,
    ) -> None:
        if create_message_handler is None:
            raise TypeError('Missing required "create_message_handler" option.')
        self.create_message_handler = create_message_handler
        self.get_conversation_id = get_conversation_id or default_conversation_id
        self.get_message_text = get_message_text or default_message_text
        self.send_response = send_response
        self._handlers: dict[Any, Handler] = {}
        self._serve_locks: dict[Any, anyio.Lock] = {}

    def get_message_handler(self, conversation_id: Any) -> Handler:
        cached = self._handlers.get(conversation_id)
        if cached is not None:
            return cached
        message_handler = self.create_message_handler(conversation_id)
        if getattr(message_handler, "has_state", False):
            # First insert wins if two creators race for the same id.
            message_handler = self._handlers.setdefault(
                conversation_id, message_handler
            )
            logger.debug("bot.handler.cached", conversation_id=conversation_id)
        return message_handler

    def drop_message_handler(self, conversation_id: Any) -> Handler | None:
        return self._handlers.pop(conversation_id, None)

    def cached_conversation_ids(self) -> list[Any]:
        return list(self._handlers)

    async def handle_message(
        self, conversation_id: Any, message: Any, *context: Any
    ) -> Any:
        message_handler = self.get_message_handler(conversation_id)
        return await handle_message(message_handler, message, *context)

    async def on_message(self, raw_message: Any, *context: Any) -> Any:
        """Handle a transport message and deliver the response, if any.

        Returns the response, or ``False`` when nothing handled the message.
        """
        conversation_id = self.get_conversation_id(raw_message)
        text = self.get_message_text(raw_message)
        try:
            response = await self.handle_message(conversation_id, text, *context)
        except Exception as exc:
            logger.error(
                "bot.message.failed",
                conversation_id=conversation_id,
                error=str(exc),
                error_type=exc.__class__.__name__,
            )
            raise
        if response is False:
            logger.debug("bot.message.no_response", conversation_id=conversation_id)
            return False
        logger.debug("bot.message.handled", conversation_id=conversation_id)
        if self.send_response is not None:
            await resolve_result(self.send_response(raw_message, response))
        return response

    async def _on_message_logged(self, raw_message: Any) -> None:
        try:
            conversation_id = self.get_conversation_id(raw_message)
        except Exception:
            logger.exception("bot.serve.message_failed")
            return
        lock = self._serve_locks.setdefault(conversation_id, anyio.Lock())
        try:
            async with lock:
                await self.on_message(raw_message)
        except Exception:
            logger.exception(
                "bot.serve.message_failed", conversation_id=conversation_id
            )
        finally:
            if not lock.locked() and not lock.statistics().tasks_waiting:
                self._serve_locks.pop(conversation_id, None)

    async def serve(self, receive_stream: ObjectReceiveStream[Any]) -> None:
        """Handle raw messages from ``receive_stream`` until it is closed.

        Messages run concurrently, one task each, but messages for the same
        conversation id are handled one at a time in arrival order. A failing
        message is logged and does not stop the loop.
        """
        async with anyio.create_task_group() as tg, receive_stream:
            async for raw_message in receive_stream:
                tg.start_soon(self._on_message_logged, raw_message)
        logger.info("bot.serve.closed")
