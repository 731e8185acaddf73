"""Base class for handlers that delegate to child handlers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..errors import MissingHandlers
from .dispatch import Handler, handle_message


def _normalize_children(children: Handler | None, handler_type: str) -> tuple[Any, ...]:
    if children is None:
        raise MissingHandlers(handler_type)
    if isinstance(children, Sequence) and not isinstance(
        children, (str, bytes, bytearray)
    ):
        if callable(getattr(children, "handle_message", None)):
            return (children,)
        return tuple(children)
    return (children,)


class DelegatingMessageHandler:
    """Holds one or more children and dispatches to them in order.

    ``has_state`` tells a :class:`~chatter.bot.Bot` to cache this handler per
    conversation. It may be set until the first dispatch.
    """

    def __init__(self, children: Handler | None = None, *, has_state: bool = False) -> None:
        self.children = _normalize_children(children, type(self).__name__)
        self.has_state = has_state

    async def handle_message(self, message: Any, *context: Any) -> Any:
        return await self.dispatch_children(message, *context)

    async def dispatch_children(self, message: Any, *context: Any) -> Any:
        return await handle_message(self.children, message, *context)
