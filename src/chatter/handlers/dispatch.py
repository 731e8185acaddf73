"""Dispatch protocol shared by every message handler.

A handler is one of three shapes:

* a callable ``(message, *context)`` returning a response, ``False`` or an
  awaitable of either;
* a sequence of handlers, tried in order until one returns something other
  than ``False``;
* an object with a ``handle_message(message, *context)`` method.

``False`` (by identity) means "not handled". Every other value, including
``None`` and empty strings, is a response.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Sequence
from enum import Enum
from typing import Any, Protocol, TypeAlias, runtime_checkable

from ..errors import InvalidHandler
from ..logging import get_logger

logger = get_logger("chatter.dispatch")


@runtime_checkable
class MessageHandlerObject(Protocol):
    def handle_message(self, message: Any, *context: Any) -> Any: ...


Handler: TypeAlias = (
    "Callable[..., Any | Awaitable[Any]] | Sequence[Handler] | MessageHandlerObject"
)


class HandlerKind(Enum):
    FUNCTION = "function"
    SEQUENCE = "sequence"
    OBJECT = "object"


def resolve_handler_kind(handler: Any) -> HandlerKind:
    if callable(getattr(handler, "handle_message", None)):
        return HandlerKind.OBJECT
    if callable(handler):
        return HandlerKind.FUNCTION
    if isinstance(handler, Sequence) and not isinstance(
        handler, (str, bytes, bytearray)
    ):
        return HandlerKind.SEQUENCE
    raise InvalidHandler(handler)


def is_no_response(result: Any) -> bool:
    return result is False


async def resolve_result(result: Any) -> Any:
    """Await ``result`` if it is awaitable, otherwise return it as-is."""
    if inspect.isawaitable(result):
        return await result
    return result


async def handle_message(handler: Handler, message: Any, *context: Any) -> Any:
    """Resolve ``handler`` against ``message`` and return its response.

    Returns ``False`` when no handler in the tree handled the message.
    Exceptions raised by handlers propagate unchanged.
    """
    kind = resolve_handler_kind(handler)
    if kind is HandlerKind.OBJECT:
        return await resolve_result(handler.handle_message(message, *context))
    if kind is HandlerKind.FUNCTION:
        return await resolve_result(handler(message, *context))

    for child in handler:
        result = await handle_message(child, message, *context)
        if result is not False:
            return result
    logger.debug("dispatch.sequence.no_match", children=len(handler))
    return False
