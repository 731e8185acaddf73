"""Prefix and predicate matching in front of child handlers."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

from ..errors import InvalidMatch, MissingMatch
from .delegate import DelegatingMessageHandler
from .dispatch import Handler, resolve_result

MatchSpec: TypeAlias = "str | Callable[..., Any | Awaitable[Any]]"


def match_prefix(message: str, prefix: str) -> str | bool:
    """Return the text after ``prefix`` with leading whitespace removed.

    Returns ``False`` if ``message`` does not start with ``prefix``.
    """
    if not isinstance(message, str) or not message.startswith(prefix):
        return False
    return message[len(prefix) :].lstrip()


class MatchingMessageHandler(DelegatingMessageHandler):
    """Runs child handlers only when ``match`` accepts the message.

    A string ``match`` is a literal prefix; the remainder after it (leading
    whitespace stripped) is what the children receive. A callable ``match`` is
    called with the message and context and returns either ``False`` or the
    remainder to pass on, rewritten however it likes.
    """

    def __init__(
        self,
        children: Handler | None = None,
        *,
        match: MatchSpec | None = None,
        has_state: bool = False,
    ) -> None:
        super().__init__(children, has_state=has_state)
        if match is None:
            raise MissingMatch()
        self.match = match

    async def get_match_remainder(self, message: Any, *context: Any) -> Any:
        match = self.match
        if isinstance(match, str):
            return match_prefix(message, match)
        if callable(match):
            return await resolve_result(match(message, *context))
        raise InvalidMatch(match)

    async def handle_message(self, message: Any, *context: Any) -> Any:
        remainder = await self.get_match_remainder(message, *context)
        if remainder is False:
            return False
        return await self.dispatch_children(remainder, *context)
