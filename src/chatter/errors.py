"""Error taxonomy for handler construction and dispatch."""

from __future__ import annotations

from typing import Any


class ChatterError(Exception):
    """Base class for all chatter errors."""


class MissingHandlers(ChatterError, TypeError):
    def __init__(self, handler_type: str = "message handler") -> None:
        super().__init__(f"Missing required message handlers for {handler_type}.")


class MissingMatch(ChatterError, TypeError):
    def __init__(self) -> None:
        super().__init__('Missing required "match" option.')


class InvalidMatch(ChatterError, TypeError):
    def __init__(self, match: Any) -> None:
        self.match = match
        super().__init__(
            f'Invalid "match" option: expected str or callable, '
            f"got {type(match).__name__}."
        )


class InvalidHandler(ChatterError, TypeError):
    def __init__(self, handler: Any) -> None:
        self.handler = handler
        super().__init__(
            "Invalid message handler: expected a callable, a sequence of "
            f"handlers or an object with handle_message, got {type(handler).__name__}."
        )


class InvalidOption(ChatterError, ValueError):
    """A declared option whose value could not be coerced.

    Collected into ``ParseResult.errors`` by the parser, never raised there.
    """

    def __init__(self, name: str, value: str, kind: Any) -> None:
        self.name = name
        self.value = value
        self.kind = kind
        super().__init__(
            f"Invalid value {value!r} for option {name!r}: expected {kind}."
        )


class ConfigError(ChatterError):
    """Settings could not be loaded or validated."""
