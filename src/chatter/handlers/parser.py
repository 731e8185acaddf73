"""Tokenize messages into positional args and typed ``name=value`` options."""

from __future__ import annotations

import math
import re
import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import InvalidOption
from .delegate import DelegatingMessageHandler
from .dispatch import Handler

_OPTION_RE = re.compile(r"^([^=\s]+)=(.*)$", re.DOTALL)
TRUTHY_VALUES = frozenset({"true", "1", "yes"})


class OptionKind(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"

    def __str__(self) -> str:
        return self.value


_KIND_ALIASES: dict[Any, OptionKind] = {
    str: OptionKind.STRING,
    int: OptionKind.NUMBER,
    float: OptionKind.NUMBER,
    bool: OptionKind.BOOLEAN,
}


def _normalize_kind(name: str, kind: Any) -> OptionKind:
    if isinstance(kind, OptionKind):
        return kind
    try:
        return _KIND_ALIASES[kind]
    except (KeyError, TypeError):
        raise TypeError(
            f"Invalid kind for parse option {name!r}: {kind!r} "
            "(expected str, int, float, bool or OptionKind)"
        ) from None


@dataclass(frozen=True, slots=True)
class ParseResult:
    input: str
    options: dict[str, Any] = field(default_factory=dict)
    remain: list[str] = field(default_factory=list)
    errors: list[InvalidOption] = field(default_factory=list)


def split_tokens(text: str, *, shell_quotes: bool = False) -> list[str]:
    """Split text into tokens on whitespace.

    With ``shell_quotes`` quoted strings stay single tokens; unbalanced quotes
    fall back to the plain whitespace split.
    """
    if not text.strip():
        return []
    if shell_quotes:
        try:
            return shlex.split(text)
        except ValueError:
            pass
    return text.split()


def _parse_number(value: str) -> int | float:
    """Parse a finite int or float; underscore separators are not accepted."""
    if "_" in value:
        raise ValueError(f"not a number: {value!r}")
    try:
        return int(value)
    except ValueError:
        number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


def _parse_boolean(value: str) -> bool:
    if value.lower() in TRUTHY_VALUES:
        return True
    try:
        return _parse_number(value) != 0
    except ValueError:
        return False


def coerce_option(name: str, value: str, kind: OptionKind) -> Any:
    """Coerce ``value`` per ``kind``; raises :class:`InvalidOption` on failure."""
    if kind is OptionKind.STRING:
        return value
    if kind is OptionKind.BOOLEAN:
        return _parse_boolean(value)
    try:
        return _parse_number(value)
    except ValueError:
        raise InvalidOption(name, value, kind) from None


class ParsingMessageHandler(DelegatingMessageHandler):
    """Passes a :class:`ParseResult` to its children instead of raw text.

    Option tokens look like ``name=value``. ``name`` may be the full declared
    option name or any prefix that selects exactly one declared option, so with
    ``{"verbose": bool}`` both ``verbose=yes`` and ``v=yes`` set ``verbose``.
    Everything else stays positional in ``remain``.
    """

    def __init__(
        self,
        children: Handler | None = None,
        *,
        parse_options: Mapping[str, Any] | None = None,
        shell_quotes: bool = False,
        has_state: bool = False,
    ) -> None:
        super().__init__(children, has_state=has_state)
        self.parse_options = {
            name: _normalize_kind(name, kind)
            for name, kind in (parse_options or {}).items()
        }
        self.shell_quotes = shell_quotes

    def resolve_option_name(self, token_name: str) -> str | None:
        if token_name in self.parse_options:
            return token_name
        candidates = [name for name in self.parse_options if name.startswith(token_name)]
        if len(candidates) == 1:
            return candidates[0]
        return None

    def parse_message(self, message: str | None) -> ParseResult:
        text = message or ""
        options: dict[str, Any] = {}
        remain: list[str] = []
        errors: list[InvalidOption] = []
        for token in split_tokens(text, shell_quotes=self.shell_quotes):
            match = _OPTION_RE.match(token)
            name = self.resolve_option_name(match.group(1)) if match else None
            if name is None:
                remain.append(token)
                continue
            try:
                options[name] = coerce_option(
                    name, match.group(2), self.parse_options[name]
                )
            except InvalidOption as exc:
                errors.append(exc)
        return ParseResult(input=text, options=options, remain=remain, errors=errors)

    async def handle_message(self, message: Any, *context: Any) -> Any:
        return await self.dispatch_children(self.parse_message(message), *context)
