"""Response values returned by handlers and their text rendering."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Reply:
    """A response that also nominates the handler for the next message.

    Only meaningful inside a :class:`~chatter.handlers.ConversationMessageHandler`;
    the conversation stores ``dialog`` and hands it the following message.
    """

    message: Any
    dialog: Any = None


def _flatten(response: Any) -> Iterator[Any]:
    if isinstance(response, Reply):
        yield from _flatten(response.message)
    elif isinstance(response, (list, tuple)):
        for item in response:
            yield from _flatten(item)
    elif response is not None and response is not False:
        yield response


def normalize_response(response: Any) -> str:
    """Render a handler response as text.

    Nested lists and tuples are flattened into lines; ``None`` and ``False``
    entries are dropped.
    """
    return "\n".join(str(item) for item in _flatten(response))
