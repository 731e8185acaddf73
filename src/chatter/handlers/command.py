"""Named commands, parent commands and generated help text."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from .delegate import DelegatingMessageHandler
from .dispatch import Handler, handle_message
from .matcher import MatchingMessageHandler
from .parser import ParsingMessageHandler

HELP_COMMAND = "help"
HELP_SUMMARY = f"*{HELP_COMMAND}* - Get help for the specified command."
PARENT_USAGE = "<command>"


def split_first_word(text: str) -> tuple[str, str]:
    """Split ``text`` into its first word and the rest, minus leading whitespace."""
    parts = text.split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


class CommandMessageHandler(DelegatingMessageHandler):
    """A named (or anonymous) node in a command tree.

    Composed from the lower-level handlers: a :class:`MatchingMessageHandler`
    on the command name, then (for leaf commands with ``parse_options``) a
    :class:`ParsingMessageHandler`, then the children.

    Parent commands treat their remainder as a sub-command selection:

    * an empty remainder returns this command's help;
    * ``help [name ...]`` returns help for a sub-command path;
    * anything else goes to the children, and ``False`` comes back if no child
      handled it, leaving it to sibling handlers.
    """

    def __init__(
        self,
        children: Handler | None = None,
        *,
        name: str | None = None,
        aliases: Sequence[str] = (),
        description: str | None = None,
        usage: str | None = None,
        details: str | None = None,
        is_parent: bool = False,
        parse_options: Mapping[str, Any] | None = None,
        has_state: bool = False,
    ) -> None:
        super().__init__(children, has_state=has_state)
        if is_parent and parse_options is not None:
            raise TypeError(
                "parse_options cannot be combined with is_parent; "
                "declare them on the leaf sub-commands instead."
            )
        self.name = name
        self.aliases = tuple(aliases)
        self.description = description
        self.usage = usage
        self.details = details
        self.is_parent = is_parent
        self.parse_options = parse_options

        body: Handler = self.children
        if is_parent:
            body = self._handle_subcommand
        elif parse_options is not None:
            body = ParsingMessageHandler(body, parse_options=parse_options)
        if name is not None:
            body = MatchingMessageHandler(body, match=self.match_name)
        self._handler = body

    @property
    def names(self) -> tuple[str, ...]:
        if self.name is None:
            return ()
        return (self.name, *self.aliases)

    def is_named(self, word: str) -> bool:
        word = word.lower()
        return any(word == name.lower() for name in self.names)

    def match_name(self, message: Any, *context: Any) -> str | bool:
        if not isinstance(message, str):
            return False
        word, rest = split_first_word(message)
        if not self.is_named(word):
            return False
        return rest

    async def handle_message(self, message: Any, *context: Any) -> Any:
        return await handle_message(self._handler, message, *context)

    async def _handle_subcommand(self, message: str, *context: Any) -> Any:
        if not message.strip():
            return self.get_help()
        word, rest = split_first_word(message)
        if word.lower() == HELP_COMMAND:
            return self.get_help(rest.split())
        return await self.dispatch_children(message, *context)

    # Help projection

    def subcommands(self) -> Iterator[CommandMessageHandler]:
        """Yield named child commands, flattening anonymous groups."""
        for child in self.children:
            if not isinstance(child, CommandMessageHandler):
                continue
            if child.name is None:
                yield from child.subcommands()
            else:
                yield child

    def find_subcommand(self, word: str) -> CommandMessageHandler | None:
        for command in self.subcommands():
            if command.is_named(word):
                return command
        return None

    def summary(self) -> str:
        if self.description:
            return f"*{self.name}* - {self.description}"
        return f"*{self.name}*"

    def get_usage(self, prefix: Sequence[str] = ()) -> str | None:
        usage = PARENT_USAGE if self.is_parent else self.usage
        parts = [*prefix]
        if self.name is not None:
            parts.append(self.name)
        if usage:
            parts.append(usage)
        if not parts:
            return None
        return f"`{' '.join(parts)}`"

    def get_help(
        self, path: Sequence[str] = (), prefix: Sequence[str] = ()
    ) -> str:
        """Render help for this command or a sub-command ``path`` below it."""
        own_prefix = [*prefix, self.name] if self.name is not None else [*prefix]
        if path:
            command = self.find_subcommand(path[0])
            if command is None:
                unknown = " ".join([*own_prefix, *path])
                return f"Unknown command *{unknown}*.\n{self.get_help(prefix=prefix)}"
            return command.get_help(path[1:], own_prefix)

        lines: list[str] = []
        if self.description:
            lines.append(self.description)
        usage = self.get_usage(prefix)
        if usage:
            lines.append(f"Usage: {usage}")
        if self.details:
            lines.append(self.details)
        summaries = [f"> {command.summary()}" for command in self.subcommands()]
        if self.is_parent:
            summaries.append(f"> {HELP_SUMMARY}")
        if summaries:
            lines.append("Commands:")
            lines.extend(summaries)
        return "\n".join(lines)
