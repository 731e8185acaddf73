"""Stateful conversations with one-shot dialog handlers."""

from __future__ import annotations

from typing import Any

from ..logging import get_logger
from ..response import Reply
from .delegate import DelegatingMessageHandler
from .dispatch import Handler, handle_message

logger = get_logger("chatter.conversation")


class ConversationMessageHandler(DelegatingMessageHandler):
    """Remembers a pending dialog between messages.

    When a child returns ``Reply(message, dialog=handler)`` the conversation
    answers with ``message`` and sends the next message to ``handler`` first.
    The dialog is used once; if it returns ``False`` the message falls through
    to the regular children.
    """

    def __init__(self, children: Handler | None = None, *, has_state: bool = True) -> None:
        super().__init__(children, has_state=has_state)
        self.dialog: Handler | None = None

    def has_dialog(self) -> bool:
        return self.dialog is not None

    def clear_dialog(self) -> None:
        self.dialog = None

    def _unwrap(self, result: Any) -> Any:
        if not isinstance(result, Reply):
            return result
        if result.dialog is not None:
            logger.debug("conversation.dialog.set")
            self.dialog = result.dialog
        return result.message

    async def handle_message(self, message: Any, *context: Any) -> Any:
        if self.dialog is not None:
            dialog = self.dialog
            self.clear_dialog()
            result = await handle_message(dialog, message, *context)
            if result is not False:
                return self._unwrap(result)
            logger.debug("conversation.dialog.no_match")
        return self._unwrap(await self.dispatch_children(message, *context))
