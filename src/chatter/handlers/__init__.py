"""Message handler building blocks.

This module provides the dispatch protocol and the composable handlers built
on top of it.
"""

from __future__ import annotations

from .command import CommandMessageHandler
from .conversation import ConversationMessageHandler
from .delegate import DelegatingMessageHandler
from .dispatch import Handler, HandlerKind, handle_message, is_no_response
from .matcher import MatchingMessageHandler
from .parser import OptionKind, ParseResult, ParsingMessageHandler

__all__ = [
    "CommandMessageHandler",
    "ConversationMessageHandler",
    "DelegatingMessageHandler",
    "Handler",
    "HandlerKind",
    "handle_message",
    "is_no_response",
    "MatchingMessageHandler",
    "OptionKind",
    "ParseResult",
    "ParsingMessageHandler",
]
