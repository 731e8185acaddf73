"""Message routing and command dispatch for conversational bots."""

from __future__ import annotations

from .bot import Bot
from .config import ChatterSettings, load_settings
from .errors import (
    ChatterError,
    ConfigError,
    InvalidHandler,
    InvalidMatch,
    InvalidOption,
    MissingHandlers,
    MissingMatch,
)
from .handlers import (
    CommandMessageHandler,
    ConversationMessageHandler,
    DelegatingMessageHandler,
    Handler,
    MatchingMessageHandler,
    OptionKind,
    ParseResult,
    ParsingMessageHandler,
    handle_message,
    is_no_response,
)
from .logging import get_logger, setup_logging
from .response import Reply, normalize_response

__all__ = [
    "Bot",
    "ChatterError",
    "ChatterSettings",
    "CommandMessageHandler",
    "ConfigError",
    "ConversationMessageHandler",
    "DelegatingMessageHandler",
    "get_logger",
    "Handler",
    "handle_message",
    "InvalidHandler",
    "InvalidMatch",
    "InvalidOption",
    "is_no_response",
    "load_settings",
    "MatchingMessageHandler",
    "MissingHandlers",
    "MissingMatch",
    "normalize_response",
    "OptionKind",
    "ParseResult",
    "ParsingMessageHandler",
    "Reply",
    "setup_logging",
]
