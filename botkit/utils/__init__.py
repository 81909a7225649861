"""
Utility modules for botkit.
"""

from .logger import get_logger, setup_logging
from .discord import DiscordUtils
from .duration import Milliseconds, format_clock_time, format_duration, parse_duration
from .error_handler import ErrorHandler, get_error_handler, setup_error_handler
from .collectors import Collected, WaitStatus, need_button, need_message, need_reaction
from .pagination import PageControl, PaginationAction, PaginationSession, SessionEnd
from .reaction_pagination import DEFAULT_REACTIONS, create_embeds_pagination
from .button_pagination import create_embeds_buttons_pagination

__all__ = [
    "get_logger",
    "setup_logging",
    "DiscordUtils",
    "Milliseconds",
    "format_clock_time",
    "format_duration",
    "parse_duration",
    "ErrorHandler",
    "get_error_handler",
    "setup_error_handler",
    "Collected",
    "WaitStatus",
    "need_button",
    "need_message",
    "need_reaction",
    "PageControl",
    "PaginationAction",
    "PaginationSession",
    "SessionEnd",
    "DEFAULT_REACTIONS",
    "create_embeds_pagination",
    "create_embeds_buttons_pagination",
]
