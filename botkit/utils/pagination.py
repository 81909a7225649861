"""
Pagination
Session state and the jump-to-page dialogue shared by the reaction and
button paginators
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Sequence, Tuple

import discord

from botkit.utils.collectors import need_message
from botkit.utils.discord import DiscordUtils
from botkit.utils.logger import get_logger

logger = get_logger("Pagination")

JUMP_PROMPT = "To what page would you like to jump? Say `cancel` or `0` to cancel the prompt."
INVALID_NUMBER = "This is not a valid number!"
INVALID_PAGE = "This is not a valid page!"


class PaginationAction(str, Enum):
    """Built-in controls of a paginated message."""

    PREVIOUS = "previous"
    JUMP = "jump"
    NEXT = "next"
    DELETE = "delete"


class SessionEnd(str, Enum):
    """Why a pagination session stopped."""

    DELETED = "deleted"
    TIMEOUT = "timeout"
    UNAUTHORIZED = "unauthorized"
    RENDER_FAILED = "render_failed"
    MESSAGE_GONE = "message_gone"
    HANDLER_FAILED = "handler_failed"
    STATIC = "static"  # single page, no controls attached


@dataclass
class PaginationSession:
    """One page sequence presented to one user through one message."""

    pages: Tuple[discord.Embed, ...]
    author_id: int
    channel_id: int
    page: int = 1
    timeout_ms: float = 30 * 1000
    message: Optional[Any] = None
    end_reason: Optional[SessionEnd] = None

    def __post_init__(self):
        self.pages = tuple(self.pages)
        if not self.pages:
            raise ValueError("A pagination session needs at least one page")
        self.page = self.clamp(self.page)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def current(self) -> discord.Embed:
        return self.pages[self.page - 1]

    @property
    def ended(self) -> bool:
        return self.end_reason is not None

    def clamp(self, page: int) -> int:
        return max(1, min(page, self.page_count))

    def previous(self) -> int:
        self.page = max(self.page - 1, 1)
        return self.page

    def next(self) -> int:
        self.page = min(self.page + 1, self.page_count)
        return self.page

    def jump(self, page: int) -> bool:
        """Move to page if it exists; returns False (page unchanged) otherwise."""
        if not 1 <= page <= self.page_count:
            return False
        self.page = page
        return True

    def end(self, reason: SessionEnd) -> None:
        if self.end_reason is None:
            self.end_reason = reason
            logger.debug(f"Pagination on {self.channel_id} ended: {reason.value}")


class PageControl:
    """What a reaction handler may do to its session."""

    def __init__(self, session: PaginationSession):
        self._session = session

    @property
    def current_page(self) -> int:
        return self._session.page

    @property
    def page_count(self) -> int:
        return self._session.page_count

    def set_page(self, page: int) -> None:
        """Show page next (clamped to the available pages)."""
        self._session.page = self._session.clamp(page)

    async def terminate(self) -> None:
        """End the session and delete the paginated message."""
        if self._session.ended:
            return
        self._session.end(SessionEnd.DELETED)
        await DiscordUtils.safe_delete(self._session.message)


ReactionHandler = Callable[[PageControl], Awaitable[Any]]


def parse_page_number(text: Optional[str]) -> Optional[int]:
    """
    Parse a jump reply, rounding fractions up; None when it is not a finite number.

    A reply without text (an attachment only, say) counts as page 0.
    """
    text = (text or "").strip()
    if not text:
        return 0
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return math.ceil(value)


async def prompt_jump_page(
    client: discord.Client,
    channel: discord.abc.Messageable,
    author_id: int,
    page_count: int,
    timeout_ms: Optional[float] = None,
) -> Optional[int]:
    """
    Ask the author which page to jump to.

    The prompt and the reply are always deleted. An invalid reply gets exactly
    one rejection message.

    Args:
        client: Discord client
        channel: Channel of the paginated message
        author_id: Only this user's reply is accepted
        page_count: Number of pages
        timeout_ms: How long to wait for the reply

    Returns:
        The chosen page, or None if the reply was missing or invalid
    """
    question = await DiscordUtils.safe_send(channel, JUMP_PROMPT)
    answer = await need_message(client, author_id, channel.id, timeout_ms)

    await DiscordUtils.safe_delete_many(channel, [question, answer.event])

    if not answer:
        return None

    page = parse_page_number(answer.event.content)
    if page is None:
        await DiscordUtils.safe_send(channel, INVALID_NUMBER)
        return None

    if page < 1 or page > page_count:
        await DiscordUtils.safe_send(channel, INVALID_PAGE)
        return None

    return page


def build_session(
    embeds: Sequence[discord.Embed],
    author_id: int,
    channel_id: int,
    default_page: int,
    timeout_ms: float,
) -> Optional[PaginationSession]:
    """Create a session, or None when there is nothing to show."""
    if not embeds:
        return None
    return PaginationSession(
        pages=tuple(embeds),
        author_id=author_id,
        channel_id=channel_id,
        page=default_page,
        timeout_ms=timeout_ms,
    )
