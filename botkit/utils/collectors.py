"""
Collectors
Wait for exactly one matching message, reaction or button press
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

import discord

from botkit.bot.config import config
from botkit.utils.logger import get_logger

logger = get_logger("Collectors")

T = TypeVar("T")


class WaitStatus(str, Enum):
    """How a wait ended."""

    EVENT = "event"
    TIMEOUT = "timeout"
    GONE = "gone"  # the watched message was deleted


@dataclass(frozen=True)
class Collected(Generic[T]):
    """Tagged result of a wait."""

    status: WaitStatus
    event: Optional[T] = None

    @property
    def timed_out(self) -> bool:
        return self.status is WaitStatus.TIMEOUT

    @property
    def gone(self) -> bool:
        return self.status is WaitStatus.GONE

    def __bool__(self) -> bool:
        return self.status is WaitStatus.EVENT


async def _collect(
    client: discord.Client,
    event: str,
    check: Callable[..., bool],
    timeout_ms: Optional[float],
    message_id: Optional[int] = None,
) -> Collected:
    timeout = None if timeout_ms is None else timeout_ms / 1000
    waiter = asyncio.ensure_future(client.wait_for(event, check=check, timeout=timeout))
    waiters = {waiter}

    deleted = None
    if message_id is not None:
        deleted = asyncio.ensure_future(
            client.wait_for(
                "raw_message_delete",
                check=lambda payload: payload.message_id == message_id,
            )
        )
        waiters.add(deleted)

    try:
        done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for pending in waiters:
            if not pending.done():
                pending.cancel()

    if deleted is not None and deleted in done and not deleted.cancelled():
        logger.debug(f"Message {message_id} deleted while waiting for {event}")
        return Collected(WaitStatus.GONE)

    try:
        return Collected(WaitStatus.EVENT, waiter.result())
    except asyncio.TimeoutError:
        return Collected(WaitStatus.TIMEOUT)


def _own_id(client: discord.Client) -> Optional[int]:
    user = getattr(client, "user", None)
    return user.id if user is not None else None


async def need_message(
    client: discord.Client,
    user_id: int,
    channel_id: int,
    timeout_ms: Optional[float] = None,
) -> "Collected[discord.Message]":
    """
    Wait for the next message from a user in a channel.

    Args:
        client: Discord client
        user_id: Author to wait for
        channel_id: Channel to watch
        timeout_ms: Timeout in milliseconds (default: COLLECTOR_TIMEOUT_MS)

    Returns:
        Collected message, or a TIMEOUT result
    """
    if timeout_ms is None:
        timeout_ms = config.COLLECTOR_TIMEOUT_MS

    def check(message: Any) -> bool:
        return message.author.id == user_id and message.channel.id == channel_id

    return await _collect(client, "message", check, timeout_ms)


async def need_reaction(
    client: discord.Client,
    user_id: Optional[int],
    message_id: int,
    timeout_ms: Optional[float] = None,
) -> "Collected[discord.RawReactionActionEvent]":
    """
    Wait for the next reaction a user adds to a message.

    Args:
        client: Discord client
        user_id: Reacting user to wait for, or None for anyone but the bot itself
        message_id: Message to watch
        timeout_ms: Timeout in milliseconds (default: COLLECTOR_TIMEOUT_MS)

    Returns:
        Collected raw reaction payload, or a TIMEOUT/GONE result
    """
    if timeout_ms is None:
        timeout_ms = config.COLLECTOR_TIMEOUT_MS

    own_id = _own_id(client)

    def check(payload: Any) -> bool:
        if payload.message_id != message_id or payload.user_id == own_id:
            return False
        return user_id is None or payload.user_id == user_id

    return await _collect(client, "raw_reaction_add", check, timeout_ms, message_id=message_id)


async def need_button(
    client: discord.Client,
    user_id: Optional[int],
    channel_id: int,
    timeout_ms: Optional[float] = None,
    message_id: Optional[int] = None,
) -> "Collected[discord.Interaction]":
    """
    Wait for the next button press by a user in a channel.

    Args:
        client: Discord client
        user_id: User to wait for, or None for anyone
        channel_id: Channel to watch
        timeout_ms: Timeout in milliseconds (default: COLLECTOR_TIMEOUT_MS)
        message_id: If given, only presses on this message count, and the wait
            ends early with GONE when it is deleted

    Returns:
        Collected interaction, or a TIMEOUT/GONE result
    """
    if timeout_ms is None:
        timeout_ms = config.COLLECTOR_TIMEOUT_MS

    def check(interaction: Any) -> bool:
        if interaction.type != discord.InteractionType.component:
            return False
        if interaction.channel_id != channel_id:
            return False
        if message_id is not None and getattr(interaction.message, "id", None) != message_id:
            return False
        return user_id is None or interaction.user.id == user_id

    return await _collect(client, "interaction", check, timeout_ms, message_id=message_id)
