"""
Discord Utilities
Helper functions for Discord interactions
"""

import asyncio
from typing import Any, Iterable, Optional

import discord

from botkit.utils.logger import get_logger

logger = get_logger("Discord")


class DiscordUtils:
    """Utility class for Discord-related helper functions."""

    @staticmethod
    async def sleep(ms: float) -> None:
        """
        Wait for a specified number of milliseconds.

        Args:
            ms: Milliseconds to wait
        """
        await asyncio.sleep(ms / 1000)

    @staticmethod
    async def send_embed(
        channel: discord.abc.Messageable,
        embed: discord.Embed,
        content: Optional[str] = None,
        **kwargs: Any,
    ) -> discord.Message:
        """
        Send a message carrying a single embed.

        Args:
            channel: Channel to send to
            embed: Embed to send
            content: Optional text above the embed
            **kwargs: Extra arguments for channel.send (e.g. view)

        Returns:
            The sent message
        """
        return await channel.send(content=content, embed=embed, **kwargs)

    @staticmethod
    async def edit_embed(
        message: discord.Message,
        embed: discord.Embed,
        content: Optional[str] = None,
        **kwargs: Any,
    ) -> discord.Message:
        """
        Replace the embed (and content) of a message.

        Args:
            message: Message to edit
            embed: New embed
            content: Optional new text
            **kwargs: Extra arguments for message.edit (e.g. view)

        Returns:
            The edited message
        """
        return await message.edit(content=content, embed=embed, **kwargs)

    @staticmethod
    async def safe_send(channel: Any, content: Optional[str] = None, **kwargs: Any) -> Optional[Any]:
        """
        Send a message to a channel, logging failures instead of raising.

        Args:
            channel: Discord channel
            content: Message content

        Returns:
            Sent message or None if failed
        """
        if not channel or not hasattr(channel, "send"):
            return None
        try:
            return await channel.send(content, **kwargs)
        except Exception as e:
            logger.warning(f"Failed to send message: {e}")
            return None

    @staticmethod
    async def safe_delete(message: Any) -> bool:
        """
        Delete a message, logging failures instead of raising.

        Args:
            message: Discord message

        Returns:
            True if deleted successfully, False otherwise
        """
        if not message or not hasattr(message, "delete"):
            return False
        try:
            await message.delete()
            return True
        except Exception as e:
            logger.warning(f"Failed to delete message {getattr(message, 'id', '?')}: {e}")
            return False

    @staticmethod
    async def safe_delete_many(channel: Any, messages: Iterable[Any]) -> bool:
        """
        Delete several messages, in bulk where the channel supports it.

        Args:
            channel: Channel holding the messages
            messages: Messages to delete (None entries are ignored)

        Returns:
            True if every message was deleted
        """
        targets = [m for m in messages if m is not None]
        if not targets:
            return True

        if len(targets) > 1 and hasattr(channel, "delete_messages"):
            try:
                await channel.delete_messages(targets)
                return True
            except Exception as e:
                logger.debug(f"Bulk delete failed, deleting one by one: {e}")

        results = [await DiscordUtils.safe_delete(m) for m in targets]
        return all(results)

    @staticmethod
    async def safe_add_reactions(message: Any, emojis: Iterable[str]) -> bool:
        """
        Add reactions in order, stopping at the first failure.

        Args:
            message: Message to react to
            emojis: Emojis to add

        Returns:
            True if every reaction was added
        """
        try:
            for emoji in emojis:
                await message.add_reaction(emoji)
            return True
        except Exception as e:
            logger.warning(f"Failed to add reactions to {getattr(message, 'id', '?')}: {e}")
            return False

    @staticmethod
    async def safe_remove_reaction(message: Any, emoji: Any, user_id: int) -> bool:
        """
        Remove one user's reaction from a message.

        Args:
            message: Message carrying the reaction
            emoji: Emoji to remove
            user_id: User whose reaction is removed

        Returns:
            True if removed successfully
        """
        try:
            await message.remove_reaction(emoji, discord.Object(id=user_id))
            return True
        except Exception as e:
            logger.debug(f"Failed to remove reaction {emoji}: {e}")
            return False
