"""
Discord client setup using discord.py.
"""

from pathlib import Path
from typing import Optional

import discord

from botkit.bot.config import config
from botkit.commands.command_registry import CommandRegistry
from botkit.commands.loader import LoadContext, load_modules
from botkit.utils.error_handler import get_error_handler, setup_error_handler
from botkit.utils.logger import get_logger

logger = get_logger("Client")


class BotKitClient(discord.Client):
    """Discord client that owns the command registry and loads command modules."""

    def __init__(self, commands_dir: Optional[str] = None, **kwargs):
        intents = kwargs.pop("intents", None)
        if intents is None:
            intents = discord.Intents.default()
            # Needed to read jump-to-page replies
            intents.message_content = True

        super().__init__(intents=intents, **kwargs)

        self.commands_dir = Path(commands_dir or config.COMMANDS_DIR)
        self.registry = CommandRegistry()
        self.load_context = LoadContext(registry=self.registry)

    async def setup_hook(self) -> None:
        """Called when bot is starting up."""
        logger.info("Setting up bot...")

        setup_error_handler()
        await self.load_commands()

        logger.info("Bot setup complete")

    async def load_commands(self) -> int:
        """Run one load cycle over the commands directory."""
        if not self.commands_dir.is_dir():
            logger.warning(f"Commands directory {self.commands_dir} not found - no commands loaded")
            return 0
        return await load_modules(self.commands_dir, self.load_context)

    async def reload_modules(self) -> int:
        """Forget every command and load the commands directory again."""
        logger.info("Reloading command modules...")
        self.load_context.reset()
        return await self.load_commands()

    async def on_ready(self) -> None:
        """Called when bot is ready."""
        logger.info(f"Logged in as: {self.user}")
        logger.info(f"{len(self.registry)} commands registered")

    async def close(self) -> None:
        """Clean shutdown."""
        logger.info("Shutting down bot...")
        self.load_context.cancel_setups()
        await get_error_handler().shutdown()
        await super().close()


# Global bot instance
bot: Optional[BotKitClient] = None


def create_bot() -> BotKitClient:
    """Create and return bot instance."""
    global bot
    bot = BotKitClient()
    return bot


async def run_bot() -> None:
    """Run the bot."""
    config.validate()

    client = create_bot()

    try:
        async with client:
            await client.start(config.DISCORD_TOKEN)
    except Exception as e:
        logger.error(f"Bot error: {e}")
        raise
