"""
botkit - command registry, duration and pagination helpers for discord.py bots.
"""

__version__ = "1.0.0"
__description__ = "Utility layer for discord.py bots"

from .bot.client import BotKitClient, create_bot, run_bot

__all__ = ["BotKitClient", "create_bot", "run_bot", "__version__"]
