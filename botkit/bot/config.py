"""
Configuration management for botkit.
Loads environment variables and provides configuration settings.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class Config:
    """Bot configuration settings."""

    # Discord
    DISCORD_TOKEN: str

    # Module loader
    COMMANDS_DIR: str = "commands"

    # Pagination / collectors
    PAGINATION_TIMEOUT_MS: int = 30 * 1000
    COLLECTOR_TIMEOUT_MS: int = 5 * 60 * 1000

    # Subcommand registration (1s x 600 = 10 minutes before giving up)
    SUBCOMMAND_RETRY_INTERVAL_MS: int = 1000
    SUBCOMMAND_MAX_RETRIES: int = 600

    # How long a load cycle waits for module setups before leaving them in the background
    SETUP_TIMEOUT_MS: int = 5 * 1000

    # Debug
    DEBUG: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            DISCORD_TOKEN=os.getenv("DISCORD_TOKEN", ""),
            COMMANDS_DIR=os.getenv("COMMANDS_DIR", "commands"),
            PAGINATION_TIMEOUT_MS=int(os.getenv("PAGINATION_TIMEOUT_MS", "30000")),
            COLLECTOR_TIMEOUT_MS=int(os.getenv("COLLECTOR_TIMEOUT_MS", "300000")),
            SUBCOMMAND_RETRY_INTERVAL_MS=int(os.getenv("SUBCOMMAND_RETRY_INTERVAL_MS", "1000")),
            SUBCOMMAND_MAX_RETRIES=int(os.getenv("SUBCOMMAND_MAX_RETRIES", "600")),
            SETUP_TIMEOUT_MS=int(os.getenv("SETUP_TIMEOUT_MS", "5000")),
            DEBUG=os.getenv("DEBUG", "false").lower() == "true",
        )

    def validate(self) -> None:
        """Validate required configuration."""
        if not self.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")
        if self.SUBCOMMAND_MAX_RETRIES < 0:
            raise ValueError("SUBCOMMAND_MAX_RETRIES must not be negative")


# Global config instance
config = Config.from_env()
