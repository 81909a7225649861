"""
Command Registry
Centralized command and subcommand registration
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional

from botkit.bot.config import config
from botkit.utils.logger import get_logger

# Command handler type alias
CommandHandler = Callable[..., Awaitable[Any]]


class Command:
    """A command (or subcommand) and the handler that runs it."""

    def __init__(
        self,
        name: str,
        handler: Optional[CommandHandler] = None,
        description: str = "",
        category: str = "General",
        aliases: Optional[List[str]] = None,
        args: Optional[List[Dict[str, Any]]] = None,
        examples: Optional[List[str]] = None,
        guild_only: bool = False,
    ):
        self.name = name
        self.handler = handler
        self.description = description
        self.category = category
        self.aliases = aliases or []
        self.args = args or []
        self.examples = examples or []
        self.guild_only = guild_only
        self.subcommands: Dict[str, "Command"] = {}

    def __repr__(self) -> str:
        return f"<Command name={self.name!r} subcommands={list(self.subcommands)}>"


class CommandRegistry:
    """Centralized command registration and management."""

    def __init__(
        self,
        retry_interval_ms: Optional[int] = None,
        max_retries: Optional[int] = None,
    ):
        self.logger = get_logger("CommandRegistry")
        self.commands: Dict[str, Command] = {}
        self.aliases: Dict[str, str] = {}
        self.categories: Dict[str, List[Command]] = {}
        self.retry_interval_ms = (
            config.SUBCOMMAND_RETRY_INTERVAL_MS if retry_interval_ms is None else retry_interval_ms
        )
        self.max_retries = config.SUBCOMMAND_MAX_RETRIES if max_retries is None else max_retries

    def register(self, command: Command) -> "CommandRegistry":
        """
        Register a top-level command, replacing any command with the same name.

        Args:
            command: Command to register

        Returns:
            Self for chaining
        """
        key = command.name.lower()

        previous = self.commands.get(key)
        if previous is not None:
            self._forget(previous)

        self.commands[key] = command

        for alias in command.aliases:
            self.aliases[alias.lower()] = key

        self.categories.setdefault(command.category, []).append(command)

        self.logger.debug(f"Registered command: {command.name}")
        return self

    def resolve(self, path: str) -> Optional[Command]:
        """
        Resolve a dash-separated command path such as "settings-prefix".

        The first segment is looked up among top-level commands, every later
        segment among the subcommands of the previous one.

        Args:
            path: Command path

        Returns:
            The command at the end of the path, or None if any segment is missing
        """
        names = [name for name in path.lower().split("-") if name]
        if not names:
            return None

        command = self.commands.get(names[0])
        for name in names[1:]:
            if command is None:
                break
            command = command.subcommands.get(name)

        return command

    async def register_subcommand(
        self,
        parent_path: str,
        subcommand: Command,
        retries: int = 0,
    ) -> bool:
        """
        Attach a subcommand to the command at parent_path.

        Command modules may load in any order, so a missing parent is retried
        every retry_interval_ms until max_retries attempts have been made.

        Args:
            parent_path: Dash-separated path of the parent command
            subcommand: Subcommand to attach
            retries: Attempts already made

        Returns:
            True if registered, False if the parent never appeared
        """
        attempt = retries

        while True:
            parent = self.resolve(parent_path)
            if parent is not None:
                break

            if attempt >= self.max_retries:
                self.logger.error(
                    f"Subcommand {subcommand.name} unable to be created for {parent_path}: "
                    f"parent not registered after {attempt} retries (check load order)"
                )
                return False

            attempt += 1
            await asyncio.sleep(self.retry_interval_ms / 1000)

        parent.subcommands[subcommand.name.lower()] = subcommand
        self.logger.debug(f"Registered subcommand: {parent_path}-{subcommand.name}")
        return True

    def schedule_subcommand(self, parent_path: str, subcommand: Command) -> "asyncio.Task[bool]":
        """Run register_subcommand in the background (for synchronous call sites)."""
        return asyncio.create_task(self.register_subcommand(parent_path, subcommand))

    def get(self, name: str) -> Optional[Command]:
        """
        Get a command by name or alias.

        Args:
            name: Command name or alias

        Returns:
            Command or None if not found
        """
        normalized = name.lower()

        if normalized in self.commands:
            return self.commands[normalized]

        alias_target = self.aliases.get(normalized)
        if alias_target:
            return self.commands.get(alias_target)

        return None

    def has(self, name: str) -> bool:
        """Check if command exists."""
        normalized = name.lower()
        return normalized in self.commands or normalized in self.aliases

    def get_by_category(self, category: str) -> List[Command]:
        """Get all commands in a category."""
        return list(self.categories.get(category, []))

    def get_categories(self) -> List[str]:
        """Get all category names."""
        return list(self.categories.keys())

    def get_all(self) -> List[Command]:
        """Get all registered commands."""
        return list(self.commands.values())

    def clear(self) -> None:
        """Forget every command (start of a reload cycle)."""
        self.commands.clear()
        self.aliases.clear()
        self.categories.clear()

    def _forget(self, command: Command) -> None:
        key = command.name.lower()
        for alias, target in list(self.aliases.items()):
            if target == key:
                del self.aliases[alias]

        commands = self.categories.get(command.category, [])
        remaining = [c for c in commands if c is not command]
        if remaining:
            self.categories[command.category] = remaining
        else:
            self.categories.pop(command.category, None)

    def __len__(self) -> int:
        return len(self.commands)
