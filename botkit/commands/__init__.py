"""
Command registry and dynamic module loading.
"""

from .command_registry import Command, CommandHandler, CommandRegistry
from .loader import LoadContext, file_loader, import_directory, load_modules

__all__ = [
    "Command",
    "CommandHandler",
    "CommandRegistry",
    "LoadContext",
    "file_loader",
    "import_directory",
    "load_modules",
]
