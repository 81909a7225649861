"""
Module Loader
Imports every command module under a directory and lets it register itself
"""

import asyncio
import importlib.util
import inspect
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Set, Union

from botkit.bot.config import config
from botkit.commands.command_registry import CommandRegistry
from botkit.utils.error_handler import get_error_handler
from botkit.utils.logger import get_logger

logger = get_logger("Loader")

# Prefix for modules imported by the loader; keeps them out of the way of real packages
MODULE_PREFIX = "botkit_loaded"


@dataclass
class LoadContext:
    """State shared by one bootstrap: the registry, pending module paths and setups still running."""

    registry: CommandRegistry
    paths: List[Path] = field(default_factory=list)
    cycle: int = 0
    setup_timeout_ms: Optional[float] = None
    tasks: Set["asyncio.Task[bool]"] = field(default_factory=set)

    def cancel_setups(self) -> None:
        """Cancel setups left running by earlier load cycles."""
        for task in list(self.tasks):
            task.cancel()
        self.tasks.clear()

    def reset(self) -> None:
        """Drop leftover setups, registered commands, pending paths and loaded modules."""
        self.cancel_setups()
        self.registry.clear()
        self.paths.clear()
        for name in [name for name in sys.modules if name.startswith(f"{MODULE_PREFIX}.")]:
            del sys.modules[name]


def import_directory(path: Union[str, Path], context: LoadContext, _root: bool = True) -> List[Path]:
    """
    Collect every Python module under a folder, recursively.

    Files starting with "_" (such as __init__.py) are skipped. Nothing is
    imported yet; call file_loader to execute the collected modules.

    Args:
        path: Folder to scan
        context: Load context collecting the paths

    Returns:
        The context's pending path list
    """
    folder = Path(path).resolve()

    if _root:
        logger.info(f"Loading {folder.name}...")

    for entry in sorted(folder.iterdir()):
        if entry.name.startswith(("_", ".")):
            continue

        if entry.is_dir():
            import_directory(entry, context, _root=False)
            continue

        if entry.suffix == ".py":
            context.paths.append(entry)

    if _root:
        context.cycle += 1

    return context.paths


def _module_name(path: Path, context: LoadContext, index: int) -> str:
    stem = re.sub(r"\W", "_", path.stem)
    return f"{MODULE_PREFIX}.c{context.cycle}.m{index}_{stem}"


async def _run_setup(setup: Any, module_name: str, context: LoadContext) -> bool:
    try:
        result = setup(context)
        if inspect.isawaitable(result):
            await result
        return True
    except Exception as e:
        get_error_handler().handle_exception(e, f"setup {module_name}")
        return False


async def file_loader(context: LoadContext) -> int:
    """
    Import every collected module and run its setup(context) hook.

    Module names carry the cycle counter, so a reload always executes fresh
    copies. Setups run concurrently as tasks, which lets a subcommand module
    wait for a parent defined in a module that sorts after it. The load waits
    at most setup_timeout_ms for them; setups still running after that (such
    as a subcommand whose parent never shows up) stay on context.tasks and
    finish in the background.

    Args:
        context: Load context with pending paths

    Returns:
        Number of modules imported and set up without error within the wait
    """
    setups = []
    imported = 0

    for index, path in enumerate(context.paths):
        module_name = _module_name(path, context, index)
        try:
            spec = importlib.util.spec_from_file_location(module_name, path)
            if spec is None or spec.loader is None:
                raise ImportError(f"Cannot import {path}")
            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(module_name, None)
            get_error_handler().handle_exception(e, f"import {path.name}")
            continue

        setup = getattr(module, "setup", None)
        if callable(setup):
            task = asyncio.create_task(_run_setup(setup, path.name, context))
            context.tasks.add(task)
            task.add_done_callback(context.tasks.discard)
            setups.append(task)
        else:
            imported += 1

    loaded = imported
    if setups:
        timeout_ms = context.setup_timeout_ms
        if timeout_ms is None:
            timeout_ms = config.SETUP_TIMEOUT_MS

        done, pending = await asyncio.wait(setups, timeout=timeout_ms / 1000)
        loaded += sum(1 for task in done if not task.cancelled() and task.result())
        if pending:
            logger.warning(f"{len(pending)} module setups still running in the background")

    logger.info(f"Loaded {loaded}/{len(context.paths)} modules (cycle {context.cycle})")
    context.paths.clear()
    return loaded


async def load_modules(path: Union[str, Path], context: LoadContext) -> int:
    """Collect and import every module under path in one cycle."""
    import_directory(path, context)
    return await file_loader(context)
