"""
Reaction Pagination
Page through embeds on one message using reactions.
Requires the guild/DM message reaction intents.
"""

from typing import Dict, Mapping, Optional, Sequence, Union

import discord

from botkit.bot.config import config
from botkit.utils.collectors import need_reaction
from botkit.utils.discord import DiscordUtils
from botkit.utils.error_handler import get_error_handler
from botkit.utils.logger import get_logger
from botkit.utils.pagination import (
    PageControl,
    PaginationAction,
    PaginationSession,
    ReactionHandler,
    SessionEnd,
    build_session,
    prompt_jump_page,
)

logger = get_logger("Pagination")

DEFAULT_REACTIONS: Dict[str, PaginationAction] = {
    "◀️": PaginationAction.PREVIOUS,
    "↗️": PaginationAction.JUMP,
    "▶️": PaginationAction.NEXT,
    "🗑️": PaginationAction.DELETE,
}


def _builtin_handler(
    action: PaginationAction,
    client: discord.Client,
    channel: discord.abc.Messageable,
    author_id: int,
) -> ReactionHandler:
    if action is PaginationAction.PREVIOUS:
        async def previous(control: PageControl) -> None:
            control.set_page(max(control.current_page - 1, 1))
        return previous

    if action is PaginationAction.NEXT:
        async def next_page(control: PageControl) -> None:
            control.set_page(min(control.current_page + 1, control.page_count))
        return next_page

    if action is PaginationAction.JUMP:
        async def jump(control: PageControl) -> None:
            page = await prompt_jump_page(client, channel, author_id, control.page_count)
            if page is not None:
                control.set_page(page)
        return jump

    async def delete(control: PageControl) -> None:
        await control.terminate()
    return delete


def resolve_reactions(
    reactions: Mapping[str, Union[PaginationAction, ReactionHandler]],
    client: discord.Client,
    channel: discord.abc.Messageable,
    author_id: int,
) -> Dict[str, ReactionHandler]:
    """
    Turn an emoji mapping into handlers.

    Values may be a PaginationAction (built-in behaviour) or an async
    callable taking a PageControl.

    Raises:
        TypeError: If a value is neither
    """
    handlers: Dict[str, ReactionHandler] = {}
    for emoji, value in reactions.items():
        if isinstance(value, PaginationAction):
            handlers[emoji] = _builtin_handler(value, client, channel, author_id)
        elif callable(value):
            handlers[emoji] = value
        else:
            raise TypeError(
                f"Reaction {emoji!r} must map to a PaginationAction or a handler, "
                f"got {type(value).__name__}"
            )
    return handlers


async def create_embeds_pagination(
    client: discord.Client,
    channel: discord.abc.Messageable,
    author_id: int,
    embeds: Sequence[discord.Embed],
    default_page: int = 1,
    reaction_timeout_ms: Optional[float] = None,
    reactions: Optional[Mapping[str, Union[PaginationAction, ReactionHandler]]] = None,
) -> Optional[PaginationSession]:
    """
    Send embeds as one message and let the author page through them with reactions.

    Args:
        client: Discord client used to wait for reactions
        channel: Channel to send the message to
        author_id: The only user allowed to control the pages
        embeds: Pages, shown in order
        default_page: First page shown (1-based)
        reaction_timeout_ms: Idle time after which the controls stop responding
            (default: PAGINATION_TIMEOUT_MS)
        reactions: Emoji to action/handler mapping (default: ◀️ ↗️ ▶️ 🗑️)

    Returns:
        The finished session, or None if there was nothing to send
    """
    handlers = resolve_reactions(reactions or DEFAULT_REACTIONS, client, channel, author_id)
    if reaction_timeout_ms is None:
        reaction_timeout_ms = config.PAGINATION_TIMEOUT_MS

    session = build_session(embeds, author_id, channel.id, default_page, reaction_timeout_ms)
    if session is None:
        return None

    try:
        session.message = await DiscordUtils.send_embed(channel, session.current)
    except Exception as e:
        logger.warning(f"Failed to send paginated message: {e}")
        return None

    if session.page_count <= 1:
        session.end(SessionEnd.STATIC)
        return session

    message = session.message
    await DiscordUtils.safe_add_reactions(message, handlers.keys())

    control = PageControl(session)

    while not session.ended:
        # Any user, so that a foreign reaction reaches the owner check below
        collected = await need_reaction(client, None, message.id, session.timeout_ms)
        if collected.timed_out:
            session.end(SessionEnd.TIMEOUT)
            break
        if collected.gone:
            session.end(SessionEnd.MESSAGE_GONE)
            break

        payload = collected.event
        if payload.user_id != author_id:
            session.end(SessionEnd.UNAUTHORIZED)
            break

        # Reactions from others cannot be removed in DMs
        if getattr(message, "guild", None) is not None:
            await DiscordUtils.safe_remove_reaction(message, payload.emoji, author_id)

        handler = handlers.get(str(payload.emoji))
        if handler is not None:
            try:
                await handler(control)
            except Exception as e:
                get_error_handler().handle_exception(e, "reaction handler")
                session.end(SessionEnd.HANDLER_FAILED)
                break

        if session.ended:
            break

        try:
            await DiscordUtils.edit_embed(message, session.current)
        except Exception as e:
            logger.warning(f"Failed to render page {session.page}: {e}")
            session.end(SessionEnd.RENDER_FAILED)

    return session
