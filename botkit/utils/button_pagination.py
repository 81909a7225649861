"""
Button Pagination
Page through embeds on one message using buttons.
"""

from typing import Optional, Sequence

import discord

from botkit.bot.config import config
from botkit.utils.collectors import need_button
from botkit.utils.discord import DiscordUtils
from botkit.utils.logger import get_logger
from botkit.utils.pagination import (
    PaginationAction,
    PaginationSession,
    SessionEnd,
    build_session,
    prompt_jump_page,
)

logger = get_logger("Pagination")

# Button label, emoji and style per action, in display order
BUTTONS = {
    PaginationAction.PREVIOUS: ("Previous", "⬅️", discord.ButtonStyle.primary),
    PaginationAction.JUMP: ("Jump", "↗️", discord.ButtonStyle.primary),
    PaginationAction.NEXT: ("Next", "➡️", discord.ButtonStyle.primary),
    PaginationAction.DELETE: ("Delete", "🗑️", discord.ButtonStyle.danger),
}

ACTIONS_BY_LABEL = {label: action for action, (label, _, _) in BUTTONS.items()}


def button_custom_id(message_id: int, action: PaginationAction) -> str:
    return f"{message_id}-{BUTTONS[action][0]}"


def parse_custom_id(message_id: int, custom_id: Optional[str]) -> Optional[PaginationAction]:
    """Map a custom id back to its action; None if it belongs to another pagination."""
    prefix = f"{message_id}-"
    if not custom_id or not custom_id.startswith(prefix):
        return None
    return ACTIONS_BY_LABEL.get(custom_id[len(prefix):])


def build_controls(message_id: int, page: int, page_count: int) -> discord.ui.View:
    """
    Build the button row for the given page.

    Previous/Next are disabled at the first/last page and Jump is disabled
    when there are fewer than three pages.
    """
    disabled = {
        PaginationAction.PREVIOUS: page <= 1,
        PaginationAction.JUMP: page_count <= 2,
        PaginationAction.NEXT: page >= page_count,
        PaginationAction.DELETE: False,
    }

    view = discord.ui.View(timeout=None)
    for action, (label, emoji, style) in BUTTONS.items():
        view.add_item(
            discord.ui.Button(
                label=label,
                custom_id=button_custom_id(message_id, action),
                style=style,
                emoji=emoji,
                disabled=disabled[action],
            )
        )
    return view


async def create_embeds_buttons_pagination(
    client: discord.Client,
    message_id: int,
    channel: discord.abc.Messageable,
    author_id: int,
    embeds: Sequence[discord.Embed],
    default_page: int = 1,
    button_timeout_ms: Optional[float] = None,
) -> Optional[PaginationSession]:
    """
    Send embeds as one message and let the author page through them with buttons.

    Args:
        client: Discord client used to wait for interactions
        message_id: Id scoping the button custom ids (usually the invoking message)
        channel: Channel to send the message to
        author_id: The only user allowed to press the buttons
        embeds: Pages, shown in order
        default_page: First page shown (1-based)
        button_timeout_ms: Idle time after which the buttons stop responding
            (default: PAGINATION_TIMEOUT_MS)

    Returns:
        The finished session, or None if there was nothing to send
    """
    if button_timeout_ms is None:
        button_timeout_ms = config.PAGINATION_TIMEOUT_MS

    session = build_session(embeds, author_id, channel.id, default_page, button_timeout_ms)
    if session is None:
        return None

    if session.page_count <= 1:
        try:
            session.message = await DiscordUtils.send_embed(channel, session.current)
        except Exception as e:
            logger.warning(f"Failed to send paginated message: {e}")
            return None
        session.end(SessionEnd.STATIC)
        return session

    view = build_controls(message_id, session.page, session.page_count)
    try:
        session.message = await DiscordUtils.send_embed(channel, session.current, view=view)
    except Exception as e:
        logger.warning(f"Failed to send paginated message: {e}")
        view.stop()
        return None

    await _run(client, message_id, channel, session, view)
    return session


async def _run(
    client: discord.Client,
    message_id: int,
    channel: discord.abc.Messageable,
    session: PaginationSession,
    view: discord.ui.View,
) -> None:
    message = session.message
    try:
        while not session.ended:
            # Any user, so that a foreign press reaches the owner check below
            collected = await need_button(client, None, channel.id, session.timeout_ms, message_id=message.id)
            if collected.timed_out:
                session.end(SessionEnd.TIMEOUT)
                break
            if collected.gone:
                session.end(SessionEnd.MESSAGE_GONE)
                break

            interaction = collected.event
            if interaction.user.id != session.author_id:
                session.end(SessionEnd.UNAUTHORIZED)
                break

            action = parse_custom_id(message_id, (interaction.data or {}).get("custom_id"))
            if action is None:
                session.end(SessionEnd.UNAUTHORIZED)
                break

            if action is PaginationAction.DELETE:
                await _acknowledge(interaction)
                session.end(SessionEnd.DELETED)
                await DiscordUtils.safe_delete(message)
                break

            if action is PaginationAction.JUMP:
                # Deferred so the interaction does not expire while waiting for the reply
                await _acknowledge(interaction)
                page = await prompt_jump_page(client, channel, session.author_id, session.page_count)
                if page is None or not session.jump(page):
                    continue

                view.stop()
                view = build_controls(message_id, session.page, session.page_count)
                try:
                    await interaction.edit_original_response(embed=session.current, view=view)
                except Exception as e:
                    logger.warning(f"Failed to render page {session.page}: {e}")
                    session.end(SessionEnd.RENDER_FAILED)
                continue

            if action is PaginationAction.NEXT:
                session.next()
            else:
                session.previous()

            view.stop()
            view = build_controls(message_id, session.page, session.page_count)
            try:
                await interaction.response.edit_message(embed=session.current, view=view)
            except Exception as e:
                logger.warning(f"Failed to render page {session.page}: {e}")
                session.end(SessionEnd.RENDER_FAILED)
    finally:
        view.stop()


async def _acknowledge(interaction: discord.Interaction) -> None:
    try:
        await interaction.response.defer()
    except Exception as e:
        logger.debug(f"Failed to acknowledge interaction: {e}")
