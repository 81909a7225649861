"""Tests for button-driven pagination."""

from unittest.mock import AsyncMock

import pytest

from botkit.utils.button_pagination import (
    build_controls,
    create_embeds_buttons_pagination,
    parse_custom_id,
)
from botkit.utils.pagination import INVALID_PAGE, JUMP_PROMPT, PaginationAction, SessionEnd
from tests.conftest import AUTHOR_ID, OTHER_ID, make_interaction, make_pages

SCOPE = 77


def _press(label, user_id=AUTHOR_ID, scope=SCOPE, message_id=None):
    return make_interaction(f"{scope}-{label}", user_id=user_id, message_id=message_id)


def _disabled(view):
    return {button.label: button.disabled for button in view.children}


async def _run(client, channel, count, *presses, **kwargs):
    """Queue presses on the paginated message (unless they name another one), then run."""
    original_send = channel.send.side_effect

    async def send_and_stamp(*args, **kw):
        message = await original_send(*args, **kw)
        if len(channel.sent) == 1:
            for press in presses:
                if press.message.id is None:
                    press.message.id = message.id
        return message

    channel.send.side_effect = send_and_stamp
    client.feed("interaction", *presses)
    return await create_embeds_buttons_pagination(
        client, SCOPE, channel, AUTHOR_ID, make_pages(count), **kwargs
    )


class TestControls:
    """Tests for the button row."""

    @pytest.mark.asyncio
    async def test_first_page(self):
        view = build_controls(SCOPE, page=1, page_count=3)
        assert _disabled(view) == {"Previous": True, "Jump": False, "Next": False, "Delete": False}
        assert [b.custom_id for b in view.children] == [
            "77-Previous", "77-Jump", "77-Next", "77-Delete",
        ]
        view.stop()

    @pytest.mark.asyncio
    async def test_last_page(self):
        view = build_controls(SCOPE, page=3, page_count=3)
        assert _disabled(view) == {"Previous": False, "Jump": False, "Next": True, "Delete": False}
        view.stop()

    @pytest.mark.asyncio
    async def test_jump_disabled_below_three_pages(self):
        view = build_controls(SCOPE, page=1, page_count=2)
        assert _disabled(view)["Jump"] is True
        view.stop()

    def test_parse_custom_id(self):
        assert parse_custom_id(SCOPE, "77-Next") is PaginationAction.NEXT
        assert parse_custom_id(SCOPE, "77-Delete") is PaginationAction.DELETE
        assert parse_custom_id(SCOPE, "78-Next") is None
        assert parse_custom_id(SCOPE, "77-Unknown") is None
        assert parse_custom_id(SCOPE, None) is None


@pytest.mark.asyncio
async def test_empty_pages_send_nothing(client, channel):
    assert await create_embeds_buttons_pagination(client, SCOPE, channel, AUTHOR_ID, []) is None
    channel.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_single_page_has_no_controls(client, channel):
    session = await _run(client, channel, 1)

    assert session.end_reason is SessionEnd.STATIC
    assert channel.sent[0].view is None
    assert client.waits["interaction"] == 0


@pytest.mark.asyncio
async def test_initial_message_has_controls(client, channel):
    session = await _run(client, channel, 3, default_page=2)

    message = channel.sent[0]
    assert message.embed.title == "Page 2"
    assert _disabled(message.view) == {"Previous": False, "Jump": False, "Next": False, "Delete": False}
    assert session.end_reason is SessionEnd.TIMEOUT


@pytest.mark.asyncio
async def test_next_and_previous_update_in_place(client, channel):
    first, second, third = _press("Next"), _press("Next"), _press("Previous")

    session = await _run(client, channel, 3, first, second, third)

    assert session.page == 2
    first_update = first.response.edit_message.await_args.kwargs
    assert first_update["embed"].title == "Page 2"
    second_update = second.response.edit_message.await_args.kwargs
    assert second_update["embed"].title == "Page 3"
    assert _disabled(second_update["view"])["Next"] is True
    assert third.response.edit_message.await_args.kwargs["embed"].title == "Page 2"


@pytest.mark.asyncio
async def test_next_on_last_page_stays(client, channel):
    press = _press("Next")
    session = await _run(client, channel, 2, press, default_page=2)

    assert session.page == 2
    press.response.edit_message.assert_awaited_once()


@pytest.mark.asyncio
async def test_foreign_prefix_ends_session(client, channel):
    foreign = _press("Next", scope=99)
    session = await _run(client, channel, 3, foreign, _press("Next"))

    assert session.end_reason is SessionEnd.UNAUTHORIZED
    assert session.page == 1
    foreign.response.edit_message.assert_not_awaited()
    foreign.response.defer.assert_not_awaited()


@pytest.mark.asyncio
async def test_foreign_user_ends_session(client, channel):
    foreign = _press("Next", user_id=OTHER_ID)
    session = await _run(client, channel, 3, foreign)

    assert session.end_reason is SessionEnd.UNAUTHORIZED
    assert session.page == 1
    foreign.response.edit_message.assert_not_awaited()
    assert len(channel.sent) == 1


@pytest.mark.asyncio
async def test_delete(client, channel):
    press = _press("Delete")
    session = await _run(client, channel, 3, press, _press("Next"))

    assert session.end_reason is SessionEnd.DELETED
    channel.sent[0].delete.assert_awaited_once()
    press.response.defer.assert_awaited_once()
    assert len(client.queues["interaction"]) == 1


@pytest.mark.asyncio
async def test_jump_uses_followup_update(client, channel):
    press = _press("Jump")
    client.feed("message", channel.reply("3"))

    session = await _run(client, channel, 4, press)

    assert session.page == 3
    press.response.defer.assert_awaited_once()
    press.response.edit_message.assert_not_awaited()
    update = press.edit_original_response.await_args.kwargs
    assert update["embed"].title == "Page 3"
    assert channel.texts == [JUMP_PROMPT]
    assert session.end_reason is SessionEnd.TIMEOUT


@pytest.mark.asyncio
async def test_jump_out_of_range_keeps_page(client, channel):
    press = _press("Jump")
    client.feed("message", channel.reply("12"))

    session = await _run(client, channel, 4, press)

    assert session.page == 1
    assert channel.texts == [JUMP_PROMPT, INVALID_PAGE]
    press.edit_original_response.assert_not_awaited()
    assert session.end_reason is SessionEnd.TIMEOUT


@pytest.mark.asyncio
async def test_render_failure_ends_session(client, channel):
    press = _press("Next")
    press.response.edit_message = AsyncMock(side_effect=RuntimeError("expired"))

    session = await _run(client, channel, 3, press, _press("Next"))

    assert session.end_reason is SessionEnd.RENDER_FAILED
    assert len(client.queues["interaction"]) == 1


@pytest.mark.asyncio
async def test_timeout_leaves_message(client, channel):
    session = await _run(client, channel, 3)

    assert session.end_reason is SessionEnd.TIMEOUT
    channel.sent[0].edit.assert_not_awaited()
    channel.sent[0].delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_foreign_user_reaches_owner_check(client, channel):
    foreign, own = _press("Next", user_id=OTHER_ID), _press("Next")
    session = await _run(client, channel, 3, foreign, own)

    assert session.end_reason is SessionEnd.UNAUTHORIZED
    own.response.edit_message.assert_not_awaited()
    assert len(client.queues["interaction"]) == 1


@pytest.mark.asyncio
async def test_press_on_other_message_is_ignored(client, channel):
    elsewhere = _press("Next", message_id=5)
    session = await _run(client, channel, 3, elsewhere, _press("Next"))

    assert session.page == 2
    elsewhere.response.edit_message.assert_not_awaited()
    assert session.end_reason is SessionEnd.TIMEOUT
