"""Shared fakes for Discord objects."""

import asyncio
import itertools
from collections import defaultdict, deque
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

AUTHOR_ID = 111
OTHER_ID = 222
CHANNEL_ID = 333
BOT_ID = 999

_ids = itertools.count(1000)


class FakeClient:
    """Client whose wait_for hands out queued events instead of gateway events.

    Like discord.py, events that fail the check are not delivered to the waiter.
    """

    def __init__(self):
        self.user = SimpleNamespace(id=BOT_ID)
        self.queues = defaultdict(deque)
        self.checks = {}
        self.waits = defaultdict(int)

    def feed(self, event, *items):
        self.queues[event].extend(items)

    async def wait_for(self, event, *, check=None, timeout=None):
        self.checks[event] = check
        self.waits[event] += 1
        queue = self.queues[event]
        while queue:
            item = queue.popleft()
            if isinstance(item, BaseException):
                raise item
            if check is None or check(item):
                return item
        if timeout is None:
            # Never resolves on its own (e.g. message deletion watch)
            await asyncio.Event().wait()
        raise asyncio.TimeoutError


class FakeMessage:
    def __init__(self, channel, content=None, embed=None, view=None, author_id=None, guild=True):
        self.id = next(_ids)
        self.channel = channel
        self.content = content
        self.embed = embed
        self.view = view
        self.author = SimpleNamespace(id=author_id)
        self.guild = SimpleNamespace(id=1) if guild else None
        self.edit = AsyncMock(side_effect=self._edit)
        self.delete = AsyncMock()
        self.add_reaction = AsyncMock()
        self.remove_reaction = AsyncMock()

    async def _edit(self, content=None, embed=None, **kwargs):
        self.content = content
        self.embed = embed
        return self


class FakeChannel:
    def __init__(self, channel_id=CHANNEL_ID, guild=True):
        self.id = channel_id
        self.guild = guild
        self.sent = []
        self.send = AsyncMock(side_effect=self._send)
        self.delete_messages = AsyncMock()

    async def _send(self, content=None, embed=None, view=None, **kwargs):
        message = FakeMessage(self, content=content, embed=embed, view=view, guild=self.guild)
        self.sent.append(message)
        return message

    @property
    def texts(self):
        return [m.content for m in self.sent if m.content is not None]

    def reply(self, content, author_id=AUTHOR_ID):
        """A message the user sends into this channel."""
        return FakeMessage(self, content=content, author_id=author_id, guild=self.guild)


def make_reaction(emoji, message_id, user_id=AUTHOR_ID):
    return SimpleNamespace(
        emoji=discord.PartialEmoji(name=emoji),
        message_id=message_id,
        user_id=user_id,
    )


def make_interaction(custom_id, user_id=AUTHOR_ID, channel_id=CHANNEL_ID, message_id=None):
    interaction = MagicMock()
    interaction.type = discord.InteractionType.component
    interaction.user = SimpleNamespace(id=user_id)
    interaction.channel_id = channel_id
    interaction.message = SimpleNamespace(id=message_id)
    interaction.data = {"custom_id": custom_id}
    interaction.response.defer = AsyncMock()
    interaction.response.edit_message = AsyncMock()
    interaction.edit_original_response = AsyncMock()
    return interaction


def make_pages(count):
    return [discord.Embed(title=f"Page {n}") for n in range(1, count + 1)]


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def channel():
    return FakeChannel()
