"""Shared pytest fixtures for dc_toolbox tests."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest


class FakeClock:
    """Millisecond clock the test moves by hand."""

    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def _make_interaction(
    user_id: int = 1,
    guild_id: Optional[int] = 10,
    data: Optional[dict] = None,
    responded: bool = False,
    age: timedelta = timedelta(0),
    interaction_id: int = 100,
) -> MagicMock:
    interaction = MagicMock()
    interaction.id = interaction_id
    interaction.user.id = user_id
    interaction.guild_id = guild_id
    interaction.created_at = discord.utils.utcnow() - age
    interaction.data = data if data is not None else {}

    interaction.response.is_done = MagicMock(return_value=responded)
    interaction.response.send_message = AsyncMock()
    interaction.response.edit_message = AsyncMock()
    interaction.response.defer = AsyncMock()
    interaction.response.send_modal = AsyncMock()
    interaction.original_response = AsyncMock(return_value=MagicMock(name="message"))
    interaction.followup.send = AsyncMock(return_value=MagicMock(name="followup"))
    interaction.edit_original_response = AsyncMock()
    return interaction


def http_error(status: int = 500, message: str = "Internal Server Error") -> discord.HTTPException:
    response = MagicMock(status=status, reason=message)
    if status == 404:
        return discord.NotFound(response, "Unknown Message")
    return discord.HTTPException(response, message)


@pytest.fixture()
def make_interaction() -> Callable[..., Any]:
    return _make_interaction


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(1_000_000)


@pytest.fixture()
def bot_logger() -> MagicMock:
    return MagicMock(name="BotLogger")

