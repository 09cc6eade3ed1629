"""Tests for formatting and embed helpers."""

import discord
import pytest

from dc_toolbox.utils.embeds import (
    STANDARD_COLOR,
    create_button,
    create_pagination_buttons,
    embed_builder,
)
from dc_toolbox.utils.formatting import Times, format_duration


@pytest.mark.parametrize(
    ("ms", "expected"),
    [
        (0, "0s"),
        (999, "0s"),
        (4200, "4s"),
        (65 * Times.SECOND, "1m 5s"),
        (Times.HOUR, "1h"),
        (Times.HOUR + 2 * Times.MINUTE + 3 * Times.SECOND, "1h 2m 3s"),
    ],
)
def test_format_duration(ms, expected):
    assert format_duration(ms) == expected


class TestEmbedBuilder:
    def test_fields_and_footer(self):
        embed = embed_builder(
            "Title",
            fields=[{"name": "a", "value": "1"}, {"name": "b", "value": "2", "inline": True}],
            footer="Page 1/2",
        )

        assert embed.title == "Title"
        assert embed.colour == STANDARD_COLOR
        assert [(f.name, f.value, f.inline) for f in embed.fields] == [("a", "1", False), ("b", "2", True)]
        assert embed.footer.text == "Page 1/2"
        assert embed.timestamp is None

    def test_timestamp_and_customize(self):
        embed = embed_builder("Title", timestamp=True, customize=lambda e: e.set_author(name="bot"))
        assert embed.timestamp is not None
        assert embed.author.name == "bot"


class TestButtons:
    def test_known_type(self):
        button = create_button("delete")
        assert button.label == "Delete"
        assert button.style == discord.ButtonStyle.danger
        assert button.custom_id == "delete"

    def test_custom_type(self):
        button = create_button("archive", label="Archive", style=discord.ButtonStyle.success)
        assert button.label == "Archive"
        assert button.style == discord.ButtonStyle.success
        assert button.custom_id == "archive"

    @pytest.mark.parametrize(
        ("index", "total", "prev_disabled", "next_disabled"),
        [(0, 3, True, False), (1, 3, False, False), (2, 3, False, True), (0, 1, True, True)],
    )
    def test_pagination_buttons(self, index, total, prev_disabled, next_disabled):
        prev_button, next_button = create_pagination_buttons(index, total)
        assert prev_button.disabled is prev_disabled
        assert next_button.disabled is next_disabled
