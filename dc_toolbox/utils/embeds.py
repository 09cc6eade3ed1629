"""
Embed and button helpers
"""

from typing import Callable, List, Optional, Sequence

import discord

STANDARD_COLOR = discord.Colour(0x3F48CC)

BUTTON_DEFAULTS = {
    "prev": ("Previous", discord.ButtonStyle.secondary),
    "next": ("Next", discord.ButtonStyle.secondary),
    "edit": ("Edit", discord.ButtonStyle.primary),
    "delete": ("Delete", discord.ButtonStyle.danger),
}


def embed_builder(
    title: str,
    fields: Optional[Sequence[dict]] = None,
    description: Optional[str] = None,
    footer: Optional[str] = None,
    timestamp: bool = False,
    color: discord.Colour = STANDARD_COLOR,
    customize: Optional[Callable[[discord.Embed], discord.Embed]] = None,
) -> discord.Embed:
    """
    Build an embed.

    Args:
        title: Embed title
        fields: Dicts with ``name``, ``value`` and optional ``inline``
        description: Optional description
        footer: Optional footer text
        timestamp: Stamp the embed with the current time
        color: Embed color
        customize: Optional function to further adjust the embed

    Returns:
        The embed
    """
    embed = discord.Embed(title=title, color=color, description=description)

    for item in fields or []:
        embed.add_field(name=item["name"], value=item["value"], inline=item.get("inline", False))
    if footer:
        embed.set_footer(text=footer)
    if timestamp:
        embed.timestamp = discord.utils.utcnow()

    return customize(embed) if customize else embed


def create_button(
    type: str,
    disabled: bool = False,
    label: Optional[str] = None,
    style: Optional[discord.ButtonStyle] = None,
    custom_id: Optional[str] = None,
) -> discord.ui.Button:
    """
    Create a button for a known type (prev, next, edit, delete) or a custom one.

    The custom id defaults to the type, which is what paginated views dispatch on.
    """
    default_label, default_style = BUTTON_DEFAULTS.get(type, ("Unknown", discord.ButtonStyle.secondary))
    if type not in BUTTON_DEFAULTS and style is not None:
        default_style = style

    return discord.ui.Button(
        label=label or default_label,
        style=default_style,
        custom_id=custom_id or type,
        disabled=disabled,
    )


def create_pagination_buttons(index: int, total: int) -> List[discord.ui.Button]:
    """Create the prev and next buttons, disabled at the ends of the list."""
    return [
        create_button("prev", disabled=index == 0),
        create_button("next", disabled=index >= total - 1),
    ]
