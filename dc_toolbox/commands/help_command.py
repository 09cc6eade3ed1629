"""
Help Command
Shows every registered command in a paginated embed
"""

from typing import Any, Dict, List

import discord

from dc_toolbox.commands.command import Command, CommandDefinition
from dc_toolbox.commands.command_manager import CommandManager
from dc_toolbox.managers.pagination import DEFAULT_TIMEOUT_MS, PaginatedBrowser
from dc_toolbox.utils.embeds import embed_builder
from dc_toolbox.utils.interactions import InteractionUtils

HELP_TITLE = "📖 Commands"
NO_COMMANDS_MESSAGE = "No commands are registered."


def render_help_page(page: List[Dict[str, str]], index: int, total: int) -> discord.Embed:
    """Build the embed for one help page."""
    return embed_builder(
        title=HELP_TITLE,
        fields=page,
        footer=f"Page {index + 1}/{total}",
    )


def create_help_command(
    manager: CommandManager,
    commands_per_page: int = 5,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> Command:
    """
    Create the help command for a manager.

    Pages are computed on every invocation, so commands registered after the
    help command still show up.

    Args:
        manager: Manager whose commands are listed
        commands_per_page: Ungrouped commands per page
        timeout_ms: How long the pagination buttons stay active

    Returns:
        The help command, ready to register
    """
    async def show_help(interaction: Any, client: Any) -> None:
        pages = manager.get_help_pages(commands_per_page)
        if not pages:
            await InteractionUtils.safe_reply(interaction, NO_COMMANDS_MESSAGE, ephemeral=True)
            return

        browser = PaginatedBrowser(interaction, pages, render_help_page, timeout_ms=timeout_ms)
        await browser.start()

    definition = CommandDefinition(
        name="help",
        description="Show all available commands",
    )
    return Command(definition, show_help)
