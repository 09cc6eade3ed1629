"""
Entry point for the toolbox bot.
"""

import asyncio
import sys

import discord

from dc_toolbox.bot.client import run_bot
from dc_toolbox.bot.config import config
from dc_toolbox.commands.command import command
from dc_toolbox.commands.command_manager import CommandManager
from dc_toolbox.commands.help_command import create_help_command
from dc_toolbox.managers.modal_manager import ModalDefinition, ModalField, ModalManager
from dc_toolbox.utils.formatting import Times
from dc_toolbox.utils.interactions import InteractionUtils
from dc_toolbox.utils.logger import get_logger

logger = get_logger("Main")


def create_managers():
    """Build the command and modal registries with the built-in commands."""
    manager = CommandManager(dev=config.is_dev)
    modals = ModalManager()

    async def on_feedback(submission):
        text = submission.data["components"][0]["components"][0]["value"]
        logger.info(f"Feedback from {submission.user}: {text}")
        await InteractionUtils.safe_reply(submission, "Thanks for the feedback!", ephemeral=True)

    feedback_modal = ModalDefinition(
        id="feedback",
        title="Feedback",
        on_submit=on_feedback,
        fields=[ModalField("text", "What's on your mind?", style=discord.TextStyle.paragraph)],
    )
    modals.register(feedback_modal)

    @command(description="Check that the bot is responding", cooldown_ms=5 * Times.SECOND)
    async def ping(interaction, client):
        latency = round(client.latency * 1000) if client else 0
        await InteractionUtils.safe_reply(interaction, f"Pong! ({latency}ms)")

    @command(description="Send feedback to the bot owner", cooldown_ms=Times.MINUTE)
    async def feedback(interaction, client):
        modal = modals.build(feedback_modal, f"feedback:{interaction.id}")
        await interaction.response.send_modal(modal)

    manager.register_multiple([
        ping,
        feedback,
        create_help_command(manager, config.HELP_PAGE_SIZE, config.PAGINATION_TIMEOUT_MS),
    ])
    return manager, modals


def main():
    """Main entry point."""
    try:
        logger.info("Starting toolbox bot...")
        manager, modals = create_managers()
        asyncio.run(run_bot(manager, modals))
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
