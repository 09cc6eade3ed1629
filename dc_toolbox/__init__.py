"""
Slash command dispatch and interactive UI toolkit for discord.py bots.
"""

__version__ = "1.0.0"
__description__ = "Slash commands, cooldowns, pagination and modals for discord.py"

from .bot.client import DiscordHandler, EventHandlers, create_bot, run_bot
from .commands import Command, CommandDefinition, CommandManager, SubcommandGroup, command

__all__ = [
    "DiscordHandler",
    "EventHandlers",
    "create_bot",
    "run_bot",
    "Command",
    "CommandDefinition",
    "CommandManager",
    "SubcommandGroup",
    "command",
    "__version__",
]
