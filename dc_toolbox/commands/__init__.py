"""
Command system: commands, subcommand groups and the registry.
"""

from .builder import CommandBuilder
from .command import Command, CommandDefinition, command
from .subcommand_group import SubcommandGroup
from .command_manager import CommandManager
from .help_command import create_help_command

__all__ = [
    "CommandBuilder",
    "Command",
    "CommandDefinition",
    "command",
    "SubcommandGroup",
    "CommandManager",
    "create_help_command",
]
