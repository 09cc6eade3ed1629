"""
Command Manager
Centralized command registration, lookup and dispatch
"""

from typing import Any, Dict, Iterable, List, Optional, Union

from dc_toolbox.commands.command import Command
from dc_toolbox.commands.subcommand_group import SubcommandGroup
from dc_toolbox.managers.cooldown_tracker import CooldownTracker
from dc_toolbox.utils.errors import CommandNotFoundError
from dc_toolbox.utils.logger import BotLogger, get_logger

RegisteredCommand = Union[Command, SubcommandGroup]

HelpEntry = Dict[str, str]


class CommandManager:
    """
    Registry of top-level commands and subcommand groups.

    The manager owns the cooldown tracker shared by everything registered
    with it. A logger set on the manager reaches every registered entry,
    including ones registered later.
    """

    def __init__(self, cooldowns: Optional[CooldownTracker] = None, dev: bool = False):
        self.logger = get_logger("CommandManager")
        self.commands: Dict[str, RegisteredCommand] = {}
        self.cooldowns = cooldowns or CooldownTracker()
        self.bot_logger: Optional[BotLogger] = None
        self.dev = dev

    def register(self, command: RegisteredCommand) -> "CommandManager":
        """
        Register a command or subcommand group, replacing any entry with the same name.

        Returns:
            Self for chaining
        """
        if self.bot_logger:
            command.set_logger(self.bot_logger)
        command.set_cooldown_tracker(self.cooldowns)

        self.commands[command.name] = command
        self.logger.debug(f"Registered command: {command.name}")
        return self

    def register_multiple(self, commands: Iterable[RegisteredCommand]) -> "CommandManager":
        for command in commands:
            self.register(command)
        return self

    def get(self, name: str) -> Optional[RegisteredCommand]:
        return self.commands.get(name)

    def has(self, name: str) -> bool:
        return name in self.commands

    def unregister(self, name: str) -> bool:
        """
        Remove a command, e.g. when hot-reloading.

        Returns:
            True if the command was registered
        """
        return self.commands.pop(name, None) is not None

    def clear(self) -> None:
        self.commands.clear()

    def get_all(self) -> List[RegisteredCommand]:
        return list(self.commands.values())

    def get_all_sorted(self) -> List[RegisteredCommand]:
        """All commands sorted alphabetically by name."""
        return sorted(self.commands.values(), key=lambda command: command.name.lower())

    def get_command_names(self) -> List[str]:
        return list(self.commands.keys())

    @property
    def size(self) -> int:
        return len(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    async def dispatch(self, name: str, interaction: Any, client: Any) -> None:
        """
        Execute a command by name. Called from the interaction handler.

        Raises:
            CommandNotFoundError: If nothing is registered under the name
        """
        command = self.get(name)
        if not command:
            raise CommandNotFoundError(name)

        await command.execute(interaction, client)

    def to_descriptor_list(self) -> List[Dict[str, Any]]:
        """Convert all commands to Discord JSON format for registration."""
        descriptors = []
        for command in self.commands.values():
            if self.dev:
                self.logger.info(f"Registering: {command.name}")
            descriptors.append(command.to_dict())
        return descriptors

    def get_help_pages(self, commands_per_page: int = 5) -> List[List[HelpEntry]]:
        """
        Generate help pages for the help command.

        Every subcommand group gets a page of its own. The remaining commands
        follow, ``commands_per_page`` entries per page, with a section header
        whenever a new page starts.

        Args:
            commands_per_page: Entries per page of ungrouped commands

        Returns:
            Pages of ``{"name": ..., "value": ...}`` entries
        """
        group_pages: List[List[HelpEntry]] = []
        other_commands: List[HelpEntry] = []

        for command in self.get_all_sorted():
            if isinstance(command, SubcommandGroup):
                page = [{
                    "name": f"─── {command.name.upper()} ───",
                    "value": command.description or "No description.",
                }]
                page.extend(
                    {"name": f"› {sub['name']}", "value": sub["description"]}
                    for sub in command.get_subcommand_list()
                )
                group_pages.append(page)
            else:
                if len(other_commands) % commands_per_page == 0:
                    other_commands.append({"name": "─── OTHER ───", "value": "Other commands"})
                other_commands.append({"name": f"› {command.name}", "value": command.description})

        pages = list(group_pages)
        for start in range(0, len(other_commands), commands_per_page):
            pages.append(other_commands[start:start + commands_per_page])

        return pages

    def set_logger(self, logger: BotLogger) -> "CommandManager":
        """Attach a logger to the manager and every registered command."""
        self.bot_logger = logger
        for command in self.commands.values():
            command.set_logger(logger)
        return self
