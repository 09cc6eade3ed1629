"""
Subcommand Group
Parent slash command dispatching to child commands, e.g. /birthday set
"""

from typing import Any, Dict, Iterable, List, Optional

from dc_toolbox.commands.builder import CommandBuilder
from dc_toolbox.commands.command import Command
from dc_toolbox.managers.cooldown_tracker import CooldownTracker
from dc_toolbox.utils.errors import UnknownSubcommandError
from dc_toolbox.utils.interactions import InteractionUtils
from dc_toolbox.utils.logger import BotLogger, log_scoped


class SubcommandGroup:
    """
    Named collection of commands invoked as subcommands.

    Children are keyed by their own name. The group does not validate
    anything itself; each child runs its own validation when executed.
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        subcommands: Optional[Iterable[Command]] = None,
    ):
        self.name = name
        self.description = description
        self.subcommands: Dict[str, Command] = {}
        self.logger: Optional[BotLogger] = None
        self.cooldowns: Optional[CooldownTracker] = None

        for subcommand in subcommands or []:
            self.add_subcommand(subcommand)

    def add_subcommand(self, subcommand: Command) -> "SubcommandGroup":
        """Add a child command, replacing any child with the same name."""
        if self.logger:
            subcommand.set_logger(self.logger)
        if self.cooldowns:
            subcommand.set_cooldown_tracker(self.cooldowns)
        self.subcommands[subcommand.name] = subcommand
        return self

    def get_subcommand(self, name: str) -> Optional[Command]:
        return self.subcommands.get(name)

    async def execute(self, interaction: Any, client: Any) -> bool:
        """
        Run the subcommand selected in the interaction.

        Returns:
            True if the subcommand ran, False if it was rejected or failed

        Raises:
            UnknownSubcommandError: If the subcommand is not part of this group,
                which means the registered descriptor is out of date
        """
        subcommand_name = InteractionUtils.get_subcommand_name(interaction)
        subcommand = self.subcommands.get(subcommand_name) if subcommand_name else None

        if not subcommand:
            raise UnknownSubcommandError(self.name, subcommand_name)

        scope = f"{subcommand.name}_EXECUTION"

        try:
            executed = await subcommand.execute(interaction, client)
        except Exception as err:
            self.log(f"An Error occurred: {err}", "error", scope, True)
            failure = await InteractionUtils.reply_generic_error(interaction)
            if failure:
                self.log(f"Could not report error to user: {failure}", "warn", scope)
            return False

        if executed:
            self.log(f"{self.name} ({subcommand_name}) command executed", "info", scope)
        return executed

    def to_dict(self) -> Dict[str, Any]:
        """Return the group with one subcommand entry per child."""
        builder = CommandBuilder(self.name, self.description)

        for subcommand in self.subcommands.values():
            builder.add_subcommand(subcommand.build(subcommand=True))

        return builder.to_dict()

    def get_subcommand_list(self) -> List[Dict[str, str]]:
        """Names and descriptions of the children, for help output."""
        return [
            {"name": subcommand.name, "description": subcommand.description}
            for subcommand in self.subcommands.values()
        ]

    def set_logger(self, logger: BotLogger) -> None:
        self.logger = logger
        for subcommand in self.subcommands.values():
            subcommand.set_logger(logger)

    def set_cooldown_tracker(self, tracker: CooldownTracker) -> None:
        self.cooldowns = tracker
        for subcommand in self.subcommands.values():
            subcommand.set_cooldown_tracker(tracker)

    def log(self, message: str, level: str, scope: str, to_console: bool = False) -> None:
        log_scoped(self.logger, message, level, scope, to_console)

    def __repr__(self) -> str:
        return f"<SubcommandGroup name={self.name!r} subcommands={list(self.subcommands)!r}>"
