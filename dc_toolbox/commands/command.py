"""
Command
A single slash command with validation, cooldowns and error handling
"""

from typing import Any, Awaitable, Callable, Dict, Optional

from dc_toolbox.commands.builder import CommandBuilder
from dc_toolbox.managers.cooldown_tracker import CooldownTracker
from dc_toolbox.utils.formatting import format_duration
from dc_toolbox.utils.interactions import InteractionUtils
from dc_toolbox.utils.logger import BotLogger, log_scoped
from dc_toolbox.utils.permissions import PermissionLike, resolve_permissions

# Handler signature: (interaction, client) -> awaitable
CommandHandler = Callable[[Any, Any], Awaitable[Any]]
Validator = Callable[[Any], Optional[str]]
Customizer = Callable[[CommandBuilder], Any]

GUILD_ONLY_MESSAGE = "This command can only be used in a server."


class CommandDefinition:
    """Definition of a command."""

    def __init__(
        self,
        name: str,
        description: str = "",
        guild_only: bool = False,
        permission_level: PermissionLike = None,
        cooldown_ms: Optional[int] = None,
    ):
        self.name = name
        self.description = description
        self.guild_only = guild_only
        self.permission_level = permission_level
        self.cooldown_ms = cooldown_ms


class Command:
    """
    Registered slash command with definition and handler.

    ``execute`` is the entry point when the command is invoked. It validates
    the invocation (guild only, cooldown, then the optional ``validator``),
    runs the handler and logs the outcome. Nothing the handler raises escapes
    ``execute``; the user gets a generic error reply instead.

    Args:
        definition: Command metadata
        handler: Coroutine called with ``(interaction, client)``
        customize: Optional function adding options to the command's builder
        validator: Optional function returning an error message to reject
            the invocation, or None to allow it
    """

    def __init__(
        self,
        definition: CommandDefinition,
        handler: CommandHandler,
        customize: Optional[Customizer] = None,
        validator: Optional[Validator] = None,
    ):
        self.definition = definition
        self.handler = handler
        self.customize = customize
        self.validator = validator
        self.logger: Optional[BotLogger] = None
        self.cooldowns = CooldownTracker()

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def description(self) -> str:
        return self.definition.description

    @property
    def guild_only(self) -> bool:
        return self.definition.guild_only

    @property
    def permission_level(self) -> PermissionLike:
        return self.definition.permission_level

    @property
    def cooldown_ms(self) -> Optional[int]:
        return self.definition.cooldown_ms

    def validate(self, interaction: Any) -> Optional[str]:
        """
        Check whether the command can run for this interaction.

        Returns:
            Error message for the user, or None if the command may run
        """
        if self.guild_only and interaction.guild_id is None:
            return GUILD_ONLY_MESSAGE

        remaining = self.cooldowns.check_and_reserve(
            self.name,
            self.cooldown_ms,
            interaction.user.id,
        )
        if remaining > 0:
            return f"You need to wait {format_duration(remaining)} before using this command again."

        return self.additional_validation(interaction)

    def additional_validation(self, interaction: Any) -> Optional[str]:
        """Command-specific checks, run after the built-in ones."""
        if self.validator:
            return self.validator(interaction)
        return None

    async def execute(self, interaction: Any, client: Any) -> bool:
        """
        Validate and run the command.

        Args:
            interaction: Application command interaction
            client: Discord client

        Returns:
            True if the handler ran to completion, False if validation
            rejected the call or the handler raised
        """
        scope = f"{self.name}_EXECUTION"

        try:
            error = self.validate(interaction)
            if error:
                self.log(f"{self.name} rejected: {error}", "debug", scope)
                await InteractionUtils.safe_reply(interaction, error, ephemeral=True)
                return False

            await self.handler(interaction, client)
        except Exception as err:
            self.log(f"An Error occurred: {err}", "error", scope, True)
            failure = await InteractionUtils.reply_generic_error(interaction)
            if failure:
                self.log(f"Could not report error to user: {failure}", "warn", scope)
            return False

        subcommand = InteractionUtils.get_subcommand_name(interaction)
        suffix = f"({subcommand}) " if subcommand else ""
        self.log(f"{self.name} {suffix}command executed", "info", scope)
        return True

    def build(self, subcommand: bool = False) -> CommandBuilder:
        """Create this command's builder, with customizations applied."""
        builder = CommandBuilder(self.name, self.description, subcommand=subcommand)
        if not subcommand:
            builder.set_default_member_permissions(resolve_permissions(self.permission_level))

        if self.customize:
            self.customize(builder)

        return builder

    def to_dict(self) -> Dict[str, Any]:
        """Return the command in Discord's registration JSON format."""
        return self.build().to_dict()

    def set_logger(self, logger: BotLogger) -> None:
        self.logger = logger

    def set_cooldown_tracker(self, tracker: CooldownTracker) -> None:
        self.cooldowns = tracker

    def log(self, message: str, level: str, scope: str, to_console: bool = False) -> None:
        """Log through the attached logger."""
        log_scoped(self.logger, message, level, scope, to_console)

    def __repr__(self) -> str:
        return f"<Command name={self.name!r}>"


def command(
    name: Optional[str] = None,
    description: str = "",
    guild_only: bool = False,
    permission_level: PermissionLike = None,
    cooldown_ms: Optional[int] = None,
    customize: Optional[Customizer] = None,
    validator: Optional[Validator] = None,
) -> Callable[[CommandHandler], Command]:
    """
    Decorator turning a coroutine into a Command.

    The function name and docstring are used when name or description are
    not given.

    Example:
        @command(description="Check bot latency")
        async def ping(interaction, client):
            await InteractionUtils.safe_reply(interaction, "Pong!")
    """
    def decorator(func: CommandHandler) -> Command:
        definition = CommandDefinition(
            name=name or func.__name__,
            description=description or (func.__doc__ or "").strip(),
            guild_only=guild_only,
            permission_level=permission_level,
            cooldown_ms=cooldown_ms,
        )
        return Command(definition, func, customize=customize, validator=validator)

    return decorator
