"""
Discord client setup using discord.py.
"""

import logging
import sys
from dataclasses import dataclass, field, fields
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

import discord

from dc_toolbox.bot.config import Config, config
from dc_toolbox.commands.command_manager import CommandManager
from dc_toolbox.managers.modal_manager import ModalManager
from dc_toolbox.utils.error_handler import ErrorHandler
from dc_toolbox.utils.interactions import InteractionUtils
from dc_toolbox.utils.logger import BotLogger, get_logger, log_scoped

logger = get_logger("Client")

EventCallback = Callable[..., Awaitable[Any]]


@dataclass
class EventHandlers:
    """
    Gateway events the bot subscribes to.

    Only slots that are set get subscribed. Leaving ``on_interaction`` empty
    routes slash commands to the CommandManager and modal submissions to the
    ModalManager.
    """

    on_message: Optional[EventCallback] = None
    on_interaction: Optional[EventCallback] = None
    on_reaction_add: Optional[EventCallback] = None
    on_reaction_remove: Optional[EventCallback] = None
    on_message_delete: Optional[EventCallback] = None
    # Any other gateway event, e.g. {"member_join": callback}
    extra: Dict[str, EventCallback] = field(default_factory=dict)

    def enabled(self) -> Dict[str, EventCallback]:
        """Event name -> callback, for the slots that are set and the extra events."""
        subscribed = {
            slot.name: getattr(self, slot.name)
            for slot in fields(self)
            if slot.name != "extra" and getattr(self, slot.name) is not None
        }
        for event, callback in self.extra.items():
            subscribed[event_attribute(event)] = callback
        return subscribed


def event_attribute(event: str) -> str:
    """Client attribute discord.py dispatches an event to, e.g. "member_join" -> "on_member_join"."""
    return event if event.startswith("on_") else f"on_{event}"


class DiscordHandler(discord.Client):
    """Discord client that routes interactions into the toolbox."""

    def __init__(
        self,
        command_manager: CommandManager,
        modal_manager: Optional[ModalManager] = None,
        handlers: Optional[EventHandlers] = None,
        bot_logger: Optional[BotLogger] = None,
        dev_guild_id: Optional[int] = None,
        intents: Optional[discord.Intents] = None,
    ):
        super().__init__(intents=intents or discord.Intents.default())

        self.command_manager = command_manager
        self.modal_manager = modal_manager
        self.handlers = handlers or EventHandlers()
        self.bot_logger = bot_logger
        self.dev_guild_id = dev_guild_id
        self.error_handler = ErrorHandler(bot_logger)

        self._install_handlers()

    def _install_handlers(self) -> None:
        """Subscribe the configured event callbacks."""
        subscribed = self.handlers.enabled()
        if "on_interaction" not in subscribed:
            subscribed["on_interaction"] = self.route_interaction

        for event, callback in subscribed.items():
            # discord.Client dispatches events to attributes named on_<event>
            setattr(self, event, callback)
            logger.debug(f"Subscribed to {event}")

    def register_custom_handler(self, event: str, callback: EventCallback) -> None:
        """
        Subscribe a callback to any gateway event after the client was created.

        Args:
            event: Event name, with or without the "on_" prefix
            callback: Coroutine function receiving the event's arguments
        """
        event = event_attribute(event)
        setattr(self, event, callback)
        log_scoped(self.bot_logger, f"Registered custom handler for event: {event}", "info", "handler")

    def register_custom_handlers(self, handlers: Mapping[str, EventCallback]) -> None:
        for event, callback in handlers.items():
            self.register_custom_handler(event, callback)

    async def route_interaction(self, interaction: discord.Interaction) -> None:
        """Send slash commands and modal submissions to their registries."""
        if interaction.type == discord.InteractionType.application_command:
            name = (interaction.data or {}).get("name", "")
            await self.command_manager.dispatch(name, interaction, self)
        elif interaction.type == discord.InteractionType.modal_submit and self.modal_manager:
            custom_id = InteractionUtils.get_custom_id(interaction) or ""
            # Modals built as discord.ui.Modal subclasses handle themselves
            if self.modal_manager.has(custom_id):
                await self.modal_manager.dispatch(interaction)

    async def setup_hook(self) -> None:
        """Register the slash commands with Discord."""
        payload = self.command_manager.to_descriptor_list()

        if self.dev_guild_id:
            await self.http.bulk_upsert_guild_commands(self.application_id, self.dev_guild_id, payload)
            logger.info(f"Synced {len(payload)} commands to guild {self.dev_guild_id}")
        else:
            await self.http.bulk_upsert_global_commands(self.application_id, payload)
            logger.info(f"Synced {len(payload)} commands globally")

    async def on_ready(self) -> None:
        logger.info(f"Logged in as: {self.user}")

    async def on_error(self, event_method: str, /, *args: Any, **kwargs: Any) -> None:
        error = sys.exc_info()[1]
        if error is not None:
            self.error_handler.handle_exception(error, event_method)

    async def close(self) -> None:
        logger.info("Shutting down bot...")
        await super().close()


def create_bot(
    command_manager: CommandManager,
    modal_manager: Optional[ModalManager] = None,
    handlers: Optional[EventHandlers] = None,
    settings: Config = config,
) -> DiscordHandler:
    """Create the bot with logging configured from settings."""
    bot_logger = BotLogger(
        log_dir=settings.LOG_DIR,
        log_file=settings.LOG_FILE or None,
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
    )

    command_manager.dev = settings.is_dev
    command_manager.set_logger(bot_logger)
    if modal_manager:
        modal_manager.set_logger(bot_logger)

    return DiscordHandler(
        command_manager,
        modal_manager=modal_manager,
        handlers=handlers,
        bot_logger=bot_logger,
        dev_guild_id=settings.DEV_GUILD_ID,
    )


async def run_bot(
    command_manager: CommandManager,
    modal_manager: Optional[ModalManager] = None,
    handlers: Optional[EventHandlers] = None,
    settings: Config = config,
) -> None:
    """Run the bot until it is closed."""
    settings.validate()

    bot = create_bot(command_manager, modal_manager, handlers, settings)

    async def shutdown(reason: str) -> None:
        if not bot.is_closed():
            await bot.close()

    bot.error_handler.initialize(on_shutdown=shutdown)

    try:
        async with bot:
            await bot.start(settings.DISCORD_TOKEN)
    except Exception as e:
        logger.error(f"Bot error: {e}")
        raise
