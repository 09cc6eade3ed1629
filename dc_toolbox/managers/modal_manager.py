"""
Modal Manager
Registers modal dialogs and routes their submissions to handlers
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

import discord

from dc_toolbox.utils.errors import ModalNotFoundError
from dc_toolbox.utils.interactions import InteractionUtils
from dc_toolbox.utils.logger import BotLogger, get_logger, log_scoped

# Dynamic modal ids look like "<base id><separator><instance data>"
ID_SEPARATOR = ":"

SubmitHandler = Callable[[Any], Awaitable[Any]]


@dataclass
class ModalField:
    """A text input inside a modal."""

    custom_id: str
    label: str
    style: discord.TextStyle = discord.TextStyle.short
    placeholder: Optional[str] = None
    required: bool = True
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    value: Optional[str] = None


@dataclass
class ModalDefinition:
    """
    A modal dialog and its submit handler.

    ``ephemeral`` modals are tied to data from when they were created (a
    user, a record id, ...) and are removed from the registry once submitted.
    """

    id: str
    title: str
    on_submit: SubmitHandler
    fields: List[ModalField] = field(default_factory=list)
    ephemeral: bool = False


class ModalManager:
    """
    Registry of modal definitions keyed by modal id.

    Lookups try the exact id first and then the part before the first ``:``,
    so one definition such as ``edit-reminder`` can serve ``edit-reminder:123``.
    """

    def __init__(self):
        self.logger = get_logger("ModalManager")
        self.modals: Dict[str, ModalDefinition] = {}
        self.bot_logger: Optional[BotLogger] = None

    def build(self, definition: ModalDefinition, modal_id: Optional[str] = None) -> discord.ui.Modal:
        """
        Build the dialog for a definition without registering anything.

        Args:
            definition: Modal to show
            modal_id: Custom id for this instance, e.g. "feedback:123". The
                registered base id still handles its submission.

        Returns:
            A modal ready for ``interaction.response.send_modal``
        """
        modal = discord.ui.Modal(title=definition.title, custom_id=modal_id or definition.id)

        for modal_field in definition.fields:
            modal.add_item(discord.ui.TextInput(
                label=modal_field.label,
                custom_id=modal_field.custom_id,
                style=modal_field.style,
                placeholder=modal_field.placeholder,
                required=modal_field.required,
                min_length=modal_field.min_length,
                max_length=modal_field.max_length,
                default=modal_field.value,
            ))

        return modal

    def build_and_register(self, definition: ModalDefinition) -> discord.ui.Modal:
        """Register a modal and build the dialog to show the user."""
        self.register(definition)
        return self.build(definition)

    def register(self, definition: ModalDefinition) -> None:
        """Register a definition without building a dialog."""
        self.modals[definition.id] = definition
        self.logger.debug(f"Registered modal: {definition.id}")

    def get(self, modal_id: str) -> Optional[ModalDefinition]:
        """
        Get a modal by id, falling back to its base id for dynamic ids.

        Args:
            modal_id: Modal custom id, e.g. "edit-reminder:123"

        Returns:
            The definition, or None if not found
        """
        match = self._lookup(modal_id)
        return match[1] if match else None

    def has(self, modal_id: str) -> bool:
        return self._lookup(modal_id) is not None

    def remove(self, modal_id: str) -> bool:
        """
        Remove a modal from the registry.

        Returns:
            True if the modal was registered
        """
        return self.modals.pop(modal_id, None) is not None

    def clear(self) -> None:
        self.modals.clear()

    @property
    def size(self) -> int:
        return len(self.modals)

    def get_modal_ids(self) -> List[str]:
        return list(self.modals.keys())

    async def dispatch(self, interaction: Any) -> None:
        """
        Call the submit handler of the modal an interaction came from.

        Ephemeral modals are removed before their handler runs, so a
        duplicate submission of the same dialog finds nothing.

        Raises:
            ModalNotFoundError: If no registered modal matches
        """
        modal_id = InteractionUtils.get_custom_id(interaction) or ""
        match = self._lookup(modal_id)

        if not match:
            raise ModalNotFoundError(modal_id)

        key, definition = match
        if definition.ephemeral:
            del self.modals[key]

        scope = f"{definition.id}_MODAL"
        try:
            await definition.on_submit(interaction)
        except Exception as err:
            self.log(f"An Error occurred: {err}", "error", scope, True)
            failure = await InteractionUtils.reply_generic_error(interaction)
            if failure:
                self.log(f"Could not report error to user: {failure}", "warn", scope)
            return

        self.log(f"{modal_id} modal submitted", "info", scope)

    def set_logger(self, logger: BotLogger) -> "ModalManager":
        self.bot_logger = logger
        return self

    def log(self, message: str, level: str, scope: str, to_console: bool = False) -> None:
        log_scoped(self.bot_logger, message, level, scope, to_console)

    def _lookup(self, modal_id: str) -> Optional[Tuple[str, ModalDefinition]]:
        definition = self.modals.get(modal_id)
        if definition:
            return modal_id, definition

        base_id = modal_id.split(ID_SEPARATOR, 1)[0]
        definition = self.modals.get(base_id)
        if definition:
            return base_id, definition

        return None
