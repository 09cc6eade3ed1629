"""
Interaction Utilities
Helper functions for replying to Discord interactions
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, List, Optional

import discord
from discord.utils import MISSING

from dc_toolbox.utils.errors import InteractionError

# Discord stops accepting a first response shortly after the interaction is created
REPLY_WINDOW = timedelta(minutes=3)

SUBCOMMAND_TYPE = discord.AppCommandOptionType.subcommand.value

# Shown when a handler fails, so no error details reach the user
GENERIC_ERROR_MESSAGE = "An unexpected error occurred."


@dataclass
class ReplyPayload:
    """Fields of a reply or edit. Fields left as MISSING are not sent."""

    content: Any = MISSING
    embeds: Any = MISSING
    view: Any = MISSING
    files: Any = MISSING
    ephemeral: bool = False

    def to_kwargs(self, allow_ephemeral: bool = True) -> Dict[str, Any]:
        kwargs = {
            name: value
            for name, value in (
                ("content", self.content),
                ("embeds", self.embeds),
                ("view", self.view),
                ("files", self.files),
            )
            if value is not MISSING
        }
        if allow_ephemeral and self.ephemeral:
            kwargs["ephemeral"] = True
        return kwargs


class InteractionUtils:
    """Utility class for answering interactions."""

    @staticmethod
    def ensure_fresh(interaction: Any) -> None:
        """
        Raise if the interaction is too old to answer.

        Args:
            interaction: Discord interaction

        Raises:
            InteractionError: With reason "expired"
        """
        created_at = getattr(interaction, "created_at", None)
        if created_at is None:
            return
        if discord.utils.utcnow() - created_at > REPLY_WINDOW:
            raise InteractionError(
                "Interaction is older than 3 minutes",
                getattr(interaction, "id", None),
                InteractionError.EXPIRED,
            )

    @staticmethod
    async def safe_reply(
        interaction: Any,
        content: str = "",
        ephemeral: bool = False,
        embeds: Optional[List[discord.Embed]] = None,
        view: Optional[discord.ui.View] = None,
        files: Optional[List[discord.File]] = None,
    ) -> Any:
        """
        Reply to an interaction, or follow up if it was already answered.

        Args:
            interaction: Discord interaction
            content: Message content
            ephemeral: Only show the reply to the invoking user
            embeds: Optional embeds
            view: Optional view with components
            files: Optional attachments

        Returns:
            The message that was sent

        Raises:
            InteractionError: "expired" if the interaction is too old,
                "failed" if Discord rejected the reply
        """
        InteractionUtils.ensure_fresh(interaction)

        payload = ReplyPayload(
            content=content or MISSING,
            embeds=embeds if embeds else MISSING,
            view=view if view is not None else MISSING,
            files=files if files else MISSING,
            ephemeral=ephemeral,
        )

        try:
            if not interaction.response.is_done():
                await interaction.response.send_message(**payload.to_kwargs())
                return await interaction.original_response()
            return await interaction.followup.send(wait=True, **payload.to_kwargs())
        except discord.DiscordException as err:
            raise InteractionError(
                f"Failed to reply to interaction: {err}",
                interaction.id,
                InteractionError.FAILED,
            ) from err

    @staticmethod
    async def safe_edit(
        interaction: Any,
        content: Any = MISSING,
        embeds: Any = MISSING,
        view: Any = MISSING,
    ) -> Any:
        """
        Edit the original response of an interaction.

        Pass ``view=None`` to remove every component from the message.

        Raises:
            InteractionError: "expired" or "failed"
        """
        InteractionUtils.ensure_fresh(interaction)

        payload = ReplyPayload(content=content, embeds=embeds, view=view)

        try:
            return await interaction.edit_original_response(
                **payload.to_kwargs(allow_ephemeral=False)
            )
        except discord.DiscordException as err:
            raise InteractionError(
                f"Failed to edit interaction: {err}",
                interaction.id,
                InteractionError.FAILED,
            ) from err

    @staticmethod
    async def safe_update(
        interaction: Any,
        content: Any = MISSING,
        embeds: Any = MISSING,
        view: Any = MISSING,
    ) -> None:
        """
        Update the message a component interaction came from.

        Raises:
            InteractionError: "failed" if Discord rejected the update
        """
        payload = ReplyPayload(content=content, embeds=embeds, view=view)

        try:
            await interaction.response.edit_message(**payload.to_kwargs(allow_ephemeral=False))
        except discord.DiscordException as err:
            raise InteractionError(
                f"Failed to update interaction: {err}",
                interaction.id,
                InteractionError.FAILED,
            ) from err

    @staticmethod
    async def safe_defer(interaction: Any) -> None:
        """
        Acknowledge a component interaction without changing the message.

        Does nothing if the interaction was already answered.

        Raises:
            InteractionError: "failed" if Discord rejected the acknowledgement
        """
        if interaction.response.is_done():
            return

        try:
            await interaction.response.defer()
        except discord.DiscordException as err:
            raise InteractionError(
                f"Failed to acknowledge interaction: {err}",
                interaction.id,
                InteractionError.FAILED,
            ) from err

    @staticmethod
    async def reply_generic_error(interaction: Any) -> Optional[InteractionError]:
        """
        Tell the user their request failed.

        Returns:
            None if the reply was sent, otherwise the InteractionError describing
            why it could not be delivered
        """
        try:
            await InteractionUtils.safe_reply(interaction, GENERIC_ERROR_MESSAGE)
        except InteractionError as err:
            return err
        return None

    @staticmethod
    def get_subcommand_name(interaction: Any) -> Optional[str]:
        """Return the subcommand an application command was invoked with, if any."""
        data = getattr(interaction, "data", None) or {}
        for option in data.get("options") or []:
            if option.get("type") == SUBCOMMAND_TYPE:
                return option.get("name")
        return None

    @staticmethod
    def get_option(interaction: Any, name: str, default: Any = None) -> Any:
        """
        Get an option value, looking inside the invoked subcommand as well.

        Args:
            interaction: Application command interaction
            name: Option name
            default: Value returned when the option was not given

        Returns:
            The raw option value
        """
        data = getattr(interaction, "data", None) or {}
        options = list(data.get("options") or [])

        while options:
            option = options.pop(0)
            if option.get("type") == SUBCOMMAND_TYPE:
                options.extend(option.get("options") or [])
                continue
            if option.get("name") == name:
                return option.get("value", default)

        return default

    @staticmethod
    def get_custom_id(interaction: Any) -> Optional[str]:
        """Return the custom id of a component or modal interaction."""
        data = getattr(interaction, "data", None) or {}
        return data.get("custom_id")
