"""
Paginated Browser
Button-driven paging through a list of items in a single message
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, List, Optional, Sequence, TypeVar, Union

import discord

from dc_toolbox.managers.base_manager import BaseManager
from dc_toolbox.utils.embeds import create_pagination_buttons
from dc_toolbox.utils.errors import InteractionError
from dc_toolbox.utils.formatting import Times
from dc_toolbox.utils.interactions import InteractionUtils

T = TypeVar("T")

PREV_ACTION = "prev"
NEXT_ACTION = "next"
# Handled custom actions with this id never re-render the page
DELETE_ACTION = "delete"

NOT_OWNER_MESSAGE = "You cannot use this button."

DEFAULT_TIMEOUT_MS = 2 * Times.MINUTE


@dataclass
class CustomButtonResult(Generic[T]):
    """
    Outcome of a custom button handler.

    Attributes:
        handled: False lets the click fall through to prev/next handling
        new_items: Replacement item list; an empty list ends the session
        stop: End the session after handling the click
    """

    handled: bool
    new_items: Optional[List[T]] = None
    stop: bool = False


RenderFunction = Callable[[T, int, int], Union[discord.Embed, Sequence[discord.Embed]]]
CustomButtonHandler = Callable[[str, int, List[T]], Awaitable[CustomButtonResult]]


class BrowserView(discord.ui.View):
    """View holding the browser's buttons. Its lifetime is managed by the browser."""

    def __init__(self, browser: "PaginatedBrowser"):
        super().__init__(timeout=None)
        self.browser = browser

    async def on_error(self, interaction: discord.Interaction, error: Exception, item: discord.ui.Item) -> None:
        self.browser.error(f"Pagination button {getattr(item, 'custom_id', None)} failed: {error}")


class PaginatedBrowser(BaseManager, Generic[T]):
    """
    Shows one item at a time with prev/next buttons, plus optional extra buttons.

    Only the user who started the interaction can use the buttons. The session
    ends when its timer runs out, when a custom handler empties the item list
    or asks to stop, or when ``stop`` is called. Ending removes the buttons
    from the message.

    Example:
        browser = PaginatedBrowser(
            interaction,
            reminders,
            lambda reminder, index, total: [reminder_embed(reminder, index, total)],
        )
        await browser.start()
    """

    def __init__(
        self,
        interaction: Any,
        items: Sequence[T],
        build_embeds: RenderFunction,
        extra_buttons: Optional[Sequence[discord.ui.Button]] = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        on_custom_button: Optional[CustomButtonHandler] = None,
    ):
        super().__init__("Pagination")
        self.interaction = interaction
        self.owner_id = interaction.user.id
        self.build_embeds = build_embeds
        self.extra_buttons = list(extra_buttons or [])
        self.timeout_ms = timeout_ms
        self.on_custom_button = on_custom_button

        self._items: List[T] = list(items)
        self._index = 0
        self._active = False
        self._ended = False
        self.view: Optional[BrowserView] = None
        self._prev_button: Optional[discord.ui.Button] = None
        self._next_button: Optional[discord.ui.Button] = None

    @property
    def index(self) -> int:
        return self._index

    @property
    def items(self) -> List[T]:
        return self._items

    @property
    def is_active(self) -> bool:
        return self._active

    async def start(self) -> None:
        """
        Send the first page and start listening for clicks.

        Raises:
            ValueError: If there are no items to show
            InteractionError: If the reply could not be sent
        """
        if not self._items:
            raise ValueError("PaginatedBrowser needs at least one item")

        self.view = self.build_view()
        await InteractionUtils.safe_reply(self.interaction, embeds=self.render(), view=self.view)

        self._active = True
        self.set_managed_timer("expiry", self._expire, self.timeout_ms)

    def build_view(self) -> BrowserView:
        """Create the view: prev, extra buttons, next."""
        view = BrowserView(self)
        self._prev_button, self._next_button = create_pagination_buttons(self._index, len(self._items))

        for button in [self._prev_button, *self.extra_buttons, self._next_button]:
            self._bind(button)
            view.add_item(button)

        return view

    def render(self) -> List[discord.Embed]:
        return self._render_page(self._items, self._index)

    def _render_page(self, items: List[T], index: int) -> List[discord.Embed]:
        result = self.build_embeds(items[index], index, len(items))
        if isinstance(result, discord.Embed):
            return [result]
        return list(result)

    async def handle_click(self, interaction: Any, action: str) -> None:
        """
        Handle a button click on the browser's message.

        Nothing the custom handler or the render function raises escapes;
        the user gets the generic error reply and the page stays as it was.

        Args:
            interaction: Button interaction
            action: Custom id of the clicked button
        """
        if not self._active:
            return

        if interaction.user.id != self.owner_id:
            await InteractionUtils.safe_reply(interaction, NOT_OWNER_MESSAGE, ephemeral=True)
            return

        # Custom buttons get the first chance at every click
        if self.on_custom_button:
            try:
                result = await self.on_custom_button(action, self._index, self._items)
            except Exception as err:
                await self._report_error(interaction, f"Custom button {action} error: {err}")
                return

            # The session can end while the handler runs
            if not self._active:
                await self._acknowledge(interaction)
                return

            if result and result.handled:
                await self._apply_custom_result(interaction, action, result)
                return

        if action == PREV_ACTION:
            index = max(0, self._index - 1)
        elif action == NEXT_ACTION:
            index = min(len(self._items) - 1, self._index + 1)
        else:
            await self._acknowledge(interaction)
            return

        await self._show(interaction, index, self._items)

    async def _apply_custom_result(self, interaction: Any, action: str, result: CustomButtonResult) -> None:
        items = self._items if result.new_items is None else list(result.new_items)
        index = max(0, min(self._index, len(items) - 1))

        if not items or result.stop:
            self._items, self._index = items, index
            await self.end(interaction)
            return

        if action == DELETE_ACTION:
            self._items, self._index = items, index
            return

        await self._show(interaction, index, items)

    async def _show(self, interaction: Any, index: int, items: List[T]) -> None:
        """Render a page and switch to it only if rendering succeeded."""
        if self._ended:
            return

        try:
            embeds = self._render_page(items, index)
        except Exception as err:
            await self._report_error(interaction, f"Rendering page {index + 1} failed: {err}")
            return

        self._items, self._index = items, index
        self._refresh_buttons()
        await InteractionUtils.safe_update(interaction, embeds=embeds, view=self.view)

    async def _report_error(self, interaction: Any, message: str) -> None:
        self.error(message, to_console=True)
        failure = await InteractionUtils.reply_generic_error(interaction)
        if failure:
            self.error(f"Could not report error to user: {failure}")

    async def _acknowledge(self, interaction: Any) -> None:
        try:
            await InteractionUtils.safe_defer(interaction)
        except InteractionError as err:
            self.error(str(err))

    def _refresh_buttons(self) -> None:
        if self._prev_button is not None:
            self._prev_button.disabled = self._index == 0
        if self._next_button is not None:
            self._next_button.disabled = self._index >= len(self._items) - 1

    def _bind(self, button: discord.ui.Button) -> None:
        async def callback(interaction: discord.Interaction) -> None:
            await self.handle_click(interaction, button.custom_id)

        button.callback = callback

    def _deactivate(self) -> bool:
        """Stop listening for clicks. Returns False if the session already ended."""
        if self._ended:
            return False

        self._ended = True
        self._active = False
        self.clear_all_timers()
        if self.view is not None:
            self.view.stop()
        return True

    async def end(self, interaction: Optional[Any] = None) -> None:
        """
        End the session and remove the buttons from the message.

        When called while handling a click, the click is answered by the same
        edit.

        Raises:
            InteractionError: If the buttons could not be removed
        """
        if not self._deactivate():
            return

        if interaction is not None and not interaction.response.is_done():
            await InteractionUtils.safe_update(interaction, view=None)
        else:
            await self._clear_controls()

    def stop(self) -> Optional[asyncio.Task]:
        """
        End the session immediately.

        Clicks are ignored from the moment this returns; removing the buttons
        from the message happens in the returned task.
        """
        if not self._deactivate():
            return None
        return asyncio.create_task(self._clear_controls_logged())

    async def _expire(self) -> None:
        self.debug("Pagination session expired")
        if not self._deactivate():
            return
        await self._clear_controls_logged()

    async def _clear_controls(self) -> None:
        # The webhook token outlives the reply window, so no freshness check here
        try:
            await self.interaction.edit_original_response(view=None)
        except discord.DiscordException as err:
            raise InteractionError(
                f"Failed to clear components: {err}",
                self.interaction.id,
                InteractionError.FAILED,
            ) from err

    async def _clear_controls_logged(self) -> None:
        try:
            await self._clear_controls()
        except InteractionError as err:
            self.error(str(err))
