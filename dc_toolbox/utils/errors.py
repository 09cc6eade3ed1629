"""
Error types raised by the toolbox.
"""

from typing import Optional


class ToolboxError(Exception):
    """Base class for toolbox errors."""


class InteractionError(ToolboxError):
    """
    A reply to an interaction could not be delivered.

    ``reason`` is ``"expired"`` when the interaction was too old to answer and
    ``"failed"`` when the attempt itself was rejected.
    """

    EXPIRED = "expired"
    FAILED = "failed"

    def __init__(self, message: str, interaction_id: Optional[int], reason: str):
        super().__init__(message)
        self.message = message
        self.interaction_id = interaction_id
        self.reason = reason

    def __repr__(self) -> str:
        return (
            f"InteractionError(message={self.message!r}, "
            f"interaction_id={self.interaction_id!r}, reason={self.reason!r})"
        )


class CommandNotFoundError(ToolboxError, LookupError):
    """No command is registered under the dispatched name."""

    def __init__(self, name: str):
        super().__init__(f"Command not found: {name}")
        self.name = name


class UnknownSubcommandError(ToolboxError, LookupError):
    """A subcommand group received a subcommand it does not own."""

    def __init__(self, group: str, name: Optional[str]):
        super().__init__(f"Unknown subcommand: {name}")
        self.group = group
        self.name = name


class ModalNotFoundError(ToolboxError, LookupError):
    """No modal definition matches the submitted custom id."""

    def __init__(self, modal_id: str):
        super().__init__(f"Modal not found: {modal_id}")
        self.modal_id = modal_id
