"""
Utility modules for the toolbox.
"""

from .logger import BotLogger, get_logger, setup_logging
from .errors import (
    CommandNotFoundError,
    InteractionError,
    ModalNotFoundError,
    ToolboxError,
    UnknownSubcommandError,
)
from .interactions import InteractionUtils
from .permissions import PermissionLevel, resolve_permissions
from .error_handler import ErrorHandler

__all__ = [
    "BotLogger",
    "get_logger",
    "setup_logging",
    "ToolboxError",
    "InteractionError",
    "CommandNotFoundError",
    "UnknownSubcommandError",
    "ModalNotFoundError",
    "InteractionUtils",
    "PermissionLevel",
    "resolve_permissions",
    "ErrorHandler",
]
