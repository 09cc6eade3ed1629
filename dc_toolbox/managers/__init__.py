"""
Stateful managers: cooldowns, paginated browsers and modals.
"""

from .base_manager import BaseManager
from .cooldown_tracker import CooldownTracker
from .pagination import CustomButtonResult, PaginatedBrowser
from .modal_manager import ModalDefinition, ModalField, ModalManager

__all__ = [
    "BaseManager",
    "CooldownTracker",
    "CustomButtonResult",
    "PaginatedBrowser",
    "ModalDefinition",
    "ModalField",
    "ModalManager",
]
