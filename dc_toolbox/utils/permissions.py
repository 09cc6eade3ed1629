"""
Permission Utilities
Maps a command's permission level to Discord's default member permissions
"""

from enum import Enum
from typing import List, Optional, Union

import discord

# Discord permission bitfields are 64 bits wide
PERMISSION_MASK = (1 << 64) - 1


class PermissionLevel(str, Enum):
    """Named permission levels a command can require."""

    ADMIN = "admin"
    OWNER = "owner"
    DISABLED = "disabled"
    USER = "user"


PermissionLike = Union[PermissionLevel, str, int, List[str], None]


def resolve_permissions(level: PermissionLike) -> Optional[int]:
    """
    Return the default member permission bits for a permission level.

    Args:
        level: A PermissionLevel, a raw bitfield, or a list of
            ``discord.Permissions`` flag names such as ``["manage_guild"]``

    Returns:
        The permission bits, or None when the command is unrestricted
    """
    if level == PermissionLevel.ADMIN:
        return discord.Permissions.administrator.flag

    # Nobody but an operator override can use these
    if level in (PermissionLevel.OWNER, PermissionLevel.DISABLED):
        return 0

    if isinstance(level, int) and not isinstance(level, bool):
        return level & PERMISSION_MASK

    if isinstance(level, (list, tuple)):
        return discord.Permissions(**{flag: True for flag in level}).value

    return None
