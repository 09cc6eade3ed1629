"""
Cooldown Tracker
Handles per-user command cooldown tracking
"""

import time
from typing import Callable, Dict, Optional

from dc_toolbox.utils.logger import get_logger


def monotonic_ms() -> int:
    """Current monotonic time in milliseconds."""
    return int(time.monotonic() * 1000)


class CooldownTracker:
    """
    In-memory cooldown store keyed by command name, then user id.

    None of the methods await, so a check and the reservation that follows it
    happen without another task running in between.
    """

    def __init__(self, clock: Callable[[], int] = monotonic_ms):
        self.logger = get_logger("Cooldown")
        self.clock = clock
        # command name -> user id -> time (ms) the command can be used again
        self.tracker: Dict[str, Dict[str, int]] = {}

    def check_and_reserve(
        self,
        command_name: str,
        cooldown_ms: Optional[int],
        user_id: str,
    ) -> int:
        """
        Check whether a user may run a command and reserve the cooldown if so.

        Args:
            command_name: Command name
            cooldown_ms: Command cooldown in milliseconds, falsy for none
            user_id: Invoking user ID

        Returns:
            Milliseconds the user still has to wait (0 if allowed)
        """
        if not cooldown_ms:
            return 0

        now = self.clock()
        user_id = str(user_id)
        cooldowns = self.tracker.setdefault(command_name, {})

        self._purge_expired(cooldowns, now)

        available_at = cooldowns.get(user_id)
        if available_at is not None and now < available_at:
            return available_at - now

        cooldowns[user_id] = now + cooldown_ms
        return 0

    def get_remaining_time(self, command_name: str, user_id: str) -> int:
        """
        Get remaining cooldown time in milliseconds.

        Args:
            command_name: Command name
            user_id: User ID

        Returns:
            Remaining milliseconds (0 if not on cooldown)
        """
        available_at = self.tracker.get(command_name, {}).get(str(user_id))
        if available_at is None:
            return 0
        return max(0, available_at - self.clock())

    def is_on_cooldown(self, command_name: str, user_id: str) -> bool:
        """Check if user is on cooldown for a command."""
        return self.get_remaining_time(command_name, user_id) > 0

    def clear_cooldown(self, command_name: str, user_id: str) -> bool:
        """
        Clear cooldown for user and command.

        Returns:
            True if a cooldown was cleared
        """
        cooldowns = self.tracker.get(command_name)
        if not cooldowns:
            return False
        return cooldowns.pop(str(user_id), None) is not None

    def clear_user_cooldowns(self, user_id: str) -> int:
        """
        Clear all cooldowns for a user.

        Returns:
            Number of cleared cooldowns
        """
        user_id = str(user_id)
        cleared = 0
        for cooldowns in self.tracker.values():
            if cooldowns.pop(user_id, None) is not None:
                cleared += 1
        return cleared

    def clear_expired(self) -> int:
        """
        Clear all expired cooldowns.

        Returns:
            Number of cleared cooldowns
        """
        now = self.clock()
        cleared = sum(self._purge_expired(cooldowns, now) for cooldowns in self.tracker.values())
        if cleared:
            self.logger.debug(f"Cleared {cleared} expired cooldowns")
        return cleared

    def clear(self) -> None:
        """Forget every cooldown."""
        self.tracker.clear()

    @staticmethod
    def _purge_expired(cooldowns: Dict[str, int], now: int) -> int:
        expired = [user_id for user_id, available_at in cooldowns.items() if available_at <= now]
        for user_id in expired:
            del cooldowns[user_id]
        return len(expired)

