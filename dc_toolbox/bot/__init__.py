"""
Bot client and configuration.
"""

from .config import Config, config
from .client import DiscordHandler, EventHandlers, create_bot, run_bot

__all__ = ["Config", "config", "DiscordHandler", "EventHandlers", "create_bot", "run_bot"]
