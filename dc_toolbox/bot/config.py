"""
Configuration management for the toolbox bot.
Loads environment variables and provides configuration settings.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class Config:
    """Bot configuration settings."""

    # Discord
    DISCORD_TOKEN: str

    # Sync commands to this guild only (faster updates while developing)
    DEV_GUILD_ID: Optional[int] = None

    # "dev" logs every command descriptor as it is registered
    ENV: str = "prod"

    # Logging
    LOG_DIR: str = "logs"
    LOG_FILE: str = "latest.log"
    DEBUG: bool = False

    # Interactive UI
    PAGINATION_TIMEOUT_MS: int = 120000
    HELP_PAGE_SIZE: int = 5

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        guild_id = os.getenv("DEV_GUILD_ID", "")
        return cls(
            DISCORD_TOKEN=os.getenv("DISCORD_TOKEN", ""),
            DEV_GUILD_ID=int(guild_id) if guild_id else None,
            ENV=os.getenv("ENV", "prod").lower(),
            LOG_DIR=os.getenv("LOG_DIR", "logs"),
            LOG_FILE=os.getenv("LOG_FILE", "latest.log"),
            DEBUG=os.getenv("DEBUG", "false").lower() == "true",
            PAGINATION_TIMEOUT_MS=int(os.getenv("PAGINATION_TIMEOUT_MS", "120000")),
            HELP_PAGE_SIZE=int(os.getenv("HELP_PAGE_SIZE", "5")),
        )

    @property
    def is_dev(self) -> bool:
        return self.ENV == "dev"

    def validate(self) -> None:
        """Validate required configuration."""
        if not self.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")
        if self.HELP_PAGE_SIZE < 1:
            raise ValueError("HELP_PAGE_SIZE must be at least 1")
        if self.PAGINATION_TIMEOUT_MS < 1:
            raise ValueError("PAGINATION_TIMEOUT_MS must be positive")


# Global config instance
config = Config.from_env()
