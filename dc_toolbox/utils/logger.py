"""
Logging utilities for the toolbox.
Uses Rich for colored console output and an optional log file.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Union

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Custom theme for logging
CUSTOM_THEME = Theme({
    "logging.level.success": "green",
    "logging.level.command": "cyan",
    "logging.level.debug": "dim cyan",
})

console = Console(theme=CUSTOM_THEME)

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def setup_logging(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Set up a logger with RichHandler.

    Args:
        name: Logger name
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO

    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers = []

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger


class LoggerMixin:
    """Mixin class that provides logger functionality."""

    def __init__(self, name: str):
        self._logger = setup_logging(name)

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        self._logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        self._logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        self._logger.warning(message, extra=kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message."""
        self._logger.error(message, extra=kwargs)


class ConsoleMirrorFilter(logging.Filter):
    """Lets a record reach the console only when it asked to be mirrored."""

    def filter(self, record: logging.LogRecord) -> bool:
        return bool(getattr(record, "to_console", False))


class BotLogger:
    """
    Scoped logger handed to commands, groups and the modal registry.

    Every record is written to the log file when one is configured. The
    console only shows records logged with ``to_console=True`` in that case,
    and everything otherwise.

    Extra levels can be added by name, e.g. ``custom_levels={"success": 25}``.
    With ``extend_default_levels=False`` only the custom levels are known,
    unless none are given.
    """

    def __init__(
        self,
        name: str = "dc_toolbox",
        log_dir: Optional[Union[str, Path]] = None,
        log_file: Optional[str] = "latest.log",
        level: int = logging.DEBUG,
        custom_levels: Optional[Dict[str, int]] = None,
        extend_default_levels: bool = True,
    ):
        self.name = name
        self.level = level
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        for handler in self._logger.handlers:
            handler.close()
        self._logger.handlers = []
        self.log_path: Optional[Path] = None

        custom_levels = {key.lower(): value for key, value in (custom_levels or {}).items()}
        if extend_default_levels:
            self.levels = {**LEVELS, **custom_levels}
        else:
            self.levels = custom_levels or dict(LEVELS)
        for level_name, value in custom_levels.items():
            logging.addLevelName(value, level_name.upper())

        console_handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
        )
        console_handler.setFormatter(logging.Formatter(fmt="[%(scope)s] %(message)s"))

        if log_dir is not None and log_file:
            self.log_path = Path(log_dir) / log_file
            self.log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(self.log_path, encoding="utf-8")
            file_handler.setFormatter(logging.Formatter(
                fmt="[%(asctime)s] [%(levelname)s] [%(scope)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            ))
            self._logger.addHandler(file_handler)
            console_handler.addFilter(ConsoleMirrorFilter())

        self._logger.addHandler(console_handler)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def log(
        self,
        message: str,
        level: str = "info",
        scope: str = "general",
        to_console: bool = False,
    ) -> None:
        """
        Log a message.

        Args:
            message: Text to log
            level: Level name, default or custom; unknown names log as info
            scope: Area of the bot the record belongs to
            to_console: Mirror the record to the console when a log file is in use
        """
        self._logger.log(
            self.levels.get(level.lower(), logging.INFO),
            message,
            extra={"scope": scope, "to_console": to_console},
        )

    def debug(self, message: str, scope: str = "general", to_console: bool = False) -> None:
        self.log(message, "debug", scope, to_console)

    def info(self, message: str, scope: str = "general", to_console: bool = False) -> None:
        self.log(message, "info", scope, to_console)

    def warn(self, message: str, scope: str = "general", to_console: bool = False) -> None:
        self.log(message, "warn", scope, to_console)

    def error(self, message: str, scope: str = "general", to_console: bool = True) -> None:
        self.log(message, "error", scope, to_console)

    def get_available_levels(self) -> Dict[str, int]:
        return dict(self.levels)

    def get_log_file_path(self) -> Optional[Path]:
        return self.log_path

    def clear_log(self) -> None:
        """Empty the current log file. Does nothing without a log file."""
        if self.log_path is None:
            return
        for handler in self._logger.handlers:
            handler.flush()
        self.log_path.write_text("", encoding="utf-8")

    def rotate(self) -> "BotLogger":
        """
        Start a new timestamped log file next to the current one.

        The old file is kept. The returned logger replaces this one, which
        stops writing to the old file.

        Raises:
            ValueError: If this logger has no log file
        """
        if self.log_path is None:
            raise ValueError("Cannot rotate a logger without a log file")

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H-%M-%S")
        return BotLogger(
            name=self.name,
            log_dir=self.log_path.parent,
            log_file=f"log-{timestamp}.log",
            level=self.level,
            custom_levels=self.levels,
            extend_default_levels=False,
        )


# Convenience function
def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return setup_logging(name)


def log_scoped(
    logger: Optional[BotLogger],
    message: str,
    level: str,
    scope: str,
    to_console: bool = False,
) -> None:
    """Log through a BotLogger, or the plain ``dc_toolbox`` logger when none is attached."""
    if logger:
        logger.log(message, level, scope, to_console)
    else:
        logging.getLogger("dc_toolbox").log(
            LEVELS.get(level.lower(), logging.INFO),
            f"[{scope}] {message}",
            extra={"scope": scope, "to_console": to_console},
        )
