"""Unified logging for langtag with CLI output support."""

import json
import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


class LangTagLogger(logging.Logger):
    """
    Logger that combines Python logging with CLI formatting methods.

    Provides the standard logging levels (debug, info, warning, error, critical)
    and semantic CLI output methods (success, rule, key_value, print_dict) used by the
    command line interface to render tags and registry entries.
    """

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        """
        Initialize the langtag logger.

        Args:
            name: Logger name
            level: Initial log level
        """
        super().__init__(name, level)
        self.console = Console()

        handler = RichHandler(
            console=self.console,
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        self.addHandler(handler)

    def print(self, message: str) -> None:
        """
        Print a plain message (with Rich markup support).

        Args:
            message: Message to display
        """
        self.console.print(message)

    def success(self, message: str) -> None:
        """
        Print a result line prefixed with a green checkmark.

        Args:
            message: Message to display
        """
        self.print(f"[green]✓[/green] {message}")

    def rule(self, title: str, style: str = "bold blue") -> None:
        """
        Print a horizontal rule with a title.

        Args:
            title: Title text for the rule
            style: Rich style string (default: "bold blue")
        """
        self.console.rule(f"[{style}]{title}")

    def print_dict(self, data: dict[str, Any]) -> None:
        """
        Print dictionary data as highlighted JSON.

        Args:
            data: Dictionary to display
        """
        self.console.print_json(json.dumps(data, indent=2))

    def key_value(self, key: str, value: Any, key_style: str = "dim") -> None:
        """
        Print a formatted key-value pair such as "script: Hans".

        Args:
            key: The key/label to display
            value: The value to display
            key_style: Style for the key (default: "dim")
        """
        self.print(f"[{key_style}]{key}:[/{key_style}] {value}")


def get_logger(name: str = "langtag") -> LangTagLogger:
    """
    Get or create a langtag logger instance.

    The custom logger class is only installed while this logger is created,
    so loggers of other libraries keep the default class.

    Args:
        name: Logger name (default: "langtag")

    Returns:
        LangTagLogger instance
    """
    previous_class = logging.getLoggerClass()
    logging.setLoggerClass(LangTagLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        logging.setLoggerClass(previous_class)

    return logger  # type: ignore[return-value]
