"""Logging configuration for gitwrap."""

import logging
from pathlib import Path
from typing import Optional
from rich.logging import RichHandler
from rich.console import Console
from rich.traceback import install

# Locals are hidden: push frames hold the access token.
install(show_locals=False)

# Console for rich output
console = Console()

_logger = logging.getLogger("gitwrap")


class Logger:
    """Centralized logging for gitwrap."""

    _debug_mode: bool = False

    @classmethod
    def setup_logger(cls, debug: bool = False, log_file: Optional[Path] = None):
        """Setup the logger with appropriate handlers."""
        cls._debug_mode = debug

        _logger.setLevel(logging.DEBUG if debug else logging.INFO)
        for handler in list(_logger.handlers):
            _logger.removeHandler(handler)
            handler.close()

        # Console handler with rich formatting
        console_handler = RichHandler(
            console=console,
            show_time=debug,
            show_path=debug,
            rich_tracebacks=True,
            tracebacks_show_locals=False
        )
        console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
        _logger.addHandler(console_handler)

        # File handler if log_file specified
        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            file_handler.setFormatter(formatter)
            _logger.addHandler(file_handler)

    @classmethod
    def debug(cls, message: str, *args, **kwargs):
        """Log debug message."""
        _logger.debug(message, *args, **kwargs)

    @classmethod
    def info(cls, message: str, *args, **kwargs):
        """Log info message."""
        _logger.info(message, *args, **kwargs)

    @classmethod
    def warning(cls, message: str, *args, **kwargs):
        """Log warning message."""
        _logger.warning(message, *args, **kwargs)

    @classmethod
    def error(cls, message: str, *args, **kwargs):
        """Log error message."""
        _logger.error(message, *args, **kwargs)

    @classmethod
    def success(cls, message: str):
        """Log success message (using rich)."""
        _logger.debug(message)
        console.print(f"✅ {message}", style="green", markup=False, highlight=False)

    @classmethod
    def print(cls, message: str, style: Optional[str] = None):
        """Print plain text using rich, without markup interpretation."""
        console.print(message, style=style, markup=False, highlight=False)
