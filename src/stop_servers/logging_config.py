"""
Logging configuration for the command-line tool.

User-facing progress is printed to stdout; log records (diagnostics and
errors) go to stderr so they never interleave with the report.
"""

import logging
import sys
import threading

# Thread-safe lock for logging configuration
_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)


def _close_handlers(logger: logging.Logger) -> None:
    """Close all handlers for a logger, logging any errors."""
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as e:
            _MODULE_LOGGER.debug("Handler close failed for logger '%s': %s", logger.name, e)
    logger.handlers = []


def _build_console_handler(verbose: bool) -> logging.Handler:
    if verbose:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return console_handler


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger with a single stderr handler."""

    with _config_lock:
        root_logger = logging.getLogger()
        _close_handlers(root_logger)
        root_logger.addHandler(_build_console_handler(verbose))
        root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
        _suppress_noisy_third_parties()


__all__ = ["setup_logging"]
