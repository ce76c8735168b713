"""Host diagnostic channel for zkeychain.

The host owns two write-only sinks: a log line and an error line. They are
exposed here as the ``zkeychain.host`` and ``zkeychain.host.error`` loggers.
Nothing in the package reads them back.

:func:`initialize` installs a hook that reports uncaught exceptions to the
error line. It runs once per process no matter how often, or from how many
threads, it is called.
"""

import logging
import sys
import threading
import traceback
from typing import Any, Optional

__all__ = [
    "log_line",
    "error_line",
    "initialize",
    "is_initialized",
]

_host_logger = logging.getLogger("zkeychain.host")
_host_error_logger = logging.getLogger("zkeychain.host.error")

_init_lock = threading.Lock()
_initialized = False


def log_line(message: str) -> None:
    """Write a line to the host log sink."""
    _host_logger.info(message)


def error_line(message: str) -> None:
    """Write a line to the host error sink."""
    _host_error_logger.error(message)


def _format_exception(exc_type: Any, exc: Optional[BaseException], tb: Any) -> str:
    return "".join(traceback.format_exception(exc_type, exc, tb)).rstrip()


def _install_hooks() -> None:
    previous_excepthook = sys.excepthook
    previous_threading_hook = threading.excepthook

    def excepthook(exc_type, exc, tb):
        error_line(_format_exception(exc_type, exc, tb))
        previous_excepthook(exc_type, exc, tb)

    def threading_excepthook(args):
        error_line(_format_exception(args.exc_type, args.exc_value, args.exc_traceback))
        previous_threading_hook(args)

    sys.excepthook = excepthook
    threading.excepthook = threading_excepthook


def initialize() -> bool:
    """
    Install the failure hook and announce initialization.

    Safe to call repeatedly and concurrently.

    Returns:
        True if this call performed the installation, False if it was done already
    """
    global _initialized

    with _init_lock:
        if _initialized:
            return False
        _install_hooks()
        _initialized = True

    log_line("zkeychain module initialized")
    return True


def is_initialized() -> bool:
    """Check whether the failure hook has been installed."""
    return _initialized
