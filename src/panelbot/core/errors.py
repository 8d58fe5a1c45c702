"""
Error taxonomy for panelbot commands.

Every failure in the command pipeline is one of these types. Errors that halt
a command (bad input, fetch failures, upstream errors) are raised and turned
into a reply message by the bot; per-panel delivery failures are reported as
outcomes and never stop the remaining panels.

Exit Codes:
- 0: Success
- 10: Configuration error
- 11: Dashboard service or transport failure
- 12: Invalid command
- 13: Delivery failure
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    CONFIG_ERROR = 10
    PROVIDER_ERROR = 11
    INVALID_COMMAND = 12
    DELIVERY_ERROR = 13
    UNKNOWN_ERROR = 127


class PanelBotError(Exception):
    """Base exception for panelbot errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(PanelBotError):
    """Raised for configuration-related errors."""

    exit_code = ExitCode.CONFIG_ERROR


class InvalidCommand(PanelBotError):
    """Raised when a command cannot be parsed. No network call is made."""

    exit_code = ExitCode.INVALID_COMMAND


class FetchError(PanelBotError):
    """Raised when a GET fails at the transport level or returns no parsable body."""

    exit_code = ExitCode.PROVIDER_ERROR


class DashboardServiceError(PanelBotError):
    """Raised when the dashboard service answers with a ``message`` field."""

    exit_code = ExitCode.PROVIDER_ERROR


class DeliveryFailure(PanelBotError):
    """Raised inside a delivery strategy; scoped to a single panel."""

    exit_code = ExitCode.DELIVERY_ERROR

    def __init__(self, reason: str, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details)
        self.reason = reason


# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI main functions that provides unified error handling.

    Args:
        show_traceback: If True, show full traceback for unexpected errors
        log_errors: If True, log errors to structlog

    Exit codes:
        - PanelBotError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except PanelBotError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=e.exit_code,
                        **e.details,
                    )
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=ExitCode.UNKNOWN_ERROR,
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: PanelBotError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
