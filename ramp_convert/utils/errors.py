# Error types and helpers shared by the IO, service and UI layers
"""
The converter core never raises for bad textures; it skips them. Errors
only surface around it:

- ``FileIOError`` when curve assets cannot be read back,
- ``ConfigurationError`` when settings ask for something impossible,
- ``handle_errors`` to contain failures of one texture in a selection,
- ``log_and_continue`` and ``format_user_error`` for batch logs and dialogs.
"""

import functools
from enum import Enum
from typing import Any, Callable, Optional, TypeVar, Union

from .logger import get_logger

logger = get_logger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


class ErrorCategory(Enum):
    RECOVERABLE = "recoverable"      # Skipped, work continues
    FILE_IO = "file_io"              # Texture or curve files
    CONVERSION = "conversion"        # Ramp-to-curve generation
    CONFIGURATION = "configuration"  # Settings


class AppError(Exception):
    """Base exception carrying a category and a message fit for a dialog."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.RECOVERABLE,
        original_error: Optional[Exception] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.category = category
        self.original_error = original_error
        self.user_message = user_message or message

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.args[0]} (caused by: {type(self.original_error).__name__})"
        return self.args[0]


class FileIOError(AppError):
    def __init__(self, message: str, file_path: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.FILE_IO, **kwargs)
        self.file_path = file_path


class ConfigurationError(AppError):
    def __init__(self, message: str, setting_name: Optional[str] = None, **kwargs):
        super().__init__(message, category=ErrorCategory.CONFIGURATION, **kwargs)
        self.setting_name = setting_name


def handle_errors(
    fallback_value: Any = None,
    category: ErrorCategory = ErrorCategory.RECOVERABLE,
    log_level: str = "warning",
) -> Callable[[F], F]:
    """
    Decorator returning ``fallback_value`` when the wrapped call fails.

    ``AppError`` subclasses are not caught; they already describe what
    went wrong. A callable fallback (e.g. ``list``) is called to produce a
    fresh value each time. ``log_level`` names the logger method to use,
    "exception" includes the traceback.

    Example:
        @handle_errors(fallback_value=list, category=ErrorCategory.CONVERSION)
        def generate_ramp(self, file_path):
            ...
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AppError:
                raise
            except Exception as e:
                log_func = getattr(logger, log_level, logger.warning)
                log_func("[%s] %s failed: %s", category.value, func.__qualname__, e)
                return fallback_value() if callable(fallback_value) else fallback_value

        return wrapper  # type: ignore
    return decorator


def log_and_continue(
    message: str,
    category: ErrorCategory = ErrorCategory.RECOVERABLE,
    level: str = "warning",
) -> None:
    """Logs a failure that should not stop the rest of a selection or batch."""
    log_func = getattr(logger, level, logger.warning)
    log_func("[%s] %s", category.value, message)


def format_user_error(error: Union[Exception, str], context: Optional[str] = None) -> str:
    """
    Turns an error into a short message for a dialog.

    Args:
        error: The error or error message.
        context: What was being done, e.g. "saving curves".
    """
    if isinstance(error, AppError):
        return error.user_message

    error_str = str(error)
    where = f" while {context}" if context else ""

    if "No such file or directory" in error_str:
        return f"File not found{where}"
    if "Permission denied" in error_str:
        return f"Permission denied{where}. Choose another output folder."
    if "No space left on device" in error_str:
        return f"Disk full{where}."

    if context:
        return f"Error {context}: {error_str}"
    return f"An error occurred: {error_str}"
