# This file makes the 'utils' directory a Python package.

from .errors import (
    AppError,
    FileIOError,
    ConfigurationError,
    ErrorCategory,
    handle_errors,
    log_and_continue,
    format_user_error,
)
from .color import (
    srgb_to_linear,
    linear_to_srgb,
    decode_srgb_bytes,
    decode_linear_bytes,
    SRGB_TO_LINEAR_LUT,
)

__all__ = [
    # Errors
    'AppError',
    'FileIOError',
    'ConfigurationError',
    'ErrorCategory',
    'handle_errors',
    'log_and_continue',
    'format_user_error',
    # Color
    'srgb_to_linear',
    'linear_to_srgb',
    'decode_srgb_bytes',
    'decode_linear_bytes',
    'SRGB_TO_LINEAR_LUT',
]
