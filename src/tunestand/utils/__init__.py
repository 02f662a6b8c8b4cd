"""
Utility modules for Tunestand.
"""

from .retry import retry_with_backoff, RetryError
from .string_utils import normalize_string, contains_normalized, format_duration

__all__ = [
    'retry_with_backoff',
    'RetryError',
    'normalize_string',
    'contains_normalized',
    'format_duration',
]
