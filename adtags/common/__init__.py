"""
Common utilities and shared modules.
"""

from adtags.common.config import get_settings, settings
from adtags.common.exceptions import AdTagsError
from adtags.common.logger import get_logger, log_context, logger

__all__ = [
    "settings",
    "get_settings",
    "logger",
    "get_logger",
    "log_context",
    "AdTagsError",
]
