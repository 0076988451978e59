"""Core utilities and shared components for dav-objectstore."""

from .config import settings
from .exceptions import DavObjectStoreError, ValidationError
from .observability import apply_log_level, get_logger, get_tracer

__all__ = [
    "settings",
    "DavObjectStoreError",
    "ValidationError",
    "apply_log_level",
    "get_logger",
    "get_tracer",
]
