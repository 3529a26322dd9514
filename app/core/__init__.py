"""Public façade for the app.core package.

This module exposes logging helpers and the base models that are safe to
import from other packages. Callers should import these cross-cutting
concerns from this façade instead of the internal submodules.
"""

from .logging_config import configure_logging
from .logging_utils import (
    log_error,
    log_exception,
    log_info,
    log_section,
    log_step,
    log_success,
    log_warning,
)
from .models import Playlist, Track

__all__ = [
    "configure_logging",
    "log_section",
    "log_info",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "log_exception",
    "Track",
    "Playlist",
]
