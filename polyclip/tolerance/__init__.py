"""Tolerance profile loading and the process-wide epsilon setting."""

from .loader import (
    configure_tolerance,
    get_profile_path,
    get_tolerance,
    list_profiles,
    load_tolerance,
    reset_tolerance,
)

__all__ = [
    "configure_tolerance",
    "get_profile_path",
    "get_tolerance",
    "list_profiles",
    "load_tolerance",
    "reset_tolerance",
]
