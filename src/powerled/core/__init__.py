"""Core, transport-agnostic logic: code matching, state tracking, LED resolution."""

from .matcher import codes_match
from .presentation import group_assignments, resolve_presentation
from .state_machine import BootStateTracker

__all__ = [
    "BootStateTracker",
    "codes_match",
    "group_assignments",
    "resolve_presentation",
]
