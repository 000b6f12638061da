"""CLI commands for the power LED controller."""

from .match import match
from .validate import validate

__all__ = ["match", "validate"]
