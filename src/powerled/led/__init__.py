"""Power LED rendering and state observer."""

from .event_handler import LedEventHandler
from .renderer import LedRenderer

__all__ = ["LedEventHandler", "LedRenderer"]
