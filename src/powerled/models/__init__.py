"""Data models for the power LED controller."""

from .config import PowerLedConfig
from .enums import LedPresentation
from .postcode import PostCode, format_code, parse_hex_bytes
from .state import BootPowerState

__all__ = [
    "BootPowerState",
    "LedPresentation",
    "PostCode",
    "PowerLedConfig",
    "format_code",
    "parse_hex_bytes",
]
