"""POST code records and byte-string helpers."""

import re
from dataclasses import dataclass

_HEX_BYTE = re.compile(r"[0-9a-fA-F]{1,2}")


@dataclass(frozen=True)
class PostCode:
    """
    A diagnostic code as published by the POST code manager.

    Attributes:
        primary: Primary code value (carried for logging only)
        secondary: Variable-length byte payload; the last byte is an instance counter
    """

    primary: int
    secondary: bytes

    @classmethod
    def from_wire(cls, value: tuple[int, bytes | list[int]]) -> "PostCode":
        """Build from a `(tay)` struct as delivered on the bus."""
        primary, secondary = value
        return cls(primary=int(primary), secondary=bytes(secondary))

    def __str__(self) -> str:
        return f"{self.primary:#x}/{format_code(self.secondary)}"


def parse_hex_bytes(values: list[str]) -> bytes:
    """
    Parse a list of hex byte strings such as ``["01", "a0"]``.

    Each element is one or two hex digits, without prefix or sign.

    Raises:
        ValueError: If an element is not such a string
    """
    result = bytearray()
    for elem in values:
        if not isinstance(elem, str):
            raise ValueError(f"{elem!r} is not a string")
        if not _HEX_BYTE.fullmatch(elem):
            raise ValueError(f"{elem!r} is not a hex byte")
        result.append(int(elem, 16))
    return bytes(result)


def format_code(code: bytes) -> str:
    """Render a code as space separated hex bytes for logs."""
    return code.hex(" ") or "<empty>"
