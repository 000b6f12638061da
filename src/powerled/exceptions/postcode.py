"""POST code comparison exceptions."""

from .base import PowerLedError

MAX_CODE_LENGTH = 9


class PostCodeLengthError(PowerLedError):
    """A POST code is empty or longer than MAX_CODE_LENGTH bytes."""

    def __init__(self, code: bytes, role: str = "code"):
        """
        Initialize a POST code length error.

        Args:
            code: The offending byte sequence
            role: Which side of the comparison it was ("observed" or "reference")
        """
        super().__init__(
            user_message="POST code of invalid length provided for comparison",
            technical_message=(
                f"{role} POST code has {len(code)} bytes ({code.hex(' ') or 'empty'}), "
                f"expected 1 to {MAX_CODE_LENGTH}"
            ),
            recoverable=True,
        )
        self.code = code
        self.role = role
