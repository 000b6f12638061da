"""Comparison of POST codes against configured reference codes."""

from collections.abc import Sequence

from powerled.exceptions import MAX_CODE_LENGTH, PostCodeLengthError


def codes_match(observed: bytes | Sequence[int], reference: bytes | Sequence[int]) -> bool:
    """
    Compare two POST codes, ignoring the instance (last) byte.

    The codes are aligned at their tails once the instance byte is dropped.
    If one code is longer, its extra leading bytes are skipped, so only as
    many bytes as the shorter code has left are compared. A code of a single
    byte therefore matches anything.

    Args:
        observed: Code taken from a POST code event
        reference: Configured reference code

    Returns:
        True if every compared byte is equal

    Raises:
        PostCodeLengthError: If either code is empty or longer than 9 bytes

    Example:
        >>> codes_match(bytes([0x01, 0x55, 0x00]), bytes([0x55, 0x07]))
        True
    """
    observed = bytes(observed)
    reference = bytes(reference)

    if not 0 < len(observed) <= MAX_CODE_LENGTH:
        raise PostCodeLengthError(observed, "observed")
    if not 0 < len(reference) <= MAX_CODE_LENGTH:
        raise PostCodeLengthError(reference, "reference")

    # Drop the instance byte
    observed_payload = observed[:-1]
    reference_payload = reference[:-1]

    compared = min(len(observed_payload), len(reference_payload))
    if compared == 0:
        return True
    return observed_payload[-compared:] == reference_payload[-compared:]
