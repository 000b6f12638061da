"""Events accepted by the boot/power state tracker.

- PowerChanged: The host power state property changed
- CodesObserved: One or more POST codes were appended (or replayed at startup)
"""

from collections.abc import Iterable
from dataclasses import dataclass

from powerled.models import PostCode


@dataclass(frozen=True)
class PowerChanged:
    """Host power state changed to `is_on`."""

    is_on: bool


@dataclass(frozen=True)
class CodesObserved:
    """A batch of POST codes, in arrival order."""

    codes: tuple[PostCode, ...]

    @classmethod
    def of(cls, codes: Iterable[PostCode]) -> "CodesObserved":
        return cls(codes=tuple(codes))


TrackerEvent = PowerChanged | CodesObserved
