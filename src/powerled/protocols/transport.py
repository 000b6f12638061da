"""Protocols for the bus-facing collaborators of the daemon."""

from collections.abc import Callable
from typing import Protocol

from powerled.models import PostCode

from .events import TrackerEvent


class PowerStateSource(Protocol):
    """Synchronous access to the host power state."""

    def query_power_state(self) -> bool:
        """
        Return True if the host is powered on.

        Raises:
            BusQueryError: If the owning service cannot be queried
        """
        ...


class PostCodeSource(Protocol):
    """Synchronous access to the POST code history of the current boot cycle."""

    def query_post_codes(self) -> list[PostCode]:
        """
        Return every POST code recorded for the current boot cycle, oldest first.

        Raises:
            BusQueryError: If the POST code manager cannot be queried
        """
        ...


class LedGroupSink(Protocol):
    """Accepts asserted/deasserted requests per LED group."""

    def set_led_group(self, group: str, asserted: bool) -> None:
        """
        Request that `group` be asserted or deasserted.

        Raises:
            LedActuationError: If the request is rejected
        """
        ...


class EventSource(Protocol):
    """Live stream of tracker events."""

    def subscribe(self) -> None:
        """Start queueing power and POST code signals; run() delivers them."""
        ...

    def run(self, handler: Callable[[TrackerEvent], None]) -> None:
        """Deliver events to `handler` in arrival order until stop() is called."""
        ...

    def stop(self) -> None:
        """Ask run() to return."""
        ...


class Transport(PowerStateSource, PostCodeSource, LedGroupSink, EventSource, Protocol):
    """Everything the daemon needs from the bus."""

    def close(self) -> None:
        """Detach subscriptions and release the connection."""
        ...
