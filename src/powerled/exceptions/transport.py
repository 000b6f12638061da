"""Bus transport exceptions.

- TransportError: Base class for bus errors
- BusQueryError: A synchronous query (power state, POST code history) failed
- LedActuationError: Setting an LED group's asserted state failed
"""

from typing import Optional

from .base import PowerLedError


class TransportError(PowerLedError):
    """Communication with the system bus failed."""
    pass


class BusQueryError(TransportError):
    """A query to an external service failed."""

    def __init__(self, query: str, original_error: Optional[str] = None):
        """
        Initialize bus query error.

        Args:
            query: Description of the query (e.g. "CurrentHostState")
            original_error: Error reported by the bus, if any
        """
        technical = f"D-Bus query {query} failed"
        if original_error:
            technical += f": {original_error}"

        super().__init__(
            user_message=f"Could not query {query}",
            technical_message=technical,
            recoverable=True,
            recovery_hint="Check that the owning service is running on the system bus",
        )
        self.query = query
        self.original_error = original_error


class LedActuationError(TransportError):
    """Setting an LED group failed."""

    def __init__(self, group: str, asserted: bool, original_error: Optional[str] = None):
        """
        Initialize LED actuation error.

        Args:
            group: LED group name
            asserted: Requested asserted state
            original_error: Error reported by the bus, if any
        """
        technical = f"Failed to set LED group {group} Asserted={asserted}"
        if original_error:
            technical += f": {original_error}"

        super().__init__(
            user_message=f"Failed to set LED {group}",
            technical_message=technical,
            recoverable=True,
            recovery_hint="Check that the LED group exists under /xyz/openbmc_project/led/groups",
        )
        self.group = group
        self.asserted = asserted
        self.original_error = original_error
