"""Observer protocols for boot/power state changes."""

from typing import Protocol, runtime_checkable

from powerled.models import BootPowerState


@runtime_checkable
class BootStateObserver(Protocol):
    """
    Observer that receives boot/power state changes.

    Lets the LED layer react to the tracker without the tracker knowing
    anything about LEDs.
    """

    def on_boot_state_changed(self, state: BootPowerState) -> None:
        """
        Handle a state change.

        Args:
            state: Snapshot of the flags after the change

        Note:
            Called once per dispatched event that changed at least one flag,
            on the thread that dispatched the event. Exceptions are caught and
            logged by the tracker.
        """
        ...
