"""State tracker fusing host power state and POST progress."""

import logging
from collections.abc import Iterable
from dataclasses import replace
from threading import Lock

from powerled.core.matcher import codes_match
from powerled.exceptions import PostCodeLengthError
from powerled.models import BootPowerState, PostCode
from powerled.protocols import (
    BootStateObserver,
    CodesObserved,
    PowerChanged,
    TrackerEvent,
)
from powerled.utils import ObserverManager

logger = logging.getLogger(__name__)


class BootStateTracker:
    """
    Single source of truth for the boot/power flags.

    Holds `host_power_on`, `boot_started` and `boot_ended` together with the
    two reference codes, applies incoming events under the transition policy
    and notifies observers when a flag changes.

    Transition policy:
    - Power off resets both POST flags; any change of power state is a change
    - The POST start code sets `boot_started` (and clears `boot_ended`) unless
      POST already started
    - The POST end code sets `boot_ended` unless it is already set
    - Each transition is guarded by the flag it sets, so re-delivered events
      never produce a second change

    Mutation is serialized by an internal lock; observers are notified after
    the lock is released.
    """

    def __init__(self, post_start: bytes, post_end: bytes, host_power_on: bool = False) -> None:
        """
        Initialize the tracker.

        Args:
            post_start: Reference code marking the start of POST
            post_end: Reference code marking the end of POST
            host_power_on: Power state queried at startup
        """
        self._lock = Lock()
        self._post_start = bytes(post_start)
        self._post_end = bytes(post_end)
        self._state = BootPowerState(host_power_on=host_power_on)
        # ObserverManager has its own lock - don't share to avoid deadlock when notifying
        self._observers = ObserverManager[BootStateObserver](observer_type_name="boot state")

    @property
    def state(self) -> BootPowerState:
        """Return an immutable snapshot of the current flags."""
        with self._lock:
            return self._state

    def register_observer(self, observer: BootStateObserver) -> None:
        """Register an observer to receive state changes."""
        self._observers.register(observer)

    def unregister_observer(self, observer: BootStateObserver) -> None:
        """Unregister a previously registered observer."""
        self._observers.unregister(observer)

    def dispatch(self, event: TrackerEvent) -> bool:
        """
        Apply an event and notify observers if it changed the state.

        Args:
            event: PowerChanged or CodesObserved

        Returns:
            True if at least one flag changed
        """
        if isinstance(event, PowerChanged):
            changed = self.on_power_changed(event.is_on)
        elif isinstance(event, CodesObserved):
            changed = self.on_codes_observed(event.codes)
        else:
            logger.warning(f"BootStateTracker received unknown event: {event!r}")
            return False

        if changed:
            self._observers.notify("on_boot_state_changed", self.state)
        return changed

    def on_power_changed(self, is_on: bool) -> bool:
        """
        Apply a host power state change.

        Returns:
            True if the power state differs from the tracked one
        """
        with self._lock:
            if self._state.host_power_on == is_on:
                return False

            if is_on:
                self._state = replace(self._state, host_power_on=True)
            else:
                logger.info("Power LED: Host powering off. Resetting LED.")
                self._state = BootPowerState(host_power_on=False)
            return True

    def on_codes_observed(self, codes: Iterable[PostCode | bytes]) -> bool:
        """
        Apply a batch of POST codes in order.

        The whole batch is always processed. A code of invalid length is
        logged and skipped.

        Returns:
            True if any code in the batch changed a flag
        """
        changed = False
        with self._lock:
            for code in codes:
                payload = code.secondary if isinstance(code, PostCode) else bytes(code)
                try:
                    changed |= self._apply_code(payload)
                except PostCodeLengthError as e:
                    logger.error(f"Skipping POST code {code}: {e.technical_message}")
        return changed

    def _apply_code(self, payload: bytes) -> bool:
        # Start is checked before end so a code matching both starts POST
        if not self._state.boot_started and codes_match(payload, self._post_start):
            logger.debug(f"POST start code seen: {payload.hex(' ')}")
            self._state = replace(self._state, boot_started=True, boot_ended=False)
            return True
        if not self._state.boot_ended and codes_match(payload, self._post_end):
            logger.debug(f"POST end code seen: {payload.hex(' ')}")
            self._state = replace(self._state, boot_ended=True)
            return True
        return False
