"""Observer registry used by the boot state tracker."""

import logging
from threading import Lock
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=object)


class ObserverManager(Generic[T]):
    """
    Ordered set of observers that can be notified by callback name.

    Type Parameters:
        T: The observer protocol (e.g. BootStateObserver)

    The observer list is copy-on-write: registration swaps in a new tuple
    under the lock, and notify() iterates the tuple it grabbed without
    holding the lock. An observer may therefore unregister itself, or read
    the publisher's state, from inside its callback.

    Example:
        ```python
        observers = ObserverManager[BootStateObserver](observer_type_name="boot state")
        observers.register(led_handler)
        observers.notify("on_boot_state_changed", tracker.state)
        ```
    """

    def __init__(self, observer_type_name: str = "observer"):
        """
        Args:
            observer_type_name: Label used in log messages
        """
        self._lock = Lock()
        self._snapshot: tuple[T, ...] = ()
        self._label = observer_type_name

    def register(self, observer: T) -> None:
        """Add `observer`; registering the same observer twice is a no-op."""
        with self._lock:
            if observer in self._snapshot:
                logger.debug(f"{self._label} observer {observer} is already registered")
                return
            self._snapshot = (*self._snapshot, observer)
        logger.info(f"Registered {self._label} observer {observer}")

    def unregister(self, observer: T) -> None:
        """Remove `observer`; unknown observers are logged and ignored."""
        with self._lock:
            if observer not in self._snapshot:
                logger.warning(f"Cannot unregister {self._label} observer {observer}: not registered")
                return
            self._snapshot = tuple(o for o in self._snapshot if o is not observer)
        logger.debug(f"Unregistered {self._label} observer {observer}")

    def notify(self, callback_name: str, *args: Any, **kwargs: Any) -> None:
        """
        Invoke `callback_name` on each observer in registration order.

        A failing observer is logged; the others are still called.
        """
        with self._lock:
            snapshot = self._snapshot

        for observer in snapshot:
            callback = getattr(observer, callback_name, None)
            if callback is None:
                logger.error(f"{self._label} observer {observer} does not implement {callback_name}()")
                continue
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"{self._label} observer {observer} raised in {callback_name}(): {e}",
                    exc_info=True,
                )

    def __contains__(self, observer: T) -> bool:
        return observer in self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)
