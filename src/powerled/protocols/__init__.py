"""Protocol and event definitions.

- Events: PowerChanged and CodesObserved, the two inputs of the state tracker
- Observers: Components that react to boot/power state changes
- Transport: Bus-facing collaborators (power source, POST code source, LED sink)
"""

from .events import CodesObserved, PowerChanged, TrackerEvent
from .observers import BootStateObserver
from .transport import (
    EventSource,
    LedGroupSink,
    PostCodeSource,
    PowerStateSource,
    Transport,
)

__all__ = [
    # Events
    "CodesObserved",
    "PowerChanged",
    "TrackerEvent",
    # Observers
    "BootStateObserver",
    # Transport
    "EventSource",
    "LedGroupSink",
    "PostCodeSource",
    "PowerStateSource",
    "Transport",
]
