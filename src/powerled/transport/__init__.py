"""Bus transports for the power LED controller."""

from .dbus import DBusTransport, host_state_is_on

__all__ = ["DBusTransport", "host_state_is_on"]
