"""System D-Bus transport for the OpenBMC host state, POST code and LED services.

One blocking jeepney connection carries everything: the startup queries, the
`PropertiesChanged` subscriptions and the LED group `Set` calls. Signals are
queued by jeepney's filters in arrival order and handed out one at a time by
run(), so the state tracker only ever sees one event at a time.
"""

import logging
from collections import deque
from collections.abc import Callable
from typing import Any, Optional

from jeepney import (
    DBusAddress,
    DBusErrorResponse,
    MatchRule,
    Properties,
    message_bus,
    new_method_call,
)
from jeepney.io.blocking import DBusConnection, open_dbus_connection
from jeepney.low_level import HeaderFields, Message, MessageType
from jeepney.wrappers import unwrap_msg

from powerled.exceptions import BusQueryError, LedActuationError, TransportError
from powerled.models import PostCode
from powerled.protocols import CodesObserved, PowerChanged, TrackerEvent

logger = logging.getLogger(__name__)

PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"

HOST_SERVICE = "xyz.openbmc_project.State.Host"
HOST_INTERFACE = "xyz.openbmc_project.State.Host"
HOST_PATH_PREFIX = "/xyz/openbmc_project/state/host"
HOST_STATE_PROPERTY = "CurrentHostState"

RAW_POST_CODE_PATH_PREFIX = "/xyz/openbmc_project/state/boot/raw"
RAW_POST_CODE_PROPERTY = "Value"

POST_CODE_SERVICE_PREFIX = "xyz.openbmc_project.State.Boot.PostCode"
POST_CODE_PATH_PREFIX = "/xyz/openbmc_project/State/Boot/PostCode"
POST_CODE_INTERFACE = "xyz.openbmc_project.State.Boot.PostCode"
# GetPostCodes index 1 is the current boot cycle
CURRENT_BOOT_CYCLE = 1

LED_SERVICE = "xyz.openbmc_project.LED.GroupManager"
LED_GROUP_PATH_PREFIX = "/xyz/openbmc_project/led/groups/"
LED_GROUP_INTERFACE = "xyz.openbmc_project.Led.Group"


def host_state_is_on(value: str) -> bool:
    """
    Interpret a `CurrentHostState` value.

    Anything other than `xyz.openbmc_project.State.Host.HostState.Off`
    (Running, Quiesced, DiagnosticMode, ...) counts as powered on.
    """
    return value.rsplit(".", 1)[-1] != "Off"


def translate_host_state_signal(body: tuple) -> Optional[PowerChanged]:
    """Turn a host `PropertiesChanged` body into a PowerChanged event."""
    _interface, changed, _invalidated = body
    if HOST_STATE_PROPERTY not in changed:
        return None
    signature, value = changed[HOST_STATE_PROPERTY]
    if not isinstance(value, str):
        raise TypeError(f"{HOST_STATE_PROPERTY} carries {signature!r}, expected a string")
    return PowerChanged(is_on=host_state_is_on(value))


def translate_post_code_signal(body: tuple) -> Optional[CodesObserved]:
    """Turn a raw POST code `PropertiesChanged` body into a CodesObserved event."""
    _interface, changed, _invalidated = body
    if RAW_POST_CODE_PROPERTY not in changed:
        return None
    _signature, value = changed[RAW_POST_CODE_PROPERTY]
    return CodesObserved(codes=(PostCode.from_wire(value),))


class DBusTransport:
    """
    Power state source, POST code source, LED sink and event source on D-Bus.

    Lifecycle:
    1. connect(): open the system bus (skipped if a connection was injected)
    2. query_power_state() / query_post_codes(): startup reconciliation
    3. subscribe(): add match rules and start queueing signals
    4. run(handler): deliver events until stop()
    5. close(): drop filters and close the connection
    """

    def __init__(
        self,
        node: int = 0,
        connection: Optional[DBusConnection] = None,
        poll_interval: float = 1.0,
        reply_timeout: float = 5.0,
        led_timeout: float = 0.5,
    ):
        """
        Initialize the transport.

        Args:
            node: Host index used in the host state and POST code object paths
            connection: Already open jeepney connection (tests inject one)
            poll_interval: How often run() wakes up to check for stop() (seconds)
            reply_timeout: How long to wait for a method reply (seconds)
            led_timeout: How long to wait for an LED `Set` reply (seconds); a render
                stalls the event loop for at most three of these
        """
        self.node = node
        self.poll_interval = poll_interval
        self.reply_timeout = reply_timeout
        self.led_timeout = led_timeout
        self._conn = connection
        self._queue: deque[Message] = deque()
        self._filters: list[Any] = []
        self._running = False

        self.host_address = DBusAddress(
            f"{HOST_PATH_PREFIX}{node}", bus_name=HOST_SERVICE, interface=HOST_INTERFACE
        )
        self.post_code_address = DBusAddress(
            f"{POST_CODE_PATH_PREFIX}{node}",
            bus_name=f"{POST_CODE_SERVICE_PREFIX}{node}",
            interface=POST_CODE_INTERFACE,
        )
        self.host_rule = MatchRule(
            type="signal",
            interface=PROPERTIES_INTERFACE,
            member="PropertiesChanged",
            path=f"{HOST_PATH_PREFIX}{node}",
        )
        self.raw_post_code_rule = MatchRule(
            type="signal",
            interface=PROPERTIES_INTERFACE,
            member="PropertiesChanged",
            path=f"{RAW_POST_CODE_PATH_PREFIX}{node}",
        )

    # ---------------- Connection ----------------

    def connect(self) -> None:
        """Open the system bus connection if none was injected."""
        if self._conn is not None:
            return
        try:
            self._conn = open_dbus_connection(bus="SYSTEM")
        except OSError as e:
            raise TransportError(
                user_message="Could not connect to the system D-Bus",
                technical_message=f"open_dbus_connection(SYSTEM) failed: {e}",
                recovery_hint="Check that dbus-daemon is running and the socket is accessible",
            ) from e
        logger.info(f"Connected to system bus as {self._conn.unique_name}")

    @property
    def connection(self) -> DBusConnection:
        if self._conn is None:
            raise TransportError("Not connected to the system D-Bus")
        return self._conn

    def close(self) -> None:
        """Drop signal filters and close the connection."""
        for handle in self._filters:
            handle.close()
        self._filters.clear()
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.info("Closed system bus connection")

    def _call(self, message: Message, query: str, timeout: Optional[float] = None) -> tuple:
        if timeout is None:
            timeout = self.reply_timeout
        try:
            reply = self.connection.send_and_get_reply(message, timeout=timeout)
            return unwrap_msg(reply)
        except DBusErrorResponse as e:
            raise BusQueryError(query, f"{e.name}: {e.data}") from e
        except (OSError, TimeoutError) as e:
            raise BusQueryError(query, str(e)) from e

    # ---------------- Queries ----------------

    def query_power_state(self) -> bool:
        """Return True unless the host reports HostState.Off."""
        body = self._call(Properties(self.host_address).get(HOST_STATE_PROPERTY), HOST_STATE_PROPERTY)
        _signature, value = body[0]
        logger.debug(f"{HOST_STATE_PROPERTY} = {value}")
        return host_state_is_on(value)

    def query_post_codes(self) -> list[PostCode]:
        """Return the POST codes of the current boot cycle."""
        message = new_method_call(
            self.post_code_address, "GetPostCodes", "q", (CURRENT_BOOT_CYCLE,)
        )
        body = self._call(message, "GetPostCodes")
        codes = [PostCode.from_wire(item) for item in body[0]]
        logger.debug(f"GetPostCodes returned {len(codes)} codes")
        return codes

    # ---------------- LED sink ----------------

    def set_led_group(self, group: str, asserted: bool) -> None:
        """Set the `Asserted` property of an LED group."""
        address = DBusAddress(
            f"{LED_GROUP_PATH_PREFIX}{group}", bus_name=LED_SERVICE, interface=LED_GROUP_INTERFACE
        )
        try:
            self._call(
                Properties(address).set("Asserted", "b", asserted),
                f"Set Asserted on {group}",
                timeout=self.led_timeout,
            )
        except BusQueryError as e:
            raise LedActuationError(group, asserted, e.original_error) from e
        logger.debug(f"LED group {group} Asserted={asserted}")

    # ---------------- Events ----------------

    def subscribe(self) -> None:
        """Register match rules for host state and raw POST code signals."""
        for rule in (self.host_rule, self.raw_post_code_rule):
            self._call(message_bus.AddMatch(rule), "AddMatch")
            self._filters.append(self.connection.filter(rule, queue=self._queue))
        logger.info(f"Subscribed to host state and POST code signals for node {self.node}")

    def translate(self, message: Message) -> Optional[TrackerEvent]:
        """Map a received signal to a tracker event, or None if irrelevant."""
        if message.header.message_type != MessageType.signal:
            return None
        if self.host_rule.matches(message):
            return translate_host_state_signal(message.body)
        if self.raw_post_code_rule.matches(message):
            return translate_post_code_signal(message.body)
        logger.debug(f"Ignoring signal from {message.header.fields.get(HeaderFields.path)}")
        return None

    def run(self, handler: Callable[[TrackerEvent], None]) -> None:
        """Deliver events to `handler` in arrival order until stop() is called."""
        self._running = True
        while self._running:
            try:
                message = self.connection.recv_until_filtered(self._queue, timeout=self.poll_interval)
            except TimeoutError:
                continue
            except OSError as e:
                raise TransportError(
                    user_message="Lost connection to the system D-Bus",
                    technical_message=f"recv_until_filtered failed: {e}",
                ) from e

            try:
                event = self.translate(message)
            except (ValueError, TypeError) as e:
                logger.error(f"Malformed PropertiesChanged signal: {e}")
                continue
            if event is not None:
                handler(event)

    def stop(self) -> None:
        """Make run() return after the current wait."""
        self._running = False
