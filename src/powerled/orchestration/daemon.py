"""
Daemon orchestrator wiring the transport, state tracker and LED renderer.

Startup order matters: signals are subscribed first, so nothing emitted during
reconciliation is lost, but they are only queued; the power state and POST
code history are then queried and applied, and the LED is set once, before
run() delivers the first queued event. The LED therefore never shows a default
all-off state and no live event is applied ahead of the history.
"""

import logging

from powerled.core import BootStateTracker
from powerled.exceptions import BusQueryError, ErrorContext
from powerled.led import LedEventHandler, LedRenderer
from powerled.models import LedPresentation, PostCode, PowerLedConfig
from powerled.protocols import CodesObserved, TrackerEvent, Transport

logger = logging.getLogger(__name__)


class PowerLedDaemon:
    """
    Top-level orchestrator for the power LED controller.

    Architecture:
        PowerLedDaemon (this class)
        ├── transport: power/POST code sources, LED sink, event source
        ├── tracker: BootStateTracker (flags + reference codes)
        └── led_handler: LedEventHandler -> LedRenderer -> transport

    Lifecycle:
    1. initialize(): subscribe (queue only), startup reconciliation, first LED render
    2. run(): block in the transport's event loop
    3. stop(): ask the event loop to return (safe from a signal handler)
    4. shutdown(): unregister observers, close the transport
    """

    def __init__(self, config: PowerLedConfig, transport: Transport, require_history: bool = False):
        """
        Initialize the daemon.

        Args:
            config: Reference codes and LED group names
            transport: Bus collaborators
            require_history: If True, a failed POST code history query aborts
                startup instead of being treated as an empty history
        """
        self.config = config
        self.transport = transport
        self.require_history = require_history

        self.tracker: BootStateTracker | None = None
        self.renderer = LedRenderer(transport, config)
        self.led_handler = LedEventHandler(self.renderer)
        self._observing = False

    def initialize(self) -> LedPresentation:
        """
        Reconcile with the current system state and start listening.

        Returns:
            The presentation rendered at startup

        Raises:
            BusQueryError: If the history query fails and require_history is set
            TransportError: If subscribing to signals fails
        """
        logger.info("Initializing power LED controller")

        # Signals are queued until run(); anything arriving during the queries
        # is applied after the history
        with ErrorContext("subscribe to host state and POST code signals", logger_instance=logger):
            self.transport.subscribe()

        host_power_on = self._query_power_state()
        self.tracker = BootStateTracker(
            self.config.post_start, self.config.post_end, host_power_on=host_power_on
        )

        history = self._query_history()
        self.tracker.dispatch(CodesObserved.of(history))

        presentation = self.led_handler.sync(self.tracker.state)
        self.tracker.register_observer(self.led_handler)
        self._observing = True

        logger.info(f"Power LED controller initialized: {self.tracker.state}")
        return presentation

    def handle_event(self, event: TrackerEvent) -> bool:
        """Apply one live event; observers update the LED if it changed anything."""
        if self.tracker is None:
            raise RuntimeError("PowerLedDaemon.initialize() must be called before handling events")
        logger.debug(f"Dispatching {event}")
        return self.tracker.dispatch(event)

    def run(self) -> None:
        """Process live events until stop() is called."""
        logger.info("Entering event loop")
        self.transport.run(self.handle_event)
        logger.info("Event loop finished")

    def stop(self) -> None:
        """Request the event loop to return."""
        self.transport.stop()

    def shutdown(self) -> None:
        """Release observers and the bus connection."""
        logger.info("Shutting down power LED controller")
        if self.tracker is not None and self._observing:
            self.tracker.unregister_observer(self.led_handler)
            self._observing = False
        self.transport.close()

    def _query_power_state(self) -> bool:
        try:
            return self.transport.query_power_state()
        except BusQueryError as e:
            logger.warning(f"{e.technical_message}; assuming host is off")
            return False

    def _query_history(self) -> list[PostCode]:
        try:
            return self.transport.query_post_codes()
        except BusQueryError as e:
            if self.require_history:
                raise
            logger.error(f"Could not get POST codes for Power LED Controller: {e.technical_message}")
            return []
