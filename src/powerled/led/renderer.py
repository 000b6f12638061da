"""LED rendering: turning a presentation into LED group requests."""

import logging

from powerled.core import group_assignments
from powerled.exceptions import LedActuationError
from powerled.models import LedPresentation, PowerLedConfig
from powerled.protocols import LedGroupSink

logger = logging.getLogger(__name__)

_MODE_MESSAGES = {
    LedPresentation.STANDBY: "Power LED in standby mode (BMC booted)",
    LedPresentation.POST_ACTIVE: "Power LED in POST mode",
    LedPresentation.POWERED_ON_COMPLETE: "Power LED solid on (POST completed)",
}


class LedRenderer:
    """
    Stateless renderer that sends LED group assignments to the sink.

    Every render sets all three groups explicitly. Requests are
    fire-and-forget: a failed group is logged and the remaining groups are
    still sent. Nothing is retried.
    """

    def __init__(self, sink: LedGroupSink, config: PowerLedConfig):
        """
        Initialize the LED renderer.

        Args:
            sink: Where LED group requests go
            config: Provides the LED group names
        """
        self.sink = sink
        self.config = config

    def render(self, presentation: LedPresentation) -> int:
        """
        Apply `presentation` to the LED groups.

        Returns:
            Number of group requests that failed
        """
        logger.info(_MODE_MESSAGES[presentation])

        failures = 0
        for group, asserted in group_assignments(presentation, self.config):
            try:
                self.sink.set_led_group(group, asserted)
            except LedActuationError as e:
                failures += 1
                logger.error(e.technical_message)
            except Exception as e:
                failures += 1
                logger.error(f"Failed to set LED {group}: {e}", exc_info=True)
        return failures
