"""Observer keeping the power LED in sync with the boot/power state."""

import logging
from typing import Optional

from powerled.core import resolve_presentation
from powerled.models import BootPowerState, LedPresentation
from powerled.protocols import BootStateObserver

from .renderer import LedRenderer

logger = logging.getLogger(__name__)


class LedEventHandler(BootStateObserver):
    """
    Recomputes the LED presentation on every state change.

    The presentation is re-sent even when it did not change (e.g. power on
    while POST has not started yet); the sink is stateless from our side.
    """

    def __init__(self, renderer: LedRenderer):
        """
        Initialize the LED event handler.

        Args:
            renderer: Renderer that talks to the LED sink
        """
        self.renderer = renderer
        self.presentation: Optional[LedPresentation] = None

    def on_boot_state_changed(self, state: BootPowerState) -> None:
        """Resolve and render the presentation for `state`."""
        logger.info("Updating power LED")
        logger.debug(f"Boot/power state: {state}")
        self.sync(state)

    def sync(self, state: BootPowerState) -> LedPresentation:
        """
        Render the presentation for `state` unconditionally.

        Used directly at startup, before any event has been dispatched.
        """
        presentation = resolve_presentation(state)
        if presentation != self.presentation:
            logger.debug(f"Power LED presentation {self.presentation} -> {presentation}")
        self.presentation = presentation
        self.renderer.render(presentation)
        return presentation
