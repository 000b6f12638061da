"""Tests for the LED renderer and the LED state observer."""

import unittest
from unittest.mock import Mock

from powerled.exceptions import LedActuationError
from powerled.led import LedEventHandler, LedRenderer
from powerled.models import BootPowerState, LedPresentation, PowerLedConfig
from powerled.protocols import BootStateObserver, LedGroupSink

CONFIG = PowerLedConfig(
    post_start=bytes([0x01, 0x02, 0x00]),
    post_end=bytes([0x0A, 0x0B, 0x00]),
    booted_group="standby",
    post_active_group="post",
    fully_powered_on_group="on",
)


class TestLedRenderer(unittest.TestCase):
    """Test LedRenderer."""

    def setUp(self):
        self.sink = Mock(spec=LedGroupSink)
        self.renderer = LedRenderer(self.sink, CONFIG)

    def test_render_sets_every_group(self):
        failures = self.renderer.render(LedPresentation.POST_ACTIVE)

        assert failures == 0
        assert [c.args for c in self.sink.set_led_group.call_args_list] == [
            ("standby", False),
            ("on", False),
            ("post", True),
        ]

    def test_failed_group_does_not_stop_others(self):
        """A failing request is logged and the remaining groups are still sent."""
        self.sink.set_led_group.side_effect = [
            LedActuationError("standby", False, "UnknownObject"),
            None,
            None,
        ]

        failures = self.renderer.render(LedPresentation.POWERED_ON_COMPLETE)

        assert failures == 1
        assert self.sink.set_led_group.call_count == 3

    def test_unexpected_error_is_counted(self):
        self.sink.set_led_group.side_effect = RuntimeError("bus gone")

        assert self.renderer.render(LedPresentation.STANDBY) == 3


class TestLedEventHandler(unittest.TestCase):
    """Test LedEventHandler."""

    def setUp(self):
        self.renderer = Mock(spec=LedRenderer)
        self.handler = LedEventHandler(self.renderer)

    def test_is_boot_state_observer(self):
        assert isinstance(self.handler, BootStateObserver)

    def test_state_change_renders_presentation(self):
        self.handler.on_boot_state_changed(
            BootPowerState(host_power_on=True, boot_started=True)
        )

        self.renderer.render.assert_called_once_with(LedPresentation.POST_ACTIVE)
        assert self.handler.presentation == LedPresentation.POST_ACTIVE

    def test_unchanged_presentation_is_rendered_again(self):
        """Power on before POST starts still re-sends standby."""
        self.handler.sync(BootPowerState())
        self.handler.on_boot_state_changed(BootPowerState(host_power_on=True))

        assert self.renderer.render.call_count == 2
        self.renderer.render.assert_called_with(LedPresentation.STANDBY)

    def test_sync_returns_presentation(self):
        presentation = self.handler.sync(
            BootPowerState(host_power_on=True, boot_started=True, boot_ended=True)
        )

        assert presentation == LedPresentation.POWERED_ON_COMPLETE


if __name__ == '__main__':
    unittest.main()
