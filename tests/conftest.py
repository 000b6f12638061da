"""Pytest fixtures for tests."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from powerled.exceptions import LedActuationError
from powerled.models import PostCode, PowerLedConfig

POST_START = bytes([0x01, 0x02, 0x00])
POST_END = bytes([0x0A, 0x0B, 0x00])

CONFIG_DATA = {
    "POST_start": ["01", "02", "00"],
    "POST_end": ["0a", "0b", "00"],
    "BMC_booted_group": "power_led_standby",
    "POST_active_group": "power_led_post",
    "fully_powered_on_group": "power_led_on",
}


class FakeTransport:
    """In-memory stand-in for the D-Bus transport."""

    def __init__(
        self,
        power_on=False,
        post_codes=None,
        events=None,
        power_error=None,
        history_error=None,
        subscribe_error=None,
        failing_groups=(),
    ):
        self.power_on = power_on
        self.post_codes = list(post_codes or [])
        self.events = list(events or [])
        self.power_error = power_error
        self.history_error = history_error
        self.subscribe_error = subscribe_error
        self.failing_groups = set(failing_groups)

        self.calls: list = []
        self.led_requests: list[tuple[str, bool]] = []
        self.stopped = False
        self.closed = False

    def connect(self):
        self.calls.append("connect")

    def query_power_state(self):
        self.calls.append("query_power_state")
        if self.power_error:
            raise self.power_error
        return self.power_on

    def query_post_codes(self):
        self.calls.append("query_post_codes")
        if self.history_error:
            raise self.history_error
        return list(self.post_codes)

    def set_led_group(self, group, asserted):
        self.calls.append(("set_led_group", group, asserted))
        if group in self.failing_groups:
            raise LedActuationError(group, asserted, "org.freedesktop.DBus.Error.UnknownObject")
        self.led_requests.append((group, asserted))

    def subscribe(self):
        self.calls.append("subscribe")
        if self.subscribe_error:
            raise self.subscribe_error

    def run(self, handler):
        for event in self.events:
            if self.stopped:
                break
            handler(event)

    def stop(self):
        self.stopped = True

    def close(self):
        self.closed = True

    def lit_groups(self) -> set[str]:
        """Groups whose most recent request was asserted=True."""
        latest: dict[str, bool] = {}
        for group, asserted in self.led_requests:
            latest[group] = asserted
        return {group for group, asserted in latest.items() if asserted}


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_data():
    """Raw config document as shipped on the platform."""
    return json.loads(json.dumps(CONFIG_DATA))


@pytest.fixture
def config(config_data):
    """A validated PowerLedConfig."""
    return PowerLedConfig.model_validate(config_data)


@pytest.fixture
def config_file(temp_dir, config_data):
    """Config document written to disk."""
    path = temp_dir / "power-led.json"
    path.write_text(json.dumps(config_data, indent=2))
    return path


@pytest.fixture
def make_transport():
    """Factory for FakeTransport instances."""
    return FakeTransport


@pytest.fixture
def start_code():
    """A full 9-byte POST code whose tail matches POST_start."""
    return PostCode(primary=0x01, secondary=bytes([0, 0, 0, 0, 0, 0, 0x01, 0x02, 0x03]))


@pytest.fixture
def end_code():
    """A full 9-byte POST code whose tail matches POST_end."""
    return PostCode(primary=0x0A, secondary=bytes([0, 0, 0, 0, 0, 0, 0x0A, 0x0B, 0x01]))


@pytest.fixture
def noise_code():
    """A POST code matching neither reference."""
    return PostCode(primary=0x55, secondary=bytes([0, 0, 0, 0, 0, 0, 0x55, 0x66, 0x00]))
