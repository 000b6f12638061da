"""Tests for the config model and loading it from disk."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from powerled.exceptions import (
    ConfigFileInvalidError,
    ConfigFileMissingError,
    ConfigValidationError,
)
from powerled.models import PowerLedConfig, parse_hex_bytes


def write_config(temp_dir: Path, data: dict) -> Path:
    path = temp_dir / "config.json"
    path.write_text(json.dumps(data))
    return path


@pytest.mark.unit
class TestPowerLedConfig:
    """Test PowerLedConfig validation."""

    def test_parse_aliases(self, config):
        assert config.post_start == bytes([0x01, 0x02, 0x00])
        assert config.post_end == bytes([0x0A, 0x0B, 0x00])
        assert config.booted_group == "power_led_standby"
        assert config.post_active_group == "power_led_post"
        assert config.fully_powered_on_group == "power_led_on"

    def test_groups_order(self, config):
        assert config.groups == ("power_led_standby", "power_led_post", "power_led_on")

    def test_populate_by_field_name(self):
        config = PowerLedConfig(
            post_start=b"\x01\x00",
            post_end=b"\x02\x00",
            booted_group="a",
            post_active_group="b",
            fully_powered_on_group="c",
        )
        assert config.post_start == b"\x01\x00"

    def test_uppercase_hex(self, config_data):
        config_data["POST_end"] = ["0A", "FF"]
        assert PowerLedConfig.model_validate(config_data).post_end == b"\x0a\xff"

    def test_extra_keys_ignored(self, config_data):
        config_data["comment"] = "platform power LED"
        assert PowerLedConfig.model_validate(config_data).booted_group == "power_led_standby"

    def test_frozen(self, config):
        with pytest.raises(ValidationError):
            config.booted_group = "other"

    def test_describe(self, config):
        text = config.describe()
        assert "POST_start=01 02 00" in text
        assert "POST_end=0a 0b 00" in text
        assert "power_led_on" in text

    @pytest.mark.parametrize(
        "value",
        [
            [],
            ["zz"],
            ["100"],
            ["0x1f"],
            ["1_0"],
            ["+5"],
            [" 1"],
            ["00"] * 10,
            "01 02 00",
            [1, 2],
        ],
    )
    def test_invalid_reference_code(self, config_data, value):
        config_data["POST_start"] = value
        with pytest.raises(ValidationError):
            PowerLedConfig.model_validate(config_data)

    def test_empty_group_name(self, config_data):
        config_data["POST_active_group"] = ""
        with pytest.raises(ValidationError):
            PowerLedConfig.model_validate(config_data)


@pytest.mark.unit
class TestLoadConfig:
    """Test PowerLedConfig.load error mapping."""

    def test_load_valid(self, config_file):
        config = PowerLedConfig.load(config_file)
        assert config.post_start == bytes([0x01, 0x02, 0x00])

    def test_no_path(self):
        with pytest.raises(ConfigFileMissingError) as exc_info:
            PowerLedConfig.load(None)
        assert exc_info.value.file_path is None
        assert "not provided" in exc_info.value.user_message

    def test_missing_file(self, temp_dir):
        path = temp_dir / "nope.json"
        with pytest.raises(ConfigFileMissingError) as exc_info:
            PowerLedConfig.load(path)
        assert exc_info.value.file_path == str(path)

    def test_empty_file(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("   \n")
        with pytest.raises(ConfigFileInvalidError) as exc_info:
            PowerLedConfig.load(path)
        assert "empty" in exc_info.value.user_message

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text('{"POST_start": ["01", "00"]')
        with pytest.raises(ConfigFileInvalidError):
            PowerLedConfig.load(path)

    def test_trailing_comma(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text('{"POST_start": ["01", "00"],}')
        with pytest.raises(ConfigFileInvalidError):
            PowerLedConfig.load(path)

    def test_missing_key(self, temp_dir, config_data):
        del config_data["POST_end"]
        path = write_config(temp_dir, config_data)

        with pytest.raises(ConfigValidationError) as exc_info:
            PowerLedConfig.load(path)
        assert exc_info.value.field == "POST_end"
        assert exc_info.value.file_path == str(path)
        assert "hex byte" in exc_info.value.recovery_hint

    def test_bad_hex(self, temp_dir, config_data):
        config_data["POST_start"] = ["01", "zz"]
        path = write_config(temp_dir, config_data)

        with pytest.raises(ConfigValidationError) as exc_info:
            PowerLedConfig.load(path)
        assert exc_info.value.field == "POST_start"
        assert "'zz' is not a hex byte" in exc_info.value.user_message

    def test_code_too_long(self, temp_dir, config_data):
        config_data["POST_end"] = ["00"] * 10
        path = write_config(temp_dir, config_data)

        with pytest.raises(ConfigValidationError) as exc_info:
            PowerLedConfig.load(path)
        assert "1 to 9 bytes" in exc_info.value.user_message

    def test_empty_post_active_group_gets_group_hint(self, temp_dir, config_data):
        config_data["POST_active_group"] = ""
        path = write_config(temp_dir, config_data)

        with pytest.raises(ConfigValidationError) as exc_info:
            PowerLedConfig.load(path)
        assert exc_info.value.field == "POST_active_group"
        assert "non-empty" in exc_info.value.recovery_hint
        assert "hex byte" not in exc_info.value.recovery_hint

    def test_empty_group(self, temp_dir, config_data):
        config_data["fully_powered_on_group"] = ""
        path = write_config(temp_dir, config_data)

        with pytest.raises(ConfigValidationError) as exc_info:
            PowerLedConfig.load(path)
        assert exc_info.value.field == "fully_powered_on_group"
        assert "non-empty" in exc_info.value.recovery_hint

    def test_multiple_errors(self, temp_dir, config_data):
        del config_data["POST_start"]
        del config_data["BMC_booted_group"]
        path = write_config(temp_dir, config_data)

        with pytest.raises(ConfigValidationError) as exc_info:
            PowerLedConfig.load(path)
        assert exc_info.value.field == "multiple fields"
        assert "POST_start" in exc_info.value.user_message
        assert "BMC_booted_group" in exc_info.value.user_message

    def test_not_an_object(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ConfigValidationError):
            PowerLedConfig.load(path)


@pytest.mark.unit
class TestParseHexBytes:
    """Test parse_hex_bytes."""

    def test_one_or_two_digits(self):
        assert parse_hex_bytes(["01", "a", "FF", "0b"]) == b"\x01\x0a\xff\x0b"

    @pytest.mark.parametrize("elem", ["0x1f", "1_0", "+5", "-1", "", "1f ", "100"])
    def test_rejects_anything_but_plain_hex_digits(self, elem):
        with pytest.raises(ValueError):
            parse_hex_bytes([elem])
