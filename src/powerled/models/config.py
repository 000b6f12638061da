"""Power LED controller configuration model."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from powerled.exceptions import MAX_CODE_LENGTH, ConfigFileMissingError
from powerled.models.postcode import format_code, parse_hex_bytes
from powerled.utils.persistence import PydanticPersistence


class PowerLedConfig(BaseModel):
    """
    Reference POST codes and LED group names.

    Field aliases match the keys of the JSON document shipped with the
    platform, e.g.::

        {
            "POST_start": ["01", "00", "00"],
            "POST_end": ["0a", "00", "00"],
            "BMC_booted_group": "power_led_standby",
            "POST_active_group": "power_led_post",
            "fully_powered_on_group": "power_led_on"
        }
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    post_start: bytes = Field(
        alias="POST_start",
        description="POST code that marks the start of POST (list of hex byte strings)",
    )
    post_end: bytes = Field(
        alias="POST_end",
        description="POST code that marks the end of POST (list of hex byte strings)",
    )
    booted_group: str = Field(
        alias="BMC_booted_group",
        min_length=1,
        description="LED group asserted while in standby (BMC booted, host off or not in POST)",
    )
    post_active_group: str = Field(
        alias="POST_active_group",
        min_length=1,
        description="LED group asserted while the host is in POST",
    )
    fully_powered_on_group: str = Field(
        alias="fully_powered_on_group",
        min_length=1,
        description="LED group asserted once POST has completed",
    )

    @field_validator("post_start", "post_end", mode="before")
    @classmethod
    def parse_reference_code(cls, value: object) -> bytes:
        """Accept a list of hex byte strings (or raw bytes) of 1 to 9 bytes."""
        if isinstance(value, (bytes, bytearray)):
            code = bytes(value)
        elif isinstance(value, list):
            code = parse_hex_bytes(value)
        else:
            raise ValueError("must be a list of hex byte strings")

        if not 1 <= len(code) <= MAX_CODE_LENGTH:
            raise ValueError(f"must contain 1 to {MAX_CODE_LENGTH} bytes, got {len(code)}")
        return code

    @property
    def groups(self) -> tuple[str, str, str]:
        """LED group names in (booted, post_active, fully_powered_on) order."""
        return (self.booted_group, self.post_active_group, self.fully_powered_on_group)

    def describe(self) -> str:
        """Human readable summary for logs and the validate command."""
        return (
            f"POST_start={format_code(self.post_start)} "
            f"POST_end={format_code(self.post_end)} "
            f"groups(booted={self.booted_group}, post_active={self.post_active_group}, "
            f"fully_powered_on={self.fully_powered_on_group})"
        )

    @classmethod
    def load(cls, path: Path | None) -> "PowerLedConfig":
        """
        Load the configuration from a JSON file.

        Args:
            path: Path to the config file; None means no path was given

        Raises:
            ConfigFileMissingError: If no path was given or the file doesn't exist
            ConfigFileInvalidError: If the file is empty or not valid JSON
            ConfigValidationError: If a field is missing or malformed
        """
        if path is None:
            raise ConfigFileMissingError()
        return PydanticPersistence.load_json(path, cls)
