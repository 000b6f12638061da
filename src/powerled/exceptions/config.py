"""Errors raised while loading the power LED JSON config.

All of them are fatal: the daemon exits before touching the bus.
"""

from typing import Any, Optional

from .base import PowerLedError


class ConfigurationError(PowerLedError):
    """Configuration is invalid or cannot be loaded."""
    pass


class ConfigFileMissingError(ConfigurationError):
    """Configuration path was not provided or does not exist."""

    def __init__(self, file_path: Optional[str] = None):
        """
        Initialize config file missing error.

        Args:
            file_path: Path that was looked up, or None if no path was given
        """
        if file_path is None:
            user_msg = "Power LED controller config argument not provided"
            technical = "No configuration path passed on the command line"
            recovery = "Pass the config file with --config /path/to/power-led.json"
        else:
            user_msg = f"Power LED controller config file not found: {file_path}"
            technical = f"Config file does not exist: {file_path}"
            recovery = f"Check that {file_path} exists and is readable"

        super().__init__(
            user_message=user_msg,
            technical_message=technical,
            recoverable=False,
            recovery_hint=recovery,
        )
        self.file_path = file_path


class ConfigFileInvalidError(ConfigurationError):
    """Config file is empty, unreadable or not valid JSON."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Args:
            file_path: Config file that could not be parsed
            parse_error: Parser (or I/O) error text
        """
        reason = parse_error.lower()
        if "trailing comma" in reason:
            user_msg = "Power LED controller config has a trailing comma"
            recovery = f"Delete the comma after the last key or list element in {file_path}"
        elif "empty" in reason:
            user_msg = "Power LED controller config file is empty"
            recovery = f"Write the POST codes and LED group names to {file_path}"
        else:
            user_msg = "Power LED controller config is not valid JSON"
            recovery = (
                f"Fix the JSON syntax in {file_path} "
                "(unquoted strings and unbalanced brackets are the usual suspects)"
            )

        super().__init__(
            user_message=user_msg,
            technical_message=f"Cannot parse {file_path}: {parse_error}",
            recoverable=False,
            recovery_hint=recovery,
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """A config key is missing or has an unusable value."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        """
        Args:
            field: Config key (dotted location for nested errors)
            value: Offending value, if Pydantic reported one
            error_msg: Validation message
            file_path: Config file the value came from
        """
        hints = [f"Fix '{field}' in {file_path or 'the config file'}"]
        if field.endswith("_group"):
            hints.append("LED group names must be non-empty strings")
        elif field.startswith("POST_"):
            hints.append('POST codes are lists of 1 to 9 strings, one hex byte each, e.g. ["01", "a0", "00"]')

        super().__init__(
            user_message=f"Invalid value for '{field}': {error_msg}",
            technical_message=f"{field}={value!r} rejected: {error_msg}",
            recoverable=False,
            recovery_hint="\n".join(hints),
        )
        self.field = field
        self.value = value
        self.file_path = file_path
