"""
Helpers that turn failures into PowerLedError instances and log lines.

Where each layer deals with errors:

```
CLI           - prints user_message / recovery_hint, picks the exit code
Orchestrator  - startup policy: degrade (empty history, host off) or abort
Transport     - jeepney errors become BusQueryError / LedActuationError
Config        - Pydantic errors become ConfigurationError subclasses
```
"""

import logging
from typing import Optional

from .base import PowerLedError
from .config import ConfigFileInvalidError, ConfigValidationError

logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Log a failing block with the name of what it was doing.

    Example:
        ```python
        with ErrorContext("subscribe to host state", logger_instance=logger):
            transport.subscribe()
        ```

    The exception propagates unless `re_raise=False`; either way it is kept
    on `self.error`.
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[BaseException] = None

    def __enter__(self):
        self.logger.debug(f"{self.operation}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val is None:
            self.logger.debug(f"{self.operation}: done")
            return False

        self.error = exc_val
        if isinstance(exc_val, PowerLedError):
            # Known failure, the technical message says it all
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)
        return not self.re_raise


def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "document"


def wrap_pydantic_error(error: Exception, file_path: str) -> PowerLedError:
    """
    Map a Pydantic ValidationError raised while loading `file_path`.

    - A `json_invalid` error becomes ConfigFileInvalidError
    - A single field error becomes ConfigValidationError for that field
    - Several errors are folded into one ConfigValidationError
    """
    from pydantic import ValidationError

    if not isinstance(error, ValidationError):
        return ConfigValidationError("unknown", None, str(error), file_path=file_path)

    details = error.errors()
    if details and details[0].get("type") == "json_invalid":
        reason = (details[0].get("ctx") or {}).get("error", details[0].get("msg"))
        return ConfigFileInvalidError(file_path, str(reason))

    if len(details) == 1:
        detail = details[0]
        return ConfigValidationError(
            field=_field_name(detail.get("loc", ())),
            value=detail.get("input"),
            error_msg=detail.get("msg", "validation failed"),
            file_path=file_path,
        )

    lines = [
        f"  - {_field_name(detail.get('loc', ()))}: {detail.get('msg', 'validation failed')}"
        for detail in details
    ]
    return ConfigValidationError(
        field="multiple fields",
        value=None,
        error_msg=f"{len(details)} validation errors:\n" + "\n".join(lines),
        file_path=file_path,
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """Return (message, recovery hint or None) for printing on the console."""
    if isinstance(error, PowerLedError):
        return error.user_message, error.recovery_hint
    return f"{type(error).__name__}: {error}", None
