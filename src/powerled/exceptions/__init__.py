"""
Custom exception hierarchy for the power LED controller.

## Exception Hierarchy

```
PowerLedError (base)
├── ConfigurationError
│   ├── ConfigFileMissingError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
├── PostCodeLengthError
└── TransportError
    ├── BusQueryError
    └── LedActuationError
```

All custom exceptions inherit from `PowerLedError`, which provides
`user_message`, `technical_message`, `recoverable` and `recovery_hint`.

### Example: Config Validation Error

```python
from powerled.exceptions import ConfigValidationError

raise ConfigValidationError(
    field="POST_start",
    value=["zz"],
    error_msg="'zz' is not a hex byte",
    file_path="/usr/share/power-led/config.json"
)
```

Configuration errors are fatal before the event loop starts. POST code length
errors, query errors and LED actuation errors are logged and absorbed.
"""

from .base import PowerLedError
from .config import (
    ConfigFileInvalidError,
    ConfigFileMissingError,
    ConfigurationError,
    ConfigValidationError,
)
from .handlers import (
    ErrorContext,
    format_error_for_display,
    wrap_pydantic_error,
)
from .postcode import MAX_CODE_LENGTH, PostCodeLengthError
from .transport import BusQueryError, LedActuationError, TransportError

__all__ = [
    # Base
    "PowerLedError",
    # Config
    "ConfigFileInvalidError",
    "ConfigFileMissingError",
    "ConfigValidationError",
    "ConfigurationError",
    # POST codes
    "MAX_CODE_LENGTH",
    "PostCodeLengthError",
    # Transport
    "BusQueryError",
    "LedActuationError",
    "TransportError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "wrap_pydantic_error",
]
