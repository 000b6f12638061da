"""Power LED controller: derives the power LED from host power state and POST codes."""

__version__ = "0.1.0"
