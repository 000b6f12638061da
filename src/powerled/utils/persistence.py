"""Reading Pydantic models from JSON files on disk."""

import logging
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from powerled.exceptions import (
    ConfigFileInvalidError,
    ConfigFileMissingError,
    wrap_pydantic_error,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class PydanticPersistence:
    """
    Loads a model from JSON and reports every failure as a ConfigurationError.

    Example:
        ```python
        config = PydanticPersistence.load_json(Path("config.json"), PowerLedConfig)
        ```
    """

    @staticmethod
    def load_json(path: Path, model_type: type[ModelT]) -> ModelT:
        """
        Parse `path` and validate it as `model_type`.

        Raises:
            ConfigFileMissingError: `path` does not exist
            ConfigFileInvalidError: `path` is empty, unreadable or not JSON
            ConfigValidationError: the document does not fit `model_type`
        """
        if not path.exists():
            raise ConfigFileMissingError(str(path))

        try:
            text = path.read_text()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigFileInvalidError(str(path), f"cannot read file: {e}") from e

        if not text.strip():
            raise ConfigFileInvalidError(str(path), "File is empty")

        try:
            model = model_type.model_validate_json(text)
        except ValidationError as e:
            logger.debug(f"{model_type.__name__} validation failed for {path}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        logger.debug(f"Loaded {model_type.__name__} from {path}")
        return model
