"""Runtime configuration for formrules tooling."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_SCHEMA_DIR = "forms"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Settings:
    """Settings for the CLI and schema loading.

    Attributes:
        schema_path: Directory holding YAML form schemas
        log_level: Logging level name (DEBUG, INFO, WARNING, ...)
    """

    schema_path: Path
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> Settings:
        """Create settings from environment variables.

        Resolution order for the schema directory:
        1. FORMRULES_SCHEMA_PATH env var
        2. {base_path}/forms when base_path is given
        3. ./forms
        """
        schema_path = os.environ.get("FORMRULES_SCHEMA_PATH")
        if schema_path:
            path = Path(schema_path)
        elif base_path is not None:
            path = base_path / DEFAULT_SCHEMA_DIR
        else:
            path = Path.cwd() / DEFAULT_SCHEMA_DIR

        log_level = os.environ.get("FORMRULES_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        return cls(schema_path=path, log_level=log_level)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging for command-line use.

    Raises:
        ValueError: For an unknown level name
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
