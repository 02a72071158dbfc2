"""
Runtime settings read from the environment.

A local .env file is loaded by the CLI before settings are read, so the
same variables can live there:

    APOSPLIT_INPUT_DIR   directory scanned for PDFs (default: input)
    APOSPLIT_OUTPUT_DIR  root directory for split files (default: output)
    APOSPLIT_LOG_LEVEL   logging level name (default: INFO)
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class Settings:
    """Directories and log level for a split run."""

    input_dir: str = "input"
    output_dir: str = "output"
    log_level: str = "INFO"

    @property
    def log_level_value(self) -> int:
        """Numeric logging level; unknown names fall back to INFO."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environ (os.environ by default), ignoring blank values."""
    env = os.environ if environ is None else environ
    defaults = Settings()
    return Settings(
        input_dir=(env.get("APOSPLIT_INPUT_DIR") or "").strip() or defaults.input_dir,
        output_dir=(env.get("APOSPLIT_OUTPUT_DIR") or "").strip() or defaults.output_dir,
        log_level=(env.get("APOSPLIT_LOG_LEVEL") or "").strip() or defaults.log_level,
    )
