"""Configuration for gitshadow, loaded from the environment."""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class ShadowConfig:
    """Settings shared by every shadow command."""

    # Storage
    storage_root: Path = field(default_factory=lambda: Path.home() / ".git-shadow")

    # Defaults substituted by the command line
    default_branch: str = "main"
    default_remote: str = "origin"
    log_count: int = 10

    # Logging
    log_level: str = "WARNING"

    def __post_init__(self):
        if isinstance(self.storage_root, str):
            self.storage_root = Path(self.storage_root)
        self.storage_root = self.storage_root.expanduser()

        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}. Must be one of {VALID_LOG_LEVELS}")

        if not self.default_branch:
            raise ValueError("default_branch must not be empty")

        if self.log_count <= 0:
            raise ValueError("log_count must be positive")

    def storage_path(self, identity: str) -> Path:
        """Directory of the shadow repository for a project identity."""
        return self.storage_root / identity


def load_configuration() -> ShadowConfig:
    """Load configuration from environment variables."""
    try:
        return ShadowConfig(
            storage_root=Path(os.getenv("SHADOW_DIR", str(Path.home() / ".git-shadow"))),
            log_level=os.getenv("SHADOW_LOG_LEVEL", "WARNING"),
        )
    except (ValueError, TypeError) as e:
        raise ValueError(f"Configuration error: {e}")


def configure_logging(config: ShadowConfig, verbose: bool = False) -> None:
    """Send log records to stderr at the configured level."""
    level = logging.DEBUG if verbose else getattr(logging, config.log_level)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("gitshadow").setLevel(level)
