"""Configuration management for Toaster."""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .core.engine import PresentationPolicy
from .store.archive import ArchivePolicy
from .store.scanner import ARCHIVED_SUFFIX, DEFAULT_STORE_PATH, TEMP_MARKER

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "toaster" / "config.toml"

# Overrides store.path when set (also read from a .env file)
STORE_ENV_VAR = "TOASTER_STORE"

PRESENTERS = ("console", "dialog", "log")


@dataclass
class StoreConfig:
    """Toast directory configuration."""

    path: Path = DEFAULT_STORE_PATH
    temp_marker: str = TEMP_MARKER  # any name containing this is ignored
    archived_suffix: str = ARCHIVED_SUFFIX

    def __post_init__(self):
        self.path = Path(self.path).expanduser()


@dataclass
class EngineConfig:
    """Lifecycle engine configuration."""

    poll_interval: float = 1.0
    recency_window_seconds: float = 60
    presentation: PresentationPolicy = PresentationPolicy.SINGLE
    max_concurrent: int = 4
    archive_policy: ArchivePolicy = ArchivePolicy.ARCHIVE

    def __post_init__(self):
        self.presentation = _enum(PresentationPolicy, self.presentation, "engine.presentation")
        self.archive_policy = _enum(ArchivePolicy, self.archive_policy, "engine.archive_policy")
        if self.poll_interval <= 0:
            raise ValueError("engine.poll_interval must be positive")
        if self.recency_window_seconds <= 0:
            raise ValueError("engine.recency_window_seconds must be positive")


@dataclass
class UIConfig:
    """Presenter configuration."""

    presenter: str = "console"  # console, dialog or log

    def __post_init__(self):
        if self.presenter not in PRESENTERS:
            raise ValueError(
                f"Invalid ui.presenter {self.presenter!r} (expected one of {', '.join(PRESENTERS)})"
            )


@dataclass
class Config:
    """Main configuration."""

    store: StoreConfig = field(default_factory=StoreConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_file: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create Config from dictionary."""
        return cls(
            store=StoreConfig(**data.get("store", {})),
            engine=EngineConfig(**data.get("engine", {})),
            ui=UIConfig(**data.get("ui", {})),
            log_file=Path(data["log_file"]) if data.get("log_file") else None,
        )


def _enum(enum_cls, value, key: str):
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"Invalid {key} {value!r} (expected one of {choices})") from None


def load_config(path: Path) -> Config:
    """
    Load configuration from TOML file.

    Args:
        path: Path to config file.

    Returns:
        Config object (defaults if file doesn't exist). The store path is
        taken from the TOASTER_STORE environment variable when set.
    """
    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)
        config = Config.from_dict(data)
    else:
        config = Config()

    store_override = os.getenv(STORE_ENV_VAR)
    if store_override:
        config.store.path = Path(store_override).expanduser()

    return config


def get_default_config_toml() -> str:
    """Return default configuration as TOML string."""
    return '''# Toaster Configuration

[store]
path = "~/.toasts"          # Directory watched for toast files
temp_marker = ".swp"        # Files containing this are never read
archived_suffix = ".toasted"

[engine]
poll_interval = 1.0             # Seconds between scans
recency_window_seconds = 60     # Older toast files are ignored
presentation = "single"         # "single" (oldest first, one per scan) or "concurrent"
max_concurrent = 4
archive_policy = "archive"      # "archive" (write <stem>.toasted) or "delete"

[ui]
presenter = "console"           # "console", "dialog" (osascript/zenity) or "log"

# Uncomment to enable file logging
# log_file = "~/.local/share/toaster/toaster.log"
'''
