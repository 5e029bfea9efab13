"""Runtime config — YAML file overlaid on defaults and env vars.

Application code calls load_config() to get current values.
Falls back to defaults if the file is missing or unreadable; a missing file
is written back so the user has something to edit.
"""
from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import structlog
import yaml

from src.cleaner.config import ProcessorConfig

log = structlog.get_logger()

CONFIG_ENV = "READITNOW_CONFIG"
VAULT_ENV = "READITNOW_VAULT"


@dataclass
class Keybindings:
    """Key names as Textual reports them (``up``, ``pagedown``, ``q`` …)."""

    open_link: str = "enter"
    open_file: str = "shift+enter"
    toggle_read: str = "r"
    up: str = "up"
    down: str = "down"
    left: str = "left"
    right: str = "right"
    page_up: str = "pageup"
    page_down: str = "pagedown"
    quit: str = "q"


@dataclass
class AppConfig:
    vault_path: str = "~/vault/ReadItLater Inbox"
    max_notes: int = 20
    excerpt_lines: int = 5
    keybindings: Keybindings = field(default_factory=Keybindings)
    processor: ProcessorConfig = field(default_factory=ProcessorConfig)

    @property
    def vault_dir(self) -> Path:
        return Path(self.vault_path).expanduser()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        """Build a config from parsed YAML. Unknown keys are ignored and
        missing keys keep their defaults."""
        defaults = cls()
        scalars = {
            name: _coerce(name, data[name], getattr(defaults, name))
            for name in ("vault_path", "max_notes", "excerpt_lines")
            if name in data
        }
        for name in ("max_notes", "excerpt_lines"):
            if scalars.get(name, 0) < 0:
                raise ValueError(f"{name} must be >= 0, got {scalars[name]}")
        return cls(
            **scalars,
            keybindings=_sub_dataclass(Keybindings, data.get("keybindings")),
            processor=_sub_dataclass(ProcessorConfig, data.get("processor")),
        )

    def save(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            yaml.safe_dump(self.to_dict(), sort_keys=False), encoding="utf-8"
        )
        log.debug("config_saved", path=str(path))

    @classmethod
    def load(cls, path: str | Path) -> AppConfig:
        """Read *path*. Raises ``OSError`` or ``ValueError`` on a bad file."""
        raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"config root must be a mapping, got {type(raw).__name__}")
        return cls.from_dict(raw)


def _coerce(name: str, value: Any, default: Any) -> Any:
    """Convert a YAML value to the type of *default*; ValueError if it can't be."""
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ValueError(f"{name} must be true or false, got {value!r}")
        return value
    if isinstance(default, int):
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if value is None or isinstance(value, (dict, list)):
        raise ValueError(f"{name} must be a string, got {value!r}")
    return str(value)


def _sub_dataclass(cls: type, data: Any) -> Any:
    if not isinstance(data, dict):
        return cls()
    defaults = cls()
    return cls(**{
        f.name: _coerce(f.name, data[f.name], getattr(defaults, f.name))
        for f in fields(cls) if f.name in data
    })


def default_config_path() -> Path:
    env = os.getenv(CONFIG_ENV)
    if env:
        return Path(env).expanduser()
    return Path.home() / ".config" / "readitnow" / "config.yaml"


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load the config file, falling back to defaults.

    ``READITNOW_VAULT`` overrides ``vault_path`` regardless of where the
    rest of the config came from.
    """
    path = Path(path) if path is not None else default_config_path()
    if path.exists():
        try:
            config = AppConfig.load(path)
        except (OSError, ValueError, TypeError, yaml.YAMLError) as exc:
            log.warning("config_read_failed", path=str(path), error=str(exc), using="defaults")
            config = AppConfig()
    else:
        config = AppConfig()
        try:
            config.save(path)
        except OSError as exc:
            log.warning("config_write_failed", path=str(path), error=str(exc))

    vault = os.getenv(VAULT_ENV)
    if vault:
        config.vault_path = vault
    return config
