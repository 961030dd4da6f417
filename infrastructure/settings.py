"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Any

from loguru import logger

DEFAULT_ROOT_DIR = str(Path.home() / ".voya")
WRITE_FAILURE_POLICIES = ("log", "ignore", "raise")


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JsonSettings:
        """Build settings from an in-memory mapping (no file involved)."""
        inst = cls.__new__(cls)
        inst._path = Path("<memory>")
        inst._data = data
        return inst

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


@dataclass
class StorageSettings:
    """Storage options resolved from `settings.json`.

    Attributes:
        root_dir: Private application root holding every data file.
        write_failure_policy: One of `log`, `ignore`, `raise`.
        use_recycle_bin: Send removed trip folders to the recycle bin.
    """

    root_dir: str = DEFAULT_ROOT_DIR
    write_failure_policy: str = "log"
    use_recycle_bin: bool = False

    @classmethod
    def from_settings(cls, settings: JsonSettings | None) -> StorageSettings:
        if settings is None:
            return cls()
        raw_root = settings.get("storage.root_dir", DEFAULT_ROOT_DIR)
        root_dir = DEFAULT_ROOT_DIR
        if isinstance(raw_root, str) and raw_root.strip():
            root_dir = os.path.expanduser(os.path.expandvars(raw_root))
        policy = str(settings.get("storage.write_failure_policy", "log") or "log").lower()
        if policy not in WRITE_FAILURE_POLICIES:
            logger.warning("Unknown write_failure_policy {!r}, using 'log'", policy)
            policy = "log"
        return cls(
            root_dir=root_dir,
            write_failure_policy=policy,
            use_recycle_bin=bool(settings.get("storage.use_recycle_bin", False)),
        )
