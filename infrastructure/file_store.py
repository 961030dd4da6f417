"""Byte-level file primitives scoped to one private application root.

Reads never raise and report missing or unreadable files as `None`. Writes are
atomic (temp file in the target directory, fsync, then `os.replace`) and
report their outcome as a `WriteResult`; what happens on failure is decided by
the configured write-failure policy:

- ``log``: log at error level and return a failed result (default).
- ``ignore``: return a failed result, logging only at debug level.
- ``raise``: raise `StorageWriteError`.
"""

from __future__ import annotations

import os
from pathlib import Path
import shutil
import tempfile

from loguru import logger
from send2trash import send2trash

from core.services.interfaces import StorageWriteError, WriteResult
from infrastructure.settings import WRITE_FAILURE_POLICIES, StorageSettings


class FileStore:
    """Read, atomically write, list and remove files under `root`."""

    def __init__(
        self,
        root: str | Path,
        write_failure_policy: str = "log",
        use_recycle_bin: bool = False,
    ) -> None:
        if write_failure_policy not in WRITE_FAILURE_POLICIES:
            raise ValueError(f"Unknown write failure policy: {write_failure_policy}")
        self._root = Path(root).expanduser().absolute()
        self._policy = write_failure_policy
        self._use_recycle_bin = use_recycle_bin

    @classmethod
    def from_settings(cls, storage: StorageSettings) -> FileStore:
        return cls(
            storage.root_dir,
            write_failure_policy=storage.write_failure_policy,
            use_recycle_bin=storage.use_recycle_bin,
        )

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, path: str | Path) -> Path:
        """Return `path` anchored under the root when it is relative."""
        p = Path(path)
        return p if p.is_absolute() else self._root / p

    def ensure_directory(self, path: str | Path = "") -> None:
        """Create `path` and missing ancestors; failures are logged, never raised."""
        target = self.resolve(path)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as ex:
            logger.warning("Create directory failed for {}: {}", target, ex)

    def read_all(self, path: str | Path) -> bytes | None:
        """Return the file content, or None when missing or unreadable."""
        target = self.resolve(path)
        try:
            return target.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as ex:
            logger.debug("Read failed for {}: {}", target, ex)
            return None

    def write_all(self, path: str | Path, data: bytes) -> WriteResult:
        """Atomically replace the file at `path` with `data`."""
        target = self.resolve(path)
        self.ensure_directory(target.parent)
        tmp_path: Path | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
            )
            tmp_path = Path(tmp_name)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, target)
            tmp_path = None
        except OSError as ex:
            return self._failed(target, f"write failed: {ex}", ex)
        finally:
            if tmp_path is not None:
                try:
                    tmp_path.unlink(missing_ok=True)
                except OSError as ex:
                    logger.debug("Temp cleanup failed for {}: {}", tmp_path, ex)
        logger.debug("Wrote {} bytes to {}", len(data), target)
        return WriteResult(path=str(target), success=True)

    def remove(self, path: str | Path) -> WriteResult:
        """Remove a file or directory tree; a missing target counts as success."""
        target = self.resolve(path)
        if not target.exists() and not target.is_symlink():
            return WriteResult(path=str(target), success=True)
        try:
            if self._use_recycle_bin:
                send2trash(str(target))
            elif target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except FileNotFoundError:
            return WriteResult(path=str(target), success=True)
        except OSError as ex:
            return self._failed(target, f"remove failed: {ex}", ex)
        logger.info("Removed {}", target)
        return WriteResult(path=str(target), success=True)

    def list_children(self, path: str | Path = "") -> list[Path]:
        """Return immediate children of `path` sorted by name; empty when absent."""
        target = self.resolve(path)
        try:
            return sorted(target.iterdir(), key=lambda p: p.name)
        except (FileNotFoundError, NotADirectoryError):
            return []
        except OSError as ex:
            logger.debug("List failed for {}: {}", target, ex)
            return []

    def _failed(self, target: Path, reason: str, ex: OSError) -> WriteResult:
        if self._policy == "raise":
            raise StorageWriteError(reason) from ex
        if self._policy == "log":
            logger.error("Storage failure for {}: {}", target, reason)
        else:
            logger.debug("Storage failure ignored for {}: {}", target, reason)
        return WriteResult(path=str(target), success=False, reason=reason)
