"""JSON file backend: one file per key under a directory."""

import logging
import os
import re
from pathlib import Path

from mhimmo.exceptions import StorageError

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileBackend:
    """Durable local key-value slots stored as ``<key>.json`` files."""

    def __init__(self, data_dir: str | Path) -> None:
        """Initialize JSON file backend.

        Parameters
        ----------
        data_dir : str | Path
            Directory holding one JSON file per key.
        """
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise StorageError(f"Invalid storage key {key!r}")
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        """Write a slot, replacing the whole file at once."""
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        logger.debug("Wrote %s (%d bytes)", path, len(value))

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}") from e

    def keys(self) -> list[str]:
        return sorted(p.stem for p in self.data_dir.glob("*.json"))

    def close(self) -> None:
        pass
