"""JSON file storage: one file per key inside a directory."""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from supplement_finder.services.storage import KeyValueStorage, StorageError


@dataclass
class JsonFileStorage(KeyValueStorage):
    """File-backed storage; writes replace the whole file atomically."""

    directory: Path

    @classmethod
    def create(cls, directory: str | Path) -> "JsonFileStorage":
        """Create storage rooted at a directory, creating it if needed."""
        path = Path(directory).expanduser()
        path.mkdir(parents=True, exist_ok=True)
        return cls(directory=path)

    def get(self, key: str) -> str | None:
        """Read the value stored for a key."""
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"Failed to read {path}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        """Write the value for a key via a temporary file and rename."""
        path = self._path_for(key)
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}") from exc

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"
