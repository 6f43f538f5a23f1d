"""File-backed key-value storage."""

import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path

from fittrack.services.storage import KeyValueBackend

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class JsonFileBackend(KeyValueBackend):
    """Stores each key as ``<key>.json`` inside a directory."""

    directory: Path

    @classmethod
    def create(cls, directory: str | Path) -> "JsonFileBackend":
        """Create a backend, making the directory if needed."""
        path = Path(directory)
        path.mkdir(parents=True, exist_ok=True)
        return cls(directory=path)

    def read(self, key: str) -> str | None:
        """Return the file contents for a key, if the file exists."""
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, raw: str) -> None:
        """Replace the file for a key atomically."""
        path = self._path_for(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(raw)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        """Remove the file for a key."""
        self._path_for(key).unlink(missing_ok=True)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"
