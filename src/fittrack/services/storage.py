"""Best-effort JSON key-value persistence."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

_logger = logging.getLogger(__name__)

CLIENTS_KEY = "clients"
SESSIONS_KEY = "sessions"
USERS_KEY = "users"
CURRENT_USER_KEY = "currentUser"


class KeyValueBackend(Protocol):
    """Raw string storage keyed by name."""

    def read(self, key: str) -> str | None:
        """Return the stored text for a key, if present."""

    def write(self, key: str, raw: str) -> None:
        """Store text under a key, replacing any previous value."""

    def delete(self, key: str) -> None:
        """Remove a key if present."""


@dataclass
class StorageAdapter:
    """JSON codec over a backend that never raises to its callers.

    Malformed stored content reads as absent. Write failures are logged and
    reported as ``False``; in-memory state stays authoritative.
    """

    backend: KeyValueBackend

    def get(self, key: str) -> object | None:
        """Return the deserialized value for a key, or None."""
        try:
            raw = self.backend.read(key)
        except Exception:
            _logger.exception("Storage read failed: key=%s", key)
            return None
        if raw is None or raw == "":
            return None
        try:
            return json.loads(raw)
        except ValueError:
            _logger.warning("Discarding malformed stored value: key=%s", key)
            return None

    def set(self, key: str, value: object) -> bool:
        """Serialize and store a value; return whether it was persisted."""
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError):
            _logger.exception("Storage serialization failed: key=%s", key)
            return False
        try:
            self.backend.write(key, raw)
        except Exception:
            _logger.exception("Storage write failed: key=%s", key)
            return False
        return True

    def remove(self, key: str) -> bool:
        """Delete a key; return whether the backend accepted it."""
        try:
            self.backend.delete(key)
        except Exception:
            _logger.exception("Storage delete failed: key=%s", key)
            return False
        return True
