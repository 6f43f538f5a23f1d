"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from fittrack.config import Settings
from fittrack.containers import AppContainer, build_container
from fittrack.domain.inputs import ClientDraft, SessionDraft
from fittrack.domain.models import ClientRecord, SessionStatus
from fittrack.services.ledger import IdSequence, LedgerStore
from fittrack.services.queries import SessionQueries
from fittrack.services.storage import KeyValueBackend, StorageAdapter

TODAY = date(2025, 3, 5)


@dataclass
class InMemoryBackend(KeyValueBackend):
    """In-memory key-value backend for tests."""

    values: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, raw: str) -> None:
        self.values[key] = raw
        self.writes.append(key)

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


@dataclass
class FailingBackend(KeyValueBackend):
    """Backend whose writes always fail, like a full browser quota."""

    values: dict[str, str] = field(default_factory=dict)

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, raw: str) -> None:
        raise OSError("quota exceeded")

    def delete(self, key: str) -> None:
        raise OSError("quota exceeded")


class CountingClock:
    """Deterministic millisecond clock that always returns the same value."""

    def __init__(self, value: int = 1_700_000_000_000) -> None:
        self.value = value

    def __call__(self) -> int:
        return self.value


def add_client(
    ledger: LedgerStore, name: str = "John Smith", remaining: int = 8, **extra
) -> ClientRecord:
    email = extra.pop("email", f"{name.split()[0].lower()}@email.com")
    return ledger.create_client(
        ClientDraft(name=name, email=email, sessions_remaining=remaining, **extra)
    )


def session_draft(
    client: ClientRecord,
    status: SessionStatus = SessionStatus.UPCOMING,
    day: str = "2025-03-10",
    start: str = "14:00",
    **extra,
) -> SessionDraft:
    return SessionDraft(
        client_id=client.id,
        client_name=client.name,
        date=day,
        time=start,
        duration=extra.pop("duration", 60),
        workout_type=extra.pop("workout_type", "Strength Training"),
        status=status,
        **extra,
    )


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def storage(backend: InMemoryBackend) -> StorageAdapter:
    return StorageAdapter(backend)


@pytest.fixture
def ledger(storage: StorageAdapter) -> LedgerStore:
    return LedgerStore(storage, ids=IdSequence(CountingClock()))


@pytest.fixture
def queries(ledger: LedgerStore) -> SessionQueries:
    return SessionQueries(ledger)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(storage_backend="file", storage_dir=str(tmp_path / "store"))


@pytest.fixture
def container(settings: Settings, backend: InMemoryBackend) -> AppContainer:
    return build_container(settings, backend=backend, today=lambda: TODAY)
