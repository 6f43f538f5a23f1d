"""Client/session ledger that keeps credit balances in step with bookings.

Credit rules:

* creating a session as ``upcoming`` debits one credit from its client, but
  only while the balance is above zero; creation itself is never blocked;
* creating a ``pending`` session debits nothing;
* deleting an ``upcoming`` or ``pending`` session refunds one credit, with
  no ceiling and no check that a debit ever happened;
* edits never move credit, even when they change ``status``.

Every mutation is flushed to storage immediately. Storage failures are
logged by the adapter and the in-memory collections stay authoritative.
"""

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import TypeVar

from fittrack.domain.inputs import ClientDraft, ClientPatch, SessionDraft, SessionPatch
from fittrack.domain.models import (
    LIVE_STATUSES,
    ClientRecord,
    SessionRecord,
    SessionStatus,
)
from fittrack.services.storage import CLIENTS_KEY, SESSIONS_KEY, StorageAdapter

_logger = logging.getLogger(__name__)

_Record = TypeVar("_Record", ClientRecord, SessionRecord)


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


class IdSequence:
    """Issues wall-clock millisecond ids that never repeat within a process."""

    def __init__(self, clock: Callable[[], int] = _now_millis) -> None:
        self._clock = clock
        self._last = 0

    def observe(self, value: int) -> None:
        """Make sure future ids are greater than an existing id."""
        self._last = max(self._last, value)

    def next_id(self) -> int:
        """Return a fresh id."""
        candidate = max(self._clock(), self._last + 1)
        self._last = candidate
        return candidate


class LedgerStore:
    """Owns the client and session collections and their credit invariant."""

    def __init__(
        self,
        storage: StorageAdapter,
        clients: Iterable[ClientRecord] = (),
        sessions: Iterable[SessionRecord] = (),
        ids: IdSequence | None = None,
    ) -> None:
        self.storage = storage
        self._clients: list[ClientRecord] = list(clients)
        self._sessions: list[SessionRecord] = list(sessions)
        self._ids = ids or IdSequence()
        for record in (*self._clients, *self._sessions):
            self._ids.observe(record.id)

    @classmethod
    def load(
        cls, storage: StorageAdapter, ids: IdSequence | None = None
    ) -> "LedgerStore":
        """Build a store from the persisted collections."""
        clients = _load_rows(storage, CLIENTS_KEY, ClientRecord.from_dict)
        sessions = _load_rows(storage, SESSIONS_KEY, SessionRecord.from_dict)
        _logger.info(
            "Ledger loaded: clients=%s sessions=%s", len(clients), len(sessions)
        )
        return cls(storage, clients=clients, sessions=sessions, ids=ids)

    def next_id(self) -> int:
        """Return a fresh record id."""
        return self._ids.next_id()

    # Clients

    def list_clients(self) -> list[ClientRecord]:
        """Return a snapshot of all clients in insertion order."""
        return list(self._clients)

    def get_client(self, client_id: int) -> ClientRecord | None:
        """Return a client by id, if present."""
        index = _index_of(self._clients, client_id)
        return self._clients[index] if index is not None else None

    def client_by_email(self, email: str) -> ClientRecord | None:
        """Return the first client with a matching email."""
        for client in self._clients:
            if client.email == email:
                return client
        return None

    def create_client(self, draft: ClientDraft) -> ClientRecord:
        """Add a client and return it."""
        client = ClientRecord(
            id=self._ids.next_id(),
            name=draft.name,
            email=draft.email,
            phone=draft.phone,
            sessions_remaining=draft.sessions_remaining,
            status=draft.status,
        )
        self._clients.append(client)
        self._save_clients()
        _logger.info("Client created: id=%s", client.id)
        return client

    def update_client(self, client_id: int, patch: ClientPatch) -> ClientRecord | None:
        """Merge the patch onto a client and return the updated record."""
        index = _index_of(self._clients, client_id)
        if index is None:
            return None
        updated = replace(self._clients[index], **patch.changes())
        self._clients[index] = updated
        self._save_clients()
        return updated

    def delete_client(self, client_id: int) -> bool:
        """Remove a client. Their sessions are left in place."""
        index = _index_of(self._clients, client_id)
        if index is None:
            return False
        del self._clients[index]
        self._save_clients()
        _logger.info("Client deleted: id=%s", client_id)
        return True

    # Sessions

    def list_sessions(self) -> list[SessionRecord]:
        """Return a snapshot of all sessions in insertion order."""
        return list(self._sessions)

    def get_session(self, session_id: int) -> SessionRecord | None:
        """Return a session by id, if present."""
        index = _index_of(self._sessions, session_id)
        return self._sessions[index] if index is not None else None

    def create_session(self, draft: SessionDraft) -> SessionRecord:
        """Add a session, debiting credit when it is created as upcoming."""
        session = SessionRecord(
            id=self._ids.next_id(),
            client_id=draft.client_id,
            client_name=draft.client_name,
            date=draft.date,
            time=draft.time,
            duration=draft.duration,
            workout_type=draft.workout_type,
            status=draft.status,
            notes=draft.notes,
        )
        self._sessions.append(session)
        self._save_sessions()
        _logger.info(
            "Session created: id=%s client_id=%s status=%s",
            session.id,
            session.client_id,
            session.status.value,
        )
        if session.status is SessionStatus.UPCOMING:
            self._debit(session.client_id)
        return session

    def update_session(
        self, session_id: int, patch: SessionPatch
    ) -> SessionRecord | None:
        """Merge the patch onto a session. Credit is never moved here."""
        index = _index_of(self._sessions, session_id)
        if index is None:
            return None
        updated = replace(self._sessions[index], **patch.changes())
        self._sessions[index] = updated
        self._save_sessions()
        return updated

    def delete_session(self, session_id: int) -> SessionRecord | None:
        """Remove a session, refunding credit if it was still live."""
        index = _index_of(self._sessions, session_id)
        if index is None:
            return None
        session = self._sessions[index]
        if session.status in LIVE_STATUSES:
            self._refund(session.client_id)
        del self._sessions[index]
        self._save_sessions()
        _logger.info(
            "Session deleted: id=%s status=%s", session_id, session.status.value
        )
        return session

    def confirm_session(self, session_id: int) -> SessionRecord | None:
        """Promote a pending session to upcoming and debit its client.

        Sessions that are not pending are returned unchanged.
        """
        index = _index_of(self._sessions, session_id)
        if index is None:
            return None
        session = self._sessions[index]
        if session.status is not SessionStatus.PENDING:
            return session
        confirmed = replace(session, status=SessionStatus.UPCOMING)
        self._sessions[index] = confirmed
        self._save_sessions()
        _logger.info("Session confirmed: id=%s", session_id)
        self._debit(confirmed.client_id)
        return confirmed

    def flush(self) -> bool:
        """Persist both collections."""
        saved_clients = self._save_clients()
        saved_sessions = self._save_sessions()
        return saved_clients and saved_sessions

    def seed(
        self,
        clients: Iterable[ClientRecord] = (),
        sessions: Iterable[SessionRecord] = (),
    ) -> None:
        """Append bootstrap records as-is, without any credit effects."""
        new_clients = list(clients)
        new_sessions = list(sessions)
        for record in (*new_clients, *new_sessions):
            self._ids.observe(record.id)
        if new_clients:
            self._clients.extend(new_clients)
            self._save_clients()
        if new_sessions:
            self._sessions.extend(new_sessions)
            self._save_sessions()

    def _debit(self, client_id: int) -> None:
        index = _index_of(self._clients, client_id)
        if index is None:
            _logger.warning("Debit skipped, unknown client: client_id=%s", client_id)
            return
        client = self._clients[index]
        if client.sessions_remaining <= 0:
            return
        self._clients[index] = replace(
            client, sessions_remaining=client.sessions_remaining - 1
        )
        self._save_clients()
        _logger.info(
            "Credit debited: client_id=%s remaining=%s",
            client_id,
            client.sessions_remaining - 1,
        )

    def _refund(self, client_id: int) -> None:
        index = _index_of(self._clients, client_id)
        if index is None:
            _logger.warning("Refund skipped, unknown client: client_id=%s", client_id)
            return
        client = self._clients[index]
        self._clients[index] = replace(
            client, sessions_remaining=client.sessions_remaining + 1
        )
        self._save_clients()
        _logger.info(
            "Credit refunded: client_id=%s remaining=%s",
            client_id,
            client.sessions_remaining + 1,
        )

    def _save_clients(self) -> bool:
        return self.storage.set(
            CLIENTS_KEY, [client.to_dict() for client in self._clients]
        )

    def _save_sessions(self) -> bool:
        return self.storage.set(
            SESSIONS_KEY, [session.to_dict() for session in self._sessions]
        )


def _index_of(records: list[_Record], record_id: int) -> int | None:
    for index, record in enumerate(records):
        if record.id == record_id:
            return index
    return None


def _load_rows(
    storage: StorageAdapter,
    key: str,
    parse: Callable[[dict[str, object]], _Record],
) -> list[_Record]:
    payload = storage.get(key)
    if payload is None:
        return []
    if not isinstance(payload, list):
        _logger.warning("Ignoring stored %s: expected a list", key)
        return []
    records = []
    for row in payload:
        try:
            records.append(parse(row))
        except (AttributeError, KeyError, TypeError, ValueError):
            _logger.warning("Skipping unreadable %s row: %r", key, row)
    return records
