"""Read-only views over the ledger's collections.

Views are recomputed on every call. Ordering compares ``(date, time)``
strings, which matches chronological order only because both are
zero-padded fixed-width values.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import Enum

from fittrack.domain.models import (
    LIVE_STATUSES,
    ClientRecord,
    ClientStatus,
    SessionRecord,
    SessionStatus,
)
from fittrack.services.ledger import LedgerStore

DECEMBER = 12
PLACEHOLDER_RATE_PER_CLIENT = 50


class HistoryFilter(str, Enum):
    """Calendar windows for a client's session history."""

    THIS_MONTH = "thisMonth"
    LAST_MONTH = "lastMonth"
    ALL = "all"


@dataclass(frozen=True)
class DashboardStats:
    """Headline figures for the admin dashboard."""

    total_clients: int
    sessions_today: int
    pending_payments: int


def today_utc() -> date:
    """Return the current UTC calendar date."""
    return datetime.now(tz=UTC).date()


@dataclass
class SessionQueries:
    """Derived session and client views."""

    ledger: LedgerStore

    def sessions_for_client(self, client_id: int) -> list[SessionRecord]:
        """Return every session booked against a client."""
        return [s for s in self.ledger.list_sessions() if s.client_id == client_id]

    def upcoming_for_client(self, client_id: int, today: date) -> list[SessionRecord]:
        """Return a client's live sessions from today on, soonest first."""
        cutoff = today.isoformat()
        sessions = [
            s
            for s in self.sessions_for_client(client_id)
            if s.date >= cutoff and s.status in LIVE_STATUSES
        ]
        return sorted(sessions, key=lambda s: s.sort_key)

    def completed_for_client(self, client_id: int) -> list[SessionRecord]:
        """Return a client's completed sessions."""
        return [
            s
            for s in self.sessions_for_client(client_id)
            if s.status is SessionStatus.COMPLETED
        ]

    def history_for_client(
        self,
        client_id: int,
        date_filter: HistoryFilter,
        today: date,
    ) -> list[SessionRecord]:
        """Return a client's sessions in a month window, most recent first."""
        sessions = self.sessions_for_client(client_id)
        if date_filter is HistoryFilter.THIS_MONTH:
            window = (today.year, today.month)
            sessions = [s for s in sessions if _month_of(s) == window]
        elif date_filter is HistoryFilter.LAST_MONTH:
            window = _previous_month(today)
            sessions = [s for s in sessions if _month_of(s) == window]
        return sorted(sessions, key=lambda s: s.sort_key, reverse=True)

    def today_sessions(self, today: date) -> list[SessionRecord]:
        """Return confirmed sessions scheduled for today."""
        return [
            s
            for s in self.sessions_on_date(today.isoformat())
            if s.status is SessionStatus.UPCOMING
        ]

    def upcoming_global(self, today: date, limit: int) -> list[SessionRecord]:
        """Return the next confirmed sessions across all clients."""
        cutoff = today.isoformat()
        sessions = [
            s
            for s in self.ledger.list_sessions()
            if s.date >= cutoff and s.status is SessionStatus.UPCOMING
        ]
        return sorted(sessions, key=lambda s: s.sort_key)[:limit]

    def upcoming_after_today(self, today: date, limit: int) -> list[SessionRecord]:
        """Return the dashboard's upcoming panel, which leaves out today."""
        cutoff = today.isoformat()
        return [s for s in self.upcoming_global(today, limit) if s.date != cutoff]

    def sessions_on_date(self, day: str) -> list[SessionRecord]:
        """Return every session on an ISO date, whatever its status."""
        return [s for s in self.ledger.list_sessions() if s.date == day]

    def sessions_by_status(
        self, status: SessionStatus | None = None
    ) -> list[SessionRecord]:
        """Return sessions for the admin table, most recent first."""
        sessions = self.ledger.list_sessions()
        if status is not None:
            sessions = [s for s in sessions if s.status is status]
        return sorted(sessions, key=lambda s: s.sort_key, reverse=True)

    def active_clients(self) -> list[ClientRecord]:
        """Return clients that can be booked."""
        return [
            c for c in self.ledger.list_clients() if c.status is ClientStatus.ACTIVE
        ]

    def client_for_session(self, session: SessionRecord) -> ClientRecord | None:
        """Resolve a session's client; None when the client was deleted."""
        return self.ledger.get_client(session.client_id)

    def dashboard_stats(self, today: date) -> DashboardStats:
        """Return headline counts for the admin dashboard.

        ``pending_payments`` is a display placeholder, not a billing figure.
        """
        clients = self.ledger.list_clients()
        out_of_credit = [
            c
            for c in clients
            if c.status is ClientStatus.ACTIVE and c.sessions_remaining == 0
        ]
        return DashboardStats(
            total_clients=len(clients),
            sessions_today=len(self.today_sessions(today)),
            pending_payments=len(out_of_credit) * PLACEHOLDER_RATE_PER_CLIENT,
        )


def _month_of(session: SessionRecord) -> tuple[int, int] | None:
    try:
        parsed = date.fromisoformat(session.date)
    except ValueError:
        return None
    return (parsed.year, parsed.month)


def _previous_month(today: date) -> tuple[int, int]:
    if today.month == 1:
        return (today.year - 1, DECEMBER)
    return (today.year, today.month - 1)
