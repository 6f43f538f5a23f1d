"""Admin and client entry points into the ledger.

Both portals share one ``LedgerStore`` and differ only in what they allow:
the admin books confirmed sessions (guarded by the client's balance) and
edits anything; a client can only request pending sessions for themself
and cancel their own live sessions. A pending request is accepted even at
a zero balance because it consumes no credit.
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum

from fittrack.domain.inputs import (
    BookingRequest,
    ClientDraft,
    ClientPatch,
    SessionDraft,
    SessionPatch,
)
from fittrack.domain.models import (
    LIVE_STATUSES,
    ClientRecord,
    SessionRecord,
    SessionStatus,
)
from fittrack.domain.users import CurrentUser, Role
from fittrack.services.ledger import LedgerStore
from fittrack.services.queries import DashboardStats, HistoryFilter, SessionQueries

_logger = logging.getLogger(__name__)

NO_CREDIT_MESSAGE = "Client has no remaining sessions!"


class Outcome(str, Enum):
    """How a portal action ended."""

    OK = "ok"
    NOT_FOUND = "not_found"
    REFUSED = "refused"


@dataclass(frozen=True)
class PortalResult:
    """Result of a portal action with a user-facing message."""

    outcome: Outcome
    message: str
    session: SessionRecord | None = None
    client: ClientRecord | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK


def _ok(message: str, **records: object) -> PortalResult:
    return PortalResult(outcome=Outcome.OK, message=message, **records)


def _not_found(message: str) -> PortalResult:
    return PortalResult(outcome=Outcome.NOT_FOUND, message=message)


def _refused(message: str) -> PortalResult:
    return PortalResult(outcome=Outcome.REFUSED, message=message)


@dataclass(frozen=True)
class AdminDashboard:
    """Admin landing page data."""

    stats: DashboardStats
    today_schedule: list[SessionRecord]
    upcoming: list[SessionRecord]


@dataclass(frozen=True)
class ClientDashboard:
    """Client portal landing page data."""

    client: ClientRecord
    upcoming: list[SessionRecord]
    completed_count: int

    @property
    def sessions_remaining(self) -> int:
        return self.client.sessions_remaining

    @property
    def upcoming_count(self) -> int:
        return len(self.upcoming)


@dataclass
class AdminPortal:
    """Trainer-facing operations."""

    ledger: LedgerStore
    queries: SessionQueries
    upcoming_limit: int = 5

    def book_session(self, draft: SessionDraft) -> PortalResult:
        """Book a confirmed session if the client still has credit."""
        client = self.ledger.get_client(draft.client_id)
        if client is None:
            return _not_found("Client not found")
        if client.sessions_remaining <= 0:
            _logger.info("Booking refused, no credit: client_id=%s", client.id)
            return _refused(NO_CREDIT_MESSAGE)
        confirmed = draft.model_copy(
            update={"client_name": client.name, "status": SessionStatus.UPCOMING}
        )
        session = self.ledger.create_session(confirmed)
        return _ok(
            "Session added successfully!",
            session=session,
            client=self.ledger.get_client(client.id),
        )

    def edit_session(self, session_id: int, patch: SessionPatch) -> PortalResult:
        """Apply an edit; naming a client refreshes the name snapshot."""
        if patch.client_id is not None:
            client = self.ledger.get_client(patch.client_id)
            if client is None:
                return _not_found("Client not found")
            patch = patch.model_copy(update={"client_name": client.name})
        session = self.ledger.update_session(session_id, patch)
        if session is None:
            return _not_found("Session not found")
        return _ok("Session updated successfully!", session=session)

    def cancel_session(self, session_id: int) -> PortalResult:
        """Cancel any session, refunding credit if it was live."""
        session = self.ledger.delete_session(session_id)
        if session is None:
            return _not_found("Session not found")
        return _ok(
            "Session cancelled successfully!",
            session=session,
            client=self.ledger.get_client(session.client_id),
        )

    def confirm_session(self, session_id: int) -> PortalResult:
        """Approve a client's pending request, debiting one credit."""
        session = self.ledger.get_session(session_id)
        if session is None:
            return _not_found("Session not found")
        if session.status is not SessionStatus.PENDING:
            return _refused("Only pending sessions can be confirmed")
        client = self.ledger.get_client(session.client_id)
        if client is None:
            return _not_found("Client not found")
        if client.sessions_remaining <= 0:
            return _refused(NO_CREDIT_MESSAGE)
        confirmed = self.ledger.confirm_session(session_id)
        return _ok(
            "Session confirmed successfully!",
            session=confirmed,
            client=self.ledger.get_client(client.id),
        )

    def add_client(self, draft: ClientDraft) -> PortalResult:
        client = self.ledger.create_client(draft)
        return _ok("Client added successfully!", client=client)

    def edit_client(self, client_id: int, patch: ClientPatch) -> PortalResult:
        client = self.ledger.update_client(client_id, patch)
        if client is None:
            return _not_found("Client not found")
        return _ok("Client updated successfully!", client=client)

    def remove_client(self, client_id: int) -> PortalResult:
        """Delete a client; their sessions stay and keep the name snapshot."""
        if not self.ledger.delete_client(client_id):
            return _not_found("Client not found")
        return _ok("Client deleted successfully!")

    def dashboard(self, today: date) -> AdminDashboard:
        return AdminDashboard(
            stats=self.queries.dashboard_stats(today),
            today_schedule=self.queries.today_sessions(today),
            upcoming=self.queries.upcoming_after_today(today, self.upcoming_limit),
        )

    def sessions_table(
        self, status: SessionStatus | None = None
    ) -> list[SessionRecord]:
        return self.queries.sessions_by_status(status)

    def calendar_day(self, day: str) -> list[SessionRecord]:
        return self.queries.sessions_on_date(day)

    def client_options(self) -> list[ClientRecord]:
        """Clients offered when booking a session."""
        return self.queries.active_clients()


@dataclass
class ClientPortal:
    """Operations available to a signed-in client."""

    ledger: LedgerStore
    queries: SessionQueries
    user: CurrentUser

    def __post_init__(self) -> None:
        if self.user.role is not Role.CLIENT:
            raise ValueError("Client portal requires a client login")

    def client(self) -> ClientRecord | None:
        """Resolve the signed-in login to its roster entry by email."""
        return self.ledger.client_by_email(self.user.email)

    def request_session(self, request: BookingRequest) -> PortalResult:
        """Submit a pending session request for the signed-in client."""
        client = self.client()
        if client is None:
            return _not_found("Error: Client data not found")
        draft = SessionDraft(
            client_id=client.id,
            client_name=client.name,
            date=request.date,
            time=request.time,
            duration=request.duration,
            workout_type=request.workout_type,
            notes=request.notes,
            status=SessionStatus.PENDING,
        )
        session = self.ledger.create_session(draft)
        return _ok(
            "Session request submitted! Your trainer will confirm shortly.",
            session=session,
        )

    def cancel_session(self, session_id: int) -> PortalResult:
        """Cancel one of the client's own live sessions."""
        client = self.client()
        session = self.ledger.get_session(session_id)
        if client is None or session is None or session.client_id != client.id:
            return _not_found("Session not found")
        if session.status not in LIVE_STATUSES:
            return _refused("This session can no longer be cancelled")
        self.ledger.delete_session(session_id)
        return _ok(
            "Session cancelled successfully",
            session=session,
            client=self.ledger.get_client(client.id),
        )

    def dashboard(self, today: date) -> ClientDashboard | None:
        client = self.client()
        if client is None:
            return None
        return ClientDashboard(
            client=client,
            upcoming=self.queries.upcoming_for_client(client.id, today),
            completed_count=len(self.queries.completed_for_client(client.id)),
        )

    def history(self, date_filter: HistoryFilter, today: date) -> list[SessionRecord]:
        client = self.client()
        if client is None:
            return []
        return self.queries.history_for_client(client.id, date_filter, today)
