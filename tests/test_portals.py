"""Tests for the admin and client portals."""

import pytest

from fittrack.domain.inputs import (
    BookingRequest,
    ClientDraft,
    ClientPatch,
    SessionDraft,
    SessionPatch,
)
from fittrack.domain.models import SessionStatus
from fittrack.domain.users import CurrentUser, Role
from fittrack.services.portals import (
    NO_CREDIT_MESSAGE,
    AdminPortal,
    ClientPortal,
    Outcome,
)
from fittrack.services.queries import HistoryFilter
from tests.conftest import TODAY, add_client, session_draft


@pytest.fixture
def admin(ledger, queries) -> AdminPortal:
    return AdminPortal(ledger=ledger, queries=queries)


def _client_portal(ledger, queries, email: str = "john@email.com") -> ClientPortal:
    user = CurrentUser(email=email, name="John Smith", role=Role.CLIENT, id=42)
    return ClientPortal(ledger=ledger, queries=queries, user=user)


def _booking(day: str = "2025-03-10", start: str = "14:00") -> BookingRequest:
    return BookingRequest(date=day, time=start, duration=60, workoutType="HIIT")


def test_admin_booking_creates_upcoming_and_debits(admin, ledger) -> None:
    client = add_client(ledger, remaining=2)

    result = admin.book_session(
        SessionDraft(
            clientId=client.id,
            date="2025-03-10",
            time="09:00",
            status=SessionStatus.PENDING,
        )
    )

    assert result.ok
    assert result.session is not None
    assert result.session.status is SessionStatus.UPCOMING
    assert result.session.client_name == "John Smith"
    assert result.client is not None
    assert result.client.sessions_remaining == 1


def test_admin_booking_refused_without_credit(admin, ledger) -> None:
    client = add_client(ledger, remaining=0)

    result = admin.book_session(session_draft(client))

    assert result.outcome is Outcome.REFUSED
    assert result.message == NO_CREDIT_MESSAGE
    assert ledger.list_sessions() == []


def test_admin_booking_for_unknown_client(admin) -> None:
    result = admin.book_session(
        SessionDraft(client_id=404, date="2025-03-10", time="09:00")
    )

    assert result.outcome is Outcome.NOT_FOUND


def test_admin_edit_refreshes_name_snapshot_for_new_client(admin, ledger) -> None:
    john = add_client(ledger, remaining=5)
    sarah = add_client(ledger, name="Sarah Johnson", remaining=5)
    session = ledger.create_session(session_draft(john))

    result = admin.edit_session(
        session.id, SessionPatch(clientId=sarah.id, time="16:30")
    )

    assert result.ok
    assert result.session is not None
    assert result.session.client_id == sarah.id
    assert result.session.client_name == "Sarah Johnson"
    assert result.session.time == "16:30"
    assert result.session.status is SessionStatus.UPCOMING


def test_admin_edit_unknown_session(admin) -> None:
    result = admin.edit_session(1, SessionPatch(notes="x"))

    assert result.outcome is Outcome.NOT_FOUND


def test_admin_cancel_refunds(admin, ledger) -> None:
    client = add_client(ledger, remaining=1)
    booked = admin.book_session(session_draft(client))
    assert booked.session is not None

    result = admin.cancel_session(booked.session.id)

    assert result.ok
    assert result.client is not None
    assert result.client.sessions_remaining == 1
    assert admin.cancel_session(booked.session.id).outcome is Outcome.NOT_FOUND


def test_admin_confirm_pending_request(admin, ledger, queries) -> None:
    client = add_client(ledger, remaining=2)
    requested = _client_portal(ledger, queries).request_session(_booking())
    assert requested.session is not None

    result = admin.confirm_session(requested.session.id)

    assert result.ok
    assert result.session is not None
    assert result.session.status is SessionStatus.UPCOMING
    assert ledger.get_client(client.id).sessions_remaining == 1
    again = admin.confirm_session(requested.session.id)
    assert again.outcome is Outcome.REFUSED


def test_admin_confirm_refused_without_credit(admin, ledger, queries) -> None:
    add_client(ledger, remaining=0)
    requested = _client_portal(ledger, queries).request_session(_booking())
    assert requested.session is not None

    result = admin.confirm_session(requested.session.id)

    assert result.outcome is Outcome.REFUSED
    assert result.message == NO_CREDIT_MESSAGE
    stored = ledger.get_session(requested.session.id)
    assert stored is not None
    assert stored.status is SessionStatus.PENDING


def test_admin_client_management(admin, ledger) -> None:
    added = admin.add_client(
        ClientDraft(name="Mike Williams", email="mike.w@email.com", sessionsRemaining=5)
    )
    assert added.client is not None

    edited = admin.edit_client(added.client.id, ClientPatch(phone="(555) 345-6789"))
    assert edited.client is not None
    assert edited.client.phone == "(555) 345-6789"

    assert admin.remove_client(added.client.id).ok
    assert admin.remove_client(added.client.id).outcome is Outcome.NOT_FOUND
    assert admin.edit_client(added.client.id, ClientPatch()).outcome is (
        Outcome.NOT_FOUND
    )


def test_pending_request_then_independent_admin_booking(ledger, queries) -> None:
    john = add_client(ledger, name="John Smith", remaining=8)
    portal = _client_portal(ledger, queries)
    admin = AdminPortal(ledger=ledger, queries=queries)

    requested = portal.request_session(_booking("2025-03-10", "14:00"))

    assert requested.ok
    assert ledger.get_client(john.id).sessions_remaining == 8
    pending = [s for s in ledger.list_sessions() if s.status is SessionStatus.PENDING]
    assert len(pending) == 1

    booked = admin.book_session(session_draft(john, day="2025-03-10", start="14:00"))

    assert booked.ok
    assert ledger.get_client(john.id).sessions_remaining == 7
    statuses = sorted(s.status.value for s in ledger.list_sessions())
    assert statuses == ["pending", "upcoming"]


def test_client_request_succeeds_at_zero_balance(ledger, queries) -> None:
    client = add_client(ledger, remaining=0)
    portal = _client_portal(ledger, queries)
    admin = AdminPortal(ledger=ledger, queries=queries)

    requested = portal.request_session(_booking())
    refused = admin.book_session(session_draft(client))

    assert requested.ok
    assert requested.session is not None
    assert requested.session.status is SessionStatus.PENDING
    assert refused.outcome is Outcome.REFUSED
    assert ledger.get_client(client.id).sessions_remaining == 0


def test_client_request_without_roster_entry(ledger, queries) -> None:
    portal = _client_portal(ledger, queries, email="nobody@email.com")

    result = portal.request_session(_booking())

    assert result.outcome is Outcome.NOT_FOUND
    assert result.message == "Error: Client data not found"
    assert portal.dashboard(TODAY) is None
    assert portal.history(HistoryFilter.ALL, TODAY) == []


def test_client_cancels_own_live_session_with_refund(ledger, queries) -> None:
    client = add_client(ledger, remaining=8)
    portal = _client_portal(ledger, queries)
    requested = portal.request_session(_booking())
    assert requested.session is not None

    result = portal.cancel_session(requested.session.id)

    assert result.ok
    assert ledger.get_client(client.id).sessions_remaining == 9


def test_client_cannot_cancel_someone_elses_session(ledger, queries) -> None:
    add_client(ledger, remaining=8)
    sarah = add_client(ledger, name="Sarah Johnson", remaining=8)
    theirs = ledger.create_session(session_draft(sarah))
    portal = _client_portal(ledger, queries)

    result = portal.cancel_session(theirs.id)

    assert result.outcome is Outcome.NOT_FOUND
    assert ledger.get_session(theirs.id) == theirs
    assert ledger.get_client(sarah.id).sessions_remaining == 7


def test_client_cannot_cancel_completed_session(ledger, queries) -> None:
    client = add_client(ledger, remaining=8)
    done = ledger.create_session(session_draft(client, SessionStatus.COMPLETED))
    portal = _client_portal(ledger, queries)

    result = portal.cancel_session(done.id)

    assert result.outcome is Outcome.REFUSED
    assert ledger.get_session(done.id) == done


def test_client_dashboard_and_history(ledger, queries) -> None:
    client = add_client(ledger, remaining=8)
    ledger.create_session(
        session_draft(client, SessionStatus.COMPLETED, day="2025-02-10")
    )
    portal = _client_portal(ledger, queries)
    portal.request_session(_booking("2025-03-12", "08:00"))

    dashboard = portal.dashboard(TODAY)

    assert dashboard is not None
    assert dashboard.sessions_remaining == 8
    assert dashboard.upcoming_count == 1
    assert dashboard.completed_count == 1
    assert len(portal.history(HistoryFilter.ALL, TODAY)) == 2
    assert len(portal.history(HistoryFilter.LAST_MONTH, TODAY)) == 1


def test_client_portal_rejects_admin_login(ledger, queries) -> None:
    user = CurrentUser(email="admin@fittrack.com", name="Admin", role=Role.ADMIN)

    with pytest.raises(ValueError, match="client login"):
        ClientPortal(ledger=ledger, queries=queries, user=user)


def test_admin_dashboard_views(admin, ledger) -> None:
    john = add_client(ledger, remaining=4)
    add_client(ledger, name="Sarah Johnson", remaining=0)
    today = admin.book_session(session_draft(john, day="2025-03-05", start="09:00"))
    later = admin.book_session(session_draft(john, day="2025-03-07"))

    view = admin.dashboard(TODAY)

    assert view.stats.total_clients == 2
    assert view.stats.sessions_today == 1
    assert view.stats.pending_payments == 50
    assert view.today_schedule == [today.session]
    assert view.upcoming == [later.session]
    assert admin.calendar_day("2025-03-07") == [later.session]
    assert admin.sessions_table(SessionStatus.UPCOMING) == [
        later.session,
        today.session,
    ]
    assert len(admin.client_options()) == 2


def test_admin_confirm_for_deleted_client(admin, ledger, queries) -> None:
    client = add_client(ledger, remaining=2)
    requested = _client_portal(ledger, queries).request_session(_booking())
    assert requested.session is not None
    ledger.delete_client(client.id)

    result = admin.confirm_session(requested.session.id)

    assert result.outcome is Outcome.NOT_FOUND
    assert result.message == "Client not found"
    stored = ledger.get_session(requested.session.id)
    assert stored is not None
    assert stored.status is SessionStatus.PENDING
