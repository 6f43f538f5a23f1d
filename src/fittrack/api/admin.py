"""Admin dashboard endpoints."""

from fastapi import APIRouter, Depends, Query, status

from fittrack.api.dependencies import (
    get_container,
    require_admin,
    session_rows,
    unwrap,
)
from fittrack.containers import AppContainer
from fittrack.domain.inputs import ClientDraft, ClientPatch, SessionDraft, SessionPatch
from fittrack.domain.models import SessionStatus

router = APIRouter(
    prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)]
)


@router.get("/dashboard")
async def dashboard(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return headline stats, today's schedule and the upcoming panel."""
    view = container.admin_portal.dashboard(container.today())
    return {
        "stats": {
            "totalClients": view.stats.total_clients,
            "sessionsToday": view.stats.sessions_today,
            "pendingPayments": view.stats.pending_payments,
        },
        "todaySchedule": session_rows(view.today_schedule, container),
        "upcoming": session_rows(view.upcoming, container),
    }


@router.get("/clients")
async def list_clients(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return {"clients": [c.to_dict() for c in container.ledger.list_clients()]}


@router.get("/clients/options")
async def client_options(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return active clients for the booking form."""
    return {"clients": [c.to_dict() for c in container.admin_portal.client_options()]}


@router.post("/clients", status_code=status.HTTP_201_CREATED)
async def add_client(
    draft: ClientDraft, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    return unwrap(container.admin_portal.add_client(draft))


@router.patch("/clients/{client_id}")
async def edit_client(
    client_id: int,
    patch: ClientPatch,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return unwrap(container.admin_portal.edit_client(client_id, patch))


@router.delete("/clients/{client_id}")
async def remove_client(
    client_id: int, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    return unwrap(container.admin_portal.remove_client(client_id))


@router.get("/sessions")
async def list_sessions(
    status_filter: SessionStatus | None = Query(default=None, alias="status"),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return sessions, most recent first, optionally for one status."""
    sessions = container.admin_portal.sessions_table(status_filter)
    return {"sessions": session_rows(sessions, container)}


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
async def book_session(
    draft: SessionDraft, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Book a confirmed session; refused when the client has no credit."""
    return unwrap(container.admin_portal.book_session(draft))


@router.patch("/sessions/{session_id}")
async def edit_session(
    session_id: int,
    patch: SessionPatch,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return unwrap(container.admin_portal.edit_session(session_id, patch))


@router.delete("/sessions/{session_id}")
async def cancel_session(
    session_id: int, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    return unwrap(container.admin_portal.cancel_session(session_id))


@router.post("/sessions/{session_id}/confirm")
async def confirm_session(
    session_id: int, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Approve a pending request."""
    return unwrap(container.admin_portal.confirm_session(session_id))


@router.get("/calendar/{day}")
async def calendar_day(
    day: str, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return every session on a date, whatever its status."""
    sessions = container.admin_portal.calendar_day(day)
    return {"date": day, "sessions": session_rows(sessions, container)}
