"""Client portal endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from fittrack.api.dependencies import get_container, require_client, unwrap
from fittrack.containers import AppContainer
from fittrack.domain.inputs import BookingRequest
from fittrack.domain.users import CurrentUser
from fittrack.services.queries import HistoryFilter

router = APIRouter(prefix="/portal", tags=["portal"])


@router.get("/dashboard")
async def dashboard(
    user: CurrentUser = Depends(require_client),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the client's balance and upcoming sessions."""
    view = container.client_portal(user).dashboard(container.today())
    if view is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Error: Client data not found",
        )
    return {
        "client": view.client.to_dict(),
        "sessionsRemaining": view.sessions_remaining,
        "upcomingCount": view.upcoming_count,
        "completedCount": view.completed_count,
        "upcoming": [s.to_dict() for s in view.upcoming],
    }


@router.get("/history")
async def history(
    date_filter: HistoryFilter = Query(default=HistoryFilter.ALL, alias="filter"),
    user: CurrentUser = Depends(require_client),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    sessions = container.client_portal(user).history(date_filter, container.today())
    return {"sessions": [s.to_dict() for s in sessions]}


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
async def request_session(
    request: BookingRequest,
    user: CurrentUser = Depends(require_client),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Submit a pending session request."""
    return unwrap(container.client_portal(user).request_session(request))


@router.delete("/sessions/{session_id}")
async def cancel_session(
    session_id: int,
    user: CurrentUser = Depends(require_client),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return unwrap(container.client_portal(user).cancel_session(session_id))
