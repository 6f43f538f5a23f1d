"""Shared FastAPI dependencies and response helpers."""

from fastapi import Depends, HTTPException, Request, status

from fittrack.containers import AppContainer
from fittrack.domain.models import ClientRecord, SessionRecord
from fittrack.domain.users import CurrentUser, Role
from fittrack.services.portals import Outcome, PortalResult

_STATUS_BY_OUTCOME = {
    Outcome.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    Outcome.REFUSED: status.HTTP_409_CONFLICT,
}


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def _require_role(role: Role, container: AppContainer) -> CurrentUser:
    user = container.auth_service.current_user()
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    if user.role is not role:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
    return user


async def require_admin(
    container: AppContainer = Depends(get_container),
) -> CurrentUser:
    """Ensure the signed-in user is the admin."""
    return _require_role(Role.ADMIN, container)


async def require_client(
    container: AppContainer = Depends(get_container),
) -> CurrentUser:
    """Ensure the signed-in user is a client."""
    return _require_role(Role.CLIENT, container)


def unwrap(result: PortalResult) -> dict[str, object]:
    """Turn a portal result into a response body or an HTTP error."""
    if not result.ok:
        raise HTTPException(
            status_code=_STATUS_BY_OUTCOME[result.outcome], detail=result.message
        )
    body: dict[str, object] = {"message": result.message}
    if result.session is not None:
        body["session"] = result.session.to_dict()
    if result.client is not None:
        body["client"] = result.client.to_dict()
    return body


def session_rows(
    sessions: list[SessionRecord], container: AppContainer
) -> list[dict[str, object]]:
    """Serialize sessions with their client, which may no longer exist."""
    rows = []
    for session in sessions:
        client = container.queries.client_for_session(session)
        rows.append({**session.to_dict(), "client": _client_or_none(client)})
    return rows


def _client_or_none(client: ClientRecord | None) -> dict[str, object] | None:
    return client.to_dict() if client is not None else None
