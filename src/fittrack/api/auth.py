"""Login endpoints for both portals."""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from fittrack.api.dependencies import get_container
from fittrack.containers import AppContainer
from fittrack.domain.users import Role

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    """Login form payload."""

    email: str
    password: str
    role: Role = Role.CLIENT


@router.post("/login")
async def login(
    payload: LoginRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Validate credentials and start a portal session."""
    result = container.auth_service.login(payload.email, payload.password, payload.role)
    if not result.success or result.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=result.message
        )
    return {"user": result.user.to_dict()}


@router.post("/logout")
async def logout(container: AppContainer = Depends(get_container)) -> dict[str, str]:
    container.auth_service.logout()
    return {"status": "ok"}


@router.get("/me")
async def current_user(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    user = container.auth_service.current_user()
    return {"user": user.to_dict() if user else None}
