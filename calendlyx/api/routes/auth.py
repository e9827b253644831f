from fastapi import APIRouter, Depends, Response

from calendlyx.api.deps import current_token, require_admin
from calendlyx.schemas.auth import AdminStatus, LoginRequest, LoginResponse
from calendlyx.services.auth import admin_sessions

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest) -> LoginResponse:
    return LoginResponse(token=admin_sessions.login(payload.email, payload.password))


@router.post("/logout", status_code=204)
def logout(token: str = Depends(require_admin)) -> Response:
    admin_sessions.logout(token)
    return Response(status_code=204)


@router.get("/me", response_model=AdminStatus)
def me(token: str | None = Depends(current_token)) -> AdminStatus:
    return AdminStatus(is_admin=admin_sessions.is_admin(token))
