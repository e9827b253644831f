from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from calendlyx.core.errors import AuthenticationError
from calendlyx.services.auth import admin_sessions

bearer = HTTPBearer(auto_error=False)


def current_token(credentials: HTTPAuthorizationCredentials | None = Depends(bearer)) -> str | None:
    return credentials.credentials if credentials is not None else None


def require_admin(token: str | None = Depends(current_token)) -> str:
    if not admin_sessions.is_admin(token):
        raise AuthenticationError("Admin login required")
    return token
