from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from grindlog.config import Settings
from grindlog.errors import ForbiddenError, UnauthorizedError
from grindlog.utils.utils import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller, taken from a verified access token."""

    id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> AuthContext:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise UnauthorizedError("No token provided")

    try:
        payload = decode_access_token(credentials.credentials, settings.secret_key, settings.algorithm)
        user_id = int(payload["sub"])
        email = payload["email"]
        role = payload.get("role") or "user"
    except (JWTError, KeyError, TypeError, ValueError):
        # Covers ExpiredSignatureError and tokens missing claims
        raise UnauthorizedError("Invalid token")

    return AuthContext(id=user_id, email=email, role=role)


def require_admin(current_user: AuthContext = Depends(get_current_user)) -> AuthContext:
    if not current_user.is_admin:
        raise ForbiddenError("Admin access required")
    return current_user
