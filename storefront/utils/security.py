from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request

from storefront.errors import AuthError
from storefront.app_setup.dependencies import get_user_service
from storefront.users.service import UserService


@dataclass(frozen=True)
class AuthContext:
    """Identité de l'appelant, résolue une fois et passée explicitement aux vues."""
    user_id: int
    token: str


def bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None
    return None


def get_current_user(
    request: Request,
    users: UserService = Depends(get_user_service),
) -> AuthContext:
    token = bearer_token(request)
    if not token:
        raise AuthError()

    user_id = users.resolve_token(token)
    if not user_id:
        raise AuthError()
    return AuthContext(user_id=user_id, token=token)


def require_user(auth: AuthContext = Depends(get_current_user)) -> AuthContext:
    return auth
