"""FastAPI dependencies for authentication and authorization.

Dependencies:
  get_current_user        → decode JWT, load user from the store, return User
  require_permission(...) → restrict to users holding every listed permission
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from app.auth.jwt import decode_token, subject_id
from app.auth.permissions import has_permission, resolve_permissions
from app.database import DocumentStore, get_store
from app.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


# ── Core user dependency ────────────────────────────────────

async def get_current_user(
    token: str = Depends(oauth2_scheme),
    store: DocumentStore = Depends(get_store),
) -> User:
    payload = decode_token(token)
    user_id = subject_id(payload)
    if user_id is None or payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = store.get("users", user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


# ── Permission-based access control ─────────────────────────

def require_permission(*perms: str):
    """Dependency factory: restrict to users who hold ALL listed permissions.

    Permissions come from the user's stored role rather than the token
    claims, so a role change takes effect without waiting for expiry.
    """
    async def _check(user: User = Depends(get_current_user)) -> User:
        user_perms = resolve_permissions(user.role.value)
        missing = [p for p in perms if not has_permission(user_perms, p)]
        if missing:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Missing permissions: {', '.join(missing)}",
            )
        return user

    return _check
