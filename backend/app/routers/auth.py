"""Auth routes: register, login, refresh, me.

Route overview:
  POST /register    self-registration (always a Customer account)
  POST /login       username-or-email + password login
  POST /refresh     exchange a refresh token for new access + refresh tokens
  GET  /me          return the current user profile + permissions
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.deps import get_current_user
from app.auth.jwt import create_access_token, create_refresh_token, decode_token, subject_id
from app.auth.password import verify_password
from app.auth.permissions import resolve_permissions
from app.database import DocumentStore, get_store
from app.models.user import User
from app.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserOut,
)
from app.services.users import create_user, find_by_login

logger = logging.getLogger("tms.auth")

router = APIRouter()


# ── Helpers ──────────────────────────────────────────────────

def _build_user_out(user: User, permissions: list[str]) -> UserOut:
    return UserOut(
        id=user.id,
        username=user.username,
        email=user.email,
        role=user.role.value,
        created_at=user.created_at,
        permissions=permissions,
    )


def _build_token_response(user: User) -> TokenResponse:
    permissions = resolve_permissions(user.role.value)
    return TokenResponse(
        access_token=create_access_token(
            user_id=user.id,
            role=user.role.value,
            permissions=permissions,
        ),
        refresh_token=create_refresh_token(user_id=user.id, role=user.role.value),
        user=_build_user_out(user, permissions),
    )


# ── POST /register ──────────────────────────────────────────

@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, store: DocumentStore = Depends(get_store)):
    """Self-registration. Admin accounts are only created from the CLI."""
    user = create_user(store, body.username, body.email, body.password)
    return _build_token_response(user)


# ── POST /login ──────────────────────────────────────────────

@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, store: DocumentStore = Depends(get_store)):
    user = find_by_login(store, body.username)
    if not user or not verify_password(body.password, user.password_hash):
        logger.warning("Failed login for %r", body.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    logger.info("User %s logged in", user.username)
    return _build_token_response(user)


# ── POST /refresh ────────────────────────────────────────────

@router.post("/refresh", response_model=TokenResponse)
def refresh(body: RefreshRequest, store: DocumentStore = Depends(get_store)):
    """Exchange a refresh token for a new access + refresh token pair."""
    payload = decode_token(body.refresh_token)
    user_id = subject_id(payload)
    if payload.get("type") != "refresh" or user_id is None:
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    user = store.get("users", user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    # Re-resolve permissions (role may have changed since last token)
    return _build_token_response(user)


# ── GET /me ──────────────────────────────────────────────────

@router.get("/me", response_model=UserOut)
async def me(user: User = Depends(get_current_user)):
    return _build_user_out(user, resolve_permissions(user.role.value))
