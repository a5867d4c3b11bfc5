"""User account creation, shared by self-registration and the CLI."""

import logging

from app.auth.password import hash_password
from app.database import DocumentStore
from app.middleware.exceptions import BusinessLogicError
from app.models.user import User, UserRole

logger = logging.getLogger("tms.auth")


def find_by_login(store: DocumentStore, ident: str) -> User | None:
    """Case-insensitive match on username or email."""
    ident = ident.strip().lower()
    return store.find_one(
        "users",
        lambda u: u.username.lower() == ident or u.email.lower() == ident,
    )


def create_user(
    store: DocumentStore,
    username: str,
    email: str,
    password: str,
    role: UserRole = UserRole.CUSTOMER,
) -> User:
    """Insert a user after checking username and email are both free."""
    with store.transaction():
        if find_by_login(store, username) or find_by_login(store, email):
            raise BusinessLogicError(
                "Username or email already registered",
                error_code="DUPLICATE_USER",
            )
        user = store.insert("users", User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=role,
        ))
    logger.info("Registered %s user %s (id=%s)", role.value, username, user.id)
    return user
