from __future__ import annotations

from abc import ABC, abstractmethod


class NotAuthenticatedError(RuntimeError):
    """Raised when a tracking operation runs without a signed-in user."""


class AuthProvider(ABC):
    """Supplies the identity that writing data is scoped to."""

    @abstractmethod
    def current_user_id(self) -> str | None:
        """Return the signed-in user's id, or None when nobody is signed in."""
        raise NotImplementedError


class StaticAuthProvider(AuthProvider):
    """Always reports the same user; used by the CLI and tests."""

    def __init__(self, user_id: str | None) -> None:
        self._user_id = user_id or None

    def current_user_id(self) -> str | None:
        return self._user_id


def require_user(auth: AuthProvider) -> str:
    user_id = auth.current_user_id()
    if not user_id:
        raise NotAuthenticatedError("User not authenticated")
    return user_id
