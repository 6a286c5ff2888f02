"""Credential lookup for the user who requested a build.

The build core never stores credentials itself; hosts plug in their own user
store through :class:`CredentialStore`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from federalist_build.core.types import Credential


@runtime_checkable
class CredentialStore(Protocol):
    async def get_credential(self, user_id: str) -> Credential | None:
        """Return the user's credential, or ``None`` for unauthenticated builds."""
        ...


class InMemoryCredentialStore:
    """Dict-backed :class:`CredentialStore` for embedding and tests."""

    def __init__(self, tokens: dict[str, str] | None = None) -> None:
        self._credentials: dict[str, Credential] = {
            user_id: Credential(access_token=token)
            for user_id, token in (tokens or {}).items()
        }

    def __repr__(self) -> str:
        return f"InMemoryCredentialStore(users={len(self._credentials)})"

    def set_token(self, user_id: str, access_token: str) -> None:
        self._credentials[user_id] = Credential(access_token=access_token)

    def remove(self, user_id: str) -> None:
        self._credentials.pop(user_id, None)

    async def get_credential(self, user_id: str) -> Credential | None:
        return self._credentials.get(user_id)
