from __future__ import annotations

from typing import Any, Optional, Protocol

from .model import LoginTicket, User


class UserRepository(Protocol):
    """Repository interface for users and the backend auth endpoints.

    Note: services depend on this interface, not on the HTTP implementation.
    """

    def login(self, *, dni: str, password: str) -> LoginTicket:
        raise NotImplementedError

    def register(self, *, full_name: str, email: str, dni: str, password: str) -> str:
        raise NotImplementedError

    def logout(self, *, token: Optional[str]) -> None:
        raise NotImplementedError

    def forgot_password(self, *, dni: str) -> dict:
        raise NotImplementedError

    def reset_password(self, *, dni: str, token: str, new_password: str) -> str:
        raise NotImplementedError

    def get_by_id(self, user_id: str, *, token: Optional[str] = None) -> Optional[User]:
        raise NotImplementedError

    def get_by_dni(self, dni: str) -> Optional[User]:
        raise NotImplementedError

    def update(self, user_id: str, **fields: Any) -> str:
        raise NotImplementedError
