from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""

    def __init__(self, message: str, errors: Optional[Mapping[str, Sequence[str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = {k: list(v) for k, v in (errors or {}).items()}


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or the session is gone."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced shift, room or user does not exist."""


class BackendError(DomainError):
    """Raised for non-2xx backend responses and network failures.

    ``status`` is None when the request never got a response; ``body`` keeps
    the decoded error body as the backend sent it.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        errors: Optional[Mapping[str, Sequence[str]]] = None,
        body: Any = None,
    ):
        super().__init__(message, errors)
        self.status = status
        self.body = body

    @property
    def detail(self) -> str:
        """The backend's ``error`` text when present, else the message."""
        if isinstance(self.body, dict) and isinstance(self.body.get("error"), str):
            return self.body["error"]
        return self.message

    @property
    def is_auth_failure(self) -> bool:
        return self.status in (401, 403)
