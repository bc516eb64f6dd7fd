from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    USER = "user"

    @classmethod
    def from_backend(cls, value) -> "Role":
        # The backend stores regular users as "usuario".
        if str(value or "").strip().lower() == cls.ADMIN.value:
            return cls.ADMIN
        return cls.USER


class ShiftStatus(str, Enum):
    """Shift status as the backend stores it."""

    PENDING = "pendiente"
    ACCEPTED = "aceptado"
    CANCELLED = "cancelado"

    @classmethod
    def parse(cls, value) -> "ShiftStatus":
        key = str(value or "").strip().lower()
        try:
            return _SHIFT_STATUS_ALIASES[key]
        except KeyError:
            raise ValueError(f"Estado de turno desconocido: {value!r}") from None

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def is_active(self) -> bool:
        return self in (ShiftStatus.PENDING, ShiftStatus.ACCEPTED)


_SHIFT_STATUS_ALIASES = {
    "pendiente": ShiftStatus.PENDING,
    "pending": ShiftStatus.PENDING,
    "aceptado": ShiftStatus.ACCEPTED,
    "accepted": ShiftStatus.ACCEPTED,
    "cancelado": ShiftStatus.CANCELLED,
    "cancelled": ShiftStatus.CANCELLED,
    "canceled": ShiftStatus.CANCELLED,
}


class InvitationStatus(str, Enum):
    """Per-invitee answer to a shift invitation."""

    PENDING = "pendiente"
    ACCEPTED = "aceptado"
    REJECTED = "rechazado"

    @classmethod
    def parse(cls, value) -> "InvitationStatus":
        key = str(value or "").strip().lower()
        for status in cls:
            if status.value == key:
                return status
        if key in ("accepted", "accept"):
            return cls.ACCEPTED
        if key in ("rejected", "reject"):
            return cls.REJECTED
        return cls.PENDING
