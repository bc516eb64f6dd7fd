from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User, mirrored from the backend ``/usuarios`` record.

    Note: This is a plain data object; the session cookie holds a serialized copy.
    """

    user_id: str
    dni: str
    full_name: str
    email: str
    role: Role
    profile_picture_url: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def initials(self) -> str:
        return "".join(part[0] for part in self.full_name.split() if part).upper() or "U"

    def to_dict(self) -> dict:
        data = asdict(self)
        data["role"] = self.role.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            user_id=str(data["user_id"]),
            dni=str(data.get("dni") or ""),
            full_name=data.get("full_name") or "",
            email=data.get("email") or "",
            role=Role(data.get("role") or Role.USER.value),
            profile_picture_url=data.get("profile_picture_url"),
        )


@dataclass(frozen=True)
class LoginTicket:
    """What the backend login endpoint hands back."""

    user_id: str
    token: str
