from __future__ import annotations

from typing import Protocol

from ..core.enums import InvitationStatus
from .model import Invitation


class InvitationRepository(Protocol):
    def create(self, *, shift_id: str, user_id: str, dni: str) -> Invitation:
        raise NotImplementedError

    def set_status(self, invitation_id: str, status: InvitationStatus) -> None:
        raise NotImplementedError
