from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import InvitationStatus


@dataclass(frozen=True)
class Invitation:
    """Domain entity: one invited user on one shift."""

    invitation_id: str
    shift_id: str
    user_id: str
    dni: str
    status: InvitationStatus = InvitationStatus.PENDING
