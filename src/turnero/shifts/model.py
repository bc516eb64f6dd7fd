from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..core.enums import ShiftStatus
from ..invitations.model import Invitation


@dataclass(frozen=True)
class Shift:
    """Domain entity: Shift (turno), a room booked for a time window."""

    shift_id: str
    date: str
    start_time: str
    end_time: str
    theme: str
    area: str
    status: ShiftStatus = ShiftStatus.PENDING
    participant_count: int = 1
    notes: str = ""
    creator_id: str = ""
    creator_dni: str = ""
    creator_full_name: str = ""
    invitations: Tuple[Invitation, ...] = field(default_factory=tuple)

    @property
    def invited_dnis(self) -> Tuple[str, ...]:
        return tuple(inv.dni for inv in self.invitations)

    def invitation_for(self, dni: str) -> Optional[Invitation]:
        return next((inv for inv in self.invitations if inv.dni == dni), None)

    def is_created_by(self, user_id: str) -> bool:
        return bool(user_id) and self.creator_id == str(user_id)


@dataclass(frozen=True)
class ShiftCreation:
    """Outcome of creating a shift and its invitation rows."""

    shift_id: str
    participant_count: int
    invited: Tuple[Invitation, ...]
    skipped_dnis: Tuple[str, ...]
