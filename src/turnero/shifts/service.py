from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from ..common.validators import unique_invitees
from ..core.enums import InvitationStatus, Role, ShiftStatus
from ..core.exceptions import AuthorizationError, BackendError, NotFoundError, ValidationError
from ..invitations.model import Invitation
from ..invitations.repository import InvitationRepository
from ..users.model import User
from ..users.repository import UserRepository
from .model import Shift, ShiftCreation
from .repository import ShiftRepository
from .schemas import CreateShiftForm, ShiftForm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShiftFilter:
    search: str = ""
    status: str = "all"
    area: str = ""


class ShiftService:
    """Use cases around shifts and their invitations."""

    def __init__(self, shifts: ShiftRepository, invitations: InvitationRepository, users: UserRepository):
        self._shifts = shifts
        self._invitations = invitations
        self._users = users

    # --- queries -------------------------------------------------------

    def list_all(self, *, current_role: Role) -> List[Shift]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No autorizado")
        return list(self._shifts.list_full())

    def list_for_user(self, user: User) -> List[Shift]:
        return [
            s
            for s in self._shifts.list_full()
            if s.is_created_by(user.user_id) or user.dni in s.invited_dnis
        ]

    def _get(self, shift_id: str) -> Shift:
        shift = self._shifts.get_by_id(str(shift_id))
        if shift is None:
            raise NotFoundError("Turno no encontrado.")
        return shift

    # --- commands ------------------------------------------------------

    def create_shift(self, creator: User, form: CreateShiftForm) -> ShiftCreation:
        """Create the shift, then one invitation row per resolvable invitee.

        Invitations are created one by one after the shift exists; a failing
        lookup or insert skips that invitee and nothing is rolled back.
        """
        invitees = unique_invitees(form.invitee_dnis, exclude=creator.dni)
        participant_count = 1 + len(invitees)

        shift_id = self._shifts.create(
            date=form.date,
            start_time=form.start_time,
            end_time=form.end_time,
            theme=form.theme,
            area=form.area,
            notes=form.notes,
            participant_count=participant_count,
            creator_id=creator.user_id,
        )
        logger.info("notification (simulated): shift %r created by %s in %s", form.theme, creator.full_name, form.area)

        invited: List[Invitation] = []
        skipped: List[str] = []
        for dni in invitees:
            try:
                invitee = self._users.get_by_dni(dni)
                if invitee is None:
                    skipped.append(dni)
                    continue
                invited.append(self._invitations.create(shift_id=shift_id, user_id=invitee.user_id, dni=dni))
            except BackendError as e:
                logger.warning("invitation for DNI %s on shift %s failed: %s", dni, shift_id, e.message)
                skipped.append(dni)

        if invited:
            logger.info(
                "notification (simulated): invited %s to shift %r",
                ", ".join(inv.dni for inv in invited),
                form.theme,
            )
        return ShiftCreation(
            shift_id=shift_id,
            participant_count=participant_count,
            invited=tuple(invited),
            skipped_dnis=tuple(skipped),
        )

    def get_editable(self, user: User, shift_id: str) -> Shift:
        """The shift if ``user`` may edit it: its creator or an admin."""
        shift = self._get(shift_id)
        if not (shift.is_created_by(user.user_id) or user.is_admin):
            raise AuthorizationError("Solo el creador puede editar este turno.")
        return shift

    def update_shift(self, user: User, shift_id: str, form: ShiftForm) -> None:
        shift = self.get_editable(user, shift_id)
        self._shifts.update(
            shift.shift_id,
            date=form.date,
            start_time=form.start_time,
            end_time=form.end_time,
            theme=form.theme,
            notes=form.notes,
            area=form.area,
        )
        logger.info("notification (simulated): shift %r (id %s) updated by %s", form.theme, shift_id, user.full_name)

    def cancel_shift(self, user: User, shift_id: str) -> Shift:
        if not shift_id:
            raise ValidationError("ID de turno es requerido.")
        shift = self._get(shift_id)
        if not (shift.is_created_by(user.user_id) or user.is_admin):
            raise AuthorizationError("Solo el creador puede cancelar este turno.")
        self._shifts.update(shift.shift_id, status=ShiftStatus.CANCELLED)
        logger.info("notification (simulated): shift %r (id %s) cancelled by %s", shift.theme, shift_id, user.full_name)
        if shift.invited_dnis:
            logger.info("notification (simulated): inform invited users (%s) about cancellation", ", ".join(shift.invited_dnis))
        return shift

    def update_status(self, user: User, shift_id: str, status: ShiftStatus) -> Shift:
        if not user.is_admin:
            raise AuthorizationError("No autorizado")
        shift = self._get(shift_id)
        if shift.status == status:
            return shift
        self._shifts.update(shift.shift_id, status=status)
        logger.info(
            "notification (simulated): status of shift %r (id %s) changed to %s by admin %s",
            shift.theme,
            shift_id,
            status.value,
            user.full_name,
        )
        return shift

    def respond_to_invitation(self, user: User, shift_id: str, response: str) -> str:
        if response not in ("accept", "reject"):
            raise ValidationError("Faltan datos para responder a la invitación.")
        shift = self._get(shift_id)
        invitation = shift.invitation_for(user.dni)
        if invitation is None or shift.is_created_by(user.user_id):
            raise ValidationError("No fuiste invitado a este turno.")

        status = InvitationStatus.ACCEPTED if response == "accept" else InvitationStatus.REJECTED
        self._invitations.set_status(invitation.invitation_id, status)
        logger.info(
            "notification (simulated): %s answered %s to shift %r; inform creator %s",
            user.full_name,
            status.value,
            shift.theme,
            shift.creator_full_name,
        )
        return "Invitación aceptada." if status == InvitationStatus.ACCEPTED else "Respuesta actualizada."


# --- list helpers used by the dashboards ---------------------------------


def filter_shifts(shifts: Iterable[Shift], criteria: ShiftFilter) -> List[Shift]:
    term = criteria.search.strip().lower()
    area = criteria.area.strip().lower()
    status: Optional[ShiftStatus] = None
    if criteria.status and criteria.status != "all":
        try:
            status = ShiftStatus.parse(criteria.status)
        except ValueError:
            status = None

    out = []
    for s in shifts:
        if term and not (
            term in s.creator_full_name.lower() or term in s.creator_dni or term in s.theme.lower()
        ):
            continue
        if status is not None and s.status != status:
            continue
        if area and area not in s.area.lower():
            continue
        out.append(s)
    return out


def distinct_areas(shifts: Iterable[Shift]) -> List[str]:
    return sorted({s.area for s in shifts if s.area}, key=str.lower)


def group_created(shifts: Sequence[Shift], user: User) -> Dict[str, List[Shift]]:
    created = [s for s in shifts if s.is_created_by(user.user_id)]
    return {
        "active": [s for s in created if s.status.is_active],
        "cancelled": [s for s in created if s.status == ShiftStatus.CANCELLED],
    }


def group_invited(shifts: Sequence[Shift], user: User) -> Dict[str, List[Shift]]:
    invited = sorted(
        (s for s in shifts if user.dni in s.invited_dnis and not s.is_created_by(user.user_id)),
        key=lambda s: (s.date, s.start_time),
    )
    return {
        "pending": [s for s in invited if s.status == ShiftStatus.PENDING],
        "confirmed": [s for s in invited if s.status == ShiftStatus.ACCEPTED],
        "cancelled": [s for s in invited if s.status == ShiftStatus.CANCELLED],
    }
