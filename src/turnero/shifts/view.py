"""Shift card presentation: which controls a card shows to which viewer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Optional

from ..common.datetime_utils import format_shift_date, format_time_range
from ..core.enums import InvitationStatus, Role, ShiftStatus
from ..users.model import User
from .model import Shift

CHANGE_STATUS = "change_status"
ACCEPT = "accept"
REJECT = "reject"
EDIT = "edit"
CANCEL = "cancel"

_BADGES = {
    ShiftStatus.ACCEPTED: "bg-success",
    ShiftStatus.PENDING: "bg-secondary",
    ShiftStatus.CANCELLED: "bg-danger",
}


def card_actions(shift: Shift, viewer: User) -> FrozenSet[str]:
    if viewer.role == Role.ADMIN:
        return frozenset({CHANGE_STATUS})

    is_creator = shift.is_created_by(viewer.user_id)
    actions = set()

    invitation = shift.invitation_for(viewer.dni)
    if (
        invitation is not None
        and not is_creator
        and shift.status == ShiftStatus.PENDING
        and invitation.status == InvitationStatus.PENDING
    ):
        actions.update({ACCEPT, REJECT})

    if is_creator and shift.status.is_active:
        actions.update({EDIT, CANCEL})

    return frozenset(actions)


@dataclass(frozen=True)
class ShiftCard:
    shift: Shift
    actions: FrozenSet[str]
    date_label: str
    time_label: str
    badge_class: str
    invited_by: Optional[str]
    show_creator: bool

    def can(self, action: str) -> bool:
        return action in self.actions


def _label(fn, *args) -> str:
    try:
        return fn(*args)
    except ValueError:
        # Malformed backend values are shown as received.
        return " - ".join(str(a) for a in args[:-1])


def build_card(shift: Shift, viewer: User, locale: Optional[str] = None) -> ShiftCard:
    is_creator = shift.is_created_by(viewer.user_id)
    is_invited = viewer.dni in shift.invited_dnis and not is_creator
    return ShiftCard(
        shift=shift,
        actions=card_actions(shift, viewer),
        date_label=_label(format_shift_date, shift.date, locale),
        time_label=_label(format_time_range, shift.start_time, shift.end_time, locale),
        badge_class=_BADGES.get(shift.status, "bg-light"),
        invited_by=shift.creator_full_name if is_invited else None,
        show_creator=viewer.is_admin and not is_creator,
    )


def build_cards(shifts, viewer: User, locale: Optional[str] = None) -> List[ShiftCard]:
    return [build_card(s, viewer, locale) for s in shifts]
