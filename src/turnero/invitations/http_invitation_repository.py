from __future__ import annotations

from ..backend.client import BackendClient
from ..core.enums import InvitationStatus
from .model import Invitation
from .repository import InvitationRepository


def to_invitation(row: dict, *, shift_id: str = "") -> Invitation:
    user = row.get("usuario") if isinstance(row.get("usuario"), dict) else {}
    return Invitation(
        invitation_id=str(row.get("id") or ""),
        shift_id=str(row.get("turno_id") or shift_id),
        user_id=str(row.get("usuario_id") or user.get("id") or ""),
        dni=str(row.get("dni") or user.get("dni") or ""),
        status=InvitationStatus.parse(row.get("estado")),
    )


class HttpInvitationRepository(InvitationRepository):
    def __init__(self, client: BackendClient):
        self._client = client

    def create(self, *, shift_id: str, user_id: str, dni: str) -> Invitation:
        row = self._client.post(
            "/invitados",
            {"turno_id": shift_id, "usuario_id": user_id, "estado": InvitationStatus.PENDING.value},
            default_error="Error al crear la invitación.",
        )
        if isinstance(row, dict) and "id" in row:
            inv = to_invitation(row, shift_id=shift_id)
            return Invitation(inv.invitation_id, inv.shift_id, inv.user_id or user_id, inv.dni or dni, inv.status)
        return Invitation(invitation_id="", shift_id=shift_id, user_id=user_id, dni=dni)

    def set_status(self, invitation_id: str, status: InvitationStatus) -> None:
        self._client.put(
            f"/invitados/{invitation_id}",
            {"estado": status.value},
            default_error="Error al responder la invitación.",
        )
