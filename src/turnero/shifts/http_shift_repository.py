from __future__ import annotations

from typing import Any, List, Optional

from ..backend.client import BackendClient
from ..common.datetime_utils import normalize_date, normalize_time
from ..core.enums import ShiftStatus
from ..core.exceptions import BackendError
from ..invitations.http_invitation_repository import to_invitation
from .model import Shift
from .repository import ShiftRepository

# Domain field -> backend field for POST/PUT /turnos
_FIELDS = {
    "date": "fecha",
    "start_time": "hora_inicio",
    "end_time": "hora_fin",
    "theme": "tematica",
    "area": "sala",
    "notes": "observaciones",
    "participant_count": "cantidad_integrantes",
    "status": "estado",
    "creator_id": "usuario_id",
}


def _to_payload(fields: dict) -> dict:
    payload = {}
    for key, value in fields.items():
        if isinstance(value, ShiftStatus):
            value = value.value
        payload[_FIELDS[key]] = value
    return payload


def _area(value) -> str:
    if isinstance(value, dict):
        return value.get("nombre") or ""
    return str(value or "")


def to_shift(row: dict) -> Shift:
    creator = row.get("creador") if isinstance(row.get("creador"), dict) else {}
    shift_id = str(row["id"])
    invitations = tuple(to_invitation(i, shift_id=shift_id) for i in row.get("invitados") or [])
    try:
        status = ShiftStatus.parse(row.get("estado"))
    except ValueError:
        status = ShiftStatus.PENDING
    return Shift(
        shift_id=shift_id,
        date=normalize_date(row.get("fecha")),
        start_time=normalize_time(row.get("hora_inicio")),
        end_time=normalize_time(row.get("hora_fin")),
        theme=row.get("tematica") or "",
        area=_area(row.get("sala")),
        status=status,
        participant_count=int(row.get("cantidad_integrantes") or 1 + len(invitations)),
        notes=row.get("observaciones") or "",
        creator_id=str(creator.get("id") or row.get("usuario_id") or ""),
        creator_dni=str(creator.get("dni") or "DNI Desconocido"),
        creator_full_name=creator.get("nombre") or "Nombre Desconocido",
        invitations=invitations,
    )


class HttpShiftRepository(ShiftRepository):
    def __init__(self, client: BackendClient):
        self._client = client

    def list_full(self) -> List[Shift]:
        rows = self._client.get("/turnos/full/all", default_error="Error al obtener los turnos.") or []
        return [to_shift(r) for r in rows]

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        # No single-shift endpoint returns invitations; filter the full list.
        return next((s for s in self.list_full() if s.shift_id == str(shift_id)), None)

    def create(self, **fields: Any) -> str:
        payload = _to_payload(fields)
        payload["estado"] = ShiftStatus.PENDING.value
        row = self._client.post("/turnos", payload, default_error="Error al crear el turno.")
        if isinstance(row, dict):
            shift_id = row.get("id") or (row.get("turno") or {}).get("id")
            if shift_id is not None:
                return str(shift_id)
        raise BackendError("El backend no devolvió el ID del turno creado.")

    def update(self, shift_id: str, **fields: Any) -> None:
        self._client.put(f"/turnos/{shift_id}", _to_payload(fields), default_error="Error al actualizar el turno.")
