from __future__ import annotations

from typing import List

from ..backend.client import BackendClient
from .model import Room
from .repository import RoomRepository


def to_room(row: dict) -> Room:
    return Room(
        room_id=str(row["id"]),
        name=row.get("nombre") or "",
        capacity=int(row.get("capacidad") or 0),
    )


class HttpRoomRepository(RoomRepository):
    def __init__(self, client: BackendClient):
        self._client = client

    def list_all(self) -> List[Room]:
        rows = self._client.get("/salas", default_error="Error al obtener las salas.") or []
        return [to_room(r) for r in rows]

    def create(self, *, name: str, capacity: int) -> Room:
        row = self._client.post(
            "/salas",
            {"nombre": name, "capacidad": capacity},
            default_error="Error al agregar la sala.",
        )
        if isinstance(row, dict) and "id" in row:
            return to_room(row)
        # Some backend versions answer with a message only.
        return Room(room_id="", name=name, capacity=capacity)

    def delete(self, room_id: str) -> None:
        self._client.delete(f"/salas/{room_id}", default_error="Error al eliminar la sala.")
