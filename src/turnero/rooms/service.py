from __future__ import annotations

import logging
from typing import List

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..shifts.repository import ShiftRepository
from .model import Room
from .repository import RoomRepository
from .schemas import RoomForm

logger = logging.getLogger(__name__)


class RoomService:
    """Use cases: list rooms, and add/delete them (admin).

    Note: The backend has no room update endpoint.
    """

    def __init__(self, rooms: RoomRepository, shifts: ShiftRepository):
        self._rooms = rooms
        self._shifts = shifts

    def list_rooms(self) -> List[Room]:
        return sorted(self._rooms.list_all(), key=lambda r: r.name.lower())

    def add_room(self, *, current_role: Role, form: RoomForm) -> Room:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No autorizado.")

        name = form.name
        if any(r.name.lower() == name.lower() for r in self._rooms.list_all()):
            message = "Ya existe una sala con este nombre."
            raise ValidationError(message, {"name": [message]})

        room = self._rooms.create(name=name, capacity=form.capacity_value)
        logger.info("room added: %s (capacity %s)", room.name, room.capacity)
        return room

    def delete_room(self, *, current_role: Role, room_id: str) -> Room:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No autorizado.")
        if not room_id:
            raise ValidationError("ID de sala es requerido.")

        room = next((r for r in self._rooms.list_all() if r.room_id == str(room_id)), None)
        if room is None:
            raise NotFoundError("Sala no encontrada.")

        self._rooms.delete(room.room_id)
        logger.info("room deleted: %s (id %s)", room.name, room.room_id)

        in_use = [s for s in self._shifts.list_full() if s.area == room.name and s.status.is_active]
        if in_use:
            logger.warning(
                "room %r was deleted but %d pending/accepted shift(s) still reference it",
                room.name,
                len(in_use),
            )
        return room
