from __future__ import annotations

from pydantic import field_validator

from ..common.forms import FormSchema, field_error
from ..core.constants import ROOM_NAME_MAX_LENGTH, ROOM_NAME_MIN_LENGTH


class RoomForm(FormSchema):
    name: str = ""
    capacity: str = ""

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        v = (v or "").strip()
        if len(v) < ROOM_NAME_MIN_LENGTH:
            raise field_error(f"Nombre de la sala debe tener al menos {ROOM_NAME_MIN_LENGTH} caracteres.")
        if len(v) > ROOM_NAME_MAX_LENGTH:
            raise field_error(f"Nombre de la sala no puede exceder los {ROOM_NAME_MAX_LENGTH} caracteres.")
        return v

    @field_validator("capacity")
    @classmethod
    def check_capacity(cls, v: str) -> str:
        v = (v or "").strip()
        if not v.isdigit() or int(v) < 1:
            raise field_error("Capacidad debe ser un número entero mayor a 0.")
        return v

    @property
    def capacity_value(self) -> int:
        return int(self.capacity)
