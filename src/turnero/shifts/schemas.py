from __future__ import annotations

import re
from typing import List

from pydantic import ValidationInfo, field_validator

from ..common.datetime_utils import parse_hhmm, parse_iso_date
from ..common.forms import FormSchema, field_error, require_text
from ..common.validators import is_valid_dni, split_dnis
from ..core.constants import DATE_PATTERN, MIN_THEME_LENGTH, TIME_PATTERN
from ..core.enums import ShiftStatus

_DATE_RE = re.compile(DATE_PATTERN)
_TIME_RE = re.compile(TIME_PATTERN)


class ShiftForm(FormSchema):
    """Fields shared by the create and edit shift forms."""

    date: str = ""
    start_time: str = ""
    end_time: str = ""
    theme: str = ""
    notes: str = ""
    area: str = ""

    @field_validator("date")
    @classmethod
    def check_date(cls, v: str) -> str:
        v = require_text(v, "Fecha es requerida")
        message = "Fecha inválida (AAAA-MM-DD)."
        if not _DATE_RE.match(v):
            raise field_error(message)
        try:
            parse_iso_date(v)
        except ValueError:
            raise field_error(message) from None
        return v

    @field_validator("start_time")
    @classmethod
    def check_start(cls, v: str) -> str:
        v = require_text(v, "Hora de inicio es requerida")
        if not _TIME_RE.match(v):
            raise field_error("Hora de inicio inválida (HH:MM).")
        return v

    @field_validator("end_time")
    @classmethod
    def check_end(cls, v: str, info: ValidationInfo) -> str:
        v = require_text(v, "Hora de fin es requerida")
        if not _TIME_RE.match(v):
            raise field_error("Hora de fin inválida (HH:MM).")
        end = parse_hhmm(v)
        start = info.data.get("start_time")
        if start is not None and end <= parse_hhmm(start):
            raise field_error("Hora de fin debe ser posterior a hora de inicio.")
        return v

    @field_validator("theme")
    @classmethod
    def check_theme(cls, v: str) -> str:
        return require_text(
            v,
            f"Temática debe tener al menos {MIN_THEME_LENGTH} caracteres",
            min_len=MIN_THEME_LENGTH,
        )

    @field_validator("notes")
    @classmethod
    def check_notes(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("area")
    @classmethod
    def check_area(cls, v: str) -> str:
        return require_text(v, "Área es requerida")


class CreateShiftForm(ShiftForm):
    invited_user_dnis: str = ""

    @field_validator("invited_user_dnis")
    @classmethod
    def check_invitees(cls, v: str) -> str:
        if not all(is_valid_dni(d) for d in split_dnis(v)):
            raise field_error("Uno o más DNIs invitados no son válidos (7-8 dígitos).")
        return v or ""

    @property
    def invitee_dnis(self) -> List[str]:
        return split_dnis(self.invited_user_dnis)


class StatusForm(FormSchema):
    status: str = ""

    @field_validator("status")
    @classmethod
    def check_status(cls, v: str) -> str:
        try:
            return ShiftStatus.parse(v).value
        except ValueError:
            raise field_error("Estado inválido.") from None
