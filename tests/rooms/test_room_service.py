from __future__ import annotations

import logging

import pytest

from turnero.common.forms import validate_form
from turnero.core.enums import Role, ShiftStatus
from turnero.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from turnero.rooms.schemas import RoomForm
from turnero.rooms.service import RoomService


@pytest.fixture
def service(rooms_repo, shifts_repo):
    return RoomService(rooms_repo, shifts_repo)


def _form(name, capacity="10"):
    return validate_form(RoomForm, {"name": name, "capacity": capacity})


def test_rooms_are_listed_by_name(service):
    assert [r.name for r in service.list_rooms()] == ["Auditorio", "Sala Azul"]


def test_add_room_requires_admin(service):
    with pytest.raises(AuthorizationError):
        service.add_room(current_role=Role.USER, form=_form("Sala Roja"))


def test_add_room(service, rooms_repo):
    room = service.add_room(current_role=Role.ADMIN, form=_form("Sala Roja", "6"))
    assert room.capacity == 6
    assert "Sala Roja" in [r.name for r in rooms_repo.list_all()]


def test_duplicate_name_is_rejected_without_calling_backend(service, rooms_repo):
    with pytest.raises(ValidationError) as exc:
        service.add_room(current_role=Role.ADMIN, form=_form("sala azul"))
    assert exc.value.errors == {"name": ["Ya existe una sala con este nombre."]}
    assert len(rooms_repo.list_all()) == 2


def test_delete_unknown_room(service):
    with pytest.raises(NotFoundError, match="Sala no encontrada."):
        service.delete_room(current_role=Role.ADMIN, room_id="999")


def test_delete_room_warns_about_active_shifts(service, rooms_repo, shifts_repo, make_shift, ana, caplog):
    shifts_repo.shifts["1"] = make_shift("1", ana, area="Sala Azul")
    shifts_repo.shifts["2"] = make_shift("2", ana, area="Sala Azul", status=ShiftStatus.CANCELLED)

    with caplog.at_level(logging.WARNING, logger="turnero.rooms.service"):
        room = service.delete_room(current_role=Role.ADMIN, room_id="10")

    assert room.name == "Sala Azul"
    assert "10" not in rooms_repo.rooms
    assert "1 pending/accepted shift(s)" in caplog.text


def test_delete_room_requires_admin(service, rooms_repo):
    with pytest.raises(AuthorizationError):
        service.delete_room(current_role=Role.USER, room_id="10")
    assert "10" in rooms_repo.rooms
