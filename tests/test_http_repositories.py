from __future__ import annotations

import pytest

from turnero.core.enums import InvitationStatus, Role, ShiftStatus
from turnero.core.exceptions import BackendError
from turnero.rooms.http_room_repository import HttpRoomRepository
from turnero.shifts.http_shift_repository import HttpShiftRepository, to_shift
from turnero.users.http_user_repository import HttpUserRepository, to_user


class StubClient:
    """Records calls and answers from a (method, path) -> response map."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def _answer(self, method, path, json=None, **kwargs):
        self.calls.append((method, path, json))
        answer = self.responses.get((method, path))
        if isinstance(answer, Exception):
            raise answer
        return answer

    def get(self, path, **kwargs):
        return self._answer("GET", path, **kwargs)

    def post(self, path, json=None, **kwargs):
        return self._answer("POST", path, json, **kwargs)

    def put(self, path, json=None, **kwargs):
        return self._answer("PUT", path, json, **kwargs)

    def delete(self, path, **kwargs):
        return self._answer("DELETE", path, **kwargs)


def test_to_user_maps_backend_role():
    user = to_user({"id": 7, "dni": 30111222, "nombre": "Ana", "email": "a@b.com", "rol": "usuario"})
    assert user.user_id == "7"
    assert user.dni == "30111222"
    assert user.role == Role.USER
    assert user.profile_picture_url is None
    assert to_user({"id": 1, "rol": "admin"}).is_admin


def test_to_shift_tolerates_backend_shapes():
    shift = to_shift(
        {
            "id": 12,
            "fecha": "2024-08-15T00:00:00.000Z",
            "hora_inicio": "10:00:00",
            "hora_fin": "11:30:00",
            "tematica": "Retro",
            "sala": {"nombre": "Sala Azul"},
            "estado": "aceptado",
            "invitados": [
                {"id": 4, "usuario_id": 3, "estado": "pendiente", "usuario": {"dni": "30333444"}},
                {"id": 5, "usuario_id": 9, "dni": "40111222", "estado": "aceptado"},
            ],
        }
    )
    assert (shift.date, shift.start_time, shift.end_time) == ("2024-08-15", "10:00", "11:30")
    assert shift.area == "Sala Azul"
    assert shift.status == ShiftStatus.ACCEPTED
    assert shift.invited_dnis == ("30333444", "40111222")
    assert shift.invitations[1].status == InvitationStatus.ACCEPTED
    assert shift.invitations[0].shift_id == "12"
    assert shift.participant_count == 3
    assert shift.creator_dni == "DNI Desconocido"
    assert shift.creator_full_name == "Nombre Desconocido"


def test_shift_create_sends_backend_field_names():
    client = StubClient({("POST", "/turnos"): {"turno": {"id": 33}}})
    repo = HttpShiftRepository(client)

    shift_id = repo.create(
        date="2024-08-15",
        start_time="10:00",
        end_time="11:00",
        theme="Retro",
        area="Sala Azul",
        notes="",
        participant_count=2,
        creator_id="2",
    )

    assert shift_id == "33"
    _, _, payload = client.calls[0]
    assert payload["fecha"] == "2024-08-15"
    assert payload["sala"] == "Sala Azul"
    assert payload["cantidad_integrantes"] == 2
    assert payload["usuario_id"] == "2"
    assert payload["estado"] == "pendiente"


def test_shift_create_without_id_is_an_error():
    repo = HttpShiftRepository(StubClient({("POST", "/turnos"): {"mensaje": "ok"}}))
    with pytest.raises(BackendError):
        repo.create(date="2024-08-15", start_time="10:00", end_time="11:00", theme="x", area="y")


def test_shift_status_update_sends_value():
    client = StubClient()
    HttpShiftRepository(client).update("12", status=ShiftStatus.CANCELLED)
    assert client.calls == [("PUT", "/turnos/12", {"estado": "cancelado"})]


def test_user_lookup_by_dni_returns_none_on_404():
    client = StubClient({("GET", "/usuarios/dni/123"): BackendError("Usuario no encontrado", status=404)})
    assert HttpUserRepository(client).get_by_dni("123") is None


def test_user_lookup_propagates_other_errors():
    client = StubClient({("GET", "/usuarios/dni/123"): BackendError("boom", status=500)})
    with pytest.raises(BackendError):
        HttpUserRepository(client).get_by_dni("123")


def test_register_sends_user_role():
    client = StubClient({("POST", "/usuarios/auth/register"): {"mensaje": "Usuario creado"}})
    message = HttpUserRepository(client).register(full_name="Ana", email="a@b.com", dni="30111222", password="secret1")
    assert message == "Usuario creado"
    assert client.calls[0][2]["rol"] == "usuario"


def test_room_create_falls_back_when_backend_returns_only_a_message():
    client = StubClient({("POST", "/salas"): {"mensaje": "Sala creada"}})
    room = HttpRoomRepository(client).create(name="Sala Roja", capacity=6)
    assert (room.name, room.capacity) == ("Sala Roja", 6)
    assert client.calls[0][2] == {"nombre": "Sala Roja", "capacidad": 6}
