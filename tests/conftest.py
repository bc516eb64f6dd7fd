from __future__ import annotations

import dataclasses
from typing import Dict, List, Optional

import pytest

from turnero.container import build_services
from turnero.core.enums import InvitationStatus, Role, ShiftStatus
from turnero.core.exceptions import BackendError
from turnero.invitations.model import Invitation
from turnero.main import create_app
from turnero.rooms.model import Room
from turnero.shifts.model import Shift
from turnero.users.model import LoginTicket, User
from turnero.web.session import TOKEN_KEY, USER_KEY


class FakeUsers:
    def __init__(self, users=(), passwords=None):
        self.by_id: Dict[str, User] = {u.user_id: u for u in users}
        self.passwords: Dict[str, str] = dict(passwords or {})
        self.registered: List[dict] = []
        self.updates: List[tuple] = []
        self.logged_out: List[str] = []
        self.update_error: Optional[BackendError] = None
        self.reset_error: Optional[BackendError] = None
        self.logout_error: Optional[BackendError] = None
        self.hide_details = False

    def login(self, *, dni, password):
        for u in self.by_id.values():
            if u.dni == dni and self.passwords.get(u.user_id) == password:
                return LoginTicket(user_id=u.user_id, token=f"token-{u.user_id}")
        raise BackendError("Credenciales inválidas.", status=401)

    def register(self, *, full_name, email, dni, password):
        if any(u.dni == dni for u in self.by_id.values()):
            raise BackendError("El DNI ya está registrado.", status=400)
        self.registered.append({"full_name": full_name, "email": email, "dni": dni})
        return "Registro exitoso. Por favor, inicia sesión."

    def logout(self, *, token):
        if self.logout_error is not None:
            raise self.logout_error
        self.logged_out.append(token)

    def forgot_password(self, *, dni):
        return {"mensaje": "Se generó un código de recuperación.", "resetToken": "abc123"}

    def reset_password(self, *, dni, token, new_password):
        if self.reset_error is not None:
            raise self.reset_error
        return "Contraseña restablecida."

    def get_by_id(self, user_id, *, token=None):
        if self.hide_details:
            return None
        return self.by_id.get(str(user_id))

    def get_by_dni(self, dni):
        return next((u for u in self.by_id.values() if u.dni == dni), None)

    def update(self, user_id, **fields):
        if self.update_error is not None:
            raise self.update_error
        self.updates.append((user_id, fields))
        user = self.by_id.get(user_id)
        if user is not None:
            self.by_id[user_id] = dataclasses.replace(
                user, **{k: v for k, v in fields.items() if k != "password"}
            )
        return "Usuario actualizado."


class FakeRooms:
    def __init__(self, rooms=()):
        self.rooms: Dict[str, Room] = {r.room_id: r for r in rooms}
        self._next_id = 100
        self.create_error: Optional[BackendError] = None

    def list_all(self):
        return list(self.rooms.values())

    def create(self, *, name, capacity):
        if self.create_error is not None:
            raise self.create_error
        self._next_id += 1
        room = Room(room_id=str(self._next_id), name=name, capacity=capacity)
        self.rooms[room.room_id] = room
        return room

    def delete(self, room_id):
        if room_id not in self.rooms:
            raise BackendError("Sala no encontrada.", status=404)
        del self.rooms[room_id]


class FakeShifts:
    def __init__(self, shifts=()):
        self.shifts: Dict[str, Shift] = {s.shift_id: s for s in shifts}
        self._next_id = 500
        self.list_error: Optional[BackendError] = None

    def list_full(self):
        if self.list_error is not None:
            raise self.list_error
        return list(self.shifts.values())

    def get_by_id(self, shift_id):
        return next((s for s in self.list_full() if s.shift_id == str(shift_id)), None)

    def create(self, **fields):
        self._next_id += 1
        shift_id = str(self._next_id)
        self.shifts[shift_id] = Shift(shift_id=shift_id, **fields)
        return shift_id

    def update(self, shift_id, **fields):
        self.shifts[shift_id] = dataclasses.replace(self.shifts[shift_id], **fields)


class FakeInvitations:
    def __init__(self, shifts: Optional[FakeShifts] = None):
        self._shifts = shifts
        self.created: List[Invitation] = []
        self.answers: List[tuple] = []
        self.fail_for: set = set()
        self.answer_error: Optional[BackendError] = None

    def create(self, *, shift_id, user_id, dni):
        if dni in self.fail_for:
            raise BackendError("Error al crear la invitación.", status=500)
        inv = Invitation(
            invitation_id=f"inv-{len(self.created) + 1}",
            shift_id=shift_id,
            user_id=user_id,
            dni=dni,
        )
        self.created.append(inv)
        if self._shifts is not None and shift_id in self._shifts.shifts:
            shift = self._shifts.shifts[shift_id]
            self._shifts.shifts[shift_id] = dataclasses.replace(shift, invitations=shift.invitations + (inv,))
        return inv

    def set_status(self, invitation_id, status):
        if self.answer_error is not None:
            raise self.answer_error
        self.answers.append((invitation_id, status))
        if self._shifts is None:
            return
        for shift_id, shift in list(self._shifts.shifts.items()):
            invitations = tuple(
                dataclasses.replace(i, status=status) if i.invitation_id == invitation_id else i
                for i in shift.invitations
            )
            self._shifts.shifts[shift_id] = dataclasses.replace(shift, invitations=invitations)


class FakeStorage:
    def __init__(self):
        self.uploads: List[tuple] = []

    def upload(self, path, content, content_type):
        self.uploads.append((path, content, content_type))
        return f"https://cdn.test/profile-pictures/{path}"


@pytest.fixture
def admin():
    return User(user_id="1", dni="admin", full_name="Admin Root", email="admin@gmail.com", role=Role.ADMIN)


@pytest.fixture
def ana():
    return User(user_id="2", dni="30111222", full_name="Ana Gomez", email="ana@gmail.com", role=Role.USER)


@pytest.fixture
def bruno():
    return User(user_id="3", dni="30333444", full_name="Bruno Diaz", email="bruno@gmail.com", role=Role.USER)


@pytest.fixture
def make_shift():
    def _make(shift_id, creator, *, invitees=(), status=ShiftStatus.PENDING, invitation_status=InvitationStatus.PENDING, **fields):
        invitations = tuple(
            Invitation(
                invitation_id=f"{shift_id}-{u.user_id}",
                shift_id=shift_id,
                user_id=u.user_id,
                dni=u.dni,
                status=invitation_status,
            )
            for u in invitees
        )
        defaults = dict(
            date="2024-08-15",
            start_time="10:00",
            end_time="11:30",
            theme="Planificación",
            area="Sala Azul",
            participant_count=1 + len(invitations),
        )
        defaults.update(fields)
        return Shift(
            shift_id=shift_id,
            status=status,
            creator_id=creator.user_id,
            creator_dni=creator.dni,
            creator_full_name=creator.full_name,
            invitations=invitations,
            **defaults,
        )

    return _make


@pytest.fixture
def users_repo(admin, ana, bruno):
    return FakeUsers([admin, ana, bruno], passwords={"1": "adminpw", "2": "secret1", "3": "secret3"})


@pytest.fixture
def rooms_repo():
    return FakeRooms([Room("10", "Sala Azul", 8), Room("11", "Auditorio", 40)])


@pytest.fixture
def shifts_repo():
    return FakeShifts()


@pytest.fixture
def invitations_repo(shifts_repo):
    return FakeInvitations(shifts_repo)


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def container(users_repo, rooms_repo, shifts_repo, invitations_repo, storage):
    return build_services(
        users_repo=users_repo,
        rooms_repo=rooms_repo,
        shifts_repo=shifts_repo,
        invitations_repo=invitations_repo,
        storage=storage,
    )


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(user, token="tok-123"):
        with client.session_transaction() as sess:
            sess[USER_KEY] = user.to_dict()
            sess[TOKEN_KEY] = token

    return _login
