from __future__ import annotations

from typing import Any, Optional

from ..backend.client import BackendClient, extract_message
from ..core.enums import Role
from ..core.exceptions import BackendError
from .model import LoginTicket, User
from .repository import UserRepository

# Domain field -> backend field for PUT /usuarios/{id}
_UPDATE_FIELDS = {
    "full_name": "nombre",
    "email": "email",
    "password": "password",
    "profile_picture_url": "foto_perfil",
}


def to_user(row: dict) -> User:
    return User(
        user_id=str(row["id"]),
        dni=str(row.get("dni") or ""),
        full_name=row.get("nombre") or "",
        email=row.get("email") or "",
        role=Role.from_backend(row.get("rol")),
        profile_picture_url=row.get("foto_perfil") or None,
    )


class HttpUserRepository(UserRepository):
    def __init__(self, client: BackendClient):
        self._client = client

    def login(self, *, dni: str, password: str) -> LoginTicket:
        data = self._client.post(
            "/usuarios/auth/login",
            {"dni": dni, "password": password},
            default_error="Error al iniciar sesión desde el backend.",
        )
        return LoginTicket(user_id=str(data["id"]), token=data["token"])

    def register(self, *, full_name: str, email: str, dni: str, password: str) -> str:
        data = self._client.post(
            "/usuarios/auth/register",
            {"nombre": full_name, "email": email, "dni": dni, "password": password, "rol": "usuario"},
            default_error="Error al registrar desde el backend.",
        )
        return extract_message(data, "Registro exitoso. Por favor, inicia sesión.")

    def logout(self, *, token: Optional[str]) -> None:
        self._client.post("/usuarios/auth/logout", {}, token=token)

    def forgot_password(self, *, dni: str) -> dict:
        data = self._client.post(
            "/usuarios/auth/forgot-password",
            {"dni": dni},
            default_error="Error al solicitar restablecimiento de contraseña.",
        )
        return data or {}

    def reset_password(self, *, dni: str, token: str, new_password: str) -> str:
        data = self._client.post(
            "/usuarios/auth/reset-password",
            {"dni": dni, "token": token, "newPassword": new_password},
            default_error="Error al restablecer la contraseña.",
        )
        return extract_message(data, "Contraseña restablecida.")

    def get_by_id(self, user_id: str, *, token: Optional[str] = None) -> Optional[User]:
        try:
            row = self._client.get(f"/usuarios/{user_id}", token=token)
        except BackendError as e:
            if e.status == 404:
                return None
            raise
        return to_user(row) if row else None

    def get_by_dni(self, dni: str) -> Optional[User]:
        try:
            row = self._client.get(f"/usuarios/dni/{dni}")
        except BackendError as e:
            if e.status == 404:
                return None
            raise
        return to_user(row) if row else None

    def update(self, user_id: str, **fields: Any) -> str:
        payload = {_UPDATE_FIELDS[k]: v for k, v in fields.items()}
        data = self._client.put(
            f"/usuarios/{user_id}",
            payload,
            default_error="Error al actualizar el usuario desde el backend.",
        )
        return extract_message(data, "")
