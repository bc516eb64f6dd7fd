from __future__ import annotations

import dataclasses
import logging
import uuid
from typing import Optional, Tuple

from ..core.constants import ACCEPTED_IMAGE_TYPES, MAX_PROFILE_PICTURE_BYTES
from ..core.exceptions import AuthenticationError, BackendError, ValidationError
from ..storage.profile_pictures import ProfilePictureStorage, UploadedFile
from .model import User
from .repository import UserRepository
from .schemas import (
    ChangePasswordForm,
    ForgotPasswordForm,
    LoginForm,
    RegisterForm,
    ResetPasswordForm,
    UpdateProfileForm,
)

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class AuthService:
    """Use cases: login, registration, logout and password reset."""

    def __init__(self, users: UserRepository):
        self._users = users

    def login(self, form: LoginForm) -> Tuple[User, str]:
        ticket = self._users.login(dni=form.dni, password=form.password)
        user = self._users.get_by_id(ticket.user_id, token=ticket.token)
        if not user:
            raise AuthenticationError("Login exitoso pero no se pudieron obtener detalles del usuario.")
        logger.info("user %s (%s) logged in", user.user_id, user.role.value)
        return user, ticket.token

    def register(self, form: RegisterForm) -> str:
        return self._users.register(
            full_name=form.full_name,
            email=form.email,
            dni=form.dni,
            password=form.password,
        )

    def logout(self, token: Optional[str]) -> None:
        if not token:
            return
        try:
            self._users.logout(token=token)
        except BackendError as e:
            # The local session is cleared regardless.
            logger.warning("backend logout failed: %s", e.message)

    def request_password_reset(self, form: ForgotPasswordForm) -> str:
        data = self._users.forgot_password(dni=form.dni)
        if data.get("resetToken"):
            logger.info("notification (simulated): password reset requested for DNI %s, token %s", form.dni, data["resetToken"])
        return data.get("mensaje") or (
            "Si existe una cuenta con este DNI, se han proporcionado instrucciones para restablecer la contraseña."
        )

    def reset_password(self, form: ResetPasswordForm) -> str:
        try:
            message = self._users.reset_password(dni=form.dni, token=form.token, new_password=form.new_password)
        except BackendError as e:
            detail = e.detail
            errors = {}
            if "token inválido o expirado" in detail.lower():
                errors["token"] = [detail]
            elif "dni inválido" in detail.lower():
                errors["dni"] = [detail]
            raise BackendError(detail, status=e.status, errors=errors, body=e.body) from e
        logger.info("notification (simulated): password reset for DNI %s", form.dni)
        return message

    def fetch_user(self, user_id: str, token: Optional[str] = None) -> Optional[User]:
        return self._users.get_by_id(user_id, token=token)


class ProfileService:
    """Use cases: profile details, password change and profile picture."""

    def __init__(self, users: UserRepository, storage: Optional[ProfilePictureStorage] = None):
        self._users = users
        self._storage = storage

    def update_profile(self, user: User, form: UpdateProfileForm) -> Tuple[User, str]:
        try:
            message = self._users.update(user.user_id, full_name=form.full_name, email=form.email)
        except BackendError as e:
            errors = {}
            if "email_unique" in e.detail.lower():
                errors["email"] = ["Este email ya está en uso."]
            raise BackendError(e.message, status=e.status, errors=errors, body=e.body) from e

        updated = dataclasses.replace(user, full_name=form.full_name, email=form.email)
        logger.info("user %s updated profile", user.user_id)
        return updated, message or "Perfil actualizado exitosamente."

    def change_password(self, user: User, form: ChangePasswordForm) -> str:
        # The backend has no current-password check; it only receives the new one.
        message = self._users.update(user.user_id, password=form.new_password)
        logger.info("user %s changed password", user.user_id)
        return message or "Contraseña actualizada exitosamente."

    def update_profile_picture(self, user: User, upload: Optional[UploadedFile]) -> Tuple[User, str]:
        if upload is None or not upload.content:
            raise ValidationError("Error de validación.", {"profile_picture": ["Selecciona una imagen."]})
        if len(upload.content) > MAX_PROFILE_PICTURE_BYTES:
            raise ValidationError("Error de validación.", {"profile_picture": ["El tamaño máximo de la imagen es 5MB."]})
        if upload.content_type not in ACCEPTED_IMAGE_TYPES:
            raise ValidationError(
                "Error de validación.",
                {"profile_picture": ["Solo se aceptan formatos .jpg, .jpeg, .png y .webp."]},
            )
        if self._storage is None:
            raise ValidationError("El almacenamiento de imágenes no está configurado.")

        path = f"{user.user_id}/{uuid.uuid4().hex}.{_EXTENSIONS[upload.content_type]}"
        url = self._storage.upload(path, upload.content, upload.content_type)
        self._users.update(user.user_id, profile_picture_url=url)
        return dataclasses.replace(user, profile_picture_url=url), "Foto de perfil actualizada."

    def remove_profile_picture(self, user: User) -> Tuple[User, str]:
        self._users.update(user.user_id, profile_picture_url=None)
        return dataclasses.replace(user, profile_picture_url=None), "Foto de perfil eliminada."

    def find_by_dni(self, dni: str) -> Optional[User]:
        return self._users.get_by_dni(dni)
