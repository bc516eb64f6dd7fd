from __future__ import annotations

from typing import ClassVar, Dict, Tuple

from email_validator import EmailNotValidError, validate_email
from pydantic import field_validator

from ..common.forms import FormSchema, field_error, require_text
from ..common.validators import is_valid_dni
from ..core.constants import MIN_FULL_NAME_LENGTH, MIN_PASSWORD_LENGTH


def _email(value: str, message: str) -> str:
    try:
        return validate_email((value or "").strip(), check_deliverability=False).normalized
    except EmailNotValidError:
        raise field_error(message) from None


def _new_password(value: str, message: str) -> str:
    if len(value or "") < MIN_PASSWORD_LENGTH:
        raise field_error(message)
    return value


class LoginForm(FormSchema):
    dni: str = ""
    password: str = ""

    @field_validator("dni")
    @classmethod
    def check_dni(cls, v: str) -> str:
        return require_text(v, "DNI es requerido")

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if not v:
            raise field_error("Contraseña es requerida")
        return v


class RegisterForm(FormSchema):
    confirmations: ClassVar[Dict[str, Tuple[str, str]]] = {
        "confirm_password": ("password", "Las contraseñas no coinciden"),
    }

    full_name: str = ""
    email: str = ""
    dni: str = ""
    password: str = ""
    confirm_password: str = ""

    @field_validator("full_name")
    @classmethod
    def check_full_name(cls, v: str) -> str:
        return require_text(v, "Nombre completo es requerido")

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _email(v, "Email inválido")

    @field_validator("dni")
    @classmethod
    def check_dni(cls, v: str) -> str:
        v = (v or "").strip()
        if not is_valid_dni(v):
            raise field_error("DNI inválido (7-8 dígitos).")
        return v

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return _new_password(v, f"Contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres")


class UpdateProfileForm(FormSchema):
    full_name: str = ""
    email: str = ""

    @field_validator("full_name")
    @classmethod
    def check_full_name(cls, v: str) -> str:
        return require_text(
            v,
            f"Nombre completo debe tener al menos {MIN_FULL_NAME_LENGTH} caracteres.",
            min_len=MIN_FULL_NAME_LENGTH,
        )

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _email(v, "Email inválido.")


class ChangePasswordForm(FormSchema):
    confirmations: ClassVar[Dict[str, Tuple[str, str]]] = {
        "confirm_new_password": ("new_password", "Las nuevas contraseñas no coinciden."),
    }

    current_password: str = ""
    new_password: str = ""
    confirm_new_password: str = ""

    @field_validator("current_password")
    @classmethod
    def check_current(cls, v: str) -> str:
        if not v:
            raise field_error("Contraseña actual es requerida.")
        return v

    @field_validator("new_password")
    @classmethod
    def check_new(cls, v: str) -> str:
        return _new_password(v, f"Nueva contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres.")


class ForgotPasswordForm(FormSchema):
    dni: str = ""

    @field_validator("dni")
    @classmethod
    def check_dni(cls, v: str) -> str:
        return require_text(v, "DNI es requerido")


class ResetPasswordForm(FormSchema):
    confirmations: ClassVar[Dict[str, Tuple[str, str]]] = {
        "confirm_new_password": ("new_password", "Las contraseñas no coinciden."),
    }

    dni: str = ""
    token: str = ""
    new_password: str = ""
    confirm_new_password: str = ""

    @field_validator("dni")
    @classmethod
    def check_dni(cls, v: str) -> str:
        return require_text(v, "DNI es requerido")

    @field_validator("token")
    @classmethod
    def check_token(cls, v: str) -> str:
        return require_text(v, "Token es requerido")

    @field_validator("new_password")
    @classmethod
    def check_new(cls, v: str) -> str:
        return _new_password(v, f"Nueva contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres.")
