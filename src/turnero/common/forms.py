"""Form validation on top of pydantic models.

Form schemas declare every field as a string defaulting to ``""`` and raise
``PydanticCustomError`` from their validators, so the messages reaching the
user are the Spanish ones written in the schema and every error is keyed by
the field it belongs to.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Mapping, Tuple, Type, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict
from pydantic_core import PydanticCustomError

from ..core.constants import VALIDATION_ERROR_MESSAGE
from ..core.exceptions import ValidationError

FormT = TypeVar("FormT", bound=BaseModel)


class FormSchema(BaseModel):
    model_config = ConfigDict(validate_default=True, extra="ignore")

    # confirmation field -> (field it must repeat, message)
    confirmations: ClassVar[Dict[str, Tuple[str, str]]] = {}


def field_error(message: str) -> PydanticCustomError:
    return PydanticCustomError("form", message)


def flatten_errors(exc: pydantic.ValidationError) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        loc = err.get("loc") or ("_form",)
        errors.setdefault(str(loc[0]), []).append(err["msg"])
    return errors


def _confirmation_errors(schema: Type[BaseModel], data: Mapping[str, Any]) -> Dict[str, List[str]]:
    # Compared on raw input.
    errors: Dict[str, List[str]] = {}
    for field, (other, message) in getattr(schema, "confirmations", {}).items():
        if (data.get(field) or "") != (data.get(other) or ""):
            errors[field] = [message]
    return errors


def validate_form(schema: Type[FormT], data: Mapping[str, Any]) -> FormT:
    data = dict(data)
    errors = _confirmation_errors(schema, data)
    try:
        form = schema.model_validate(data)
    except pydantic.ValidationError as exc:
        for field, messages in flatten_errors(exc).items():
            errors.setdefault(field, []).extend(messages)
        form = None
    if errors:
        raise ValidationError(VALIDATION_ERROR_MESSAGE, errors)
    return form


def require_text(value: str, message: str, *, min_len: int = 1) -> str:
    value = (value or "").strip()
    if len(value) < min_len:
        raise field_error(message)
    return value
