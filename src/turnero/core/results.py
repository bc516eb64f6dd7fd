from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .exceptions import DomainError

SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class ActionResult:
    """Tagged outcome of a form submission, shown to the user as a toast."""

    type: str
    message: str
    errors: Dict[str, List[str]] = field(default_factory=dict)
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, message: str, **data: Any) -> "ActionResult":
        return cls(type=SUCCESS, message=message, data=data)

    @classmethod
    def error(cls, message: str, errors=None) -> "ActionResult":
        return cls(type=ERROR, message=message, errors=dict(errors or {}))

    @classmethod
    def from_exception(cls, exc: DomainError) -> "ActionResult":
        return cls.error(exc.message, exc.errors)

    @property
    def ok(self) -> bool:
        return self.type == SUCCESS

    @property
    def flash_category(self) -> str:
        return "success" if self.ok else "danger"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type, "message": self.message}
        if self.errors:
            out["errors"] = self.errors
        out.update(self.data)
        return out
