from __future__ import annotations

import re
from typing import Iterable, List, Optional

from ..core.constants import DNI_PATTERN

_DNI_RE = re.compile(DNI_PATTERN)


def is_valid_dni(value: str) -> bool:
    return bool(_DNI_RE.match((value or "").strip()))


def split_dnis(raw: Optional[str]) -> List[str]:
    """Comma separated DNI list, trimmed, empty entries dropped."""
    if not raw or not raw.strip():
        return []
    return [d.strip() for d in raw.split(",") if d.strip()]


def unique_invitees(dnis: Iterable[str], *, exclude: Optional[str] = None) -> List[str]:
    """De-duplicate while keeping submission order; drop the creator's own DNI."""
    seen = set()
    out: List[str] = []
    for dni in dnis:
        if dni == exclude or dni in seen:
            continue
        seen.add(dni)
        out.append(dni)
    return out
