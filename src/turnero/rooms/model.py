from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Room:
    """Domain entity: Room (sala) a shift can book."""

    room_id: str
    name: str
    capacity: int = 0
