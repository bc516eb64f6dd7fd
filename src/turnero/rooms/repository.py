from __future__ import annotations

from typing import Protocol, Sequence

from .model import Room


class RoomRepository(Protocol):
    def list_all(self) -> Sequence[Room]:
        raise NotImplementedError

    def create(self, *, name: str, capacity: int) -> Room:
        raise NotImplementedError

    def delete(self, room_id: str) -> None:
        raise NotImplementedError
