from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import Shift


class ShiftRepository(Protocol):
    def list_full(self) -> Sequence[Shift]:
        """All shifts with creator and invitations."""
        raise NotImplementedError

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        raise NotImplementedError

    def create(
        self,
        *,
        date: str,
        start_time: str,
        end_time: str,
        theme: str,
        area: str,
        notes: str,
        participant_count: int,
        creator_id: str,
    ) -> str:
        raise NotImplementedError

    def update(self, shift_id: str, **fields: Any) -> None:
        raise NotImplementedError
