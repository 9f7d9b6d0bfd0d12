from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Center


class CenterRepository(Protocol):
    def get_by_id(self, center_id: int) -> Optional[Center]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Center]:
        raise NotImplementedError

    def create(self, *, name: str, latitude: float, longitude: float, radius_m: float, address: Optional[str]) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        center_id: int,
        name: str,
        latitude: float,
        longitude: float,
        radius_m: float,
        address: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete(self, *, center_id: int) -> bool:
        raise NotImplementedError
