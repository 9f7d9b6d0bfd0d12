from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..audit.service import AuditTrail, DeletionSnapshots
from ..common.datetime_utils import TimeService
from ..common.validators import (
    optional_text,
    require_in_range,
    require_latitude,
    require_longitude,
    require_non_empty,
)
from ..core.constants import DEFAULT_RADIUS_M, MAX_ADDRESS_LENGTH, MAX_NAME_LENGTH, MAX_RADIUS_M, MIN_RADIUS_M
from ..core.enums import DeletedItemType
from ..core.exceptions import NotFoundError
from .model import Center
from .repository import CenterRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CenterInput:
    name: str
    latitude: float
    longitude: float
    radius_m: float
    address: Optional[str]

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "CenterInput":
        radius = data.get("radius_m")
        return cls(
            name=require_non_empty(data.get("name"), "Center name", max_len=MAX_NAME_LENGTH),
            latitude=require_latitude(data.get("latitude")),
            longitude=require_longitude(data.get("longitude")),
            radius_m=DEFAULT_RADIUS_M
            if radius is None or radius == ""
            else require_in_range(radius, "Radius", MIN_RADIUS_M, MAX_RADIUS_M),
            address=optional_text(data.get("address"), "Address", max_len=MAX_ADDRESS_LENGTH),
        )


def center_to_dict(center: Center) -> dict:
    return {
        "id": center.center_id,
        "name": center.name,
        "latitude": center.latitude,
        "longitude": center.longitude,
        "radius_m": center.radius_m,
        "address": center.address,
    }


class CenterService:
    def __init__(
        self,
        centers: CenterRepository,
        *,
        time_service: TimeService,
        audit: AuditTrail,
        snapshots: DeletionSnapshots,
    ):
        self._centers = centers
        self._time = time_service
        self._audit = audit
        self._snapshots = snapshots

    def list_centers(self) -> Sequence[Center]:
        return self._centers.list_all()

    def get_center(self, center_id: int) -> Center:
        center = self._centers.get_by_id(int(center_id))
        if not center:
            raise NotFoundError("Center not found")
        return center

    def create_center(self, *, actor_id: int, data: dict[str, Any]) -> Center:
        values = CenterInput.from_payload(data)
        center_id = self._centers.create(
            name=values.name,
            latitude=values.latitude,
            longitude=values.longitude,
            radius_m=values.radius_m,
            address=values.address,
        )
        center = Center(center_id=center_id, **values.__dict__)
        logger.info("Center %s created by %s", center_id, actor_id)
        self._audit.record(actor_id, "CREATE_CENTER", center_to_dict(center))
        return center

    def update_center(self, *, actor_id: int, center_id: int, data: dict[str, Any]) -> Center:
        existing = self.get_center(center_id)
        merged = {**center_to_dict(existing), **data}
        values = CenterInput.from_payload(merged)
        self._centers.update(
            center_id=existing.center_id,
            name=values.name,
            latitude=values.latitude,
            longitude=values.longitude,
            radius_m=values.radius_m,
            address=values.address,
        )
        center = Center(center_id=existing.center_id, **values.__dict__)
        self._audit.record(actor_id, "UPDATE_CENTER", center_to_dict(center))
        return center

    def delete_center(self, *, actor_id: int, center_id: int, reason: Optional[str] = None) -> None:
        center = self.get_center(center_id)
        self._snapshots.capture(
            item_type=DeletedItemType.CENTER,
            entity=center,
            item_id=center.center_id,
            deleted_by=actor_id,
            deleted_at=self._time.now(),
            reason=reason,
        )
        if not self._centers.delete(center_id=center.center_id):
            raise NotFoundError("Center not found")
        logger.info("Center %s deleted by %s", center.center_id, actor_id)
        self._audit.record(actor_id, "DELETE_CENTER", {"center_id": center.center_id, "name": center.name})
