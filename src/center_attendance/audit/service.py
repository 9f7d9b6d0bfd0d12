from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ..core.enums import DeletedItemType
from .model import AuditEntry, DeletedItem
from .repository import AuditLogRepository, DeletedItemRepository

logger = logging.getLogger(__name__)


def snapshot_of(entity: Any) -> dict[str, Any]:
    """JSON-friendly dict of a domain dataclass."""

    data = asdict(entity) if is_dataclass(entity) else dict(entity)
    out: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, datetime):
            out[key] = value.isoformat()
        elif isinstance(value, Enum):
            out[key] = value.value
        else:
            out[key] = value
    return out


class AuditTrail:
    """Fire-and-forget audit notifications.

    A failing audit write is logged and dropped; it never blocks or rolls back the caller.
    """

    def __init__(self, logs: Optional[AuditLogRepository] = None):
        self._logs = logs

    def record(self, actor_id: Optional[int], action: str, details: Optional[dict[str, Any]] = None) -> None:
        if not actor_id or not action:
            logger.warning("Audit logging skipped: missing actor or action")
            return
        if self._logs is None:
            return
        try:
            self._logs.insert(AuditEntry(actor_id=int(actor_id), action=action, details=details or {}))
        except Exception:
            logger.exception("Audit logging failed for action %s", action)


class DeletionSnapshots:
    def __init__(self, items: DeletedItemRepository):
        self._items = items

    def capture(
        self,
        *,
        item_type: DeletedItemType,
        entity: Any,
        item_id: int,
        deleted_by: int,
        deleted_at: datetime,
        reason: Optional[str] = None,
    ) -> int:
        return self._items.snapshot(
            DeletedItem(
                item_type=item_type,
                item_id=str(item_id),
                item_data=snapshot_of(entity),
                deleted_by=int(deleted_by),
                deleted_at=deleted_at,
                deletion_reason=reason or "",
            )
        )
