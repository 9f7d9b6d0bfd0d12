from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.enums import DeletedItemType


@dataclass(frozen=True)
class AuditEntry:
    actor_id: int
    action: str
    details: dict[str, Any]
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class DeletedItem:
    """Snapshot of an entity taken right before it is deleted (restore is handled elsewhere)."""

    item_type: DeletedItemType
    item_id: str
    item_data: dict[str, Any]
    deleted_by: int
    deleted_at: datetime
    deletion_reason: str = ""
    can_restore: bool = True
