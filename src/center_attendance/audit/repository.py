from __future__ import annotations

from typing import Protocol

from .model import AuditEntry, DeletedItem


class AuditLogRepository(Protocol):
    def insert(self, entry: AuditEntry) -> None:
        raise NotImplementedError


class DeletedItemRepository(Protocol):
    def snapshot(self, item: DeletedItem) -> int:
        raise NotImplementedError
