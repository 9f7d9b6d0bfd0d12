from __future__ import annotations

import json

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, to_db_datetime
from .model import AuditEntry, DeletedItem
from .repository import AuditLogRepository, DeletedItemRepository


class MySQLAuditLogRepository(AuditLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, entry: AuditEntry) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO audit_logs(actor_id, action, details) VALUES(%s,%s,%s)",
                (int(entry.actor_id), entry.action, json.dumps(entry.details, default=str)),
            )


class MySQLDeletedItemRepository(DeletedItemRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def snapshot(self, item: DeletedItem) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO deleted_items(item_type, item_id, item_data, deleted_by, deleted_at, deletion_reason, can_restore)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    item.item_type.value,
                    item.item_id,
                    json.dumps(item.item_data, default=str),
                    int(item.deleted_by),
                    to_db_datetime(item.deleted_at),
                    item.deletion_reason,
                    1 if item.can_restore else 0,
                ),
            )
            return int(cur.lastrowid)
