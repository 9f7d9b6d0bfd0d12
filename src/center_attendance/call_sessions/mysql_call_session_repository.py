from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import CallSessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import CallSession
from .repository import CallSessionRepository

_COLUMNS = "call_session_id, name, assistant_id, status, start_time, end_time"


def _row_to_call_session(r: dict) -> CallSession:
    return CallSession(
        call_session_id=int(r["call_session_id"]),
        name=r["name"],
        assistant_id=int(r["assistant_id"]) if r.get("assistant_id") is not None else None,
        status=CallSessionStatus(r["status"]),
        start_time=from_db_datetime(r["start_time"]),
        end_time=from_db_datetime(r.get("end_time")),
    )


class MySQLCallSessionRepository(CallSessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, call_session_id: int) -> Optional[CallSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM call_sessions WHERE call_session_id=%s", (int(call_session_id),))
            r = fetchone(cur)
            return _row_to_call_session(r) if r else None

    def list_for_assistant(self, assistant_id: int) -> Sequence[CallSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM call_sessions
                WHERE assistant_id=%s OR assistant_id IS NULL
                ORDER BY start_time DESC
                """,
                (int(assistant_id),),
            )
            return [_row_to_call_session(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        name: str,
        assistant_id: Optional[int],
        start_time: datetime,
        end_time: Optional[datetime],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO call_sessions(name, assistant_id, start_time, end_time)
                VALUES(%s,%s,%s,%s)
                """,
                (name, assistant_id, to_db_datetime(start_time), to_db_datetime(end_time)),
            )
            return int(cur.lastrowid)
