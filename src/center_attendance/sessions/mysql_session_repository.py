from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import RecurrenceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import SessionDefinition
from .repository import SessionRepository

_COLUMNS = "session_id, center_id, assistant_id, subject, start_time, recurrence_type, day_of_week, is_active"


def _row_to_session(r: dict) -> SessionDefinition:
    return SessionDefinition(
        session_id=int(r["session_id"]),
        center_id=int(r["center_id"]),
        assistant_id=int(r["assistant_id"]) if r.get("assistant_id") is not None else None,
        subject=r["subject"],
        start_time=from_db_datetime(r["start_time"]),
        recurrence_type=RecurrenceType(r["recurrence_type"]),
        day_of_week=int(r["day_of_week"]) if r.get("day_of_week") is not None else None,
        is_active=bool(r["is_active"]),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[SessionDefinition]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _row_to_session(r) if r else None

    def list_candidates_for_day(
        self,
        *,
        assistant_id: int,
        day_start: datetime,
        day_end: datetime,
        day_of_week: int,
    ) -> Sequence[SessionDefinition]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM sessions
                WHERE (assistant_id=%s OR assistant_id IS NULL)
                  AND (
                    (recurrence_type='one_time' AND start_time >= %s AND start_time < %s)
                    OR (recurrence_type='weekly' AND day_of_week=%s AND is_active=1)
                  )
                ORDER BY start_time ASC
                """,
                (int(assistant_id), to_db_datetime(day_start), to_db_datetime(day_end), int(day_of_week)),
            )
            return [_row_to_session(r) for r in fetchall(cur)]

    def list_all(self, *, center_id: Optional[int] = None, assistant_id: Optional[int] = None) -> Sequence[SessionDefinition]:
        clauses = ["1=1"]
        params: list[object] = []
        if center_id is not None:
            clauses.append("center_id=%s")
            params.append(int(center_id))
        if assistant_id is not None:
            clauses.append("assistant_id=%s")
            params.append(int(assistant_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sessions WHERE {where} ORDER BY start_time DESC", tuple(params))
            return [_row_to_session(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        center_id: int,
        assistant_id: Optional[int],
        subject: str,
        start_time: datetime,
        recurrence_type: RecurrenceType,
        day_of_week: Optional[int],
        is_active: bool,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sessions(center_id, assistant_id, subject, start_time, recurrence_type, day_of_week, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(center_id),
                    assistant_id,
                    subject,
                    to_db_datetime(start_time),
                    recurrence_type.value,
                    day_of_week,
                    1 if is_active else 0,
                ),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        session_id: int,
        center_id: int,
        assistant_id: Optional[int],
        subject: str,
        start_time: datetime,
        recurrence_type: RecurrenceType,
        day_of_week: Optional[int],
        is_active: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE sessions
                SET center_id=%s, assistant_id=%s, subject=%s, start_time=%s,
                    recurrence_type=%s, day_of_week=%s, is_active=%s
                WHERE session_id=%s
                """,
                (
                    int(center_id),
                    assistant_id,
                    subject,
                    to_db_datetime(start_time),
                    recurrence_type.value,
                    day_of_week,
                    1 if is_active else 0,
                    int(session_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, *, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE session_id=%s", (int(session_id),))
            return cur.rowcount > 0
