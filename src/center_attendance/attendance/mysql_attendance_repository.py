from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import DuplicateAttendanceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    from_db_datetime,
    is_duplicate_key,
    to_db_datetime,
)
from .model import AttendanceRecord, NewAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    attendance_id, assistant_id, session_id, call_session_id, session_subject, center_id,
    latitude, longitude, time_recorded, delay_minutes, notes, occurrence_key, activity_type,
    is_deleted, deleted_by, deleted_at, deletion_reason
"""


def _opt_int(value) -> Optional[int]:
    return int(value) if value is not None else None


def _opt_float(value) -> Optional[float]:
    return float(value) if value is not None else None


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        assistant_id=int(r["assistant_id"]),
        session_id=_opt_int(r.get("session_id")),
        call_session_id=_opt_int(r.get("call_session_id")),
        session_subject=r.get("session_subject"),
        center_id=_opt_int(r.get("center_id")),
        latitude=_opt_float(r.get("latitude")),
        longitude=_opt_float(r.get("longitude")),
        time_recorded=from_db_datetime(r["time_recorded"]),
        delay_minutes=int(r.get("delay_minutes") or 0),
        notes=r.get("notes"),
        occurrence_key=r.get("occurrence_key"),
        activity_type=r.get("activity_type"),
        is_deleted=bool(r.get("is_deleted")),
        deleted_by=_opt_int(r.get("deleted_by")),
        deleted_at=from_db_datetime(r.get("deleted_at")),
        deletion_reason=r.get("deletion_reason"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _find_one(self, where: str, params: tuple) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE {where} ORDER BY time_recorded DESC LIMIT 1",
                params,
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._find_one("attendance_id=%s", (int(attendance_id),))

    def find_for_session(self, *, assistant_id: int, session_id: int) -> Optional[AttendanceRecord]:
        return self._find_one("assistant_id=%s AND session_id=%s", (int(assistant_id), int(session_id)))

    def find_for_session_between(
        self,
        *,
        assistant_id: int,
        session_id: int,
        start: datetime,
        end: datetime,
    ) -> Optional[AttendanceRecord]:
        return self._find_one(
            "assistant_id=%s AND session_id=%s AND time_recorded >= %s AND time_recorded < %s",
            (int(assistant_id), int(session_id), to_db_datetime(start), to_db_datetime(end)),
        )

    def find_for_call_session(self, *, assistant_id: int, call_session_id: int) -> Optional[AttendanceRecord]:
        return self._find_one("assistant_id=%s AND call_session_id=%s", (int(assistant_id), int(call_session_id)))

    def find_for_activity_between(
        self,
        *,
        assistant_id: int,
        activity_type: str,
        start: datetime,
        end: datetime,
    ) -> Optional[AttendanceRecord]:
        return self._find_one(
            "assistant_id=%s AND activity_type=%s AND time_recorded >= %s AND time_recorded < %s",
            (int(assistant_id), activity_type, to_db_datetime(start), to_db_datetime(end)),
        )

    def create(self, record: NewAttendance) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        assistant_id, session_id, call_session_id, session_subject, center_id,
                        latitude, longitude, time_recorded, delay_minutes, notes, occurrence_key, activity_type
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(record.assistant_id),
                        record.session_id,
                        record.call_session_id,
                        record.session_subject,
                        record.center_id,
                        record.latitude,
                        record.longitude,
                        to_db_datetime(record.time_recorded),
                        int(record.delay_minutes),
                        record.notes,
                        record.occurrence_key,
                        record.activity_type,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                logger.info("Duplicate attendance rejected by storage for assistant %s", record.assistant_id)
                raise DuplicateAttendanceError("Attendance already recorded") from e
            raise

    def list_recent_for_assistant(self, assistant_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE assistant_id=%s AND is_deleted=0
                ORDER BY time_recorded DESC
                LIMIT %s
                """,
                (int(assistant_id), int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_filtered(
        self,
        *,
        subject: Optional[str] = None,
        assistant_id: Optional[int] = None,
        include_deleted: bool = False,
        limit: int = 200,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []
        if not include_deleted:
            clauses.append("is_deleted=0")
        if subject:
            clauses.append("session_subject LIKE %s")
            params.append(f"%{subject}%")
        if assistant_id is not None:
            clauses.append("assistant_id=%s")
            params.append(int(assistant_id))
        params.append(int(limit))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY time_recorded DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def admin_update(
        self,
        *,
        attendance_id: int,
        time_recorded: datetime,
        delay_minutes: int,
        notes: Optional[str],
        occurrence_key: Optional[str],
    ) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE attendance_records
                    SET time_recorded=%s, delay_minutes=%s, notes=%s, occurrence_key=%s
                    WHERE attendance_id=%s
                    """,
                    (to_db_datetime(time_recorded), int(delay_minutes), notes, occurrence_key, int(attendance_id)),
                )
                return cur.rowcount > 0
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateAttendanceError("Another record already exists for that day") from e
            raise

    def soft_delete(self, *, attendance_id: int, deleted_by: int, deleted_at: datetime, reason: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET is_deleted=1, deleted_by=%s, deleted_at=%s, deletion_reason=%s
                WHERE attendance_id=%s AND is_deleted=0
                """,
                (int(deleted_by), to_db_datetime(deleted_at), reason, int(attendance_id)),
            )
            return cur.rowcount > 0
