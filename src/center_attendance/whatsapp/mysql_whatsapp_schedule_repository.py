from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import WhatsAppSchedule
from .repository import WhatsAppScheduleRepository

_COLUMNS = "schedule_id, user_id, day_of_week, start_time, end_time, is_active"


def _row_to_schedule(r: dict) -> WhatsAppSchedule:
    return WhatsAppSchedule(
        schedule_id=int(r["schedule_id"]),
        user_id=int(r["user_id"]),
        day_of_week=int(r["day_of_week"]),
        start_time=str(r["start_time"]),
        end_time=str(r["end_time"]),
        is_active=bool(r["is_active"]),
    )


class MySQLWhatsAppScheduleRepository(WhatsAppScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, schedule_id: int) -> Optional[WhatsAppSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM whatsapp_schedules WHERE schedule_id=%s", (int(schedule_id),))
            r = fetchone(cur)
            return _row_to_schedule(r) if r else None

    def list_all(self, *, user_id: Optional[int] = None) -> Sequence[WhatsAppSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            if user_id is None:
                cur.execute(f"SELECT {_COLUMNS} FROM whatsapp_schedules ORDER BY day_of_week, start_time")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM whatsapp_schedules WHERE user_id=%s ORDER BY day_of_week, start_time",
                    (int(user_id),),
                )
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def list_active_for_day(self, day_of_week: int) -> Sequence[WhatsAppSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM whatsapp_schedules
                WHERE day_of_week=%s AND is_active=1
                ORDER BY user_id, start_time
                """,
                (int(day_of_week),),
            )
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def create(self, *, user_id: int, day_of_week: int, start_time: str, end_time: str, is_active: bool) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO whatsapp_schedules(user_id, day_of_week, start_time, end_time, is_active)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), int(day_of_week), start_time, end_time, 1 if is_active else 0),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        schedule_id: int,
        user_id: int,
        day_of_week: int,
        start_time: str,
        end_time: str,
        is_active: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE whatsapp_schedules
                SET user_id=%s, day_of_week=%s, start_time=%s, end_time=%s, is_active=%s
                WHERE schedule_id=%s
                """,
                (int(user_id), int(day_of_week), start_time, end_time, 1 if is_active else 0, int(schedule_id)),
            )
            return cur.rowcount > 0

    def delete(self, *, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM whatsapp_schedules WHERE schedule_id=%s", (int(schedule_id),))
            return cur.rowcount > 0
