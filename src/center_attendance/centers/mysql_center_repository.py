from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Center
from .repository import CenterRepository

_COLUMNS = "center_id, name, latitude, longitude, radius_m, address"


def _row_to_center(r: dict) -> Center:
    return Center(
        center_id=int(r["center_id"]),
        name=r["name"],
        latitude=float(r["latitude"]),
        longitude=float(r["longitude"]),
        radius_m=float(r["radius_m"]),
        address=r.get("address"),
    )


class MySQLCenterRepository(CenterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, center_id: int) -> Optional[Center]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM centers WHERE center_id=%s", (int(center_id),))
            r = fetchone(cur)
            return _row_to_center(r) if r else None

    def list_all(self) -> Sequence[Center]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM centers ORDER BY name ASC")
            return [_row_to_center(r) for r in fetchall(cur)]

    def create(self, *, name: str, latitude: float, longitude: float, radius_m: float, address: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO centers(name, latitude, longitude, radius_m, address)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, latitude, longitude, radius_m, address),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE centers
                SET name=%s, latitude=%s, longitude=%s, radius_m=%s, address=%s
                WHERE center_id=%s
                """,
                (name, latitude, longitude, radius_m, address, int(center_id)),
            )
            return cur.rowcount > 0

    def delete(self, *, center_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM centers WHERE center_id=%s", (int(center_id),))
            return cur.rowcount > 0
