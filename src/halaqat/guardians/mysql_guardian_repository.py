from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_RELATIONSHIP
from ..core.enums import Relationship
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, sql_value
from .model import Guardian, GuardianData
from .repository import GuardianRepository


def to_guardian(row: dict, *, prefix: str = "") -> Guardian:
    return Guardian(
        guardian_id=int(row[f"{prefix}guardian_id"]),
        name=row[f"{prefix}name"],
        phone=row[f"{prefix}phone"],
        relationship=Relationship(row[f"{prefix}relationship"]),
        alternate_phone=row.get(f"{prefix}alternate_phone"),
        address=row.get(f"{prefix}address"),
        whatsapp_enabled=bool(row.get(f"{prefix}whatsapp_enabled", True)),
        whatsapp_phone=row.get(f"{prefix}whatsapp_phone"),
    )


class MySQLGuardianRepository(GuardianRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, data: GuardianData) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO guardians(
                    name, phone, alternate_phone, address, relationship, whatsapp_enabled, whatsapp_phone
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    data.name,
                    data.phone,
                    data.alternate_phone,
                    data.address,
                    (data.relationship or DEFAULT_RELATIONSHIP).value,
                    1 if data.whatsapp_enabled is not False else 0,
                    data.whatsapp_phone,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, guardian_id: int) -> Optional[Guardian]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT guardian_id, name, phone, alternate_phone, address,
                       relationship, whatsapp_enabled, whatsapp_phone
                FROM guardians
                WHERE guardian_id=%s
                """,
                (int(guardian_id),),
            )
            row = fetchone(cur)
            return to_guardian(row) if row else None

    def update(self, guardian_id: int, data: GuardianData) -> bool:
        changes = data.changes()
        with db_cursor(self._conn_factory) as (_, cur):
            if not changes:
                cur.execute("SELECT 1 AS found FROM guardians WHERE guardian_id=%s", (int(guardian_id),))
                return fetchone(cur) is not None

            assignments = ", ".join(f"{column}=%s" for column in changes)
            cur.execute(
                f"UPDATE guardians SET {assignments} WHERE guardian_id=%s",
                tuple(sql_value(v) for v in changes.values()) + (int(guardian_id),),
            )
            # rowcount is 0 when nothing changed, so confirm existence separately.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM guardians WHERE guardian_id=%s", (int(guardian_id),))
            return fetchone(cur) is not None
