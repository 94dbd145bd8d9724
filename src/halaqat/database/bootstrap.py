from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Union

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def _connection(db_config: dict) -> DatabaseConnection:
    # Bootstrap runs outside the request path, so it never reuses the app singleton.
    return DatabaseConnection(DBConfig.from_dict(db_config))


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    conn_factory = _connection(db_config)
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: Optional[Union[str, Path]] = None) -> None:
    ensure_database_exists(db_config)

    path = Path(schema_path) if schema_path else SCHEMA_PATH
    sql = _strip_line_comments(_strip_create_db_and_use(path.read_text(encoding="utf-8")))

    conn = _connection(db_config).connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied from %s", path.name)


DEMO_STAFF = (
    # name, email, password, role
    ("Director Demo", "director@halaqat.local", "director123", "director"),
    ("Supervisor Demo", "supervisor@halaqat.local", "supervisor123", "supervisor"),
    ("Teacher Demo", "teacher@halaqat.local", "teacher123", "teacher"),
    ("Student Affairs Demo", "affairs@halaqat.local", "affairs123", "student_affairs"),
)

DEMO_HALQAT = (
    # name, days, start, end, max_students
    ("Halqa Al-Fajr", "saturday,monday,wednesday", "14:00:00", "16:00:00", 15),
    ("Halqa An-Noor", "sunday,tuesday,thursday", "16:00:00", "18:00:00", 12),
)


def ensure_demo_data(db_config: dict) -> None:
    """Upsert demo staff accounts (one per role) and two halqat."""
    conn = _connection(db_config).connect()
    try:
        cur = conn.cursor(dictionary=True)

        ids: dict[str, int] = {}
        for name, email, password, role in DEMO_STAFF:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM staff_users WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                cur.execute(
                    """
                    UPDATE staff_users
                    SET name=%s, password_hash=%s, role=%s, is_active=1
                    WHERE email=%s
                    """,
                    (name, password_hash, role, email),
                )
                ids[role] = int(existing["user_id"])
            else:
                cur.execute(
                    """
                    INSERT INTO staff_users (name, email, password_hash, role)
                    VALUES (%s, %s, %s, %s)
                    """,
                    (name, email, password_hash, role),
                )
                ids[role] = int(cur.lastrowid)

        for name, days, start, end, max_students in DEMO_HALQAT:
            cur.execute("SELECT halqa_id FROM halqat WHERE name=%s", (name,))
            if cur.fetchone():
                continue
            cur.execute(
                """
                INSERT INTO halqat (name, teacher_id, supervisor_id, days, start_time, end_time, max_students)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                """,
                (name, ids["teacher"], ids["supervisor"], days, start, end, max_students),
            )

        conn.commit()
    finally:
        conn.close()
    logger.info("Demo staff and halqat ready")


def list_tables(db_config: dict) -> list[str]:
    conn = _connection(db_config).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
