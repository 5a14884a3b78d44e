from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

import mysql.connector
from werkzeug.security import generate_password_hash

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "training_attendance")),
    )


def _connect(target: DBTarget, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


_SQL_TOKEN = re.compile(
    r"""
      '(?:[^'\\]|\\.|'')*'
    | "(?:[^"\\]|\\.|"")*"
    | `[^`]*`
    | --[^\n]*
    | /\*.*?\*/
    | ;
    | [^'"`;/-]+
    | .
    """,
    re.VERBOSE | re.DOTALL,
)

# The target database comes from DB_CONFIG, not from the script.
_SKIPPED_STATEMENT = re.compile(r"^(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def split_sql_statements(sql: str) -> list[str]:
    """Split a schema/seed script on ``;`` outside quotes, dropping comments."""

    statements: list[str] = []
    parts: list[str] = []
    for token in _SQL_TOKEN.findall(sql):
        if token.startswith(("--", "/*")):
            continue
        if token != ";":
            parts.append(token)
            continue
        statement = "".join(parts).strip()
        parts = []
        if statement:
            statements.append(statement)
    tail = "".join(parts).strip()
    if tail:
        statements.append(tail)
    return [s for s in statements if not _SKIPPED_STATEMENT.match(s)]


def _exec_sql_file(db_config: dict, path: str | Path) -> int:
    statements = split_sql_statements(Path(path).read_text(encoding="utf-8"))
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        for statement in statements:
            cur.execute(statement)
        conn.commit()
    finally:
        conn.close()
    return len(statements)


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _exec_sql_file(db_config, schema_path)
    logger.info("Applied %s (%d statements)", Path(schema_path).name, count)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _exec_sql_file(db_config, seed_path)
    logger.info("Applied %s (%d statements)", Path(seed_path).name, count)


def ensure_demo_coaches(db_config: dict) -> None:
    """Give the seeded demo coaches a real password hash.

    seed.sql ships placeholder hashes; werkzeug hashes are salted so they are
    generated here instead.
    """

    target = _as_target(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        for username, name, email in (
            ("coach1", "John Smith", "john.smith@football.com"),
            ("coach2", "Sarah Johnson", "sarah.johnson@football.com"),
        ):
            cur.execute(
                """
                INSERT INTO coaches (username, password_hash, name, email)
                VALUES (%s, %s, %s, %s) AS new
                ON DUPLICATE KEY UPDATE password_hash=new.password_hash
                """,
                (username, generate_password_hash(DEMO_PASSWORD), name, email),
            )
        conn.commit()
    finally:
        conn.close()
    logger.info("Demo coaches ready (coach1/coach2, password %s)", DEMO_PASSWORD)


def list_tables(db_config: dict) -> list[str]:
    target = _as_target(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
