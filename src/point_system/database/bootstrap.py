from __future__ import annotations

import logging
import re
from pathlib import Path

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

# The target schema comes from DB_CONFIG, not from the file.
_SCHEMA_SELECTION = re.compile(r"(?i)^(CREATE\s+DATABASE|USE)\b")


def schema_statements(sql: str) -> list[str]:
    """Split schema.sql into statements.

    Drops `--` comment lines and the file's own CREATE DATABASE / USE. The
    file must not contain ';' inside string literals.
    """
    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    statements = []
    for chunk in body.split(";"):
        stmt = chunk.strip()
        if stmt and not _SCHEMA_SELECTION.match(stmt):
            statements.append(stmt)
    return statements


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Create the database if needed and apply schema.sql. Returns the statement count."""
    factory = DatabaseConnection(DBConfig.from_mapping(db_config))
    database = factory.config.database
    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))

    conn = factory.connect(database="")
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        cur.close()
    finally:
        conn.close()

    conn = factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
        cur.close()
    finally:
        conn.close()

    logger.info("Applied %d schema statements to %s", len(statements), database)
    return len(statements)
