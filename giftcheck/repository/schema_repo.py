from __future__ import annotations

from sqlite3 import Connection
from typing import Optional

import pandas as pd


def quote_identifier(name: str) -> str:
    # PRAGMA / FROM 不支持绑定参数，表名只能拼接，因此统一加双引号转义
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"invalid_table_name: {name!r}")
    return '"' + name.replace('"', '""') + '"'


def get_create_sql(conn: Connection, table: str) -> Optional[str]:
    row = conn.execute(
        "SELECT sql FROM sqlite_master WHERE type='table' AND name=?", (table,)
    ).fetchone()
    return row["sql"] if row else None


def list_tables(conn: Connection) -> list[str]:
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' ORDER BY rowid"
    ).fetchall()
    return [r["name"] for r in rows]


def table_info(conn: Connection, table: str):
    return conn.execute(f"PRAGMA table_info({quote_identifier(table)})").fetchall()


def count_rows(conn: Connection, table: str) -> int:
    row = conn.execute(f"SELECT COUNT(*) AS cnt FROM {quote_identifier(table)}").fetchone()
    return int(row["cnt"])


def sample_rows(conn: Connection, table: str, limit: int = 3) -> pd.DataFrame:
    return pd.read_sql_query(
        f"SELECT * FROM {quote_identifier(table)} LIMIT ?", conn, params=(limit,)
    )
