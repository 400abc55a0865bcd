from __future__ import annotations

from sqlite3 import Connection


def list_recent(conn: Connection, limit: int = 5):
    sql = (
        "SELECT id, username, nickname, created_at "
        "FROM users ORDER BY id DESC LIMIT ?"
    )
    return conn.execute(sql, (limit,)).fetchall()


def list_all(conn: Connection):
    sql = "SELECT id, username, nickname, avatar, created_at FROM users ORDER BY id"
    return conn.execute(sql).fetchall()
