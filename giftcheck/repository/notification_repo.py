"""
通知数据访问层（只读）
"""
from __future__ import annotations

from sqlite3 import Connection

# 成员注销退出家庭通知的固定标题
EXIT_TITLE = "成员注销退出家庭"
# 旧版通知内容里的 HTML 片段
MARKUP_PATTERN = "%<span%"


def list_by_category(conn: Connection, category: str, limit: int = 5):
    """
    按类别取最近的通知，按创建时间倒序

    Args:
        conn: 数据库连接
        category: 通知类别，如 records / system / delete_request
        limit: 返回条数
    """
    sql = (
        "SELECT id, user_id, category, title, content, created_at "
        "FROM notifications WHERE category = ? "
        "ORDER BY created_at DESC LIMIT ?"
    )
    return conn.execute(sql, (category, limit)).fetchall()


def list_by_category_with_read_flag(conn: Connection, category: str, limit: int = 10):
    sql = (
        "SELECT id, user_id, category, title, content, is_read, created_at "
        "FROM notifications WHERE category = ? "
        "ORDER BY created_at DESC LIMIT ?"
    )
    return conn.execute(sql, (category, limit)).fetchall()


def list_unmigrated(conn: Connection, title: str = EXIT_TITLE, pattern: str = MARKUP_PATTERN):
    """标题完全匹配、且内容尚未包含 HTML 片段的通知，按 id 升序"""
    sql = (
        "SELECT id, content FROM notifications "
        "WHERE title = ? AND content NOT LIKE ? "
        "ORDER BY id"
    )
    return conn.execute(sql, (title, pattern)).fetchall()


def list_by_title(conn: Connection, title: str = EXIT_TITLE, limit: int = 10, user_id: int | None = None):
    sql = "SELECT id, title, content, created_at FROM notifications WHERE title = ?"
    params: list = [title]
    if user_id is not None:
        sql += " AND user_id = ?"
        params.append(user_id)
    sql += " ORDER BY created_at DESC LIMIT ?"
    params.append(limit)
    return conn.execute(sql, params).fetchall()


def list_recipients_by_title(conn: Connection, title: str = EXIT_TITLE, limit: int = 5):
    sql = (
        "SELECT DISTINCT n.user_id, u.username "
        "FROM notifications n JOIN users u ON n.user_id = u.id "
        "WHERE n.title = ? ORDER BY n.user_id LIMIT ?"
    )
    return conn.execute(sql, (title, limit)).fetchall()
