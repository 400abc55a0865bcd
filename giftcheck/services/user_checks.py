"""
用户相关检查：最近注册用户、全部用户列表
"""
from __future__ import annotations

from typing import Any, Iterator, Sequence

from .. import runner
from ..repository import user_repo
from .utils import or_placeholder

RECENT_LIMIT = 5


def render_recent_users(rows: Sequence[Any]) -> Iterator[str]:
    for u in rows:
        yield f"ID: {u['id']}, 用户名: {u['username']}, 昵称: {u['nickname']}, 注册时间: {u['created_at']}"


def render_all_users(rows: Sequence[Any]) -> Iterator[str]:
    yield ""
    yield "所有用户数据:"
    for u in rows:
        yield (
            f"ID: {u['id']}, 用户名: {or_placeholder(u['username'])}, "
            f"昵称: {or_placeholder(u['nickname'])}, 头像: {or_placeholder(u['avatar'])}, "
            f"注册时间: {u['created_at']}"
        )


def check_recent_users(limit: int = RECENT_LIMIT, **kwargs) -> bool:
    return runner.run(
        lambda conn: user_repo.list_recent(conn, limit),
        render_recent_users,
        header="最近注册的用户:",
        **kwargs,
    )


def check_users(**kwargs) -> bool:
    return runner.run(
        user_repo.list_all,
        render_all_users,
        header="查询用户数据:",
        error_label="查询用户错误",
        **kwargs,
    )
