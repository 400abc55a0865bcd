"""
通知相关检查

- records 类通知内容抽样
- 尚未迁移成 HTML 格式的成员注销通知
- 按类别查看最近通知（附 JSON 内容探测）
- 成员注销通知的 HTML / 纯文本统计
- 收到成员注销通知的用户及其通知解析
"""
from __future__ import annotations

from typing import Any, Iterator, Sequence

from .. import runner
from ..repository import notification_repo
from ..repository.notification_repo import EXIT_TITLE
from .utils import has_markup, parse_exit_content, pretty_json, try_parse_json, yes_no

RECORDS_CATEGORY = "records"
SAMPLE_LIMIT = 5


def render_records_content(rows: Sequence[Any], category: str = RECORDS_CATEGORY, limit: int = SAMPLE_LIMIT) -> Iterator[str]:
    yield f"最近{limit}条{category}通知:"
    for row in rows:
        yield f"ID: {row['id']} | 用户: {row['user_id']} | 标题: {row['title']}"
        yield f"内容: {row['content']}"
        yield f"时间: {row['created_at']}"
        yield "---"


def render_remaining(rows: Sequence[Any]) -> Iterator[str]:
    yield f"剩余未更新的通知数量: {len(rows)}"
    for i, row in enumerate(rows, start=1):
        yield ""
        yield f"第 {i} 条 (ID: {row['id']}):"
        yield f"内容: {row['content']}"


def render_category_notifications(rows: Sequence[Any], category: str) -> Iterator[str]:
    yield f"找到 {len(rows)} 条{category}通知:"
    for i, row in enumerate(rows, start=1):
        yield ""
        yield f"通知 {i}:"
        yield f"ID: {row['id']}"
        yield f"用户ID: {row['user_id']}"
        yield f"类别: {row['category']}"
        yield f"标题: {row['title']}"
        yield f"内容: {row['content']}"
        yield f"已读: {yes_no(row['is_read'])}"
        yield f"创建时间: {row['created_at']}"
        ok, parsed = try_parse_json(row["content"])
        if ok:
            yield f"解析后的内容: {pretty_json(parsed)}"
        else:
            yield "内容不是JSON格式"


def render_old_notifications(rows: Sequence[Any]) -> Iterator[str]:
    yield ""
    yield f"找到 {len(rows)} 条{EXIT_TITLE}通知:"
    yield ""
    html_count = 0
    for i, row in enumerate(rows, start=1):
        marked = has_markup(row["content"])
        html_count += int(marked)
        yield f"{i}. 通知ID: {row['id']}"
        yield f"   标题: {row['title']}"
        yield f"   内容: {row['content']}"
        yield f"   创建时间: {row['created_at']}"
        yield f"   包含HTML标签: {yes_no(marked)}"
        yield "---"
        yield ""

    yield ""
    yield "统计结果:"
    yield f"总通知数: {len(rows)}"
    yield f"包含HTML标签的通知: {html_count}"
    yield f"纯文本通知: {len(rows) - html_count}"
    yield ""
    if html_count > 0:
        yield "发现包含HTML标签的旧通知，需要转换为纯文本格式"
    else:
        yield "所有通知都已是纯文本格式"


def fetch_exit_recipients(conn, limit: int = 5, detail_limit: int = 3) -> list[dict]:
    """取收到成员注销通知的用户；第一个用户附带其最近的几条通知"""
    recipients = [dict(r) for r in notification_repo.list_recipients_by_title(conn, EXIT_TITLE, limit)]
    if recipients:
        first = recipients[0]
        first["notifications"] = notification_repo.list_by_title(
            conn, EXIT_TITLE, limit=detail_limit, user_id=first["user_id"]
        )
    return recipients


def render_exit_recipients(recipients: Sequence[dict]) -> Iterator[str]:
    if not recipients:
        yield f"没有找到有{EXIT_TITLE}通知的用户"
        return

    yield f"找到 {len(recipients)} 个有{EXIT_TITLE}通知的用户:"
    for i, r in enumerate(recipients, start=1):
        yield f"{i}. 用户ID: {r['user_id']}, 用户名: {r['username']}"

    first = recipients[0]
    yield ""
    yield f"获取用户 {first['username']} 的{EXIT_TITLE}通知详情:"
    for i, n in enumerate(first.get("notifications", []), start=1):
        yield ""
        yield f"通知 {i}:"
        yield f"  ID: {n['id']}"
        yield f"  标题: {n['title']}"
        yield f"  内容: {n['content']}"
        yield f"  创建时间: {n['created_at']}"
        marked = has_markup(n["content"])
        yield f"  格式: {'HTML格式' if marked else '纯文本格式'}"
        if marked:
            continue
        parsed = parse_exit_content(n["content"])
        if parsed:
            yield "  解析结果:"
            yield f"    - 用户名: \"{parsed['username']}\""
            yield f"    - 家庭名: \"{parsed['family_name']}\""
            yield f"    - 退出时间: \"{parsed['exit_time']}\""
        else:
            yield "  内容格式不匹配，可能无法正确应用颜色格式化"


def check_records_content(category: str = RECORDS_CATEGORY, limit: int = SAMPLE_LIMIT, **kwargs) -> bool:
    return runner.run(
        lambda conn: notification_repo.list_by_category(conn, category, limit),
        lambda rows: render_records_content(rows, category, limit),
        error_label="查询失败",
        **kwargs,
    )


def check_remaining_notifications(**kwargs) -> bool:
    return runner.run(
        notification_repo.list_unmigrated,
        render_remaining,
        header="查看剩余未更新的通知内容...",
        error_label="查询失败",
        **kwargs,
    )


def check_category_notifications(category: str = "system", limit: int = 10, **kwargs) -> bool:
    return runner.run(
        lambda conn: notification_repo.list_by_category_with_read_flag(conn, category, limit),
        lambda rows: render_category_notifications(rows, category),
        header=f"=== 检查最近的{category}通知 ===",
        error_label="查询通知错误",
        **kwargs,
    )


def check_old_notifications(limit: int = 10, **kwargs) -> bool:
    return runner.run(
        lambda conn: notification_repo.list_by_title(conn, EXIT_TITLE, limit),
        render_old_notifications,
        header=f"检查数据库中的{EXIT_TITLE}通知...",
        **kwargs,
    )


def check_exit_recipients(**kwargs) -> bool:
    return runner.run(
        fetch_exit_recipients,
        render_exit_recipients,
        header=f"查找有{EXIT_TITLE}通知的用户...",
        **kwargs,
    )
