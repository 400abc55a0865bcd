from __future__ import annotations

# giftcheck/services/utils.py
import json
import re
from typing import Any

# 可选字段为空时显示的占位符
PLACEHOLDER = "空"

# 纯文本版成员注销通知： <用户名> 因注销账号已退出家庭 "<家庭名>"，退出时间：<时间>
EXIT_CONTENT_RE = re.compile(r'^(.+?)\s因注销账号已退出家庭\s"(.+?)"，退出时间：(.+)$')


def or_placeholder(v: Any, placeholder: str = PLACEHOLDER) -> str:
    if v is None or v == "":
        return placeholder
    return str(v)


def has_markup(content: str | None) -> bool:
    if not content:
        return False
    return "<span" in content or "</span>" in content


def try_parse_json(content: str | None):
    """解析成功返回 (True, obj)，否则 (False, None)"""
    if content is None:
        return False, None
    try:
        return True, json.loads(content)
    except (TypeError, ValueError):
        return False, None


def pretty_json(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=2)


def parse_exit_content(content: str | None) -> dict | None:
    if not content:
        return None
    m = EXIT_CONTENT_RE.match(content)
    if not m:
        return None
    username, family_name, exit_time = m.groups()
    return {"username": username, "family_name": family_name, "exit_time": exit_time}


def yes_no(v: Any) -> str:
    return "是" if v else "否"
