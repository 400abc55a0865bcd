"""
通知检查测试
"""
from __future__ import annotations

import json

from giftcheck.repository.notification_repo import EXIT_TITLE
from giftcheck.services import notification_checks


def _notif(i, category="records", title="新记录", content=None, created_at=None, user_id=1, **extra):
    row = {
        "id": i,
        "user_id": user_id,
        "category": category,
        "title": title,
        "content": content if content is not None else f"content-{i}",
        "created_at": created_at or f"2024-03-{i:02d} 12:00:00",
    }
    row.update(extra)
    return row


class TestRecordsContent:

    def test_limit_and_descending_created_at(self, seed, capsys):
        # insertion order differs from timestamp order
        stamps = {1: "05", 2: "01", 3: "07", 4: "03", 5: "06", 6: "02", 7: "04"}
        seed("notifications", [
            _notif(i, created_at=f"2024-03-{d} 09:00:00") for i, d in stamps.items()
        ])

        assert notification_checks.check_records_content() is True

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "最近5条records通知:"
        id_lines = [l for l in lines if l.startswith("ID: ")]
        assert len(id_lines) == 5
        assert [int(l.split(" | ")[0][4:]) for l in id_lines] == [3, 5, 1, 7, 4]
        assert lines.count("---") == 5

    def test_only_records_category_full_content(self, seed, capsys):
        long_content = "记录内容 " * 50
        seed("notifications", [
            _notif(1, content=long_content, user_id=9),
            _notif(2, category="system", created_at="2030-01-01 00:00:00"),
        ])

        notification_checks.check_records_content()

        lines = capsys.readouterr().out.splitlines()
        assert lines[1:] == [
            "ID: 1 | 用户: 9 | 标题: 新记录",
            f"内容: {long_content}",
            "时间: 2024-03-01 12:00:00",
            "---",
        ]

    def test_failure_prints_only_diagnostic(self, tmp_path, capsys):
        ok = notification_checks.check_records_content(db_path=str(tmp_path / "missing.db"))

        assert ok is False
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("查询失败: ")


class TestRemainingNotifications:

    def test_excludes_markup_and_other_titles(self, seed, capsys):
        seed("notifications", [
            _notif(1, category="system", title=EXIT_TITLE, content="bob 因注销账号已退出家庭 \"A\"，退出时间：t1"),
            _notif(2, category="system", title=EXIT_TITLE, content='<span style="color:blue">bob</span> 已退出'),
            _notif(3, category="system", title="其他标题", content="plain text"),
            _notif(4, category="system", title=EXIT_TITLE, content="carol 因注销账号已退出家庭 \"B\"，退出时间：t2"),
            _notif(5, category="system", title=EXIT_TITLE + "X", content="plain text"),
        ])

        assert notification_checks.check_remaining_notifications() is True

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "查看剩余未更新的通知内容..."
        assert lines[1] == "剩余未更新的通知数量: 2"
        assert "第 1 条 (ID: 1):" in lines
        assert "第 2 条 (ID: 4):" in lines
        assert not any("ID: 2)" in l or "ID: 3)" in l or "ID: 5)" in l for l in lines)
        numbered = [l for l in lines if l.startswith("第 ")]
        assert len(numbered) == 2

    def test_zero_remaining(self, seed, capsys):
        seed("notifications", [_notif(1, title=EXIT_TITLE, content="<span>x</span>")])

        notification_checks.check_remaining_notifications()

        lines = capsys.readouterr().out.splitlines()
        assert lines == ["查看剩余未更新的通知内容...", "剩余未更新的通知数量: 0"]


class TestCategoryNotifications:

    def test_json_probe_and_read_flag(self, seed, capsys):
        payload = {"record_id": 12, "amount": 200}
        seed("notifications", [
            _notif(1, category="system", content=json.dumps(payload), is_read=1),
            _notif(2, category="system", content="not json", is_read=0),
            _notif(3, category="records"),
        ])

        assert notification_checks.check_category_notifications("system", 10) is True

        out = capsys.readouterr().out
        assert "找到 2 条system通知:" in out
        assert '"record_id": 12' in out
        assert "内容不是JSON格式" in out
        assert "已读: 是" in out and "已读: 否" in out
        # newest first
        assert out.index("\nID: 2\n") < out.index("\nID: 1\n")


class TestOldNotifications:

    def test_markup_statistics(self, seed, capsys):
        seed("notifications", [
            _notif(1, title=EXIT_TITLE, content="<span>bob</span> 已退出"),
            _notif(2, title=EXIT_TITLE, content="bob 因注销账号已退出家庭 \"A\"，退出时间：t"),
            _notif(3, title=EXIT_TITLE, content="x </span>"),
        ])

        notification_checks.check_old_notifications()

        lines = capsys.readouterr().out.splitlines()
        assert "总通知数: 3" in lines
        assert "包含HTML标签的通知: 2" in lines
        assert "纯文本通知: 1" in lines
        assert "发现包含HTML标签的旧通知，需要转换为纯文本格式" in lines

    def test_all_plain(self, seed, capsys):
        seed("notifications", [_notif(1, title=EXIT_TITLE, content="plain")])
        notification_checks.check_old_notifications()
        assert "所有通知都已是纯文本格式" in capsys.readouterr().out


class TestExitRecipients:

    def test_parses_plain_text_content(self, seed, capsys):
        seed("users", [{"id": 1, "username": "alice"}, {"id": 2, "username": "bob"}])
        seed("notifications", [
            _notif(1, title=EXIT_TITLE, user_id=1,
                   content='carol 因注销账号已退出家庭 "Smith"，退出时间：2024-03-01 10:00'),
            _notif(2, title=EXIT_TITLE, user_id=1, content="<span>dave</span>"),
            _notif(3, title=EXIT_TITLE, user_id=2, content="unparseable"),
        ])

        assert notification_checks.check_exit_recipients() is True

        out = capsys.readouterr().out
        assert "找到 2 个有成员注销退出家庭通知的用户:" in out
        assert "1. 用户ID: 1, 用户名: alice" in out
        assert "获取用户 alice 的成员注销退出家庭通知详情:" in out
        assert '    - 家庭名: "Smith"' in out
        assert '    - 退出时间: "2024-03-01 10:00"' in out
        assert "  格式: HTML格式" in out
        # only the first recipient's notifications are detailed
        assert "unparseable" not in out

    def test_no_recipients(self, capsys):
        notification_checks.check_exit_recipients()
        assert "没有找到有成员注销退出家庭通知的用户" in capsys.readouterr().out
