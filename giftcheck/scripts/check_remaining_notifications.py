"""
尚未迁移为 HTML 格式的成员注销退出家庭通知

Usage:
  python -m giftcheck.scripts.check_remaining_notifications [--db path/to/family_gift.db]
"""
from __future__ import annotations

import argparse
import logging

# 允许脚本直接运行
if __name__ == "__main__" and __package__ is None:
    import os, sys
    sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))  # project root

from giftcheck.services.notification_checks import check_remaining_notifications


def main(argv=None):
    ap = argparse.ArgumentParser(description="尚未迁移为 HTML 格式的成员注销退出家庭通知")
    ap.add_argument("--db", required=False, help="SQLite 文件路径（默认：GIFT_DB_PATH / config.yaml / family_gift.db）")
    ap.add_argument("--config", required=False, help="config.yaml 路径")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    check_remaining_notifications(db_path=args.db, config_path=args.config)


if __name__ == "__main__":
    main()
