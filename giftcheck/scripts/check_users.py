"""
全部用户列表，空字段显示为占位符

Usage:
  python -m giftcheck.scripts.check_users [--db path/to/family_gift.db]
"""
from __future__ import annotations

import argparse
import logging

# 允许脚本直接运行
if __name__ == "__main__" and __package__ is None:
    import os, sys
    sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))  # project root

from giftcheck.services.user_checks import check_users


def main(argv=None):
    ap = argparse.ArgumentParser(description="全部用户列表，空字段显示为占位符")
    ap.add_argument("--db", required=False, help="SQLite 文件路径（默认：GIFT_DB_PATH / config.yaml / family_gift.db）")
    ap.add_argument("--config", required=False, help="config.yaml 路径")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    check_users(db_path=args.db, config_path=args.config)


if __name__ == "__main__":
    main()
