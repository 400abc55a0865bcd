#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Family Gift DB inspector (SQLite, read-only)

Commands:
  recent-users        Five most recently registered users
  records             Latest 5 `records` notifications with full content
  remaining           Member-exit notifications not yet migrated to HTML markup
  users               All users; empty username/nickname/avatar shown as a placeholder
  schema              CREATE TABLE statement of a table
  table-info          Column list of a table (type, NOT NULL, PRIMARY KEY)
  db-info             Tables, columns, row counts, sample rows and file info
  notifications       Latest notifications of one category, with a JSON probe on content
  old-notifications   Member-exit notifications flagged by HTML markup, with totals
  exit-users          Users who received member-exit notifications, with content parsing

Notes:
- The DB is opened read-only; nothing here writes to it.
- A failed query prints one diagnostic line to stderr and the command still exits normally.
"""

import argparse
import logging

from giftcheck.services import notification_checks, schema_checks, user_checks


# ---------------- Commands ----------------

def _opts(args) -> dict:
    return {"db_path": args.db, "config_path": args.config}


def cmd_recent_users(args):
    user_checks.check_recent_users(**_opts(args))


def cmd_records(args):
    notification_checks.check_records_content(**_opts(args))


def cmd_remaining(args):
    notification_checks.check_remaining_notifications(**_opts(args))


def cmd_users(args):
    user_checks.check_users(**_opts(args))


def cmd_schema(args):
    schema_checks.check_schema(args.table, **_opts(args))


def cmd_table_info(args):
    schema_checks.check_table_info(args.table, **_opts(args))


def cmd_db_info(args):
    schema_checks.check_db_info(**_opts(args))


def cmd_notifications(args):
    notification_checks.check_category_notifications(args.category, args.limit, **_opts(args))


def cmd_old_notifications(args):
    notification_checks.check_old_notifications(args.limit, **_opts(args))


def cmd_exit_users(args):
    notification_checks.check_exit_recipients(**_opts(args))


# ---------------- Entry ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Family Gift DB inspector (read-only)")
    parser.add_argument("--config", default=None, help="config.yaml path")
    parser.add_argument("--db", default=None, help="SQLite file; overrides GIFT_DB_PATH and config.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers()

    sub.add_parser("recent-users", help="latest 5 users").set_defaults(func=cmd_recent_users)
    sub.add_parser("records", help="latest 5 records notifications").set_defaults(func=cmd_records)
    sub.add_parser("remaining", help="unmigrated member-exit notifications").set_defaults(func=cmd_remaining)
    sub.add_parser("users", help="all users").set_defaults(func=cmd_users)

    p_schema = sub.add_parser("schema", help="CREATE TABLE statement")
    p_schema.add_argument("--table", default="users")
    p_schema.set_defaults(func=cmd_schema)

    p_info = sub.add_parser("table-info", help="column list of a table")
    p_info.add_argument("--table", default="notifications")
    p_info.set_defaults(func=cmd_table_info)

    sub.add_parser("db-info", help="scan all tables").set_defaults(func=cmd_db_info)

    p_notif = sub.add_parser("notifications", help="latest notifications of a category")
    p_notif.add_argument("--category", default="system")
    p_notif.add_argument("--limit", type=int, default=10)
    p_notif.set_defaults(func=cmd_notifications)

    p_old = sub.add_parser("old-notifications", help="member-exit notifications markup summary")
    p_old.add_argument("--limit", type=int, default=10)
    p_old.set_defaults(func=cmd_old_notifications)

    sub.add_parser("exit-users", help="users with member-exit notifications").set_defaults(func=cmd_exit_users)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
