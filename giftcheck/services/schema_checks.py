from __future__ import annotations

import datetime as dt
import os
from typing import Any, Iterator, Sequence

from .. import runner
from ..db import get_db_path
from ..repository import schema_repo


def render_schema(create_sql: str | None, table: str) -> Iterator[str]:
    if create_sql:
        yield f"{table}表结构:"
        yield create_sql
    else:
        yield f"未找到{table}表"


def render_table_info(columns: Sequence[Any], table: str) -> Iterator[str]:
    if not columns:
        yield f"未找到{table}表"
        return
    yield f"{table}表结构:"
    for col in columns:
        flags = " ".join(f for f in (
            "NOT NULL" if col["notnull"] else "",
            "PRIMARY KEY" if col["pk"] else "",
        ) if f)
        yield f"- {col['name']}: {col['type']} {flags}".rstrip()


def fetch_db_info(conn, db_path: str, sample_limit: int = 3) -> dict:
    """表清单、每张表的字段/行数/示例数据，以及数据库文件信息"""
    tables = []
    for name in schema_repo.list_tables(conn):
        count = schema_repo.count_rows(conn, name)
        tables.append({
            "name": name,
            "columns": schema_repo.table_info(conn, name),
            "count": count,
            "sample": schema_repo.sample_rows(conn, name, sample_limit) if count > 0 else None,
        })
    st = os.stat(db_path)
    return {
        "tables": tables,
        "path": os.path.abspath(db_path),
        "size_mb": st.st_size / (1024 * 1024),
        "mtime": dt.datetime.fromtimestamp(st.st_mtime),
    }


def render_db_info(info: dict) -> Iterator[str]:
    tables = info["tables"]
    yield "数据库表列表:"
    for i, t in enumerate(tables, start=1):
        yield f"{i}. {t['name']}"
    yield ""

    for t in tables:
        yield f"=== 表: {t['name']} ==="
        yield "字段结构:"
        for col in t["columns"]:
            pk = " [主键]" if col["pk"] else ""
            nn = " [非空]" if col["notnull"] else ""
            yield f"  {col['name']} ({col['type']}){pk}{nn}"
        yield f"记录数量: {t['count']}"
        if t["sample"] is None:
            yield "该表为空"
        else:
            yield "示例数据:"
            yield t["sample"].to_string(index=False)
        yield ""

    yield "=== 数据库文件信息 ==="
    yield f"文件路径: {info['path']}"
    yield f"文件大小: {info['size_mb']:.2f} MB"
    yield f"最后修改: {info['mtime']:%Y-%m-%d %H:%M:%S}"


def check_schema(table: str = "users", **kwargs) -> bool:
    return runner.run(
        lambda conn: schema_repo.get_create_sql(conn, table),
        lambda create_sql: render_schema(create_sql, table),
        header=f"检查{table}表结构...",
        error_label="查询表结构错误",
        **kwargs,
    )


def check_table_info(table: str = "notifications", **kwargs) -> bool:
    return runner.run(
        lambda conn: schema_repo.table_info(conn, table),
        lambda columns: render_table_info(columns, table),
        header=f"=== 检查{table}表结构 ===",
        error_label="查询表结构错误",
        **kwargs,
    )


def check_db_info(db_path: str | None = None, config_path: str | None = None, **kwargs) -> bool:
    path = get_db_path(db_path, config_path)
    return runner.run(
        lambda conn: fetch_db_info(conn, path),
        render_db_info,
        header="=== 数据库信息扫描 ===\n",
        error_label="获取数据库信息失败",
        db_path=path,
        **kwargs,
    )
