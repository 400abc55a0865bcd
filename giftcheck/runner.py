"""
查询执行器：open -> query -> format -> print -> close

所有检查脚本都走这里。查询失败（SQL 错误、缺表缺列、文件不可读）只在本地
打印一行诊断信息，不向上抛出，进程正常结束。
"""
from __future__ import annotations

import logging
import sqlite3
import sys
from typing import Any, Callable, Iterable, Mapping, Sequence, TextIO

from .db import get_conn

logger = logging.getLogger(__name__)

Fetch = Callable[[sqlite3.Connection], Any]
Render = Callable[[Any], Iterable[str]]

DEFAULT_ERROR_LABEL = "查询错误"


def run(
    fetch: Fetch,
    render: Render,
    *,
    header: str | None = None,
    error_label: str = DEFAULT_ERROR_LABEL,
    db_path: str | None = None,
    config_path: str | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> bool:
    """
    打开连接、执行 fetch、用 render 把结果逐行输出，最后关闭连接。

    Args:
        fetch: 接收连接、返回结果行序列的函数（一般是 repository 里的查询）
        render: 把结果行序列转换成若干行文本
        header: 查询前先输出的标题行
        error_label: 失败时诊断行的前缀

    Returns:
        True 表示查询成功并已输出；False 表示查询失败（诊断已输出到 err）
    """
    out = out or sys.stdout
    err = err or sys.stderr

    if header is not None:
        print(header, file=out)

    try:
        with get_conn(db_path, config_path) as conn:
            rows = fetch(conn)
            # 连接关闭前完成渲染
            lines = list(render(rows))
    except sqlite3.Error as e:
        logger.debug(f"查询失败: {e!r}")
        print(f"{error_label}: {e}", file=err)
        return False

    logger.debug(f"输出 {len(lines)} 行")
    for line in lines:
        print(line, file=out)
    return True


def run_sql(
    sql: str,
    params: Sequence[Any] | Mapping[str, Any] = (),
    render: Render | None = None,
    **kwargs: Any,
) -> bool:
    """执行一条固定 SELECT（可带绑定参数），其余参数同 run()"""
    if render is None:
        render = lambda rows: (str(tuple(r)) for r in rows)

    def fetch(conn: sqlite3.Connection):
        return conn.execute(sql, params).fetchall()

    return run(fetch, render, **kwargs)
