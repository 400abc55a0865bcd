from __future__ import annotations

# giftcheck/db.py
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
import logging
import os
import yaml

logger = logging.getLogger(__name__)

# DB 路径解析顺序：
# 1) 显式传入的 db_path（CLI --db）
# 2) 环境变量 GIFT_DB_PATH
# 3) config.yaml 的 test_db_path（当检测到测试环境时）
# 4) config.yaml 的 db_path
# 5) 兜底：项目根 family_gift.db
_PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
_ROOT_DB = os.path.join(_PROJECT_ROOT, "family_gift.db")
_DEFAULT_CONFIG = os.path.join(_PROJECT_ROOT, "config.yaml")


def read_config_yaml(cfg_path: str | None = None) -> dict:
    cfg_path = cfg_path or _DEFAULT_CONFIG
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"读取配置失败 {cfg_path}: {e}")
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in ("db_path", "test_db_path"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    return out


def get_db_path(db_path: str | None = None, config_path: str | None = None) -> str:
    if db_path:
        return db_path
    env_path = os.environ.get("GIFT_DB_PATH")
    if env_path:
        return env_path

    cfg = read_config_yaml(config_path)
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)
    if is_test and cfg.get("test_db_path"):
        path = cfg["test_db_path"]
    elif cfg.get("db_path"):
        path = cfg["db_path"]
    else:
        return _ROOT_DB

    # 相对路径按项目根解析，与脚本的启动目录无关
    if not os.path.isabs(path):
        path = os.path.join(_PROJECT_ROOT, path)
    return path


def _readonly_uri(path: str) -> str:
    return Path(path).resolve().as_uri() + "?mode=ro"


@contextmanager
def get_conn(db_path: str | None = None, config_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    以只读方式打开 SQLite 连接。优先使用显式传入的 db_path，否则走 get_db_path()。
    文件不存在时不会被创建，而是抛出 sqlite3.OperationalError。
    row_factory 为 Row，退出时无论成功与否都关闭连接。
    """
    path = get_db_path(db_path, config_path)
    logger.debug(f"打开数据库(只读): {path}")
    conn = sqlite3.connect(_readonly_uri(path), uri=True)
    try:
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()
