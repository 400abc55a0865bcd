import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

# Captured at import so seeding is unaffected by tests that monkeypatch sqlite3.connect
_real_connect = sqlite3.connect


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "family_gift_test.db"
    # Point giftcheck to this temp DB
    os.environ["GIFT_DB_PATH"] = str(path)
    schema = Path(_PROJECT_ROOT / "schema.sql").read_text(encoding="utf-8")
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(schema)
        conn.commit()
    finally:
        conn.close()
    return str(path)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("GIFT_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in ("notifications", "users", "sqlite_sequence"):
            try:
                conn.execute(f"DELETE FROM {t}")
            except sqlite3.OperationalError:
                pass
        conn.commit()
    finally:
        conn.close()
    yield


@pytest.fixture()
def seed(tmp_db_path):
    """seed("users", [{"id": 1, "username": "a"}, ...]) inserts rows with a writable connection"""
    def _seed(table, rows):
        conn = _real_connect(tmp_db_path)
        try:
            for r in rows:
                cols = ",".join(r.keys())
                marks = ",".join("?" for _ in r)
                conn.execute(f"INSERT INTO {table}({cols}) VALUES({marks})", tuple(r.values()))
            conn.commit()
        finally:
            conn.close()
    return _seed
