"""
Database connection and schema management.

One DuckDB connection is shared by the whole process and guarded by a
re-entrant lock; every mutating catalog operation runs inside
``DatabaseManager.transaction()``.

Tables:
- admins: seeded admin identities (email + bcrypt hash)
- categories: named groupings of menu items, unique by name
- menu_items: sellable products, optionally linked to a category
- menu_item_options: labeled price tiers owned by one menu item
- logs: admin operation log and recorded system errors
"""

import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import duckdb

from .exceptions import BaseApplicationError, ConflictError, DatabaseError
from ..config.settings import Settings

logger = logging.getLogger(__name__)

SCHEMA_SQL = r"""
CREATE SEQUENCE IF NOT EXISTS admins_id_seq;
CREATE TABLE IF NOT EXISTS admins (
  id INTEGER DEFAULT nextval('admins_id_seq') PRIMARY KEY,
  email TEXT UNIQUE NOT NULL,
  password_hash TEXT NOT NULL,
  created_at TIMESTAMP DEFAULT now()
);

CREATE SEQUENCE IF NOT EXISTS categories_id_seq;
CREATE TABLE IF NOT EXISTS categories (
  id INTEGER DEFAULT nextval('categories_id_seq') PRIMARY KEY,
  name TEXT UNIQUE NOT NULL,
  description TEXT,
  image_url TEXT,
  created_at TIMESTAMP DEFAULT now()
);

CREATE SEQUENCE IF NOT EXISTS menu_items_id_seq;
CREATE TABLE IF NOT EXISTS menu_items (
  id INTEGER DEFAULT nextval('menu_items_id_seq') PRIMARY KEY,
  persian_name TEXT NOT NULL,
  english_name TEXT,
  description TEXT,
  image_url TEXT,
  is_available BOOLEAN NOT NULL DEFAULT TRUE,
  category_id INTEGER,  -- categories.id, checked by the catalog service
  created_at TIMESTAMP DEFAULT now()
);

CREATE SEQUENCE IF NOT EXISTS menu_item_options_id_seq;
CREATE TABLE IF NOT EXISTS menu_item_options (
  id INTEGER DEFAULT nextval('menu_item_options_id_seq') PRIMARY KEY,
  menu_item_id INTEGER NOT NULL,
  label TEXT NOT NULL,
  price BIGINT NOT NULL CHECK (price >= 0)  -- smallest currency unit
);

CREATE INDEX IF NOT EXISTS idx_menu_item_options_item ON menu_item_options(menu_item_id);

CREATE SEQUENCE IF NOT EXISTS logs_id_seq;
CREATE TABLE IF NOT EXISTS logs (
  log_id INTEGER DEFAULT nextval('logs_id_seq') PRIMARY KEY,
  actor_id INTEGER,
  action TEXT,
  detail_json TEXT,
  created_at TIMESTAMP DEFAULT now()
);

CREATE INDEX IF NOT EXISTS idx_logs_action ON logs(action);
"""


class DatabaseManager:
    """Owns the DuckDB connection and the schema"""

    def __init__(self, settings: Settings):
        self._connection: Optional[duckdb.DuckDBPyConnection] = None
        self._lock = threading.RLock()
        self.db_path = self._db_path_from_url(settings.database_url)

    @staticmethod
    def _db_path_from_url(db_url: str) -> str:
        if db_url.startswith("duckdb://"):
            db_url = db_url[len("duckdb://"):]
        if db_url in ("", ":memory:"):
            return ":memory:"
        Path(db_url).parent.mkdir(parents=True, exist_ok=True)
        return db_url

    @property
    def connection(self) -> duckdb.DuckDBPyConnection:
        with self._lock:
            if self._connection is None:
                self._connection = duckdb.connect(self.db_path)
                self._init_schema()
            return self._connection

    def get_connection(self) -> duckdb.DuckDBPyConnection:
        return self.connection

    def _init_schema(self):
        try:
            self._connection.execute(SCHEMA_SQL)
        except duckdb.Error as e:
            raise DatabaseError(f"Failed to initialize schema: {e}")

    def init_database(self):
        """Create the schema if it does not exist yet"""
        with self._lock:
            self.connection.execute(SCHEMA_SQL)

    def close(self):
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    @contextmanager
    def cursor(self) -> Generator[duckdb.DuckDBPyConnection, None, None]:
        """Locked access for reads outside a transaction"""
        with self._lock:
            yield self.connection

    @contextmanager
    def transaction(self) -> Generator[duckdb.DuckDBPyConnection, None, None]:
        """
        Run a unit of work atomically.

        Application errors raised inside the block propagate unchanged after
        rollback; a storage uniqueness violation becomes ``ConflictError`` and
        any other storage error becomes ``DatabaseError``.
        """
        with self._lock:
            conn = self.connection
            conn.execute("BEGIN TRANSACTION")
            try:
                yield conn
                conn.execute("COMMIT")
            except Exception as e:
                try:
                    conn.execute("ROLLBACK")
                except duckdb.Error:
                    logger.warning("Rollback failed", exc_info=True)

                if isinstance(e, BaseApplicationError):
                    raise
                if isinstance(e, duckdb.ConstraintException):
                    raise ConflictError(
                        "این رکورد تکراری است.",
                        details={"reason": "unique_violation"}
                    ) from e
                if isinstance(e, duckdb.Error):
                    raise DatabaseError(f"Database operation failed: {e}") from e
                raise

    @staticmethod
    def fetch_dicts(conn: duckdb.DuckDBPyConnection, query: str, params: list = None) -> List[Dict[str, Any]]:
        result = conn.execute(query, params or [])
        columns = [col[0] for col in result.description]
        return [dict(zip(columns, row)) for row in result.fetchall()]

    @staticmethod
    def fetch_dict(conn: duckdb.DuckDBPyConnection, query: str, params: list = None) -> Optional[Dict[str, Any]]:
        result = conn.execute(query, params or [])
        row = result.fetchone()
        if row is None:
            return None
        columns = [col[0] for col in result.description]
        return dict(zip(columns, row))

    @staticmethod
    def log_operation(conn: duckdb.DuckDBPyConnection, actor_id: Optional[int], action: str,
                      details: Dict[str, Any]):
        """Append a row to the operation log"""
        conn.execute(
            "INSERT INTO logs (actor_id, action, detail_json) VALUES (?, ?, ?)",
            [actor_id, action, json.dumps(details, ensure_ascii=False, default=str)]
        )
