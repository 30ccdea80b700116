# db.py
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import pymysql
from pymysql.constants import CLIENT
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool

from config import Settings
from errors import StoreError

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    rows: List[Dict[str, Any]] = field(default_factory=list)
    row_count: int = 0
    last_row_id: Optional[int] = None


def _store_message(exc: Exception) -> str:
    # pymysql errors carry (code, message)
    if isinstance(exc, pymysql.MySQLError) and len(exc.args) >= 2:
        return str(exc.args[1])
    return str(exc)


def get_connection(settings: Settings):
    return pymysql.connect(
        host=settings.db_host,
        port=settings.db_port,
        user=settings.db_user,
        password=settings.db_password,
        database=settings.db_name,
        charset="utf8mb4",
        cursorclass=pymysql.cursors.DictCursor,
        autocommit=True,
        connect_timeout=settings.connect_timeout,
        # UPDATE reports matched rows, not changed rows
        client_flag=CLIENT.FOUND_ROWS,
    )


class Database:
    """
    Store gateway backed by a process-wide connection pool.

    Every ``execute`` borrows a connection for a single statement and gives it
    back afterwards. Any driver or pool failure is raised as ``StoreError``.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._pool: Optional[QueuePool] = None

    def _create_pool(self) -> QueuePool:
        return QueuePool(
            lambda: get_connection(self.settings),
            pool_size=self.settings.pool_size,
            max_overflow=self.settings.max_overflow,
            timeout=self.settings.pool_timeout,
        )

    def _warm_up(self) -> None:
        # fail loudly in the logs at startup; /health keeps reporting afterwards
        try:
            conn = self._pool.connect()
        except (pymysql.MySQLError, SQLAlchemyError) as e:
            logger.warning("Could not open an initial store connection: %s", _store_message(e))
            return
        conn.close()

    def open(self) -> None:
        if self._pool is not None:
            return
        self._pool = self._create_pool()
        logger.info(
            "Connection pool ready for %s@%s:%s/%s (size=%s, overflow=%s)",
            self.settings.db_user,
            self.settings.db_host,
            self.settings.db_port,
            self.settings.db_name,
            self.settings.pool_size,
            self.settings.max_overflow,
        )

        self._warm_up()

    def close(self) -> None:
        if self._pool is None:
            return
        self._pool.dispose()
        self._pool = None
        logger.info("Connection pool closed")

    def execute(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        if self._pool is None:
            raise StoreError("connection pool is not initialized")

        conn = None
        try:
            conn = self._pool.connect()
            with conn.cursor() as cur:
                cur.execute(sql, tuple(params))
                rows = list(cur.fetchall()) if cur.description else []
                return QueryResult(rows=rows, row_count=cur.rowcount, last_row_id=cur.lastrowid)
        except (pymysql.MySQLError, SQLAlchemyError) as e:
            logger.error("Store failure on %s: %s", sql.split(None, 1)[0].upper(), e)
            raise StoreError(_store_message(e)) from e
        finally:
            if conn is not None:
                conn.close()

    def ping(self) -> None:
        self.execute("SELECT 1")


if __name__ == "__main__":
    from config import get_settings

    database = Database(get_settings())
    database.open()
    try:
        database.ping()
        print("✅ Connection successful!")
        print("Current database:", database.execute("SELECT DATABASE() AS db").rows[0]["db"])
    except StoreError as e:
        print("❌ Connection failed:", e)
    finally:
        database.close()
        print("Connection closed.")
