"""Storage gateway for the ``books`` table.

The gateway owns one DB-API connection and issues the four catalog
statements against it. Every statement binds its values as parameters and
is committed on its own.
"""

import logging
import sqlite3
from typing import Any, List, Optional

from book import Book
from config import DatabaseSettings, SUPPORTED_BACKENDS

logger = logging.getLogger(__name__)

SQLITE_SCHEMA = """
    CREATE TABLE IF NOT EXISTS books (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        author TEXT NOT NULL,
        category TEXT
    )
"""

MYSQL_SCHEMA = """
    CREATE TABLE IF NOT EXISTS books (
        id INT AUTO_INCREMENT PRIMARY KEY,
        title VARCHAR(255) NOT NULL,
        author VARCHAR(255) NOT NULL,
        category VARCHAR(255)
    )
"""


class CatalogError(Exception):
    """Base class for catalog failures."""


class StorageError(CatalogError):
    """A connection or statement failure reported by the database driver."""


class BookGateway:
    """Single point of contact with the relational store."""

    def __init__(self, db_settings: DatabaseSettings) -> None:
        if db_settings.backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unsupported database backend: {db_settings.backend!r} "
                f"(expected one of {', '.join(SUPPORTED_BACKENDS)})"
            )
        self.settings = db_settings
        self.connection: Optional[Any] = None
        self.connect_error: Optional[Exception] = None
        self._driver_error: type = sqlite3.Error
        # DB-API paramstyle: sqlite 'qmark', mysql-connector 'format'
        self._placeholder = "?" if db_settings.backend == "sqlite" else "%s"

    @property
    def is_connected(self) -> bool:
        return self.connection is not None

    # ------------------------- Connection ------------------------- #
    def connect(self) -> bool:
        """Open the connection. On failure the gateway stays unusable."""
        try:
            if self.settings.backend == "mysql":
                self.connection = self._connect_mysql()
            else:
                self.connection = self._connect_sqlite()
        except self._driver_error as e:
            self.connection = None
            self.connect_error = e
            logger.error("Error connecting to the database. Please check your database settings: %s", e)
            return False
        self.connect_error = None
        logger.info("Connected to %s database", self.settings.backend)
        return True

    def _connect_sqlite(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.settings.db_file)
        conn.row_factory = sqlite3.Row
        return conn

    def _connect_mysql(self) -> Any:
        import mysql.connector
        from mysql.connector.constants import ClientFlag

        self._driver_error = mysql.connector.Error
        # FOUND_ROWS: UPDATE reports matched rows, so rewriting identical values still counts
        return mysql.connector.connect(
            host=self.settings.host,
            port=self.settings.port,
            database=self.settings.name,
            user=self.settings.user,
            password=self.settings.password or "",
            client_flags=[ClientFlag.FOUND_ROWS],
        )

    def close(self) -> None:
        if self.connection is not None:
            self.connection.close()
            self.connection = None

    def create_tables(self) -> None:
        """Veritabanında mevcut değilse books tablosunu oluşturur."""
        schema = MYSQL_SCHEMA if self.settings.backend == "mysql" else SQLITE_SCHEMA
        self._execute(schema, (), "Failed to create the books table.")

    # ------------------------- Statements ------------------------- #
    def load_all(self) -> List[Book]:
        """Return every record in storage-native order."""
        conn = self._require_connection("Failed to load books from the database.")
        cursor = None
        try:
            cursor = self._cursor(conn)
            cursor.execute("SELECT id, title, author, category FROM books")
            rows = cursor.fetchall()
            return [Book.from_dict(dict(row)) for row in rows]
        except (self._driver_error, OverflowError) as e:
            logger.error("Failed to load books from the database: %s", e)
            raise StorageError("Failed to load books from the database.") from e
        finally:
            if cursor is not None:
                cursor.close()

    def insert(self, book: Book) -> bool:
        p = self._placeholder
        cursor = self._execute(
            f"INSERT INTO books (title, author, category) VALUES ({p}, {p}, {p})",
            (book.title, book.author, book.category),
            "Failed to add the book to the database.",
            keep_cursor=True,
        )
        try:
            if cursor.rowcount > 0:
                book.id = cursor.lastrowid
                return True
            return False
        finally:
            cursor.close()

    def update(self, book: Book) -> bool:
        p = self._placeholder
        return self._execute_rowcount(
            f"UPDATE books SET title = {p}, author = {p}, category = {p} WHERE id = {p}",
            (book.title, book.author, book.category, book.id),
            "Failed to update the book in the database.",
        )

    def delete(self, book_id: int) -> bool:
        return self._execute_rowcount(
            f"DELETE FROM books WHERE id = {self._placeholder}",
            (book_id,),
            "Failed to delete the book from the database.",
        )

    # ------------------------- Helpers ------------------------- #
    def _require_connection(self, failure_message: str) -> Any:
        if self.connection is None:
            logger.error("%s No database connection.", failure_message)
            raise StorageError(f"{failure_message} No database connection.") from self.connect_error
        return self.connection

    def _cursor(self, conn: Any) -> Any:
        if self.settings.backend == "mysql":
            return conn.cursor(dictionary=True)
        return conn.cursor()

    def _execute(self, sql: str, params: tuple, failure_message: str, keep_cursor: bool = False) -> Any:
        conn = self._require_connection(failure_message)
        cursor = None
        try:
            cursor = self._cursor(conn)
            cursor.execute(sql, params)
            conn.commit()
        except (self._driver_error, OverflowError) as e:
            # sqlite3 değeri INTEGER'a sığdıramazsa OverflowError atar
            if cursor is not None:
                cursor.close()
            logger.error("%s %s", failure_message, e)
            raise StorageError(failure_message) from e
        if keep_cursor:
            return cursor
        cursor.close()
        return None

    def _execute_rowcount(self, sql: str, params: tuple, failure_message: str) -> bool:
        cursor = self._execute(sql, params, failure_message, keep_cursor=True)
        try:
            return cursor.rowcount > 0
        finally:
            cursor.close()


def open_gateway(db_settings: DatabaseSettings) -> BookGateway:
    """Build a gateway, connect it and make sure the table exists.

    A failed connection is logged and returned as an unconnected gateway so
    that the caller keeps running and reports failures per operation.
    """
    gateway = BookGateway(db_settings)
    if gateway.connect():
        try:
            gateway.create_tables()
        except StorageError as e:
            # Zaten loglandı; işlemler kendi hatalarını raporlayacak
            logger.warning("Continuing without the books table: %s", e)
    return gateway
