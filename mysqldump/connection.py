"""
Database connection management for mysqldump.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import mysql.connector
from mysql.connector import Error as MySQLError
from mysql.connector.conversion import MySQLConverter


class Escaper:
    """Quotes identifiers and values for MySQL script output.

    Values go through the same to_mysql -> escape -> quote pipeline that
    mysql-connector applies to query parameters, so every column type is
    handled uniformly.
    """

    OUTPUT_ENCODING = 'utf-8'

    # Control bytes the converter leaves raw; the mysql client rejects NUL
    # outside --binary-mode.
    CONTROL_ESCAPES = (
        (b"\x00", b"\\0"),
        (b"\x08", b"\\b"),
        (b"\t", b"\\t"),
    )

    def __init__(self, charset: str = 'utf8mb4'):
        self._converter = MySQLConverter(charset, use_unicode=True)

    @staticmethod
    def escape_identifier(name: str) -> str:
        """Backtick-quote an identifier, doubling embedded backticks."""
        return '`' + str(name).replace('`', '``') + '`'

    def escape_value(self, value: Any) -> str:
        """Return the SQL literal for a value.

        SET columns arrive as Python sets and are written as the
        comma-separated member list MySQL accepts on insert.

        Raises:
            TypeError: The converter has no MySQL representation for the value.
        """
        if isinstance(value, (set, frozenset)):
            value = ','.join(sorted(value))

        escaped = self._converter.escape(self._converter.to_mysql(value))
        if isinstance(escaped, (bytes, bytearray)):
            escaped = bytes(escaped)
            for raw, replacement in self.CONTROL_ESCAPES:
                escaped = escaped.replace(raw, replacement)

        quoted = self._converter.quote(escaped)
        return bytes(quoted).decode(self.OUTPUT_ENCODING, errors='surrogateescape')


class DatabaseConnection:
    """Manages a MySQL database connection."""

    DEFAULT_PORT = 3306
    DEFAULT_CHARSET = 'utf8mb4'

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        database: Optional[str] = None
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.connection = None
        self.escaper = Escaper(self.DEFAULT_CHARSET)

    def connect(self) -> None:
        """Establish database connection."""
        try:
            self.connection = mysql.connector.connect(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                database=self.database,
                charset=self.DEFAULT_CHARSET,
                use_unicode=True,
                consume_results=True
            )
            logging.info(f"Connected to {self.host}:{self.port}/{self.database or 'N/A'}")
        except MySQLError as e:
            logging.error(f"Failed to connect to database: {e}")
            raise

    def disconnect(self) -> None:
        """Close database connection."""
        if self.connection and self.connection.is_connected():
            self.connection.close()
            logging.debug("Database connection closed")

    def execute_query(self, query: str, params: Optional[tuple] = None) -> list[tuple]:
        """Execute a query and return results."""
        cursor = self.connection.cursor()
        try:
            cursor.execute(query, params)
            return cursor.fetchall()
        finally:
            cursor.close()

    def get_cursor(self, buffered: bool = False):
        """Get a cursor for streaming large results.

        Args:
            buffered: If False (default), rows are read from the server one
                     at a time as the cursor is iterated. If True, the whole
                     result set is fetched up front.
        """
        return self.connection.cursor(buffered=buffered)

    @contextmanager
    def stream_query(self, query: str) -> Iterator[Any]:
        """Execute a query on an unbuffered cursor and yield the cursor.

        The cursor's description is available as soon as it is yielded and
        rows are fetched lazily while iterating it.
        """
        cursor = self.get_cursor()
        try:
            cursor.execute(query)
            yield cursor
        finally:
            cursor.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the current database."""
        results = self.execute_query("SHOW TABLES")
        return [row[0] for row in results]

    def get_create_table(self, table: str) -> str:
        """Get CREATE TABLE statement."""
        results = self.execute_query(f"SHOW CREATE TABLE {self.escape_identifier(table)}")
        return results[0][1]

    def escape_identifier(self, name: str) -> str:
        return self.escaper.escape_identifier(name)

    def escape_value(self, value: Any) -> str:
        return self.escaper.escape_value(value)
