"""
Dump session orchestration for mysqldump.
"""

import gzip
import logging
import os
import threading
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Callable, Mapping, Optional, TextIO, Union

from . import __version__
from .connection import DatabaseConnection
from .models import DumpOptions, DumpStats, TableStats
from .schema_dumper import SchemaDumper
from .table_dumper import TableDumper
from .table_enumerator import TableEnumerator

TOOL_NAME = "mysqldump"

DumpCallback = Callable[[Optional[Exception]], Any]


class CompletionSignal:
    """Fire-once latch around a completion callback."""

    def __init__(self, callback: Optional[DumpCallback] = None):
        self._callback = callback or (lambda err: None)
        self._lock = threading.Lock()
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def fire(self, error: Optional[Exception] = None) -> bool:
        """Invoke the callback unless it has already been invoked.

        Returns:
            True if this call fired the callback, False if it was ignored.
        """
        with self._lock:
            if self._fired:
                logging.debug(f"Completion already signalled, ignoring: {error!r}")
                return False
            self._fired = True
        self._callback(error)
        return True


class DatabaseDumper:
    """Runs one dump session: one connection, one output file."""

    def __init__(self, options: DumpOptions):
        self.options = options
        self.stats = DumpStats(file_path=options.output_path)
        self.connection: Optional[DatabaseConnection] = None
        self.output: Optional[TextIO] = None

    def run(self) -> DumpStats:
        """Dump every table to the destination file.

        Raises the error that ended the session. When it happens after the
        destination was opened, the partial file has already been removed.
        """
        self.output = self._open_output()
        try:
            self.connection = DatabaseConnection(
                host=self.options.host,
                port=self.options.port,
                user=self.options.user,
                password=self.options.password,
                database=self.options.database
            )
            self.connection.connect()
            self._write_preamble()

            tables = TableEnumerator(self.connection).list_tables(self.options)
            logging.info(f"Dumping {len(tables)} table(s) from '{self.options.database}'")

            schema_dumper = SchemaDumper(self.connection, self.options)
            table_dumper = TableDumper(self.connection, self.options)
            for table in tables:
                schema_dumper.dump_schema(table, self.output)
                rows = table_dumper.dump_data(table, self.output)
                self._record_table(table, rows)

            self.connection.disconnect()
            self.output.close()
        except Exception as e:
            logging.error(f"Dump of '{self.options.database}' failed: {e}")
            self._abort()
            raise

        return self.stats

    def _open_output(self) -> TextIO:
        """Create or truncate the destination file."""
        path = self.options.output_path
        if self.options.compress:
            return gzip.open(path, 'wt', encoding='utf-8', errors='surrogateescape', newline='\n')
        return open(path, 'w', encoding='utf-8', errors='surrogateescape', newline='\n')

    def _write_preamble(self) -> None:
        dumped_on = format_datetime(datetime.now(timezone.utc), usegmt=True)
        self.output.write(f"-- {TOOL_NAME} {__version__}\n--\n")
        self.output.write(f"-- Dumped on {dumped_on}\n--\n")
        self.output.write(
            f"-- Host: {self.options.host}    Database: {self.options.database}\n"
            f"-- ------------------------------------------------------\n\n"
        )

    def _record_table(self, table: str, rows: int) -> None:
        self.stats.tables.append(TableStats(table=table, rows_dumped=rows))
        self.stats.total_rows += rows
        logging.info(f"  ✓ {table}: {rows} rows")

    def _abort(self) -> None:
        """Release the connection and file, then remove the partial dump.

        Cleanup failures are logged so the original error is what the
        caller sees.
        """
        if self.connection is not None:
            try:
                self.connection.disconnect()
            except Exception as e:
                logging.warning(f"Error closing database connection: {e}")

        try:
            self.output.close()
        except Exception as e:
            logging.warning(f"Error closing '{self.options.output_path}': {e}")

        try:
            os.unlink(self.options.output_path)
            logging.info(f"Removed partial dump '{self.options.output_path}'")
        except FileNotFoundError:
            pass
        except OSError as e:
            logging.warning(f"Could not remove partial dump '{self.options.output_path}': {e}")


def mysqldump(
    options: Union[DumpOptions, Mapping[str, Any]],
    callback: Optional[DumpCallback] = None
) -> Optional[Exception]:
    """
    Dump a MySQL database to a SQL script.

    Args:
        options: A DumpOptions instance, or a mapping merged over the
            defaults by DumpOptions.from_options.
        callback: Called exactly once, with None on success or with the
            error that ended the session.

    Returns:
        The same value passed to the callback.
    """
    signal = CompletionSignal(callback)
    try:
        if not isinstance(options, DumpOptions):
            options = DumpOptions.from_options(options)
        DatabaseDumper(options).run()
    except Exception as e:
        signal.fire(e)
        return e

    signal.fire(None)
    return None
