"""
Table data dumping for mysqldump.
"""

import logging
from typing import Sequence, TextIO

from .connection import DatabaseConnection
from .models import DumpOptions


class TableDumper:
    """Streams a table's rows out as INSERT statements."""

    def __init__(self, connection: DatabaseConnection, options: DumpOptions):
        self.connection = connection
        self.options = options

    def dump_data(self, table: str, output: TextIO) -> int:
        """
        Dump a table's rows to the output.

        Rows are read from an unbuffered cursor and each one is written as
        soon as it has been escaped, so memory use does not grow with the
        table. Nothing at all is written for an empty table.

        Args:
            table: Name of the table to dump.
            output: Text stream the statements are appended to.

        Returns:
            Number of rows written.
        """
        quoted_table = self.connection.escape_identifier(table)
        rows_dumped = 0
        statement_rows = 0

        with self.connection.stream_query(f"SELECT * FROM {quoted_table}") as cursor:
            columns = [desc[0] for desc in cursor.description]
            insert_prefix = self._build_insert_prefix(quoted_table, columns)

            for row in cursor:
                values = self._format_values(row)

                if rows_dumped == 0:
                    self._write_data_header(output, quoted_table)

                if self.options.extended_insert:
                    if statement_rows == 0:
                        output.write(f"{insert_prefix}\n({values})")
                    else:
                        output.write(f",\n({values})")
                    statement_rows += 1
                    if self.options.batch_size and statement_rows >= self.options.batch_size:
                        output.write(";\n")
                        statement_rows = 0
                else:
                    output.write(f"{insert_prefix} ({values});\n")

                rows_dumped += 1

        if rows_dumped > 0:
            self._write_data_footer(output, quoted_table, statement_rows > 0)

        logging.debug(f"Table '{table}': {rows_dumped} rows written")
        return rows_dumped

    def _build_insert_prefix(self, quoted_table: str, columns: Sequence[str]) -> str:
        """Build the fixed 'INSERT INTO t(cols) VALUES' statement prefix."""
        quoted_columns = ', '.join(self.connection.escape_identifier(col) for col in columns)
        return f"INSERT INTO {quoted_table}({quoted_columns}) VALUES"

    def _format_values(self, row: Sequence) -> str:
        # TODO: quote BIT and GEOMETRY columns in their native syntax
        # instead of through the generic converter.
        return ', '.join(self.connection.escape_value(value) for value in row)

    def _write_data_header(self, output: TextIO, quoted_table: str) -> None:
        output.write(f"\n--\n-- Dumping data for table {quoted_table}\n--\n\n")
        if self.options.add_locks:
            output.write(f"LOCK TABLES {quoted_table} WRITE;\n")
        if self.options.disable_keys:
            output.write(f"/*!40000 ALTER TABLE {quoted_table} DISABLE KEYS */;\n")

    def _write_data_footer(self, output: TextIO, quoted_table: str, statement_open: bool) -> None:
        if statement_open:
            output.write(";\n")
        if self.options.disable_keys:
            output.write(f"/*!40000 ALTER TABLE {quoted_table} ENABLE KEYS */;\n")
        if self.options.add_locks:
            output.write("UNLOCK TABLES;\n")
