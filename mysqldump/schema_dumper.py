"""
Table structure dumping for mysqldump.
"""

import logging
from typing import TextIO

from .connection import DatabaseConnection
from .models import DumpOptions


class SchemaDumper:
    """Writes the statements that recreate a table's structure."""

    def __init__(self, connection: DatabaseConnection, options: DumpOptions):
        self.connection = connection
        self.options = options

    def dump_schema(self, table: str, output: TextIO) -> None:
        """Write the structure section for a table.

        Query errors propagate; a partial schema cannot be recovered mid-dump.
        """
        quoted_table = self.connection.escape_identifier(table)
        create_statement = self.connection.get_create_table(table)

        output.write(f"\n\n--\n-- Table structure for table {quoted_table}\n--\n\n")
        if self.options.add_drop_table:
            output.write(f"DROP TABLE IF EXISTS {quoted_table};\n")
        output.write(f"{create_statement};\n")
        logging.debug(f"Wrote structure for table '{table}'")
