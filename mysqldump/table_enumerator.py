"""
Table list resolution for mysqldump.
"""

import fnmatch
import logging
import re

from .connection import DatabaseConnection
from .models import DumpOptions


class TableEnumerator:
    """Resolves the ordered list of tables a dump session covers."""

    def __init__(self, connection: DatabaseConnection):
        self.connection = connection

    def list_tables(self, options: DumpOptions) -> list[str]:
        """
        Get the tables to dump, in dump order.

        An explicit table list is returned verbatim. Otherwise the catalog
        is listed in server order and exclusion patterns are applied.
        """
        if options.tables is not None:
            logging.debug(f"Using explicit table list: {', '.join(options.tables) or '(empty)'}")
            return list(options.tables)

        table_names = self.connection.get_tables()
        if not options.exclude_tables:
            return table_names

        compiled_patterns = self._compile_exclusion_patterns(options.exclude_tables)
        original_count = len(table_names)
        table_names = [
            t for t in table_names
            if not self._is_table_excluded(t, options.exclude_tables, compiled_patterns)
        ]
        excluded_count = original_count - len(table_names)
        if excluded_count > 0:
            logging.info(f"Excluded {excluded_count} table(s) matching exclusion patterns")
        return table_names

    def _compile_exclusion_patterns(self, exclude_patterns: tuple[str, ...]) -> list[re.Pattern]:
        """Pre-compile fnmatch exclusion patterns to regex."""
        return [re.compile(fnmatch.translate(pattern)) for pattern in exclude_patterns]

    def _is_table_excluded(
        self,
        table_name: str,
        exclude_patterns: tuple[str, ...],
        compiled_patterns: list[re.Pattern]
    ) -> bool:
        """
        Check if a table should be excluded based on patterns.

        Supports:
        - Exact matches: 'users_backup'
        - Wildcard patterns: '*_old', 'tmp_*', '*_backup_*'
        """
        for pattern, compiled in zip(exclude_patterns, compiled_patterns):
            if compiled.match(table_name):
                logging.debug(f"Table '{table_name}' excluded by pattern '{pattern}'")
                return True
        return False
