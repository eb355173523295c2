"""
mysqldump
=========
Streams the schema and contents of a MySQL database into a single SQL
script that recreates the database when replayed against an empty instance.
- Explicit table subsets or full catalog listing with exclusion patterns
- Optional DROP TABLE, LOCK TABLES and DISABLE KEYS statements
- Extended (multi-row) or single-row INSERT statements
- Compression support
"""

__version__ = "1.0.0"

from .config import ConfigLoader
from .connection import DatabaseConnection, Escaper
from .database_dumper import CompletionSignal, DatabaseDumper, mysqldump
from .main import main
from .models import DumpOptions, DumpStats, TableStats
from .schema_dumper import SchemaDumper
from .table_dumper import TableDumper
from .table_enumerator import TableEnumerator
from .utils import format_options_display, print_dry_run_info, setup_logging

__all__ = [
    # Main entry points
    "main",
    "mysqldump",
    # Core classes
    "CompletionSignal",
    "ConfigLoader",
    "DatabaseConnection",
    "DatabaseDumper",
    "Escaper",
    "SchemaDumper",
    "TableDumper",
    "TableEnumerator",
    # Models
    "DumpOptions",
    "DumpStats",
    "TableStats",
    # Utilities
    "format_options_display",
    "print_dry_run_info",
    "setup_logging",
]
