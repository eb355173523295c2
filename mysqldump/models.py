"""
Data models for mysqldump.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class DumpOptions:
    """Resolved, read-only options for a single dump session."""
    host: str
    user: str
    password: str
    database: str
    dest: str
    port: int = 3306
    tables: Optional[tuple[str, ...]] = None
    exclude_tables: tuple[str, ...] = ()
    extended_insert: bool = True
    add_drop_table: bool = True
    add_locks: bool = True
    disable_keys: bool = True
    batch_size: Optional[int] = None
    compress: bool = False

    REQUIRED = ('host', 'user', 'password', 'database', 'dest')

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "DumpOptions":
        """
        Create DumpOptions by merging caller options over the defaults.

        Raises:
            ValueError: A required option is missing, an option is unknown,
                or batch_size is not a positive integer.
            TypeError: A table list was given as a bare string.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ValueError(f"Unknown dump option(s): {', '.join(unknown)}")

        missing = [key for key in cls.REQUIRED if options.get(key) is None]
        if missing:
            raise ValueError(f"Missing required dump option(s): {', '.join(missing)}")

        settings = dict(options)
        for key in ('tables', 'exclude_tables'):
            value = settings.get(key)
            if value is None:
                continue
            if isinstance(value, str):
                raise TypeError(f"'{key}' must be a list of table names, not a string")
            settings[key] = tuple(value)
        if settings.get('exclude_tables') is None:
            settings.pop('exclude_tables', None)

        batch_size = settings.get('batch_size')
        if batch_size is not None and (isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1):
            raise ValueError(f"'batch_size' must be a positive integer, got {batch_size!r}")

        return cls(**settings)

    @property
    def output_path(self) -> str:
        """Path actually written, with '.gz' appended when compressing."""
        if self.compress and not self.dest.endswith('.gz'):
            return self.dest + '.gz'
        return self.dest


@dataclass
class TableStats:
    """Statistics for a single table dump."""
    table: str
    rows_dumped: int = 0


@dataclass
class DumpStats:
    """Overall dump statistics."""
    tables: list[TableStats] = field(default_factory=list)
    total_rows: int = 0
    file_path: str = ""
