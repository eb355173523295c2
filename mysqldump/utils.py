"""
Utility functions for mysqldump.
"""

import logging
import sys
from pathlib import Path
from typing import Any

from .models import DumpOptions


def setup_logging(log_settings: dict[str, Any]) -> None:
    """Setup logging configuration."""
    log_level = getattr(logging, log_settings.get('level', 'INFO').upper())
    log_file = log_settings.get('file')

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def print_dry_run_info(options: DumpOptions) -> None:
    """Log what would be dumped in dry-run mode."""
    logging.info(
        f"Would dump database: {options.database} from {options.host}:{options.port} "
        f"to {options.output_path}"
    )

    if options.tables is None:
        if options.exclude_tables:
            logging.info(f"  - All tables except: {', '.join(options.exclude_tables)}")
        else:
            logging.info("  - All tables")
    else:
        for table in options.tables:
            logging.info(f"  - {table}")

    parts = format_options_display(options)
    if parts:
        logging.info(f"  Options: {', '.join(parts)}")
    else:
        logging.info("  Options: none")


def format_options_display(options: DumpOptions) -> list[str]:
    """Format the enabled statement options for display in dry-run mode."""
    parts = []
    if options.extended_insert:
        if options.batch_size is not None:
            parts.append(f"extended-insert (batch={options.batch_size})")
        else:
            parts.append("extended-insert")
    if options.add_drop_table:
        parts.append("add-drop-table")
    if options.add_locks:
        parts.append("add-locks")
    if options.disable_keys:
        parts.append("disable-keys")
    if options.compress:
        parts.append("compress")
    return parts
