#!/usr/bin/env python3
"""
mysqldump - CLI Entry Point
===========================
Dumps the schema and contents of a MySQL database into a single SQL script
that recreates the database when replayed against an empty instance.
"""

import argparse
import logging
import sys

import yaml

from .config import ConfigLoader
from .database_dumper import DatabaseDumper
from .utils import print_dry_run_info, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='mysqldump - Stream a MySQL database into a replayable SQL script'
    )
    parser.add_argument(
        '-c', '--config',
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be dumped without actually dumping'
    )
    parser.add_argument(
        '-o', '--dest',
        help='Destination file (overrides dump.dest in config)'
    )
    parser.add_argument(
        '-t', '--tables',
        nargs='+',
        metavar='TABLE',
        help='Dump only these tables, in this order'
    )
    parser.add_argument(
        '--no-extended-insert',
        dest='extended_insert',
        action='store_const',
        const=False,
        help='Write one INSERT statement per row'
    )
    parser.add_argument(
        '--no-drop-table',
        dest='add_drop_table',
        action='store_const',
        const=False,
        help='Do not write DROP TABLE IF EXISTS before CREATE TABLE'
    )
    parser.add_argument(
        '--no-locks',
        dest='add_locks',
        action='store_const',
        const=False,
        help='Do not surround table data with LOCK TABLES / UNLOCK TABLES'
    )
    parser.add_argument(
        '--no-disable-keys',
        dest='disable_keys',
        action='store_const',
        const=False,
        help='Do not surround table data with DISABLE KEYS / ENABLE KEYS'
    )
    parser.add_argument(
        '--compress',
        action='store_const',
        const=True,
        help='Gzip the output file'
    )
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Load configuration
    try:
        config = ConfigLoader(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file '{args.config}' not found")
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Error: Invalid YAML in configuration file: {e}")
        sys.exit(1)

    # Setup logging
    log_settings = config.get_logging_settings()
    if args.verbose:
        log_settings['level'] = 'DEBUG'
    setup_logging(log_settings)

    overrides = {
        'dest': args.dest,
        'tables': args.tables,
        'extended_insert': args.extended_insert,
        'add_drop_table': args.add_drop_table,
        'add_locks': args.add_locks,
        'disable_keys': args.disable_keys,
        'compress': args.compress,
    }
    try:
        options = config.get_dump_options(overrides)
    except (TypeError, ValueError) as e:
        logging.error(f"Invalid configuration: {e}")
        sys.exit(1)

    # Dry run mode
    if args.dry_run:
        logging.info("DRY RUN MODE - No data will be dumped")
        print_dry_run_info(options)
        sys.exit(0)

    # Run dump
    try:
        stats = DatabaseDumper(options).run()
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)

    # Print summary
    logging.info("=" * 50)
    logging.info("DUMP COMPLETE")
    logging.info(f"Tables: {len(stats.tables)}")
    logging.info(f"Total Rows: {stats.total_rows}")
    logging.info(f"File: {stats.file_path}")


if __name__ == '__main__':
    main()
