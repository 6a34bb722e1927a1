"""
Command-line interface for loading CEDICT and MoeDict data.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from zhdict_loader import __version__
from zhdict_loader.config import LoaderConfig, load_config_file
from zhdict_loader.exceptions import (
    ConsistencyError,
    MalformedLineError,
    ZhdictLoaderError,
)
from zhdict_loader.models import LoadSummary


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the zhdict-load CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose, args.quiet)

    try:
        if args.sql_out:
            summary = cmd_export(args)
        else:
            summary = cmd_load(args)
    except (MalformedLineError, ConsistencyError) as e:
        print(f"\n  [LEXICON ERROR] {e}")
        print(f"                  Line: {e.line_number}")
        print("  Nothing from the lexicon file was written.")
        return 1
    except (ZhdictLoaderError, FileNotFoundError) as e:
        print(f"\n  [ERROR] {e}")
        return 1

    _print_summary(summary)
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="zhdict-load",
        description="Load a CEDICT lexicon and a MoeDict JSON dump into a database",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "cedict",
        type=Path,
        help="CEDICT text file (.gz accepted)",
    )
    parser.add_argument(
        "moedict",
        type=Path,
        help="MoeDict JSON dump file (.gz accepted)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with loader settings",
    )
    parser.add_argument(
        "--database",
        type=str,
        help="Database file (overrides ZHDICT_DB and the config file)",
    )
    parser.add_argument(
        "--drop-existing",
        action="store_true",
        default=None,
        help="Drop the loader's tables before loading",
    )
    parser.add_argument(
        "--non-atomic-dump",
        action="store_false",
        dest="atomic_dump",
        default=None,
        help="Commit every MoeDict row on its own instead of in one transaction",
    )
    parser.add_argument(
        "--sql-out",
        type=Path,
        help="Write a SQL script to this path instead of loading a database",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every parsed line",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors",
    )
    return parser


def build_config(args: argparse.Namespace) -> LoaderConfig:
    """Combine environment, config file and command-line settings."""
    config = LoaderConfig.from_env()
    if args.config:
        config = load_config_file(args.config, base=config)
    return config.merge(
        database=args.database,
        drop_existing=args.drop_existing,
        atomic_dump=args.atomic_dump,
    )


def cmd_load(args: argparse.Namespace) -> LoadSummary:
    """Handle a database load."""
    from zhdict_loader.loader import run

    config = build_config(args)
    print(f"\nLoading into {config.database or '<unset>'}...")
    return run(config, args.cedict, args.moedict)


def cmd_export(args: argparse.Namespace) -> LoadSummary:
    """Handle --sql-out: write a script instead of loading a database."""
    from zhdict_loader.cedict import iter_records
    from zhdict_loader.exporter import write_sql_script
    from zhdict_loader.loader import open_input, read_inputs

    print(f"\nWriting SQL script {args.sql_out}...")
    entries = read_inputs(args.cedict, args.moedict)
    with open_input(args.cedict) as f:
        return write_sql_script(args.sql_out, iter_records(f), entries)


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(message)s")


def _print_summary(summary: LoadSummary) -> None:
    """Print row counts per relation."""
    print("\nRows written:")
    print(f"  {'lexicon':<10} {summary.lexicon:>8}")
    print(f"  {'entries':<10} {summary.entries:>8}")
    print(f"  {'variants':<10} {summary.variants:>8}")
    print(f"  {'senses':<10} {summary.senses:>8}")
    print("\nDone.")
