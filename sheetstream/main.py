"""
sheetstream command line entry point.

Commands:
    convert  - Write rows from a JSON/JSON Lines file to CSV/TSV
    formats  - List supported output formats
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from sheetstream.cli.commands import ConvertCommand, FormatsCommand
from sheetstream.core.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    UnsupportedFormatError,
    WriterError
)
from sheetstream.utils.config import ConfigLoader
from sheetstream.utils.logging_config import setup_logging

logger: logging.Logger = logging.getLogger(__name__)

COMMANDS = (ConvertCommand, FormatsCommand)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all commands registered."""
    parser = argparse.ArgumentParser(
        prog="sheetstream",
        description="Streaming spreadsheet writer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sheetstream convert rows.json out.csv              # Write rows to CSV
  sheetstream convert rows.jsonl out.csv -d ";"      # Semicolon delimited
  sheetstream convert rows.json out.txt -f tsv       # Force TSV output
  sheetstream formats                                # List formats
        """
    )

    parser.add_argument(
        "-c", "--config",
        default="config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")
    for command_class in COMMANDS:
        command_class.register(subparsers)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    if not getattr(args, "command_class", None):
        parser.print_help()
        return 1

    try:
        config = ConfigLoader(args.config)
    except ConfigurationError as e:
        print(f"\n❌ {e}")
        return 1

    # Setup logging
    log_level = "DEBUG" if args.verbose else config.get("logging.level", "INFO")
    setup_logging(level=log_level, log_file=config.get("logging.file"))

    command = args.command_class(config)

    try:
        return command.execute(args)
    except KeyboardInterrupt:
        print("\n\n⚠️ Interrupted by user")
        return 1
    except UnsupportedFormatError as e:
        print(f"\n❌ {e}")
        return 2
    except ConfigurationError as e:
        print(f"\n❌ Invalid configuration: {e}")
        return 1
    except (InvalidArgumentError, json.JSONDecodeError) as e:
        print(f"\n❌ Invalid input: {e}")
        return 1
    except FileNotFoundError as e:
        print(f"\n❌ {e}")
        return 1
    except WriterError as e:
        logger.exception("Writing failed")
        print(f"\n❌ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
