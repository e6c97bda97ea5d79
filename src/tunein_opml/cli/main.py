"""Main CLI entry point for the tunein-opml command-line tool.

Fetches the directory's browse or search documents, or reads local files,
and prints the resulting outline tree as indented text or JSON.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from tunein_opml import __version__
from tunein_opml.api import BROWSE_URI, fetch_document, read_file, search_uri
from tunein_opml.model import Audio, Document, Group, Link, Text
from tunein_opml.shared import ConfigError, OpmlError, ReaderConfig, get_logger

DEFAULT_SEARCH_QUERY = "Kraków"
INDENT_WIDTH = 4

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self):
        self.reader_config = ReaderConfig()
        self.output_format = "text"
        self.verbose = False
        self.quiet = False

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        The file may hold reader settings at the top level or under a
        ``"reader"`` key, plus an optional ``"output_format"``.

        Raises:
            ConfigError: If the file cannot be read or holds invalid settings
        """
        config = cls()
        try:
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not load config file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError("Configuration file must hold a JSON object")

        config.reader_config = ReaderConfig.from_dict(data.get("reader", data))
        config.output_format = data.get("output_format", config.output_format)
        return config


def format_text(document: Document) -> str:
    """Render a document as its title followed by an indented outline tree."""
    lines = [document.head.title, "-----"]
    for depth, outline in document.walk():
        indent = " " * (INDENT_WIDTH * depth)
        if isinstance(outline, Group):
            lines.append(f"{indent}{outline.text}:")
        elif isinstance(outline, (Link, Audio)):
            lines.append(f"{indent}{outline.text} - {outline.url}")
        elif isinstance(outline, Text):
            lines.append(f"{indent}{outline.text}")
    return "\n".join(lines)


def format_document(document: Document, format_type: str) -> str:
    """Format a document for output."""
    if format_type == "json":
        return json.dumps(document.to_dict(), indent=2, ensure_ascii=False)
    return format_text(document)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="tunein-opml",
        description="Browse and search the station directory, or read OPML files",
    )
    parser.add_argument("--version", action="version", version=__version__)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default=None,
        help="Output format (default: text)"
    )
    common.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    browse_parser = subparsers.add_parser(
        "browse", parents=[common], help="Fetch and print a browse document"
    )
    browse_parser.add_argument(
        "--uri",
        default=BROWSE_URI,
        help=f"Browse endpoint (default: {BROWSE_URI})"
    )

    search_parser = subparsers.add_parser(
        "search", parents=[common], help="Search the directory"
    )
    search_parser.add_argument(
        "query",
        nargs="?",
        default=DEFAULT_SEARCH_QUERY,
        help=f"Search query (default: {DEFAULT_SEARCH_QUERY})"
    )

    parse_parser = subparsers.add_parser(
        "parse", parents=[common], help="Read local OPML files"
    )
    parse_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="OPML files to read"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def load_config(args: argparse.Namespace) -> CLIConfig:
    """Build the CLI configuration from an optional file and arguments."""
    config = CLIConfig.from_file(args.config) if args.config else CLIConfig()
    if args.format:
        config.output_format = args.format
    config.verbose = args.verbose
    config.quiet = args.quiet
    return config


def _fetch_and_print(uri: str, config: CLIConfig) -> int:
    logger = get_logger(__name__, None, "cli")
    try:
        document = fetch_document(uri, config.reader_config)
    except requests.RequestException as e:
        logger.debug("Fetch failed", extra={"uri": uri})
        print(f"Connection error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except OpmlError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return EXIT_ERROR

    print(format_document(document, config.output_format))
    return EXIT_OK


def cmd_browse(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle browse command."""
    return _fetch_and_print(args.uri, config)


def cmd_search(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle search command."""
    return _fetch_and_print(search_uri(args.query), config)


def cmd_parse(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle parse command."""
    exit_code = EXIT_OK
    results: List[Dict[str, Any]] = []

    for path in args.paths:
        try:
            document = read_file(path, config.reader_config)
        except (OpmlError, OSError) as e:
            print(f"Parse error: {path}: {e}", file=sys.stderr)
            exit_code = EXIT_ERROR
            continue

        if config.output_format == "json":
            results.append({"file": str(path), "document": document.to_dict()})
        else:
            if len(args.paths) > 1:
                print(f"==> {path} <==")
            print(format_text(document))

    if config.output_format == "json" and results:
        print(json.dumps(results, indent=2, ensure_ascii=False))
    return exit_code


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        config = load_config(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_ERROR

    handlers = {
        "browse": cmd_browse,
        "search": cmd_search,
        "parse": cmd_parse,
    }

    try:
        return handlers[args.command](args, config)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
