"""Main CLI entry point for the jeximel command-line tool.

Provides the ``format`` command, which re-emits a document with the writer's
layout options, and the ``inspect`` command, which reports the declaration
and element tree of a document.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from jeximel import __version__
from jeximel.api.parser import parse_file
from jeximel.api.writer import serialize
from jeximel.shared.config import (
    ConfigError,
    ParserConfig,
    WriteOptions,
    WriterConfig,
    load_config,
)
from jeximel.shared.errors import XMLError
from jeximel.tree.model import Document


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="jeximel",
        description="Minimal in-memory XML reader and writer"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Format command
    format_parser = subparsers.add_parser("format", help="Re-emit an XML file")
    format_parser.add_argument(
        "path",
        type=Path,
        help="XML file to format"
    )
    format_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    format_parser.add_argument(
        "--attr-newline-inline",
        action="store_true",
        help="Put each attribute of a self-closing element on its own line"
    )
    format_parser.add_argument(
        "--attr-newline-all",
        action="store_true",
        help="Put each attribute of every element on its own line"
    )
    format_parser.add_argument(
        "--encoding", "-e",
        help="Character encoding for input and output (default: utf-8)"
    )
    format_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    # Inspect command
    inspect_parser = subparsers.add_parser("inspect", help="Show the structure of an XML file")
    inspect_parser.add_argument(
        "path",
        type=Path,
        help="XML file to inspect"
    )
    inspect_parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )
    inspect_parser.add_argument(
        "--encoding", "-e",
        help="Character encoding of the input (default: utf-8)"
    )
    inspect_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output, including parse and write traces"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def _load_configs(args: argparse.Namespace) -> Tuple[ParserConfig, WriterConfig]:
    if args.config:
        parser_config, writer_config = load_config(args.config)
    else:
        parser_config, writer_config = ParserConfig(), WriterConfig()

    if args.verbose:
        parser_config = parser_config.override(trace=True)
        writer_config = writer_config.override(trace=True)
    if args.encoding:
        parser_config = parser_config.override(encoding=args.encoding)
        writer_config = writer_config.override(encoding=args.encoding)
    return parser_config, writer_config


def describe_document(document: Document) -> Dict[str, Any]:
    """Summarize the declaration and elements of a document."""
    return {
        "declaration": {
            "version": document.version,
            "encoding": document.encoding,
            "standalone": document.standalone,
        },
        "elements": [
            {
                "ancestry": element.ancestry(),
                "attributes": element.get_attributes(),
                "text": element.text,
                "children": len(element.children),
            }
            for element in document.iter_elements()
        ],
    }


def format_description(description: Dict[str, Any]) -> str:
    """Render a document summary as plain text."""
    declaration = description["declaration"]
    lines = [
        f"version: {declaration['version'] or '-'}",
        f"encoding: {declaration['encoding'] or '-'}",
        f"standalone: {'yes' if declaration['standalone'] else 'no'}",
        "-" * 40,
    ]
    for element in description["elements"]:
        lines.append(element["ancestry"])
        if element["attributes"]:
            attributes = ", ".join(f"{k}={v}" for k, v in element["attributes"].items())
            lines.append(f"   Attributes: {attributes}")
        if element["text"]:
            lines.append(f"   Text: {element['text']}")
        if element["children"]:
            lines.append(f"   Children: {element['children']}")
    return "\n".join(lines)


def cmd_format(args: argparse.Namespace) -> int:
    """Handle format command."""
    parser_config, writer_config = _load_configs(args)

    options = writer_config.options
    if args.attr_newline_inline:
        options |= WriteOptions.ATTR_NEWLINE_INLINE
    if args.attr_newline_all:
        options |= WriteOptions.ATTR_NEWLINE_ALL
    writer_config = writer_config.override(options=options)

    document = parse_file(args.path, config=parser_config)
    data = serialize(document, config=writer_config)

    if args.output:
        try:
            args.output.write_bytes(data)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        if not args.quiet:
            print(f"Formatted {args.path} -> {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(data.decode(writer_config.effective_encoding))
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    """Handle inspect command."""
    parser_config, _ = _load_configs(args)
    document = parse_file(args.path, config=parser_config)
    description = describe_document(document)

    if args.format == "json":
        print(json.dumps(description, indent=2))
    else:
        print(format_description(description))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    # Route to appropriate command handler
    try:
        if args.command == "format":
            return cmd_format(args)
        elif args.command == "inspect":
            return cmd_inspect(args)
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 1

    except (XMLError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
