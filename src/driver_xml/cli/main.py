"""Main CLI entry point for the driver-xml command-line tool.

Provides commands to trace how a document parses, to rewrite documents in
canonical form, and to check a batch of files for well-formedness.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from driver_xml import __version__
from driver_xml.api.parser import parse_file
from driver_xml.character.classifier import to_printable
from driver_xml.shared.config import ConfigError, DriverXmlConfig
from driver_xml.shared.errors import DriverXmlError, XMLParseError
from driver_xml.shared.logging import get_logger
from driver_xml.shared.result import DiagnosticSeverity
from driver_xml.tools.hexdump import hex_dump
from driver_xml.writer.canonical import serialize
from driver_xml.writer.debug import debug_print


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self, settings: Optional[DriverXmlConfig] = None):
        self.settings = settings or DriverXmlConfig()
        self.verbose = False
        self.quiet = False

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        Raises:
            ConfigError: The file cannot be read or holds invalid settings
        """
        try:
            text = config_path.read_text()
        except OSError as e:
            raise ConfigError(f"Could not read config file {config_path}: {e}") from e
        return cls(DriverXmlConfig.from_json(text))

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CLIConfig":
        config = cls.from_file(args.config) if args.config else cls()
        config.verbose = args.verbose
        config.quiet = args.quiet
        return config


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="driver-xml",
        description="Minimal ASCII XML parser: trace, canonicalize and validate documents"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser(
        "parse", help="Parse a file and show its tree, canonical form and hex dump"
    )
    parse_parser.add_argument("path", type=Path, help="XML file to parse")
    parse_parser.add_argument(
        "--no-trace",
        action="store_true",
        help="Do not print the indented tree trace"
    )
    parse_parser.add_argument(
        "--no-hexdump",
        action="store_true",
        help="Do not print the hex dump of the canonical output"
    )

    # Canonicalize command
    canonical_parser = subparsers.add_parser(
        "canonicalize", help="Rewrite a file as canonical XML"
    )
    canonical_parser.add_argument("path", type=Path, help="XML file to rewrite")
    canonical_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Check files for well-formedness")
    validate_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files to validate"
    )
    validate_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )

    # Global options
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file path"
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


def _report_parse_error(path: Path, error: XMLParseError) -> None:
    print(f"{path}: {error}", file=sys.stderr)


def cmd_parse(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle parse command."""
    try:
        result = parse_file(args.path, config=config.settings)
    except XMLParseError as e:
        _report_parse_error(args.path, e)
        if e.partial_root is not None and not args.no_trace:
            print("Partial tree:")
            debug_print(e.partial_root, sink=print, config=config.settings.writer)
        return 1

    if not args.no_trace:
        debug_print(result.root, sink=print, config=config.settings.writer)

    output = serialize(result.root, config.settings.writer)
    print(to_printable(output))

    if not args.no_hexdump:
        for line in hex_dump(output, header=True):
            print(line)

    if not config.quiet:
        for diag in result.diagnostics:
            print(f"{diag.severity.name}: {diag.message}", file=sys.stderr)
    return 0


def cmd_canonicalize(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle canonicalize command."""
    try:
        result = parse_file(args.path, config=config.settings)
    except XMLParseError as e:
        _report_parse_error(args.path, e)
        return 1

    output = serialize(result.root, config.settings.writer)

    if args.output:
        try:
            args.output.write_bytes(output)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        if not config.quiet:
            print(f"Canonical XML written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.flush()
        sys.stdout.buffer.write(output)
        sys.stdout.buffer.flush()
    return 0


def validate_file(path: Path, config: CLIConfig) -> Dict[str, Any]:
    """Parse one file and describe the outcome."""
    try:
        result = parse_file(path, config=config.settings)
    except XMLParseError as e:
        return {
            "file": str(path),
            "valid": False,
            "error": str(e),
            "error_type": type(e).__name__,
            "position": e.position,
        }
    except OSError as e:
        return {"file": str(path), "valid": False, "error": str(e), "error_type": "OSError"}

    return {
        "file": str(path),
        "valid": True,
        "element_count": result.element_count,
        "warnings": [
            d.message for d in result.get_diagnostics_by_severity(DiagnosticSeverity.WARNING)
        ],
    }


def cmd_validate(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle validate command."""
    results = [validate_file(path, config) for path in args.paths]

    if args.format == "json":
        print(json.dumps(results, indent=2))
    else:
        valid_count = sum(1 for r in results if r["valid"])
        print(f"Validated {len(results)} files, {valid_count} valid")
        print("-" * 50)
        for result in results:
            status = "OK  " if result["valid"] else "FAIL"
            print(f"{status} {result['file']}")
            if not result["valid"]:
                print(f"   Error: {result['error']}")
            for warning in result.get("warnings", [])[:3]:
                print(f"   Warning: {warning}")

    return 0 if all(r["valid"] for r in results) else 1


COMMANDS = {
    "parse": cmd_parse,
    "canonicalize": cmd_canonicalize,
    "validate": cmd_validate,
}


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

    logger = get_logger(__name__, None, "cli")

    try:
        config = CLIConfig.from_args(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        return COMMANDS[args.command](args, config)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130
    except (DriverXmlError, OSError) as e:
        logger.error(f"{args.command} failed: {e}", extra={"command": args.command})
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
