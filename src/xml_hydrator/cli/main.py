"""Main CLI entry point for the xml-hydrate command-line tool.

Loads an XML file, hydrates a fresh instance of the requested type and
prints every resulting object, or prints the mapping description of a type.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from xml_hydrator import XMLHydrator
from xml_hydrator.mapping import get_mapping, resolve_type
from xml_hydrator.shared import (
    ConfigError,
    HydrationConfig,
    HydrationError,
    get_logger,
)
from xml_hydrator.tree import load_document

_PRIMITIVES = (str, int, float, bool, type(None))


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.hydration_config = HydrationConfig()
        self.output_format = "text"
        self.verbose = False
        self.quiet = False

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        The file may hold an ``output_format`` entry and a ``hydration``
        object with HydrationConfig fields.

        Raises:
            ConfigError: The file cannot be read or holds invalid settings
        """
        config = cls()
        try:
            data = json.loads(config_path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not load config file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must hold a JSON object")
        if "hydration" in data:
            config.hydration_config = HydrationConfig.from_dict(data["hydration"])
        config.output_format = data.get("output_format", config.output_format)
        return config


def _render_value(value: Any, index_of: Dict[int, int]) -> Any:
    if id(value) in index_of:
        return f"<{type(value).__name__} #{index_of[id(value)]}>"
    if isinstance(value, _PRIMITIVES):
        return value
    if isinstance(value, (list, tuple)):
        return [_render_value(item, index_of) for item in value]
    if isinstance(value, dict):
        return {str(key): _render_value(item, index_of) for key, item in value.items()}
    return repr(value)


def describe_objects(objects: List[Any]) -> List[Dict[str, Any]]:
    """Describe hydrated objects as JSON-friendly dictionaries.

    References between objects of the same result (such as parent links) are
    rendered as ``<Type #index>``.
    """
    index_of = {id(obj): index for index, obj in enumerate(objects)}
    described = []
    for index, obj in enumerate(objects):
        state = vars(obj) if hasattr(obj, "__dict__") else {}
        described.append({
            "index": index,
            "type": type(obj).__name__,
            "fields": {
                name: _render_value(value, index_of)
                for name, value in state.items()
                if not name.startswith("_")
            },
        })
    return described


def format_results(described: List[Dict[str, Any]], format_type: str) -> str:
    """Format described objects for output."""
    if format_type == "json":
        return json.dumps(described, indent=2)

    if not described:
        return "No objects hydrated."

    lines = [f"Hydrated {len(described)} objects", "-" * 60]
    for entry in described:
        lines.append(f"#{entry['index']} {entry['type']}")
        for name, value in entry["fields"].items():
            lines.append(f"   {name}: {value}")
        lines.append("")
    return "\n".join(lines)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the argument parser for xml-hydrate."""
    parser = argparse.ArgumentParser(
        prog="xml-hydrate",
        description="Hydrate Python objects from XML using declarative mappings",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Quiet output")

    subparsers = parser.add_subparsers(dest="command")

    hydrate_parser = subparsers.add_parser("hydrate", help="Hydrate objects from a file")
    hydrate_parser.add_argument("path", type=Path, help="XML file to read")
    hydrate_parser.add_argument(
        "--type", "-t",
        dest="target_type",
        required=True,
        help="Root type as pkg.module:Class or pkg.module.Class",
    )
    hydrate_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default=None,
        help="Output format (default: text)",
    )
    hydrate_parser.add_argument("--output", "-o", type=Path, help="Write output to file")
    hydrate_parser.add_argument("--config", "-c", type=Path, help="JSON configuration file")
    hydrate_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a field rule matches an element without a scalar value",
    )
    hydrate_parser.add_argument(
        "--diagnostics",
        action="store_true",
        help="Print recorded diagnostics to stderr",
    )

    mapping_parser = subparsers.add_parser("mapping", help="Show the mapping of a type")
    mapping_parser.add_argument("target_type", help="Type as pkg.module:Class")

    return parser


def cmd_hydrate(args: argparse.Namespace) -> int:
    """Handle hydrate command."""
    logger = get_logger(__name__, None, "cli")

    config = CLIConfig()
    if args.config:
        try:
            config = CLIConfig.from_file(args.config)
        except ConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    hydration_config = config.hydration_config
    if args.strict:
        hydration_config = hydration_config.override(strict_structure=True)
    output_format = args.format or config.output_format
    if not (args.verbose or args.quiet):
        logging.getLogger("xml_hydrator").setLevel(hydration_config.logging_level)

    try:
        target_type = resolve_type(args.target_type)
        try:
            root_object = target_type()
        except TypeError as e:
            print(f"Error: cannot instantiate {args.target_type}: {e}", file=sys.stderr)
            return 1
        document = load_document(args.path)
        results = XMLHydrator(config=hydration_config).hydrate(document, root_object)
    except HydrationError as e:
        logger.error("Hydration failed", extra={"file": str(args.path)})
        print(f"Error: {e}", file=sys.stderr)
        return 1

    formatted_output = format_results(describe_objects(results.to_list()), output_format)

    if args.diagnostics:
        for diagnostic in results.diagnostics:
            print(
                f"[{diagnostic.severity.name}] {diagnostic.node_path}: {diagnostic.message}",
                file=sys.stderr,
            )

    if args.output:
        try:
            args.output.write_text(formatted_output)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(formatted_output)

    return 0


def cmd_mapping(args: argparse.Namespace) -> int:
    """Handle mapping command."""
    try:
        mapping = get_mapping(resolve_type(args.target_type))
    except HydrationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    def _default(value: Any) -> str:
        if isinstance(value, type):
            return f"{value.__module__}.{value.__qualname__}"
        return getattr(value, "__qualname__", repr(value))

    print(json.dumps(mapping.to_dict(), indent=2, default=_default))
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

    try:
        if args.command == "hydrate":
            return cmd_hydrate(args)
        if args.command == "mapping":
            return cmd_mapping(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
