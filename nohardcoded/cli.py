"""
Command-line interface for nohardcoded.

Provides commands to scan a project for hard-coded environment values,
inspect the values that would be matched, and create a configuration file.
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from nohardcoded import __version__
from nohardcoded.config import (
    ScanConfig, create_default_config, find_config, load_config
)
from nohardcoded.constants import DEFAULT_IDENTIFIERS
from nohardcoded.core.engine import ScanEngine
from nohardcoded.errors import NoHardcodedError
from nohardcoded.formatters import get_formatter

logger = logging.getLogger(__name__)

CONFIG_FILE = ".nohardcoded.yaml"

# Exit codes
EXIT_CLEAN = 0
EXIT_FINDINGS = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def add_match_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by commands that build the comparison set."""
    parser.add_argument(
        "-e", "--env-file",
        help="Environment file to read (default: first of .env.production, "
             ".env.development, .env.local, .env, .env.local.example, .env.example)",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--identifier",
        action="append",
        metavar="FRAGMENT",
        help="Only match keys containing this fragment (can be specified multiple times)",
    )
    parser.add_argument(
        "--default-identifiers",
        action="store_true",
        help=f"Add the default identifiers ({', '.join(DEFAULT_IDENTIFIERS)})",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        metavar="FRAGMENT",
        help="Never match keys containing this fragment (can be specified multiple times)",
    )
    parser.add_argument(
        "--no-sensitive-value",
        action="append",
        metavar="VALUE",
        help="Treat this value as non-sensitive (can be specified multiple times)",
    )
    parser.add_argument(
        "--mode",
        choices=["identifiers", "heuristic"],
        help="Key selection mode (default: identifiers)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output and debug logging",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="nohardcoded",
        description="Find string literals that repeat sensitive values from your environment file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nohardcoded scan ./src                        # Scan a directory
  nohardcoded scan app.py -e .env.local         # Use a specific env file
  nohardcoded scan . --default-identifiers      # Only keys like *API*, *TOKEN*, ...
  nohardcoded scan . --format sarif -o out      # SARIF output to file
  nohardcoded values                            # Show which variables are matched
  nohardcoded init                              # Create config file
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Scan command
    scan_parser = subparsers.add_parser("scan", help="Scan code for hard-coded environment values")
    scan_parser.add_argument(
        "target",
        nargs="?",
        default=".",
        help="Target file or directory to scan (default: current directory)",
    )
    add_match_arguments(scan_parser)
    scan_parser.add_argument(
        "-f", "--format",
        choices=["text", "json", "sarif"],
        help="Output format (default: text)",
    )
    scan_parser.add_argument(
        "-o", "--output",
        help="Output file (default: stdout)",
    )
    scan_parser.add_argument(
        "--include",
        action="append",
        help="Include patterns (can be specified multiple times)",
    )
    scan_parser.add_argument(
        "--exclude",
        action="append",
        help="Exclude patterns (can be specified multiple times)",
    )
    scan_parser.add_argument(
        "--show-suppressed",
        action="store_true",
        help="Show suppressed findings",
    )
    scan_parser.add_argument(
        "-j", "--jobs",
        type=int,
        help="Number of parallel workers (default: 4)",
    )

    # Values command
    values_parser = subparsers.add_parser(
        "values", help="List the environment variables whose values are matched"
    )
    add_match_arguments(values_parser)
    values_parser.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    # Init command
    init_parser = subparsers.add_parser("init", help="Create a configuration file")
    init_parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Overwrite existing config file",
    )

    return parser


def build_config(args: argparse.Namespace, start_dir: str = ".") -> ScanConfig:
    """Load the configuration file, then apply command-line overrides."""
    config: Dict[str, Any] = {}

    config_path = args.config or find_config(start_dir)
    if config_path:
        logger.debug("Using configuration file %s", config_path)
        config = load_config(config_path)

    if isinstance(config.get("scan"), dict):
        config.update(config.pop("scan"))

    if args.env_file:
        config["env_file"] = args.env_file

    match = dict(config.get("match") or {})
    if args.identifier or args.default_identifiers:
        identifiers: List[str] = list(args.identifier or [])
        if args.default_identifiers:
            identifiers.extend(DEFAULT_IDENTIFIERS)
        match["identifiers"] = identifiers
    if args.ignore:
        match["ignore"] = args.ignore
    if args.no_sensitive_value:
        match["no_sensitive_values"] = args.no_sensitive_value
    if args.mode:
        match["mode"] = args.mode
    config["match"] = match

    output = dict(config.get("output") or {})
    if args.no_color:
        output["color"] = False
    output["verbose"] = args.verbose
    if getattr(args, "format", None):
        output["format"] = args.format
    if getattr(args, "output", None):
        output["output_file"] = args.output
    if getattr(args, "show_suppressed", False):
        output["show_suppressed"] = True
    config["output"] = output

    if getattr(args, "jobs", None):
        config["max_workers"] = args.jobs
    if getattr(args, "include", None):
        config["include"] = args.include
    if getattr(args, "exclude", None):
        exclude = config.get("exclude", config.get("exclude_patterns"))
        config["exclude"] = list(exclude or ScanConfig().exclude_patterns) + args.exclude

    return ScanConfig.from_dict(config)


def cmd_scan(args: argparse.Namespace) -> int:
    """Execute the scan command."""
    config = build_config(args, start_dir=args.target)
    engine = ScanEngine(config)

    logger.debug("Scanning %s", os.path.abspath(args.target))
    result = engine.scan(args.target)

    formatter = get_formatter(
        config.output.format,
        use_color=config.output.color and not config.output.output_file,
        verbose=config.output.verbose,
        include_suppressed=config.output.show_suppressed,
    )
    output = formatter.format_result(result)

    if config.output.output_file:
        with open(config.output.output_file, "w", encoding="utf-8") as f:
            f.write(output)
        if config.output.format == "text":
            print(f"Results written to {config.output.output_file}")
    else:
        print(output)

    return EXIT_FINDINGS if result.total_findings > 0 else EXIT_CLEAN


def cmd_values(args: argparse.Namespace) -> int:
    """Execute the values command."""
    config = build_config(args)
    engine = ScanEngine(config)

    index = engine.comparison_index
    formatter = get_formatter(args.format, use_color=config.output.color)
    print(formatter.format_values(index, env_file=engine.env_file))
    return EXIT_CLEAN


def cmd_init(args: argparse.Namespace) -> int:
    """Execute the init command."""
    if os.path.exists(CONFIG_FILE) and not args.force:
        print(f"Configuration file {CONFIG_FILE} already exists.")
        print("Use --force to overwrite.")
        return EXIT_FINDINGS

    content = create_default_config()

    with open(CONFIG_FILE, "w", encoding="utf-8") as f:
        f.write(content)

    print(f"Created configuration file: {CONFIG_FILE}")
    return EXIT_CLEAN


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_CLEAN

    configure_logging(getattr(args, "verbose", False))

    try:
        if args.command == "scan":
            return cmd_scan(args)
        elif args.command == "values":
            return cmd_values(args)
        elif args.command == "init":
            return cmd_init(args)
        else:
            parser.print_help()
            return EXIT_CLEAN

    except KeyboardInterrupt:
        print("\nScan interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except NoHardcodedError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if os.environ.get("DEBUG"):
            raise
        return EXIT_FINDINGS


if __name__ == "__main__":
    sys.exit(main())
