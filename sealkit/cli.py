#!/usr/bin/env python3
"""Command-line interface for SealKit.

This module provides the ``sealkit`` command:
- encode / decode a file or stdin through one or more transforms
- list the registered transform variants
- configuration file loading

Example:
    $ sealkit encode --type compression --key zlib --type aes --key secret < in > out
    $ sealkit decode --type compression --key zlib --type aes --key secret < out
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from sealkit.core.config import ConfigError, ConfigManager, ConfigSource, set_global_config
from sealkit.core.constants import SEALKIT_VERSION
from sealkit.core.logging import Logger, file_handler, parse_level, set_global_logger
from sealkit.transforms.base import TransformError
from sealkit.transforms.pipeline import TransformPipeline
from sealkit.transforms.registry import get_registry

DESCRIPTION = "SealKit - keyed reversible byte transforms"


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
        CLIError: If the arguments are inconsistent
    """
    parser = argparse.ArgumentParser(
        prog="sealkit",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Compress with lz4
  sealkit encode --type compression --key lz4 -i data.bin -o data.lz4

  # Compress then encrypt; decode reverses the chain
  sealkit encode -t compression -k zlib -t aes -k secret < in > out
  sealkit decode -t compression -k zlib -t aes -k secret < out > in

  # Use the pipeline from a configuration file
  sealkit encode --config sealkit.yaml -i in -o out
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {SEALKIT_VERSION}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for command in ("encode", "decode"):
        sub = subparsers.add_parser(command, help=f"{command.capitalize()} a payload")

        sub.add_argument(
            "-t",
            "--type",
            metavar="TYPE",
            action="append",
            dest="types",
            help="Transform variant (repeat to build a pipeline, in encode order)",
        )
        sub.add_argument(
            "-k",
            "--key",
            metavar="KEY",
            action="append",
            dest="keys",
            help="Key for the transform at the same position (default: empty)",
        )
        sub.add_argument("-i", "--input", metavar="FILE", help="Input file (default: stdin)")
        sub.add_argument("-o", "--output", metavar="FILE", help="Output file (default: stdout)")
        sub.add_argument(
            "-c", "--config", metavar="FILE", help="Configuration file path (YAML format)"
        )
        sub.add_argument(
            "--strict",
            action="store_true",
            help="Fail with an error instead of writing empty output",
        )
        sub.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers.add_parser("list", help="List available transform variants")

    parsed = parser.parse_args(args)
    _validate_arguments(parsed)
    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Raises:
        CLIError: If validation fails
    """
    if args.command == "list":
        return

    types = args.types or []
    keys = args.keys or []

    if len(keys) > len(types):
        raise CLIError("More --key values than --type values")

    if not types and not args.config:
        raise CLIError(
            "Either --type or --config must be specified\n" "Use --help for usage information"
        )

    if args.input and not Path(args.input).is_file():
        raise CLIError(f"Input file does not exist: {args.input}")

    if args.config and not Path(args.config).is_file():
        raise CLIError(f"Configuration file does not exist: {args.config}")


def load_config(args: argparse.Namespace) -> ConfigManager:
    """
    Build the configuration for this run and install it globally.

    Command-line flags take precedence over the configuration file.

    Raises:
        CLIError: If the configuration file cannot be loaded
    """
    try:
        config = ConfigManager(getattr(args, "config", None))
    except ConfigError as e:
        raise CLIError(str(e))

    if getattr(args, "strict", False):
        config.set("sealkit.errors.strict", True, ConfigSource.RUNTIME)
    if getattr(args, "debug", False):
        config.set("sealkit.logging.level", "DEBUG", ConfigSource.RUNTIME)

    set_global_config(config)
    return config


def setup_logging(config: ConfigManager) -> Logger:
    """
    Setup the global logger from configuration.

    Returns:
        Configured logger instance
    """
    try:
        level = parse_level(config.get("sealkit.logging.level", "WARNING"))
    except ValueError as e:
        raise CLIError(str(e))

    logger = Logger(level=level)
    log_file = config.get("sealkit.logging.file")
    if log_file:
        logger.add_handler(file_handler(log_file))

    set_global_logger(logger)
    return logger


def build_pipeline(args: argparse.Namespace, config: ConfigManager) -> TransformPipeline:
    """
    Build the transform pipeline from arguments, or from ``sealkit.pipeline``.

    Raises:
        CLIError: If no transforms are configured or a type is unknown
    """
    if args.types:
        keys = list(args.keys or [])
        keys += [""] * (len(args.types) - len(keys))
        items: List[Dict[str, Any]] = [
            {"type": t, "key": k} for t, k in zip(args.types, keys)
        ]
    else:
        items = config.get("sealkit.pipeline") or []

    if not items:
        raise CLIError("No transforms configured")

    try:
        return TransformPipeline.from_config(items)
    except TransformError as e:
        raise CLIError(e.message)


def read_input(path: Optional[str]) -> bytes:
    if path:
        return Path(path).read_bytes()
    return sys.stdin.buffer.read()


def write_output(path: Optional[str], data: bytes) -> None:
    if path:
        Path(path).write_bytes(data)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()


def run(args: argparse.Namespace) -> int:
    """
    Execute a parsed command.

    Returns:
        Exit code
    """
    if args.command == "list":
        registry = get_registry()
        aliases = registry.aliases()
        for tag in registry.available():
            names = sorted(a for a, p in aliases.items() if p == tag)
            suffix = f" ({', '.join(names)})" if names else ""
            print(f"{tag}{suffix}")
        return 0

    config = load_config(args)
    logger = setup_logging(config)
    pipeline = build_pipeline(args, config)

    data = read_input(args.input)
    logger.debug(f"{args.command} started", transforms=len(pipeline), input_size=len(data))

    with logger.add_context(command=args.command):
        if args.command == "encode":
            output = pipeline.encode(data)
        else:
            output = pipeline.decode(data)

    write_output(args.output, output)
    logger.debug(f"{args.command} finished", output_size=len(output))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code: 0 on success, 1 on any error, 130 when interrupted
    """
    try:
        args = parse_arguments(argv)
        return run(args)

    except CLIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except TransformError as e:
        print(f"Transform failed: {e.message}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
