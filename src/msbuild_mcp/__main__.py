"""Entry point for msbuild-mcp."""

import argparse
import json
import logging
import os
import sys

from .build import construct
from .build.options import MSBuildOptions
from .errors import MSBuildError


def configure_logging() -> None:
    """Configure logging based on environment."""
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def parse_property(value: str) -> tuple[str, str]:
    """Parse a NAME=VALUE property argument."""
    name, sep, prop_value = value.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got: {value}")
    return name, prop_value


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="MSBuild MCP Server - Build MSBuild/xbuild command lines via MCP"
    )
    parser.add_argument(
        "--print-command",
        metavar="PROJECT",
        type=str,
        default=None,
        help="Print the MSBuild command for PROJECT as JSON and exit "
        "instead of running the MCP server.",
    )
    parser.add_argument(
        "--msbuild-path",
        type=str,
        default=None,
        help="Path to MSBuild. Detected automatically when omitted.",
    )
    parser.add_argument(
        "--configuration",
        type=str,
        default=None,
        help="Build configuration (default: Release).",
    )
    parser.add_argument(
        "--property",
        dest="properties",
        type=parse_property,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Extra MSBuild property. May be repeated.",
    )
    return parser.parse_args(argv)


def print_command(args: argparse.Namespace) -> int:
    """Print the constructed command descriptor. Returns the exit code."""
    overrides: dict = {"properties": dict(args.properties)}
    if args.msbuild_path:
        overrides["msbuildPath"] = args.msbuild_path
    if args.configuration:
        overrides["configuration"] = args.configuration

    try:
        command = construct({"path": args.print_command}, MSBuildOptions.with_defaults(overrides))
    except MSBuildError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(command.to_dict(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    configure_logging()
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    if args.print_command is not None:
        return print_command(args)

    from .server import create_server

    logger.info("Starting MSBuild MCP Server...")
    mcp = create_server()
    try:
        mcp.run("stdio")
    except Exception:
        logger.exception("Server error")
        raise
    finally:
        logger.info("Server stopped")
    return 0


def run() -> None:
    """Run the server."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
