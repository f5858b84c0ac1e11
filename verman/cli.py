"""Command line interface for verman.

Usage:
    verman [--root DIR] list [--name NAME] [--version EXPR | --latest]
    verman [--root DIR] get NAME VERSION
    verman [--root DIR] serve [--host HOST] [--port PORT]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import uvicorn

from verman import __version__
from verman.app import create_app
from verman.config import Settings, get_settings
from verman.exceptions import RegistryException
from verman.models.package import GetQuery, PackageQuery, select_versions
from verman.services.registry import Registry

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="verman",
        description="Query a <package>/<version>/<files> repository.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--root", type=Path, help="Repository root directory")
    parser.add_argument("--base-uri", help="URI prefix for file locations")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")

    sub = parser.add_subparsers(dest="command", required=True)

    list_parser = sub.add_parser("list", help="List packages and versions")
    list_parser.add_argument("--name", help="Exact package name")
    selector = list_parser.add_mutually_exclusive_group()
    selector.add_argument("--version", dest="expression", help="Version-range expression")
    selector.add_argument("--latest", action="store_true", help="Only the latest version(s)")

    get_parser = sub.add_parser("get", help="List the files of a package version")
    get_parser.add_argument("name", help="Package name")
    get_parser.add_argument("version", help="Exact version directory name")

    serve_parser = sub.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Bind address")
    serve_parser.add_argument("--port", type=int, help="Bind port")

    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Apply command line overrides to the configured settings.

    Args:
        args: Parsed arguments.

    Returns:
        Settings for this invocation.
    """
    overrides = {
        "repository_root": args.root,
        "base_uri": args.base_uri,
        "log_level": args.log_level.upper() if args.log_level else None,
        "host": getattr(args, "host", None),
        "port": getattr(args, "port", None),
    }
    return get_settings().model_copy(
        update={key: value for key, value in overrides.items() if value is not None}
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def cmd_list(registry: Registry, args: argparse.Namespace) -> dict:
    query = PackageQuery(name=args.name, selector=select_versions(args.expression, args.latest))
    packages = registry.list(query)
    return {"packages": [p.to_dict() for p in packages]}


def cmd_get(registry: Registry, args: argparse.Namespace) -> dict:
    package = registry.get(GetQuery(package_name=args.name, version_number=args.version))
    return package.to_dict()


def cmd_serve(settings: Settings) -> None:
    """Run the HTTP API with uvicorn."""
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else settings.log_level.lower(),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line interface.

    Args:
        argv: Arguments, defaults to ``sys.argv[1:]``.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    settings = load_settings(args)
    configure_logging(settings.log_level)

    if args.command == "serve":
        cmd_serve(settings)
        return 0

    registry = settings.build_registry()
    handler = cmd_list if args.command == "list" else cmd_get
    try:
        result = handler(registry, args)
    except RegistryException as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
