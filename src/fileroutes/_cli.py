"""fileroutes CLI — fileroutes generate / fileroutes watch.

Entry point for the ``fileroutes`` command-line interface.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fileroutes.config import RoutesConfig


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    parser.add_argument("--dir", dest="routes_dir", default=None, help="Routes directory")
    parser.add_argument("--output", default=None, help="Generated module path")
    parser.add_argument(
        "--external",
        dest="externals",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Glob of route files to ignore (repeatable)",
    )
    parser.add_argument(
        "--annotate", action="store_true", default=None,
        help="Type-annotate the generated registration function",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", default=None, help="Log diagnostics to stderr",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the fileroutes CLI."""
    parser = argparse.ArgumentParser(
        prog="fileroutes",
        description="File-based routing for chirp apps.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # fileroutes generate
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate the routes module once",
    )
    _add_common_options(generate_parser)
    generate_parser.add_argument(
        "--no-write",
        dest="write",
        action="store_false",
        default=None,
        help="Print the module instead of writing it",
    )

    # fileroutes watch
    watch_parser = subparsers.add_parser(
        "watch",
        help="Regenerate on route changes and restart a dev server",
    )
    _add_common_options(watch_parser)

    return parser


def _get_version() -> str:
    """Get the package version."""
    from fileroutes import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    argv = list(sys.argv[1:] if argv is None else argv)
    server_cmd: list[str] = []
    if "--" in argv:
        split = argv.index("--")
        argv, server_cmd = argv[:split], argv[split + 1:]

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from fileroutes._errors import FileRoutesError
    from fileroutes._logging import configure_logging
    from fileroutes.config_loader import load_config

    overrides: dict[str, object] = {
        "routes_dir": args.routes_dir,
        "output": args.output,
        "externals": args.externals,
        "annotate": args.annotate,
        "verbose": args.verbose,
    }
    if args.command == "generate":
        overrides["write"] = args.write

    try:
        config = load_config(Path(args.root), **overrides)
        configure_logging(config.verbose)
        if args.command == "generate":
            _generate(config)
        elif args.command == "watch":
            _watch(config, server_cmd)
    except FileRoutesError as exc:
        print(f"fileroutes: {exc}", file=sys.stderr)
        sys.exit(1)


def _generate(config: RoutesConfig) -> None:
    from fileroutes.codegen import generate

    source = generate(config)
    if not config.write:
        sys.stdout.write(source)


def _watch(config: RoutesConfig, server_cmd: list[str]) -> None:
    """Run the watch loop, restarting *server_cmd* after each regeneration."""
    from fileroutes.dev import RouteWatcher, ServerProcess

    server = ServerProcess(server_cmd, cwd=config.root) if server_cmd else None
    watcher = RouteWatcher(config, on_reload=server.restart if server else None)
    try:
        asyncio.run(watcher.run())
    except KeyboardInterrupt:
        pass
    finally:
        if server is not None:
            server.stop()


if __name__ == "__main__":
    main()
