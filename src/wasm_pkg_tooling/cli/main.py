"""Main CLI entry point for wasm-pkg tooling."""

import logging
import sys

from wasm_pkg_tooling.cli import build as build_cli
from wasm_pkg_tooling.cli import targets as targets_cli


def _usage() -> None:
    print("Usage: wasm-pkg [-v] <command> [args...]", file=sys.stderr)
    print("Commands:", file=sys.stderr)
    print(
        "  build     - Build npm targets with wasm-pack and assemble dist/ (see build --help)",
        file=sys.stderr,
    )
    print("  targets   - List known npm targets", file=sys.stderr)


def main() -> None:
    """Main CLI entry point."""
    args = sys.argv[1:]
    verbose = False
    while args and args[0] in ("-v", "--verbose"):
        verbose = True
        args = args[1:]
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if not args:
        _usage()
        sys.exit(1)

    command, rest = args[0], args[1:]
    if command == "build":
        build_cli.run_build_argv(rest)
    elif command == "targets":
        targets_cli.run_targets_argv(rest)
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        _usage()
        sys.exit(1)


if __name__ == "__main__":
    main()
