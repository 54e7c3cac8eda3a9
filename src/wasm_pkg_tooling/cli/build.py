"""`wasm-pkg build` — build every npm target with wasm-pack and assemble dist/."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from wasm_pkg_tooling.assemble import run as run_assemble
from wasm_pkg_tooling.config import DEFAULT_DEST, BuildRequest, load_layout
from wasm_pkg_tooling.errors import ConfigurationError
from wasm_pkg_tooling.targets import all_target_ids, parse_target_list


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="wasm-pkg build",
        description="Build npm targets with wasm-pack and assemble a publishable package folder",
    )
    ap.add_argument(
        "--dest",
        default=DEFAULT_DEST,
        help=f"Write output to this folder (deleted first!) (default: {DEFAULT_DEST})",
    )
    ap.add_argument(
        "--canary-sha",
        metavar="SHA_COMMIT",
        help="Set version to 'v0.0.0-canary-SHA_COMMIT'",
    )
    ap.add_argument("--set-version", metavar="VERSION", help="Use this version specifically")
    ap.add_argument(
        "--cargo-version", action="store_true", help="Use the version from Cargo.toml"
    )
    ap.add_argument("--set-name", metavar="NAME", help="Use this package name")
    ap.add_argument(
        "--package-only",
        action="store_true",
        help="Don't rebuild, just rewrite glue and package.json",
    )
    ap.add_argument(
        "--github-packages",
        metavar="@scope/repo/pkg-name",
        help="Configure for publishing to GitHub packages, @scope/pkg-name in repo @scope/repo",
    )
    ap.add_argument("--features", default="", help="Cargo features to enable (comma-sep)")
    ap.add_argument(
        "--targets",
        default="",
        help=f"npm targets to build (comma-sep, default all: {','.join(all_target_ids())})",
    )
    ap.add_argument("--dev", action="store_true", help="Build in --dev mode")
    ap.add_argument(
        "--project-root",
        type=Path,
        default=Path.cwd(),
        help="Project root (default: cwd)",
    )
    ap.add_argument(
        "--config", type=Path, default=None, help="Layout config (default: wasm-pkg.yaml)"
    )
    return ap


def request_from_args(args: argparse.Namespace) -> BuildRequest:
    project_root = args.project_root.resolve()
    return BuildRequest(
        targets=tuple(parse_target_list(args.targets)),
        features=args.features,
        release=not args.dev,
        dest=Path(args.dest),
        package_only=args.package_only,
        canary_sha=args.canary_sha or None,
        set_version=args.set_version or None,
        use_cargo_version=args.cargo_version,
        set_name=args.set_name or None,
        github_packages=args.github_packages or None,
        project_root=project_root,
    )


def run_build_argv(argv: list[str] | None = None) -> None:
    """Parse argv and assemble. argv defaults to sys.argv[2:] when called from main."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    args = build_parser().parse_args(argv)
    request = request_from_args(args)
    try:
        layout = load_layout(request.project_root, args.config)
    except ConfigurationError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(run_assemble(request, layout))
