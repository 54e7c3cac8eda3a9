"""Run wasm-pack once per target into pkg-scratch/<suffix>; query cargo metadata for the crate version."""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from wasm_pkg_tooling.config import BuildRequest, layout_path
from wasm_pkg_tooling.errors import ToolchainFailure
from wasm_pkg_tooling.targets import TargetSpec

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScratchArtifact:
    """What wasm-pack left in the scratch folder for one target."""

    target: TargetSpec
    directory: Path
    binary_files: tuple[Path, ...]
    snippets_dir: Path | None = None
    ignore_file: Path | None = None


def feature_string(target: TargetSpec, request: BuildRequest) -> str:
    """Request features followed by the target's extras, comma-joined. Repeats are left in."""
    return ",".join([*request.feature_list, *target.extra_features])


def scratch_dir_for(target: TargetSpec, request: BuildRequest, layout: dict[str, str]) -> Path:
    return layout_path(request.project_root, layout, "scratch_dir") / target.output_suffix


def build_command(target: TargetSpec, request: BuildRequest, layout: dict[str, str]) -> list[str]:
    """wasm-pack build argv for one target."""
    return [
        "wasm-pack",
        "build",
        "--release" if request.release else "--dev",
        "--out-name",
        layout["out_name"],
        "--scope",
        layout["npm_scope"],
        "--target",
        target.wasm_pack_target,
        "--out-dir",
        str(scratch_dir_for(target, request, layout)),
        "--",
        "--features",
        feature_string(target, request),
    ]


def collect_artifact(target: TargetSpec, scratch: Path, out_name: str) -> ScratchArtifact:
    """Scan a scratch folder for the binary, its companions, snippets/ and .gitignore."""
    binary_files = tuple(sorted(scratch.glob(f"{out_name}*"))) if scratch.is_dir() else ()
    snippets = scratch / "snippets"
    ignore = scratch / ".gitignore"
    return ScratchArtifact(
        target=target,
        directory=scratch,
        binary_files=binary_files,
        snippets_dir=snippets if snippets.is_dir() else None,
        ignore_file=ignore if ignore.is_file() else None,
    )


def invoke(target: TargetSpec, request: BuildRequest, layout: dict[str, str]) -> ScratchArtifact:
    """Build one target with wasm-pack (blocking). Raises ToolchainFailure on non-zero exit."""
    cmd = build_command(target, request, layout)
    features = feature_string(target, request)
    crate_dir = layout_path(request.project_root, layout, "crate_dir")
    scratch = scratch_dir_for(target, request, layout)
    scratch.parent.mkdir(parents=True, exist_ok=True)
    log.debug("running %s (cwd=%s)", " ".join(cmd), crate_dir)
    try:
        r = subprocess.run(cmd, cwd=str(crate_dir), check=False)
    except FileNotFoundError as e:
        raise ToolchainFailure(target.id, features, "wasm-pack is not installed") from e
    if r.returncode != 0:
        raise ToolchainFailure(target.id, features, f"wasm-pack exited with {r.returncode}")
    artifact = collect_artifact(target, scratch, layout["out_name"])
    if not artifact.binary_files:
        raise ToolchainFailure(
            target.id, features, f"no {layout['out_name']}* files in {scratch}"
        )
    return artifact


def cargo_version(project_root: Path, layout: dict[str, str]) -> str:
    """Version of crate_name from `cargo metadata --no-deps`. Raises ToolchainFailure."""
    manifest = layout_path(project_root, layout, "crate_dir") / "Cargo.toml"
    crate = layout["crate_name"]
    cmd = [
        "cargo",
        "metadata",
        "--format-version",
        "1",
        "--no-deps",
        "--manifest-path",
        str(manifest),
    ]
    log.debug("running %s", " ".join(cmd))
    try:
        r = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise ToolchainFailure(crate, "", "cargo is not installed") from e
    if r.returncode != 0:
        raise ToolchainFailure(crate, "", f"cargo metadata failed: {(r.stderr or '').strip()}")
    try:
        packages = json.loads(r.stdout or "{}").get("packages") or []
    except json.JSONDecodeError as e:
        raise ToolchainFailure(crate, "", f"cargo metadata returned invalid JSON: {e}") from e
    for pkg in packages:
        if pkg.get("name") == crate:
            return str(pkg["version"])
    raise ToolchainFailure(crate, "", f"package {crate!r} not found in {manifest}")
