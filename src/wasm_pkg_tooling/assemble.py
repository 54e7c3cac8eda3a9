"""Assemble dist/: wasm-pack per target, compose folders, patch glue, write package.json last.

Any failure aborts the run; folders already composed are left in place and package.json
is not written.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from wasm_pkg_tooling.build import (
    cargo_version,
    compose,
    copy_readme,
    invoke,
    prepare_destination,
)
from wasm_pkg_tooling.config import BuildRequest, layout_path, resolve_layout
from wasm_pkg_tooling.errors import AssembleError, ConfigurationError, FilesystemFailure
from wasm_pkg_tooling.glue import GlueOptions, patch_host_loader, patch_variants
from wasm_pkg_tooling.glue.transforms import validate_namespace
from wasm_pkg_tooling.manifest import (
    load_template,
    parse_registry_scoped_name,
    select_patches,
    synthesize,
    write_manifest,
)
from wasm_pkg_tooling.targets import GlueRecipe, TargetSpec, resolve_targets

log = logging.getLogger(__name__)


def glue_options(layout: dict[str, str], project_root: Path) -> GlueOptions:
    """GlueOptions from layout; export_trailer, when set, is a file whose text replaces the generated trailer."""
    trailer: str | None = None
    if layout["export_trailer"]:
        path = layout_path(project_root, layout, "export_trailer")
        if not path.is_file():
            msg = f"export_trailer not found: {path}"
            raise ConfigurationError(msg)
        try:
            trailer = path.read_text()
        except OSError as e:
            raise FilesystemFailure(path, str(e)) from e
    return GlueOptions(
        host_namespace=layout["host_namespace"],
        host_placeholder=layout["host_placeholder"],
        export_trailer=trailer,
        out_name=layout["out_name"],
    )


def _resolve_dest(request: BuildRequest) -> Path:
    dest = request.dest
    return dest if dest.is_absolute() else (request.project_root / dest).resolve()


def _build_targets(
    targets: list[TargetSpec], request: BuildRequest, layout: dict[str, str], dest: Path
) -> None:
    for target in targets:
        print(f"🔨 TARGET: {target.id} -> {target.output_suffix}")
        artifact = invoke(target, request, layout)
        compose(target, artifact, dest)
        print(f"✅ TARGET DONE: {target.id}")


def _run_impl(request: BuildRequest, layout: dict[str, str]) -> Path:
    root = request.project_root
    targets = resolve_targets(request.targets)
    if request.github_packages:
        parse_registry_scoped_name(request.github_packages)
    host_targets = [t for t in targets if t.glue_recipe is GlueRecipe.APPEND_HOST_BINDING]
    if host_targets:
        validate_namespace(layout["host_namespace"])
    options = glue_options(layout, root)
    template = load_template(layout_path(root, layout, "manifest_template"))
    dest = _resolve_dest(request)

    prepare_destination(dest, targets, request.package_only)
    if not request.package_only:
        _build_targets(targets, request, layout, dest)

    patch_variants(layout_path(root, layout, "glue_source"), targets, dest, options)
    scratch_root = layout_path(root, layout, "scratch_dir")
    for target in host_targets:
        patch_host_loader(target, dest, options, scratch_root=scratch_root)

    copy_readme(layout_path(root, layout, "readme"), dest)

    patches = select_patches(
        request,
        derived_version=lambda: cargo_version(root, layout),
        layout=layout,
    )
    manifest = synthesize(template, patches)
    if patches:
        print("Writing package.json with:")
        for patch in patches:
            print(f"  {patch.describe()}")
    out = write_manifest(manifest, dest)
    print(f"✅ Wrote {out}")
    return out


def run(request: BuildRequest, layout: dict[str, str] | None = None) -> int:
    """Assemble the package described by request. Returns 0 or 1."""
    layout = resolve_layout(layout)
    try:
        _run_impl(request, layout)
        return 0
    except AssembleError as e:
        print(f"❌ failed {e}", file=sys.stderr)
        return 1
