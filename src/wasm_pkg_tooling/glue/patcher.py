"""Write the per-variant loader glue into already-composed variant folders."""

from __future__ import annotations

import logging
from pathlib import Path

from wasm_pkg_tooling.errors import FilesystemFailure
from wasm_pkg_tooling.glue.recipes import GlueOptions, apply_recipe
from wasm_pkg_tooling.glue.transforms import append_once, host_binding_trailer, substitute_namespace
from wasm_pkg_tooling.targets import GlueRecipe, TargetSpec

log = logging.getLogger(__name__)


def glue_filename(options: GlueOptions) -> str:
    return f"{options.out_name}_include.js"


def read_canonical(path: Path) -> str:
    try:
        return path.read_text()
    except OSError as e:
        raise FilesystemFailure(path, f"could not read canonical glue source: {e}") from e


def render(canonical: str, recipe: GlueRecipe, options: GlueOptions) -> str:
    return apply_recipe(canonical, recipe, options)


def render_all(
    canonical: str, targets: list[TargetSpec], options: GlueOptions
) -> dict[str, str]:
    """Glue text per target id, all from the same canonical source."""
    return {t.id: render(canonical, t.glue_recipe, options) for t in targets}


def _write(path: Path, text: str, target_id: str) -> None:
    try:
        path.write_text(text)
    except OSError as e:
        raise FilesystemFailure(path, str(e), target_id) from e


def patch_variants(
    canonical_path: Path,
    targets: list[TargetSpec],
    dest: Path,
    options: GlueOptions,
) -> list[Path]:
    """Write <suffix>/<out_name>_include.js for every target.

    Copied snippets/**/include.js are overwritten only where target.patch_snippets is set;
    elsewhere they stay as wasm-pack emitted them.

    The canonical source is read once. Returns the written paths.
    """
    canonical = read_canonical(canonical_path)
    rendered = render_all(canonical, targets, options)
    written: list[Path] = []
    for target in targets:
        folder = dest / target.output_suffix
        if not folder.is_dir():
            msg = "variant folder missing (run without --package-only first)"
            raise FilesystemFailure(folder, msg, target.id)
        text = rendered[target.id]
        paths = [folder / glue_filename(options)]
        if target.patch_snippets:
            paths.extend(sorted(folder.glob("snippets/**/include.js")))
        for path in paths:
            log.debug("glue %s (%s) -> %s", target.id, target.glue_recipe.value, path)
            _write(path, text, target.id)
            written.append(path)
    return written


def patch_host_loader(
    target: TargetSpec,
    dest: Path,
    options: GlueOptions,
    scratch_root: Path | None = None,
) -> Path | None:
    """Rewrite the embedded-host bindgen loader: real namespace in, CommonJS export and host binding appended.

    Reads the pristine scratch copy when available so re-runs do not stack edits.
    Returns the written path, or None when there is no loader to patch.
    """
    loader = dest / target.output_suffix / f"{options.out_name}.js"
    source = loader
    if scratch_root is not None:
        pristine = scratch_root / target.output_suffix / loader.name
        if pristine.is_file():
            source = pristine
    if not source.is_file():
        log.info("no bindgen loader for %s at %s; skipping host binding", target.id, source)
        return None
    try:
        text = source.read_text()
    except OSError as e:
        raise FilesystemFailure(source, str(e), target.id) from e
    text = substitute_namespace(text, options.host_placeholder, options.host_namespace)
    text = append_once(text, "module.exports = wasm_bindgen;")
    text = append_once(text, host_binding_trailer(options.host_namespace, "wasm_bindgen"))
    _write(loader, text, target.id)
    return loader
