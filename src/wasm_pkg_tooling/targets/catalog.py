"""Static catalog of npm package variants, one per module-loading convention.

Bundlers pick "browser", then "module", then "main" from package.json; Node's require()
only reads "main". So:
- "main" points to _cjs (Node loads the .wasm from disk, CommonJS exports); its
  snippets/**/include.js is require()d, so it gets the adapted glue too
- "browser" points to _esm (ES module exports, for webpack et al.)
- _web can be loaded by a <script type="module"> tag and needs no package.json entry
- _no_modules and _zotero attach to a global (wasm_bindgen), no module system at all
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from wasm_pkg_tooling.errors import ConfigurationError


class GlueRecipe(Enum):
    NONE = "none"
    STRIP_EXPORT = "strip-export"
    APPEND_MODULE_EXPORT = "append-module-export"
    APPEND_HOST_BINDING = "append-host-binding"


@dataclass(frozen=True)
class TargetSpec:
    id: str
    wasm_pack_target: str
    output_suffix: str
    extra_features: tuple[str, ...] = ()
    glue_recipe: GlueRecipe = GlueRecipe.NONE
    manifest_entry: bool = True
    patch_snippets: bool = False
    aliases: tuple[str, ...] = ()


TARGET_CATALOG: tuple[TargetSpec, ...] = (
    TargetSpec(
        "nodejs",
        "nodejs",
        "_cjs",
        glue_recipe=GlueRecipe.APPEND_MODULE_EXPORT,
        patch_snippets=True,
        aliases=("server-module-loader",),
    ),
    TargetSpec(
        "browser",
        "bundler",
        "_esm",
        glue_recipe=GlueRecipe.NONE,
        aliases=("browser-es-module",),
    ),
    TargetSpec(
        "web",
        "web",
        "_web",
        glue_recipe=GlueRecipe.STRIP_EXPORT,
        manifest_entry=False,
        aliases=("script-tag-loadable",),
    ),
    TargetSpec(
        "no-modules",
        "no-modules",
        "_no_modules",
        extra_features=("no-modules",),
        glue_recipe=GlueRecipe.APPEND_MODULE_EXPORT,
        aliases=("global-only-no-module-system",),
    ),
    TargetSpec(
        "zotero",
        "no-modules",
        "_zotero",
        extra_features=("zotero",),
        glue_recipe=GlueRecipe.APPEND_HOST_BINDING,
        aliases=("embedded-host-variant",),
    ),
)


def _by_id() -> dict[str, TargetSpec]:
    out: dict[str, TargetSpec] = {}
    for spec in TARGET_CATALOG:
        out[spec.id] = spec
        for alias in spec.aliases:
            out[alias] = spec
    return out


def all_target_ids() -> list[str]:
    return [spec.id for spec in TARGET_CATALOG]


def resolve(target_id: str) -> TargetSpec:
    """Look up a target by id or alias. Raises ConfigurationError for unknown ids."""
    spec = _by_id().get(target_id.strip())
    if spec is None:
        msg = f"Unknown target: {target_id!r}. Known targets: {', '.join(all_target_ids())}"
        raise ConfigurationError(msg)
    return spec


def parse_target_list(value: str | None) -> list[str]:
    """Split a comma-separated --targets value. Empty entries are dropped."""
    if not value:
        return []
    return [t.strip() for t in value.split(",") if t.strip()]


def resolve_targets(ids: Iterable[str] | None) -> list[TargetSpec]:
    """Resolve every requested id in order, dropping duplicates. None or empty means the full catalog."""
    ids = list(ids or [])
    if not ids:
        return list(TARGET_CATALOG)
    out: list[TargetSpec] = []
    for target_id in ids:
        spec = resolve(target_id)
        if spec not in out:
            out.append(spec)
    return out
