"""Ordered transform steps per GlueRecipe.

Order is fixed: strip export markers, then substitute the host placeholder, then append
trailers (module export before host binding, since the host binding reads module.exports).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from wasm_pkg_tooling.glue.transforms import (
    append_once,
    host_binding_trailer,
    module_export_trailer,
    strip_export,
    substitute_namespace,
)
from wasm_pkg_tooling.targets import GlueRecipe


@dataclass(frozen=True)
class GlueOptions:
    """Values the steps need; namespace is the single source for substitution and host binding."""

    host_namespace: str = "Zotero.CiteprocRs"
    host_placeholder: str = "CITEPROC_RS_ZOTERO_GLOBAL"
    export_trailer: str | None = None
    out_name: str = "citeproc_rs_wasm"


Step = Callable[[str, GlueOptions], str]


def _strip(text: str, options: GlueOptions) -> str:
    return strip_export(text)


def _substitute(text: str, options: GlueOptions) -> str:
    return substitute_namespace(text, options.host_placeholder, options.host_namespace)


def _module_export(text: str, options: GlueOptions) -> str:
    trailer = options.export_trailer
    if trailer is None:
        trailer = module_export_trailer(text)
    return append_once(text, trailer)


def _host_binding(text: str, options: GlueOptions) -> str:
    return append_once(text, host_binding_trailer(options.host_namespace))


STEPS: dict[str, Step] = {
    "strip-export": _strip,
    "substitute-namespace": _substitute,
    "module-export": _module_export,
    "host-binding": _host_binding,
}

RECIPES: dict[GlueRecipe, tuple[str, ...]] = {
    GlueRecipe.NONE: (),
    GlueRecipe.STRIP_EXPORT: ("strip-export",),
    GlueRecipe.APPEND_MODULE_EXPORT: ("strip-export", "module-export"),
    GlueRecipe.APPEND_HOST_BINDING: (
        "strip-export",
        "substitute-namespace",
        "module-export",
        "host-binding",
    ),
}


def steps_for(recipe: GlueRecipe) -> tuple[str, ...]:
    return RECIPES[recipe]


def apply_recipe(text: str, recipe: GlueRecipe, options: GlueOptions) -> str:
    for name in steps_for(recipe):
        text = STEPS[name](text, options)
    return text
