"""Loader glue patching: one canonical include.js, adapted per loading convention."""

from .patcher import (
    glue_filename,
    patch_host_loader,
    patch_variants,
    render,
    render_all,
)
from .recipes import RECIPES, GlueOptions, apply_recipe, steps_for
from .transforms import (
    append_once,
    declared_classes,
    host_binding_trailer,
    module_export_trailer,
    strip_export,
    substitute_namespace,
)

__all__ = [
    "RECIPES",
    "GlueOptions",
    "append_once",
    "apply_recipe",
    "declared_classes",
    "glue_filename",
    "host_binding_trailer",
    "module_export_trailer",
    "patch_host_loader",
    "patch_variants",
    "render",
    "render_all",
    "steps_for",
    "strip_export",
    "substitute_namespace",
]
