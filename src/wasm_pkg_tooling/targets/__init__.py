"""Target catalog: which package variants exist and how each is built and patched."""

from .catalog import (
    TARGET_CATALOG,
    GlueRecipe,
    TargetSpec,
    all_target_ids,
    parse_target_list,
    resolve,
    resolve_targets,
)

__all__ = [
    "TARGET_CATALOG",
    "GlueRecipe",
    "TargetSpec",
    "all_target_ids",
    "parse_target_list",
    "resolve",
    "resolve_targets",
]
