"""package.json synthesis: template + precedence-selected field patches."""

from .patches import (
    ManifestPatch,
    RegistryScopedName,
    canary_version,
    parse_registry_scoped_name,
    registry_patches,
    select_patches,
    strip_version_prefix,
)
from .synthesize import MANIFEST_NAME, load_template, synthesize, write_manifest

__all__ = [
    "MANIFEST_NAME",
    "ManifestPatch",
    "RegistryScopedName",
    "canary_version",
    "load_template",
    "parse_registry_scoped_name",
    "registry_patches",
    "select_patches",
    "strip_version_prefix",
    "synthesize",
    "write_manifest",
]
