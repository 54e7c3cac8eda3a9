"""wasm-pack invocation and per-target output composition."""

from .compose import (
    ComposedVariantFolder,
    compose,
    copy_readme,
    prepare_destination,
    variant_dir,
)
from .wasm_pack import (
    ScratchArtifact,
    build_command,
    cargo_version,
    collect_artifact,
    feature_string,
    invoke,
)

__all__ = [
    "ComposedVariantFolder",
    "ScratchArtifact",
    "build_command",
    "cargo_version",
    "collect_artifact",
    "compose",
    "copy_readme",
    "feature_string",
    "invoke",
    "prepare_destination",
    "variant_dir",
]
