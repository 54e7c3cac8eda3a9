"""Fold patches over model-package.json and write dest/package.json once."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from wasm_pkg_tooling.errors import FilesystemFailure
from wasm_pkg_tooling.manifest.patches import Manifest, ManifestPatch

log = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


def load_template(path: Path) -> Manifest:
    try:
        with path.open() as f:
            data = json.load(f)
    except OSError as e:
        raise FilesystemFailure(path, f"could not read manifest template: {e}") from e
    except json.JSONDecodeError as e:
        raise FilesystemFailure(path, f"manifest template is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise FilesystemFailure(path, "manifest template must be a JSON object")
    return data


def synthesize(template: Manifest, patches: list[ManifestPatch]) -> Manifest:
    """Apply patches in order. The template is not modified."""
    manifest = dict(template)
    for patch in patches:
        manifest = patch(manifest)
    return manifest


def write_manifest(manifest: Manifest, dest: Path) -> Path:
    out = dest / MANIFEST_NAME
    try:
        out.write_text(json.dumps(manifest, indent=2) + "\n")
    except OSError as e:
        raise FilesystemFailure(out, str(e)) from e
    return out
