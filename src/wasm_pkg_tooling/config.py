"""Layout defaults, optional wasm-pkg.yaml, and the immutable BuildRequest.

Layout keys (crate_dir is relative to project_root, other paths to crate_dir):
- crate_dir: directory holding the wasm crate's Cargo.toml
- scratch_dir: wasm-pack output root (relative to crate_dir), one subfolder per target
- out_name / npm_scope / crate_name: passed to wasm-pack, and used to query cargo metadata
- glue_source: canonical include.js; export_trailer: optional module.exports trailer file
- manifest_template / readme: copied or rewritten into the destination
- host_namespace / host_placeholder: embedded-host (Zotero) global binding
- registry_url / git_host: used by --github-packages
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from wasm_pkg_tooling.errors import ConfigurationError

CONFIG_FILE_NAME = "wasm-pkg.yaml"

# citeproc-rs defaults; override via wasm-pkg.yaml for other crates.
DEFAULT_LAYOUT: dict[str, str] = {
    "crate_dir": ".",
    "scratch_dir": "pkg-scratch",
    "out_name": "citeproc_rs_wasm",
    "npm_scope": "citeproc-rs",
    "crate_name": "wasm",
    "glue_source": "src/js/include.js",
    "export_trailer": "",
    "manifest_template": "scripts/model-package.json",
    "readme": "README.md",
    "host_namespace": "Zotero.CiteprocRs",
    "host_placeholder": "CITEPROC_RS_ZOTERO_GLOBAL",
    "registry_url": "https://npm.pkg.github.com/cormacrelf",
    "git_host": "git@github.com",
}

DEFAULT_DEST = "./dist"


def resolve_layout(layout: dict[str, Any] | None) -> dict[str, str]:
    """Return layout dict with defaults filled. Unknown keys are ignored."""
    if layout is None:
        return dict(DEFAULT_LAYOUT)
    out = dict(DEFAULT_LAYOUT)
    out.update({k: str(v) for k, v in layout.items() if k in out and v is not None})
    return out


def load_layout(project_root: Path, config_path: Path | None = None) -> dict[str, str]:
    """Load wasm-pkg.yaml (or config_path) and fill defaults. Missing default file is fine."""
    path = config_path if config_path is not None else project_root / CONFIG_FILE_NAME
    if config_path is None and not path.is_file():
        return resolve_layout(None)
    if not path.is_file():
        msg = f"Config file not found: {path}"
        raise ConfigurationError(msg)
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        msg = f"{path}: invalid YAML: {e}"
        raise ConfigurationError(msg) from e
    if not isinstance(data, dict):
        msg = f"{path}: expected a mapping at top level"
        raise ConfigurationError(msg)
    return resolve_layout(data)


def layout_path(project_root: Path, layout: dict[str, str], key: str) -> Path:
    """Resolve a layout path: crate_dir against project_root, everything else against crate_dir."""
    value = Path(layout[key])
    if value.is_absolute():
        return value
    if key == "crate_dir":
        return (project_root / value).resolve()
    return layout_path(project_root, layout, "crate_dir") / value


@dataclass(frozen=True)
class BuildRequest:
    """Every flag-derived setting for one run; created once by the CLI, never mutated."""

    targets: tuple[str, ...] = ()
    features: str = ""
    release: bool = True
    dest: Path = Path(DEFAULT_DEST)
    package_only: bool = False
    canary_sha: str | None = None
    set_version: str | None = None
    use_cargo_version: bool = False
    set_name: str | None = None
    github_packages: str | None = None
    project_root: Path = Path(".")

    @property
    def feature_list(self) -> list[str]:
        return [f for f in self.features.split(",") if f]
