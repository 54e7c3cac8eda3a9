"""package.json field patches and the precedence policy that selects them.

Version: --canary-sha > --set-version > --cargo-version > template.
Name: --github-packages (also sets publishConfig and repository) > --set-name > template.
At most one patch per field is ever selected.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from wasm_pkg_tooling.config import DEFAULT_LAYOUT, BuildRequest
from wasm_pkg_tooling.errors import ConfigurationError

Manifest = dict[str, Any]


@dataclass(frozen=True)
class ManifestPatch:
    """One field assignment: args are the bound inputs, apply returns a new manifest."""

    key: str
    args: dict[str, str]
    apply: Callable[[Manifest, dict[str, str]], Manifest] = field(repr=False)

    def __call__(self, manifest: Manifest) -> Manifest:
        return self.apply(manifest, self.args)

    def describe(self) -> str:
        bound = " ".join(f"{k}={v}" for k, v in self.args.items())
        return f".{self.key} <- {bound}" if bound else f".{self.key}"


@dataclass(frozen=True)
class RegistryScopedName:
    scope: str
    repo: str
    package: str

    @property
    def npm_name(self) -> str:
        return f"@{self.scope}/{self.package}"

    @property
    def repo_path(self) -> str:
        return f"{self.scope}/{self.repo}"

    @property
    def directory(self) -> str:
        return f"packages/{self.package}"


def parse_registry_scoped_name(value: str) -> RegistryScopedName:
    """Parse `[@]scope/repo/package-name`. Raises ConfigurationError unless exactly three non-empty parts."""
    parts = value.strip().lstrip("@").split("/")
    if len(parts) != 3 or not all(p.strip() for p in parts):
        msg = f"--github-packages expects @scope/repo/pkg-name, got {value!r}"
        raise ConfigurationError(msg)
    scope, repo, package = (p.strip() for p in parts)
    return RegistryScopedName(scope=scope, repo=repo, package=package)


def strip_version_prefix(version: str) -> str:
    """Drop one leading 'v' (v1.2.3 -> 1.2.3)."""
    return version[1:] if version.startswith("v") else version


def canary_version(sha: str) -> str:
    return f"v0.0.0-canary-{sha}"


def _set_field(manifest: Manifest, key: str, value: Any) -> Manifest:
    out = copy.deepcopy(manifest)
    out[key] = value
    return out


def version_patch(version: str) -> ManifestPatch:
    return ManifestPatch(
        "version", {"version": version}, lambda m, a: _set_field(m, "version", a["version"])
    )


def name_patch(name: str) -> ManifestPatch:
    return ManifestPatch("name", {"name": name}, lambda m, a: _set_field(m, "name", a["name"]))


def publish_config_patch(registry_url: str) -> ManifestPatch:
    return ManifestPatch(
        "publishConfig",
        {"registry": registry_url},
        lambda m, a: _set_field(m, "publishConfig", {"registry": a["registry"]}),
    )


def repository_patch(url: str, directory: str) -> ManifestPatch:
    return ManifestPatch(
        "repository",
        {"url": url, "directory": directory},
        lambda m, a: _set_field(
            m, "repository", {"type": "git", "url": a["url"], "directory": a["directory"]}
        ),
    )


def registry_patches(
    scoped: RegistryScopedName,
    registry_url: str = DEFAULT_LAYOUT["registry_url"],
    git_host: str = DEFAULT_LAYOUT["git_host"],
) -> list[ManifestPatch]:
    """publishConfig, repository and name, all derived from one scope/repo/pkg value."""
    return [
        publish_config_patch(registry_url),
        repository_patch(f"ssh://{git_host}/{scoped.repo_path}.git", scoped.directory),
        name_patch(scoped.npm_name),
    ]


def select_patches(
    request: BuildRequest,
    derived_version: Callable[[], str] | None = None,
    layout: dict[str, str] | None = None,
) -> list[ManifestPatch]:
    """Pick patches by precedence. derived_version is only called if nothing outranks it.

    Raises ConfigurationError for a malformed --github-packages before building any patch.
    """
    layout = layout or DEFAULT_LAYOUT
    scoped = (
        parse_registry_scoped_name(request.github_packages) if request.github_packages else None
    )

    patches: list[ManifestPatch] = []
    if request.canary_sha:
        patches.append(version_patch(canary_version(request.canary_sha)))
    elif request.set_version:
        patches.append(version_patch(strip_version_prefix(request.set_version)))
    elif request.use_cargo_version:
        if derived_version is None:
            msg = "--cargo-version requested but no way to query the crate version"
            raise ConfigurationError(msg)
        patches.append(version_patch(derived_version()))

    if scoped is not None:
        patches.extend(registry_patches(scoped, layout["registry_url"], layout["git_host"]))
    elif request.set_name:
        patches.append(name_patch(request.set_name))
    return patches
