"""Copy each target's scratch output into dest/<suffix>; share .gitignore and README at the root."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from wasm_pkg_tooling.build.wasm_pack import ScratchArtifact
from wasm_pkg_tooling.errors import FilesystemFailure
from wasm_pkg_tooling.targets import TargetSpec

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComposedVariantFolder:
    target: TargetSpec
    path: Path


def variant_dir(dest: Path, target: TargetSpec) -> Path:
    return dest / target.output_suffix


def prepare_destination(dest: Path, targets: list[TargetSpec], package_only: bool) -> None:
    """Recreate dest from scratch, or in package-only mode just ensure variant folders exist."""
    try:
        if not package_only:
            if dest.exists():
                log.debug("removing %s", dest)
                shutil.rmtree(dest)
            dest.mkdir(parents=True)
            return
        for target in targets:
            variant_dir(dest, target).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemFailure(dest, str(e)) from e


def _copy(src: Path, dst: Path) -> None:
    if src.is_dir():
        shutil.copytree(src, dst, dirs_exist_ok=True)
    else:
        shutil.copy2(src, dst)


def compose(target: TargetSpec, artifact: ScratchArtifact, dest: Path) -> ComposedVariantFolder:
    """Copy (never move) binary, companions and snippets into dest/<suffix>. Raises FilesystemFailure."""
    out = variant_dir(dest, target)
    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemFailure(out, str(e), target.id) from e

    copies: list[tuple[Path, Path]] = []
    if artifact.snippets_dir is not None:
        copies.append((artifact.snippets_dir, out / artifact.snippets_dir.name))
    copies.extend((src, out / src.name) for src in artifact.binary_files)
    if artifact.ignore_file is not None:
        # Identical for every target; last writer wins.
        copies.append((artifact.ignore_file, dest / artifact.ignore_file.name))

    for src, dst in copies:
        log.debug("copy %s -> %s", src, dst)
        try:
            _copy(src, dst)
        except OSError as e:
            raise FilesystemFailure(src, str(e), target.id) from e
    print(f"📦 {target.id}: {len(copies)} item(s) -> {out.name}/")
    return ComposedVariantFolder(target=target, path=out)


def copy_readme(readme: Path, dest: Path) -> bool:
    """Copy README into dest if it exists. Returns True if copied."""
    if not readme.is_file():
        log.warning("README not found at %s; package will ship without one", readme)
        return False
    try:
        shutil.copy2(readme, dest / readme.name)
    except OSError as e:
        raise FilesystemFailure(readme, f"could not copy README: {e}") from e
    return True
