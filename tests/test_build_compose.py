"""Tests for wasm_pkg_tooling.build.compose (dist/ folder layout)."""

from pathlib import Path
from unittest.mock import patch

import pytest

from wasm_pkg_tooling.build import (
    ScratchArtifact,
    collect_artifact,
    compose,
    copy_readme,
    prepare_destination,
)
from wasm_pkg_tooling.errors import FilesystemFailure
from wasm_pkg_tooling.targets import resolve, resolve_targets


def _scratch(root: Path, suffix: str, *, snippets: bool) -> Path:
    d = root / "pkg-scratch" / suffix
    d.mkdir(parents=True)
    (d / "citeproc_rs_wasm_bg.wasm").write_bytes(b"\0asm")
    (d / "citeproc_rs_wasm.js").write_text("// bindgen\n")
    (d / "package.json").write_text("{}")
    (d / ".gitignore").write_text("*\n")
    if snippets:
        s = d / "snippets" / "wasm-abc" / "src" / "js"
        s.mkdir(parents=True)
        (s / "include.js").write_text("export class A {}\n")
    return d


class TestPrepareDestination:
    def test_recreates_destination(self, tmp_path: Path) -> None:
        dest = tmp_path / "dist"
        (dest / "_stale").mkdir(parents=True)
        (dest / "old.txt").write_text("x")
        prepare_destination(dest, resolve_targets(None), package_only=False)
        assert dest.is_dir()
        assert list(dest.iterdir()) == []

    def test_package_only_keeps_contents_and_creates_variant_dirs(self, tmp_path: Path) -> None:
        dest = tmp_path / "dist"
        (dest / "_cjs").mkdir(parents=True)
        (dest / "_cjs" / "citeproc_rs_wasm.js").write_text("kept")
        prepare_destination(dest, resolve_targets(["nodejs", "zotero"]), package_only=True)
        assert (dest / "_cjs" / "citeproc_rs_wasm.js").read_text() == "kept"
        assert (dest / "_zotero").is_dir()
        assert not (dest / "_esm").exists()


class TestCompose:
    def test_copies_binary_snippets_and_gitignore(self, tmp_path: Path) -> None:
        scratch = _scratch(tmp_path, "_cjs", snippets=True)
        target = resolve("nodejs")
        dest = tmp_path / "dist"
        dest.mkdir()
        folder = compose(target, collect_artifact(target, scratch, "citeproc_rs_wasm"), dest)
        assert folder.path == dest / "_cjs"
        assert (folder.path / "citeproc_rs_wasm_bg.wasm").read_bytes() == b"\0asm"
        assert (folder.path / "citeproc_rs_wasm.js").is_file()
        assert (folder.path / "snippets" / "wasm-abc" / "src" / "js" / "include.js").is_file()
        assert (dest / ".gitignore").read_text() == "*\n"
        assert not (folder.path / "package.json").exists()
        assert not (folder.path / ".gitignore").exists()

    def test_copies_not_moves(self, tmp_path: Path) -> None:
        scratch = _scratch(tmp_path, "_web", snippets=False)
        target = resolve("web")
        dest = tmp_path / "dist"
        dest.mkdir()
        compose(target, collect_artifact(target, scratch, "citeproc_rs_wasm"), dest)
        assert (scratch / "citeproc_rs_wasm_bg.wasm").is_file()
        assert (scratch / ".gitignore").is_file()

    def test_missing_snippets_is_fine(self, tmp_path: Path) -> None:
        scratch = _scratch(tmp_path, "_web", snippets=False)
        target = resolve("web")
        dest = tmp_path / "dist"
        dest.mkdir()
        folder = compose(target, collect_artifact(target, scratch, "citeproc_rs_wasm"), dest)
        assert not (folder.path / "snippets").exists()

    def test_idempotent_folder_creation(self, tmp_path: Path) -> None:
        scratch = _scratch(tmp_path, "_web", snippets=False)
        target = resolve("web")
        dest = tmp_path / "dist"
        (dest / "_web").mkdir(parents=True)
        compose(target, collect_artifact(target, scratch, "citeproc_rs_wasm"), dest)
        assert (dest / "_web" / "citeproc_rs_wasm.js").is_file()

    def test_copy_failure_raises_with_target(self, tmp_path: Path) -> None:
        target = resolve("web")
        dest = tmp_path / "dist"
        dest.mkdir()
        artifact = ScratchArtifact(
            target=target,
            directory=tmp_path,
            binary_files=(tmp_path / "missing.wasm",),
        )
        with patch("wasm_pkg_tooling.build.compose.shutil.copy2", side_effect=OSError("disk full")):
            with pytest.raises(FilesystemFailure) as exc_info:
                compose(target, artifact, dest)
        assert exc_info.value.target_id == "web"
        assert exc_info.value.path == tmp_path / "missing.wasm"


class TestCopyReadme:
    def test_copies_when_present(self, tmp_path: Path) -> None:
        readme = tmp_path / "README.md"
        readme.write_text("# hi\n")
        dest = tmp_path / "dist"
        dest.mkdir()
        assert copy_readme(readme, dest) is True
        assert (dest / "README.md").read_text() == "# hi\n"

    def test_missing_readme_is_not_fatal(self, tmp_path: Path) -> None:
        dest = tmp_path / "dist"
        dest.mkdir()
        assert copy_readme(tmp_path / "README.md", dest) is False
