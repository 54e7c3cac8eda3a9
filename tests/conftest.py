"""Pytest fixtures for wasm-pkg tooling tests."""

import json
from pathlib import Path

import pytest

INCLUDE_JS = """\
export class WasmResult {
  constructor(value) {
    this.value = value;
  }
}

export class CslStyleError extends Error {}

function hostGlobal() {
  return typeof CITEPROC_RS_ZOTERO_GLOBAL === "undefined" ? null : CITEPROC_RS_ZOTERO_GLOBAL;
}
"""

BINDGEN_JS = """\
let wasm_bindgen;
(function() {
  const __exports = {};
  __exports.hostName = function() { return CITEPROC_RS_ZOTERO_GLOBAL.name; };
  wasm_bindgen = Object.assign(init, __exports);
})();
"""

MODEL_PACKAGE = {
    "name": "@citeproc-rs/wasm",
    "version": "0.0.0",
    "main": "_cjs/citeproc_rs_wasm.js",
    "browser": "_esm/citeproc_rs_wasm.js",
    "types": "_esm/citeproc_rs_wasm.d.ts",
}


class FakeWasmPack:
    """Stands in for subprocess.run: writes what wasm-pack would into --out-dir."""

    def __init__(self, fail_target: str | None = None) -> None:
        self.fail_target = fail_target
        self.calls: list[list[str]] = []

    def __call__(self, cmd, *args, **kwargs):
        self.calls.append(list(cmd))
        out_dir = Path(cmd[cmd.index("--out-dir") + 1])
        wasm_target = cmd[cmd.index("--target") + 1]
        if self.fail_target is not None and out_dir.name == self.fail_target:
            return type("R", (), {"returncode": 1})()
        out_dir.mkdir(parents=True, exist_ok=True)
        (out_dir / "citeproc_rs_wasm_bg.wasm").write_bytes(b"\0asm")
        (out_dir / "citeproc_rs_wasm.d.ts").write_text("export class WasmResult {}\n")
        (out_dir / "citeproc_rs_wasm.js").write_text(BINDGEN_JS)
        (out_dir / ".gitignore").write_text("*\n")
        if wasm_target in ("nodejs", "bundler", "web"):
            snippet = out_dir / "snippets" / "wasm-0a1b2c" / "src" / "js"
            snippet.mkdir(parents=True, exist_ok=True)
            (snippet / "include.js").write_text(INCLUDE_JS)
        return type("R", (), {"returncode": 0})()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Temporary crate dir with include.js, model-package.json and README. Returns the root."""
    (tmp_path / "Cargo.toml").write_text('[package]\nname = "wasm"\nversion = "0.1.0"\n')
    js = tmp_path / "src" / "js"
    js.mkdir(parents=True)
    (js / "include.js").write_text(INCLUDE_JS)
    scripts = tmp_path / "scripts"
    scripts.mkdir()
    (scripts / "model-package.json").write_text(json.dumps(MODEL_PACKAGE, indent=2))
    (tmp_path / "README.md").write_text("# citeproc-rs wasm\n")
    return tmp_path


@pytest.fixture
def fake_wasm_pack() -> FakeWasmPack:
    return FakeWasmPack()
