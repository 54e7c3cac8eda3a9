"""Error taxonomy for package assembly. Every error is fatal to the run."""

from __future__ import annotations

from pathlib import Path


class AssembleError(Exception):
    """Base class; run() catches this at the boundary and returns 1."""


class ConfigurationError(AssembleError, ValueError):
    """Unknown flag, unknown target id, or malformed --github-packages value."""


class ToolchainFailure(AssembleError, RuntimeError):
    """wasm-pack or cargo exited non-zero (or is not installed)."""

    def __init__(self, target_id: str, features: str, detail: str = "") -> None:
        self.target_id = target_id
        self.features = features
        self.detail = detail
        msg = f'building target {target_id} --features "{features}"'
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class FilesystemFailure(AssembleError, OSError):
    """Copy or write failure while composing, patching, or writing package.json."""

    def __init__(self, path: Path | str, detail: str = "", target_id: str | None = None) -> None:
        self.path = Path(path)
        self.detail = detail
        self.target_id = target_id
        prefix = f"target {target_id}: " if target_id else ""
        msg = f"{prefix}{self.path}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)

    def __str__(self) -> str:
        return self.args[0]
