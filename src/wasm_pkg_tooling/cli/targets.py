"""`wasm-pkg targets` — list the target catalog."""

from __future__ import annotations

import sys

from wasm_pkg_tooling.targets import TARGET_CATALOG


def run_targets_argv(argv: list[str] | None = None) -> None:
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    if argv:
        print(f"Error: Unknown argument: {argv[0]}", file=sys.stderr)
        print("Usage: wasm-pkg targets", file=sys.stderr)
        sys.exit(1)
    for t in TARGET_CATALOG:
        features = ",".join(t.extra_features) or "-"
        entry = "" if t.manifest_entry else "  (no package.json entry)"
        print(
            f"{t.id:<12} {t.output_suffix:<12} --target {t.wasm_pack_target:<11} "
            f"features={features:<11} glue={t.glue_recipe.value}{entry}"
        )
    sys.exit(0)
