"""Command-line entry points (wasm-pkg build, wasm-pkg targets)."""
