"""Assemble multi-target npm packages from wasm-pack builds."""

__version__ = "0.1.0"
