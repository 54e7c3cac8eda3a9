"""Pure text transforms over wasm-bindgen loader glue (include.js and the bindgen .js)."""

from __future__ import annotations

import re

from wasm_pkg_tooling.errors import ConfigurationError

_EXPORT_CLASS = re.compile(r"\bexport\s+class\b")
_CLASS_DECL = re.compile(r"^(?:export\s+)?class\s+([A-Za-z_$][\w$]*)", re.MULTILINE)
_IDENT = re.compile(r"^[A-Za-z_$][\w$]*$")


def strip_export(text: str) -> str:
    """`export class X` -> `class X`, so the file loads without a module system. Idempotent."""
    return _EXPORT_CLASS.sub("class", text)


def validate_namespace(namespace: str) -> list[str]:
    """Split a dotted JS property path (e.g. Zotero.CiteprocRs). Raises ConfigurationError if invalid."""
    parts = namespace.split(".") if namespace else []
    if not parts or not all(_IDENT.match(p) for p in parts):
        msg = f"Invalid host namespace {namespace!r}: expected a dotted JS identifier path"
        raise ConfigurationError(msg)
    return parts


def substitute_namespace(text: str, placeholder: str, namespace: str) -> str:
    """Replace every occurrence of placeholder with the host namespace path."""
    validate_namespace(namespace)
    if not placeholder:
        msg = "Host placeholder token must not be empty"
        raise ConfigurationError(msg)
    return text.replace(placeholder, namespace)


def declared_classes(text: str) -> list[str]:
    """Top-level class names, in declaration order."""
    seen: list[str] = []
    for name in _CLASS_DECL.findall(text):
        if name not in seen:
            seen.append(name)
    return seen


def module_export_trailer(text: str) -> str:
    """`module.exports = { A, B };` for the classes text declares; empty if none."""
    names = declared_classes(text)
    if not names:
        return ""
    return f"module.exports = {{ {', '.join(names)} }};\n"


def host_binding_trailer(namespace: str, exports_expr: str = "module.exports") -> str:
    """Copy exports onto the host namespace, only if every segment of it exists at load time."""
    parts = validate_namespace(namespace)
    checked = [".".join(parts[: i + 1]) for i in range(len(parts))]
    if exports_expr.startswith("module."):
        checked.insert(0, "module")
    guards = " && ".join(f'typeof {name} !== "undefined"' for name in checked)
    return f"if ({guards}) {{\n  Object.assign({namespace}, {exports_expr})\n}}\n"


def append_once(text: str, trailer: str) -> str:
    """Append trailer on its own line unless text already contains it."""
    body = trailer.strip()
    if not body or body in text:
        return text
    if text and not text.endswith("\n"):
        text += "\n"
    return text + body + "\n"
