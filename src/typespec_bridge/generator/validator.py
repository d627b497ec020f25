"""Structural checks for generated TypeSpec and OpenAPI output."""

import json
from typing import Any

import yaml

from typespec_bridge.models.openapi import OpenApiDocument
from typespec_bridge.typemap import SCHEMA_REF_PREFIX


def validate_typespec(text: str) -> list[str]:
    """Check TypeSpec source for emptiness and brace balance.

    Returns a list of error messages.
    """
    if not text.strip():
        return ["TypeSpec source is empty"]

    depth = 0
    for line in text.splitlines():
        line = line.strip()
        if line.startswith("//"):
            continue
        depth += line.count("{") - line.count("}")

    if depth > 0:
        return [f"Unbalanced braces: {depth} missing closing brace(s)"]
    if depth < 0:
        return [f"Unbalanced braces: {-depth} extra closing brace(s)"]
    return []


def find_unresolved_refs(document: OpenApiDocument | dict) -> list[str]:
    """Return $ref targets that are missing from components.schemas."""
    data = document.to_dict() if isinstance(document, OpenApiDocument) else document
    known = set(data.get("components", {}).get("schemas", {}))

    missing: list[str] = []
    for ref in _iter_refs(data):
        name = ref[len(SCHEMA_REF_PREFIX):] if ref.startswith(SCHEMA_REF_PREFIX) else ref
        if name not in known and ref not in missing:
            missing.append(ref)
    return missing


def _iter_refs(node: Any):
    if isinstance(node, dict):
        for key, value in node.items():
            if key == "$ref" and isinstance(value, str):
                yield value
            else:
                yield from _iter_refs(value)
    elif isinstance(node, list):
        for item in node:
            yield from _iter_refs(item)


def validate_files(files: dict[str, str]) -> dict[str, str]:
    """Run syntax checks on generated files.

    Returns dict of {filename: error_message} for files with errors.
    """
    errors = {}
    for filename, content in files.items():
        if filename.endswith(".tsp"):
            problems = validate_typespec(content)
            if problems:
                errors[filename] = "; ".join(problems)
        elif filename.endswith((".yaml", ".yml")):
            try:
                yaml.safe_load(content)
            except yaml.YAMLError as e:
                errors[filename] = f"YAMLError: {e}"
        elif filename.endswith(".json"):
            try:
                json.loads(content)
            except json.JSONDecodeError as e:
                errors[filename] = f"JSONDecodeError: {e.msg} (line {e.lineno})"
    return errors
