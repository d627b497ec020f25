"""TypeSpec source parser.

Reads the subset of TypeSpec needed for round-tripping models:

  import "X";
  @service({ title: "...", version: "..." })
  namespace Name { ... }
  model Name [extends A, B] { prop?: type; ... }

Parsing is tolerant. Unrecognized lines are ignored, a new ``namespace`` or
``model`` line closes the one still open, and anything open at end of input
is flushed. Operations and decorators are not read back, so a definition
generated with operations loses them on a parse round-trip.
"""

import json
import logging
import re

from typespec_bridge.models.typespec import (
    TypeSpecDefinition,
    TypeSpecModel,
    TypeSpecNamespace,
    TypeSpecProperty,
)

logger = logging.getLogger(__name__)

IMPORT_RE = re.compile(r'import "(.+)";')
NAMESPACE_RE = re.compile(r"namespace\s+([^{]+)\s*{")
MODEL_RE = re.compile(r"model\s+([^{]+)\s*{")
STRING_LITERAL = r'"(?:[^"\\]|\\.)*"'
TITLE_RE = re.compile(r"title:\s*(" + STRING_LITERAL + ")")
VERSION_RE = re.compile(r"version:\s*(" + STRING_LITERAL + ")")

COMMENT_PREFIXES = ("//", "/*")


def parse_typespec(text: str) -> TypeSpecDefinition:
    """Parse TypeSpec source text into a TypeSpecDefinition."""
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]

    imports: list[str] = []
    namespaces: list[TypeSpecNamespace] = []
    title: str | None = None
    version: str | None = None

    namespace: TypeSpecNamespace | None = None
    model: TypeSpecModel | None = None

    i = 0
    while i < len(lines):
        line = lines[i]

        if line.startswith("import "):
            match = IMPORT_RE.search(line)
            if match:
                imports.append(match.group(1))
        elif line.startswith("@service("):
            title, version, i = _parse_service_block(lines, i)
        elif line.startswith("namespace "):
            match = NAMESPACE_RE.search(line)
            if match:
                if namespace:
                    if model:
                        namespace.models.append(model)
                        model = None
                    namespaces.append(namespace)
                namespace = TypeSpecNamespace(name=match.group(1).strip())
        elif line.startswith("model ") and namespace:
            match = MODEL_RE.search(line)
            if match:
                if model:
                    namespace.models.append(model)
                model = _open_model(match.group(1))
        elif ":" in line and model and not line.startswith(COMMENT_PREFIXES):
            model.properties.append(_parse_property(line))
        elif line == "}" and model:
            if namespace:
                namespace.models.append(model)
            model = None
        elif line == "}" and namespace:
            namespaces.append(namespace)
            namespace = None
        else:
            logger.debug("Ignoring TypeSpec line: %s", line)

        i += 1

    if model and namespace:
        namespace.models.append(model)
    if namespace:
        namespaces.append(namespace)

    return TypeSpecDefinition(
        namespaces=_merge_namespaces(namespaces),
        imports=imports,
        title=title,
        version=version,
    )


def _parse_service_block(lines: list[str], start: int) -> tuple[str | None, str | None, int]:
    """Consume an @service(...) block. Returns (title, version, index of last line)."""
    i = start
    content = ""
    depth = 0
    while i < len(lines):
        line = lines[i]
        content += line
        depth += line.count("(") - line.count(")")
        if depth == 0 and ")" in line:
            break
        i += 1

    title = TITLE_RE.search(content)
    version = VERSION_RE.search(content)
    return (
        _string_value(title),
        _string_value(version),
        min(i, len(lines) - 1),
    )


def _string_value(match: re.Match | None) -> str | None:
    if match is None:
        return None
    literal = match.group(1)
    try:
        return json.loads(literal) or None
    except json.JSONDecodeError:
        return literal[1:-1] or None


def _open_model(header: str) -> TypeSpecModel:
    name, _, bases = header.partition(" extends ")
    extends = [b.strip() for b in bases.split(",") if b.strip()]
    return TypeSpecModel(name=name.strip(), extends=extends)


def _parse_property(line: str) -> TypeSpecProperty:
    name_part, _, type_part = line.partition(":")
    name_part = name_part.strip()
    type_part = type_part.strip()
    if type_part.endswith(";"):
        type_part = type_part[:-1].rstrip()

    optional = name_part.endswith("?")
    name = name_part[:-1] if optional else name_part
    return TypeSpecProperty(name=name, type=type_part, optional=optional)


def _merge_namespaces(namespaces: list[TypeSpecNamespace]) -> list[TypeSpecNamespace]:
    """Merge reopened namespaces, keeping first-seen order."""
    merged: dict[str, TypeSpecNamespace] = {}
    for ns in namespaces:
        if ns.name in merged:
            merged[ns.name].models.extend(ns.models)
            merged[ns.name].operations.extend(ns.operations)
        else:
            merged[ns.name] = ns
    return list(merged.values())
