"""Load and save the three schema representations.

File format follows the extension: ``.yml``/``.yaml`` use YAML, anything else
JSON. TypeSpec files are plain text. Codec failures raise LoadError.
"""

import json
from pathlib import Path
from typing import Any

import yaml

from typespec_bridge.generator.typespec import generate_typespec
from typespec_bridge.models.jsonapi import JsonApiSchema
from typespec_bridge.models.openapi import OpenApiDocument
from typespec_bridge.models.typespec import TypeSpecDefinition
from typespec_bridge.parser.jsonapi import parse_jsonapi
from typespec_bridge.parser.typespec import parse_typespec

YAML_SUFFIXES = (".yml", ".yaml")


class LoadError(ValueError):
    """A schema file or string could not be decoded or validated."""


def is_yaml_file(path: Path) -> bool:
    return path.suffix.lower() in YAML_SUFFIXES


def loads(text: str, fmt: str = "yaml") -> Any:
    """Decode YAML or JSON text into plain Python data."""
    try:
        if fmt == "json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise LoadError(f"Failed to parse {fmt.upper()} content: {e}") from e


def dumps(data: Any, fmt: str = "yaml") -> str:
    """Encode plain Python data as YAML or JSON, keeping key order."""
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)


def load_document(path: Path) -> Any:
    """Read a YAML or JSON file into plain Python data."""
    text = path.read_text(encoding="utf-8")
    try:
        return loads(text, "yaml" if is_yaml_file(path) else "json")
    except LoadError as e:
        raise LoadError(f'Failed to load "{path}": {e}') from e


def save_document(data: Any, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps(data, "yaml" if is_yaml_file(path) else "json"), encoding="utf-8")


# -- JSON:API -----------------------------------------------------------------


def load_jsonapi_string(text: str) -> JsonApiSchema:
    """Parse a YAML (or JSON) string into a validated JsonApiSchema."""
    data = loads(text, "yaml")
    try:
        return parse_jsonapi(data)
    except ValueError as e:
        raise LoadError(str(e)) from e


def dump_jsonapi_string(schema: JsonApiSchema) -> str:
    return dumps(schema.model_dump(exclude_none=True), "yaml")


def load_jsonapi_file(path: Path) -> JsonApiSchema:
    data = load_document(path)
    try:
        return parse_jsonapi(data)
    except ValueError as e:
        raise LoadError(f'Invalid JSON:API schema in "{path}": {e}') from e


def save_jsonapi_file(schema: JsonApiSchema, path: Path) -> None:
    save_document(schema.model_dump(exclude_none=True), path)


# -- OpenAPI ------------------------------------------------------------------


def dump_openapi_string(document: OpenApiDocument, fmt: str = "json") -> str:
    return dumps(document.to_dict(), fmt)


def save_openapi_file(document: OpenApiDocument, path: Path) -> None:
    save_document(document.to_dict(), path)


# -- TypeSpec -----------------------------------------------------------------


def load_typespec_file(path: Path) -> TypeSpecDefinition:
    return parse_typespec(path.read_text(encoding="utf-8"))


def save_typespec_file(definition: TypeSpecDefinition, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_typespec(definition) + "\n", encoding="utf-8")
