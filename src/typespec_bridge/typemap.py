"""Type-mapping rules shared by every edge of the translation graph.

TypeSpec type expressions are plain strings drawn from a small grammar:

  primitive        string, int32, float64, utcDateTime, ...
  array            T[]
  nullable         T | null
  literal union    "a" | "b"
  record           Record<...>
  reference        any other bare identifier (a model name)

Known simplification: every non-null union lowers to a string enum, so a union
of model references is indistinguishable from an enum of literals on the
OpenAPI side.
"""

from typing import Any

from typespec_bridge.models.openapi import OpenApiSchema

NULL_SUFFIX = " | null"
UNION_SEPARATOR = " | "
ARRAY_SUFFIX = "[]"
SCHEMA_REF_PREFIX = "#/components/schemas/"

RECORD_TYPE = "Record<string, unknown>"
DEFAULT_ARRAY_ELEMENT = "string"
UNKNOWN_TYPE = "unknown"

# JSON:API attribute kind -> TypeSpec primitive
JSONAPI_TO_TYPESPEC: dict[str, str] = {
    "string": "string",
    "number": "float64",
    "boolean": "boolean",
    "date": "utcDateTime",
    "object": RECORD_TYPE,
}

# TypeSpec primitive -> OpenAPI schema fields
TYPESPEC_TO_OPENAPI: dict[str, dict[str, Any]] = {
    "string": {"type": "string"},
    "int32": {"type": "integer", "format": "int32"},
    "int64": {"type": "integer", "format": "int64"},
    "float32": {"type": "number", "format": "float"},
    "float64": {"type": "number", "format": "double"},
    "boolean": {"type": "boolean"},
    "utcDateTime": {"type": "string", "format": "date-time"},
    "plainDate": {"type": "string", "format": "date"},
    "plainTime": {"type": "string", "format": "time"},
    "bytes": {"type": "string", "format": "byte"},
    "url": {"type": "string", "format": "uri"},
    "unknown": {},
}

# TypeSpec primitive -> JSON:API attribute kind
TYPESPEC_TO_JSONAPI: dict[str, str] = {
    "string": "string",
    "int32": "number",
    "int64": "number",
    "float32": "number",
    "float64": "number",
    "boolean": "boolean",
    "utcDateTime": "date",
    "plainDate": "date",
    "plainTime": "string",
    "bytes": "string",
    "url": "string",
}


def jsonapi_kind_to_typespec(kind: str, items: str | None = None) -> str:
    """Map a JSON:API attribute kind to a TypeSpec type expression.

    Kinds outside the table (including nested arrays) map to ``unknown``.
    """
    if kind == "array":
        element = JSONAPI_TO_TYPESPEC.get(items, UNKNOWN_TYPE) if items else DEFAULT_ARRAY_ELEMENT
        return element + ARRAY_SUFFIX
    return JSONAPI_TO_TYPESPEC.get(kind, UNKNOWN_TYPE)


def unmapped_kind(kind: str, items: str | None = None) -> str | None:
    """Return the kind (or array element kind) missing from the table, if any."""
    target = items if kind == "array" else kind
    if target and target not in JSONAPI_TO_TYPESPEC:
        return target
    return None


def literal_union(values: list[str]) -> str:
    """Render enum values as a union of double-quoted literals."""
    return UNION_SEPARATOR.join(f'"{v}"' for v in values)


def make_nullable(type_expr: str) -> str:
    return type_expr + NULL_SUFFIX


def split_nullable(type_expr: str) -> tuple[str, bool]:
    """Strip a trailing ``| null``. Returns (remaining type, nullable)."""
    type_expr = type_expr.strip()
    if type_expr.endswith(NULL_SUFFIX):
        return type_expr[: -len(NULL_SUFFIX)].strip(), True
    return type_expr, False


def union_members(type_expr: str) -> list[str]:
    """Split a union into its alternatives with surrounding quotes removed."""
    return [t.strip().strip('"') for t in type_expr.split(UNION_SEPARATOR)]


def is_union(type_expr: str) -> bool:
    return UNION_SEPARATOR in type_expr


def is_record(type_expr: str) -> bool:
    return type_expr.startswith("Record<")


def is_model_reference(type_expr: str) -> bool:
    """True when the expression (after null/array stripping) names a model."""
    base, _ = split_nullable(type_expr)
    if base.endswith(ARRAY_SUFFIX):
        base = base[: -len(ARRAY_SUFFIX)]
    if not base or is_union(base) or is_record(base):
        return False
    if base in TYPESPEC_TO_OPENAPI or base in TYPESPEC_TO_JSONAPI:
        return False
    return base[0].isupper() and base.replace("_", "").isalnum()


def schema_ref(model_name: str) -> str:
    return SCHEMA_REF_PREFIX + model_name


def lower_type(type_expr: str) -> OpenApiSchema:
    """Lower a TypeSpec type expression into an OpenAPI schema."""
    base, nullable = split_nullable(type_expr)
    nullable_flag = True if nullable else None

    if is_union(base):
        return OpenApiSchema(type="string", enum=union_members(base), nullable=nullable_flag)

    if base.endswith(ARRAY_SUFFIX):
        items = lower_type(base[: -len(ARRAY_SUFFIX)])
        return OpenApiSchema(type="array", items=items, nullable=nullable_flag)

    schema = lower_primitive(base)
    if nullable:
        schema.nullable = True
    return schema


def lower_primitive(name: str) -> OpenApiSchema:
    """Resolve a single type name via the primitive table, Record or $ref."""
    if name in TYPESPEC_TO_OPENAPI:
        return OpenApiSchema(**TYPESPEC_TO_OPENAPI[name])
    if is_record(name):
        return OpenApiSchema(type="object")
    return OpenApiSchema(ref=schema_ref(name))
