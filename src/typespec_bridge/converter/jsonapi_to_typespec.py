"""JSON:API schema -> TypeSpec definition converter.

Accepts either a validated JsonApiSchema or the raw mapping loaded from a
YAML/JSON document. Raw input is read defensively: a malformed serializer,
attribute or relationship is skipped (or patched with a default) and recorded
as a warning, so the conversion always yields a definition with one namespace.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from typespec_bridge.converter.base import ConversionOptions, ConversionResult
from typespec_bridge.models.jsonapi import (
    JsonApiAttribute,
    JsonApiRelationship,
    JsonApiResource,
    JsonApiSchema,
    JsonApiSerializer,
)
from typespec_bridge.models.typespec import (
    TypeSpecDecorator,
    TypeSpecDefinition,
    TypeSpecModel,
    TypeSpecNamespace,
    TypeSpecOperation,
    TypeSpecParameter,
    TypeSpecProperty,
    TypeSpecRequestBody,
    TypeSpecResponse,
)
from typespec_bridge.naming import pascal_case, serializer_name
from typespec_bridge.typemap import (
    ARRAY_SUFFIX,
    jsonapi_kind_to_typespec,
    literal_union,
    make_nullable,
    unmapped_kind,
)

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "JsonApi"
DEFAULT_TITLE = "API"
DEFAULT_VERSION = "1.0.0"
TYPESPEC_IMPORTS = ["@typespec/http", "@typespec/rest", "@typespec/openapi3"]
KIND_FIELDS = ("type", "items")


def convert_jsonapi_to_typespec(
    schema: JsonApiSchema | Mapping[str, Any],
    options: ConversionOptions | None = None,
) -> ConversionResult[TypeSpecDefinition]:
    """Convert a JSON:API schema into a TypeSpec definition."""
    options = options or ConversionOptions()
    warnings: list[str] = []

    if isinstance(schema, JsonApiSchema):
        raw_serializers: list[Any] = list(schema.serializers)
        info = {"title": schema.title, "version": schema.version, "description": schema.description}
    elif isinstance(schema, Mapping) and isinstance(schema.get("serializers"), list):
        raw_serializers = schema["serializers"]
        info = {key: _opt_str(schema.get(key)) for key in ("title", "version", "description")}
    else:
        error = "Invalid JSON:API schema: expected an object with a 'serializers' list"
        logger.error(error)
        return ConversionResult[TypeSpecDefinition](data=TypeSpecDefinition(), errors=[error])

    namespace = TypeSpecNamespace(name=options.namespace or DEFAULT_NAMESPACE)
    for index, raw in enumerate(raw_serializers):
        serializer = _read_serializer(raw, index, warnings)
        if serializer is None:
            continue
        namespace.models.append(_convert_serializer(serializer, options, warnings))
        if options.generate_operations:
            namespace.operations.extend(_crud_operations(serializer))

    definition = TypeSpecDefinition(
        namespaces=[namespace],
        imports=list(TYPESPEC_IMPORTS),
        title=options.title or info["title"] or DEFAULT_TITLE,
        version=options.version or info["version"] or DEFAULT_VERSION,
        description=options.description or info["description"],
    )
    return ConversionResult[TypeSpecDefinition](data=definition, warnings=warnings)


# -- model conversion ---------------------------------------------------------


def _convert_serializer(
    serializer: JsonApiSerializer, options: ConversionOptions, warnings: list[str]
) -> TypeSpecModel:
    resource = serializer.resource
    properties = [_convert_attribute(attr, serializer.name, warnings) for attr in resource.attributes]
    if options.include_relationships:
        properties.extend(_convert_relationship(rel) for rel in resource.relationships)

    return TypeSpecModel(
        name=pascal_case(resource.type),
        properties=properties,
        description=serializer.description or resource.description,
        decorators=[TypeSpecDecorator(name="discriminator", arguments=["type"])],
    )


def _convert_attribute(attr: JsonApiAttribute, serializer: str, warnings: list[str]) -> TypeSpecProperty:
    if attr.enum:
        type_expr = literal_union(attr.enum)
    else:
        type_expr = jsonapi_kind_to_typespec(attr.type, attr.items)
        kind = unmapped_kind(attr.type, attr.items)
        if kind:
            _warn(warnings, f"Unknown type '{kind}' for attribute '{attr.name}' in '{serializer}'; using unknown")

    nullable = bool(attr.nullable)
    if nullable:
        type_expr = make_nullable(type_expr)

    return TypeSpecProperty(
        name=attr.name,
        type=type_expr,
        optional=nullable,
        description=attr.description,
        format=attr.format,
    )


def _convert_relationship(rel: JsonApiRelationship) -> TypeSpecProperty:
    type_expr = pascal_case(rel.resource)
    if rel.type == "has_many":
        type_expr += ARRAY_SUFFIX

    nullable = bool(rel.nullable)
    if nullable:
        type_expr = make_nullable(type_expr)

    return TypeSpecProperty(
        name=rel.name,
        type=type_expr,
        optional=nullable,
        description=rel.description,
    )


def _crud_operations(serializer: JsonApiSerializer) -> list[TypeSpecOperation]:
    """Conventional list/get/create/update/delete operations for one resource."""
    resource_type = serializer.resource.type
    model = pascal_case(resource_type)
    collection = f"/{resource_type}"
    item = f"{collection}/{{id}}"
    id_param = TypeSpecParameter(
        name="id",
        location="path",
        type="string",
        required=True,
        description=f"The {resource_type} ID",
    )
    not_found = TypeSpecResponse(status_code=404, description="Resource not found")

    return [
        TypeSpecOperation(
            name=f"list{model}",
            method="get",
            path=collection,
            responses=[
                TypeSpecResponse(
                    status_code=200,
                    type=model + ARRAY_SUFFIX,
                    description=f"List of {resource_type} resources",
                ),
            ],
            description=f"List all {resource_type} resources",
        ),
        TypeSpecOperation(
            name=f"get{model}",
            method="get",
            path=item,
            parameters=[id_param],
            responses=[
                TypeSpecResponse(status_code=200, type=model, description=f"The {resource_type} resource"),
                not_found,
            ],
            description=f"Get a specific {resource_type} resource",
        ),
        TypeSpecOperation(
            name=f"create{model}",
            method="post",
            path=collection,
            request_body=TypeSpecRequestBody(
                type=model,
                description=f"The {resource_type} resource to create",
            ),
            responses=[
                TypeSpecResponse(
                    status_code=201,
                    type=model,
                    description=f"The created {resource_type} resource",
                ),
                TypeSpecResponse(status_code=400, description="Bad request"),
            ],
            description=f"Create a new {resource_type} resource",
        ),
        TypeSpecOperation(
            name=f"update{model}",
            method="patch",
            path=item,
            parameters=[id_param],
            request_body=TypeSpecRequestBody(
                type=model,
                description=f"The {resource_type} resource updates",
            ),
            responses=[
                TypeSpecResponse(
                    status_code=200,
                    type=model,
                    description=f"The updated {resource_type} resource",
                ),
                not_found,
            ],
            description=f"Update a {resource_type} resource",
        ),
        TypeSpecOperation(
            name=f"delete{model}",
            method="delete",
            path=item,
            parameters=[id_param],
            responses=[
                TypeSpecResponse(status_code=204, description="Resource deleted successfully"),
                not_found,
            ],
            description=f"Delete a {resource_type} resource",
        ),
    ]


# -- defensive reading of raw input -------------------------------------------


def _read_serializer(raw: Any, index: int, warnings: list[str]) -> JsonApiSerializer | None:
    """Build a serializer from raw input, or None when it cannot carry a model."""
    if isinstance(raw, JsonApiSerializer):
        return raw
    if not isinstance(raw, Mapping):
        _warn(warnings, f"Serializer at index {index} is not an object; skipped")
        return None

    name = _opt_str(raw.get("name"))
    label = name or f"#{index}"
    if not name:
        _warn(warnings, f"Serializer at index {index} is missing a name")

    resource = raw.get("resource")
    if not isinstance(resource, Mapping):
        _warn(warnings, f"Serializer '{label}' is missing a resource; skipped")
        return None

    resource_type = _opt_str(resource.get("type"))
    if not resource_type:
        _warn(warnings, f"Resource of serializer '{label}' is missing a type; skipped")
        return None

    if not name:
        name = serializer_name(pascal_case(resource_type))

    seen: set[str] = set()
    attributes = _read_members(
        resource, "attributes", JsonApiAttribute, name, seen, warnings, required=True
    )
    relationships = _read_members(
        resource, "relationships", JsonApiRelationship, name, seen, warnings, required=False
    )

    meta = raw.get("meta")
    resource_meta = resource.get("meta")
    return JsonApiSerializer(
        name=name,
        resource=JsonApiResource(
            type=resource_type,
            attributes=attributes,
            relationships=relationships,
            description=_opt_str(resource.get("description")),
            meta=resource_meta if isinstance(resource_meta, dict) else None,
        ),
        version=_opt_str(raw.get("version")),
        namespace=_opt_str(raw.get("namespace")),
        description=_opt_str(raw.get("description")),
        meta=meta if isinstance(meta, dict) else None,
    )


def _read_members(
    resource: Mapping[str, Any],
    key: str,
    model_cls: type[JsonApiAttribute] | type[JsonApiRelationship],
    serializer: str,
    seen: set[str],
    warnings: list[str],
    required: bool,
) -> list:
    raw_members = resource.get(key)
    if raw_members is None:
        if required:
            _warn(warnings, f"Serializer '{serializer}' has no '{key}'; using an empty list")
        return []
    if not isinstance(raw_members, list):
        _warn(warnings, f"'{key}' of serializer '{serializer}' is not a list; using an empty list")
        return []

    members = []
    kind = key[:-1]
    for i, raw in enumerate(raw_members):
        try:
            member = model_cls.model_validate(raw)
        except ValidationError as e:
            member = _with_unrecognized_kind(raw, e) if model_cls is JsonApiAttribute else None
            if member is None:
                detail = e.errors()[0]
                where = ".".join(str(loc) for loc in detail["loc"]) or "value"
                _warn(warnings, f"Skipping {kind} #{i} in '{serializer}': {where}: {detail['msg']}")
                continue
        if member.name in seen:
            _warn(warnings, f"Skipping duplicate {kind} '{member.name}' in '{serializer}'")
            continue
        seen.add(member.name)
        members.append(member)
    return members


def _with_unrecognized_kind(raw: Any, error: ValidationError) -> JsonApiAttribute | None:
    """Keep an attribute whose only defect is a kind string outside the known set.

    The raw kind is carried through unvalidated so the conversion can map it to
    ``unknown`` and report it.
    """
    details = error.errors()
    if not all(d["loc"] and d["loc"][0] in KIND_FIELDS and isinstance(d["input"], str) for d in details):
        return None
    kinds = {key: raw[key] for key in KIND_FIELDS if key in raw}
    rest = {key: value for key, value in raw.items() if key not in KIND_FIELDS}
    return JsonApiAttribute.model_validate({**rest, "type": "string"}).model_copy(update=kinds)


def _opt_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _warn(warnings: list[str], message: str) -> None:
    logger.warning(message)
    warnings.append(message)
