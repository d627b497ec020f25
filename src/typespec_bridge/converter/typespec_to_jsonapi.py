"""TypeSpec definition -> JSON:API schema converter.

Each model becomes one serializer. Properties typed as another model (or an
array of models) become relationships; everything else becomes an attribute.
"""

import logging

from typespec_bridge.converter.base import ConversionOptions, ConversionResult
from typespec_bridge.models.jsonapi import (
    JsonApiAttribute,
    JsonApiRelationship,
    JsonApiResource,
    JsonApiSchema,
    JsonApiSerializer,
)
from typespec_bridge.models.typespec import TypeSpecDefinition, TypeSpecModel, TypeSpecProperty
from typespec_bridge.naming import serializer_name, snake_case
from typespec_bridge.typemap import (
    ARRAY_SUFFIX,
    TYPESPEC_TO_JSONAPI,
    is_model_reference,
    is_record,
    is_union,
    split_nullable,
    union_members,
)

logger = logging.getLogger(__name__)


def convert_typespec_to_jsonapi(
    definition: TypeSpecDefinition,
    options: ConversionOptions | None = None,
) -> ConversionResult[JsonApiSchema]:
    """Convert a TypeSpec definition into a JSON:API schema."""
    options = options or ConversionOptions()
    warnings: list[str] = []

    serializers = [
        _convert_model(model, options, warnings)
        for namespace in definition.namespaces
        for model in namespace.models
    ]

    schema = JsonApiSchema(
        serializers=serializers,
        title=options.title or definition.title,
        version=options.version or definition.version,
        description=options.description or definition.description,
    )
    return ConversionResult[JsonApiSchema](data=schema, warnings=warnings)


def _convert_model(model: TypeSpecModel, options: ConversionOptions, warnings: list[str]) -> JsonApiSerializer:
    attributes: list[JsonApiAttribute] = []
    relationships: list[JsonApiRelationship] = []

    seen: set[str] = set()
    for prop in model.properties:
        if prop.name in seen:
            _warn(warnings, f"Skipping duplicate property '{prop.name}' in model '{model.name}'")
            continue
        seen.add(prop.name)

        if is_model_reference(prop.type):
            relationships.append(_to_relationship(prop))
        else:
            attributes.append(_to_attribute(prop, model.name, warnings))

    return JsonApiSerializer(
        name=serializer_name(model.name),
        resource=JsonApiResource(
            type=snake_case(model.name),
            attributes=attributes,
            relationships=relationships,
            description=model.description,
        ),
        description=model.description,
        namespace=options.namespace,
        version=options.version,
    )


def _to_attribute(prop: TypeSpecProperty, model: str, warnings: list[str]) -> JsonApiAttribute:
    base, nullable = split_nullable(prop.type)
    enum = None
    items = None

    if is_union(base):
        enum = union_members(base)
        kind = "string"
    elif is_record(base):
        kind = "object"
    elif base.endswith(ARRAY_SUFFIX):
        kind = "array"
        element = base[: -len(ARRAY_SUFFIX)]
        items = TYPESPEC_TO_JSONAPI.get(element)
        if items is None and not is_record(element):
            _warn(warnings, f"Array element type '{element}' of '{model}.{prop.name}' has no JSON:API kind")
    elif base in TYPESPEC_TO_JSONAPI:
        kind = TYPESPEC_TO_JSONAPI[base]
    else:
        _warn(warnings, f"Unknown type '{base}' for '{model}.{prop.name}'; using string")
        kind = "string"

    return JsonApiAttribute(
        name=prop.name,
        type=kind,
        nullable=nullable or prop.optional,
        description=prop.description,
        format=prop.format,
        enum=enum,
        items=items,
    )


def _to_relationship(prop: TypeSpecProperty) -> JsonApiRelationship:
    base, nullable = split_nullable(prop.type)
    if base.endswith(ARRAY_SUFFIX):
        kind = "has_many"
        base = base[: -len(ARRAY_SUFFIX)]
    else:
        kind = "has_one"

    return JsonApiRelationship(
        name=prop.name,
        type=kind,
        resource=snake_case(base),
        nullable=nullable or prop.optional,
        description=prop.description,
    )


def _warn(warnings: list[str], message: str) -> None:
    logger.warning(message)
    warnings.append(message)
