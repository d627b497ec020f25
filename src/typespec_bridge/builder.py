"""Programmatic construction and structural checks for JSON:API serializers."""

from collections.abc import Mapping
from typing import Any

from typespec_bridge.models.jsonapi import (
    JsonApiAttribute,
    JsonApiRelationship,
    JsonApiResource,
    JsonApiSerializer,
)


class JsonApiSerializerBuilder:
    """Chainable builder for a single JsonApiSerializer."""

    def __init__(self, name: str, resource_type: str):
        self.name = name
        self.resource_type = resource_type
        self.attributes: list[JsonApiAttribute] = []
        self.relationships: list[JsonApiRelationship] = []
        self.description: str | None = None
        self.namespace: str | None = None
        self.version: str | None = None

    def add_attribute(self, attribute: JsonApiAttribute) -> "JsonApiSerializerBuilder":
        self.attributes.append(attribute)
        return self

    def add_relationship(self, relationship: JsonApiRelationship) -> "JsonApiSerializerBuilder":
        self.relationships.append(relationship)
        return self

    def set_description(self, description: str) -> "JsonApiSerializerBuilder":
        self.description = description
        return self

    def set_namespace(self, namespace: str) -> "JsonApiSerializerBuilder":
        self.namespace = namespace
        return self

    def set_version(self, version: str) -> "JsonApiSerializerBuilder":
        self.version = version
        return self

    def build(self) -> JsonApiSerializer:
        """Build the serializer.

        Raises ValueError when the name or resource type is empty, or when
        attribute/relationship names collide.
        """
        if not self.name or not self.resource_type:
            raise ValueError("Serializer name and resource type are required")
        return JsonApiSerializer(
            name=self.name,
            resource=JsonApiResource(
                type=self.resource_type,
                attributes=list(self.attributes),
                relationships=list(self.relationships),
            ),
            description=self.description,
            namespace=self.namespace,
            version=self.version,
        )


def validate_serializer(serializer: JsonApiSerializer | Mapping[str, Any]) -> list[str]:
    """Check a serializer's structure. Returns a list of error messages."""
    if isinstance(serializer, JsonApiSerializer):
        serializer = serializer.model_dump()

    errors = []
    if not serializer.get("name"):
        errors.append("Serializer name is required")

    resource = serializer.get("resource")
    if not isinstance(resource, Mapping):
        errors.append("Serializer resource is required")
        return errors

    if not resource.get("type"):
        errors.append("Resource type is required")

    names: set[str] = set()
    for key, label in (("attributes", "Attribute"), ("relationships", "Relationship")):
        for index, member in enumerate(resource.get(key) or []):
            if not isinstance(member, Mapping):
                errors.append(f"{label} at index {index} is not an object")
                continue
            name = member.get("name")
            if not name:
                errors.append(f"{label} at index {index} is missing name")
            elif name in names:
                errors.append(f"{label} '{name}' duplicates another member name")
            else:
                names.add(name)
            if not member.get("type"):
                errors.append(f"{label} '{name}' is missing type")
            if key == "relationships" and not member.get("resource"):
                errors.append(f"{label} '{name}' is missing resource")

    return errors
