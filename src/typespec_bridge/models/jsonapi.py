"""JSON:API serializer schema models.

A schema is an ordered list of serializers, each describing one resource
with its attributes and relationships.
"""

from typing import Literal

from pydantic import BaseModel, model_validator

AttributeKind = Literal["string", "number", "boolean", "date", "array", "object"]
RelationshipKind = Literal["has_one", "has_many", "belongs_to"]


class JsonApiAttribute(BaseModel):
    """A single resource attribute."""

    name: str
    type: AttributeKind
    nullable: bool | None = None
    description: str | None = None
    format: str | None = None
    enum: list[str] | None = None
    items: AttributeKind | None = None  # element kind for array attributes


class JsonApiRelationship(BaseModel):
    """A link from one resource to another resource type."""

    name: str
    type: RelationshipKind
    resource: str
    nullable: bool | None = None
    description: str | None = None
    inverse: str | None = None


class JsonApiResource(BaseModel):
    type: str
    attributes: list[JsonApiAttribute] = []
    relationships: list[JsonApiRelationship] = []
    description: str | None = None
    meta: dict | None = None

    @model_validator(mode="after")
    def _unique_member_names(self) -> "JsonApiResource":
        seen: set[str] = set()
        for member in [*self.attributes, *self.relationships]:
            if member.name in seen:
                raise ValueError(f"duplicate member '{member.name}' in resource '{self.type}'")
            seen.add(member.name)
        return self


class JsonApiSerializer(BaseModel):
    name: str
    resource: JsonApiResource
    version: str | None = None
    namespace: str | None = None
    description: str | None = None
    meta: dict | None = None


class JsonApiSchema(BaseModel):
    """Root of a JSON:API schema document."""

    serializers: list[JsonApiSerializer] = []
    title: str | None = None
    version: str | None = None
    description: str | None = None
    meta: dict | None = None
