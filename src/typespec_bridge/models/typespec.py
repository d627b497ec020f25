"""TypeSpec definition models.

The hub representation: JSON:API schemas convert into it and OpenAPI
documents are generated from it. Property and parameter types are kept as
raw type-expression strings (``string``, ``Users[]``, ``float64 | null``,
``"a" | "b"``, ``Users``).
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

HttpMethod = Literal["get", "post", "put", "patch", "delete"]


class TypeSpecDecorator(BaseModel):
    name: str
    arguments: list = []


class TypeSpecProperty(BaseModel):
    name: str
    type: str
    optional: bool = False
    description: str | None = None
    format: str | None = None


class TypeSpecModel(BaseModel):
    name: str
    properties: list[TypeSpecProperty] = []
    extends: list[str] = []
    description: str | None = None
    decorators: list[TypeSpecDecorator] = []


class TypeSpecParameter(BaseModel):
    """An operation parameter; ``location`` is serialized as ``in``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    location: Literal["path", "query", "header"] = Field(alias="in")
    type: str
    required: bool = False
    description: str | None = None


class TypeSpecRequestBody(BaseModel):
    type: str
    content_type: str | None = None
    description: str | None = None


class TypeSpecResponse(BaseModel):
    status_code: int | Literal["default"]
    type: str | None = None
    content_type: str | None = None
    description: str | None = None


class TypeSpecOperation(BaseModel):
    name: str
    method: HttpMethod
    path: str
    parameters: list[TypeSpecParameter] = []
    request_body: TypeSpecRequestBody | None = None
    responses: list[TypeSpecResponse] = []
    description: str | None = None
    decorators: list[TypeSpecDecorator] = []


class TypeSpecNamespace(BaseModel):
    name: str
    models: list[TypeSpecModel] = []
    operations: list[TypeSpecOperation] = []
    imports: list[str] = []
    description: str | None = None


class TypeSpecDefinition(BaseModel):
    """Root of a TypeSpec definition: imports, service info and namespaces."""

    namespaces: list[TypeSpecNamespace] = []
    imports: list[str] = []
    title: str | None = None
    version: str | None = None
    description: str | None = None

    @model_validator(mode="after")
    def _unique_namespace_names(self) -> "TypeSpecDefinition":
        names = [ns.name for ns in self.namespaces]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate namespace names: {', '.join(duplicates)}")
        return self
