"""OpenAPI 3.0 document models.

Only the subset of the OpenAPI object model that the generator emits.
``to_dict()`` returns the document shape ready for a JSON/YAML codec.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

OPENAPI_VERSION = "3.0.3"


class _OpenApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class OpenApiSchema(_OpenApiModel):
    ref: str | None = Field(default=None, alias="$ref")
    type: str | None = None
    format: str | None = None
    description: str | None = None
    enum: list[str] | None = None
    properties: dict[str, "OpenApiSchema"] | None = None
    items: "OpenApiSchema | None" = None
    required: list[str] | None = None
    nullable: bool | None = None


class OpenApiParameter(_OpenApiModel):
    name: str
    location: str = Field(alias="in")
    required: bool | None = None
    description: str | None = None
    schema_: OpenApiSchema = Field(alias="schema")


class OpenApiMediaType(_OpenApiModel):
    schema_: OpenApiSchema = Field(alias="schema")


class OpenApiRequestBody(_OpenApiModel):
    description: str | None = None
    required: bool | None = None
    content: dict[str, OpenApiMediaType]


class OpenApiResponse(_OpenApiModel):
    description: str
    content: dict[str, OpenApiMediaType] | None = None


class OpenApiOperation(_OpenApiModel):
    summary: str | None = None
    description: str | None = None
    operation_id: str | None = Field(default=None, alias="operationId")
    parameters: list[OpenApiParameter] | None = None
    request_body: OpenApiRequestBody | None = Field(default=None, alias="requestBody")
    responses: dict[str, OpenApiResponse] = {}


class OpenApiInfo(_OpenApiModel):
    title: str
    version: str
    description: str | None = None


class OpenApiServer(_OpenApiModel):
    url: str
    description: str | None = None


class OpenApiComponents(_OpenApiModel):
    schemas: dict[str, OpenApiSchema] = {}


class OpenApiDocument(_OpenApiModel):
    """An OpenAPI document: info, servers, paths and component schemas."""

    openapi: str = OPENAPI_VERSION
    info: OpenApiInfo
    servers: list[OpenApiServer] = []
    paths: dict[str, dict[str, OpenApiOperation]] = {}
    components: OpenApiComponents = Field(default_factory=OpenApiComponents)
