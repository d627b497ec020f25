"""OpenAPI generator: lowers a TypeSpecDefinition into an OpenAPI 3.0 document.

Models become ``components.schemas`` entries and operations become ``paths``
entries. Type expressions are lowered with ``typemap.lower_type``. A ``$ref``
to a model missing from the definition is emitted as-is; see
``validator.find_unresolved_refs`` for detecting those.
"""

from pydantic import BaseModel

from typespec_bridge.models.openapi import (
    OpenApiComponents,
    OpenApiDocument,
    OpenApiInfo,
    OpenApiMediaType,
    OpenApiOperation,
    OpenApiParameter,
    OpenApiRequestBody,
    OpenApiResponse,
    OpenApiSchema,
    OpenApiServer,
)
from typespec_bridge.models.typespec import (
    TypeSpecDefinition,
    TypeSpecModel,
    TypeSpecOperation,
    TypeSpecProperty,
    TypeSpecResponse,
)
from typespec_bridge.typemap import lower_type

DEFAULT_TITLE = "TypeSpec API"
DEFAULT_VERSION = "1.0.0"
DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_SERVER = OpenApiServer(url="https://api.example.com/v1", description="Production server")


class GeneratorOptions(BaseModel):
    servers: list[OpenApiServer] | None = None


def generate_openapi(definition: TypeSpecDefinition, options: GeneratorOptions | None = None) -> OpenApiDocument:
    """Generate an OpenAPI document from a TypeSpec definition."""
    options = options or GeneratorOptions()

    schemas: dict[str, OpenApiSchema] = {}
    paths: dict[str, dict[str, OpenApiOperation]] = {}

    for namespace in definition.namespaces:
        for model in namespace.models:
            schemas[model.name] = _model_schema(model)
        for operation in namespace.operations:
            paths.setdefault(operation.path, {})[operation.method] = _operation(operation)

    servers = options.servers if options.servers is not None else [DEFAULT_SERVER]
    return OpenApiDocument(
        info=OpenApiInfo(
            title=definition.title or DEFAULT_TITLE,
            version=definition.version or DEFAULT_VERSION,
            description=definition.description,
        ),
        servers=[server.model_copy() for server in servers],
        paths=paths,
        components=OpenApiComponents(schemas=schemas),
    )


def _model_schema(model: TypeSpecModel) -> OpenApiSchema:
    properties = {prop.name: _property_schema(prop) for prop in model.properties}
    required = [prop.name for prop in model.properties if not prop.optional]
    return OpenApiSchema(
        type="object",
        properties=properties,
        required=required or None,
        description=model.description,
    )


def _property_schema(prop: TypeSpecProperty) -> OpenApiSchema:
    schema = lower_type(prop.type)
    schema.description = prop.description
    return schema


def _operation(operation: TypeSpecOperation) -> OpenApiOperation:
    parameters = [
        OpenApiParameter(
            name=param.name,
            location=param.location,
            required=param.required,
            description=param.description,
            schema_=lower_type(param.type),
        )
        for param in operation.parameters
    ]

    request_body = None
    if operation.request_body:
        body = operation.request_body
        request_body = OpenApiRequestBody(
            description=body.description,
            required=True,
            content={body.content_type or DEFAULT_CONTENT_TYPE: OpenApiMediaType(schema_=lower_type(body.type))},
        )

    return OpenApiOperation(
        summary=operation.name,
        description=operation.description,
        operation_id=operation.name,
        parameters=parameters or None,
        request_body=request_body,
        responses=dict(_response(r) for r in operation.responses),
    )


def _response(response: TypeSpecResponse) -> tuple[str, OpenApiResponse]:
    code = str(response.status_code)
    content = None
    if response.type:
        content = {response.content_type or DEFAULT_CONTENT_TYPE: OpenApiMediaType(schema_=lower_type(response.type))}
    return code, OpenApiResponse(description=response.description or f"Response {code}", content=content)
