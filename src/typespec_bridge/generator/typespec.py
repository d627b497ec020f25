"""TypeSpec source generator: renders a TypeSpecDefinition as TypeSpec text."""

import json

from typespec_bridge.models.typespec import (
    TypeSpecDecorator,
    TypeSpecDefinition,
    TypeSpecModel,
    TypeSpecNamespace,
    TypeSpecOperation,
    TypeSpecProperty,
)

INDENT = "  "


def generate_typespec(definition: TypeSpecDefinition) -> str:
    """Render a TypeSpec definition as source text."""
    lines: list[str] = []

    if definition.imports:
        lines.extend(f'import "{imp}";' for imp in definition.imports)
        lines.append("")

    if definition.title:
        lines.append("@service({")
        lines.append(f"{INDENT}title: {_string(definition.title)},")
        if definition.version:
            lines.append(f"{INDENT}version: {_string(definition.version)}")
        lines.append("})")

    for namespace in definition.namespaces:
        lines.extend(_render_namespace(namespace))
        lines.append("")

    return "\n".join(lines).strip()


def _render_namespace(namespace: TypeSpecNamespace) -> list[str]:
    lines: list[str] = []

    if namespace.imports:
        lines.extend(f'import "{imp}";' for imp in namespace.imports)
        lines.append("")

    lines.append(f"namespace {namespace.name} {{")
    if namespace.description:
        lines.append(f"{INDENT}/** {namespace.description} */")

    for model in namespace.models:
        lines.extend(_render_model(model, 1))
        lines.append("")

    for operation in namespace.operations:
        lines.extend(_render_operation(operation, 1))
        lines.append("")

    lines.append("}")
    return lines


def _render_model(model: TypeSpecModel, depth: int) -> list[str]:
    pad = INDENT * depth
    lines: list[str] = []

    if model.description:
        lines.append(f"{pad}/** {model.description} */")
    lines.extend(f"{pad}{_render_decorator(d)}" for d in model.decorators)

    extends = f" extends {', '.join(model.extends)}" if model.extends else ""
    lines.append(f"{pad}model {model.name}{extends} {{")
    for prop in model.properties:
        lines.extend(_render_property(prop, depth + 1))
    lines.append(f"{pad}}}")
    return lines


def _render_property(prop: TypeSpecProperty, depth: int) -> list[str]:
    pad = INDENT * depth
    lines: list[str] = []
    if prop.description:
        lines.append(f"{pad}/** {prop.description} */")
    optional = "?" if prop.optional else ""
    lines.append(f"{pad}{prop.name}{optional}: {prop.type};")
    return lines


def _render_operation(operation: TypeSpecOperation, depth: int) -> list[str]:
    pad = INDENT * depth
    lines: list[str] = []

    if operation.description:
        lines.append(f"{pad}/** {operation.description} */")
    lines.extend(f"{pad}{_render_decorator(d)}" for d in operation.decorators)

    lines.append(f"{pad}@route({_string(operation.path)})")
    lines.append(f"{pad}@{operation.method}")

    params = ", ".join(f"{p.name}: {p.type}" for p in operation.parameters)
    ok = next((r for r in operation.responses if r.status_code == 200), None)
    response_type = ok.type if ok and ok.type else "void"
    lines.append(f"{pad}op {operation.name}({params}): {response_type};")
    return lines


def _render_decorator(decorator: TypeSpecDecorator) -> str:
    if not decorator.arguments:
        return f"@{decorator.name}"
    args = ", ".join(_string(arg) for arg in decorator.arguments)
    return f"@{decorator.name}({args})"


def _string(value: str) -> str:
    """Quote a value as a TypeSpec string literal."""
    return json.dumps(value, ensure_ascii=False)
