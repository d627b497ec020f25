"""CLI entry point for typespec-bridge."""

import logging
from pathlib import Path

import click

from typespec_bridge.config import get_settings
from typespec_bridge.converter.base import ConversionOptions, ConversionResult
from typespec_bridge.converter.jsonapi_to_typespec import convert_jsonapi_to_typespec
from typespec_bridge.converter.typespec_to_jsonapi import convert_typespec_to_jsonapi
from typespec_bridge.generator.openapi import GeneratorOptions, generate_openapi
from typespec_bridge.generator.typespec import generate_typespec
from typespec_bridge.generator.validator import find_unresolved_refs, validate_files
from typespec_bridge.loader import (
    LoadError,
    dump_openapi_string,
    dumps,
    is_yaml_file,
    load_document,
    load_typespec_file,
)
from typespec_bridge.models.openapi import OpenApiServer
from typespec_bridge.models.typespec import TypeSpecDefinition
from typespec_bridge.parser.detect import detect_format

FORMATS = ["auto", "jsonapi", "typespec", "openapi"]


def _report(result: ConversionResult) -> None:
    """Echo warnings and errors; abort when the result is not usable."""
    for warning in result.warnings:
        click.echo(f"  warning: {warning}", err=True)
    for error in result.errors:
        click.echo(f"  error: {error}", err=True)
    if not result.ok:
        raise click.ClickException(f"Conversion failed with {len(result.errors)} error(s).")


def _load_definition(doc_path: Path, fmt: str, options: ConversionOptions) -> TypeSpecDefinition:
    """Load a document of any supported input format as a TypeSpec definition."""
    if fmt == "auto":
        fmt = detect_format(doc_path)

    if fmt == "openapi":
        raise click.UsageError("OpenAPI documents can only be produced, not converted from.")

    if fmt == "typespec":
        definition = load_typespec_file(doc_path)
        click.echo(f"Parsed {sum(len(ns.models) for ns in definition.namespaces)} models.")
        return definition

    try:
        raw = load_document(doc_path)
    except LoadError as e:
        raise click.ClickException(str(e)) from e

    result = convert_jsonapi_to_typespec(raw, options)
    _report(result)
    click.echo(f"Converted {sum(len(ns.models) for ns in result.data.namespaces)} serializers.")
    return result.data


def _write_output(output: Path, content: str) -> None:
    errors = validate_files({output.name: content})
    for fname, err in errors.items():
        click.echo(f"  validation error in {fname}: {err}", err=True)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    click.echo(f"Saved {output}")


def conversion_options(func):
    """Shared JSON:API conversion options."""
    func = click.option("--no-relationships", is_flag=True, help="Omit relationship properties.")(func)
    func = click.option("--operations", is_flag=True, help="Generate CRUD operations per resource.")(func)
    func = click.option("--title", default=None, help="Service title (defaults to the schema title).")(func)
    func = click.option("--namespace", default=None, help="TypeSpec namespace for converted models.")(func)
    func = click.option(
        "--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Input document format."
    )(func)
    return func


def _options(namespace: str | None, title: str | None, operations: bool, no_relationships: bool) -> ConversionOptions:
    settings = get_settings()
    return ConversionOptions(
        namespace=namespace or settings.namespace,
        title=title or settings.title,
        generate_operations=operations,
        include_relationships=not no_relationships,
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """typespec-bridge: translate API shapes between JSON:API, TypeSpec and OpenAPI."""
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output .tsp file path.")
@conversion_options
def to_typespec(
    doc_path: Path,
    output: Path,
    fmt: str,
    namespace: str | None,
    title: str | None,
    operations: bool,
    no_relationships: bool,
):
    """Convert a JSON:API schema (or TypeSpec source) to TypeSpec source."""
    click.echo(f"Reading {doc_path} (format: {fmt})...")
    definition = _load_definition(doc_path, fmt, _options(namespace, title, operations, no_relationships))
    _write_output(output, generate_typespec(definition) + "\n")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output .json/.yaml file path.")
@click.option("--server", "servers", multiple=True, help="Server URL (repeatable).")
@conversion_options
def to_openapi(
    doc_path: Path,
    output: Path,
    servers: tuple[str, ...],
    fmt: str,
    namespace: str | None,
    title: str | None,
    operations: bool,
    no_relationships: bool,
):
    """Generate an OpenAPI document from a TypeSpec source or JSON:API schema."""
    click.echo(f"Reading {doc_path} (format: {fmt})...")
    definition = _load_definition(doc_path, fmt, _options(namespace, title, operations, no_relationships))

    settings = get_settings()
    if servers:
        server_list = [OpenApiServer(url=url) for url in servers]
    else:
        server_list = [OpenApiServer(url=settings.server_url, description=settings.server_description)]
    document = generate_openapi(definition, GeneratorOptions(servers=server_list))

    for ref in find_unresolved_refs(document):
        click.echo(f"  warning: unresolved reference {ref}", err=True)

    _write_output(output, dump_openapi_string(document, "yaml" if is_yaml_file(output) else "json"))


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output .json/.yaml file path.")
@click.option("--namespace", default=None, help="Namespace recorded on each serializer.")
def to_jsonapi(doc_path: Path, output: Path, namespace: str | None):
    """Convert TypeSpec source to a JSON:API schema."""
    click.echo(f"Reading {doc_path}...")
    definition = load_typespec_file(doc_path)

    result = convert_typespec_to_jsonapi(definition, ConversionOptions(namespace=namespace))
    _report(result)
    click.echo(f"Converted {len(result.data.serializers)} models.")

    data = result.data.model_dump(exclude_none=True)
    _write_output(output, dumps(data, "yaml" if is_yaml_file(output) else "json"))
