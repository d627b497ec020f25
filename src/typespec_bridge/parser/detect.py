"""Auto-detect the representation stored in a schema file."""

from pathlib import Path

import yaml

TYPESPEC_SUFFIXES = (".tsp",)


def detect_format(file_path: Path) -> str:
    """Detect the representation of a schema file.

    Returns: 'typespec', 'jsonapi', or 'openapi'.
    """
    if file_path.suffix.lower() in TYPESPEC_SUFFIXES:
        return "typespec"

    text = file_path.read_text(encoding="utf-8")

    # YAML is a superset of JSON, so one parser covers both
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return "typespec"

    if isinstance(data, dict):
        if "serializers" in data:
            return "jsonapi"
        if "openapi" in data or "swagger" in data:
            return "openapi"

    return "typespec"
