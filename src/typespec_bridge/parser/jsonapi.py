"""Strict JSON:API schema reader.

Unlike the converter, which tolerates malformed serializers, this reader
rejects any input that does not validate against the schema models.
"""

from typing import Any

from typespec_bridge.models.jsonapi import JsonApiSchema


def parse_jsonapi(obj: Any) -> JsonApiSchema:
    """Validate a raw mapping (as loaded from YAML/JSON) into a JsonApiSchema.

    Raises ValueError (pydantic.ValidationError) on malformed input.
    """
    if not isinstance(obj, dict):
        raise ValueError("Invalid JSON:API schema: must be an object")
    if not isinstance(obj.get("serializers"), list):
        raise ValueError("Invalid JSON:API schema: serializers must be a list")
    return JsonApiSchema.model_validate(obj)
