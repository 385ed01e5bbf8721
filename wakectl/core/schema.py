"""Validation of YAML documents against packaged JSON Schemas."""

from __future__ import annotations

import json
from functools import cache
from importlib import resources
from typing import Any

from jsonschema import ValidationError, validators

from wakectl.core.errors import WakectlError


@cache
def _load_schema_validator(schema_name: str) -> Any:
    schema_text = resources.files("wakectl.schemas").joinpath(schema_name).read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def validate_document(
    doc: Any,
    schema_name: str,
    *,
    source: object,
    error_cls: type[WakectlError],
) -> None:
    validator = _load_schema_validator(schema_name)
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise error_cls(f"Schema validation failed for {source}{where}: {exc.message}") from exc
