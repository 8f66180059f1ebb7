from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

SCHEMA_ROOT = Path(__file__).resolve().parent
RESPONSE_SCHEMA = "response.schema.json"


class SchemaValidationError(ValueError):
    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


@dataclass(frozen=True)
class SchemaRegistry:
    schema_root: Path = SCHEMA_ROOT

    @classmethod
    def default(cls) -> "SchemaRegistry":
        return _default_registry()

    def validator_for(self, schema_filename: str) -> jsonschema.Validator:
        return _validator(self.schema_root, schema_filename)

    def validate_instance(self, instance: Any, schema_filename: str) -> None:
        validator = self.validator_for(schema_filename)
        errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.path))
        if errors:
            formatted = [self._format_error(err) for err in errors]
            raise SchemaValidationError(
                f"Schema validation failed for {schema_filename}: {'; '.join(formatted)}",
                errors=formatted,
            )

    @staticmethod
    def _format_error(error: jsonschema.ValidationError) -> str:
        location = "/".join(str(part) for part in error.path) or "<root>"
        return f"{location}: {error.message}"


@lru_cache(maxsize=1)
def _default_registry() -> SchemaRegistry:
    return SchemaRegistry()


@lru_cache(maxsize=16)
def _validator(schema_root: Path, schema_filename: str) -> jsonschema.Validator:
    with (schema_root / schema_filename).open("r", encoding="utf-8") as f:
        schema = json.load(f)
    validator_cls = jsonschema.validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)
