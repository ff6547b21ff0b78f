from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from jsonschema import ValidationError
from jsonschema.validators import Draft202012Validator

from .errors import SchemaInvalid

DEFAULT_SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"


@dataclass(frozen=True)
class SchemaRegistry:
    schemas_base_dir: Path = DEFAULT_SCHEMAS_DIR
    _cache: dict[str, Draft202012Validator] = field(default_factory=dict, compare=False, repr=False)

    def validator(self, schema_filename: str) -> Draft202012Validator:
        v = self._cache.get(schema_filename)
        if v is None:
            schema_path = self.schemas_base_dir / schema_filename
            schema = json.loads(schema_path.read_text(encoding="utf-8"))
            Draft202012Validator.check_schema(schema)
            v = Draft202012Validator(schema)
            self._cache[schema_filename] = v
        return v

    def validate(self, document: dict, schema_filename: str) -> None:
        try:
            self.validator(schema_filename).validate(document)
        except ValidationError as e:
            path = "/".join(str(p) for p in e.absolute_path)
            message = f"{schema_filename}: {e.message}" if not path else f"{schema_filename}: {path}: {e.message}"
            raise SchemaInvalid(code="SCHEMA_INVALID", message=message) from e
