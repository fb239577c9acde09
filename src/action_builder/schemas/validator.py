"""
Shared schema validation for configuration and action.yml data.

Schemas are JSON Schema (draft 7) documents written in YAML and shipped next
to this module. Validation collects every violation rather than stopping at
the first one.
"""

import copy
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple

import jsonschema
from jsonschema import validators

from ..errors import SchemaViolation
from ..helpers.utils import load_yaml

SCHEMA_DIR = Path(__file__).parent

CONFIG_SCHEMA = "config-schema.yaml"
ACTION_YML_SCHEMA = "action-yml-schema.yaml"


@lru_cache(maxsize=None)
def _load_schema_cached(name: str) -> Dict[str, Any]:
    schema_path = SCHEMA_DIR / name
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")
    return load_yaml(schema_path)


def load_schema(name: str) -> Dict[str, Any]:
    """Load a packaged schema by file name.

    Returns a fresh copy so callers may mutate it.
    """
    return copy.deepcopy(_load_schema_cached(name))


def _format_path(error: jsonschema.ValidationError) -> str:
    if not error.absolute_path:
        return "root"
    return ".".join(str(p) for p in error.absolute_path)


def _collect(validator: Any, data: Any) -> List[SchemaViolation]:
    errors = sorted(
        validator.iter_errors(data),
        key=lambda e: [str(p) for p in e.absolute_path],
    )
    return [SchemaViolation(path=_format_path(e), message=e.message) for e in errors]


def validate_schema(data: Any, schema: Dict[str, Any]) -> List[SchemaViolation]:
    """
    Validate data against a schema.

    Args:
        data: Parsed data (usually from YAML)
        schema: JSON schema document

    Returns:
        List of violations, empty when the data is valid
    """
    return _collect(jsonschema.Draft7Validator(schema), data)


def _extend_with_default(validator_class):
    validate_properties = validator_class.VALIDATORS["properties"]

    def set_defaults(validator, properties, instance, schema):
        if isinstance(instance, dict):
            for prop, subschema in properties.items():
                if "default" in subschema:
                    instance.setdefault(prop, copy.deepcopy(subschema["default"]))

        for error in validate_properties(validator, properties, instance, schema):
            yield error

    return validators.extend(validator_class, {"properties": set_defaults})


DefaultFillingValidator = _extend_with_default(jsonschema.Draft7Validator)


def apply_defaults(
    data: Any, schema: Dict[str, Any]
) -> Tuple[Any, List[SchemaViolation]]:
    """
    Fill schema-declared defaults into a copy of ``data`` and validate it.

    Returns:
        Tuple of (data_with_defaults, list_of_violations)
    """
    value = copy.deepcopy(data)
    violations = _collect(DefaultFillingValidator(schema), value)
    return value, violations
