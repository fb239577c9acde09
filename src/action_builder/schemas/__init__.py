"""
Schemas for action builder configuration and action.yml metadata.
"""

from .validator import (
    ACTION_YML_SCHEMA,
    CONFIG_SCHEMA,
    apply_defaults,
    load_schema,
    validate_schema,
)

__all__ = [
    "ACTION_YML_SCHEMA",
    "CONFIG_SCHEMA",
    "apply_defaults",
    "load_schema",
    "validate_schema",
]
