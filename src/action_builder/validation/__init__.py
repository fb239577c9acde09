"""
Validation module for the action builder.

Contains action.yml validation and the project validation orchestrator.
"""

from .action_manifest import (
    SUPPORTED_RUNTIME,
    ActionInput,
    ActionManifest,
    ActionOutput,
    ActionYmlResult,
    Branding,
    RunsConfig,
    ValidationItem,
    check_recommendations,
    validate_manifest,
)
from .validator import (
    ValidationResult,
    Validator,
    format_validation_result,
    is_ci,
    resolve_strict,
)

__all__ = [
    "ActionInput",
    "ActionManifest",
    "ActionOutput",
    "ActionYmlResult",
    "Branding",
    "RunsConfig",
    "SUPPORTED_RUNTIME",
    "ValidationItem",
    "ValidationResult",
    "Validator",
    "check_recommendations",
    "format_validation_result",
    "is_ci",
    "resolve_strict",
    "validate_manifest",
]
