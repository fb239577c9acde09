"""
Project validation: entry points plus action.yml, under a strict-mode policy.
"""

import os
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Tuple, Union

from ..config import Config, detect_entries, find_missing_explicit_entries
from ..errors import (
    ActionYmlMissing,
    ActionYmlSchemaError,
    ActionYmlSyntaxError,
    MainEntryMissing,
    ValidationFailed,
)
from ..helpers.logger import get_logger
from ..helpers.utils import PathArg, resolve_path, to_path_string
from .action_manifest import SUPPORTED_RUNTIME, ValidationItem, validate_manifest

logger = get_logger("validation.validator")

ACTION_YML = "action.yml"

CIDetector = Callable[[], bool]


@dataclass(frozen=True)
class ValidationResult:
    """Verdict plus the ordered errors and warnings behind it."""

    valid: bool
    errors: Tuple[ValidationItem, ...] = ()
    warnings: Tuple[ValidationItem, ...] = ()


def is_ci(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Check whether we run in a CI environment (``CI`` or ``GITHUB_ACTIONS``)."""
    env = os.environ if environ is None else environ
    return env.get("CI") in ("true", "1") or env.get("GITHUB_ACTIONS") == "true"


def resolve_strict(
    explicit: Optional[bool],
    configured: Optional[bool],
    ci_detector: CIDetector = is_ci,
) -> bool:
    """
    Resolve strict mode.

    The first defined value wins: the explicit option, then the configured
    ``validation.strict``. CI detection only applies when both are unset.
    """
    if explicit is not None:
        return explicit
    if configured is not None:
        return configured
    return ci_detector()


class Validator:
    """Validate entry points and action.yml for a project."""

    def __init__(
        self,
        detect=detect_entries,
        manifest_validator=validate_manifest,
        ci_detector: CIDetector = is_ci,
    ):
        self.detect = detect
        self.manifest_validator = manifest_validator
        self.ci_detector = ci_detector

    def check_entries(self, config: Config, cwd: str) -> List[ValidationItem]:
        """
        Error items for the entry points.

        Missing pre/post entries are left out of the result, so a configured
        path that does not exist is only logged.
        """
        errors = []

        result = self.detect(cwd, config.entries)
        if isinstance(result, MainEntryMissing):
            errors.append(
                ValidationItem(
                    code="MAIN_ENTRY_MISSING",
                    message=f"Main entry point not found: {result.expected_path}",
                    file=result.expected_path,
                    suggestion="Create src/main.ts or specify a different path in config",
                )
            )

        for missing in find_missing_explicit_entries(cwd, config.entries):
            logger.warning(
                f"{missing.describe()}; the {missing.entry_type} entry is skipped"
            )

        return errors

    def check_action_yml(
        self, config: Config, cwd: str
    ) -> Tuple[List[ValidationItem], List[ValidationItem]]:
        errors: List[ValidationItem] = []
        warnings: List[ValidationItem] = []

        if not config.validation.require_action_yml:
            return errors, warnings

        action_yml_path = resolve_path(cwd, ACTION_YML)
        result = self.manifest_validator(action_yml_path)

        if isinstance(result, ActionYmlMissing):
            warnings.append(
                ValidationItem(
                    code="ACTION_YML_MISSING",
                    message="action.yml not found",
                    file=action_yml_path,
                    suggestion="Create action.yml to define your action metadata",
                )
            )
        elif isinstance(result, ActionYmlSyntaxError):
            errors.append(
                ValidationItem(
                    code="ACTION_YML_SYNTAX_ERROR",
                    message=result.describe(),
                    file=result.path,
                )
            )
        elif isinstance(result, ActionYmlSchemaError):
            for violation in result.errors:
                suggestion = None
                if violation.path == "runs.using":
                    suggestion = f"Set runs.using to '{SUPPORTED_RUNTIME}'"
                errors.append(
                    ValidationItem(
                        code="ACTION_YML_SCHEMA_ERROR",
                        message=f"{violation.path}: {violation.message}",
                        file=result.path,
                        suggestion=suggestion,
                    )
                )
        else:
            warnings.extend(result.warnings)

        return errors, warnings

    def validate(
        self,
        config: Config,
        cwd: Optional[PathArg] = None,
        strict: Optional[bool] = None,
    ) -> Union[ValidationResult, ValidationFailed]:
        """
        Validate a project.

        A missing main entry is reported as an error item rather than a
        failure. In strict mode a result with warnings but no errors becomes
        ValidationFailed; any errors are always returned as a result.
        """
        cwd = to_path_string(cwd) if cwd is not None else os.getcwd()
        is_strict = resolve_strict(strict, config.validation.strict, self.ci_detector)
        logger.debug(f"Validating {cwd} (strict={is_strict})")

        errors = self.check_entries(config, cwd)
        yml_errors, warnings = self.check_action_yml(config, cwd)
        errors.extend(yml_errors)

        if is_strict and warnings and not errors:
            logger.warning(
                f"Strict mode: {len(warnings)} warning(s) treated as errors"
            )
            return ValidationFailed(
                error_count=0,
                warning_count=len(warnings),
                message="Warnings treated as errors in strict mode",
            )

        valid = not errors and (not is_strict or not warnings)
        return ValidationResult(
            valid=valid, errors=tuple(errors), warnings=tuple(warnings)
        )


def format_validation_result(result: ValidationResult) -> str:
    """Format validation result for terminal output."""
    lines = []

    if result.errors:
        lines.append("Errors:")
        for error in result.errors:
            lines.append(f"  ✗ {error.message}")
            if error.suggestion:
                lines.append(f"    → {error.suggestion}")

    if result.warnings:
        if lines:
            lines.append("")
        lines.append("Warnings:")
        for warning in result.warnings:
            lines.append(f"  ⚠ {warning.message}")
            if warning.suggestion:
                lines.append(f"    → {warning.suggestion}")

    if result.valid and not result.errors and not result.warnings:
        lines.append("✓ All checks passed")

    return "\n".join(lines)
