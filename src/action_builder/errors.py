"""
Typed failure values for the action builder pipeline.

Pipeline operations return these instead of raising. Each variant is a
frozen dataclass with a stable ``tag`` and the structured context of the
failure, so callers can branch with ``isinstance`` or on ``tag``::

    result = loader.load(cwd=project_dir)
    if isinstance(result, ConfigNotFound):
        ...

Exceptions stay reserved for programmer error.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Tuple, Union


class PipelineFailure:
    """Mixin shared by every failure variant."""

    tag: ClassVar[str] = "PipelineFailure"

    def describe(self) -> str:
        """Human readable one-line summary."""
        return self.tag


# =============================================================================
# Config failures
# =============================================================================


@dataclass(frozen=True)
class ConfigNotFound(PipelineFailure):
    """Configuration file was given (or found) but does not exist."""

    path: str
    message: str = "Specified config file does not exist"

    tag: ClassVar[str] = "ConfigNotFound"

    def describe(self) -> str:
        return f"Config file not found: {self.path} ({self.message})"


@dataclass(frozen=True)
class ConfigInvalid(PipelineFailure):
    """Configuration file loaded but its exported value is unusable."""

    path: str
    errors: Tuple[str, ...] = ()

    tag: ClassVar[str] = "ConfigInvalid"

    def describe(self) -> str:
        return f"Invalid config in {self.path}: {'; '.join(self.errors)}"


@dataclass(frozen=True)
class ConfigLoadFailed(PipelineFailure):
    """Configuration module could not be loaded (syntax, import, read error)."""

    path: str
    cause: str

    tag: ClassVar[str] = "ConfigLoadFailed"

    def describe(self) -> str:
        return f"Failed to load config {self.path}: {self.cause}"


ConfigError = Union[ConfigNotFound, ConfigInvalid, ConfigLoadFailed]


# =============================================================================
# Validation failures
# =============================================================================


@dataclass(frozen=True)
class MainEntryMissing(PipelineFailure):
    """The required main entry point does not exist."""

    expected_path: str
    cwd: str

    tag: ClassVar[str] = "MainEntryMissing"

    def describe(self) -> str:
        return f"Main entry point not found: {self.expected_path} (in {self.cwd})"


@dataclass(frozen=True)
class EntryFileMissing(PipelineFailure):
    """An explicitly configured pre/post entry does not exist."""

    entry_type: str
    path: str

    tag: ClassVar[str] = "EntryFileMissing"

    def describe(self) -> str:
        return f"Configured {self.entry_type} entry not found: {self.path}"


@dataclass(frozen=True)
class ActionYmlMissing(PipelineFailure):
    path: str

    tag: ClassVar[str] = "ActionYmlMissing"

    def describe(self) -> str:
        return f"action.yml not found: {self.path}"


@dataclass(frozen=True)
class ActionYmlSyntaxError(PipelineFailure):
    """action.yml could not be read or parsed into a mapping."""

    path: str
    message: str
    line: Optional[int] = None
    column: Optional[int] = None

    tag: ClassVar[str] = "ActionYmlSyntaxError"

    def describe(self) -> str:
        location = ""
        if self.line is not None:
            location = f" (line {self.line}"
            location += f", column {self.column})" if self.column is not None else ")"
        return f"{self.path}{location}: {self.message}"


@dataclass(frozen=True)
class SchemaViolation:
    """A single field-level schema violation."""

    path: str
    message: str


@dataclass(frozen=True)
class ActionYmlSchemaError(PipelineFailure):
    """action.yml parsed but does not match the manifest schema."""

    path: str
    errors: Tuple[SchemaViolation, ...] = field(default_factory=tuple)

    tag: ClassVar[str] = "ActionYmlSchemaError"

    def describe(self) -> str:
        details = "; ".join(f"{e.path}: {e.message}" for e in self.errors)
        return f"{self.path} failed schema validation: {details}"


@dataclass(frozen=True)
class ValidationFailed(PipelineFailure):
    """Strict mode escalated warnings into a failure."""

    error_count: int
    warning_count: int
    message: str

    tag: ClassVar[str] = "ValidationFailed"

    def describe(self) -> str:
        return (
            f"{self.message} ({self.error_count} errors, "
            f"{self.warning_count} warnings)"
        )


ValidationError = Union[
    MainEntryMissing,
    EntryFileMissing,
    ActionYmlMissing,
    ActionYmlSyntaxError,
    ActionYmlSchemaError,
    ValidationFailed,
]


# =============================================================================
# Build failures
# =============================================================================


@dataclass(frozen=True)
class BundleFailed(PipelineFailure):
    """The external bundler failed for one entry."""

    entry: str
    cause: str

    tag: ClassVar[str] = "BundleFailed"

    def describe(self) -> str:
        return f"Bundling {self.entry} failed: {self.cause}"


@dataclass(frozen=True)
class WriteError(PipelineFailure):
    path: str
    cause: str

    tag: ClassVar[str] = "WriteError"

    def describe(self) -> str:
        return f"Failed to write {self.path}: {self.cause}"


@dataclass(frozen=True)
class CleanError(PipelineFailure):
    directory: str
    cause: str

    tag: ClassVar[str] = "CleanError"

    def describe(self) -> str:
        return f"Failed to clean {self.directory}: {self.cause}"


@dataclass(frozen=True)
class BuildFailed(PipelineFailure):
    """Summary failure for a build where some entries did not bundle."""

    message: str
    failed_entries: int

    tag: ClassVar[str] = "BuildFailed"

    def describe(self) -> str:
        return f"{self.message} ({self.failed_entries} failed)"


BuildError = Union[BundleFailed, WriteError, CleanError, BuildFailed]

AppError = Union[ConfigError, ValidationError, BuildError]


def is_failure(value: object) -> bool:
    """True when ``value`` is one of the pipeline failure variants."""
    return isinstance(value, PipelineFailure)
