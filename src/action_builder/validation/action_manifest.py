"""action.yml parsing, schema validation and recommendation checks."""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from ..errors import ActionYmlMissing, ActionYmlSchemaError, ActionYmlSyntaxError
from ..helpers.logger import get_logger
from ..helpers.utils import PathArg, to_path_string
from ..schemas import ACTION_YML_SCHEMA, load_schema, validate_schema

logger = get_logger("validation.action_manifest")

SUPPORTED_RUNTIME = "node24"


@dataclass(frozen=True)
class ValidationItem:
    """A validation error or warning."""

    code: str
    message: str
    file: Optional[str] = None
    suggestion: Optional[str] = None


@dataclass
class ActionInput:
    """Action input declaration."""

    description: str
    required: Optional[bool] = None
    default: Optional[str] = None
    deprecation_message: Optional[str] = None


@dataclass
class ActionOutput:
    description: str


@dataclass
class RunsConfig:
    """The ``runs`` section; ``using`` is always the supported runtime."""

    using: str
    main: str
    pre: Optional[str] = None
    pre_if: Optional[str] = None
    post: Optional[str] = None
    post_if: Optional[str] = None


@dataclass
class Branding:
    icon: Optional[str] = None
    color: Optional[str] = None


@dataclass
class ActionManifest:
    """Typed action.yml content."""

    name: str
    description: str
    runs: RunsConfig
    author: Optional[str] = None
    inputs: Dict[str, ActionInput] = field(default_factory=dict)
    outputs: Dict[str, ActionOutput] = field(default_factory=dict)
    branding: Optional[Branding] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ActionManifest":
        """Create manifest from a dictionary that passed schema validation."""
        inputs = {}
        for input_name, input_data in (data.get("inputs") or {}).items():
            inputs[input_name] = ActionInput(
                description=input_data["description"],
                required=input_data.get("required"),
                default=input_data.get("default"),
                deprecation_message=input_data.get("deprecationMessage"),
            )

        outputs = {
            output_name: ActionOutput(description=output_data["description"])
            for output_name, output_data in (data.get("outputs") or {}).items()
        }

        runs_data = data["runs"]
        runs = RunsConfig(
            using=runs_data["using"],
            main=runs_data["main"],
            pre=runs_data.get("pre"),
            pre_if=runs_data.get("pre-if"),
            post=runs_data.get("post"),
            post_if=runs_data.get("post-if"),
        )

        branding = None
        branding_data = data.get("branding")
        if branding_data is not None:
            branding = Branding(
                icon=branding_data.get("icon"), color=branding_data.get("color")
            )

        return cls(
            name=data["name"],
            description=data["description"],
            runs=runs,
            author=data.get("author"),
            inputs=inputs,
            outputs=outputs,
            branding=branding,
        )


@dataclass(frozen=True)
class ActionYmlResult:
    """Successful action.yml validation with advisory warnings."""

    content: ActionManifest
    warnings: Tuple[ValidationItem, ...] = ()
    errors: Tuple[ValidationItem, ...] = ()
    valid: bool = True


def _warning(
    code: str, message: str, suggestion: str, file: Optional[str]
) -> ValidationItem:
    return ValidationItem(code=code, message=message, file=file, suggestion=suggestion)


def read_action_yml(
    path: str,
) -> Union[Dict[str, Any], ActionYmlMissing, ActionYmlSyntaxError]:
    """Read and parse action.yml into a mapping."""
    if not os.path.exists(path):
        return ActionYmlMissing(path=path)

    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        return ActionYmlSyntaxError(path=path, message=f"Failed to read file: {e}")

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        problem = getattr(e, "problem", None)
        return ActionYmlSyntaxError(
            path=path,
            message=f"Invalid YAML syntax: {problem or e}",
            line=mark.line + 1 if mark is not None else None,
            column=mark.column + 1 if mark is not None else None,
        )

    if not isinstance(parsed, dict):
        return ActionYmlSyntaxError(path=path, message="action.yml must be a mapping")

    return parsed


def check_recommendations(
    content: Dict[str, Any], file_path: Optional[str] = None
) -> List[ValidationItem]:
    """
    Derive advisory warnings from the raw parsed action.yml.

    Checks branding (block, icon, colour) and the description of every
    declared input and output. An empty description counts as missing.
    """
    warnings = []

    branding = content.get("branding")
    if not branding:
        warnings.append(
            _warning(
                "ACTION_YML_NO_BRANDING",
                "No branding configuration found",
                "Add branding.icon and branding.color for better marketplace visibility",
                file_path,
            )
        )
    else:
        if not branding.get("icon"):
            warnings.append(
                _warning(
                    "ACTION_YML_NO_BRANDING_ICON",
                    "Branding icon not specified",
                    "Add branding.icon for better marketplace visibility",
                    file_path,
                )
            )
        if not branding.get("color"):
            warnings.append(
                _warning(
                    "ACTION_YML_NO_BRANDING_COLOR",
                    "Branding color not specified",
                    "Add branding.color for better marketplace visibility",
                    file_path,
                )
            )

    for name, action_input in (content.get("inputs") or {}).items():
        if not (action_input or {}).get("description"):
            warnings.append(
                _warning(
                    "ACTION_YML_INPUT_NO_DESCRIPTION",
                    f"Input '{name}' has no description",
                    f"Add a description for the '{name}' input",
                    file_path,
                )
            )

    for name, action_output in (content.get("outputs") or {}).items():
        if not (action_output or {}).get("description"):
            warnings.append(
                _warning(
                    "ACTION_YML_OUTPUT_NO_DESCRIPTION",
                    f"Output '{name}' has no description",
                    f"Add a description for the '{name}' output",
                    file_path,
                )
            )

    return warnings


def validate_manifest(
    path: PathArg,
) -> Union[ActionYmlResult, ActionYmlMissing, ActionYmlSyntaxError, ActionYmlSchemaError]:
    """
    Validate an action.yml file completely (YAML syntax + schema + recommendations).

    Args:
        path: Path to action.yml

    Returns:
        ActionYmlResult with warnings, or the failure describing why the
        manifest is missing, unparsable or off-schema
    """
    path = to_path_string(path)

    parsed = read_action_yml(path)
    if not isinstance(parsed, dict):
        return parsed

    violations = validate_schema(parsed, load_schema(ACTION_YML_SCHEMA))
    if violations:
        logger.debug(f"{path} has {len(violations)} schema violation(s)")
        return ActionYmlSchemaError(path=path, errors=tuple(violations))

    warnings = check_recommendations(parsed, path)
    return ActionYmlResult(
        content=ActionManifest.from_dict(parsed), warnings=tuple(warnings)
    )
