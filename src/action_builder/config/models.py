"""Resolved configuration data model and default resolution."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..errors import SchemaViolation
from ..schemas import CONFIG_SCHEMA, apply_defaults, load_schema

SECTIONS = ("entries", "build", "validation")


@dataclass(frozen=True)
class Entries:
    """Entry point source paths, relative to the project directory."""

    main: str = "src/main.ts"
    pre: Optional[str] = None
    post: Optional[str] = None


@dataclass(frozen=True)
class BuildOptions:
    """Options handed to the bundler for every entry."""

    minify: bool = True
    target: str = "es2022"
    source_map: bool = False
    externals: Tuple[str, ...] = field(default_factory=tuple)
    quiet: bool = False


@dataclass(frozen=True)
class ValidationOptions:
    """Validation policy. ``strict=None`` means detect CI."""

    require_action_yml: bool = True
    max_bundle_size: Optional[str] = None
    strict: Optional[bool] = None


@dataclass(frozen=True)
class Config:
    """Fully resolved configuration; every field is populated."""

    entries: Entries = field(default_factory=Entries)
    build: BuildOptions = field(default_factory=BuildOptions)
    validation: ValidationOptions = field(default_factory=ValidationOptions)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Config":
        """Create config from a dictionary that already carries every default."""
        entries_data = data["entries"]
        build_data = data["build"]
        validation_data = data["validation"]

        return cls(
            entries=Entries(
                main=entries_data["main"],
                pre=entries_data.get("pre"),
                post=entries_data.get("post"),
            ),
            build=BuildOptions(
                minify=build_data["minify"],
                target=build_data["target"],
                source_map=build_data["sourceMap"],
                externals=tuple(build_data["externals"]),
                quiet=build_data["quiet"],
            ),
            validation=ValidationOptions(
                require_action_yml=validation_data["requireActionYml"],
                max_bundle_size=validation_data.get("maxBundleSize"),
                strict=validation_data.get("strict"),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Render the camelCase input form; unset optional fields are omitted."""
        entries: Dict[str, Any] = {"main": self.entries.main}
        if self.entries.pre is not None:
            entries["pre"] = self.entries.pre
        if self.entries.post is not None:
            entries["post"] = self.entries.post

        validation: Dict[str, Any] = {
            "requireActionYml": self.validation.require_action_yml
        }
        if self.validation.max_bundle_size is not None:
            validation["maxBundleSize"] = self.validation.max_bundle_size
        if self.validation.strict is not None:
            validation["strict"] = self.validation.strict

        return {
            "entries": entries,
            "build": {
                "minify": self.build.minify,
                "target": self.build.target,
                "sourceMap": self.build.source_map,
                "externals": list(self.build.externals),
                "quiet": self.build.quiet,
            },
            "validation": validation,
        }


def _prune_unset(partial: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop ``None`` sections and fields so they fall back to defaults."""
    pruned: Dict[str, Any] = {}
    for key, value in partial.items():
        if value is None:
            continue
        if key in SECTIONS and isinstance(value, Mapping):
            value = {k: v for k, v in value.items() if v is not None}
        pruned[key] = value
    return pruned


def check_config_input(
    partial: Mapping[str, Any]
) -> Tuple[Dict[str, Any], List[SchemaViolation]]:
    """Apply defaults to raw config input and report schema violations."""
    return apply_defaults(_prune_unset(partial), load_schema(CONFIG_SCHEMA))


def resolve(partial: Optional[Mapping[str, Any]] = None) -> Config:
    """
    Merge partial configuration input with the schema defaults.

    Merging happens per section: a given ``build`` section keeps its own
    fields and only the fields it omits take defaults.

    Args:
        partial: Config input using camelCase keys, e.g.
            ``{"build": {"sourceMap": True}}``; a ``Config`` is returned as is

    Returns:
        Fully resolved configuration

    Raises:
        ValueError: If a field has the wrong type or an unknown value
    """
    if isinstance(partial, Config):
        return partial
    if partial is not None and not isinstance(partial, Mapping):
        raise ValueError(
            f"Configuration must be a mapping, got {type(partial).__name__}"
        )

    data, violations = check_config_input(partial or {})
    if violations:
        raise ValueError(
            "Invalid configuration: "
            + "; ".join(f"{v.path}: {v.message}" for v in violations)
        )
    return Config.from_dict(data)


def define_config(partial: Optional[Mapping[str, Any]] = None) -> Config:
    """Declare a configuration in ``action.config.py``.

    Example::

        from action_builder import define_config

        config = define_config({"build": {"minify": False}})
    """
    return resolve(partial)
