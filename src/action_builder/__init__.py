"""
GitHub Action Builder.

Bundles TypeScript GitHub Actions into single-file node24 releases:
configuration resolution, entry detection, action.yml validation and build
orchestration around an external bundler.
"""

__version__ = "0.1.0"

from .build import (
    BuildResult,
    Builder,
    BundleOptions,
    BundleOutput,
    BundleResult,
    Bundler,
    BundlerError,
    NccBundler,
)
from .config import (
    Config,
    ConfigLoader,
    DetectedEntry,
    define_config,
    detect_entries,
    resolve,
)
from .github_action import (
    ActionBuildResult,
    ActionValidateResult,
    ConfigOutcome,
    GitHubAction,
)
from .validation import (
    ValidationItem,
    ValidationResult,
    Validator,
    validate_manifest,
)

__all__ = [
    "ActionBuildResult",
    "ActionValidateResult",
    "BuildResult",
    "Builder",
    "BundleOptions",
    "BundleOutput",
    "BundleResult",
    "Bundler",
    "BundlerError",
    "Config",
    "ConfigLoader",
    "ConfigOutcome",
    "DetectedEntry",
    "GitHubAction",
    "NccBundler",
    "ValidationItem",
    "ValidationResult",
    "Validator",
    "define_config",
    "detect_entries",
    "resolve",
    "validate_manifest",
]
