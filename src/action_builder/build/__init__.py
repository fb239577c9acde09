"""
Build module for the action builder.

Contains the bundler interface and the build orchestrator.
"""

from .builder import (
    BuildResult,
    Builder,
    BundleResult,
    BundleStats,
    format_build_result,
    format_bytes,
    parse_size,
)
from .bundler import (
    Bundler,
    BundlerError,
    BundleOptions,
    BundleOutput,
    NccBundler,
)

__all__ = [
    "BuildResult",
    "Builder",
    "BundleOptions",
    "BundleOutput",
    "BundleResult",
    "BundleStats",
    "Bundler",
    "BundlerError",
    "NccBundler",
    "format_build_result",
    "format_bytes",
    "parse_size",
]
