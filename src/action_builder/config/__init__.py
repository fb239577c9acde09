"""
Configuration module for the action builder.

Contains config resolution, file loading and entry point detection.
"""

from .entries import (
    DEFAULT_ENTRIES,
    ENTRY_TYPES,
    OUTPUT_DIR,
    DetectEntriesResult,
    DetectedEntry,
    detect_entries,
    find_missing_explicit_entries,
    output_path_for,
)
from .loader import (
    CONFIG_FILENAMES,
    ConfigLoader,
    LoadConfigResult,
    ModuleLoader,
    find_config_file,
    load_config_module,
)
from .models import (
    BuildOptions,
    Config,
    Entries,
    ValidationOptions,
    define_config,
    resolve,
)

__all__ = [
    "BuildOptions",
    "CONFIG_FILENAMES",
    "Config",
    "ConfigLoader",
    "DEFAULT_ENTRIES",
    "DetectEntriesResult",
    "DetectedEntry",
    "ENTRY_TYPES",
    "Entries",
    "LoadConfigResult",
    "ModuleLoader",
    "OUTPUT_DIR",
    "ValidationOptions",
    "define_config",
    "detect_entries",
    "find_config_file",
    "find_missing_explicit_entries",
    "load_config_module",
    "output_path_for",
    "resolve",
]
