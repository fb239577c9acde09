"""Entry point detection for the main, pre and post action roles."""

import os
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from ..errors import EntryFileMissing, MainEntryMissing
from ..helpers.logger import get_logger
from ..helpers.utils import PathArg, resolve_path, to_path_string
from .models import Entries

logger = get_logger("config.entries")

ENTRY_TYPES = ("main", "pre", "post")

DEFAULT_ENTRIES = {
    "main": "src/main.ts",
    "pre": "src/pre.ts",
    "post": "src/post.ts",
}

OUTPUT_DIR = "dist"


def output_path_for(entry_type: str) -> str:
    """Relative bundle output path for an entry role."""
    return f"{OUTPUT_DIR}/{entry_type}.js"


@dataclass(frozen=True)
class DetectedEntry:
    """A source entry found on disk."""

    type: str
    path: str
    output: str


@dataclass(frozen=True)
class DetectEntriesResult:
    success: bool
    entries: Tuple[DetectedEntry, ...]


def _detect_optional(
    cwd: str, entry_type: str, explicit_path: Optional[str]
) -> Optional[DetectedEntry]:
    absolute_path = resolve_path(cwd, explicit_path or DEFAULT_ENTRIES[entry_type])
    if not os.path.isfile(absolute_path):
        return None
    return DetectedEntry(
        type=entry_type, path=absolute_path, output=output_path_for(entry_type)
    )


def detect_entries(
    cwd: PathArg, entries: Optional[Entries] = None
) -> Union[DetectEntriesResult, MainEntryMissing]:
    """
    Detect which entry points exist in a project.

    The main entry is required. Pre and post entries are included only when
    their file exists; a missing optional entry is simply left out.

    Args:
        cwd: Project directory
        entries: Configured entry paths; conventional paths when omitted

    Returns:
        DetectEntriesResult ordered main, pre, post; or MainEntryMissing
    """
    cwd = to_path_string(cwd)
    entries = entries or Entries()

    main_path = entries.main or DEFAULT_ENTRIES["main"]
    absolute_main = resolve_path(cwd, main_path)
    if not os.path.isfile(absolute_main):
        return MainEntryMissing(expected_path=main_path, cwd=cwd)

    detected: List[DetectedEntry] = [
        DetectedEntry(type="main", path=absolute_main, output=output_path_for("main"))
    ]
    for entry_type in ENTRY_TYPES[1:]:
        explicit = getattr(entries, entry_type)
        entry = _detect_optional(cwd, entry_type, explicit)
        if entry is not None:
            detected.append(entry)

    logger.debug(f"Detected entries in {cwd}: {[e.type for e in detected]}")
    return DetectEntriesResult(success=True, entries=tuple(detected))


def find_missing_explicit_entries(
    cwd: PathArg, entries: Entries
) -> List[EntryFileMissing]:
    """Explicitly configured pre/post files that do not exist."""
    missing = []
    for entry_type in ENTRY_TYPES[1:]:
        explicit = getattr(entries, entry_type)
        if explicit and not os.path.isfile(resolve_path(cwd, explicit)):
            missing.append(EntryFileMissing(entry_type=entry_type, path=explicit))
    return missing
