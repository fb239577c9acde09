"""Build orchestration: clean, bundle every entry, write outputs."""

import os
import re
import shutil
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from ..config import OUTPUT_DIR, Config, DetectedEntry, detect_entries
from ..errors import BuildFailed, BundleFailed, CleanError, MainEntryMissing, WriteError
from ..helpers.logger import get_logger
from ..helpers.utils import PathArg, resolve_path, to_path_string
from .bundler import Bundler, BundleOptions

logger = get_logger("build.builder")

MODULE_MARKER = "package.json"
MODULE_MARKER_CONTENT = '{ "type": "module" }'

_SIZE_UNITS = {"b": 1, "kb": 1024, "mb": 1024 ** 2, "gb": 1024 ** 3}
_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([kmg]?b)\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class BundleStats:
    entry: str
    size: int
    duration: int
    output_path: str


@dataclass(frozen=True)
class BundleResult:
    """Outcome of bundling one entry; ``error`` holds the cause on failure."""

    success: bool
    stats: Optional[BundleStats] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class BuildResult:
    """Aggregate of every entry's bundle result; durations in milliseconds."""

    success: bool
    entries: Tuple[BundleResult, ...]
    duration: int
    error: Optional[str] = None
    warnings: Tuple[str, ...] = ()


def format_bytes(size: int) -> str:
    """Format bytes as a human-readable string."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def parse_size(text: str) -> int:
    """Parse sizes like ``"500kb"`` or ``"1.5 MB"`` into bytes (1024-based)."""
    match = _SIZE_PATTERN.match(text)
    if not match:
        raise ValueError(f"Invalid size: {text!r}")
    number, unit = match.groups()
    return int(float(number) * _SIZE_UNITS[unit.lower()])


def _elapsed_ms(start: float) -> int:
    return int(round((time.monotonic() - start) * 1000))


def clean_directory(directory: str) -> Optional[CleanError]:
    """Remove ``directory`` recursively; a missing directory is fine."""
    try:
        shutil.rmtree(directory)
    except FileNotFoundError:
        pass
    except OSError as e:
        return CleanError(directory=directory, cause=str(e))
    return None


def write_file(path: str, content: Union[str, bytes]) -> Optional[WriteError]:
    """Write a file, creating parent directories."""
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        if isinstance(content, bytes):
            with open(path, "wb") as f:
                f.write(content)
        else:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
    except OSError as e:
        return WriteError(path=path, cause=str(e))
    logger.debug(f"Wrote {path}")
    return None


class Builder:
    """Bundle every detected entry of a project with the given bundler."""

    def __init__(self, bundler: Bundler, detect=detect_entries):
        self.bundler = bundler
        self.detect = detect

    def bundle_entry(
        self, entry: DetectedEntry, config: Config, cwd: str
    ) -> Union[BundleResult, BundleFailed, WriteError]:
        """Bundle one entry and write its code, source map and assets."""
        start = time.monotonic()
        logger.info(f"Bundling {entry.type} entry: {entry.path}")

        try:
            output = self.bundler.bundle(
                entry.path, BundleOptions.from_build_options(config.build)
            )
        except Exception as e:
            logger.error(f"Bundling {entry.type} failed: {e}")
            return BundleFailed(entry=entry.path, cause=str(e) or type(e).__name__)

        output_path = resolve_path(cwd, entry.output)

        failure = write_file(output_path, output.code)
        if failure is None and config.build.source_map and output.source_map:
            failure = write_file(f"{output_path}.map", output.source_map)

        output_dir = os.path.dirname(output_path)
        for asset_name, asset_content in output.assets.items():
            if failure is not None:
                break
            failure = write_file(resolve_path(output_dir, asset_name), asset_content)

        if failure is not None:
            logger.error(failure.describe())
            return failure

        size = len(output.code.encode("utf-8"))
        stats = BundleStats(
            entry=entry.type,
            size=size,
            duration=_elapsed_ms(start),
            output_path=entry.output,
        )
        logger.info(f"Bundled {entry.type}: {format_bytes(size)} -> {entry.output}")
        return BundleResult(success=True, stats=stats)

    def build(
        self, config: Config, cwd: Optional[PathArg] = None, clean: bool = True
    ) -> Union[BuildResult, MainEntryMissing, CleanError, WriteError]:
        """
        Build all entries of a project.

        A missing main entry aborts the build. Bundle and write failures are
        recorded per entry and never stop the remaining entries.
        """
        cwd = to_path_string(cwd) if cwd is not None else os.getcwd()
        start = time.monotonic()

        detected = self.detect(cwd, config.entries)
        if isinstance(detected, MainEntryMissing):
            return detected

        output_dir = resolve_path(cwd, OUTPUT_DIR)
        if clean:
            failure = clean_directory(output_dir)
            if failure is not None:
                return failure

        results: List[BundleResult] = []
        for entry in detected.entries:
            outcome = self.bundle_entry(entry, config, cwd)
            if isinstance(outcome, (BundleFailed, WriteError)):
                results.append(BundleResult(success=False, error=outcome.cause))
            else:
                results.append(outcome)

        failure = write_file(
            os.path.join(output_dir, MODULE_MARKER), MODULE_MARKER_CONTENT
        )
        if failure is not None:
            return failure

        warnings = self.check_sizes(config, results)
        failed = sum(1 for r in results if not r.success)
        duration = _elapsed_ms(start)

        if failed:
            summary = BuildFailed(
                message="One or more entries failed to build", failed_entries=failed
            )
            logger.warning(summary.describe())
            return BuildResult(
                success=False,
                entries=tuple(results),
                duration=duration,
                error=summary.message,
                warnings=warnings,
            )

        return BuildResult(
            success=True, entries=tuple(results), duration=duration, warnings=warnings
        )

    @staticmethod
    def check_sizes(config: Config, results: List[BundleResult]) -> Tuple[str, ...]:
        """Warnings for bundles larger than ``validation.maxBundleSize``."""
        if not config.validation.max_bundle_size:
            return ()

        limit = parse_size(config.validation.max_bundle_size)
        warnings = []
        for result in results:
            if result.stats is not None and result.stats.size > limit:
                warnings.append(
                    f"{result.stats.entry} bundle is {format_bytes(result.stats.size)}, "
                    f"over the {config.validation.max_bundle_size} limit"
                )
        return tuple(warnings)


def format_build_result(result: BuildResult) -> str:
    """Format build result for terminal output."""
    lines = []

    if result.success:
        lines.append("Build Summary:")
        for entry in result.entries:
            if entry.success and entry.stats:
                stats = entry.stats
                lines.append(
                    f"  ✓ {stats.entry}: {format_bytes(stats.size)} "
                    f"({stats.duration}ms) → {stats.output_path}"
                )
    else:
        lines.append("Build Failed:")
        for entry in result.entries:
            if not entry.success:
                lines.append(f"  ✗ {entry.error}")

    for warning in result.warnings:
        lines.append(f"  ⚠ {warning}")

    if result.success:
        lines.append("")
        lines.append(f"Total time: {result.duration}ms")

    return "\n".join(lines)
