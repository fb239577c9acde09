"""Bundler interface and the ncc-backed implementation."""

import os
import subprocess
import tempfile
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence, Tuple, Union

from ..config import BuildOptions
from ..helpers.logger import get_logger

logger = get_logger("build.bundler")

CODE_FILENAMES = ("index.js", "index.mjs", "index.cjs")


@dataclass(frozen=True)
class BundleOptions:
    """Options for a single bundler invocation."""

    minify: bool = True
    source_map: bool = False
    target: str = "es2022"
    externals: Tuple[str, ...] = ()
    quiet: bool = True

    @classmethod
    def from_build_options(cls, build: BuildOptions) -> "BundleOptions":
        return cls(
            minify=build.minify,
            source_map=build.source_map,
            target=build.target,
            externals=tuple(build.externals),
            quiet=build.quiet,
        )


@dataclass
class BundleOutput:
    """In-memory bundle: main code, optional source map, extra assets."""

    code: str
    source_map: Optional[str] = None
    assets: Dict[str, Union[str, bytes]] = field(default_factory=dict)


class BundlerError(Exception):
    """Raised by a bundler when an entry cannot be bundled."""


class Bundler(Protocol):
    def bundle(self, entry_path: str, options: BundleOptions) -> BundleOutput:
        ...


def read_bundle_dir(out_dir: str) -> BundleOutput:
    """Collect code, source map and assets that ncc wrote to ``out_dir``."""
    code_name = next(
        (name for name in CODE_FILENAMES if os.path.isfile(os.path.join(out_dir, name))),
        None,
    )
    if code_name is None:
        raise BundlerError(f"Bundler produced no output in {out_dir}")

    with open(os.path.join(out_dir, code_name), "r", encoding="utf-8") as f:
        code = f.read()

    source_map = None
    map_name = f"{code_name}.map"
    if os.path.isfile(os.path.join(out_dir, map_name)):
        with open(os.path.join(out_dir, map_name), "r", encoding="utf-8") as f:
            source_map = f.read()

    assets: Dict[str, Union[str, bytes]] = {}
    for root, _dirs, files in os.walk(out_dir):
        for filename in files:
            full_path = os.path.join(root, filename)
            relative = os.path.relpath(full_path, out_dir).replace(os.sep, "/")
            if relative in (code_name, map_name):
                continue
            with open(full_path, "rb") as f:
                assets[relative] = f.read()

    return BundleOutput(code=code, source_map=source_map, assets=assets)


class NccBundler:
    """Bundle entries with ``@vercel/ncc`` through its command line."""

    def __init__(self, command: Sequence[str] = ("npx", "--yes", "@vercel/ncc")):
        self.command = list(command)

    def build_command(
        self, entry_path: str, out_dir: str, options: BundleOptions
    ) -> List[str]:
        cmd = self.command + [
            "build",
            entry_path,
            "--out",
            out_dir,
            "--target",
            options.target,
        ]
        if options.minify:
            cmd.append("--minify")
        if options.source_map:
            cmd.append("--source-map")
        for external in options.externals:
            cmd.extend(["--external", external])
        if options.quiet:
            cmd.append("--quiet")
        return cmd

    def bundle(self, entry_path: str, options: BundleOptions) -> BundleOutput:
        with tempfile.TemporaryDirectory(prefix="action-builder-") as out_dir:
            cmd = self.build_command(entry_path, out_dir, options)
            logger.debug(f"Running: {' '.join(cmd)}")
            try:
                result = subprocess.run(
                    cmd,
                    capture_output=True,
                    text=True,
                    cwd=os.path.dirname(entry_path) or None,
                )
            except OSError as e:
                raise BundlerError(f"Could not run {self.command[0]}: {e}") from e

            if result.returncode != 0:
                output = (result.stderr or result.stdout).strip()
                raise BundlerError(output or f"ncc exited with code {result.returncode}")

            return read_bundle_dir(out_dir)
