"""Init command implementation: scaffold a new TypeScript action project."""

import json
import os
from typing import Dict

import typer
import yaml
from rich.console import Console
from rich.tree import Tree

from .. import __version__
from ..helpers.error_handler import handle_error, handle_info, handle_success
from ..validation import SUPPORTED_RUNTIME

console = Console()


def generate_package_json(name: str) -> str:
    package = {
        "name": name,
        "version": "0.0.0",
        "private": True,
        "type": "module",
        "scripts": {
            "build": "github-action-builder build",
            "validate": "github-action-builder validate",
            "typecheck": "tsc --noEmit",
        },
        "devDependencies": {
            "@vercel/ncc": "^0.38.0",
            "typescript": "^5.9.3",
        },
        "dependencies": {
            "@actions/core": "^1.11.1",
            "@actions/github": "^6.0.0",
        },
    }
    return json.dumps(package, indent=2) + "\n"


def generate_tsconfig() -> str:
    tsconfig = {
        "compilerOptions": {
            "target": "ES2022",
            "module": "NodeNext",
            "moduleResolution": "NodeNext",
            "strict": True,
            "esModuleInterop": True,
            "skipLibCheck": True,
            "forceConsistentCasingInFileNames": True,
            "declaration": False,
            "outDir": "dist",
            "rootDir": "src",
        },
        "include": ["src/**/*.ts"],
        "exclude": ["node_modules", "dist"],
    }
    return json.dumps(tsconfig, indent=2) + "\n"


def generate_action_yml(name: str) -> str:
    action = {
        "name": name,
        "description": f"A GitHub Action built with github-action-builder {__version__}",
        "author": "",
        "inputs": {
            "example-input": {
                "description": "An example input",
                "required": False,
                "default": "hello",
            }
        },
        "outputs": {"example-output": {"description": "An example output"}},
        "runs": {
            "using": SUPPORTED_RUNTIME,
            "main": "dist/main.js",
            "pre": "dist/pre.js",
            "post": "dist/post.js",
        },
        "branding": {"icon": "zap", "color": "blue"},
    }
    return yaml.safe_dump(action, sort_keys=False)


CONFIG_TEMPLATE = """\
# github-action-builder configuration.
# Entry points are auto-detected from src/main.ts, src/pre.ts and src/post.ts.
entries:
  main: src/main.ts
build:
  minify: true
  sourceMap: false
  target: es2022
validation:
  requireActionYml: true
  # strict: true   # unset auto-detects CI
"""

MAIN_TEMPLATE = """\
import * as core from "@actions/core";

async function run(): Promise<void> {
\ttry {
\t\tconst input = core.getInput("example-input");
\t\tcore.info(`Running main action with input: ${input}`);
\t\tcore.setOutput("example-output", "success");
\t} catch (error) {
\t\tcore.setFailed(error instanceof Error ? error.message : "An unexpected error occurred");
\t}
}

run();
"""

HOOK_TEMPLATE = """\
import * as core from "@actions/core";

async function run(): Promise<void> {{
\ttry {{
\t\tcore.info("Running {stage} action...");
\t}} catch (error) {{
\t\tcore.warning(error instanceof Error ? error.message : "{stage} step failed");
\t}}
}}

run();
"""

GITIGNORE_TEMPLATE = "node_modules/\n*.log\n"


def scaffold_files(name: str) -> Dict[str, str]:
    """Relative path -> content for a new action project."""
    return {
        "package.json": generate_package_json(name),
        "tsconfig.json": generate_tsconfig(),
        "action.yml": generate_action_yml(name),
        "action.config.yaml": CONFIG_TEMPLATE,
        "src/main.ts": MAIN_TEMPLATE,
        "src/pre.ts": HOOK_TEMPLATE.format(stage="pre"),
        "src/post.ts": HOOK_TEMPLATE.format(stage="post"),
        ".gitignore": GITIGNORE_TEMPLATE,
    }


def init_command(name: str, force: bool) -> None:
    """Create ``<name>/`` with a ready-to-build action project."""
    target_dir = os.path.abspath(name)
    if os.path.exists(target_dir) and not force:
        handle_error(
            f"Directory '{name}' already exists. Use --force to overwrite files."
        )

    tree = Tree(f"📁 {name}/")
    for relative_path, content in scaffold_files(os.path.basename(target_dir)).items():
        file_path = os.path.join(target_dir, relative_path)
        try:
            os.makedirs(os.path.dirname(file_path), exist_ok=True)
            with open(file_path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            handle_error(f"Failed to write {file_path}: {e}")
        tree.add(relative_path)

    handle_success(f"Created action project in {target_dir}")
    console.print(tree)
    typer.echo("")
    handle_info(f"Next steps: cd {name} && npm install && npm run build")
