"""Technology-specific project configuration files.

TypeScript projects get ``package.json`` and ``tsconfig.json``; Python
projects get ``requirements.txt`` and ``pyproject.toml``.  JSON bodies are
built as dicts and serialised; ``pyproject.toml`` is rendered from a template
so string values are quoted safely.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from mcp_initializer.utils import write_file
from mcp_initializer.workflow.models import ProjectConfig, Technology

from .templates import TemplateRenderer


PYTHON_REQUIREMENTS = """# MCP Python Requirements
mcp>=1.0.0

# Development dependencies
pytest>=7.0.0
pytest-asyncio>=0.21.0
black>=23.0.0
isort>=5.12.0
mypy>=1.0.0
"""

TSCONFIG: dict[str, Any] = {
    "compilerOptions": {
        "target": "ES2022",
        "module": "ESNext",
        "moduleResolution": "node",
        "outDir": "./build",
        "rootDir": "./src",
        "strict": True,
        "esModuleInterop": True,
        "skipLibCheck": True,
        "forceConsistentCasingInFileNames": True,
        "declaration": True,
        "declarationMap": True,
        "sourceMap": True,
        "noUncheckedIndexedAccess": True,
        "exactOptionalPropertyTypes": True,
    },
    "include": ["src/**/*"],
    "exclude": ["node_modules", "build", "tests"],
}


def package_json(project: ProjectConfig) -> dict[str, Any]:
    """Build the ``package.json`` manifest for a TypeScript MCP server."""
    return {
        "name": project.name,
        "version": "1.0.0",
        "description": project.description,
        "main": "build/index.js",
        "type": "module",
        "bin": {project.name: "./build/index.js"},
        "scripts": {
            "build": "tsc",
            "dev": "tsc --watch",
            "start": "node build/index.js",
            "test": "jest",
            "clean": "rm -rf build/",
            "lint": "eslint src/**/*.ts",
            "typecheck": "tsc --noEmit",
        },
        "keywords": ["mcp", "ai", "assistant", "typescript"],
        "author": "",
        "license": "MIT",
        "dependencies": {"@modelcontextprotocol/sdk": "^1.0.0"},
        "devDependencies": {
            "@types/node": "^22.0.0",
            "@types/jest": "^29.0.0",
            "@typescript-eslint/eslint-plugin": "^8.0.0",
            "@typescript-eslint/parser": "^8.0.0",
            "eslint": "^9.0.0",
            "jest": "^29.0.0",
            "ts-jest": "^29.0.0",
            "typescript": "^5.6.0",
        },
        "engines": {"node": ">=18.0.0"},
    }


class ConfigFileGenerator:
    """Writes the build configuration for the chosen technology."""

    PYPROJECT_TEMPLATE = "project-files/pyproject.toml.j2"

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate(self, project_root: Path, project: ProjectConfig) -> dict[str, Path]:
        """Write the configuration files for *project* under *project_root*.

        Returns:
            Mapping of file name to written path.
        """
        if project.technology is Technology.TYPESCRIPT:
            return await self._generate_typescript(project_root, project)
        return await self._generate_python(project_root, project)

    async def _generate_typescript(self, root: Path, project: ProjectConfig) -> dict[str, Path]:
        return {
            "package.json": await write_file(
                root / "package.json", json.dumps(package_json(project), indent=2)
            ),
            "tsconfig.json": await write_file(
                root / "tsconfig.json", json.dumps(TSCONFIG, indent=2)
            ),
        }

    async def _generate_python(self, root: Path, project: ProjectConfig) -> dict[str, Path]:
        written = {
            "requirements.txt": await write_file(root / "requirements.txt", PYTHON_REQUIREMENTS),
        }
        written["pyproject.toml"] = await self.renderer.render_to_file(
            self.PYPROJECT_TEMPLATE,
            root / "pyproject.toml",
            {"projectName": project.name, "description": project.description},
        )
        return written
