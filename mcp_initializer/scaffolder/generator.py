"""Main scaffolding orchestrator.

Takes a ``ProjectTemplate`` and the collected ``ProjectConfig`` and writes the
project foundation (directories, baseline files, rules, PRD) and, once the
foundation is in place, the technology configuration and implementation
guide.  Every step overwrites what it writes, so re-running with the same
inputs produces the same tree.  File-system errors are not caught here; they
propagate to the calling workflow operation.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from mcp_initializer.config import Config
from mcp_initializer.errors import TemplateError
from mcp_initializer.utils import print_warning, technology_slug, write_file
from mcp_initializer.workflow.models import GeneratedDocument, ProjectConfig, ProjectTemplate

from .catalog import GENERAL_RULES, MCP_RULES, MCP_RULES_STUB, generate_gitignore, is_mcp_label
from .config_gen import ConfigFileGenerator
from .templates import TemplateRenderer


class ScaffoldBuilder:
    """Materialises the scaffold for one project root.

    Foundation (``build_foundation``), in order:
    - template directories
    - ``.gitignore``, ``README.md`` and the guidance document
    - the rules directory
    - ``PRD.md``

    Server context (``build_server_context``):
    - technology configuration files
    - ``IMPLEMENTATION.md``
    """

    def __init__(self, renderer: TemplateRenderer, config: Config | None = None) -> None:
        self.renderer = renderer
        self.config = config or Config()
        self.config_gen = ConfigFileGenerator(renderer)

    # -- Public API --------------------------------------------------------

    async def build_foundation(
        self,
        project_root: Path,
        template: ProjectTemplate,
        project: ProjectConfig,
    ) -> list[Path]:
        """Create directories, baseline files, rules and the PRD.

        Returns:
            Every file written, in write order.
        """
        await self.create_directories(project_root, template)
        written = await self.write_baseline_files(project_root, template, project)
        written += await self.write_rules(project_root, template)
        written.append(await self.write_prd(project_root, project, template))
        return written

    async def build_server_context(self, project_root: Path, project: ProjectConfig) -> list[Path]:
        """Write the technology configuration files and ``IMPLEMENTATION.md``."""
        written = list((await self.write_project_config(project_root, project)).values())
        written.append(await self.write_implementation_guide(project_root, project))
        return written

    # -- Directory structure -----------------------------------------------

    async def create_directories(self, root: Path, template: ProjectTemplate) -> None:
        def _mkdirs() -> None:
            for directory in template.directories:
                (root / directory).mkdir(parents=True, exist_ok=True)

        await asyncio.to_thread(_mkdirs)

    # -- Baseline files ----------------------------------------------------

    def baseline_documents(
        self, template: ProjectTemplate, project: ProjectConfig
    ) -> list[GeneratedDocument]:
        label = template.technology_label
        readme = self.renderer.render(
            "project-files/README.md.j2",
            {"projectName": project.name, "description": project.description},
        )
        mcp_specific = ""
        if is_mcp_label(label):
            mcp_specific = self.renderer.render("project-files/mcp-specific-content.md.j2")
        guidance = self.renderer.render(
            "project-files/CLAUDE.md.j2",
            {
                "description": project.description,
                "technology": label,
                "technologySlug": technology_slug(label),
                "mcpSpecificContent": mcp_specific,
            },
        )
        guidance_name = self.config.guidance_filename
        return [
            GeneratedDocument(filename=".gitignore", content=generate_gitignore(label), path=".gitignore"),
            GeneratedDocument(filename="README.md", content=readme, path="README.md"),
            GeneratedDocument(filename=guidance_name, content=guidance, path=guidance_name),
        ]

    async def write_baseline_files(
        self, root: Path, template: ProjectTemplate, project: ProjectConfig
    ) -> list[Path]:
        return await self._write_documents(root, self.baseline_documents(template, project))

    # -- Rules -------------------------------------------------------------

    def technology_rules(self, label: str) -> str | None:
        """Rules bundled for *label*, a stub for the MCP label, or ``None``."""
        content = self.renderer.load_raw(f"rules/{label.lower()}.md")
        if content is not None:
            return content
        if is_mcp_label(label):
            return MCP_RULES_STUB
        return None

    def rule_documents(self, template: ProjectTemplate) -> list[GeneratedDocument]:
        rules_dir = self.config.rules_subdir
        label = template.technology_label
        documents = [
            GeneratedDocument(filename="general.md", content=GENERAL_RULES, path=f"{rules_dir}/general.md")
        ]
        if is_mcp_label(label):
            documents.append(
                GeneratedDocument(filename="mcp.md", content=MCP_RULES, path=f"{rules_dir}/mcp.md")
            )
        tech_rules = self.technology_rules(label)
        if tech_rules is not None:
            filename = f"{technology_slug(label)}.md"
            documents.append(
                GeneratedDocument(filename=filename, content=tech_rules, path=f"{rules_dir}/{filename}")
            )
        return documents

    async def write_rules(self, root: Path, template: ProjectTemplate) -> list[Path]:
        await asyncio.to_thread((root / self.config.rules_subdir).mkdir, parents=True, exist_ok=True)
        return await self._write_documents(root, self.rule_documents(template))

    # -- PRD ---------------------------------------------------------------

    def prd_content(
        self,
        project: ProjectConfig,
        template: ProjectTemplate | None = None,
        include_references: bool = True,
    ) -> str:
        """Render ``PRD.md``.

        The references section lists the user's documentation URLs first,
        then the reference documents of *template* under their own heading.
        """
        additional_context = ""
        if project.custom_context:
            additional_context = f"**Additional Context**: {project.custom_context}\n\n"

        references = ""
        if include_references:
            if project.documentation_urls:
                references += "".join(f"- {url}\n" for url in project.documentation_urls)
                references += "\n"
            if template is not None and template.documentation_urls:
                references += f"### {template.technology_label} References\n\n"
                references += "".join(f"- {url}\n" for url in template.documentation_urls)
                references += "\n"
            if references:
                references = "## External Documentation References\n\n" + references

        return self.renderer.render(
            "project-files/PRD.md.j2",
            {
                "projectName": project.name,
                "technology": project.technology.value,
                "description": project.description,
                "additionalContext": additional_context,
                "externalDocumentationSection": references,
            },
        )

    async def write_prd(
        self, root: Path, project: ProjectConfig, template: ProjectTemplate | None = None
    ) -> Path:
        return await write_file(root / "PRD.md", self.prd_content(project, template))

    # -- Server context ----------------------------------------------------

    async def write_project_config(self, root: Path, project: ProjectConfig) -> dict[str, Path]:
        return await self.config_gen.generate(root, project)

    def implementation_guide(self, project: ProjectConfig) -> str:
        technology = project.technology.value
        instructions = ""
        try:
            instructions = self.renderer.render(
                f"project-files/{technology}-instructions.md.j2",
                {"projectName": project.name},
            )
        except TemplateError as exc:
            print_warning(f"Failed to load technology-specific instructions for {technology}: {exc}")

        return self.renderer.render(
            "project-files/IMPLEMENTATION.md.j2",
            {
                "projectName": project.name,
                "technology": technology,
                "technologySlug": technology_slug(technology),
                "description": project.description,
                "technologySpecificInstructions": instructions,
            },
        )

    async def write_implementation_guide(self, root: Path, project: ProjectConfig) -> Path:
        return await write_file(root / "IMPLEMENTATION.md", self.implementation_guide(project))

    # -- Internal ----------------------------------------------------------

    async def _write_documents(self, root: Path, documents: list[GeneratedDocument]) -> list[Path]:
        return [await write_file(root / document.path, document.content) for document in documents]
