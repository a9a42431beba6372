"""Session facade for the MCP project-creation workflow.

``ProjectInitializer`` owns one conversation: its ``WorkflowState``, the
frozen ``ProjectConfig`` built at foundation setup, and the current working
root.  Every public coroutine returns a ``ToolResponse``; validation, ordering,
template and file-system failures come back as error responses rather than
exceptions, and never leave the state half-updated.

Typical usage::

    session = ProjectInitializer()
    await session.start()
    await session.set_name({"name": "weather-mcp"})
    await session.set_directory({"directory": "/home/me/projects"})
    await session.set_technology({"technology": "python"})
    await session.set_description({"description": "Forecasts for any city"})
    await session.setup_foundation()
    await session.generate_server()
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Any

import httpx

from mcp_initializer.config import Config
from mcp_initializer.errors import InitializerError, MissingConfiguration, StepOrderViolation
from mcp_initializer.scaffolder import (
    DocumentationFetcher,
    FetchOutcome,
    ScaffoldBuilder,
    TemplateRenderer,
    resolve_template,
)
from mcp_initializer.utils import print_info
from mcp_initializer.workflow.models import ProjectConfig, Technology, ToolResponse, WorkflowState
from mcp_initializer.workflow.state_machine import Operation, StateMachine, describe_status
from mcp_initializer.workflow.validation import (
    ConfirmationArgs,
    DescriptionArgs,
    DirectoryArgs,
    DocumentationArgs,
    NameArgs,
    TechnologyArgs,
    validate_args,
)


class ProjectInitializer:
    """One project-creation conversation.

    Attributes:
        config: Initializer configuration.
        state: Collected answers and the current step.
        project: Frozen configuration, set once the foundation is built.
        working_directory: Root that generation writes into; becomes the
            project folder after foundation setup.
        last_fetch: Per-URL outcomes of the most recent documentation fetch.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        working_directory: str | Path | None = None,
    ) -> None:
        self.config = config or Config()
        self.machine = StateMachine()
        self.renderer = TemplateRenderer(
            self.config.template_dir, undefined=self.config.undefined_placeholders
        )
        self.fetcher = DocumentationFetcher(self.config.fetch, client=client)
        self.builder = ScaffoldBuilder(self.renderer, self.config)

        self._initial_directory = Path(working_directory) if working_directory else Path.cwd()
        self.working_directory = self._initial_directory
        self.state = WorkflowState()
        self.project: ProjectConfig | None = None
        self.last_fetch: list[FetchOutcome] = []

    # ------------------------------------------------------------------
    # Steps 1-5: collecting answers
    # ------------------------------------------------------------------

    async def start(self, args: Any = None) -> ToolResponse:
        """Begin (or restart) a project-creation conversation."""
        self.state = WorkflowState()
        self.project = None
        self.working_directory = self._initial_directory
        self.last_fetch = []
        return ToolResponse.ok(
            "🚀 Welcome! I'll help you create a new MCP Server project.\n\n"
            "⚠️  **IMPORTANT**: This is an interactive process that requires your input "
            "for each step. Please do not proceed to the next step until I explicitly ask for it.\n\n"
            "📝 **Step 1**: What would you like to name your project?\n\n"
            "🔸 **ACTION REQUIRED**: Please use the `set_project_name` tool with your desired "
            "project name (e.g., 'hello-world-mcp', 'task-manager-mcp').\n\n"
            "❌ **Do not proceed** to other steps until you complete this one."
        )

    async def set_name(self, args: Any = None) -> ToolResponse:
        try:
            target = self.machine.target(Operation.SET_NAME, self.state.step)
            name = validate_args(NameArgs, args).name
        except InitializerError as exc:
            return _failure("Failed to set project name", exc)

        self._commit(step=target, project_name=name)
        return ToolResponse.ok(
            f"✅ Great! Project name set to: **{name}**\n\n"
            "📝 **Step 2**: Where would you like to create the project?\n\n"
            "🔸 **ACTION REQUIRED**: Please use the `set_project_directory` tool with an ABSOLUTE path:\n\n"
            "⚠️  **ABSOLUTE PATHS ONLY**:\n"
            '• ✅ "/Users/yourname/Projects"\n'
            '• ✅ "/home/user/workspace"\n'
            '• ❌ "." (relative paths NOT allowed)\n'
            '• ❌ "../my-projects" (relative paths NOT allowed)\n\n'
            f'The project folder "{name}" will be created inside this directory.\n\n'
            "🛑 **STOP**: Do not proceed to technology selection until you complete this step."
        )

    async def set_directory(self, args: Any = None) -> ToolResponse:
        try:
            target = self.machine.target(Operation.SET_DIRECTORY, self.state.step)
            directory = validate_args(DirectoryArgs, args).directory
        except InitializerError as exc:
            return _failure("Failed to set project directory", exc)

        self._commit(step=target, project_directory=directory)
        options = "\n".join(
            f"• **{tech.value}** - For {label}-based MCP servers"
            for tech, label in ((Technology.TYPESCRIPT, "Node.js"), (Technology.PYTHON, "Python"))
        )
        return ToolResponse.ok(
            f"✅ Perfect! Project directory set to: **{directory}**\n\n"
            "📝 **Step 3**: Which technology would you like to use?\n\n"
            "🔸 **ACTION REQUIRED**: Please use the `set_project_technology` tool with one of these options:\n"
            f"{options}\n\n"
            "❌ **Do not proceed** to the next step until you make your technology choice."
        )

    async def set_technology(self, args: Any = None) -> ToolResponse:
        try:
            target = self.machine.target(Operation.SET_TECHNOLOGY, self.state.step)
            technology = validate_args(TechnologyArgs, args).technology
        except InitializerError as exc:
            return _failure("Failed to set technology", exc)

        self._commit(step=target, technology=technology)
        return ToolResponse.ok(
            f"✅ Excellent! Technology set to: **{technology.value}**\n\n"
            "📝 **Step 4**: What should your MCP server accomplish?\n\n"
            "🔸 **ACTION REQUIRED**: Please use the `set_project_description` tool to provide a "
            "high-level overview. The AI will generate a comprehensive Product Requirements "
            "Document (PRD) from your input.\n\n"
            "**Examples of good input:**\n"
            '• "Help users manage and track daily tasks with reminders"\n'
            '• "Provide weather information and forecasts for any location"\n\n'
            "❌ **Do not proceed** until you provide your project overview."
        )

    async def set_description(self, args: Any = None) -> ToolResponse:
        try:
            target = self.machine.target(Operation.SET_DESCRIPTION, self.state.step)
            description = validate_args(DescriptionArgs, args).description
        except InitializerError as exc:
            return _failure("Failed to set description", exc)

        self._commit(step=target, description=description)
        return ToolResponse.ok(
            f"✅ Perfect! Description captured: **{description}**\n\n"
            "📝 **Step 5**: Do you have any additional documentation or specifications?\n\n"
            "🔸 **ACTION REQUIRED**: Please use the `add_project_documentation` tool if you have:\n"
            "• API specification URLs\n"
            "• Documentation links\n"
            "• Additional context as text\n\n"
            "💡 **Or if no additional documentation**: You can proceed directly to "
            "`setup_project_foundation` to continue.\n\n"
            "❌ **Do not proceed** until you explicitly choose one of these options."
        )

    async def add_documentation(self, args: Any = None) -> ToolResponse:
        try:
            target = self.machine.target(Operation.ADD_DOCUMENTATION, self.state.step)
            docs = validate_args(DocumentationArgs, args)
        except InitializerError as exc:
            return _failure("Failed to add documentation", exc)

        self._commit(
            step=target,
            documentation_urls=docs.documentation_urls,
            custom_context=docs.custom_context,
            waiting_for_confirmation=True,
        )

        lines = ["✅ Documentation added!"]
        if docs.documentation_urls:
            lines.append(f"• URLs: {len(docs.documentation_urls)} links provided")
        if docs.custom_context:
            lines.append("• Additional context: Provided")
        lines += [
            "",
            "🎯 **Ready for Setup!**",
            "",
            "I now have everything I need:",
            f"• **Project**: {self.state.project_name}",
            f"• **Technology**: {self.state.technology.value}",
            f"• **Purpose**: {self.state.description}",
        ]
        if docs.documentation_urls or docs.custom_context:
            lines.append("• **Documentation**: Provided")
        lines += [
            "",
            "🔸 **CONFIRMATION REQUIRED**: Are you ready to proceed with setting up the project "
            "foundation?\n\nThis will create the project structure, development rules, and documentation.",
            "",
            '⚠️  **USER CONFIRMATION REQUIRED**: Please use the `confirm_and_proceed` tool with '
            'confirmation="YES" to proceed, OR use `setup_project_foundation` directly if you\'re ready.',
            "",
            "🛑 **STOP**: Do not proceed until you explicitly confirm or call the setup tool.",
        ]
        return ToolResponse.ok("\n".join(lines))

    # ------------------------------------------------------------------
    # Steps 6-7: generation
    # ------------------------------------------------------------------

    async def setup_foundation(self, args: Any = None) -> ToolResponse:
        """Create the project folder, fetch documentation and write the foundation.

        Allowed after the description (documentation is then treated as
        skipped) or after documentation was added.  State is committed only
        once every file has been written.
        """
        try:
            target = self.machine.target(Operation.SETUP_FOUNDATION, self.state.step)
            missing = self.state.missing_fields()
            if missing:
                raise MissingConfiguration(
                    "Missing required project information "
                    f"({', '.join(missing)}). Please complete all previous steps."
                )
            project = ProjectConfig.from_state(self.state)
            project_root = Path(os.path.abspath(self.state.project_directory)) / project.name
            await asyncio.to_thread(project_root.mkdir, parents=True, exist_ok=True)

            template = resolve_template(project.technology.value)
            print_info(f"Setting up {template.technology_label} project in {project_root}")
            outcomes = await self.fetcher.fetch(
                project.technology.value,
                project.documentation_urls,
                project_root / self.config.docs_subdir,
            )
            await self.builder.build_foundation(project_root, template, project)
        except (InitializerError, OSError) as exc:
            return _failure("Failed to setup project foundation", exc)

        self.project = project
        self.working_directory = project_root
        self.last_fetch = outcomes
        self._commit(
            step=target,
            foundation_setup=True,
            waiting_for_confirmation=True,
            last_action="setup_foundation",
        )
        return ToolResponse.ok(self._foundation_report(project, project_root, outcomes))

    async def generate_server(self, args: Any = None) -> ToolResponse:
        """Write the technology configuration and the implementation guide."""
        try:
            target = self.machine.target(Operation.GENERATE_SERVER, self.state.step)
            project = self.project
            if project is None:
                raise MissingConfiguration("No project configuration found.")
            await self.builder.build_server_context(self.working_directory, project)
        except (InitializerError, OSError) as exc:
            return _failure("Failed to prepare project for AI implementation", exc)

        self._commit(step=target, waiting_for_confirmation=False, last_action="generate_server")
        config_files = (
            "package.json & tsconfig.json"
            if project.technology is Technology.TYPESCRIPT
            else "requirements.txt & pyproject.toml"
        )
        guidance = self.config.guidance_filename
        rules = self.config.rules_subdir
        return ToolResponse.ok(
            "🚀 **Project Context Prepared for AI Implementation!**\n\n"
            "✓ Generated project configuration files\n"
            "✓ Created comprehensive implementation guidance\n"
            "✓ Prepared all context files for AI development\n\n"
            "🎯 **Your Project is Ready for AI Implementation!**\n\n"
            "**Context Files Created:**\n"
            "• PRD.md - Complete project requirements and specifications\n"
            "• IMPLEMENTATION.md - Detailed implementation guidance for AI\n"
            f"• {guidance} - AI development instructions and context file list\n"
            f"• {rules}/ - Development standards and coding best practices\n"
            f"• {self.config.docs_subdir}/ - API documentation and MCP compatibility info\n"
            f"• {config_files} - Project configuration\n\n"
            f"**What your MCP server should do:**\n{project.description}\n\n"
            "**🤖 Next Steps for AI Implementation:**\n"
            f"1. **Read all context files** - Start with {guidance} for the complete file list\n"
            "2. **Review IMPLEMENTATION.md** - Contains specific guidance for implementing your MCP server\n"
            "3. **Follow the PRD.md** - Contains complete functional requirements\n"
            f"4. **Apply coding standards** - Use rules from {rules}/\n"
            "5. **Test thoroughly** - Follow testing patterns from the rules\n\n"
            f"📁 Project location: {self.working_directory}"
        )

    # ------------------------------------------------------------------
    # Ordering-exempt operations
    # ------------------------------------------------------------------

    async def confirm(self, args: Any = None) -> ToolResponse:
        """Record an explicit user confirmation; never changes the step."""
        try:
            confirmation = validate_args(ConfirmationArgs, args).confirmation
        except InitializerError as exc:
            return _failure("Confirmation failed", exc)

        self._commit(
            waiting_for_confirmation=False,
            last_action=f"User confirmed with: {confirmation}",
        )
        return ToolResponse.ok(
            f'✅ **Confirmed with "{confirmation}"!** You can now proceed to the next step.\n\n'
            "🔸 **Next Action**: Please use the appropriate tool to continue (e.g., "
            "`setup_project_foundation` or `generate_mcp_server` depending on your current step)."
        )

    async def get_status(self, args: Any = None) -> ToolResponse:
        return ToolResponse.ok(describe_status(self.state))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _commit(self, **changes: Any) -> None:
        """Replace the state in one assignment so it is never half-updated."""
        self.state = self.state.model_copy(update=changes)

    def _foundation_report(
        self, project: ProjectConfig, root: Path, outcomes: list[FetchOutcome]
    ) -> str:
        essential = [o for o in outcomes if o.essential]
        extra = [o for o in outcomes if not o.essential]
        lines = [
            f"🚀 Setting up project foundation for: **{project.name}**",
            "",
            f"📁 Creating project in: {root}",
            "",
            f"✓ Fetched {project.technology.value} best practices and rules",
            f"✓ Downloaded {sum(o.ok for o in essential)} of {len(essential)} "
            "essential MCP documentation and SDK docs",
        ]
        if extra:
            lines.append(
                f"✓ Downloaded {sum(o.ok for o in extra)} of {len(extra)} additional documentation sources"
            )
        for outcome in outcomes:
            if not outcome.ok:
                lines.append(f"⚠️ Skipped {outcome.url}: {outcome.error}")
        guidance = self.config.guidance_filename
        lines += [
            "✓ Created project directory structure",
            "✓ Generated Product Requirements Document",
            "",
            "🎉 **Project foundation is ready!**",
            "",
            "**Created files:**",
            f"• {guidance} - AI development guidance",
            f"• {self.config.rules_subdir}/ - Development best practices",
            "• PRD.md - Product Requirements Document",
            "• Project structure and documentation",
            "",
            "**Next step:** Ready to generate your MCP server implementation!",
            "",
            "🔸 **CONFIRMATION REQUIRED**: Are you ready to generate the complete MCP server code?",
            "",
            '⚠️  **USER CONFIRMATION REQUIRED**: Please use the `confirm_and_proceed` tool with '
            'confirmation="YES" to proceed, OR use `generate_mcp_server` directly if you\'re ready.',
            "",
            "🛑 **STOP**: Do not proceed until you explicitly confirm or call the generation tool.",
        ]
        return "\n".join(lines)


def _failure(prefix: str, exc: Exception) -> ToolResponse:
    """Format a caught failure; ordering violations carry their own wording."""
    if isinstance(exc, StepOrderViolation):
        return ToolResponse.error(str(exc))
    return ToolResponse.error(f"{prefix}: {exc}")
