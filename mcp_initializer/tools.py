"""Tool catalogue and dispatcher for the project-creation workflow.

``TOOL_DEFINITIONS`` describes every tool the way an MCP ``tools/list``
response does (name, description, JSON input schema).  ``ToolDispatcher``
routes a tool name plus its JSON arguments to the matching
``ProjectInitializer`` coroutine.  Whatever happens, the caller receives a
``ToolResponse``; unknown tools and unexpected exceptions are reported with
``is_error=True``.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from pydantic import BaseModel, Field

from mcp_initializer.session import ProjectInitializer
from mcp_initializer.utils import print_error
from mcp_initializer.workflow.models import Technology, ToolResponse
from mcp_initializer.workflow.validation import CONFIRMATION_WORDS


class ToolDefinition(BaseModel):
    """A tool advertised to MCP clients."""

    name: str
    description: str
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )
    method: str = Field(..., description="ProjectInitializer coroutine that handles the tool")


def _schema(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="start_mcp_project",
        description="Begin the interactive process of creating a new MCP server project",
        method="start",
    ),
    ToolDefinition(
        name="set_project_name",
        description="Set the name for the MCP server project",
        input_schema=_schema(
            {"name": {"type": "string", "description": "The project name (e.g., 'hello-world-mcp')"}},
            ["name"],
        ),
        method="set_name",
    ),
    ToolDefinition(
        name="set_project_directory",
        description="Set the ABSOLUTE directory path where the project should be created",
        input_schema=_schema(
            {
                "directory": {
                    "type": "string",
                    "description": (
                        "ABSOLUTE directory path where to create the project. Must start with '/' "
                        "(e.g., '/Users/yourname/Projects', '/home/user/workspace'). "
                        "Relative paths are NOT allowed."
                    ),
                }
            },
            ["directory"],
        ),
        method="set_directory",
    ),
    ToolDefinition(
        name="set_project_technology",
        description="Set the technology stack for the MCP server",
        input_schema=_schema(
            {
                "technology": {
                    "type": "string",
                    "enum": [t.value for t in Technology],
                    "description": "The technology to use for the MCP server",
                }
            },
            ["technology"],
        ),
        method="set_technology",
    ),
    ToolDefinition(
        name="set_project_description",
        description=(
            "Provide requirements for AI to generate a comprehensive "
            "Product Requirements Document (PRD)"
        ),
        input_schema=_schema(
            {
                "description": {
                    "type": "string",
                    "description": "High-level overview of what the MCP server should accomplish.",
                }
            },
            ["description"],
        ),
        method="set_description",
    ),
    ToolDefinition(
        name="add_project_documentation",
        description="Add additional documentation, API specs, or links to the project",
        input_schema=_schema(
            {
                "documentationUrls": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "URLs to API specs, documentation, or other references",
                },
                "customContext": {
                    "type": "string",
                    "description": "Additional context, requirements, or documentation as text",
                },
            }
        ),
        method="add_documentation",
    ),
    ToolDefinition(
        name="setup_project_foundation",
        description="Create the project structure with rules, documentation, and PRD",
        method="setup_foundation",
    ),
    ToolDefinition(
        name="generate_mcp_server",
        description=(
            "Generate the complete MCP server implementation context "
            "based on all gathered requirements"
        ),
        method="generate_server",
    ),
    ToolDefinition(
        name="confirm_and_proceed",
        description="User explicitly confirms they want to proceed to the next step",
        input_schema=_schema(
            {
                "confirmation": {
                    "type": "string",
                    "enum": list(CONFIRMATION_WORDS),
                    "description": "User must explicitly type YES, PROCEED, or CONTINUE to confirm",
                }
            },
            ["confirmation"],
        ),
        method="confirm",
    ),
    ToolDefinition(
        name="get_conversation_status",
        description="Get the current status of the project creation conversation",
        method="get_status",
    ),
)


class ToolDispatcher:
    """Routes tool calls to one ``ProjectInitializer`` session."""

    def __init__(self, session: ProjectInitializer | None = None) -> None:
        self.session = session or ProjectInitializer()
        self._definitions = {tool.name: tool for tool in TOOL_DEFINITIONS}

    def list_tools(self) -> list[dict[str, Any]]:
        """Tool descriptors in MCP ``tools/list`` shape."""
        return [
            {"name": t.name, "description": t.description, "inputSchema": t.input_schema}
            for t in TOOL_DEFINITIONS
        ]

    def handler(self, name: str) -> Callable[[Any], Awaitable[ToolResponse]] | None:
        definition = self._definitions.get(name)
        if definition is None:
            return None
        return getattr(self.session, definition.method)

    async def dispatch(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResponse:
        handler = self.handler(name)
        try:
            if handler is None:
                raise LookupError(f"Unknown tool: {name}")
            return await handler(arguments)
        except Exception as exc:  # noqa: BLE001
            print_error(f"Error executing tool {name}: {exc}")
            return ToolResponse.error(f"Error executing tool {name}: {exc}")
