"""Pydantic v2 models for the project-creation workflow.

Defines the step and technology enumerations, the mutable per-session
``WorkflowState``, the frozen ``ProjectConfig`` snapshot used for generation,
and the ``ToolResponse`` returned by every workflow operation.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Step(str, Enum):
    """Workflow stage, in the order the caller must reach them."""
    STARTED = "started"
    NAME_SET = "name_set"
    DIRECTORY_SET = "directory_set"
    TECHNOLOGY_SET = "technology_set"
    DESCRIPTION_SET = "description_set"
    DOCS_ADDED = "docs_added"
    FOUNDATION_READY = "foundation_ready"
    COMPLETED = "completed"

    @property
    def index(self) -> int:
        return STEP_ORDER.index(self)

    def reached(self, other: "Step") -> bool:
        """Return ``True`` if this step is *other* or later."""
        return self.index >= other.index


STEP_ORDER: tuple[Step, ...] = tuple(Step)


class Technology(str, Enum):
    """Technology stacks a generated MCP server can target."""
    TYPESCRIPT = "typescript"
    PYTHON = "python"


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------

class WorkflowState(BaseModel):
    """Everything collected so far in one project-creation conversation."""

    model_config = ConfigDict(validate_assignment=True)

    step: Step = Field(default=Step.STARTED)
    project_name: Optional[str] = None
    project_directory: Optional[str] = None
    technology: Optional[Technology] = None
    description: Optional[str] = None
    documentation_urls: Optional[list[str]] = None
    custom_context: Optional[str] = None
    foundation_setup: bool = False
    waiting_for_confirmation: bool = False
    last_action: Optional[str] = None

    def missing_fields(self) -> list[str]:
        """Names of required fields that are still unset."""
        required = {
            "project_name": self.project_name,
            "project_directory": self.project_directory,
            "technology": self.technology,
            "description": self.description,
        }
        return [name for name, value in required.items() if not value]


class ProjectConfig(BaseModel):
    """Immutable snapshot of the collected configuration used for generation."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project (and folder) name")
    description: str = Field(..., description="What the MCP server should accomplish")
    technology: Technology
    documentation_urls: Optional[tuple[str, ...]] = None
    custom_context: Optional[str] = None

    @classmethod
    def from_state(cls, state: WorkflowState) -> "ProjectConfig":
        urls = state.documentation_urls
        return cls(
            name=state.project_name,
            description=state.description,
            technology=state.technology,
            documentation_urls=tuple(urls) if urls is not None else None,
            custom_context=state.custom_context,
        )


# ---------------------------------------------------------------------------
# Scaffold descriptors
# ---------------------------------------------------------------------------

class GeneratedDocument(BaseModel):
    """A file produced by the scaffold pipeline."""
    filename: str
    content: str
    path: str


class ProjectTemplate(BaseModel):
    """Resolved per-technology scaffold descriptor."""
    technology_label: str
    documentation_urls: list[str] = Field(default_factory=list)
    directories: list[str] = Field(default_factory=list)
    files: list[GeneratedDocument] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Tool responses
# ---------------------------------------------------------------------------

class TextContent(BaseModel):
    """A single text block of a tool response."""
    type: str = "text"
    text: str


class ToolResponse(BaseModel):
    """Human-readable result of one workflow operation plus an error flag."""

    content: list[TextContent] = Field(default_factory=list)
    is_error: bool = False

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    @classmethod
    def ok(cls, text: str) -> "ToolResponse":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def error(cls, message: str) -> "ToolResponse":
        return cls(content=[TextContent(text=f"❌ **Error**: {message}")], is_error=True)
