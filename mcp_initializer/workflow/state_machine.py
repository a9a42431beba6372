"""Declarative step-ordering rules for the project-creation conversation.

The whole workflow is one table of ``Transition`` rows.  The only non-linear
edge, skipping documentation when foundation setup is requested straight
after the description, is a row of its own (``SKIP_DOCUMENTATION``) wired to
``SETUP_FOUNDATION`` through ``SHORTCUTS`` rather than special-cased in the
session code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mcp_initializer.errors import StepOrderViolation
from mcp_initializer.workflow.models import Step, WorkflowState


class Operation(str, Enum):
    """State-changing workflow operations."""
    SET_NAME = "set_name"
    SET_DIRECTORY = "set_directory"
    SET_TECHNOLOGY = "set_technology"
    SET_DESCRIPTION = "set_description"
    ADD_DOCUMENTATION = "add_documentation"
    SKIP_DOCUMENTATION = "skip_documentation"
    SETUP_FOUNDATION = "setup_foundation"
    GENERATE_SERVER = "generate_server"


@dataclass(frozen=True)
class Transition:
    operation: Operation
    source: Step
    target: Step


TRANSITIONS: tuple[Transition, ...] = (
    Transition(Operation.SET_NAME, Step.STARTED, Step.NAME_SET),
    Transition(Operation.SET_DIRECTORY, Step.NAME_SET, Step.DIRECTORY_SET),
    Transition(Operation.SET_TECHNOLOGY, Step.DIRECTORY_SET, Step.TECHNOLOGY_SET),
    Transition(Operation.SET_DESCRIPTION, Step.TECHNOLOGY_SET, Step.DESCRIPTION_SET),
    Transition(Operation.ADD_DOCUMENTATION, Step.DESCRIPTION_SET, Step.DOCS_ADDED),
    Transition(Operation.SKIP_DOCUMENTATION, Step.DESCRIPTION_SET, Step.DOCS_ADDED),
    Transition(Operation.SETUP_FOUNDATION, Step.DOCS_ADDED, Step.FOUNDATION_READY),
    Transition(Operation.GENERATE_SERVER, Step.FOUNDATION_READY, Step.COMPLETED),
)

# operation -> implicit transition that may run first when the direct one does not apply
SHORTCUTS: dict[Operation, Operation] = {
    Operation.SETUP_FOUNDATION: Operation.SKIP_DOCUMENTATION,
}

ORDER_HINTS: dict[Operation, str] = {
    Operation.SET_NAME: (
        "The project name can only be set at the beginning of a project. "
        "Use start_mcp_project to begin a new project."
    ),
    Operation.SET_DIRECTORY: (
        "You must complete the previous step first. Please set the project name "
        "using set_project_name before setting the directory."
    ),
    Operation.SET_TECHNOLOGY: (
        "You must complete the previous step first. Please set the project directory "
        "using set_project_directory before choosing technology."
    ),
    Operation.SET_DESCRIPTION: (
        "You must complete the previous step first. Please set the technology "
        "using set_project_technology before providing a description."
    ),
    Operation.ADD_DOCUMENTATION: (
        "You must complete the previous step first. Please set the project description "
        "using set_project_description before adding documentation."
    ),
    Operation.SKIP_DOCUMENTATION: (
        "You must complete the project description step first."
    ),
    Operation.SETUP_FOUNDATION: (
        "You must complete the project description step first. Please use "
        "set_project_description before setting up the foundation."
    ),
    Operation.GENERATE_SERVER: (
        "Please setup the project foundation first using setup_project_foundation."
    ),
}


class StateMachine:
    """Answers "may *operation* run now, and where does it lead?"."""

    def __init__(
        self,
        transitions: tuple[Transition, ...] = TRANSITIONS,
        shortcuts: dict[Operation, Operation] | None = None,
    ) -> None:
        self.transitions = transitions
        self.shortcuts = dict(SHORTCUTS if shortcuts is None else shortcuts)

    def transition_for(self, operation: Operation, step: Step) -> Transition | None:
        for transition in self.transitions:
            if transition.operation is operation and transition.source is step:
                return transition
        return None

    def sources(self, operation: Operation) -> tuple[Step, ...]:
        """Every step from which *operation* is legal, shortcuts included."""
        steps = [t.source for t in self.transitions if t.operation is operation]
        shortcut = self.shortcuts.get(operation)
        if shortcut is not None:
            for first in self.transitions:
                if first.operation is shortcut and first.target in steps:
                    steps.append(first.source)
        return tuple(dict.fromkeys(steps))

    def plan(self, operation: Operation, step: Step) -> tuple[Transition, ...]:
        """Return the transitions *operation* performs from *step*.

        Normally a single transition; two when a shortcut applies.

        Raises:
            StepOrderViolation: if *operation* is not legal from *step*.
        """
        direct = self.transition_for(operation, step)
        if direct is not None:
            return (direct,)

        shortcut = self.shortcuts.get(operation)
        if shortcut is not None:
            first = self.transition_for(shortcut, step)
            if first is not None:
                second = self.transition_for(operation, first.target)
                if second is not None:
                    return (first, second)

        raise StepOrderViolation(
            operation.value,
            step.value,
            tuple(s.value for s in self.sources(operation)),
            ORDER_HINTS[operation],
        )

    def target(self, operation: Operation, step: Step) -> Step:
        """Final step reached by *operation* from *step*."""
        return self.plan(operation, step)[-1].target

    def allowed_operations(self, step: Step) -> list[Operation]:
        allowed: list[Operation] = []
        for operation in Operation:
            if operation in self.shortcuts.values():
                continue
            try:
                self.plan(operation, step)
            except StepOrderViolation:
                continue
            allowed.append(operation)
        return allowed


# ---------------------------------------------------------------------------
# Status rendering
# ---------------------------------------------------------------------------

STEP_LABELS: dict[Step, str] = {
    Step.STARTED: "Project Creation Started",
    Step.NAME_SET: "Project Name",
    Step.DIRECTORY_SET: "Project Directory",
    Step.TECHNOLOGY_SET: "Technology Choice",
    Step.DESCRIPTION_SET: "Project Description",
    Step.DOCS_ADDED: "Documentation Added",
    Step.FOUNDATION_READY: "Project Foundation Setup",
    Step.COMPLETED: "MCP Server Generated",
}

WAITING_MESSAGES: dict[Step, str] = {
    Step.STARTED: "Waiting for project name",
    Step.NAME_SET: "Waiting for project directory",
    Step.DIRECTORY_SET: "Waiting for technology choice",
    Step.TECHNOLOGY_SET: "Waiting for project description",
    Step.DESCRIPTION_SET: "Waiting for documentation (or ready for setup)",
    Step.DOCS_ADDED: "Ready for project foundation setup",
    Step.FOUNDATION_READY: "Ready to generate MCP server code",
    Step.COMPLETED: "Project completed!",
}


def step_checklist(state: WorkflowState) -> list[tuple[Step, bool, str | None]]:
    """``(step, done, value)`` for every step, derived only from *state*."""
    technology = state.technology.value if state.technology else None
    return [
        (Step.STARTED, state.step is not Step.STARTED, None),
        (Step.NAME_SET, bool(state.project_name), state.project_name),
        (Step.DIRECTORY_SET, bool(state.project_directory), state.project_directory),
        (Step.TECHNOLOGY_SET, bool(technology), technology),
        (Step.DESCRIPTION_SET, bool(state.description), state.description),
        (Step.DOCS_ADDED, state.step.reached(Step.DOCS_ADDED), None),
        (Step.FOUNDATION_READY, state.foundation_setup, None),
        (Step.COMPLETED, state.step is Step.COMPLETED, None),
    ]


def describe_status(state: WorkflowState) -> str:
    lines = ["🗣️ **MCP Project Creation Status**", ""]
    for step, done, value in step_checklist(state):
        icon = "✅" if done else "⏳"
        line = f"{icon} **{STEP_LABELS[step]}**"
        if value:
            line += f": {value}"
        lines.append(line)
    lines.append("")
    lines.append(f"**Current Step**: {WAITING_MESSAGES[state.step]}")
    return "\n".join(lines)
