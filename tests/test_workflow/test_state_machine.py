"""Unit tests for the step-ordering table (mcp_initializer.workflow.state_machine).

Tests cover:
- Direct transitions for every operation
- The documentation shortcut taken by foundation setup
- StepOrderViolation contents
- allowed_operations and describe_status
"""

from __future__ import annotations

import pytest

from mcp_initializer.errors import StepOrderViolation
from mcp_initializer.workflow.models import Step, Technology, WorkflowState
from mcp_initializer.workflow.state_machine import (
    ORDER_HINTS,
    TRANSITIONS,
    Operation,
    StateMachine,
    describe_status,
    step_checklist,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def machine() -> StateMachine:
    return StateMachine()


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

class TestTransitions:
    @pytest.mark.parametrize(
        "operation,source,target",
        [
            (Operation.SET_NAME, Step.STARTED, Step.NAME_SET),
            (Operation.SET_DIRECTORY, Step.NAME_SET, Step.DIRECTORY_SET),
            (Operation.SET_TECHNOLOGY, Step.DIRECTORY_SET, Step.TECHNOLOGY_SET),
            (Operation.SET_DESCRIPTION, Step.TECHNOLOGY_SET, Step.DESCRIPTION_SET),
            (Operation.ADD_DOCUMENTATION, Step.DESCRIPTION_SET, Step.DOCS_ADDED),
            (Operation.SETUP_FOUNDATION, Step.DOCS_ADDED, Step.FOUNDATION_READY),
            (Operation.GENERATE_SERVER, Step.FOUNDATION_READY, Step.COMPLETED),
        ],
    )
    def test_direct_transition(self, machine, operation, source, target):
        assert machine.target(operation, source) is target
        assert len(machine.plan(operation, source)) == 1

    def test_every_transition_moves_forward(self):
        for transition in TRANSITIONS:
            assert transition.target.index == transition.source.index + 1

    def test_foundation_from_description_takes_shortcut(self, machine):
        plan = machine.plan(Operation.SETUP_FOUNDATION, Step.DESCRIPTION_SET)
        assert [t.operation for t in plan] == [
            Operation.SKIP_DOCUMENTATION,
            Operation.SETUP_FOUNDATION,
        ]
        assert machine.target(Operation.SETUP_FOUNDATION, Step.DESCRIPTION_SET) is Step.FOUNDATION_READY

    def test_sources_include_shortcut_origin(self, machine):
        assert machine.sources(Operation.SETUP_FOUNDATION) == (Step.DOCS_ADDED, Step.DESCRIPTION_SET)

    def test_machine_without_shortcuts(self):
        machine = StateMachine(shortcuts={})
        with pytest.raises(StepOrderViolation):
            machine.plan(Operation.SETUP_FOUNDATION, Step.DESCRIPTION_SET)


# ---------------------------------------------------------------------------
# Violations
# ---------------------------------------------------------------------------

class TestViolations:
    @pytest.mark.parametrize(
        "operation,step",
        [
            (Operation.SET_NAME, Step.NAME_SET),
            (Operation.SET_DIRECTORY, Step.STARTED),
            (Operation.SET_TECHNOLOGY, Step.NAME_SET),
            (Operation.SET_DESCRIPTION, Step.DIRECTORY_SET),
            (Operation.ADD_DOCUMENTATION, Step.DOCS_ADDED),
            (Operation.SETUP_FOUNDATION, Step.TECHNOLOGY_SET),
            (Operation.SETUP_FOUNDATION, Step.FOUNDATION_READY),
            (Operation.GENERATE_SERVER, Step.DOCS_ADDED),
            (Operation.GENERATE_SERVER, Step.COMPLETED),
        ],
    )
    def test_out_of_order_raises(self, machine, operation, step):
        with pytest.raises(StepOrderViolation) as exc_info:
            machine.plan(operation, step)
        assert str(exc_info.value).startswith("⚠️ STEP ORDER VIOLATION")
        assert ORDER_HINTS[operation] in str(exc_info.value)

    def test_violation_details(self, machine):
        with pytest.raises(StepOrderViolation) as exc_info:
            machine.plan(Operation.SET_DESCRIPTION, Step.NAME_SET)
        error = exc_info.value
        assert error.operation == "set_description"
        assert error.current == "name_set"
        assert error.required == ("technology_set",)

    def test_generate_hint_mentions_foundation_tool(self, machine):
        with pytest.raises(StepOrderViolation, match="setup_project_foundation"):
            machine.plan(Operation.GENERATE_SERVER, Step.DESCRIPTION_SET)


# ---------------------------------------------------------------------------
# allowed_operations
# ---------------------------------------------------------------------------

class TestAllowedOperations:
    def test_started(self, machine):
        assert machine.allowed_operations(Step.STARTED) == [Operation.SET_NAME]

    def test_description_set_offers_docs_and_foundation(self, machine):
        assert machine.allowed_operations(Step.DESCRIPTION_SET) == [
            Operation.ADD_DOCUMENTATION,
            Operation.SETUP_FOUNDATION,
        ]

    def test_completed_offers_nothing(self, machine):
        assert machine.allowed_operations(Step.COMPLETED) == []


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------

class TestDescribeStatus:
    def test_fresh_state(self):
        text = describe_status(WorkflowState())
        assert text.startswith("🗣️ **MCP Project Creation Status**")
        assert "⏳ **Project Creation Started**" in text
        assert "⏳ **Project Name**" in text
        assert text.endswith("**Current Step**: Waiting for project name")

    def test_partial_state_shows_values(self):
        state = WorkflowState(
            step=Step.TECHNOLOGY_SET,
            project_name="demo",
            project_directory="/tmp/x",
            technology=Technology.PYTHON,
        )
        text = describe_status(state)
        assert "✅ **Project Creation Started**" in text
        assert "✅ **Project Name**: demo" in text
        assert "✅ **Project Directory**: /tmp/x" in text
        assert "✅ **Technology Choice**: python" in text
        assert "⏳ **Project Description**" in text
        assert "Waiting for project description" in text

    def test_completed_state(self):
        state = WorkflowState(
            step=Step.COMPLETED,
            project_name="demo",
            project_directory="/tmp/x",
            technology=Technology.TYPESCRIPT,
            description="does X",
            foundation_setup=True,
        )
        checklist = step_checklist(state)
        assert all(done for _, done, _ in checklist)
        assert describe_status(state).endswith("Project completed!")

    def test_status_is_derived_from_state_only(self):
        state = WorkflowState(step=Step.DESCRIPTION_SET, project_name="a", description="b")
        assert describe_status(state) == describe_status(state.model_copy())
