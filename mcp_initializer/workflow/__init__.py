"""Conversation state machine for the MCP project initializer.

Quick usage::

    from mcp_initializer.workflow import Operation, StateMachine, Step

    machine = StateMachine()
    machine.target(Operation.SETUP_FOUNDATION, Step.DESCRIPTION_SET)
    # -> Step.FOUNDATION_READY (through the documentation shortcut)
"""

from mcp_initializer.workflow.models import (
    ProjectConfig,
    Step,
    Technology,
    ToolResponse,
    WorkflowState,
)
from mcp_initializer.workflow.state_machine import Operation, StateMachine, describe_status

__all__ = [
    "Operation",
    "ProjectConfig",
    "StateMachine",
    "Step",
    "Technology",
    "ToolResponse",
    "WorkflowState",
    "describe_status",
]
