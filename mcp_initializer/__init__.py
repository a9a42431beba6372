"""MCP project initializer.

Guides an MCP client through naming, placing, and describing a new MCP
server project, then writes the project foundation (rules, PRD, guidance,
reference docs, build configuration) for an AI assistant to implement.
"""

from mcp_initializer.config import Config
from mcp_initializer.session import ProjectInitializer
from mcp_initializer.tools import TOOL_DEFINITIONS, ToolDispatcher

__version__ = "1.0.0"

__all__ = [
    "Config",
    "ProjectInitializer",
    "TOOL_DEFINITIONS",
    "ToolDispatcher",
]
