"""Static per-technology scaffold catalogue.

Maps a technology key to the ``ProjectTemplate`` describing which directories
to create and which reference documents apply, and holds the fixed text
blocks (ignore rules, general development rules) that are written verbatim.
"""

from __future__ import annotations

from mcp_initializer.config import COMPATIBILITY_DOC_URL
from mcp_initializer.workflow.models import ProjectTemplate

MCP_TECHNOLOGY_LABEL = "MCP (Model Context Protocol)"


# ---------------------------------------------------------------------------
# Project templates
# ---------------------------------------------------------------------------

PROJECT_TEMPLATES: dict[str, ProjectTemplate] = {
    "typescript": ProjectTemplate(
        technology_label="TypeScript",
        documentation_urls=[
            "https://www.typescriptlang.org/docs/",
            "https://nodejs.org/en/docs/",
            COMPATIBILITY_DOC_URL,
        ],
        directories=["src", "tests", "docs", ".vscode", ".windsurf"],
    ),
    "python": ProjectTemplate(
        technology_label="Python",
        documentation_urls=[
            "https://docs.python.org/3/",
            COMPATIBILITY_DOC_URL,
        ],
        directories=["src", "tests", "docs", ".windsurf"],
    ),
    "mcp": ProjectTemplate(
        technology_label=MCP_TECHNOLOGY_LABEL,
        documentation_urls=[
            "https://www.typescriptlang.org/docs/",
            "https://nodejs.org/en/docs/",
            COMPATIBILITY_DOC_URL,
            "https://modelcontextprotocol.io/docs/",
        ],
        directories=["src", "tests", "docs", ".vscode", ".windsurf"],
    ),
}


def resolve_template(technology: str) -> ProjectTemplate:
    """Look up the template for *technology* (case-insensitive).

    Unknown technologies get a minimal generic template instead of an error.
    """
    template = PROJECT_TEMPLATES.get(technology.lower())
    if template is None:
        return ProjectTemplate(
            technology_label=technology,
            documentation_urls=[COMPATIBILITY_DOC_URL],
            directories=["src", "docs", ".windsurf"],
        )
    return template.model_copy(deep=True)


def is_mcp_label(label: str) -> bool:
    return label.lower() == MCP_TECHNOLOGY_LABEL.lower()


# ---------------------------------------------------------------------------
# .gitignore
# ---------------------------------------------------------------------------

COMMON_GITIGNORE = """# Dependencies
node_modules/
*.log
npm-debug.log*

# Build outputs
build/
dist/
*.tsbuildinfo

# Environment
.env
.env.local

# IDE
.vscode/
.idea/
*.swp
*.swo

# OS
.DS_Store
Thumbs.db
"""

TECHNOLOGY_GITIGNORE: dict[str, str] = {
    "typescript": """
# TypeScript
*.js.map
*.d.ts.map
""",
    "python": """
# Python
__pycache__/
*.py[cod]
*$py.class
*.so
.Python
build/
develop-eggs/
dist/
downloads/
eggs/
.eggs/
lib/
lib64/
parts/
sdist/
var/
wheels/
*.egg-info/
.installed.cfg
*.egg
MANIFEST
""",
}


def generate_gitignore(technology_label: str) -> str:
    """Common ignore rules plus additions for *technology_label*, if known."""
    return COMMON_GITIGNORE + TECHNOLOGY_GITIGNORE.get(technology_label.lower(), "")


# ---------------------------------------------------------------------------
# Rule documents
# ---------------------------------------------------------------------------

GENERAL_RULES = """---
trigger: always_on
---

# General Development Rules

## Code Quality
- Follow existing code conventions and patterns in the codebase
- Use static typing when the language supports it
- Write clear, self-documenting code
- Add comments only when the code intent is not obvious

## File Management
- NEVER create files unless absolutely necessary
- ALWAYS prefer editing existing files over creating new ones
- Follow the existing directory structure

## Testing
- Write tests for new functionality
- Run existing tests before submitting changes
- Follow the testing patterns already established in the codebase

## Security
- Never commit secrets, API keys, or sensitive data
- Validate all user inputs
- Follow security best practices for the technology stack
"""

MCP_RULES = """
# MCP Development Rules

## Architecture
- Use the official MCP SDK for the chosen language
- Implement STDIO transport for communication
- Follow MCP protocol specifications exactly
- No direct LLM API keys - use prompt/response pattern

## Implementation Patterns
- Start small and iterate on functionality
- Implement proper error handling for all MCP operations
- Use structured logging for debugging
- Validate all inputs from MCP clients

## Testing
- Use MCP Inspector tool for development testing
- Test with actual MCP clients (Claude.app, etc.)
- Test error scenarios and edge cases
- Validate resource access and tool execution

## Security
- Limit resource access appropriately
- Validate all tool inputs
- Implement proper permission checking
- Never expose sensitive system information
"""

MCP_RULES_STUB = """# MCP Development Rules

See mcp.md for detailed MCP-specific rules.
"""
