"""MCP project scaffolder -- renders the on-disk project foundation.

Takes the collected ``ProjectConfig`` plus the technology's
``ProjectTemplate`` and writes the directory tree, guidance documents,
rules, PRD, fetched reference documentation, and build configuration.

Quick usage::

    from mcp_initializer.scaffolder import ScaffoldBuilder, TemplateRenderer, resolve_template

    builder = ScaffoldBuilder(TemplateRenderer())
    await builder.build_foundation(root, resolve_template("python"), project)
"""

from mcp_initializer.scaffolder.catalog import resolve_template
from mcp_initializer.scaffolder.config_gen import ConfigFileGenerator
from mcp_initializer.scaffolder.docs_fetcher import DocumentationFetcher, FetchOutcome, filename_from_url
from mcp_initializer.scaffolder.generator import ScaffoldBuilder
from mcp_initializer.scaffolder.templates import TemplateRenderer

__all__ = [
    "ConfigFileGenerator",
    "DocumentationFetcher",
    "FetchOutcome",
    "ScaffoldBuilder",
    "TemplateRenderer",
    "filename_from_url",
    "resolve_template",
]
