"""MCP project initializer configuration.

Centralised, typed configuration for the workflow engine and the scaffold
pipeline.  All settings use Pydantic v2 models so they can be validated at
construction time and serialised to/from JSON or environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field


COMPATIBILITY_DOC_URL = "https://modelcontextprotocol.io/llms-full.txt"

SDK_README_URLS: dict[str, str] = {
    "typescript": (
        "https://raw.githubusercontent.com/modelcontextprotocol/"
        "typescript-sdk/refs/heads/main/README.md"
    ),
    "python": (
        "https://raw.githubusercontent.com/modelcontextprotocol/"
        "python-sdk/refs/heads/main/README.md"
    ),
}


class FetchConfig(BaseModel):
    """Settings for downloading reference documentation."""

    essential_timeout: float = Field(
        default=15.0, gt=0, description="Timeout in seconds for always-fetched documents"
    )
    user_timeout: float = Field(
        default=10.0, gt=0, description="Timeout in seconds for caller-supplied URLs"
    )
    compatibility_doc_url: str = Field(default=COMPATIBILITY_DOC_URL)
    compatibility_doc_filename: str = Field(default="llms-full.txt")
    sdk_readme_urls: dict[str, str] = Field(default_factory=lambda: dict(SDK_README_URLS))


class Config(BaseModel):
    """Global initializer configuration.

    Instances are created once per session (``ProjectInitializer``) and then
    passed to the renderer, fetcher and scaffold builder.
    """

    template_dir: Path | None = Field(
        default=None, description="Override for the bundled template assets directory"
    )
    undefined_placeholders: Literal["verbatim", "strict"] = Field(
        default="verbatim",
        description="'verbatim' keeps unknown {{key}} tokens, 'strict' raises",
    )
    docs_subdir: str = Field(default="docs/external")
    rules_subdir: str = Field(default=".windsurf/rules")
    guidance_filename: str = Field(default="CLAUDE.md")
    fetch: FetchConfig = Field(default_factory=FetchConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            MCP_INIT_TEMPLATE_DIR, MCP_INIT_UNDEFINED_PLACEHOLDERS,
            MCP_INIT_DOCS_SUBDIR, MCP_INIT_RULES_SUBDIR,
            MCP_INIT_ESSENTIAL_TIMEOUT, MCP_INIT_USER_TIMEOUT,
            MCP_INIT_COMPATIBILITY_DOC_URL.
        """
        fetch_kwargs: dict[str, Any] = {}
        if os.environ.get("MCP_INIT_ESSENTIAL_TIMEOUT"):
            fetch_kwargs["essential_timeout"] = float(os.environ["MCP_INIT_ESSENTIAL_TIMEOUT"])
        if os.environ.get("MCP_INIT_USER_TIMEOUT"):
            fetch_kwargs["user_timeout"] = float(os.environ["MCP_INIT_USER_TIMEOUT"])
        if os.environ.get("MCP_INIT_COMPATIBILITY_DOC_URL"):
            fetch_kwargs["compatibility_doc_url"] = os.environ["MCP_INIT_COMPATIBILITY_DOC_URL"]

        kwargs: dict[str, Any] = {}
        if os.environ.get("MCP_INIT_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["MCP_INIT_TEMPLATE_DIR"])
        if os.environ.get("MCP_INIT_UNDEFINED_PLACEHOLDERS"):
            kwargs["undefined_placeholders"] = os.environ["MCP_INIT_UNDEFINED_PLACEHOLDERS"].lower()
        if os.environ.get("MCP_INIT_DOCS_SUBDIR"):
            kwargs["docs_subdir"] = os.environ["MCP_INIT_DOCS_SUBDIR"]
        if os.environ.get("MCP_INIT_RULES_SUBDIR"):
            kwargs["rules_subdir"] = os.environ["MCP_INIT_RULES_SUBDIR"]

        return cls(fetch=FetchConfig(**fetch_kwargs), **kwargs)
