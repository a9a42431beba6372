"""Shared pytest fixtures for the MCP project initializer test suite.

Provides reusable fixtures for:
- An ``httpx.AsyncClient`` backed by ``httpx.MockTransport`` whose per-URL
  failures can be configured from a test
- Sessions at various workflow steps
- Sample ``ProjectConfig`` instances
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from mcp_initializer.config import Config
from mcp_initializer.session import ProjectInitializer
from mcp_initializer.workflow.models import ProjectConfig, Technology


# ---------------------------------------------------------------------------
# Mock HTTP
# ---------------------------------------------------------------------------

def doc_body(url: str) -> bytes:
    """Body served by the mock transport for *url*."""
    return f"# Reference\n\nFetched from {url}\n".encode("utf-8")


def _mock_handler(
    failures: dict[str, Any], requested: list[str]
) -> Callable[[httpx.Request], httpx.Response]:
    """Build a MockTransport handler.

    ``failures`` maps a URL to ``"timeout"``, ``"connect"`` or an HTTP status
    code; every other URL answers 200 with :func:`doc_body`.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        requested.append(url)
        failure = failures.get(url)
        if failure == "timeout":
            raise httpx.ReadTimeout("timed out", request=request)
        if failure == "connect":
            raise httpx.ConnectError("connection refused", request=request)
        if isinstance(failure, int):
            return httpx.Response(failure, text="error", request=request)
        return httpx.Response(200, content=doc_body(url), request=request)

    return handler


@pytest.fixture
def http_failures() -> dict[str, Any]:
    """Mutable URL -> failure map consulted by ``http_client`` on every request."""
    return {}


@pytest.fixture
def requested_urls() -> list[str]:
    """URLs requested through ``http_client``, in order."""
    return []


@pytest.fixture
async def http_client(http_failures: dict[str, Any], requested_urls: list[str]):
    """``httpx.AsyncClient`` that never touches the network."""
    transport = httpx.MockTransport(_mock_handler(http_failures, requested_urls))
    async with httpx.AsyncClient(transport=transport) as client:
        yield client


@pytest.fixture
def served_body() -> Callable[[str], bytes]:
    """The body the mock transport serves for a URL."""
    return doc_body


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------

@pytest.fixture
def session(http_client: httpx.AsyncClient, tmp_path: Path) -> ProjectInitializer:
    """A fresh session whose initial working directory is ``tmp_path``."""
    return ProjectInitializer(Config(), client=http_client, working_directory=tmp_path)


async def advance(
    session: ProjectInitializer,
    directory: Path,
    *,
    name: str = "demo",
    technology: str = "typescript",
    description: str = "does X",
) -> None:
    """Drive *session* from ``started`` to ``description_set``."""
    await session.start()
    for response in (
        await session.set_name({"name": name}),
        await session.set_directory({"directory": str(directory)}),
        await session.set_technology({"technology": technology}),
        await session.set_description({"description": description}),
    ):
        assert not response.is_error, response.text


@pytest.fixture
async def described_session(session: ProjectInitializer, tmp_path: Path) -> ProjectInitializer:
    """Session at ``description_set`` targeting ``tmp_path/demo`` (TypeScript)."""
    await advance(session, tmp_path)
    return session


# ---------------------------------------------------------------------------
# Project configs
# ---------------------------------------------------------------------------

@pytest.fixture
def typescript_project() -> ProjectConfig:
    return ProjectConfig(
        name="weather-mcp",
        description="Provide weather forecasts for any location",
        technology=Technology.TYPESCRIPT,
    )


@pytest.fixture
def python_project() -> ProjectConfig:
    return ProjectConfig(
        name="tasks-mcp",
        description='Track "daily" tasks with reminders',
        technology=Technology.PYTHON,
        documentation_urls=("https://api.example.com/openapi.json", "https://docs.example.com/guide/"),
        custom_context="Reminders are sent by email.",
    )
