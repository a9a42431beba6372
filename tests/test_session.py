"""Unit tests for the ProjectInitializer session (mcp_initializer.session).

Tests cover:
- Step ordering with state left untouched on violation
- Argument validation through the session
- Documentation, confirmation and status operations
- Foundation setup: shortcut, failures, atomic commit
- Server generation
"""

from __future__ import annotations

from pathlib import Path

import pytest

from mcp_initializer.session import ProjectInitializer
from mcp_initializer.workflow.models import Step, Technology, WorkflowState

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Collecting answers
# ---------------------------------------------------------------------------

class TestCollectingAnswers:
    @pytest.mark.asyncio
    async def test_start_greets_and_resets(self, described_session):
        response = await described_session.start()
        assert not response.is_error
        assert "set_project_name" in response.text
        assert described_session.state == WorkflowState()

    @pytest.mark.asyncio
    async def test_happy_path_to_description(self, described_session, tmp_path: Path):
        state = described_session.state
        assert state.step is Step.DESCRIPTION_SET
        assert state.project_name == "demo"
        assert state.project_directory == str(tmp_path)
        assert state.technology is Technology.TYPESCRIPT
        assert state.description == "does X"

    @pytest.mark.asyncio
    async def test_directory_before_name_is_rejected(self, session):
        await session.start()
        before = session.state
        response = await session.set_directory({"directory": "/tmp"})
        assert response.is_error
        assert response.text.startswith("❌ **Error**: ⚠️ STEP ORDER VIOLATION")
        assert session.state == before

    @pytest.mark.asyncio
    async def test_name_cannot_be_changed_later(self, described_session):
        before = described_session.state
        response = await described_session.set_name({"name": "other"})
        assert response.is_error
        assert "start_mcp_project" in response.text
        assert described_session.state == before

    @pytest.mark.asyncio
    async def test_order_checked_before_arguments(self, session):
        await session.start()
        response = await session.set_technology({"technology": "java"})
        assert "STEP ORDER VIOLATION" in response.text

    @pytest.mark.asyncio
    async def test_relative_directory_rejected(self, session):
        await session.start()
        await session.set_name({"name": "demo"})
        response = await session.set_directory({"directory": "./projects"})
        assert response.is_error
        assert response.text.startswith("❌ **Error**: Failed to set project directory: ❌ ABSOLUTE PATH REQUIRED")
        assert session.state.step is Step.NAME_SET
        assert session.state.project_directory is None

    @pytest.mark.asyncio
    async def test_unknown_technology_rejected(self, session, tmp_path: Path):
        await session.start()
        await session.set_name({"name": "demo"})
        await session.set_directory({"directory": str(tmp_path)})
        response = await session.set_technology({"technology": "java"})
        assert response.is_error
        assert "Failed to set technology" in response.text
        assert session.state.step is Step.DIRECTORY_SET

    @pytest.mark.asyncio
    async def test_missing_arguments(self, session):
        await session.start()
        response = await session.set_name(None)
        assert response.text == "❌ **Error**: Failed to set project name: Project name is required"


# ---------------------------------------------------------------------------
# Documentation, confirmation, status
# ---------------------------------------------------------------------------

class TestDocumentationAndConfirmation:
    @pytest.mark.asyncio
    async def test_add_documentation(self, described_session):
        response = await described_session.add_documentation(
            {"documentationUrls": ["https://a.example.com/spec.json"], "customContext": "OAuth"}
        )
        assert not response.is_error
        assert "• URLs: 1 links provided" in response.text
        state = described_session.state
        assert state.step is Step.DOCS_ADDED
        assert state.documentation_urls == ["https://a.example.com/spec.json"]
        assert state.custom_context == "OAuth"
        assert state.waiting_for_confirmation is True

    @pytest.mark.asyncio
    async def test_add_documentation_without_arguments(self, described_session):
        response = await described_session.add_documentation()
        assert not response.is_error
        assert described_session.state.documentation_urls is None

    @pytest.mark.asyncio
    async def test_documentation_only_once(self, described_session):
        await described_session.add_documentation({})
        response = await described_session.add_documentation({})
        assert "STEP ORDER VIOLATION" in response.text

    @pytest.mark.asyncio
    async def test_confirm_accepts_lowercase(self, described_session):
        await described_session.add_documentation({})
        response = await described_session.confirm({"confirmation": "yes"})
        assert not response.is_error
        assert 'Confirmed with "YES"' in response.text
        state = described_session.state
        assert state.waiting_for_confirmation is False
        assert state.last_action == "User confirmed with: YES"
        assert state.step is Step.DOCS_ADDED

    @pytest.mark.asyncio
    async def test_confirm_rejects_other_words(self, described_session):
        before = described_session.state
        response = await described_session.confirm({"confirmation": "sure"})
        assert response.is_error
        assert response.text.startswith('❌ **Error**: Confirmation failed: Invalid confirmation: "sure"')
        assert described_session.state == before

    @pytest.mark.asyncio
    async def test_confirm_allowed_at_any_step(self, session):
        await session.start()
        response = await session.confirm({"confirmation": "CONTINUE"})
        assert not response.is_error
        assert session.state.step is Step.STARTED

    @pytest.mark.asyncio
    async def test_status(self, described_session):
        response = await described_session.get_status()
        assert "✅ **Project Name**: demo" in response.text
        assert "Waiting for documentation (or ready for setup)" in response.text


# ---------------------------------------------------------------------------
# Foundation
# ---------------------------------------------------------------------------

class TestSetupFoundation:
    @pytest.mark.asyncio
    async def test_from_description_skips_documentation(self, described_session, tmp_path: Path):
        response = await described_session.setup_foundation()
        assert not response.is_error, response.text

        root = tmp_path / "demo"
        state = described_session.state
        assert state.step is Step.FOUNDATION_READY
        assert state.foundation_setup is True
        assert state.waiting_for_confirmation is True
        assert described_session.working_directory == root
        assert described_session.project.name == "demo"
        for name in ("README.md", "PRD.md", "CLAUDE.md", ".gitignore"):
            assert (root / name).is_file()
        assert (root / "docs" / "external" / "llms-full.txt").is_file()
        assert "Downloaded 2 of 2 essential" in response.text

    @pytest.mark.asyncio
    async def test_after_documentation(self, described_session, tmp_path: Path):
        await described_session.add_documentation({"documentationUrls": ["https://x.example.com/api/openapi.json"]})
        response = await described_session.setup_foundation()
        assert not response.is_error
        root = tmp_path / "demo"
        assert (root / "docs" / "external" / "openapi.json").is_file()
        assert "https://x.example.com/api/openapi.json" in (root / "PRD.md").read_text(encoding="utf-8")

    @pytest.mark.asyncio
    async def test_failed_downloads_are_reported_not_fatal(
        self, described_session, http_failures, tmp_path: Path
    ):
        url = "https://slow.example.com/spec.json"
        http_failures[url] = "timeout"
        await described_session.add_documentation({"documentationUrls": [url]})
        response = await described_session.setup_foundation()
        assert not response.is_error
        assert f"⚠️ Skipped {url}: timed out after 10s" in response.text
        assert described_session.state.step is Step.FOUNDATION_READY
        assert [o.ok for o in described_session.last_fetch] == [True, True, False]

    @pytest.mark.asyncio
    async def test_too_early(self, session, tmp_path: Path):
        await session.start()
        await session.set_name({"name": "demo"})
        response = await session.setup_foundation()
        assert "STEP ORDER VIOLATION" in response.text
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_missing_configuration_creates_nothing(self, session, tmp_path: Path):
        session.state = WorkflowState(step=Step.DESCRIPTION_SET, project_name="demo", description="x")
        response = await session.setup_foundation()
        assert response.is_error
        assert "Failed to setup project foundation: Missing required project information" in response.text
        assert "project_directory, technology" in response.text
        assert list(tmp_path.iterdir()) == []
        assert session.state.step is Step.DESCRIPTION_SET

    @pytest.mark.asyncio
    async def test_filesystem_failure_leaves_state(self, described_session, tmp_path: Path):
        (tmp_path / "demo").write_text("not a directory", encoding="utf-8")
        before = described_session.state
        response = await described_session.setup_foundation()
        assert response.is_error
        assert "Failed to setup project foundation" in response.text
        assert described_session.state == before
        assert described_session.project is None
        assert described_session.working_directory == tmp_path

    @pytest.mark.asyncio
    async def test_twice_is_rejected(self, described_session):
        await described_session.setup_foundation()
        response = await described_session.setup_foundation()
        assert "STEP ORDER VIOLATION" in response.text


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

class TestGenerateServer:
    @pytest.mark.asyncio
    async def test_requires_foundation(self, described_session):
        response = await described_session.generate_server()
        assert response.is_error
        assert "setup_project_foundation" in response.text
        assert described_session.state.step is Step.DESCRIPTION_SET

    @pytest.mark.asyncio
    async def test_requires_project(self, session):
        session.state = WorkflowState(step=Step.FOUNDATION_READY)
        response = await session.generate_server()
        assert response.text == (
            "❌ **Error**: Failed to prepare project for AI implementation: "
            "No project configuration found."
        )

    @pytest.mark.asyncio
    async def test_completes_project(self, described_session, tmp_path: Path):
        await described_session.setup_foundation()
        response = await described_session.generate_server()
        assert not response.is_error
        root = tmp_path / "demo"
        assert (root / "package.json").is_file()
        assert (root / "tsconfig.json").is_file()
        assert (root / "IMPLEMENTATION.md").is_file()
        assert f"📁 Project location: {root}" in response.text
        state = described_session.state
        assert state.step is Step.COMPLETED
        assert state.waiting_for_confirmation is False

    @pytest.mark.asyncio
    async def test_restart_after_completion(self, described_session, tmp_path: Path):
        await described_session.setup_foundation()
        await described_session.generate_server()
        await described_session.start()
        assert described_session.state.step is Step.STARTED
        assert described_session.project is None
        assert described_session.working_directory == tmp_path


class TestDefaults:
    def test_working_directory_defaults_to_cwd(self):
        assert ProjectInitializer().working_directory == Path.cwd()
