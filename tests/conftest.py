"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from tests.graph_fakes import FakeGraph


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def source_config(tmp_path: Path):
    """Runtime config rooted in a temporary data directory."""
    from core.config import SourceConfig

    return SourceConfig(
        data_root=tmp_path / "data",
        graph_base_url="https://graph.test/v1.0",
        access_token="test-token",
        host=None,
        request_timeout=5.0,
        asset_timeout=5.0,
    )


@pytest.fixture
def fake_graph() -> FakeGraph:
    """Empty fake Graph API; tests register routes on it."""
    return FakeGraph()
