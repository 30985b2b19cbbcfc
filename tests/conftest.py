"""Shared fixtures for patchkit tests."""

from unittest.mock import MagicMock

import pytest

from patchkit.core.project import Project, WorkingContext
from patchkit.core.tasks import TaskRegistry


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from ~/.patchkit and the caller's environment."""
    monkeypatch.setenv("PATCHKIT_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.delenv("PATCHKIT_ENV", raising=False)
    monkeypatch.delenv("PATCHKIT_REGISTRY_URL", raising=False)


@pytest.fixture
def project_dir(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def context(project_dir):
    return WorkingContext(Project(project_dir))


@pytest.fixture
def resolver():
    """Registry lookup stub resolving every bare name to ``~> 3.4``."""
    return MagicMock(return_value="~> 3.4")


@pytest.fixture
def registry():
    return TaskRegistry()
