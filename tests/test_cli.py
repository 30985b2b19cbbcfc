"""Tests for the patchkit command line."""

from unittest.mock import ANY, patch

import pytest
from click.testing import CliRunner

from patchkit.cli import cli
from patchkit.core.exceptions import InvalidSpecifier


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def installer_cls():
    with patch("patchkit.cli.Installer") as mock_cls:
        yield mock_cls


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "patchkit version" in result.output


class TestInstallCommand:
    def test_passes_packages_and_argv(self, runner, installer_cls, project_dir):
        result = runner.invoke(
            cli, ["install", "--project-dir", str(project_dir), "ash,spark", "--yes", "--example"]
        )

        assert result.exit_code == 0, result.output
        installer_cls.assert_called_once_with("dev")
        installer_cls.return_value.install.assert_called_once_with(
            "ash,spark", ["--yes", "--example"], context=ANY
        )
        context = installer_cls.return_value.install.call_args.kwargs["context"]
        assert context.project.root == project_dir

    def test_environment_from_env_var(self, runner, installer_cls, project_dir, monkeypatch):
        monkeypatch.setenv("PATCHKIT_ENV", "test")

        runner.invoke(cli, ["install", "--project-dir", str(project_dir), "mox", "--only", "test"])

        installer_cls.assert_called_once_with("test")

    def test_install_error_exits(self, runner, installer_cls, project_dir):
        installer_cls.return_value.install.side_effect = InvalidSpecifier("Ash@1.0", "invalid name")

        result = runner.invoke(cli, ["install", "--project-dir", str(project_dir), "Ash@1.0"])

        assert result.exit_code == 1
        assert "Could not determine source for requested package `Ash@1.0`" in result.output

    def test_invalid_specifier(self, runner, project_dir):
        result = runner.invoke(cli, ["install", "--project-dir", str(project_dir), "Ash@1.0"])

        assert result.exit_code == 1
        assert "Ash@1.0" in result.output
        assert not (project_dir / "patchkit.yml").exists()

    def test_broken_manifest(self, runner, project_dir):
        (project_dir / "patchkit.yml").write_text("dependencies: 3\n")

        result = runner.invoke(cli, ["install", "--project-dir", str(project_dir), "ash@1.0.0"])

        assert result.exit_code == 1
        assert "Invalid project configuration" in result.output
