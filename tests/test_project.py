"""Tests for the project manifest and the working context."""

import pytest
import yaml

from patchkit.core.project import MANIFEST_NAME, Project, WorkingContext
from patchkit.models import DependencyDescriptor, GitHubSource, RegistrySource

ASH = DependencyDescriptor("ash", RegistrySource("~> 3.4"))
SPARK = DependencyDescriptor("spark", GitHubSource("ash-project", "spark", override=True))


def _write_manifest(root, data):
    (root / MANIFEST_NAME).write_text(yaml.safe_dump(data), encoding="utf-8")


class TestProject:
    def test_missing_manifest_is_empty(self, project_dir):
        assert Project(project_dir).load_manifest() == {"dependencies": []}

    def test_reads_dependencies(self, project_dir):
        _write_manifest(project_dir, {"name": "app", "dependencies": [{"name": "ash", "version": "~> 3.4"}]})
        assert Project(project_dir).get_dependencies() == [ASH]

    def test_null_dependencies(self, project_dir):
        _write_manifest(project_dir, {"name": "app", "dependencies": None})
        assert Project(project_dir).load_manifest()["dependencies"] == []

    @pytest.mark.parametrize("content", ["- just\n- a list\n", "dependencies: ash\n", "name: [unclosed\n"])
    def test_invalid_manifest(self, project_dir, content):
        (project_dir / MANIFEST_NAME).write_text(content, encoding="utf-8")
        with pytest.raises(ValueError):
            Project(project_dir).load_manifest()


class TestAddDependency:
    def test_prepends_by_default(self, project_dir):
        _write_manifest(project_dir, {"dependencies": [{"name": "jason", "version": "~> 1.4"}]})
        context = WorkingContext(Project(project_dir))

        assert context.add_dependency(ASH) is True
        assert [entry["name"] for entry in context.manifest["dependencies"]] == ["ash", "jason"]
        assert context.dependencies_changed

    def test_append(self, project_dir):
        _write_manifest(project_dir, {"dependencies": [{"name": "jason", "version": "~> 1.4"}]})
        context = WorkingContext(Project(project_dir))

        context.add_dependency(ASH, append=True)
        assert [entry["name"] for entry in context.manifest["dependencies"]] == ["jason", "ash"]

    def test_existing_identical_entry_is_unchanged(self, project_dir):
        _write_manifest(project_dir, {"dependencies": [ASH.to_manifest_entry()]})
        context = WorkingContext(Project(project_dir))

        assert context.add_dependency(ASH) is False
        assert not context.dependencies_changed
        assert context.added_dependencies == []

    def test_replaces_existing_entry(self, project_dir):
        _write_manifest(project_dir, {"dependencies": [{"name": "ash", "version": "~> 2.0"}]})
        context = WorkingContext(Project(project_dir))

        context.add_dependency(ASH)
        assert context.manifest["dependencies"] == [ASH.to_manifest_entry()]
        assert context.notices == ["Dependency ash updated from `~> 2.0` to `~> 3.4`"]

    def test_only_environments(self, context):
        context.add_dependency(SPARK, only=["test"])
        assert context.manifest["dependencies"][0]["only"] == ["test"]

    def test_pending_manifest_is_not_written(self, context):
        context.add_dependency(ASH)
        assert not context.project.manifest_path.exists()
        assert yaml.safe_load(context.read_file(MANIFEST_NAME))["dependencies"] == [ASH.to_manifest_entry()]


class TestRewrites:
    def test_diff_and_write(self, context):
        context.create_or_update_file("config/app.yml", "debug: true\n")

        diff = context.diff()
        assert "+++ b/config/app.yml" in diff
        assert "+debug: true" in diff

        written = context.write()
        assert written == [context.project.root / "config" / "app.yml"]
        assert (context.project.root / "config" / "app.yml").read_text() == "debug: true\n"
        assert context.rewrites == {}

    def test_update_file_sees_pending_content(self, context):
        context.create_or_update_file("notes.txt", "one\n")
        context.update_file("notes.txt", lambda text: text + "two\n")
        assert context.read_file("notes.txt") == "one\ntwo\n"

    def test_unchanged_rewrite_is_not_a_change(self, context):
        (context.project.root / "same.txt").write_text("same\n")
        context.create_or_update_file("same.txt", "same\n")
        assert not context.has_changes()

    def test_messages_chain(self, context):
        context.add_notice("n").add_warning("w").add_issue("i")
        assert (context.notices, context.warnings, context.issues) == (["n"], ["w"], ["i"])
