"""Tests for option parsing and install composition."""

import pytest

from patchkit.core.exceptions import InstallError
from patchkit.core.options import (
    GLOBAL_ALIASES,
    GLOBAL_SWITCHES,
    TaskInfo,
    compose_install_and_validate,
    parse_argv,
    parse_only,
)
from patchkit.models import DependencyDescriptor, RegistrySource

ASH = DependencyDescriptor("ash", RegistrySource("~> 3.4"))
SPARK = DependencyDescriptor("spark", RegistrySource("~> 2.2"))


class TestParseArgv:
    def test_known_and_pass_through_options(self):
        options, rest = parse_argv(
            ["--yes", "--only", "test", "--domain", "Blog"], GLOBAL_SWITCHES, GLOBAL_ALIASES
        )

        assert options["yes"] is True
        assert options["dry_run"] is False
        assert options["only"] == ("test",)
        assert rest == ["--domain", "Blog"]

    def test_alias(self):
        options, _ = parse_argv(["-y"], GLOBAL_SWITCHES, GLOBAL_ALIASES)
        assert options["yes"] is True

    def test_missing_value(self):
        with pytest.raises(InstallError, match="Invalid arguments"):
            parse_argv(["--only"], GLOBAL_SWITCHES)


class TestParseOnly:
    def test_repeated_and_comma_joined(self):
        assert parse_only(["--only", "test,dev", "--only=prod"]) == ["test", "dev", "prod"]

    def test_absent(self):
        assert parse_only(["--yes"]) is None

    def test_blank(self):
        assert parse_only(["--only", ","]) is None


class TestComposeInstall:
    def test_adds_dependencies_and_desired_tasks(self, context):
        info = TaskInfo(schema=GLOBAL_SWITCHES, aliases=GLOBAL_ALIASES, installs=[ASH, SPARK])

        context, desired, (options, rest) = compose_install_and_validate(
            context, ["--example"], info, "install", yes=True, only=["test"], append=True
        )

        assert desired == ["ash.install", "spark.install"]
        assert [entry["name"] for entry in context.manifest["dependencies"]] == ["ash", "spark"]
        assert all(entry["only"] == ["test"] for entry in context.manifest["dependencies"])
        assert options["yes"] is True
        assert options["example"] is True
        assert options["only"] == ["test"]
        assert options["append"] is True
        assert rest == []

    def test_prepend_keeps_request_order(self, context):
        info = TaskInfo(schema=GLOBAL_SWITCHES, installs=[ASH, SPARK])

        context, _, (options, _) = compose_install_and_validate(context, [], info, "install")

        assert [entry["name"] for entry in context.manifest["dependencies"]] == ["ash", "spark"]
        assert options["yes"] is False
        assert options["only"] is None
