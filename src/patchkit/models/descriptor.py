"""Dependency descriptor data models."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


PACKAGE_NAME_PATTERN = re.compile(r'^[a-z][a-z0-9_]*$')


class ParseErrorKind(Enum):
    """Types of specifier parse failures."""
    INVALID_NAME = "invalid_name"
    INVALID_VERSION = "invalid_version"
    INVALID_GIT_REF = "invalid_git_ref"
    INVALID_GITHUB_REF = "invalid_github_ref"
    UNKNOWN_DIRECTIVE = "unknown_directive"


@dataclass(frozen=True)
class ParseError:
    """Typed failure returned by the specifier parser."""
    kind: ParseErrorKind
    specifier: str
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.detail} in `{self.specifier}`"
        return f"{self.kind.value.replace('_', ' ')} in `{self.specifier}`"


@dataclass(frozen=True)
class RegistrySource:
    """A version constraint resolved against the package registry."""
    constraint: str

    def to_directive(self) -> str:
        return self.constraint


@dataclass(frozen=True)
class GitSource:
    """A package fetched from an arbitrary git URL."""
    url: str
    ref: Optional[str] = None
    override: bool = False

    def to_directive(self) -> str:
        if self.ref:
            return f"git:{self.url}@{self.ref}"
        return f"git:{self.url}"


@dataclass(frozen=True)
class GitHubSource:
    """A package fetched from a GitHub repository."""
    org: str
    project: str
    ref: Optional[str] = None
    override: bool = False

    @property
    def repo(self) -> str:
        return f"{self.org}/{self.project}"

    def to_directive(self) -> str:
        if self.ref:
            return f"github:{self.repo}@{self.ref}"
        return f"github:{self.repo}"


@dataclass(frozen=True)
class PathSource:
    """A package taken from a local directory."""
    path: str
    override: bool = True

    def to_directive(self) -> str:
        return f"path:{self.path}"


Source = Union[RegistrySource, GitSource, GitHubSource, PathSource]


@dataclass(frozen=True)
class DependencyDescriptor:
    """Parsed, structured form of a package specifier."""
    name: str
    source: Source

    @classmethod
    def from_pair(cls, name: str, requirement: Any) -> "DependencyDescriptor":
        """Build a descriptor from a pre-resolved ``(name, requirement)`` pair.

        The requirement may be a constraint string, a source instance or a
        manifest-style mapping such as ``{"git": url, "ref": "main"}``.
        """
        if isinstance(requirement, (RegistrySource, GitSource, GitHubSource, PathSource)):
            return cls(name=str(name), source=requirement)
        if isinstance(requirement, str):
            return cls(name=str(name), source=RegistrySource(requirement))
        if isinstance(requirement, dict):
            return cls.from_manifest_entry({"name": name, **requirement})
        raise ValueError(f"Unsupported requirement for package {name}: {requirement!r}")

    @classmethod
    def from_manifest_entry(cls, entry: Dict[str, Any]) -> "DependencyDescriptor":
        """Load a descriptor from a ``patchkit.yml`` dependency entry.

        Raises:
            ValueError: If the entry has no name or no recognizable source
        """
        name = entry.get("name")
        if not name:
            raise ValueError(f"Dependency entry is missing 'name': {entry!r}")

        override = bool(entry.get("override", False))
        if "git" in entry:
            source = GitSource(url=entry["git"], ref=entry.get("ref"), override=override)
        elif "github" in entry:
            org, _, project = str(entry["github"]).partition("/")
            if not org or not project:
                raise ValueError(f"Invalid github repository for {name}: {entry['github']}")
            source = GitHubSource(org=org, project=project, ref=entry.get("ref"), override=override)
        elif "path" in entry:
            source = PathSource(path=entry["path"], override=override)
        elif "version" in entry:
            source = RegistrySource(str(entry["version"]))
        else:
            raise ValueError(f"Dependency {name} has no version, git, github or path source")

        return cls(name=str(name), source=source)

    def to_manifest_entry(self) -> Dict[str, Any]:
        """Render this descriptor as a ``patchkit.yml`` dependency entry."""
        entry: Dict[str, Any] = {"name": self.name}
        source = self.source
        if isinstance(source, RegistrySource):
            entry["version"] = source.constraint
            return entry

        if isinstance(source, GitSource):
            entry["git"] = source.url
        elif isinstance(source, GitHubSource):
            entry["github"] = source.repo
        else:
            entry["path"] = source.path

        if getattr(source, "ref", None):
            entry["ref"] = source.ref
        if source.override:
            entry["override"] = True
        return entry

    def to_specifier(self) -> str:
        """Canonical specifier form, which parses back to an equal descriptor."""
        return f"{self.name}@{self.source.to_directive()}"

    @property
    def requirement(self) -> str:
        """Human-readable requirement, e.g. ``~> 2.0`` or ``github:org/repo``."""
        return self.source.to_directive()

    def __str__(self) -> str:
        return self.to_specifier()
