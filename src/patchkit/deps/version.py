"""Semantic version parsing and requirement normalization."""

import re
from dataclasses import dataclass
from typing import Optional


_IDENT = r'[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*'
VERSION_PATTERN = re.compile(
    r'^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)'
    rf'(?:-({_IDENT}))?(?:\+({_IDENT}))?$'
)
PARTIAL_VERSION_PATTERN = re.compile(r'^(0|[1-9]\d*)(?:\.(0|[1-9]\d*))?$')
CLAUSE_PATTERN = re.compile(r'^(==|!=|>=|<=|~>|>|<)?\s*(\S+)$')
OPERATOR_PREFIX = re.compile(r'^\s*(==|!=|>=|<=|~>|>|<)')
CONNECTOR_SPLIT = re.compile(r'\s+(and|or)\s+')


@dataclass(frozen=True)
class SemanticVersion:
    """A strictly parsed ``MAJOR.MINOR.PATCH[-pre][+build]`` version."""
    major: int
    minor: int
    patch: int
    pre: Optional[str] = None
    build: Optional[str] = None

    def __str__(self) -> str:
        result = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre:
            result += f"-{self.pre}"
        if self.build:
            result += f"+{self.build}"
        return result


def parse_version(version: str) -> Optional[SemanticVersion]:
    """Strictly parse a semantic version, returning None when it is not one."""
    match = VERSION_PATTERN.match(version.strip())
    if not match:
        return None
    major, minor, patch, pre, build = match.groups()
    return SemanticVersion(int(major), int(minor), int(patch), pre, build)


def _normalize_clause(clause: str) -> Optional[str]:
    match = CLAUSE_PATTERN.match(clause.strip())
    if not match:
        return None

    operator, version = match.groups()
    if parse_version(version):
        return f"{operator or '=='} {version}"

    # ~> is the only operator that accepts MAJOR.MINOR
    partial = PARTIAL_VERSION_PATTERN.match(version)
    if operator == "~>" and partial and partial.group(2) is not None:
        return f"~> {version}"
    return None


def parse_requirement(requirement: str) -> Optional[str]:
    """Parse a version requirement and return it in normalized spacing.

    Clauses use ``==``, ``!=``, ``>``, ``>=``, ``<``, ``<=`` or ``~>`` and may be
    joined with ``and`` / ``or``, e.g. ``>= 1.0.0 and < 2.0.0``.

    Returns:
        Optional[str]: The normalized requirement, or None if it is invalid
    """
    requirement = requirement.strip()
    if not requirement:
        return None

    parts = CONNECTOR_SPLIT.split(requirement)
    normalized = []
    for index, part in enumerate(parts):
        if index % 2:
            normalized.append(part)
            continue
        clause = _normalize_clause(part)
        if clause is None:
            return None
        normalized.append(clause)
    return " ".join(normalized)


def version_string_to_general_requirement(version: str) -> Optional[str]:
    """Loosen a raw version token into a general requirement.

    - requirement strings are kept, e.g. ``~>2.0`` becomes ``~> 2.0``
    - partial versions widen, ``3`` becomes ``~> 3.0`` and ``3.1`` becomes ``~> 3.1``
    - full versions allow compatible updates, ``3.4.1`` becomes ``~> 3.4`` and
      ``0.2.10`` becomes ``~> 0.2.10``; pre-releases are pinned with ``==``

    Returns:
        Optional[str]: The general requirement, or None if the token is not a version
    """
    version = version.strip()
    if not version:
        return None

    if OPERATOR_PREFIX.match(version):
        return parse_requirement(version)

    parsed = parse_version(version)
    if parsed:
        if parsed.pre:
            return f"== {parsed}"
        if parsed.major == 0:
            return f"~> 0.{parsed.minor}.{parsed.patch}"
        return f"~> {parsed.major}.{parsed.minor}"

    partial = PARTIAL_VERSION_PATTERN.match(version)
    if partial:
        major, minor = partial.groups()
        return f"~> {major}.{minor if minor is not None else 0}"

    return None


def version_string_to_general_requirement_strict(version: str) -> str:
    """Same as :func:`version_string_to_general_requirement` but raises on failure.

    Raises:
        ValueError: If the token cannot be turned into a requirement
    """
    requirement = version_string_to_general_requirement(version)
    if requirement is None:
        raise ValueError(f"Invalid version string: {version}")
    return requirement
