"""Parser for human-friendly package specifiers.

Supported forms::

    ash                              latest release from the registry
    ash@3.0.1                        exact version (== 3.0.1)
    ash@~>3.0 / ash@3.1              general requirement
    foo@git:https://host/foo.git     git repository (override)
    foo@git:https://host/foo.git@v1  git repository at a ref
    foo@github:org/foo               GitHub repository (override)
    foo@github:org/foo@main          GitHub repository at a ref
    foo@path:../foo                  local directory (override)
"""

import logging
import re
from typing import Callable, Optional, Union

from ..models.descriptor import (
    PACKAGE_NAME_PATTERN,
    DependencyDescriptor,
    GitHubSource,
    GitSource,
    ParseError,
    ParseErrorKind,
    PathSource,
    RegistrySource,
    Source,
)
from .version import parse_version, version_string_to_general_requirement

logger = logging.getLogger(__name__)

Resolver = Callable[[str], str]
ParseResult = Union[DependencyDescriptor, ParseError]

DIRECTIVE_PREFIX = re.compile(r'^[a-z][a-z0-9_]*:')


def _parse_git(specifier: str, requirement: str) -> Union[Source, ParseError]:
    if "@" not in requirement:
        if not requirement:
            return ParseError(ParseErrorKind.INVALID_GIT_REF, specifier, "Missing git URL")
        return GitSource(url=requirement, override=True)

    tokens = [token for token in requirement.split("@") if token]
    if len(tokens) != 2:
        return ParseError(
            ParseErrorKind.INVALID_GIT_REF, specifier,
            "Expected `git:<url>@<ref>`"
        )
    url, ref = tokens
    return GitSource(url=url, ref=ref)


def _parse_github(specifier: str, requirement: str) -> Union[Source, ParseError]:
    if "@" in requirement:
        tokens = [token for token in re.split(r'[/@]', requirement) if token]
        if len(tokens) != 3:
            return ParseError(
                ParseErrorKind.INVALID_GITHUB_REF, specifier,
                "Expected `github:<org>/<project>@<ref>`"
            )
        org, project, ref = tokens
        return GitHubSource(org=org, project=project, ref=ref)

    tokens = [token for token in requirement.split("/") if token]
    if len(tokens) != 2:
        return ParseError(
            ParseErrorKind.INVALID_GITHUB_REF, specifier,
            "Expected `github:<org>/<project>`"
        )
    org, project = tokens
    return GitHubSource(org=org, project=project, override=True)


def _parse_path(specifier: str, requirement: str) -> Union[Source, ParseError]:
    if not requirement:
        return ParseError(ParseErrorKind.INVALID_VERSION, specifier, "Missing path")
    return PathSource(path=requirement, override=True)


def _parse_version(specifier: str, requirement: str) -> Union[Source, ParseError]:
    version = parse_version(requirement)
    if version:
        return RegistrySource(f"== {version}")

    general = version_string_to_general_requirement(requirement)
    if general:
        return RegistrySource(general)

    if DIRECTIVE_PREFIX.match(requirement):
        return ParseError(
            ParseErrorKind.UNKNOWN_DIRECTIVE, specifier,
            f"Unknown source `{requirement.split(':', 1)[0]}:`"
        )
    return ParseError(
        ParseErrorKind.INVALID_VERSION, specifier,
        f"Invalid version or requirement `{requirement}`"
    )


# Ordered prefix table; the bare-version parser is the fallback
DIRECTIVE_PARSERS = (
    ("git:", _parse_git),
    ("github:", _parse_github),
    ("path:", _parse_path),
)


def _default_resolver(name: str) -> str:
    # Import here to avoid circular import
    from ..registry.client import PackageRegistryClient

    return PackageRegistryClient().resolve_latest(name)


def parse_specifier(specifier: str, resolver: Optional[Resolver] = None) -> ParseResult:
    """Parse one specifier into a descriptor or a typed parse failure.

    A bare package name is resolved to the latest release with ``resolver``
    (a callable from package name to requirement). Resolution failures are
    raised by the resolver, not returned.

    Args:
        specifier: Raw specifier such as ``ash`` or ``ash_postgres@~>2.0``
        resolver: Registry lookup used for bare names

    Returns:
        DependencyDescriptor on success, ParseError otherwise
    """
    specifier = specifier.strip()
    name, separator, directive = specifier.partition("@")

    if not PACKAGE_NAME_PATTERN.match(name):
        return ParseError(
            ParseErrorKind.INVALID_NAME, specifier,
            f"Invalid package name `{name}`"
        )

    if not separator:
        resolver = resolver or _default_resolver
        logger.debug("Resolving latest release of %s", name)
        return DependencyDescriptor(name=name, source=RegistrySource(resolver(name)))

    if not directive:
        return ParseError(ParseErrorKind.INVALID_VERSION, specifier, "Missing version after `@`")

    for prefix, parser in DIRECTIVE_PARSERS:
        if directive.startswith(prefix):
            source = parser(specifier, directive[len(prefix):])
            break
    else:
        source = _parse_version(specifier, directive)

    if isinstance(source, ParseError):
        return source
    return DependencyDescriptor(name=name, source=source)
