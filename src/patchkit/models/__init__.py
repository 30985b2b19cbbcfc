"""Models for patchkit data structures."""

from .descriptor import (
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

__all__ = [
    "PACKAGE_NAME_PATTERN",
    "DependencyDescriptor",
    "GitHubSource",
    "GitSource",
    "ParseError",
    "ParseErrorKind",
    "PathSource",
    "RegistrySource",
    "Source",
]
