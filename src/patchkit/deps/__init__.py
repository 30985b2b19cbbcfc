"""Specifier parsing and requirement normalization for patchkit."""

from .version import (
    SemanticVersion,
    parse_version,
    parse_requirement,
    version_string_to_general_requirement,
    version_string_to_general_requirement_strict,
)
from .specifier import parse_specifier
from .normalizer import normalize_requirements, SELF_PACKAGE

__all__ = [
    'SemanticVersion',
    'parse_version',
    'parse_requirement',
    'version_string_to_general_requirement',
    'version_string_to_general_requirement_strict',
    'parse_specifier',
    'normalize_requirements',
    'SELF_PACKAGE',
]
