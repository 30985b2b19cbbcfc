"""Normalize the accepted input shapes into a list of dependency descriptors."""

import logging
from typing import Any, Iterable, List, Optional, Union

from ..core.exceptions import InvalidSpecifier, SelfInstallRejected
from ..models.descriptor import DependencyDescriptor, ParseError
from .specifier import Resolver, parse_specifier

logger = logging.getLogger(__name__)

SELF_PACKAGE = "patchkit"

Requirements = Union[str, Iterable[Any]]


def normalize_requirements(
    deps: Requirements, resolver: Optional[Resolver] = None
) -> List[DependencyDescriptor]:
    """Turn the requested dependencies into descriptors, in request order.

    ``deps`` can be either:

    - a string like ``"ash,ash_postgres"``
    - a list of strings like ``["ash", "ash_postgres@~>2.0"]``
    - a list of pairs like ``[("ash", "~> 3.0"), ("ash_postgres", "~> 2.0")]``
      or of already built :class:`DependencyDescriptor` objects, passed through

    The first unparseable specifier aborts the whole request.

    Raises:
        InvalidSpecifier: If a specifier cannot be parsed
        RegistryResolutionFailed: If a bare name cannot be resolved
        SelfInstallRejected: If the request names patchkit itself
    """
    if isinstance(deps, str):
        deps = deps.split(",")

    descriptors = []
    for dep in deps:
        if isinstance(dep, DependencyDescriptor):
            descriptors.append(dep)
        elif isinstance(dep, tuple):
            name, requirement = dep
            try:
                descriptors.append(DependencyDescriptor.from_pair(name, requirement))
            except ValueError as e:
                raise InvalidSpecifier(str(name), str(e))
        elif isinstance(dep, str):
            if not dep.strip():
                continue
            # Checked before parsing so a bare `patchkit` never hits the registry
            if dep.strip().partition("@")[0] == SELF_PACKAGE:
                raise SelfInstallRejected(SELF_PACKAGE)
            result = parse_specifier(dep, resolver)
            if isinstance(result, ParseError):
                raise InvalidSpecifier(dep.strip(), str(result))
            descriptors.append(result)
        else:
            raise InvalidSpecifier(repr(dep), "expected a specifier string or a (name, requirement) pair")

    if any(descriptor.name == SELF_PACKAGE for descriptor in descriptors):
        raise SelfInstallRejected(SELF_PACKAGE)

    logger.debug("Normalized requirements: %s", ", ".join(map(str, descriptors)))
    return descriptors
