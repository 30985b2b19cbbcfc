"""Install packages and run their associated installers, if present."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..deps.normalizer import Requirements, normalize_requirements
from ..deps.specifier import Resolver
from ..utils.console import _rich_info, _rich_warning
from .exceptions import EnvironmentMismatch
from .executor import do_or_dry_run
from .fetcher import DependencyFetcher
from .options import TaskInfo, compose_install_and_validate, global_options, parse_only
from .project import WorkingContext
from .tasks import TaskHandle, TaskRegistry, compose_task, strip_installer_suffix

logger = logging.getLogger(__name__)

Executor = Callable[[WorkingContext, Dict[str, Any]], bool]


@dataclass
class InstallationReport:
    """Outcome of an install: which installers ran and which packages had none."""
    available: List[str] = field(default_factory=list)
    unavailable: List[str] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)
    title: Optional[str] = None
    messages: List[str] = field(default_factory=list)
    applied: bool = False


def installers_title(tasks: Sequence[str]) -> str:
    if len(tasks) == 1:
        return f"The following installer was found and executed: `{tasks[0]}`"
    return "The following installers were found and executed: " + ", ".join(f"`{task}`" for task in tasks)


def unavailable_message(packages: Sequence[str]) -> str:
    if len(packages) == 1:
        return f"The package `{packages[0]}` had no associated installer task."
    return f"The packages `{', '.join(packages)}` had no associated installer task."


class Installer:
    """Adds dependencies, fetches them and runs the installers they expose."""

    def __init__(
        self,
        env: str,
        registry: Optional[TaskRegistry] = None,
        fetcher: Optional[DependencyFetcher] = None,
        executor: Optional[Executor] = None,
        resolver: Optional[Resolver] = None,
    ):
        """Initialize the installer.

        Args:
            env: Environment this install runs in, checked against ``--only``
            registry: Installer capability table; discovered from entry points when omitted
            fetcher: Dependency-fetch collaborator
            executor: Dry-run/apply executor
            resolver: Registry lookup for bare package names
        """
        self.env = env
        if registry is None:
            registry = TaskRegistry()
            registry.discover()
        self.registry = registry
        self.fetcher = fetcher or DependencyFetcher()
        self.executor = executor or do_or_dry_run
        self.resolver = resolver

    def install(
        self,
        deps: Requirements,
        argv: Sequence[str] = (),
        context: Optional[WorkingContext] = None,
        append: bool = False,
    ) -> InstallationReport:
        """Install the requested dependencies and run their installers.

        ``deps`` can be a comma-joined string, a list of specifiers or a list
        of ``(name, requirement)`` pairs.

        Raises:
            InvalidSpecifier, RegistryResolutionFailed, SelfInstallRejected,
            EnvironmentMismatch: before anything is modified
            InstallAborted, DependencyFetchFailed: while applying the manifest
        """
        argv = list(argv)
        descriptors = normalize_requirements(deps, self.resolver)
        if not descriptors:
            _rich_warning("No packages were requested")
            return InstallationReport()

        only = parse_only(argv)
        if only and self.env not in only:
            raise EnvironmentMismatch(only, self.env)

        switches = global_options()
        context, desired_tasks, (options, _) = compose_install_and_validate(
            context or WorkingContext(),
            argv,
            TaskInfo(
                schema=switches["switches"],
                aliases=switches["aliases"],
                installs=descriptors,
            ),
            "install",
            yes="--yes" in argv or "-y" in argv,
            only=only,
            append=append,
        )

        context = self.fetcher.apply_and_fetch(context, options)

        # Freshly fetched packages may have brought new installers
        self.registry.discover()

        available: List[TaskHandle] = []
        unavailable: List[str] = []
        for task_name in desired_tasks:
            task = self.registry.find_task(task_name)
            if task is None:
                unavailable.append(strip_installer_suffix(task_name))
            else:
                available.append(task)

        report = InstallationReport(options=options)
        report.available = [task.name for task in available]
        report.unavailable = unavailable

        if available:
            report.title = installers_title(report.available)
            report.messages.append(report.title)
            report.applied = self._run_installers(context, available, report.title, argv, options)

        if unavailable:
            message = unavailable_message(unavailable)
            report.messages.append(message)
            _rich_info(message)

        return report

    def _run_installers(
        self,
        context: WorkingContext,
        tasks: Sequence[TaskHandle],
        title: str,
        argv: Sequence[str],
        options: Dict[str, Any],
    ) -> bool:
        for task in tasks:
            context = compose_task(context, task, argv)
        return self.executor(context, {**options, "title": title})


def install(
    deps: Requirements,
    argv: Sequence[str] = (),
    context: Optional[WorkingContext] = None,
    *,
    env: str,
    append: bool = False,
    registry: Optional[TaskRegistry] = None,
    fetcher: Optional[DependencyFetcher] = None,
    executor: Optional[Executor] = None,
    resolver: Optional[Resolver] = None,
) -> InstallationReport:
    """Convenience wrapper around :meth:`Installer.install`."""
    installer = Installer(env, registry=registry, fetcher=fetcher, executor=executor, resolver=resolver)
    return installer.install(deps, argv, context=context, append=append)
