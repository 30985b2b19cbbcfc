"""Installer task lookup and composition.

Packages expose an installer by registering a function under the
``patchkit.installers`` entry-point group, keyed by the package name::

    [project.entry-points."patchkit.installers"]
    ash = "ash.patchkit:install"

The function receives the working context and the pass-through argv, and
returns the (possibly new) working context.
"""

import logging
from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import Callable, Dict, List, Optional, Sequence

from .project import WorkingContext

logger = logging.getLogger(__name__)

INSTALLER_SUFFIX = ".install"
ENTRY_POINT_GROUP = "patchkit.installers"

TaskFunction = Callable[[WorkingContext, List[str]], Optional[WorkingContext]]


@dataclass(frozen=True)
class TaskHandle:
    """A runnable installer procedure."""
    name: str
    run: TaskFunction
    package: Optional[str] = None


def installer_task_name(package: str) -> str:
    """Installer task name for a package, e.g. ``ash`` -> ``ash.install``."""
    return f"{package}{INSTALLER_SUFFIX}"


def strip_installer_suffix(task_name: str) -> str:
    if task_name.endswith(INSTALLER_SUFFIX):
        return task_name[:-len(INSTALLER_SUFFIX)]
    return task_name


class TaskRegistry:
    """Capability table mapping task names to installer handles."""

    def __init__(self):
        self._tasks: Dict[str, TaskHandle] = {}

    def register(self, name: str, run: TaskFunction, package: Optional[str] = None) -> TaskHandle:
        handle = TaskHandle(name=name, run=run, package=package)
        self._tasks[name] = handle
        return handle

    def installer(self, package: str) -> Callable[[TaskFunction], TaskFunction]:
        """Decorator registering ``func`` as the installer of ``package``."""
        def decorator(func: TaskFunction) -> TaskFunction:
            self.register(installer_task_name(package), func, package=package)
            return func
        return decorator

    def find_task(self, name: str) -> Optional[TaskHandle]:
        return self._tasks.get(name)

    def names(self) -> List[str]:
        return sorted(self._tasks)

    def __contains__(self, name: str) -> bool:
        return name in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def discover(self, group: str = ENTRY_POINT_GROUP) -> int:
        """Register installers advertised by installed distributions.

        Already registered tasks are kept. An entry point that fails to load
        is logged and skipped.

        Returns:
            int: Number of newly registered installers
        """
        added = 0
        for entry_point in entry_points(group=group):
            name = installer_task_name(entry_point.name)
            if name in self._tasks:
                continue
            try:
                run = entry_point.load()
            except Exception as e:
                logger.warning("Could not load installer %s (%s): %s", name, entry_point.value, e)
                continue
            self.register(name, run, package=entry_point.name)
            added += 1
        logger.debug("Discovered %d installer(s) in %s", added, group)
        return added


def compose_task(context: WorkingContext, task: TaskHandle, argv: Sequence[str]) -> WorkingContext:
    """Run one installer against the working context.

    A failing installer is recorded as an issue on the context, which stops
    the executor from writing any change.
    """
    logger.info("Running installer %s", task.name)
    try:
        result = task.run(context, list(argv))
    except Exception as e:
        logger.debug("Installer %s failed", task.name, exc_info=True)
        context.add_issue(f"Installer `{task.name}` failed: {e}")
        return context

    if result is not None:
        context = result
    context.tasks.append(task.name)
    return context
