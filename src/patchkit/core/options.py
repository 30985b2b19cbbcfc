"""Option schemas and argv handling for installer tasks."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import click

from ..models.descriptor import DependencyDescriptor
from .exceptions import InstallError
from .project import WorkingContext
from .tasks import installer_task_name

logger = logging.getLogger(__name__)

KEEP = "keep"

# Switches understood by every install; anything else is passed through to installers
GLOBAL_SWITCHES: Dict[str, Any] = {
    "yes": bool,
    "dry_run": bool,
    "only": KEEP,
    "example": bool,
    "verbose": bool,
}
GLOBAL_ALIASES: Dict[str, str] = {"y": "yes"}


@dataclass
class TaskInfo:
    """Describes the options and dependencies of a composite task."""
    schema: Dict[str, Any] = field(default_factory=dict)
    aliases: Dict[str, str] = field(default_factory=dict)
    installs: List[DependencyDescriptor] = field(default_factory=list)


def global_options() -> Dict[str, Dict[str, Any]]:
    return {"switches": dict(GLOBAL_SWITCHES), "aliases": dict(GLOBAL_ALIASES)}


def _build_command(schema: Dict[str, Any], aliases: Dict[str, str]) -> click.Command:
    params = []
    for name, kind in schema.items():
        decls = [name, f"--{name.replace('_', '-')}"]
        decls.extend(f"-{alias}" for alias, target in aliases.items() if target == name)
        if kind is bool:
            params.append(click.Option(decls, is_flag=True, default=False))
        elif kind == KEEP:
            params.append(click.Option(decls, multiple=True))
        else:
            params.append(click.Option(decls, type=kind))
    return click.Command(
        "install",
        params=params,
        add_help_option=False,
        context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    )


def parse_argv(
    argv: Sequence[str], schema: Dict[str, Any], aliases: Optional[Dict[str, str]] = None
) -> Tuple[Dict[str, Any], List[str]]:
    """Parse the switches of ``schema`` out of ``argv``.

    Schema values are ``bool`` for flags, ``"keep"`` for repeatable options
    and a click type (``str``, ``int``...) for single-valued options.

    Returns:
        Tuple of the parsed options and the unrecognized arguments

    Raises:
        InstallError: If a known option is malformed, e.g. missing its value
    """
    command = _build_command(schema, aliases or {})
    try:
        ctx = command.make_context("install", list(argv))
    except click.UsageError as e:
        raise InstallError(f"Invalid arguments: {e.format_message()}")
    return dict(ctx.params), list(ctx.args)


def parse_only(argv: Sequence[str]) -> Optional[List[str]]:
    """Collect ``--only`` environments; repeated and comma-joined values both count.

    Returns:
        The environments in order, or None when ``--only`` was not given
    """
    options, _ = parse_argv(argv, {"only": KEEP})
    envs = [env.strip() for value in options["only"] for env in value.split(",") if env.strip()]
    return envs or None


def compose_install_and_validate(
    context: WorkingContext,
    argv: Sequence[str],
    task_info: TaskInfo,
    task_name: str,
    yes: bool = False,
    only: Optional[List[str]] = None,
    append: bool = False,
) -> Tuple[WorkingContext, List[str], Tuple[Dict[str, Any], List[str]]]:
    """Add the requested dependencies to the context and resolve the option set.

    Returns:
        Tuple of the working context, the desired installer task names in
        request order, and ``(options, remaining_argv)``
    """
    options, rest = parse_argv(argv, task_info.schema, task_info.aliases)
    options["yes"] = bool(options.get("yes")) or yes
    options.setdefault("dry_run", False)
    options["only"] = only
    options["append"] = append
    options["task"] = task_name

    for descriptor in task_info.installs:
        context.add_dependency(descriptor, append=append, only=only)

    desired_tasks = [installer_task_name(descriptor.name) for descriptor in task_info.installs]
    logger.debug("%s: desired installers %s", task_name, desired_tasks)
    return context, desired_tasks, (options, rest)
