"""Command-line interface for patchkit."""

import sys
from pathlib import Path

import click

from patchkit.config import get_current_env
from patchkit.core.exceptions import InstallError
from patchkit.core.installer import Installer
from patchkit.core.project import Project, WorkingContext
from patchkit.utils.console import _get_console, _rich_error, configure_logging
from patchkit.version import get_version


def print_version(ctx, param, value):
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    _get_console().print(f"patchkit version {get_version()}", style="bold cyan")
    ctx.exit()


@click.group(help="patchkit: install packages and run the installers they ship")
@click.option('--version', is_flag=True, callback=print_version,
              expose_value=False, is_eager=True, help="Show version and exit.")
@click.pass_context
def cli(ctx):
    """Main entry point for the patchkit CLI."""
    ctx.ensure_object(dict)


@cli.command(
    help="Install packages and run their installers",
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
@click.argument('packages')
@click.argument('argv', nargs=-1, type=click.UNPROCESSED)
@click.option('--project-dir', type=click.Path(file_okay=False, path_type=Path),
              default=None, help="Project root (defaults to the current directory)")
@click.pass_context
def install(ctx, packages, argv, project_dir):
    """Add packages to patchkit.yml, fetch them and run their installers.

    Every argument after the package list is passed on to the installers.
    patchkit itself understands:

    \b
        --yes, -y          apply changes without asking
        --dry-run          show what would change without writing
        --only ENV[,ENV]   add the packages for these environments only
        --example          ask installers to generate example code
        --verbose          log debug output

    Examples:

    \b
        patchkit install ash
        patchkit install ash,ash_postgres@~>2.0 --yes
        patchkit install foo@github:org/foo@main --dry-run
        PATCHKIT_ENV=test patchkit install mox --only test
    """
    argv = list(argv) + list(ctx.args)
    configure_logging("--verbose" in argv)
    try:
        context = WorkingContext(Project(project_dir))
        installer = Installer(get_current_env())
        installer.install(packages, argv, context=context)
    except InstallError as e:
        _rich_error(str(e), symbol="error")
        sys.exit(1)
    except ValueError as e:
        _rich_error(f"Invalid project configuration: {e}", symbol="error")
        sys.exit(1)


def main():
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
