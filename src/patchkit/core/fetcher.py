"""Apply pending dependency changes and fetch the new dependencies."""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..config import get_fetch_command
from ..utils.console import _rich_confirm, _rich_diff, _rich_info, _rich_warning
from .exceptions import DependencyFetchFailed, InstallAborted
from .project import MANIFEST_NAME, WorkingContext

logger = logging.getLogger(__name__)


class DependencyFetcher:
    """Writes the manifest and runs the configured fetch command."""

    def __init__(
        self,
        command: Optional[str] = None,
        confirm: Optional[Callable[[str], bool]] = None,
    ):
        """Initialize the fetcher.

        Args:
            command: Shell-style fetch command, e.g. ``pip install -r requirements.txt``.
                Defaults to the configured ``fetch_command``; when empty only the
                manifest is written.
            confirm: Yes/no prompt used when ``yes`` is not set.
        """
        self.command = command if command is not None else get_fetch_command()
        self.confirm = confirm or _rich_confirm

    def apply_and_fetch(self, context: WorkingContext, options: Dict[str, Any]) -> WorkingContext:
        """Commit the pending manifest and fetch dependencies.

        Dry runs leave the manifest pending so the executor can preview it.
        When the fetch command fails, the manifest is restored before raising.

        Raises:
            InstallAborted: If the user declines the manifest change
            DependencyFetchFailed: If the fetch command fails
        """
        if not context.dependencies_changed:
            logger.debug("No dependency changes to apply")
            return context

        manifest_path = context.project.manifest_path
        if options.get("dry_run"):
            _rich_info(f"Dry run: {MANIFEST_NAME} would be updated and dependencies fetched", symbol="preview")
            _rich_diff(context.diff([manifest_path]))
            return context

        if not options.get("yes"):
            _rich_info("These dependencies should be installed before continuing:")
            _rich_diff(context.diff([manifest_path]))
            if not self.confirm(f"Modify {MANIFEST_NAME} and install?"):
                raise InstallAborted(f"Aborted: {MANIFEST_NAME} was not modified")

        backup = manifest_path.read_text(encoding='utf-8') if manifest_path.exists() else None
        context.write([manifest_path])

        if not self.command:
            _rich_warning(f"No fetch command configured; only {MANIFEST_NAME} was updated")
            return context

        _rich_info(f"running {self.command}", symbol="running")
        try:
            subprocess.run(shlex.split(self.command), cwd=context.project.root, check=True)
        except subprocess.CalledProcessError as e:
            restored = self._restore(manifest_path, backup)
            raise DependencyFetchFailed(self.command, f"exited with code {e.returncode}", restored)
        except OSError as e:
            restored = self._restore(manifest_path, backup)
            raise DependencyFetchFailed(self.command, str(e), restored)

        return context

    @staticmethod
    def _restore(manifest_path: Path, backup: Optional[str]) -> bool:
        try:
            if backup is None:
                manifest_path.unlink()
            else:
                manifest_path.write_text(backup, encoding='utf-8')
        except OSError as e:
            logger.error("Could not restore %s: %s", manifest_path, e)
            return False
        return True
