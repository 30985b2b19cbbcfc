"""Preview or apply the changes collected in a working context."""

import logging
from typing import Any, Callable, Dict, Optional

from ..utils.console import (
    _rich_confirm, _rich_diff, _rich_error, _rich_info, _rich_panel, _rich_success, _rich_warning
)
from .project import WorkingContext

logger = logging.getLogger(__name__)


def do_or_dry_run(
    context: WorkingContext,
    options: Dict[str, Any],
    confirm: Optional[Callable[[str], bool]] = None,
) -> bool:
    """Show the pending changes, then write them unless this is a dry run.

    Issues reported by installers block writing. Without ``yes`` the user is
    asked before anything is written.

    Args:
        context: Working context holding the pending rewrites
        options: Resolved options; ``title``, ``yes`` and ``dry_run`` are used
        confirm: Yes/no prompt, defaults to a Rich confirmation

    Returns:
        bool: True if changes were written
    """
    title = options.get("title") or "patchkit"
    _rich_panel(title, title="patchkit", style="cyan")

    for warning in context.warnings:
        _rich_warning(warning, symbol="warning")

    if context.issues:
        for issue in context.issues:
            _rich_error(issue, symbol="error")
        _rich_error("Issues were found; no changes were made")
        return False

    changed = context.changed_paths()
    if not changed:
        for notice in context.notices:
            _rich_info(notice, symbol="info")
        _rich_info("No proposed content changes!")
        return False

    _rich_diff(context.diff(changed))
    for notice in context.notices:
        _rich_info(notice, symbol="info")

    if options.get("dry_run"):
        _rich_info("Dry run: no changes were written", symbol="preview")
        return False

    if not options.get("yes"):
        confirm = confirm or _rich_confirm
        if not confirm("Proceed with changes?"):
            _rich_warning("Changes discarded")
            return False

    written = context.write(changed)
    logger.debug("Applied %d file change(s)", len(written))
    _rich_success(f"Applied changes to {len(written)} file(s)", symbol="check")
    return True
