"""Version management for patchkit."""

import re
from importlib.metadata import PackageNotFoundError, version as distribution_version
from pathlib import Path


def get_version() -> str:
    """
    Get the current version.

    Uses the installed distribution metadata, then falls back to parsing
    pyproject.toml for source checkouts.

    Returns:
        str: Version string
    """
    try:
        return distribution_version("patchkit")
    except PackageNotFoundError:
        pass

    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject_path.exists():
        # Simple regex parsing instead of full TOML library
        content = pyproject_path.read_text(encoding='utf-8')
        match = re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE)
        if match:
            return match.group(1)

    return "unknown"


__version__ = get_version()
