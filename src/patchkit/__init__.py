"""patchkit: install packages and run the project installers they ship."""

from .version import __version__
from .models import DependencyDescriptor
from .deps import normalize_requirements, parse_specifier
from .core.installer import InstallationReport, Installer, install
from .core.tasks import TaskRegistry

__all__ = [
    "__version__",
    "DependencyDescriptor",
    "normalize_requirements",
    "parse_specifier",
    "InstallationReport",
    "Installer",
    "install",
    "TaskRegistry",
]
