"""Exception hierarchy for package installation.

Every fatal condition of an install raises a subclass of :class:`InstallError`.
The CLI turns these into a red message and a non-zero exit code.
"""

from typing import Optional, Sequence


class InstallError(Exception):
    """Base class for fatal installation errors."""

    code: str = "INSTALL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidSpecifier(InstallError):
    """A package specifier could not be parsed."""

    code = "INVALID_SPECIFIER"

    def __init__(self, specifier: str, reason: Optional[str] = None) -> None:
        message = f"Could not determine source for requested package `{specifier}`"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.specifier = specifier
        self.reason = reason


class SelfInstallRejected(InstallError):
    """The request names the framework's own package."""

    code = "SELF_INSTALL"

    def __init__(self, package: str) -> None:
        super().__init__(
            f"cannot install the {package} package with `{package} install`. "
            f"It is already available to this project; upgrade it with your package manager instead."
        )
        self.package = package


class EnvironmentMismatch(InstallError):
    """``--only`` was given but the running environment is not one of them."""

    code = "ENVIRONMENT_MISMATCH"

    def __init__(self, only: Sequence[str], env: str) -> None:
        only = list(only)
        super().__init__(
            "The `--only` option can only be used when running `patchkit install` in an environment\n"
            "that matches one of the environments in `--only`. For example:\n\n"
            f"    PATCHKIT_ENV={only[0]} patchkit install --only {','.join(only)}\n"
        )
        self.only = only
        self.env = env


class RegistryResolutionFailed(InstallError):
    """The latest release of a bare package name could not be determined."""

    code = "REGISTRY_RESOLUTION_FAILED"

    def __init__(self, package: str, reason: str) -> None:
        super().__init__(f"Could not determine source for requested package `{package}`: {reason}")
        self.package = package
        self.reason = reason


class DependencyFetchFailed(InstallError):
    """The dependency fetch command failed after the manifest was written."""

    code = "DEPENDENCY_FETCH_FAILED"

    def __init__(self, command: str, reason: str, restored: bool = False) -> None:
        message = f"Fetching dependencies with `{command}` failed: {reason}"
        if restored:
            message += "\nThe manifest was restored to its previous contents."
        super().__init__(message)
        self.command = command
        self.reason = reason
        self.restored = restored


class InstallAborted(InstallError):
    """The user declined to apply the dependency changes."""

    code = "ABORTED"
