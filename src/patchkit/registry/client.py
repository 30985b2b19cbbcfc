"""Package registry client used to resolve the latest release of a package."""

import logging
from typing import Any, Dict, Optional

import requests

from ..config import get_config, get_registry_url
from ..core.exceptions import RegistryResolutionFailed
from ..deps.version import version_string_to_general_requirement

logger = logging.getLogger(__name__)


class PackageRegistryClient:
    """Simple client for querying package metadata from the registry."""

    def __init__(
        self,
        registry_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the registry client.

        Args:
            registry_url (str, optional): Base URL of the registry. If not provided,
                uses PATCHKIT_REGISTRY_URL or the configured registry.
            user_agent (str, optional): User-Agent header sent with every request.
            timeout (float, optional): Request timeout in seconds.
            session (requests.Session, optional): Session to reuse.
        """
        config = get_config()
        self.registry_url = (registry_url or get_registry_url()).rstrip("/")
        self.user_agent = user_agent or config["user_agent"]
        self.timeout = timeout if timeout is not None else config["request_timeout"]
        self.session = session or requests.Session()

    def get_package(self, name: str) -> Dict[str, Any]:
        """Get the metadata document of a package.

        Args:
            name (str): Package name.

        Returns:
            Dict[str, Any]: Decoded JSON body.

        Raises:
            requests.RequestException: If the request fails or returns a non-2xx status.
            ValueError: If the body is not valid JSON.
        """
        url = f"{self.registry_url}/api/packages/{name}"
        logger.debug("GET %s", url)
        response = self.session.get(
            url, headers={"User-Agent": self.user_agent}, timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    def latest_version(self, name: str) -> str:
        """Get the newest released version of a package.

        Releases are listed newest first, so the first entry wins.

        Raises:
            RegistryResolutionFailed: On any transport, status or payload problem.
        """
        try:
            data = self.get_package(name)
        except requests.Timeout:
            raise RegistryResolutionFailed(name, "registry request timed out")
        except ValueError:
            # requests' JSONDecodeError is also a RequestException
            raise RegistryResolutionFailed(name, "registry returned malformed JSON")
        except requests.RequestException as e:
            raise RegistryResolutionFailed(name, f"registry request failed ({e})")

        releases = data.get("releases") if isinstance(data, dict) else None
        if not isinstance(releases, list) or not releases:
            raise RegistryResolutionFailed(name, "no releases found")

        latest = releases[0]
        version = latest.get("version") if isinstance(latest, dict) else None
        if not isinstance(version, str) or not version:
            raise RegistryResolutionFailed(name, "latest release has no version")
        return version

    def resolve_latest(self, name: str) -> str:
        """Resolve a bare package name into a loose requirement on its latest release.

        Args:
            name (str): Package name.

        Returns:
            str: General requirement, e.g. ``~> 3.4`` for release 3.4.1.

        Raises:
            RegistryResolutionFailed: If the latest version cannot be determined.
        """
        version = self.latest_version(name)
        requirement = version_string_to_general_requirement(version)
        if requirement is None:
            raise RegistryResolutionFailed(name, f"latest release has invalid version `{version}`")
        logger.debug("Resolved %s to %s (latest %s)", name, requirement, version)
        return requirement
