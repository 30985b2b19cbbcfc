"""Package registry module for patchkit."""

from .client import PackageRegistryClient

__all__ = ["PackageRegistryClient"]
