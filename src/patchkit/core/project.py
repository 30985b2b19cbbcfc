"""Project manifest access and the in-memory working context of an install."""

import difflib
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import yaml

from ..models.descriptor import DependencyDescriptor

logger = logging.getLogger(__name__)

MANIFEST_NAME = "patchkit.yml"


class Project:
    """A project on disk, identified by its root directory."""

    def __init__(self, root: Optional[Union[str, Path]] = None):
        self.root = Path(root) if root is not None else Path.cwd()

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_NAME

    def load_manifest(self) -> dict:
        """Load ``patchkit.yml``, or an empty manifest when there is none.

        Raises:
            ValueError: If the file is not a YAML mapping
        """
        if not self.manifest_path.exists():
            return {"dependencies": []}

        try:
            with open(self.manifest_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML format in {self.manifest_path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"{MANIFEST_NAME} must contain a YAML object, got {type(data)}")
        if data.get("dependencies") is None:
            data["dependencies"] = []
        if not isinstance(data["dependencies"], list):
            raise ValueError(f"'dependencies' in {MANIFEST_NAME} must be a list")
        return data

    def get_dependencies(self) -> List[DependencyDescriptor]:
        """Dependencies currently declared on disk."""
        return [
            DependencyDescriptor.from_manifest_entry(entry)
            for entry in self.load_manifest()["dependencies"]
        ]

    @staticmethod
    def render_manifest(data: dict) -> str:
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)


class WorkingContext:
    """Pending changes of one install, applied only by the fetcher and executor.

    Holds the in-memory manifest, file rewrites keyed by absolute path, the
    messages collected from installers and the names of composed tasks.
    """

    def __init__(self, project: Optional[Project] = None):
        self.project = project or Project()
        self.manifest = self.project.load_manifest()
        self.rewrites: Dict[Path, str] = {}
        self.notices: List[str] = []
        self.warnings: List[str] = []
        self.issues: List[str] = []
        self.tasks: List[str] = []
        self.added_dependencies: List[DependencyDescriptor] = []
        self._prepend_at = 0

    def _resolve(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.project.root / path

    def get_dependencies(self) -> List[DependencyDescriptor]:
        return [DependencyDescriptor.from_manifest_entry(entry) for entry in self.manifest["dependencies"]]

    def add_dependency(
        self,
        descriptor: DependencyDescriptor,
        append: bool = False,
        only: Optional[List[str]] = None,
    ) -> bool:
        """Add or update a dependency in the pending manifest.

        New entries go to the front of the list, in the order they are added,
        unless ``append`` is set. An existing entry with the same name is
        replaced in place. ``only`` restricts the dependency to the given
        environments.

        Returns:
            bool: True if the manifest changed
        """
        entries = self.manifest["dependencies"]
        entry = descriptor.to_manifest_entry()
        if only:
            entry["only"] = list(only)

        for index, existing in enumerate(entries):
            if isinstance(existing, dict) and existing.get("name") == descriptor.name:
                if existing == entry:
                    logger.debug("Dependency %s is already declared", descriptor)
                    return False
                previous = DependencyDescriptor.from_manifest_entry(existing)
                entries[index] = entry
                self.add_notice(
                    f"Dependency {descriptor.name} updated from `{previous.requirement}` "
                    f"to `{descriptor.requirement}`"
                )
                break
        else:
            if append:
                entries.append(entry)
            else:
                entries.insert(self._prepend_at, entry)
                self._prepend_at += 1

        self.added_dependencies.append(descriptor)
        self.rewrites[self.project.manifest_path] = self.manifest_text()
        return True

    @property
    def dependencies_changed(self) -> bool:
        return self.project.manifest_path in self.rewrites

    def manifest_text(self) -> str:
        return self.project.render_manifest(self.manifest)

    def read_file(self, path: Union[str, Path]) -> Optional[str]:
        """Current content of a file, pending rewrites included."""
        path = self._resolve(path)
        if path in self.rewrites:
            return self.rewrites[path]
        if path.exists():
            return path.read_text(encoding='utf-8')
        return None

    def create_or_update_file(self, path: Union[str, Path], content: str) -> "WorkingContext":
        self.rewrites[self._resolve(path)] = content
        return self

    def update_file(self, path: Union[str, Path], updater: Callable[[str], str]) -> "WorkingContext":
        """Rewrite a file through ``updater``; a missing file starts out empty."""
        current = self.read_file(path) or ""
        return self.create_or_update_file(path, updater(current))

    def add_notice(self, notice: str) -> "WorkingContext":
        self.notices.append(notice)
        return self

    def add_warning(self, warning: str) -> "WorkingContext":
        self.warnings.append(warning)
        return self

    def add_issue(self, issue: str) -> "WorkingContext":
        self.issues.append(issue)
        return self

    def changed_paths(self) -> List[Path]:
        """Pending rewrites whose content differs from the file on disk."""
        changed = []
        for path, content in self.rewrites.items():
            on_disk = path.read_text(encoding='utf-8') if path.exists() else None
            if content != on_disk:
                changed.append(path)
        return changed

    def has_changes(self) -> bool:
        return bool(self.changed_paths())

    def diff(self, paths: Optional[List[Path]] = None) -> str:
        """Unified diff of pending rewrites against the files on disk."""
        chunks = []
        for path in paths if paths is not None else self.changed_paths():
            old = path.read_text(encoding='utf-8') if path.exists() else ""
            try:
                label = str(path.relative_to(self.project.root))
            except ValueError:
                label = str(path)
            chunks.extend(difflib.unified_diff(
                old.splitlines(keepends=True),
                self.rewrites[path].splitlines(keepends=True),
                fromfile=f"a/{label}",
                tofile=f"b/{label}",
            ))
        return "".join(chunks)

    def write(self, paths: Optional[List[Path]] = None) -> List[Path]:
        """Write pending rewrites to disk and drop them from the pending set."""
        written = []
        for path in list(paths if paths is not None else self.rewrites):
            content = self.rewrites.pop(path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding='utf-8')
            logger.debug("Wrote %s", path)
            written.append(path)
        return written
