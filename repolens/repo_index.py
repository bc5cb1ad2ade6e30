"""Single-pass repository index used by every analyzer."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Set, Tuple

from .logging import get_logger

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".venv",
    ".gradle",
    ".angular",
    "__pycache__",
    "node_modules",
    "Pods",
    "Carthage",
    "DerivedData",
    "build",
    "dist",
}

_logger = get_logger("index")


class TraversalError(RuntimeError):
    """Raised when the repository root cannot be traversed."""


def _iter_files(root: Path) -> Iterator[Path]:
    def _on_error(exc: OSError) -> None:
        _logger.debug("Skipping unreadable entry %s: %s", exc.filename, exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error, followlinks=False):
        dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)

        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            path = current_dir / filename
            try:
                mode = path.lstat().st_mode
            except OSError as exc:
                _logger.debug("Skipping %s: %s", path, exc)
                continue
            # symlinks are reported by os.walk but never indexed
            if stat.S_ISREG(mode):
                yield path


class RepoIndex:
    """In-memory index of repository files, built by walking the tree once.

    Instances are read-only after :meth:`build`; analyzers share one index
    per analysis run and never touch the filesystem tree again.
    """

    def __init__(self, root: Path, files: Iterable[Path]) -> None:
        self._root = root
        self._files: Tuple[Path, ...] = tuple(files)

        by_name: Dict[str, List[Path]] = {}
        extensions: Set[str] = set()
        relative: Dict[Path, str] = {}
        for path in self._files:
            by_name.setdefault(path.name, []).append(path)
            if path.suffix:
                extensions.add(path.suffix[1:])
            relative[path] = path.relative_to(root).as_posix()

        self._by_name: Dict[str, Tuple[Path, ...]] = {
            name: tuple(paths) for name, paths in by_name.items()
        }
        self._extensions = frozenset(extensions)
        self._relative = relative

    @classmethod
    def build(cls, root: str | os.PathLike[str]) -> "RepoIndex":
        """Walk ``root`` once and return the resulting index."""
        root_path = Path(root).expanduser()
        try:
            root_path = root_path.resolve(strict=True)
        except FileNotFoundError as exc:
            raise TraversalError(f"Repository path not found: {root}") from exc
        except OSError as exc:
            raise TraversalError(f"Repository path is not readable: {root}: {exc}") from exc
        if not root_path.is_dir():
            raise TraversalError(f"Repository path is not a directory: {root}")
        try:
            with os.scandir(root_path):
                pass
        except OSError as exc:
            raise TraversalError(f"Repository path is not readable: {root}: {exc}") from exc

        index = cls(root_path, _iter_files(root_path))
        _logger.debug("Indexed %d files under %s", len(index.files), root_path)
        return index

    @property
    def root(self) -> Path:
        return self._root

    @property
    def files(self) -> Tuple[Path, ...]:
        """Every indexed regular file, in traversal order."""
        return self._files

    def files_with_name(self, name: str) -> Tuple[Path, ...]:
        """Return files whose name equals ``name`` exactly (case-sensitive)."""
        return self._by_name.get(name, ())

    def has_file(self, name: str) -> bool:
        return name in self._by_name

    def has_extension(self, ext: str) -> bool:
        return ext in self._extensions

    def has_path_pattern(self, pattern: str) -> bool:
        """Return True when any root-relative path contains ``pattern``."""
        return any(pattern in rel_path for rel_path in self._relative.values())

    def files_with_extensions(self, exts: Iterable[str]) -> Tuple[Path, ...]:
        wanted = {f".{ext}" for ext in exts}
        return tuple(path for path in self._files if path.suffix in wanted)

    def relative(self, path: Path) -> str:
        """Return the root-relative POSIX form of an indexed path or directory."""
        cached = self._relative.get(path)
        if cached is not None:
            return cached
        return path.relative_to(self._root).as_posix()


__all__ = ["RepoIndex", "TraversalError"]
