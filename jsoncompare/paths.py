"""Path tracking and ignore-path matching during traversal."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

from .exceptions import ValidationError
from .models import NameComparison

ROOT_PATH = "$"


def normalize_path(path: str) -> str:
    """
    Prefix a path with the root marker where missing.

    ``foo.bar`` becomes ``$.foo.bar`` and ``[0].bar`` becomes ``$[0].bar``.
    """
    if not path:
        return ROOT_PATH
    if path.startswith(ROOT_PATH):
        return path
    if path.startswith("["):
        return ROOT_PATH + path
    return f"{ROOT_PATH}.{path}"


class PathTracker:
    """
    Tracks the qualified path (with array indices) and the unqualified path
    (indices collapsed) of the current traversal position.

    An ignore entry matches a field when it equals either path, so
    ``items.price`` ignores ``$.items[0].price``, ``$.items[1].price`` and so on.
    """

    def __init__(
        self,
        ignore_paths: Optional[Iterable[str]] = None,
        path_comparison: NameComparison = NameComparison.IGNORE_CASE
    ):
        self.path_comparison = path_comparison
        self._paths = [ROOT_PATH]
        self._unqualified_paths = [ROOT_PATH]
        self._ignored = set()

        for entry in ignore_paths or ():
            if not isinstance(entry, str) or not entry.strip():
                raise ValidationError(
                    "Ignore paths must be non-empty strings",
                    {"path": repr(entry)}
                )
            self._ignored.add(path_comparison.key(normalize_path(entry.strip())))

    @property
    def path(self) -> str:
        return self._paths[-1]

    @property
    def unqualified_path(self) -> str:
        return self._unqualified_paths[-1]

    @property
    def depth(self) -> int:
        return len(self._paths) - 1

    def is_ignored(self, path: str) -> bool:
        return bool(self._ignored) and self.path_comparison.key(path) in self._ignored

    @contextmanager
    def field(self, name: str) -> Iterator[bool]:
        """
        Enter an object member; yields False (without moving) when ignored.
        """
        unqualified = f"{self.unqualified_path}.{name}"
        qualified = f"{self.path}.{name}"
        if self.is_ignored(unqualified) or self.is_ignored(qualified):
            yield False
            return

        self._unqualified_paths.append(unqualified)
        self._paths.append(qualified)
        try:
            yield True
        finally:
            self._paths.pop()
            self._unqualified_paths.pop()

    @contextmanager
    def index(self, i: int) -> Iterator[bool]:
        """Enter an array element; only the qualified path changes."""
        qualified = f"{self.path}[{i}]"
        if self.is_ignored(qualified):
            yield False
            return

        self._paths.append(qualified)
        try:
            yield True
        finally:
            self._paths.pop()
