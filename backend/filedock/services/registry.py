"""Local registry: the widget's ordered, name-keyed cache of remote files."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from filedock.schemas.files import FileEntry

logger = logging.getLogger(__name__)


class DuplicateFileError(ValueError):
    """Raised when adding a name that is already registered."""


class FileCollection:
    """Ordered collection of FileEntry, unique by exact (case-sensitive) name.

    Insertion order is display order; new uploads are appended last.
    """

    def __init__(self, entries: Iterable[FileEntry] = ()):
        self._entries: dict[str, FileEntry] = {}
        for entry in entries:
            self.add(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FileEntry]:
        return iter(list(self._entries.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def contains(self, name: str) -> bool:
        return name in self._entries

    def get(self, name: str) -> FileEntry | None:
        return self._entries.get(name)

    def names(self) -> list[str]:
        return list(self._entries)

    def add(self, entry: FileEntry) -> None:
        """Append an entry. Raises DuplicateFileError if the name exists."""
        if entry.name in self._entries:
            raise DuplicateFileError(f"File already registered: {entry.name}")
        self._entries[entry.name] = entry

    def remove(self, name: str) -> FileEntry | None:
        """Remove by exact name. A missing name is a no-op returning None."""
        return self._entries.pop(name, None)

    def clear(self) -> None:
        self._entries.clear()

    def replace_all(self, entries: Iterable[FileEntry]) -> None:
        """Rebuild from a server listing, keeping the server's order.

        Repeated names keep their first occurrence.
        """
        self._entries.clear()
        for entry in entries:
            if entry.name in self._entries:
                logger.warning("Ignoring duplicate file in server listing: %s", entry.name)
                continue
            self._entries[entry.name] = entry
