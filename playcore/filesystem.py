"""
Filesystem adapter used by the directory scanner.

The scanner never touches ``os`` directly; it goes through an adapter with
``list_directory``, ``stat``, ``resolve_type`` and ``is_directory``.
Archive contents mounted by a virtual filesystem layer look like ordinary
directories to it.
"""
import os
import stat
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Tuple


class EntryType(Enum):
    """Entry type as reported inline by a directory listing."""
    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    OTHER = "other"        # fifo, socket, device
    UNKNOWN = "unknown"    # no inline type, caller must stat


class LocalFilesystem:
    """Adapter over the local (possibly archive-mounted) filesystem."""

    @contextmanager
    def list_directory(self, path: str) -> Iterator[Iterator[Tuple[str, EntryType]]]:
        """Open a directory and yield an iterator of (name, type) pairs.

        Raises:
            OSError: if the directory can't be opened or read
        """
        with os.scandir(path) as entries:
            yield ((entry.name, self._entry_type(entry)) for entry in entries)

    @staticmethod
    def _entry_type(entry: os.DirEntry) -> EntryType:
        # DirEntry answers these from d_type when the OS provides it
        if entry.is_symlink():
            return EntryType.SYMLINK
        if entry.is_dir(follow_symlinks=False):
            return EntryType.DIRECTORY
        if entry.is_file(follow_symlinks=False):
            return EntryType.FILE
        return EntryType.OTHER

    def stat(self, path: str) -> os.stat_result:
        """Stat a path, following symbolic links."""
        return os.stat(path)

    def resolve_type(self, path: str) -> EntryType:
        """Type of the object a path resolves to, following symbolic links.

        Returns DIRECTORY, FILE (regular files only) or OTHER.

        Raises:
            OSError: if the path can't be stat'd
        """
        mode = self.stat(path).st_mode
        if stat.S_ISDIR(mode):
            return EntryType.DIRECTORY
        if stat.S_ISREG(mode):
            return EntryType.FILE
        return EntryType.OTHER

    def is_directory(self, path: str) -> bool:
        """Check if path is a directory.

        Raises:
            OSError: if the path can't be stat'd
        """
        return stat.S_ISDIR(self.stat(path).st_mode)


default_filesystem = LocalFilesystem()
