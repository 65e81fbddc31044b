"""
Directory scanning for the media browser.
"""
import os
from typing import Callable, List, Optional

from playcore.filesystem import EntryType, LocalFilesystem, default_filesystem
from playcore.filters import SuffixFilter
from playcore.logging_config import get_logger, FilesystemError

logger = get_logger('scanner')


def join_path(directory: str, name: str) -> str:
    """Join a directory (prefix or plain path) and an entry name."""
    if directory.endswith(os.sep):
        return directory + name
    return directory + os.sep + name


def is_directory(path: str, filesystem: Optional[LocalFilesystem] = None) -> bool:
    """Check if path is a directory.

    Raises:
        FilesystemError: if the path can't be stat'd
    """
    fs = filesystem or default_filesystem
    try:
        return fs.is_directory(path)
    except OSError as e:
        logger.error(f"can't stat '{path}': {e.strerror or e}")
        raise FilesystemError.from_os_error(path, e) from e


def _is_hidden(name: str, show_hidden: bool) -> bool:
    if name in (".", ".."):
        return True
    return name.startswith(".") and not show_hidden


def _resolve_type(fs: LocalFilesystem, path: str) -> Optional[EntryType]:
    """Follow-up stat for entries without a usable inline type.

    Returns:
        DIRECTORY, FILE or OTHER; None if the entry can't be stat'd
    """
    try:
        return fs.resolve_type(path)
    except OSError as e:
        logger.debug(f"skipping '{path}': {e.strerror or e}")
        return None


def _accept(fs: LocalFilesystem, directory: str, name: str, entry_type: EntryType,
            want_directories: bool, name_filter: Optional[SuffixFilter]) -> bool:
    wanted = EntryType.DIRECTORY if want_directories else EntryType.FILE

    # cheap suffix test before any stat
    if not want_directories and name_filter is not None and not name_filter.matches(name):
        return False
    if entry_type in (EntryType.SYMLINK, EntryType.UNKNOWN):
        entry_type = _resolve_type(fs, join_path(directory, name))
    return entry_type is wanted


def scan_directory(
    path: str,
    want_directories: bool,
    name_filter: Optional[SuffixFilter] = None,
    *,
    show_hidden: bool = False,
    filesystem: Optional[LocalFilesystem] = None,
) -> List[str]:
    """Scan a directory for matching entry names.

    Args:
        path: Directory path (prefix or plain path)
        want_directories: True lists only directories, False only files
        name_filter: Suffix filter for files, ignored for directories
        show_hidden: Include names starting with '.'
        filesystem: Filesystem adapter, the local filesystem by default

    Returns:
        Sorted list of names; empty for an empty directory

    Raises:
        FilesystemError: if the directory can't be opened or read.
            Nothing collected before the failure is returned.
    """
    fs = filesystem or default_filesystem
    logger.debug(f"scan directory '{path}'")

    names: List[str] = []
    try:
        with fs.list_directory(path) as entries:
            for name, entry_type in entries:
                if _is_hidden(name, show_hidden):
                    continue
                if _accept(fs, path, name, entry_type, want_directories, name_filter):
                    names.append(name)
    except OSError as e:
        logger.error(f"can't read dir '{path}': {e.strerror or e}")
        raise FilesystemError.from_os_error(path, e) from e

    names.sort()
    return names


def read_directory(
    path: str,
    want_directories: bool,
    name_filter: Optional[SuffixFilter],
    callback: Callable[[str], None],
    **kwargs,
) -> int:
    """Scan a directory and feed each name to a callback.

    Returns:
        Number of names passed to the callback
    """
    names = scan_directory(path, want_directories, name_filter, **kwargs)
    for name in names:
        callback(name)
    return len(names)
