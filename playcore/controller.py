"""
Browser controller: the navigation state machine.

A caller drives it with discrete events (open, change filter, activate an
entry, go back) and gets back either a new entry list, a path to play, or
the signal to leave the browser.  Every event scans the target directory
before touching the current state, so a failed scan leaves the previous
stack and entry list in place.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from playcore.filesystem import LocalFilesystem
from playcore.filters import SuffixFilter, is_archive
from playcore.logging_config import get_logger, StateError
from playcore.navigation import NavigationStack, normalize_prefix
from playcore.player import PlaybackDispatcher
from playcore.scanner import is_directory, join_path, scan_directory
from playcore.state import BrowseContext, DirectoryEntry, EntryKind

logger = get_logger('controller')

# appended to an archive file name to address its contents
ARCHIVE_DELIMITER = "#"

# directory names that mark a DVD image
DVD_MARKERS = ("AUDIO_TS", "VIDEO_TS")
DVD_URL_SCHEME = "dvdnav://"

SCANNING_MESSAGE = "Scanning directory..."


@dataclass(frozen=True)
class Descended:
    entries: List[DirectoryEntry]


@dataclass(frozen=True)
class Ascended:
    entries: List[DirectoryEntry]
    restored: Optional[int]


@dataclass(frozen=True)
class Played:
    path: str


@dataclass(frozen=True)
class Exited:
    pass


ActivateResult = Union[Descended, Played, Exited, Ascended]
BackResult = Union[Ascended, Exited]


class BrowserController:
    """Hierarchical media browser over a navigation stack.

    Not reentrant: run one event to completion before sending the next.
    """

    def __init__(
        self,
        *,
        show_hidden: bool = False,
        filesystem: Optional[LocalFilesystem] = None,
        dispatcher: Optional[PlaybackDispatcher] = None,
        status_callback: Optional[Callable[[Optional[str]], None]] = None,
    ):
        self.context = BrowseContext()
        self.show_hidden = show_hidden
        self.filesystem = filesystem
        self.dispatcher = dispatcher
        self.status_callback = status_callback

    # -- read-only views ---------------------------------------------------

    @property
    def entries(self) -> List[DirectoryEntry]:
        return self.context.entries

    @property
    def stack(self) -> NavigationStack:
        return self.context.stack

    @property
    def name_filter(self) -> Optional[SuffixFilter]:
        return self.context.name_filter

    @property
    def current_prefix(self) -> str:
        return self.context.stack.current()

    @property
    def depth(self) -> int:
        return len(self.context.stack)

    # -- entry list construction ---------------------------------------------

    def _set_status(self, message: Optional[str]) -> None:
        if self.status_callback:
            self.status_callback(message)

    def _build_entries(self, prefix: str, depth: int,
                       name_filter: Optional[SuffixFilter]) -> List[DirectoryEntry]:
        """Scan prefix and build the entry list for a stack of given depth."""
        self._set_status(SCANNING_MESSAGE)
        try:
            dirs = scan_directory(prefix, True, None,
                                  show_hidden=self.show_hidden, filesystem=self.filesystem)
            files = scan_directory(prefix, False, name_filter,
                                   show_hidden=self.show_hidden, filesystem=self.filesystem)
        finally:
            self._set_status(None)

        entries = []
        if depth > 1:
            entries.append(DirectoryEntry(prefix, EntryKind.PARENT))
        entries.extend(DirectoryEntry(name, EntryKind.DIRECTORY) for name in dirs)
        entries.extend(DirectoryEntry(name, EntryKind.FILE) for name in files)
        return entries

    def _commit(self, stack: NavigationStack, name_filter: Optional[SuffixFilter],
                entries: List[DirectoryEntry], cursor: int = 0) -> None:
        self.context.stack = stack
        self.context.name_filter = name_filter
        self.context.entries = entries
        self.context.cursor = cursor

    # -- events ----------------------------------------------------------------

    def open(self, root_path: Optional[str] = None,
             name_filter: Optional[SuffixFilter] = None) -> List[DirectoryEntry]:
        """(Re)start browsing.

        With a root path the stack is reset to that root.  Without one the
        current stack is kept and only rescanned with the new filter.

        Raises:
            FilesystemError: if the directory can't be scanned
            StateError: if no root is given and nothing was opened before
        """
        if root_path is not None:
            stack = NavigationStack(root_path)
        elif self.context.active:
            stack = self.context.stack
        else:
            raise StateError("browser has no directory to show")

        entries = self._build_entries(stack.current(), len(stack), name_filter)
        self._commit(stack, name_filter, entries)
        logger.info(f"browsing '{stack.current()}' "
                    f"({name_filter.name if name_filter else 'all files'})")
        return list(entries)

    def change_filter(self, name_filter: Optional[SuffixFilter]) -> List[DirectoryEntry]:
        """Replace the active filter and rescan the current prefix."""
        return self.open(None, name_filter)

    def activate(self, selection: Union[int, str, None] = None) -> ActivateResult:
        """Activate an entry by index or name, the cursor entry by default.

        Raises:
            StateError: if the selection doesn't name an entry
            FilesystemError: if the target can't be stat'd or scanned
            PlayerError: if the dispatcher can't start playback
        """
        entry = self._resolve_selection(selection)

        if entry.is_parent:
            return self.go_back()

        if entry.name.endswith(ARCHIVE_DELIMITER):
            raise StateError(
                f"'{entry.name}' ends with reserved character '{ARCHIVE_DELIMITER}'"
            )

        prefix = self.current_prefix
        filename = join_path(prefix, entry.name)

        if not is_directory(filename, self.filesystem):
            if is_archive(filename):
                return self._descend(filename + ARCHIVE_DELIMITER)
            return self._play(filename)

        if entry.name in DVD_MARKERS:
            return self._play(DVD_URL_SCHEME + prefix)

        return self._descend(filename)

    def go_back(self) -> BackResult:
        """Leave the current directory, re-selecting the one we came from.

        Raises:
            FilesystemError: if the parent can't be scanned
        """
        stack = self.context.stack
        if len(stack) <= 1:
            logger.debug("top level reached, leaving browser")
            return Exited()

        parent = stack.peek(1)
        entries = self._build_entries(parent, len(stack) - 1, self.context.name_filter)

        new_stack = stack.copy()
        popped = new_stack.pop()
        segment = popped.segment
        if segment.endswith(ARCHIVE_DELIMITER):
            segment = segment[:-len(ARCHIVE_DELIMITER)]

        self._commit(new_stack, self.context.name_filter, entries)
        restored = self.context.index_of(segment)
        if restored is not None:
            self.context.cursor = restored
        logger.debug(f"ascended to '{parent}', restored {segment!r} at {restored}")
        return Ascended(list(entries), restored)

    # -- helpers ---------------------------------------------------------------

    def _resolve_selection(self, selection: Union[int, str, None]) -> DirectoryEntry:
        entries = self.context.entries
        if selection is None:
            selection = self.context.cursor
        if isinstance(selection, str):
            index = self.context.index_of(selection)
            if index is None:
                raise StateError(f"no entry named '{selection}'")
            selection = index
        if not 0 <= selection < len(entries):
            raise StateError(f"entry index {selection} out of range (0..{len(entries) - 1})")
        return entries[selection]

    def _descend(self, path: str) -> Descended:
        prefix = normalize_prefix(path)
        new_stack = self.context.stack.copy()
        entries = self._build_entries(prefix, len(new_stack) + 1, self.context.name_filter)
        new_stack.push(prefix)
        self._commit(new_stack, self.context.name_filter, entries)
        logger.debug(f"descended into '{prefix}'")
        return Descended(list(entries))

    def _play(self, path: str) -> Played:
        logger.info(f"play file '{path}'")
        if self.dispatcher is not None:
            self.dispatcher.launch(path)
        return Played(path)
