"""
Browse state: entry list, selection and navigation stack.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from playcore.filters import SuffixFilter
from playcore.logging_config import get_logger
from playcore.navigation import NavigationStack

logger = get_logger('state')


class EntryKind(Enum):
    """Kind of a row in the entry list."""
    PARENT = "parent"
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class DirectoryEntry:
    """One row of the entry list.

    Attributes:
        name: Name relative to the current prefix (the prefix itself for
            the parent placeholder)
        kind: Parent placeholder, directory or file
    """
    name: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_parent(self) -> bool:
        return self.kind is EntryKind.PARENT


@dataclass
class BrowseContext:
    """Live state of one browser session."""
    stack: NavigationStack = field(default_factory=NavigationStack)
    name_filter: Optional[SuffixFilter] = None
    entries: List[DirectoryEntry] = field(default_factory=list)
    cursor: int = 0

    @property
    def active(self) -> bool:
        return len(self.stack) > 0

    def selected_entry(self) -> Optional[DirectoryEntry]:
        """Entry under the cursor, None for an empty list."""
        if self.is_cursor_valid():
            return self.entries[self.cursor]
        return None

    def is_cursor_valid(self) -> bool:
        """Check if cursor position is valid."""
        return 0 <= self.cursor < len(self.entries)

    def move_cursor(self, direction: int) -> int:
        """Move the cursor with bounds checking.

        Args:
            direction: 1 for down, -1 for up

        Returns:
            New cursor position
        """
        if self.entries:
            self.cursor = max(0, min(len(self.entries) - 1, self.cursor + direction))
        else:
            self.cursor = 0
        logger.debug(f"Navigated {direction:+d} to position {self.cursor}")
        return self.cursor

    def index_of(self, name: str) -> Optional[int]:
        """Index of the first non-parent entry with exactly this name."""
        for i, entry in enumerate(self.entries):
            if not entry.is_parent and entry.name == name:
                return i
        return None

    def validate_state(self) -> List[str]:
        """Validate current state and return list of issues."""
        issues = []

        if self.cursor < 0 or (self.entries and self.cursor >= len(self.entries)):
            issues.append(f"Cursor out of bounds: {self.cursor} >= {len(self.entries)}")

        has_parent = bool(self.entries) and self.entries[0].is_parent
        if has_parent != (len(self.stack) > 1):
            issues.append("Parent entry doesn't match stack depth")

        if sum(1 for e in self.entries if e.is_parent) > 1:
            issues.append("More than one parent entry")

        if issues:
            logger.warning(f"State validation issues: {issues}")

        return issues
