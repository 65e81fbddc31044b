"""
Navigation stack of directory prefixes, innermost first.
"""
import os
from collections import deque
from typing import Iterator, List, NamedTuple, Optional

from playcore.logging_config import get_logger, StateError

logger = get_logger('navigation')


def normalize_prefix(path: str) -> str:
    """Return path with exactly one trailing separator appended if missing."""
    if not path:
        raise StateError("empty path can't be browsed")
    if path.endswith(os.sep):
        return path
    return path + os.sep


def trailing_component(prefix: str) -> str:
    """Last path component of a prefix, without its separator."""
    return prefix.rstrip(os.sep).rsplit(os.sep, 1)[-1]


class PopResult(NamedTuple):
    """Outcome of popping the navigation stack."""
    segment: str        # name of the entry that had been descended into
    at_root: bool       # stack is back at its root entry


class NavigationStack:
    """Ordered path prefixes; index 0 is the directory being browsed."""

    def __init__(self, root: Optional[str] = None):
        self._prefixes = deque()
        if root is not None:
            self.push(root)

    def push(self, raw_path: str) -> str:
        """Normalize a path to a prefix and make it the current entry."""
        prefix = normalize_prefix(raw_path)
        self._prefixes.appendleft(prefix)
        logger.debug(f"push '{prefix}' (depth {len(self._prefixes)})")
        return prefix

    def pop(self) -> PopResult:
        """Leave the current prefix.

        Raises:
            StateError: at depth 1 or below, callers treat that as leaving
                the browser
        """
        if len(self._prefixes) <= 1:
            raise StateError("top level reached, can't go further up")
        down = self._prefixes.popleft()
        logger.debug(f"pop '{down}' (depth {len(self._prefixes)})")
        return PopResult(trailing_component(down), len(self._prefixes) == 1)

    def current(self) -> str:
        """Prefix being browsed."""
        if not self._prefixes:
            raise StateError("navigation stack is empty")
        return self._prefixes[0]

    def peek(self, index: int) -> str:
        """Prefix at index (0 = current, 1 = parent, ...)."""
        try:
            return self._prefixes[index]
        except IndexError:
            raise StateError(f"no stack entry at depth {index}") from None

    def reset(self, root_path: str) -> str:
        """Drop all entries and start over at root_path."""
        self._prefixes.clear()
        return self.push(root_path)

    def copy(self) -> "NavigationStack":
        clone = NavigationStack()
        clone._prefixes = deque(self._prefixes)
        return clone

    @property
    def depth(self) -> int:
        return len(self._prefixes)

    def __len__(self) -> int:
        return len(self._prefixes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._prefixes)

    def as_list(self) -> List[str]:
        return list(self._prefixes)

    def __repr__(self) -> str:
        return f"NavigationStack({self.as_list()!r})"
