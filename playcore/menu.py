"""
Main menu: pick a media category to browse, or play a disc.
"""
from dataclasses import dataclass
from typing import List, Optional, Union

from playcore.filters import AUDIO_FILTER, IMAGE_FILTER, VIDEO_FILTER, SuffixFilter
from playcore.logging_config import get_logger, StateError

logger = get_logger('menu')

MAIN_MENU_ENTRY = "Play"


@dataclass(frozen=True)
class BrowseRequest:
    """Open the browser at the configured root with this filter."""
    name_filter: Optional[SuffixFilter]


@dataclass(frozen=True)
class PlayRequest:
    """Play a pseudo-URL directly."""
    url: str


MenuAction = Union[BrowseRequest, PlayRequest]


@dataclass(frozen=True)
class MenuItem:
    title: str
    action: MenuAction


DEFAULT_ITEMS = (
    MenuItem("Browse", BrowseRequest(None)),
    MenuItem("Browse audio", BrowseRequest(AUDIO_FILTER)),
    MenuItem("Browse image", BrowseRequest(IMAGE_FILTER)),
    MenuItem("Browse video", BrowseRequest(VIDEO_FILTER)),
    MenuItem("Play audio CD", PlayRequest("cdda://")),
    MenuItem("Play video DVD", PlayRequest("dvdnav://")),
)


class MainMenu:
    """Top-level menu shown before the browser."""

    def __init__(self, items=DEFAULT_ITEMS):
        self.items: List[MenuItem] = list(items)

    @property
    def titles(self) -> List[str]:
        return [item.title for item in self.items]

    def select(self, index: int) -> MenuAction:
        """Return the action of the item at index.

        Raises:
            StateError: if index is out of range
        """
        if not 0 <= index < len(self.items):
            raise StateError(f"menu index {index} out of range")
        item = self.items[index]
        logger.debug(f"menu selected: {item.title}")
        return item.action

    def __len__(self) -> int:
        return len(self.items)


def main_menu_entry(hide: bool = False) -> Optional[str]:
    """Title of the host's menu entry, None when hidden by configuration."""
    return None if hide else MAIN_MENU_ENTRY
