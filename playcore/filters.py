"""
Suffix filter tables for media categories and archive detection.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from playcore.logging_config import ConfigurationError


@dataclass(frozen=True)
class SuffixFilter:
    """Ordered, case-insensitive set of filename suffixes.

    Attributes:
        name: Category name ("video", "audio", ...)
        suffixes: Lower-case suffixes including the leading dot
    """

    name: str
    suffixes: Tuple[str, ...]

    def matches(self, filename: str) -> bool:
        """Check if filename ends with one of the suffixes (ignoring case)."""
        length = len(filename)
        for suffix in self.suffixes:
            n = len(suffix)
            if length >= n and filename[length - n:].lower() == suffix:
                return True
        return False

    def __len__(self) -> int:
        return len(self.suffixes)


def matches(filename: str, name_filter: Optional[SuffixFilter]) -> bool:
    """Check filename against an optional filter; no filter matches all."""
    if name_filter is None:
        return True
    return name_filter.matches(filename)


VIDEO_FILTER = SuffixFilter("video", (
    ".ts", ".avi", ".flv", ".iso", ".m4v", ".mkv", ".mov", ".mp4",
    ".mpg", ".vdr", ".vob", ".wmv",
))

AUDIO_FILTER = SuffixFilter("audio", (".flac", ".mp3", ".ogg", ".wav"))

# comic book archives are browsed as image folders
IMAGE_FILTER = SuffixFilter("image", (
    ".cbr", ".cbz", ".zip", ".rar", ".jpg", ".png",
))

ARCHIVE_FILTER = SuffixFilter("archive", (
    ".cbz", ".cbr", ".zip", ".rar", ".tar", ".tar.gz", ".tgz",
))

MEDIA_FILTERS: Dict[str, SuffixFilter] = {
    f.name: f for f in (VIDEO_FILTER, AUDIO_FILTER, IMAGE_FILTER)
}


def is_archive(path: str) -> bool:
    """Check if path names an archive that is browsed as a directory."""
    return ARCHIVE_FILTER.matches(path)


def get_filter(name: Optional[str]) -> Optional[SuffixFilter]:
    """Look up a media filter by category name.

    Args:
        name: "video", "audio", "image" or None/"" for no filtering

    Returns:
        The filter, or None for unfiltered browsing

    Raises:
        ConfigurationError: if the name is unknown
    """
    if not name or name.lower() == "none":
        return None
    try:
        return MEDIA_FILTERS[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown media filter: {name} (expected one of {', '.join(MEDIA_FILTERS)})"
        ) from None
