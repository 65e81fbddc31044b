"""
Playcore - hierarchical media browser engine for playbrowser.
"""

__version__ = "1.0.0"
__author__ = "Playbrowser Team"
__description__ = "Media browser with archive-aware navigation and external player hand-off."

from .logging_config import (
    setup_logging,
    get_logger,
    PlayBrowserError,
    FilesystemError,
    StateError,
    PlayerError,
    ConfigurationError,
)
from .filters import (
    SuffixFilter,
    VIDEO_FILTER,
    AUDIO_FILTER,
    IMAGE_FILTER,
    ARCHIVE_FILTER,
    MEDIA_FILTERS,
    matches,
    is_archive,
    get_filter,
)
from .filesystem import EntryType, LocalFilesystem
from .scanner import scan_directory, read_directory, is_directory
from .navigation import NavigationStack, PopResult, normalize_prefix
from .state import BrowseContext, DirectoryEntry, EntryKind
from .player import PlaybackDispatcher, ExternalPlayer, get_player, detect_available_player
from .controller import (
    BrowserController,
    Descended,
    Ascended,
    Played,
    Exited,
    ARCHIVE_DELIMITER,
)
from .menu import MainMenu, BrowseRequest, PlayRequest, main_menu_entry
from .config import AppConfig, ConfigManager, load_config, get_config_manager

__all__ = [
    # Logging and errors
    'setup_logging',
    'get_logger',
    'PlayBrowserError',
    'FilesystemError',
    'StateError',
    'PlayerError',
    'ConfigurationError',

    # Filters
    'SuffixFilter',
    'VIDEO_FILTER',
    'AUDIO_FILTER',
    'IMAGE_FILTER',
    'ARCHIVE_FILTER',
    'MEDIA_FILTERS',
    'matches',
    'is_archive',
    'get_filter',

    # Scanning
    'EntryType',
    'LocalFilesystem',
    'scan_directory',
    'read_directory',
    'is_directory',

    # Navigation
    'NavigationStack',
    'PopResult',
    'normalize_prefix',
    'BrowseContext',
    'DirectoryEntry',
    'EntryKind',
    'BrowserController',
    'Descended',
    'Ascended',
    'Played',
    'Exited',
    'ARCHIVE_DELIMITER',

    # Playback
    'PlaybackDispatcher',
    'ExternalPlayer',
    'get_player',
    'detect_available_player',

    # Menu
    'MainMenu',
    'BrowseRequest',
    'PlayRequest',
    'main_menu_entry',

    # Config
    'AppConfig',
    'ConfigManager',
    'load_config',
    'get_config_manager',
]
