#!/usr/bin/env python3
"""
Playbrowser - A terminal media browser that hands files to an external player.

This module provides the terminal front end for the playcore engine:
- Main menu with media categories and disc playback
- Directory browser with archive support and selection restore
- Media filter switching (audio, video, image)
- Playback through mpv/mplayer/ffplay
"""

__version__ = "1.0.0"
__author__ = "Playbrowser Team"
__description__ = "A terminal media browser with archive-aware navigation and external player hand-off."

# =============================================================================
# Imports
# =============================================================================
import select
import shutil
import sys
import termios
import tty
from dataclasses import dataclass
from typing import List, Optional

from playcore.config import ConfigManager, load_config
from playcore.controller import BrowserController, Exited, Played
from playcore.filters import SuffixFilter, get_filter
from playcore.logging_config import setup_logging, get_logger, PlayBrowserError, PlayerError
from playcore.menu import MAIN_MENU_ENTRY, BrowseRequest, MainMenu, PlayRequest, main_menu_entry
from playcore.player import PlaybackDispatcher, get_player
from playcore.state import DirectoryEntry

logger = get_logger('main')

# =============================================================================
# Constants
# =============================================================================
KEY_UP = ("k", "\x1b[A")
KEY_DOWN = ("j", "\x1b[B")
KEY_ENTER = ("\r", "\n", "l", "\x1b[C")
KEY_BACK = ("h", "\x7f", "\b", "\x1b[D")

# filter hot keys in the browser
FILTER_KEYS = {"a": "audio", "v": "video", "i": "image", "n": None}

C_HEADER = "\033[1m"
C_SECONDARY = "\033[90m"
C_SELECTION = "\033[7m"
C_RESET = "\033[0m"


# =============================================================================
# State
# =============================================================================
@dataclass
class AppState:
    """Front end state that isn't owned by the browser engine."""
    mode: str = "menu"  # "menu" or "browser"
    menu_cursor: int = 0
    scroll_offset: int = 0
    status: Optional[str] = None
    running: bool = True
    # None when the menu entry is hidden: start in the browser, quit on leaving it
    menu_title: Optional[str] = MAIN_MENU_ENTRY


state = AppState()


# =============================================================================
# Helpers
# =============================================================================
def format_entry(entry: DirectoryEntry) -> str:
    """Display text for an entry list row."""
    if entry.is_parent:
        return f".. ({entry.name})"
    if entry.is_dir:
        return entry.name + "/"
    return entry.name


def build_controller(config: ConfigManager,
                     dispatcher: Optional[PlaybackDispatcher] = None) -> BrowserController:
    """Create a browser controller from configuration."""
    return BrowserController(
        show_hidden=bool(config.get("show_hidden_files")),
        dispatcher=dispatcher,
        status_callback=_show_scan_status,
    )


def open_browser(controller: BrowserController, config: ConfigManager,
                 name_filter: Optional[SuffixFilter] = None) -> None:
    """Open the configured root, with the default filter unless one is given.

    Raises:
        ConfigurationError: if the default filter name is unknown
        FilesystemError: if the root can't be scanned
    """
    if name_filter is None:
        name_filter = config.get_default_filter()
    controller.open(str(config.get_browser_root_path()), name_filter)
    state.mode = "browser"
    state.scroll_offset = 0


def leave_browser() -> None:
    """Back to the main menu, or quit when there is no menu entry."""
    if state.menu_title is None:
        state.running = False
    else:
        state.mode = "menu"


def start(controller: BrowserController, config: ConfigManager) -> None:
    """Set up the initial screen from configuration."""
    state.menu_title = main_menu_entry(bool(config.get("hide_main_menu_entry")))
    if state.menu_title is None:
        open_browser(controller, config)


def _show_scan_status(message: Optional[str]) -> None:
    if message and sys.stdout.isatty():
        print(f"\r  {C_SECONDARY}{message}{C_RESET}", end="", flush=True)


def list_directory(path: str, filter_name: Optional[str] = None,
                   show_hidden: bool = False) -> List[str]:
    """Entry list of a directory as display lines (non-interactive mode)."""
    controller = BrowserController(show_hidden=show_hidden)
    entries = controller.open(path, get_filter(filter_name))
    return [format_entry(entry) for entry in entries]


def _visible_rows() -> int:
    return max(1, shutil.get_terminal_size((80, 24)).lines - 5)


def _adjust_scroll(cursor: int) -> None:
    """Keep the cursor inside the visible window."""
    rows = _visible_rows()
    if cursor < state.scroll_offset:
        state.scroll_offset = cursor
    elif cursor >= state.scroll_offset + rows:
        state.scroll_offset = cursor - rows + 1


# =============================================================================
# Drawing
# =============================================================================
def _draw_list(title: str, lines: List[str], cursor: int) -> None:
    print("\033[2J\033[H", end="")
    print(f"{C_HEADER}  {title}{C_RESET}")
    print()
    _adjust_scroll(cursor)
    rows = _visible_rows()
    for i in range(state.scroll_offset, min(len(lines), state.scroll_offset + rows)):
        text = lines[i]
        if i == cursor:
            print(f"  {C_SELECTION}{text}{C_RESET}")
        else:
            print(f"  {text}")
    if not lines:
        print(f"  {C_SECONDARY}(empty){C_RESET}")
    print()
    if state.status:
        print(f"  {state.status}")


def draw(menu: MainMenu, controller: BrowserController) -> None:
    if state.mode == "menu":
        _draw_list(state.menu_title or MAIN_MENU_ENTRY, menu.titles, state.menu_cursor)
        return
    name_filter = controller.name_filter
    title = f"Browse {controller.current_prefix}"
    if name_filter:
        title += f" [{name_filter.name}]"
    lines = [format_entry(entry) for entry in controller.entries]
    _draw_list(title, lines, controller.context.cursor)


# =============================================================================
# Key Handling
# =============================================================================
def handle_menu_key(key: str, menu: MainMenu, controller: BrowserController,
                    config: ConfigManager) -> None:
    """Handle a key press in the main menu."""
    if key in KEY_UP:
        state.menu_cursor = max(0, state.menu_cursor - 1)
    elif key in KEY_DOWN:
        state.menu_cursor = min(len(menu) - 1, state.menu_cursor + 1)
    elif key in KEY_ENTER:
        action = menu.select(state.menu_cursor)
        if isinstance(action, BrowseRequest):
            open_browser(controller, config, action.name_filter)
        elif isinstance(action, PlayRequest):
            if controller.dispatcher is None:
                raise PlayerError("No player available")
            controller.dispatcher.launch(action.url)
            state.status = f"Playing {action.url}"
    elif key == "q":
        state.running = False


def handle_browser_key(key: str, controller: BrowserController) -> None:
    """Handle a key press in the browser."""
    context = controller.context
    if key in KEY_UP:
        context.move_cursor(-1)
    elif key in KEY_DOWN:
        context.move_cursor(1)
    elif key in KEY_ENTER:
        if not context.entries:
            return
        result = controller.activate()
        if isinstance(result, Played):
            state.status = f"Playing {result.path}"
        elif isinstance(result, Exited):
            leave_browser()
    elif key in KEY_BACK:
        if isinstance(controller.go_back(), Exited):
            leave_browser()
    elif key in FILTER_KEYS:
        controller.change_filter(get_filter(FILTER_KEYS[key]))
        state.scroll_offset = 0
    elif key == "q":
        state.running = False


def handle_key(key: str, menu: MainMenu, controller: BrowserController,
               config: ConfigManager) -> None:
    """Dispatch a key press, turning engine errors into a status line."""
    state.status = None
    try:
        if state.mode == "menu":
            handle_menu_key(key, menu, controller, config)
        else:
            handle_browser_key(key, controller)
    except PlayBrowserError as e:
        logger.warning(f"{type(e).__name__}: {e}")
        state.status = f"Error: {e}"


def _read_key() -> str:
    ch = sys.stdin.read(1)
    if ch == "\033":
        ready = select.select([sys.stdin], [], [], 0.05)[0]
        if ready:
            ch += sys.stdin.read(2)
    return ch


# =============================================================================
# Main Function
# =============================================================================
def main() -> None:
    """Main entry point for the media browser."""
    if not sys.stdin.isatty():
        print("Error: Must run in interactive terminal")
        print("Usage: python3 playbrowser.py")
        return

    config = load_config()
    setup_logging(config.get("log_level", "INFO"), config.get_log_file_path())
    config.validate_config()

    try:
        player = get_player(config.get("player"), config.get("player_args"))
    except PlayerError as e:
        logger.warning(str(e))
        player = None
        state.status = f"Error: {e}"

    menu = MainMenu()
    controller = build_controller(config, player)
    try:
        start(controller, config)
    except PlayBrowserError as e:
        logger.error(f"{type(e).__name__}: {e}")
        state.status = f"Error: {e}"

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    tty.setcbreak(fd)
    print("\033[?25l", end="")

    try:
        while state.running:
            draw(menu, controller)
            sys.stdout.flush()
            try:
                key = _read_key()
            except (EOFError, KeyboardInterrupt):
                break
            if not key:
                break
            handle_key(key, menu, controller, config)
    finally:
        if player is not None:
            player.stop()
        print("\033[?25h", end="")
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
        print("\033[2J\033[H", end="")
        print("\n  Bye!")


def _print_help() -> None:
    print(f"playbrowser {__version__}")
    print("")
    print("Usage:")
    print("  python3 playbrowser.py                      # Run in interactive mode")
    print("  python3 playbrowser.py --list DIR [FILTER]  # Print entries of DIR")
    print("                                              # FILTER: audio, video, image")
    print("  python3 playbrowser.py --version            # Show version info")
    print("  python3 playbrowser.py --help               # Show this help")


def run(argv: List[str]) -> int:
    """Command line dispatch, returns the exit status."""
    if "--version" in argv or "-v" in argv:
        print(f"playbrowser {__version__}")
        print(f"{__description__}")
        return 0
    if "--help" in argv or "-h" in argv:
        _print_help()
        return 0
    if argv and argv[0] == "--list":
        if len(argv) < 2:
            _print_help()
            return 2
        try:
            for line in list_directory(argv[1], argv[2] if len(argv) > 2 else None):
                print(line)
        except PlayBrowserError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0
    main()
    return 0


def cli() -> None:
    """Console script entry point."""
    sys.exit(run(sys.argv[1:]))


# =============================================================================
# Non-Interactive Mode
# =============================================================================
if __name__ == "__main__":
    cli()
