"""
Hand-off of resolved paths to an external player process.
"""
import os
import shutil
import signal
import subprocess
from typing import Dict, Optional, Sequence

from playcore.logging_config import get_logger, PlayerError

logger = get_logger('player')

SUPPORTED_PLAYERS = ("mpv", "mplayer", "ffplay")

# External command cache
_command_cache: Dict[str, Optional[str]] = {}


def find_command(cmd: str) -> Optional[str]:
    """Find an external command in PATH with caching."""
    if cmd in _command_cache:
        return _command_cache[cmd]
    result = shutil.which(cmd)
    _command_cache[cmd] = result
    return result


class PlaybackDispatcher:
    """Receives resolved paths from the browser and starts playback."""

    def launch(self, path: str) -> None:
        """Start playback of path, fire-and-forget."""
        raise NotImplementedError("Subclasses must implement launch()")

    def stop(self) -> None:
        """Stop playback."""
        raise NotImplementedError("Subclasses must implement stop()")

    def is_running(self) -> bool:
        """Check if the player is still running."""
        raise NotImplementedError("Subclasses must implement is_running()")


class ExternalPlayer(PlaybackDispatcher):
    """Plays files and pseudo-URLs (dvdnav://, cdda://) with an external program."""

    def __init__(self, executable: str, args: Sequence[str] = ()):
        self.executable = executable
        self.args = list(args)
        self.process: Optional[subprocess.Popen] = None
        self.current_file: Optional[str] = None

    def launch(self, path: str) -> None:
        if self.is_running():
            self.stop()

        cmd = [self.executable, *self.args, path]
        try:
            self.process = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                preexec_fn=os.setsid,
            )
        except (subprocess.SubprocessError, OSError) as e:
            logger.error(f"Failed to start {self.executable}: {e}")
            raise PlayerError(f"Failed to start player {self.executable}: {e}") from e

        self.current_file = path
        logger.info(f"Started playback: {path}")

    def stop(self) -> None:
        if self.process and self.process.poll() is None:
            try:
                os.killpg(os.getpgid(self.process.pid), signal.SIGTERM)
                logger.info(f"Stopping player process: {self.process.pid}")
                self.process.wait(timeout=1.0)
            except (ProcessLookupError, PermissionError) as e:
                logger.warning(f"Process termination error: {e}")
            except subprocess.TimeoutExpired:
                try:
                    os.killpg(os.getpgid(self.process.pid), signal.SIGKILL)
                    logger.warning(f"Force killed player process: {self.process.pid}")
                    self.process.wait(timeout=0.5)
                except (ProcessLookupError, PermissionError, subprocess.TimeoutExpired) as e:
                    logger.warning(f"Force kill failed: {e}")
        self.process = None
        self.current_file = None

    def is_running(self) -> bool:
        return self.process is not None and self.process.poll() is None


def detect_available_player() -> Optional[str]:
    """Detect the first supported player on PATH."""
    for player in SUPPORTED_PLAYERS:
        if find_command(player):
            return player

    logger.warning("No supported player found")
    return None


def get_player(name: str = "auto", args: Sequence[str] = ()) -> ExternalPlayer:
    """Build a dispatcher for the configured player.

    Args:
        name: "auto", one of SUPPORTED_PLAYERS, or a path to an executable
        args: Extra command line arguments placed before the file name

    Raises:
        PlayerError: if no usable player is found
    """
    if name == "auto":
        detected = detect_available_player()
        if detected is None:
            raise PlayerError(f"No supported player found (tried {', '.join(SUPPORTED_PLAYERS)})")
        name = detected

    executable = find_command(name)
    if executable is None:
        raise PlayerError(f"Player not found: {name}")
    return ExternalPlayer(executable, args)
