import errno
import os
import sys
import tempfile
from contextlib import contextmanager
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from playcore.filesystem import EntryType

D = EntryType.DIRECTORY
F = EntryType.FILE
L = EntryType.SYMLINK
U = EntryType.UNKNOWN
O = EntryType.OTHER


class FakeFilesystem:
    """In-memory filesystem adapter.

    listings maps a directory path to (name, inline type, real kind)
    tuples; real kind is "dir", "file", "other" (fifo, device) or None for
    a dangling entry.
    broken maps a directory path to the number of entries listed before
    the listing fails with EIO.
    """

    def __init__(self, listings, broken=None):
        self.listings = {self._key(p): entries for p, entries in listings.items()}
        self.broken = {self._key(p): n for p, n in (broken or {}).items()}
        self.stat_calls = []

    @staticmethod
    def _key(path):
        return path.rstrip("/") or "/"

    @contextmanager
    def list_directory(self, path):
        key = self._key(path)
        if key not in self.listings:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        yield self._iterate(key)

    def _iterate(self, key):
        limit = self.broken.get(key)
        for i, (name, entry_type, _) in enumerate(self.listings[key]):
            if limit is not None and i >= limit:
                raise OSError(errno.EIO, "Input/output error")
            yield name, entry_type

    def _real_kind(self, path):
        key = self._key(path)
        if key in self.listings:
            return "dir"
        parent, _, name = key.rpartition("/")
        for entry_name, _, real in self.listings.get(parent or "/", []):
            if entry_name == name:
                return real
        return None

    def stat(self, path):
        kind = self._real_kind(path)
        if kind is None:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        return kind

    def resolve_type(self, path):
        self.stat_calls.append(path)
        return {"dir": D, "file": F}.get(self.stat(path), O)

    def is_directory(self, path):
        self.stat_calls.append(path)
        return self.stat(path) == "dir"


@pytest.fixture
def make_fs():
    """Factory for in-memory filesystems."""
    return FakeFilesystem


@pytest.fixture
def scenario_fs():
    """The /media tree: two directories and one picture."""
    return FakeFilesystem({
        "/media": [
            ("poster.jpg", F, "file"),
            ("Music", D, "dir"),
            ("Movies", D, "dir"),
        ],
        "/media/Movies": [
            ("trailer.mp4", F, "file"),
        ],
        "/media/Music": [],
    })


@pytest.fixture
def media_fs():
    """A /media tree with archives, DVD folders and odd entry types."""
    return FakeFilesystem({
        "/media": [
            ("poster.jpg", F, "file"),
            ("Music", D, "dir"),
            ("Movies", D, "dir"),
            ("comics.cbz", F, "file"),
            ("movie.mkv", F, "file"),
            ("song.mp3", F, "file"),
            (".hidden.mp3", F, "file"),
            (".config", D, "dir"),
            ("link_to_music", L, "dir"),
            ("link_to_song.mp3", L, "file"),
            ("mystery.ogg", U, "file"),
            ("mysterydir", U, "dir"),
            ("dangling.mp3", L, None),
            ("fifo.mp3", O, None),
            ("weird#", D, "dir"),
        ],
        "/media/Movies": [
            ("Film", D, "dir"),
            ("trailer.mp4", F, "file"),
        ],
        "/media/Movies/Film": [
            ("VIDEO_TS", D, "dir"),
        ],
        "/media/Movies/Film/VIDEO_TS": [
            ("VTS_01_1.VOB", F, "file"),
        ],
        "/media/Music": [
            ("album.flac", F, "file"),
        ],
        "/media/comics.cbz#": [
            ("page02.jpg", F, "file"),
            ("page01.jpg", F, "file"),
        ],
        "/media/link_to_music": [],
        "/media/mysterydir": [],
        "/media/.config": [],
        "/media/weird#": [],
    })


@pytest.fixture
def temp_media_dir():
    """Create a temporary media directory with test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        media_dir = Path(tmpdir) / "media"
        media_dir.mkdir()

        (media_dir / "Movies").mkdir()
        (media_dir / "Music").mkdir()
        (media_dir / ".secret").mkdir()

        (media_dir / "poster.jpg").touch()
        (media_dir / "Cover.PNG").touch()
        (media_dir / "movie.mkv").touch()
        (media_dir / "song.mp3").touch()
        (media_dir / "notes.txt").touch()
        (media_dir / ".hidden.mp3").touch()

        (media_dir / "Movies" / "trailer.mp4").touch()
        (media_dir / "Music" / "album.flac").touch()

        os.symlink(media_dir / "Music", media_dir / "music_link")
        os.symlink(media_dir / "song.mp3", media_dir / "song_link.mp3")
        os.symlink(media_dir / "missing.mp3", media_dir / "dangling.mp3")

        yield media_dir
