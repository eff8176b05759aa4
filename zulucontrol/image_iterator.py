"""Alphabetical, case-insensitive iteration over the image files in a folder."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .image import Image

log = logging.getLogger(__name__)

_FPGA_BITSTREAM = "ice5lp1k_top_bitmap.bin"

_IGNORED_EXTENSIONS = frozenset(
    {".cue", ".txt", ".rtf", ".md", ".nfo", ".pdf", ".doc", ".ini"}
)

_ARCHIVE_EXTENSIONS = frozenset(
    {
        ".tar", ".tgz", ".gz", ".bz2", ".tbz2", ".xz", ".zst", ".z",
        ".zip", ".zipx", ".rar", ".lzh", ".lha", ".lzo", ".lz4", ".arj",
        ".dmg", ".hqx", ".cpt", ".7z", ".s7z",
    }
)


def _fold(name: str) -> str:
    return name.lower()


def is_valid_filename(name: str) -> bool:
    """Return True if a file with this name may be offered as an image."""
    folded = _fold(name)
    if folded == _FPGA_BITSTREAM:
        return False

    first = name[:1]
    if not (first.isascii() and first.isalnum()):
        # Names beginning with a special character are skipped.
        return False

    if folded.startswith("zulu"):
        return False

    dot = name.rfind(".")
    if dot >= 0:
        extension = folded[dot:]
        if extension in _IGNORED_EXTENSIONS:
            return False
        if extension in _ARCHIVE_EXTENSIONS:
            log.info("-- Ignoring compressed file %s", name)
            return False

    return True


@dataclass(frozen=True)
class _Entry:
    index: int
    name: str
    is_dir: bool
    size: int

    @property
    def is_image(self) -> bool:
        return not self.is_dir and is_valid_filename(self.name)


class ImageIterator:
    """Walks the image files of a root folder in case-insensitive name order.

    Directory positions identify files; the first and last images are found
    by :meth:`reset`, which also opens the folder.
    """

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self._root = Path(root)
        self._open = False
        self._file_count = 0
        self._is_empty = True
        self._candidate = ""
        self._candidate_size = 0
        self._cur_idx = 0
        self._first_idx = 0
        self._last_idx = 0
        self._current_is_first = False
        self._current_is_last = False

    def __enter__(self) -> ImageIterator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cleanup()

    @property
    def is_empty(self) -> bool:
        """True if the last reset found no valid image."""
        return self._is_empty

    @property
    def file_count(self) -> int:
        """Number of folder entries, of any kind, seen by the last reset."""
        return self._file_count

    @property
    def is_first(self) -> bool:
        """True if the current image is the alphabetically first one."""
        return self._current_is_first

    @property
    def is_last(self) -> bool:
        """True if the current image is the alphabetically last one."""
        return self._current_is_last

    def _entries(self) -> list[_Entry]:
        if not self._open:
            return []
        try:
            with os.scandir(self._root) as listing:
                raw = sorted(listing, key=lambda e: e.name)
        except OSError:
            return []

        entries = []
        for index, item in enumerate(raw):
            try:
                is_dir = item.is_dir()
                size = 0 if is_dir else item.stat().st_size
            except OSError:
                is_dir, size = False, 0
            entries.append(_Entry(index, item.name, is_dir, size))
        return entries

    @staticmethod
    def _by_name(entries: list[_Entry], name: str) -> _Entry | None:
        folded = _fold(name)
        return next((e for e in entries if _fold(e.name) == folded), None)

    @staticmethod
    def _by_index(entries: list[_Entry], index: int) -> _Entry | None:
        return next((e for e in entries if e.index == index), None)

    def _take(self, entry: _Entry) -> None:
        self._candidate = entry.name
        self._candidate_size = entry.size

    def get(self) -> Image:
        """Return the current image.

        Raises LookupError if no move has landed on an image yet.
        """
        if not self._candidate:
            raise LookupError("no current image; move to an image first")
        return Image(self._candidate, self._candidate_size)

    def move_next(self) -> bool:
        """Move to the next image; False if there is none."""
        return self._move(forward=True)

    def move_previous(self) -> bool:
        """Move to the previous image; False if there is none."""
        return self._move(forward=False)

    def _move(self, forward: bool) -> bool:
        entries = self._entries()
        current = self._by_name(entries, self._candidate) if self._candidate else None
        if current is None:
            self.reset()
            entries = self._entries()
            previous = ""
        else:
            previous = _fold(current.name)

        first_search = not previous
        result: _Entry | None = None
        for entry in entries:
            if not entry.is_image:
                continue
            key = _fold(entry.name)
            if forward:
                if previous and key <= previous:
                    continue
                if result is not None and key > _fold(result.name):
                    continue
            else:
                if previous and key >= previous:
                    continue
                if result is not None and key < _fold(result.name):
                    continue
            result = entry

        if result is None:
            return False

        self._take(result)
        self._current_is_last = result.index == self._last_idx
        self._current_is_first = result.index == self._first_idx

        if not first_search and self._cur_idx == result.index:
            return False

        self._cur_idx = result.index
        return True

    def move_first(self) -> bool:
        """Move to the first image; False if there are no images."""
        if self._is_empty:
            return False
        entry = self._by_index(self._entries(), self._first_idx)
        if entry is None:
            return False
        self._take(entry)
        self._cur_idx = entry.index
        self._current_is_last = self._last_idx == self._first_idx
        self._current_is_first = True
        return True

    def move_last(self) -> bool:
        """Move to the last image; False if there are no images."""
        if self._is_empty:
            return False
        entry = self._by_index(self._entries(), self._last_idx)
        if entry is None:
            return False
        self._take(entry)
        self._cur_idx = entry.index
        self._current_is_last = True
        self._current_is_first = self._last_idx == self._first_idx
        return True

    def move_to_file(self, filename: str) -> bool:
        """Make the named file current; False if it is not in the folder."""
        entry = self._by_name(self._entries(), filename)
        if entry is None:
            return False
        self._take(entry)
        self._cur_idx = entry.index
        self._current_is_last = self._cur_idx == self._last_idx
        self._current_is_first = self._cur_idx == self._first_idx
        return True

    def cleanup(self) -> None:
        """Close the folder."""
        self._open = False

    def reset(self) -> None:
        """Reopen the folder, count its entries and find the first and last images."""
        self.cleanup()
        self._candidate = ""
        self._candidate_size = 0
        self._file_count = 0
        self._first_idx = 0
        self._last_idx = 0
        self._cur_idx = 0
        self._current_is_first = False
        self._current_is_last = False

        if not self._root.is_dir():
            log.warning("Failed to open root directory.")
            self._is_empty = True
            return

        self._open = True
        entries = self._entries()
        self._file_count = len(entries)
        images = [e for e in entries if e.is_image]
        self._is_empty = not images
        if images:
            self._first_idx = min(images, key=lambda e: _fold(e.name)).index
            self._last_idx = max(images, key=lambda e: _fold(e.name)).index
        self._cur_idx = self._first_idx


def load_image_by_filename(filename: str, iterator: ImageIterator) -> Image | None:
    """Search forward from the iterator's position for an image with this exact name."""
    while iterator.move_next():
        current = iterator.get()
        if current.filename == filename:
            return current
    return None