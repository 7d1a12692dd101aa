"""File readers used by sysfs-backed probes."""

from __future__ import annotations

import abc
from pathlib import Path


class FileReader(abc.ABC):
    """Reads small files such as sysfs attributes."""

    @abc.abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """Return the raw content of *path*.

        Must raise :class:`FileNotFoundError` when the path does not exist
        and :class:`OSError` for any other failure. Decoding is left to the
        caller so a malformed file is a parse problem, not an I/O one.
        """


class LocalFileReader(FileReader):
    """Reads from the local filesystem."""

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()
