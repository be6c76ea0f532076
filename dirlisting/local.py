import os
import datetime
from stat import S_ISDIR
from typing import IO, Iterator
from contextlib import contextmanager

from dirlisting.connector import Connector
from dirlisting.utils.entry import FSEntry


class LocalConnector(Connector):
    """Local file system connector."""

    @contextmanager
    def open(self, path: str, mode: str = 'r') -> Iterator[IO]:
        with open(path, mode, encoding=None if 'b' in mode else 'utf-8') as f:
            yield f

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def listdir(self, path: str) -> list[str]:
        if not os.path.isdir(path):
            if not os.path.exists(path):
                raise FileNotFoundError(f"No such file or directory: '{path}'")
            raise NotADirectoryError(f"Not a directory: '{path}'")
        return os.listdir(path)

    def stat(self, path: str) -> FSEntry:
        st = os.stat(path)
        name = os.path.basename(os.path.normpath(path))
        last_modified = datetime.datetime.fromtimestamp(st.st_mtime)
        if S_ISDIR(st.st_mode):
            return FSEntry(name, path, 'dir', None, last_modified)
        return FSEntry(name, path, 'file', st.st_size, last_modified)

    def realpath(self, path: str) -> str:
        return os.path.realpath(path)

    def get_times(self, path: str) -> tuple[int, int]:
        st = os.stat(path)
        return st.st_atime_ns, st.st_mtime_ns

    def set_times(self, path: str, times: tuple[int, int]) -> None:
        os.utime(path, ns=times)
