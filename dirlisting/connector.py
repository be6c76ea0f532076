from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any

from dirlisting.utils.entry import FSEntry


class Connector(ABC):
    """Abstract class for connector."""

    @abstractmethod
    def open(self, path: str, mode: str) -> AbstractContextManager[Any]:
        """Open file.

        Parameters
        ----------
        path : str
            Path to file.
        mode : str
            Open mode.

        Returns
        -------
        Any
            Readable/writable file-like object.
        """
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether path exists.

        Parameters
        ----------
        path : str
            File or directory path.

        Returns
        -------
        bool
            True if path exists.
        """
        pass

    @abstractmethod
    def listdir(self, path: str) -> list[str]:
        """List directory content.

        Parameters
        ----------
        path : str
            Directory path.

        Returns
        -------
        List[str]
            Names of directory children in enumeration order.
        """
        pass

    @abstractmethod
    def stat(self, path: str) -> FSEntry:
        """Get file or directory metadata.

        Parameters
        ----------
        path : str
            File or directory path.

        Returns
        -------
        FSEntry
            Path metadata.
        """
        pass

    @abstractmethod
    def realpath(self, path: str) -> str:
        """Resolve symbolic links in path.

        Parameters
        ----------
        path : str
            File or directory path.

        Returns
        -------
        str
            Canonical path.
        """
        pass

    @abstractmethod
    def get_times(self, path: str) -> tuple[int, int]:
        """Get access and modification times.

        Parameters
        ----------
        path : str
            File path.

        Returns
        -------
        tuple[int, int]
            Access and modification times in nanoseconds.
        """
        pass

    @abstractmethod
    def set_times(self, path: str, times: tuple[int, int]) -> None:
        """Set access and modification times.

        Parameters
        ----------
        path : str
            File path.
        times : tuple[int, int]
            Access and modification times in nanoseconds.
        """
        pass
