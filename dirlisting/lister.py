import os
import sys
import datetime
from dataclasses import dataclass
from typing import Optional

from tqdm.auto import tqdm

from dirlisting.config import DEFAULT_CONFIG, ListingConfig
from dirlisting.connector import Connector
from dirlisting.utils.entry import FSEntry, ListingEntry


@dataclass(frozen=True)
class ChildTimestamp:
    """Sort timestamp of a subdirectory.

    Attributes
    ----------
    mtime : datetime.datetime
        Earliest modification time among the directory's children, or the
        directory's own modification time when ``fallback`` is set.
    fallback : bool
        The directory could not be read or had no children.
    """

    mtime: datetime.datetime
    fallback: bool = False


class EntryLister:
    """Builds the sorted listing of one directory.

    Attributes
    ----------
    connector : Connector
        File system connector.
    config : ListingConfig
        Exclusions, pinned name and listing filename.
    """

    def __init__(
        self,
        connector: Connector,
        config: ListingConfig = DEFAULT_CONFIG
    ):
        self.connector = connector
        self.config = config

    def is_excluded(self, path: str) -> bool:
        """Check whether a directory must be neither listed nor visited.

        Parameters
        ----------
        path : str
            Directory path.

        Returns
        -------
        bool
            True if the base name is excluded or the path is inside
            version control metadata.
        """
        parts = os.path.normpath(path).split(os.sep)
        return parts[-1] in self.config.exclude or self.config.vcs_dir in parts

    def oldest_child_mtime(self, path: str, own_mtime: datetime.datetime) -> ChildTimestamp:
        """Find the earliest modification time among directory children.

        Parameters
        ----------
        path : str
            Directory path.
        own_mtime : datetime.datetime
            Directory's own modification time, used as fallback.

        Returns
        -------
        ChildTimestamp
            Earliest child timestamp or the fallback.
        """
        try:
            names = self.connector.listdir(path)
        except OSError:
            return ChildTimestamp(own_mtime, fallback=True)
        oldest: Optional[datetime.datetime] = None
        for name in names:
            if name == self.config.index_name:
                continue
            try:
                child = self.connector.stat(os.path.join(path, name))
            except OSError:
                continue
            if child.last_modified is not None and (oldest is None or child.last_modified < oldest):
                oldest = child.last_modified
        if oldest is None:
            return ChildTimestamp(own_mtime, fallback=True)
        return ChildTimestamp(oldest)

    def list_entries(self, path: str) -> list[ListingEntry]:
        """List directory children, filtered and sorted for rendering.

        The pinned name comes first, the rest is ordered by timestamp,
        newest first. Subdirectories are dated by their oldest child.

        Parameters
        ----------
        path : str
            Directory path.

        Returns
        -------
        list[ListingEntry]
            Sorted listing, empty for excluded directories.
        """
        if self.is_excluded(path):
            return []
        children: list[tuple[FSEntry, datetime.datetime]] = []
        for name in self.connector.listdir(path):
            if name in self.config.exclude or name in (self.config.index_name, self.config.vcs_dir):
                continue
            child_path = os.path.join(path, name)
            try:
                child = self.connector.stat(child_path)
            except OSError as err:
                tqdm.write(f'Skipping unreadable entry {child_path}: {err}', file=sys.stderr)
                continue
            mtime = child.last_modified
            if child.type == 'dir':
                mtime = self.oldest_child_mtime(child_path, mtime).mtime
            children.append((child, mtime))
        children.sort(key=lambda item: item[1], reverse=True)
        children.sort(key=lambda item: item[0].name != self.config.pinned_name)
        return [self._to_listing_entry(child, mtime) for child, mtime in children]

    @staticmethod
    def _to_listing_entry(child: FSEntry, mtime: datetime.datetime) -> ListingEntry:
        if child.type == 'dir':
            return ListingEntry(f'{child.name}/', None, mtime, 'directory')
        return ListingEntry(child.name, child.size, mtime, 'file')
