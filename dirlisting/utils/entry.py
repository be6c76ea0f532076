import datetime
from dataclasses import dataclass
from typing import Literal, Optional


@dataclass
class FSEntry:
    name: str
    path: str
    type: Literal['file', 'dir']
    size: Optional[int] = None
    last_modified: Optional[datetime.datetime] = None


@dataclass(frozen=True)
class ListingEntry:
    """One row of a rendered directory listing.

    Attributes
    ----------
    name : str
        Entry name, directories end with ``'/'``.
    size : Optional[int]
        Size in bytes, ``None`` for directories.
    mtime : datetime.datetime
        Timestamp used for sorting and display.
    type : Literal['file', 'directory']
        Entry type.
    """

    name: str
    size: Optional[int]
    mtime: datetime.datetime
    type: Literal['file', 'directory']

    @property
    def is_dir(self) -> bool:
        return self.type == 'directory'
