import os
import sys
from typing import Callable, Optional

from tqdm.auto import tqdm

from dirlisting.config import DEFAULT_CONFIG, ListingConfig
from dirlisting.connector import Connector
from dirlisting.lister import EntryLister
from dirlisting.render import inject_no_cache_headers, render
from dirlisting.utils.entry import ListingEntry

Renderer = Callable[..., str]


class TreeWalker:
    """Writes a listing file into every directory of a tree.

    Attributes
    ----------
    connector : Connector
        File system connector.
    config : ListingConfig
        Exclusions, pinned name and listing filename.
    lister : EntryLister
        Directory lister, built from connector and config if not given.
    renderer : Renderer
        Callable taking ``(title, entries, filter=..., root=...)`` and
        returning an HTML document.
    root : Optional[str]
        Tree root used for titles, the working directory if not given.
        Replaced by the root passed to ``generate``.
    """

    def __init__(
        self,
        connector: Connector,
        config: ListingConfig = DEFAULT_CONFIG,
        lister: Optional[EntryLister] = None,
        renderer: Renderer = render,
        root: Optional[str] = None
    ):
        self.connector = connector
        self.config = config
        self.lister = lister if lister is not None else EntryLister(connector, config)
        self.renderer = renderer
        self._root = os.path.abspath(root if root is not None else os.curdir)

    def title_for(self, path: str) -> str:
        """Get display title of a directory.

        Parameters
        ----------
        path : str
            Directory path.

        Returns
        -------
        str
            Path relative to the tree root with ``'/'`` separators,
            ``'/'`` for the root itself.
        """
        relative = os.path.relpath(path, self._root)
        if relative == os.curdir:
            return '/'
        return relative.replace(os.sep, '/')

    def render_listing(self, path: str, entries: list[ListingEntry]) -> str:
        html = self.renderer(self.title_for(path), entries, filter=False, root='/')
        return inject_no_cache_headers(html)

    def write_index(self, path: str, html: str) -> str:
        """Write listing file without disturbing observable timestamps.

        A previous listing file keeps its times. A newly created one
        leaves the directory times as they were.

        Parameters
        ----------
        path : str
            Directory path.
        html : str
            Listing document.

        Returns
        -------
        str
            Listing file path.
        """
        index_path = os.path.join(path, self.config.index_name)
        tqdm.write(f'Creating index at: {index_path}')
        if self.connector.exists(index_path):
            kept_path = index_path
        else:
            kept_path = path
        old_times = self.connector.get_times(kept_path)
        with self.connector.open(index_path, 'w') as f:
            f.write(html)
        try:
            self.connector.set_times(kept_path, old_times)
        except OSError:
            tqdm.write(f'Could not preserve timestamps for {kept_path}', file=sys.stderr)
        return index_path

    def generate(self, root: str, pbar: Optional[tqdm] = None) -> int:
        """Generate listings for the whole tree, depth first.

        Parameters
        ----------
        root : str
            Tree root directory.
        pbar : Optional[tqdm], default=None
            Progress bar updated once per directory.

        Returns
        -------
        int
            Number of listing files written.
        """
        self._root = os.path.abspath(root)
        visited: set[str] = set()
        stack = [self._root]
        written = 0
        while stack:
            path = stack.pop()
            real_path = self.connector.realpath(path)
            if real_path in visited:
                tqdm.write(f'Skipping already visited directory: {path}', file=sys.stderr)
                continue
            visited.add(real_path)
            tqdm.write(f'Generating listing for: {path}')
            entries = self.lister.list_entries(path)
            self.write_index(path, self.render_listing(path, entries))
            written += 1
            if pbar is not None:
                pbar.update(1)
            subdirs = [
                os.path.join(path, entry.name.rstrip('/'))
                for entry in entries
                if entry.is_dir
            ]
            stack.extend(
                subdir for subdir in reversed(subdirs)
                if not self.lister.is_excluded(subdir)
            )
        return written
