import datetime
import posixpath
from typing import Any, Optional
from urllib.parse import quote

from jinja2 import Environment, PackageLoader, select_autoescape

from dirlisting.utils.entry import ListingEntry

NO_CACHE_HEADERS = (
    '<meta http-equiv="Cache-Control" content="no-cache, no-store, must-revalidate">',
    '<meta http-equiv="Pragma" content="no-cache">',
    '<meta http-equiv="Expires" content="0">',
)


def _datetimeformat(value: datetime.datetime) -> str:
    return value.strftime('%Y-%m-%d %H:%M')


_env = Environment(
    loader=PackageLoader('dirlisting', 'templates'),
    autoescape=select_autoescape(['html']),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters['datetimeformat'] = _datetimeformat


def _href(name: str, base: Optional[str]) -> str:
    if base is None:
        return quote(name)
    return quote(posixpath.join(base, name))


def render(
    title: str,
    entries: list[ListingEntry],
    filter: bool = True,
    root: Optional[str] = None
) -> str:
    """Render directory listing page.

    Parameters
    ----------
    title : str
        Directory path relative to the tree root, ``'/'`` for the root.
    entries : list[ListingEntry]
        Listing in display order.
    filter : bool, default=True
        Hide names starting with a dot.
    root : Optional[str], default=None
        Prefix for root-relative links. Links are relative to the
        current directory if not set.

    Returns
    -------
    str
        HTML document.
    """
    if filter:
        entries = [entry for entry in entries if not entry.name.startswith('.')]
    base: Optional[str] = None
    parent: Optional[str] = None
    if root is not None:
        base = posixpath.join(root, title.strip('/'))
        if title != '/':
            parent = quote(posixpath.join(posixpath.dirname(base.rstrip('/')), ''))
    elif title != '/':
        parent = '../'
    rows: list[dict[str, Any]] = [
        {
            'name': entry.name,
            'href': _href(entry.name, base),
            'mtime': entry.mtime,
            'size': entry.size,
        }
        for entry in entries
    ]
    template = _env.get_template('listing.html')
    return template.render(title=title, entries=rows, parent=parent)


def inject_no_cache_headers(html: str) -> str:
    """Insert cache-disabling meta tags right after ``<head>``.

    Parameters
    ----------
    html : str
        HTML document.

    Returns
    -------
    str
        HTML document with no-cache directives.
    """
    meta = ''.join(f'\n  {tag}' for tag in NO_CACHE_HEADERS)
    return html.replace('<head>', '<head>' + meta, 1)
