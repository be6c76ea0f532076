from dirlisting.config import DEFAULT_CONFIG, ListingConfig
from dirlisting.connector import Connector
from dirlisting.local import LocalConnector
from dirlisting.lister import ChildTimestamp, EntryLister
from dirlisting.render import inject_no_cache_headers, render
from dirlisting.utils.entry import FSEntry, ListingEntry
from dirlisting.walker import TreeWalker

__all__ = [
    'DEFAULT_CONFIG',
    'ListingConfig',
    'Connector',
    'LocalConnector',
    'ChildTimestamp',
    'EntryLister',
    'inject_no_cache_headers',
    'render',
    'FSEntry',
    'ListingEntry',
    'TreeWalker',
]
