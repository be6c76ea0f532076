from dataclasses import dataclass, field


@dataclass(frozen=True)
class ListingConfig:
    """Fixed settings of a listing run.

    Attributes
    ----------
    exclude : frozenset[str]
        Names that are never listed and never descended into.
    vcs_dir : str
        Version control metadata directory, paths containing it are skipped.
    pinned_name : str
        Name always listed first when present.
    index_name : str
        Name of the generated listing file.
    """

    exclude: frozenset[str] = field(default_factory=lambda: frozenset({
        'CNAME',
        'node_modules',
        'package.json',
        'package-lock.json',
        'generateListing.js',
        'index.html',
        '.git',
        '.gitignore',
        '.gitmodules',
        '.nojekyll',
        'listing.html',
    }))
    vcs_dir: str = '.git'
    pinned_name: str = 'aboutme.html'
    index_name: str = 'index.html'

    def __post_init__(self):
        if not isinstance(self.exclude, frozenset):
            object.__setattr__(self, 'exclude', frozenset(self.exclude))


DEFAULT_CONFIG = ListingConfig()
