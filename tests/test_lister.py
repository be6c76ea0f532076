import datetime
import os

import pytest

from dirlisting import ChildTimestamp, EntryLister, ListingConfig, LocalConnector

T0 = 1_000_000_000
T1 = 1_100_000_000
T2 = 1_200_000_000
T3 = 1_300_000_000


class UnreadableConnector(LocalConnector):

    def __init__(self, unreadable):
        self.unreadable = {str(path) for path in unreadable}

    def listdir(self, path):
        if str(path) in self.unreadable:
            raise PermissionError(f"Permission denied: '{path}'")
        return super().listdir(path)


def _names(entries):
    return [entry.name for entry in entries]


def test_pinned_first_then_newest_first(tmp_path, make_file):
    make_file(tmp_path / 'aboutme.html', T0)
    make_file(tmp_path / 'notes.txt', T2)
    make_file(tmp_path / 'archive' / 'old.txt', T1)

    entries = EntryLister(LocalConnector()).list_entries(str(tmp_path))

    assert _names(entries) == ['aboutme.html', 'notes.txt', 'archive/']
    archive = entries[2]
    assert archive.type == 'directory'
    assert archive.size is None
    assert archive.mtime == datetime.datetime.fromtimestamp(T1)


def test_pinned_first_even_when_newest_is_another_entry(tmp_path, make_file):
    make_file(tmp_path / 'a.txt', T1)
    make_file(tmp_path / 'aboutme.html', T0)
    make_file(tmp_path / 'b.txt', T3)

    entries = EntryLister(LocalConnector()).list_entries(str(tmp_path))

    assert _names(entries) == ['aboutme.html', 'b.txt', 'a.txt']


def test_files_carry_size_and_own_mtime(tmp_path, make_file):
    make_file(tmp_path / 'hello.txt', T2, content='hello')

    [entry] = EntryLister(LocalConnector()).list_entries(str(tmp_path))

    assert entry.name == 'hello.txt'
    assert entry.type == 'file'
    assert entry.size == 5
    assert entry.mtime == datetime.datetime.fromtimestamp(T2)


def test_excluded_names_and_listing_file_are_dropped(tmp_path, make_file):
    make_file(tmp_path / 'package.json')
    make_file(tmp_path / 'index.html')
    make_file(tmp_path / 'CNAME')
    make_file(tmp_path / '.git' / 'HEAD')
    make_file(tmp_path / 'node_modules' / 'x.js')
    make_file(tmp_path / 'page.html')

    entries = EntryLister(LocalConnector()).list_entries(str(tmp_path))

    assert _names(entries) == ['page.html']


def test_only_excluded_children_gives_empty_listing(tmp_path, make_file):
    make_file(tmp_path / '.git' / 'HEAD')
    make_file(tmp_path / 'package.json')

    assert EntryLister(LocalConnector()).list_entries(str(tmp_path)) == []


@pytest.mark.parametrize('relative', ['.git', 'node_modules', os.path.join('.git', 'objects')])
def test_excluded_directories_are_not_listed(tmp_path, make_file, relative):
    directory = tmp_path / relative
    make_file(directory / 'file.txt')
    lister = EntryLister(LocalConnector())

    assert lister.is_excluded(str(directory))
    assert lister.list_entries(str(directory)) == []


def test_regular_directory_is_not_excluded(tmp_path):
    lister = EntryLister(LocalConnector())

    assert not lister.is_excluded(str(tmp_path / 'docs'))
    assert not lister.is_excluded(str(tmp_path / 'gitlike'))


def test_alternate_exclusion_set(tmp_path, make_file):
    make_file(tmp_path / 'package.json', T1)
    make_file(tmp_path / 'secret.txt', T2)
    config = ListingConfig(exclude={'secret.txt'})

    entries = EntryLister(LocalConnector(), config).list_entries(str(tmp_path))

    assert _names(entries) == ['package.json']
    assert isinstance(config.exclude, frozenset)


def test_alternate_pinned_name(tmp_path, make_file):
    make_file(tmp_path / 'README', T0)
    make_file(tmp_path / 'new.txt', T2)
    config = ListingConfig(pinned_name='README')

    entries = EntryLister(LocalConnector(), config).list_entries(str(tmp_path))

    assert _names(entries) == ['README', 'new.txt']


def test_oldest_child_ignores_listing_file(tmp_path, make_file):
    subdir = tmp_path / 'sub'
    make_file(subdir / 'index.html', T0)
    make_file(subdir / 'a.txt', T2)
    make_file(subdir / 'b.txt', T1)
    lister = EntryLister(LocalConnector())

    result = lister.oldest_child_mtime(str(subdir), datetime.datetime.fromtimestamp(T3))

    assert result == ChildTimestamp(datetime.datetime.fromtimestamp(T1))
    assert not result.fallback


def test_oldest_child_falls_back_for_empty_directory(tmp_path):
    subdir = tmp_path / 'empty'
    subdir.mkdir()
    own = datetime.datetime.fromtimestamp(T3)

    result = EntryLister(LocalConnector()).oldest_child_mtime(str(subdir), own)

    assert result.fallback
    assert result.mtime == own


def test_oldest_child_falls_back_for_unreadable_directory(tmp_path, make_file):
    subdir = tmp_path / 'locked'
    make_file(subdir / 'a.txt', T0)
    own = datetime.datetime.fromtimestamp(T3)
    lister = EntryLister(UnreadableConnector([subdir]))

    result = lister.oldest_child_mtime(str(subdir), own)

    assert result.fallback
    assert result.mtime == own


def test_unreadable_subdirectory_sorts_by_own_mtime(tmp_path, make_file):
    subdir = tmp_path / 'locked'
    make_file(subdir / 'a.txt', T0)
    os.utime(subdir, (T3, T3))
    make_file(tmp_path / 'notes.txt', T2)

    entries = EntryLister(UnreadableConnector([subdir])).list_entries(str(tmp_path))

    assert _names(entries) == ['locked/', 'notes.txt']
    assert entries[0].mtime == datetime.datetime.fromtimestamp(T3)


@pytest.mark.skipif(not hasattr(os, 'symlink'), reason='symlinks not supported')
def test_broken_symlink_is_skipped_with_warning(tmp_path, make_file, capsys):
    make_file(tmp_path / 'kept.txt', T1)
    os.symlink(tmp_path / 'missing', tmp_path / 'dangling')

    entries = EntryLister(LocalConnector()).list_entries(str(tmp_path))

    assert _names(entries) == ['kept.txt']
    assert 'Skipping unreadable entry' in capsys.readouterr().err


def test_unreadable_directory_is_fatal(tmp_path):
    lister = EntryLister(UnreadableConnector([tmp_path]))

    with pytest.raises(PermissionError):
        lister.list_entries(str(tmp_path))


def test_vcs_directory_is_hidden_with_custom_exclusions(tmp_path, make_file):
    make_file(tmp_path / '.git' / 'HEAD', T1)
    make_file(tmp_path / 'a.txt', T2)
    make_file(tmp_path / 'secret.txt', T3)
    config = ListingConfig(exclude={'secret.txt'})

    entries = EntryLister(LocalConnector(), config).list_entries(str(tmp_path))

    assert _names(entries) == ['a.txt']
