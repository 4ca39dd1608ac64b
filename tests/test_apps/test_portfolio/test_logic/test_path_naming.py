"""Tests for object key derivation."""

import re

import pytest
from django.core.exceptions import ValidationError

from server.apps.portfolio.logic.path_naming import PathNamer, make_token

_SAFE_SEGMENT = re.compile(r'[A-Za-z0-9_.\-]+')


@pytest.fixture
def path_namer() -> PathNamer:
    """Create PathNamer instance.

    Returns:
        PathNamer instance.
    """
    return PathNamer()


def test_derive_layout(path_namer):
    """Key is owner/subjects/subject/category/token-name."""
    path = path_namer.derive('abc', 4, 'written', 'notes.pdf')

    parts = path.split('/')
    assert parts[:4] == ['abc', 'subjects', '4', 'written']
    assert len(parts) == 5
    token, name = parts[4].split('-', 1)
    assert token
    assert name == 'notes.pdf'


def test_derive_sanitizes_name(path_namer):
    """Only safe characters survive in the last key segment."""
    path = path_namer.derive('abc', 1, 'performance', 'my file (final).PDF')

    last_segment = path_namer.get_name(path)
    assert last_segment.endswith('-my_file__final_.PDF')
    assert _SAFE_SEGMENT.fullmatch(last_segment)


def test_derive_empty_name(path_namer):
    """Missing filename still yields a usable key."""
    path = path_namer.derive('abc', 1, 'written', '')

    assert path.endswith('-upload')


def test_derive_is_unique(path_namer):
    """Repeated uploads of the same name never share a key."""
    paths = {
        path_namer.derive('abc', 1, 'written', 'same.pdf')
        for _ in range(10_000)
    }

    assert len(paths) == 10_000


def test_derive_rejects_owner_with_separator(path_namer):
    """An owner id containing a slash would escape its prefix."""
    with pytest.raises(ValidationError):
        path_namer.derive('a/b', 1, 'written', 'notes.pdf')


def test_make_token_shape():
    """Token is lowercase base36 timestamp plus 16 hex chars."""
    token = make_token()

    assert re.fullmatch(r'[0-9a-z]+[0-9a-f]{16}', token)
    assert make_token() != token


def test_avatar_path(path_namer):
    """Avatar key is fixed per owner."""
    assert path_namer.avatar_path('abc') == 'abc/profile/avatar.jpg'
    assert path_namer.avatar_path('abc') == path_namer.avatar_path('abc')


def test_owner_prefix(path_namer):
    """Prefix ends with the separator so similar ids do not overlap."""
    assert path_namer.owner_prefix('abc') == 'abc/'


def test_get_name(path_namer):
    """Test extracting the last segment from a storage path."""
    assert path_namer.get_name('abc/subjects/1/written/t-a.pdf') == 't-a.pdf'
    assert path_namer.get_name('abc/profile/avatar.jpg') == 'avatar.jpg'
    assert path_namer.get_name('') == ''
