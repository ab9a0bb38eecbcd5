import pytest

import coord_converter.caching as caching
from coord_converter.caching import CacheError, cache_get, cache_set


def test_cache_round_trip(cache_dir):
    cache_set("expand_https://goo.gl/maps/xyz?a=1", {"final": "https://maps.google.com"})
    assert cache_get("expand_https://goo.gl/maps/xyz?a=1") == {"final": "https://maps.google.com"}


def test_cache_miss_returns_none(cache_dir):
    assert cache_get("nothing-here") is None


def test_cache_keys_become_safe_file_names(cache_dir):
    path = caching._cache_path("expand_https://goo.gl/maps/xyz")
    assert path.parent == cache_dir
    assert path.name == "expand_https___goo.gl_maps_xyz.pkl"


def test_cache_set_creates_directory(cache_dir):
    assert not cache_dir.exists()
    cache_set("key", 1)
    assert cache_dir.is_dir()


def test_cache_read_failure_raises_cache_error(cache_dir):
    cache_dir.mkdir(parents=True)
    caching._cache_path("corrupt").write_bytes(b"not a pickle")
    with pytest.raises(CacheError, match="Cache read failed"):
        cache_get("corrupt")


def test_cache_write_failure_raises_cache_error(cache_dir):
    with pytest.raises(CacheError, match="Cache write failed"):
        cache_set("lambda", lambda: None)
