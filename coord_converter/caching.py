"""On-disk store for fetched pages, keyed by the URL that was requested."""

import os
import pickle
import re
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
CACHE_DIR = Path(os.environ.get("CACHE_DIR", ROOT_DIR / "cache"))

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]", re.ASCII)


class CacheError(Exception):
    """A cached page could not be read or written."""


def _cache_path(key: str) -> Path:
    # "expand_https://goo.gl/x" -> CACHE_DIR/expand_https___goo.gl_x.pkl
    return CACHE_DIR / (_UNSAFE_CHARS_RE.sub("_", key) + ".pkl")


def cache_get(key: str):
    """Return the value stored under `key`, or None if nothing is stored."""
    path = _cache_path(key)
    if not path.is_file():
        return None
    try:
        return pickle.loads(path.read_bytes())
    except Exception as e:
        raise CacheError(f"Cache read failed: {e}") from e


def cache_set(key: str, value):
    """Pickle `value` under `key`; CACHE_DIR is created on first write."""
    try:
        CACHE_DIR.mkdir(parents=True, exist_ok=True)
        _cache_path(key).write_bytes(pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL))
    except Exception as e:
        raise CacheError(f"Cache write failed: {e}") from e
