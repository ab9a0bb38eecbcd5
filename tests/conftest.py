import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from coord_converter.fetch import FetchResult  # noqa: E402


class FakeResolver:
    """Resolver stand-in serving canned pages and recording requested URLs."""

    def __init__(self, pages=None, redirects=None, fail=()):
        self.pages = pages or {}
        self.redirects = redirects or {}
        self.fail = set(fail)
        self.calls = []

    def __call__(self, url):
        self.calls.append(url)
        if url in self.fail:
            raise ConnectionError(f"cannot reach {url}")
        final_url = self.redirects.get(url, url)
        body = self.pages.get(final_url)
        if body is None and final_url == url:
            return None
        return FetchResult(final_url=final_url, body=body or "", status_code=200)


@pytest.fixture
def fake_resolver():
    return FakeResolver


@pytest.fixture
def cache_dir(tmp_path, monkeypatch):
    import coord_converter.caching as caching

    monkeypatch.setattr(caching, "CACHE_DIR", tmp_path / "cache")
    return tmp_path / "cache"
