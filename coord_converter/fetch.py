import asyncio
import sys
from dataclasses import dataclass
from typing import cast

import requests
from tqdm import tqdm

from coord_converter.caching import cache_get, cache_set, CacheError

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
DEFAULT_TIMEOUT = 10


class FetchError(Exception):
    """Raised when a page cannot be fetched."""


@dataclass(frozen=True)
class FetchResult:
    final_url: str
    body: str
    status_code: int


def warn(message: str) -> None:
    # stderr keeps diagnostics out of the CLI's stdout results
    tqdm.write(f"⚠️ {message}", file=sys.stderr)


def resolve_url(url: str, *, user_agent: str = DEFAULT_USER_AGENT, timeout: float = DEFAULT_TIMEOUT) -> FetchResult:
    """
    Fetch `url`, following redirects, and return the final URL and body.

    Map services answer bots differently, so a desktop browser user agent
    is sent. Non-2xx responses are returned as-is; the body may still
    carry coordinates.
    """
    headers = {"User-Agent": user_agent}
    try:
        response = requests.get(url, headers=headers, timeout=timeout, allow_redirects=True)
    except requests.RequestException as e:
        raise FetchError(f"Request to {url} failed: {e}") from e

    return FetchResult(final_url=response.url, body=response.text, status_code=response.status_code)


async def resolve_url_async(url: str, **kwargs) -> FetchResult:
    """Run `resolve_url` in a worker thread."""
    return await asyncio.to_thread(resolve_url, url, **kwargs)


def resolve_cached(url: str, refresh_cache: bool = False, **kwargs) -> FetchResult:
    """
    Resolve `url` through the file cache.

    Only 2xx results are stored; they are reused unless `refresh_cache` is
    set. Error pages (e.g. a 429 "unusual traffic" page) are refetched.
    """
    key = f"expand_{url}"
    try:
        cached = cache_get(key)
    except CacheError as e:
        warn(str(e))
        cached = None
    if cached is not None and not refresh_cache:
        return cast(FetchResult, cached)

    result = resolve_url(url, **kwargs)
    if not 200 <= result.status_code < 300:
        return result
    try:
        cache_set(key, result)
    except CacheError as e:
        warn(str(e))
    return result


async def resolve_cached_async(url: str, refresh_cache: bool = False, **kwargs) -> FetchResult:
    return await asyncio.to_thread(resolve_cached, url, refresh_cache, **kwargs)
