# SPDX-License-Identifier: MIT
"""Wrapper for making requests"""

from . import VERSION, config, logger
from .image import resize_animation

import os
from os import PathLike
from pathlib import Path
from typing import Optional

import requests
from pyrate_limiter import Duration, RequestRate, Limiter
from requests import Session
from requests.adapters import HTTPAdapter
from requests_cache import CacheMixin
from requests_ratelimiter import LimiterSession, LimiterMixin
from urllib3.util.retry import Retry


class CachedLimiterSession(CacheMixin, LimiterMixin, Session):
    """Requests session that combines caching and ratelimiting."""


#: Statuses worth another attempt. Other errors fail at once.
TRANSIENT_STATUSES = [408, 429, 500, 502, 503, 504]

#: GETs are retried on transport errors and transient statuses, sleeping
#: BACKOFF_FACTOR * 2 ** (n - 1) seconds before the n-th retry after the first.
#: POSTs are only retried when the connection couldn't be established.
retry_strategy = Retry(
    total=config.RETRIES,
    backoff_factor=config.BACKOFF_FACTOR,
    status_forcelist=TRANSIENT_STATUSES,
    allowed_methods=["GET"],
    raise_on_status=False,
)


def _mount_retries(session: Session) -> Session:
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


limiter = Limiter(RequestRate(config.RATE_LIMIT, Duration.SECOND))

# The cache lives in memory only, so nothing is reused across runs.
req_session = _mount_retries(
    CachedLimiterSession(backend="memory", expire_after=180, limiter=limiter)
)
req_nocache_session = _mount_retries(LimiterSession(limiter=limiter))

HEADERS = {
    "User-Agent": f"emojikitchen {VERSION} (https://github.com/emojikitchen/emojikitchen)"
}


class RequestError(Exception):
    """Base class for request exceptions."""

    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status_code = status_code
        if not reason:
            reason = str(status_code)
        super().__init__(reason)


def _get(session: Session, url: str, headers: Optional[dict] = None) -> requests.Response:
    """
    GET a URL. Retries happen in the session's transport adapter.

    :raises RequestError: on a non-success status or once retries run out.
    """
    headers = {**HEADERS, **(headers or {})}

    try:
        req = session.get(url, headers=headers, timeout=config.REQUEST_TIMEOUT)
    except requests.exceptions.RequestException as e:
        logger.warning(f"Request error for {url}: {e}")
        raise RequestError(url, reason=f"{type(e).__name__}: {e}") from e

    if not 200 <= req.status_code < 300:
        logger.warning(f"Request error for {url}: {req.status_code}")
        raise RequestError(url, req.status_code)

    return req


def request_get(
    url: str,
    parse_json: bool = False,
    no_cache: bool = False,
    headers: Optional[dict] = None,
):
    session = req_session
    if no_cache:
        session = req_nocache_session

    req = _get(session, url, headers)

    if parse_json:
        return req.json()

    return req.text


def fetch_bytes(url: str) -> bytes:
    """Fetch the full body of a URL, bypassing the cache."""
    return _get(req_nocache_session, url).content


def request_download(url: str, target: PathLike, size: Optional[int] = None):
    """
    Downloads a file to the given target location.

    The payload is fetched completely (and resized to size x size when
    size is given) before anything is written, and it is written to a
    temporary file first, so a failed download never leaves a file at
    the target location.
    """
    basedir = Path(os.path.dirname(target) or ".")
    if basedir.is_file():
        raise ValueError("Base directory already exists and is a file")

    if not basedir.is_dir():
        basedir.mkdir(parents=True, exist_ok=True)

    content = fetch_bytes(url)

    if size is not None:
        content = resize_animation(content, size)

    partial = Path(f"{target}.part")
    try:
        with open(partial, "wb") as f:
            f.write(content)
        os.replace(partial, target)
    except OSError:
        partial.unlink(missing_ok=True)
        raise


def request_post(url: str, **kwargs) -> requests.Response:
    """
    POST without retries on error statuses or failed reads, so an upload
    the server may have received is never sent twice.
    """
    headers = dict(HEADERS)
    headers.update(kwargs.pop("headers", {}))
    return req_nocache_session.post(
        url, headers=headers, timeout=config.REQUEST_TIMEOUT, **kwargs
    )
