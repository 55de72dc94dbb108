# SPDX-License-Identifier: MIT
"""
Noto animated emoji: fetching the catalog and downloading resized GIFs.
"""

from . import config, logger
from .batch import BatchReport, DownloadJob, run_batch
from .identifiers import (
    filename_for_animated,
    image_url_for_animated,
    short_name_from_tags,
)
from .request import request_get, RequestError

from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import List, Optional

ANIMATIONS_URL = "https://googlefonts.github.io/noto-emoji-animation/data/api.json"


class AnimationsFetchError(RequestError):
    """Raised when the animated emoji catalog can't be fetched or parsed."""


@dataclass
class AnimatedEmoji:
    """Class representing a single Noto animated emoji."""

    #: Codepoint as used by the Noto API, e.g. "1f600" or "1f44b_1f3fb".
    codepoint: str

    #: Shortcode tags, e.g. [":smile:"].
    tags: List[str] = field(default_factory=list)

    @property
    def short_name(self) -> str:
        return short_name_from_tags(self.tags, self.codepoint)

    @property
    def filename(self) -> str:
        return filename_for_animated(self.short_name, self.codepoint)

    @property
    def image_url(self) -> str:
        return image_url_for_animated(self.codepoint)


def fetch_animated_catalog(url: str = ANIMATIONS_URL) -> List[AnimatedEmoji]:
    """
    Get the list of animated emoji.

    :raises AnimationsFetchError: if the request fails or the response
                                  doesn't look like the animations API.
    """
    try:
        body = request_get(url, parse_json=True)
    except RequestError as e:
        raise AnimationsFetchError(url, e.status_code, str(e)) from e
    except ValueError as e:
        raise AnimationsFetchError(url, reason=f"Invalid JSON: {e}") from e

    if not isinstance(body, dict) or not isinstance(body.get("icons"), list):
        raise AnimationsFetchError(url, reason="Missing icons list in response")

    emoji_list = []
    for icon in body["icons"]:
        if not isinstance(icon, dict) or not isinstance(icon.get("codepoint"), str):
            raise AnimationsFetchError(url, reason=f"Malformed icon: {icon!r}")

        tags = icon.get("tags") or []
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise AnimationsFetchError(url, reason=f"Malformed tags: {tags!r}")

        emoji_list.append(AnimatedEmoji(codepoint=icon["codepoint"], tags=tags))

    return emoji_list


def filter_by_name(emoji: List[AnimatedEmoji], name: Optional[str]) -> List[AnimatedEmoji]:
    if name is None:
        return emoji
    return [e for e in emoji if e.short_name == name]


def download(
    emoji: List[AnimatedEmoji],
    output_path: PathLike,
    size: int,
    concurrency: int = config.CONCURRENCY,
) -> BatchReport:
    """Download every animation into output_path, resized to size x size."""
    output_path = Path(output_path)
    output_path.mkdir(parents=True, exist_ok=True)

    jobs = [
        DownloadJob(
            description=f"{e.filename} {e.image_url}",
            url=e.image_url,
            target=output_path / e.filename,
            size=size,
        )
        for e in emoji
    ]
    return run_batch(jobs, concurrency)


def animations(
    output_path: PathLike,
    name: Optional[str],
    size: int,
    concurrency: int = config.CONCURRENCY,
) -> Optional[BatchReport]:
    """
    Fetch the animated emoji catalog and download it. Returns None if the
    catalog couldn't be fetched.
    """
    try:
        emoji = fetch_animated_catalog()
    except AnimationsFetchError as e:
        logger.error(f"Failed to fetch animations: {e}")
        return None

    emoji = filter_by_name(emoji, name)
    logger.info(f"ℹ️ {len(emoji)} animated emoji found")
    return download(emoji, output_path, size, concurrency)
