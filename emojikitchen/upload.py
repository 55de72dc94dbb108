# SPDX-License-Identifier: MIT
"""
Uploading downloaded emoji to Slack and Discord.
"""

from . import logger
from .config import ConfigError, DiscordConfig, SlackConfig
from .emoji import Emoji
from .identifiers import AnimatedFilename, PairFilename
from .request import request_get, request_post, RequestError
from .utils import mime_type_from_extension

import base64
import os
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Set


class UploadError(Exception):
    """Raised when a platform rejects an upload."""


@dataclass
class UploadEmoji:
    """A local image file and the emoji name to upload it as."""

    name: str
    path: str
    mime_type: str = field(init=False)

    def __post_init__(self):
        ext = os.path.splitext(self.path)[1].lstrip(".")
        mime_type = mime_type_from_extension(ext)
        if mime_type is None:
            raise ConfigError(f"{ext or '(no extension)'} extension not supported: {self.path}")
        self.mime_type = mime_type


class Uploader(Protocol):
    def upload(self, emoji: UploadEmoji):
        ...


class SlackUploader:
    """Uploads emoji through the (undocumented) Slack emoji.add endpoint."""

    def __init__(self, config: SlackConfig):
        self.config = config

    @property
    def url(self) -> str:
        return f"https://{self.config.workspace_name}.slack.com/api/emoji.add"

    def upload(self, emoji: UploadEmoji):
        """
        :raises RequestError: on a non-success HTTP status.
        :raises UploadError: if Slack reports an error.
        """
        with open(emoji.path, "rb") as image:
            req = request_post(
                self.url,
                headers={"cookie": self.config.cookie},
                data={"mode": "data", "name": emoji.name, "token": self.config.token},
                # Slack doesn't care about the uploaded file name
                files={"image": ("image.gif", image, emoji.mime_type)},
            )

        if not req.ok:
            raise RequestError(self.url, req.status_code)

        body = req.json()
        if not body.get("ok", False):
            raise UploadError(body.get("error") or "unknown error")


class DiscordUploader:
    """Uploads emoji to a Discord guild through the bot API."""

    API_URL = "https://discord.com/api/v10"

    def __init__(self, config: DiscordConfig):
        self.config = config

    @property
    def url(self) -> str:
        return f"{self.API_URL}/guilds/{self.config.guild_id}/emojis"

    @property
    def headers(self) -> Dict[str, str]:
        return {"authorization": f"Bot {self.config.token}"}

    def list_emoji(self) -> Set[str]:
        """
        Get the names of the emoji already present in the guild.

        :raises RequestError: if the request fails or the listing is malformed.
        """
        try:
            emoji_list = request_get(
                self.url, parse_json=True, no_cache=True, headers=self.headers
            )
            return {emoji["name"] for emoji in emoji_list}
        except (ValueError, TypeError, KeyError) as e:
            raise RequestError(self.url, reason=f"Unexpected emoji listing: {e!r}") from e

    def upload(self, emoji: UploadEmoji):
        """
        :raises UploadError: if Discord rejects the emoji.
        """
        with open(emoji.path, "rb") as f:
            data = base64.b64encode(f.read()).decode("ascii")

        req = request_post(
            self.url,
            headers=self.headers,
            json={
                "name": emoji.name,
                "image": f"data:{emoji.mime_type};base64,{data}",
                "roles": [],
            },
        )

        if not req.ok:
            try:
                message = req.json().get("message", "")
            except ValueError:
                message = ""
            raise UploadError(f"{req.status_code} {message}".strip())


@dataclass
class UploadJob:
    """Adapts a single upload to the batch runner."""

    uploader: Uploader
    emoji: UploadEmoji

    @property
    def description(self) -> str:
        return f"{self.emoji.name} {self.emoji.path}"

    def run(self):
        self.uploader.upload(self.emoji)


def list_files(input_path: PathLike) -> List[Path]:
    return sorted(p for p in Path(input_path).iterdir() if p.is_file())


def animated_uploads(
    input_path: PathLike, catalog: Dict[str, Emoji], name: Optional[str] = None
) -> List[UploadEmoji]:
    """
    Collect downloaded animations to upload as ``{short_name}_animated``.
    Files that aren't animation downloads, or whose codepoint isn't in the
    catalog, are skipped.

    :raises ConfigError: if a file has an extension we can't upload.
    """
    output = []
    for path in list_files(input_path):
        try:
            filename = AnimatedFilename.parse(path.name)
        except ValueError:
            logger.debug(f"Skipping {path.name}")
            continue

        emoji = catalog.get(filename.catalog_codepoint)
        if emoji is None:
            logger.debug(f"No emoji data for {filename.catalog_codepoint}, skipping")
            continue

        if name is not None and name != emoji.short_name:
            continue

        output.append(UploadEmoji(name=f"{emoji.short_name}_animated", path=str(path)))

    return output


def pair_uploads(input_path: PathLike, name: Optional[str] = None) -> List[UploadEmoji]:
    """
    Collect downloaded Emoji Kitchen images to upload as
    ``{base_short}_{pair_short}``.

    :raises ConfigError: if a file has an extension we can't upload.
    """
    output = []
    for path in list_files(input_path):
        try:
            filename = PairFilename.parse(path.name)
        except ValueError:
            logger.debug(f"Skipping {path.name}")
            continue

        if name is not None and name not in (filename.base_short, filename.pair_short):
            continue

        output.append(UploadEmoji(name=filename.name, path=str(path)))

    return output
