# SPDX-License-Identifier: MIT
"""
Runtime configuration. Values come from the environment, optionally
populated from a .env file in the working directory.
"""

import os
from dataclasses import dataclass, fields

from dotenv import load_dotenv

from . import logger

load_dotenv()


def _env_positive_int(var: str, default: int) -> int:
    value = os.getenv(var, "")
    if not value:
        return default
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number < 1:
        logger.warning(f"Ignoring invalid {var}={value!r}, using {default}")
        return default
    return number


#: Default location of the emoji-data table (iamcal/emoji-data emoji.json).
EMOJI_DATA_PATH = os.getenv("EMOJIKITCHEN_EMOJI_DATA", "data/emoji.json")

#: Default location of the newline-delimited Emoji Kitchen pair list.
PAIRS_PATH = os.getenv("EMOJIKITCHEN_PAIRS", "data/pairs.txt")

#: Requests per second allowed to any single session.
RATE_LIMIT = _env_positive_int("EMOJIKITCHEN_RATE_LIMIT", 20)

#: Number of retries after the first attempt for plain GET requests.
RETRIES = 3

#: Base of the exponential backoff between retries, in seconds.
BACKOFF_FACTOR = 0.5

#: Timeout for a single HTTP request, in seconds.
REQUEST_TIMEOUT = 30

#: Default number of jobs in flight for batch downloads.
CONCURRENCY = 8

#: Display time of every frame in resized animations, in milliseconds.
FRAME_DELAY_MS = 30


class ConfigError(Exception):
    """Raised when the configuration can't support the requested operation."""


class _EnvConfig:
    #: Maps dataclass field names to environment variables.
    __env__ = {}

    @classmethod
    def from_env(cls):
        """
        Build the config from environment variables.

        :raises ConfigError: if any of the variables is unset or empty.
        """
        values = {}
        missing = []
        for field in fields(cls):
            var = cls.__env__[field.name]
            value = os.getenv(var, "")
            if not value:
                missing.append(var)
            values[field.name] = value

        if missing:
            raise ConfigError(
                f"Missing environment variables for {cls.__name__}: {', '.join(missing)}"
            )

        return cls(**values)


@dataclass
class SlackConfig(_EnvConfig):
    """Credentials for the Slack emoji.add endpoint."""

    __env__ = {"cookie": "COOKIE", "token": "TOKEN", "workspace_name": "WORKSPACE_NAME"}

    cookie: str
    token: str
    workspace_name: str


@dataclass
class DiscordConfig(_EnvConfig):
    """Credentials for the Discord guild emoji API."""

    __env__ = {"token": "DISCORD_TOKEN", "guild_id": "DISCORD_GUILD_ID"}

    token: str
    guild_id: str
