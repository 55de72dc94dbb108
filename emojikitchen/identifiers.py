# SPDX-License-Identifier: MIT
"""
Derivation of names, URLs and filenames from emoji metadata.

Downloaded files are found again later (show, upload) by parsing their
names, so the formats here must not change.
"""

from dataclasses import dataclass
from typing import List

KITCHEN_URL = "https://www.gstatic.com/android/keyboard/emojikitchen"
NOTO_ANIMATED_URL = "https://fonts.gstatic.com/s/e/notoemoji/latest"

#: The `d` field of a pair record is a hex offset from this date.
DATE_BASE = 20200000

#: Combinations published from this date on address the copyright and
#: registered signs without the leading zeros.
SHORT_SIGN_CODEPOINTS_SINCE = 20220500

_SHORT_SIGN_CODEPOINTS = {
    "00a9-ufe0f": "a9-ufe0f",
    "00ae-ufe0f": "ae-ufe0f",
}


def short_name_from_tags(tags: List[str], codepoint: str) -> str:
    """
    Get a short name from a list of tags such as [":smile:"].

    The first tag is used with its colon delimiters stripped; without tags
    the codepoint itself is the short name.
    """
    if not tags:
        return codepoint
    return tags[0][1:-1]


def pair_date(d: str) -> int:
    """Convert the hex date token of a pair record to a YYYYMMDD integer."""
    return int(d, 16) + DATE_BASE


def _url_codepoint(date: int, codepoint: str) -> str:
    codepoint = codepoint.replace("-", "-u")
    if date >= SHORT_SIGN_CODEPOINTS_SINCE:
        return _SHORT_SIGN_CODEPOINTS.get(codepoint, codepoint)
    return codepoint


def image_url_for_pair(d: str, base_codepoint: str, pair_codepoint: str) -> str:
    """Get the gstatic URL of the image combining the two emoji."""
    date = pair_date(d)
    c1 = _url_codepoint(date, base_codepoint)
    c2 = _url_codepoint(date, pair_codepoint)
    return f"{KITCHEN_URL}/{date}/u{c1}/u{c1}_u{c2}.png"


def filename_for_pair(
    sort_order: int,
    d: str,
    base_codepoint: str,
    pair_codepoint: str,
    base_short: str,
    pair_short: str,
) -> str:
    return PairFilename(
        sort_order, d, base_codepoint, pair_codepoint, base_short, pair_short
    ).format()


def image_url_for_animated(codepoint: str) -> str:
    return f"{NOTO_ANIMATED_URL}/{codepoint}/512.gif"


def filename_for_animated(short_name: str, codepoint: str) -> str:
    return AnimatedFilename(short_name, codepoint).format()


@dataclass(frozen=True)
class PairFilename:
    """
    Name of a downloaded combination image:
    ``{sort_order}.{d}.{base_codepoint}.{pair_codepoint}.{base_short}.{pair_short}.png``
    """

    sort_order: int
    d: str
    base_codepoint: str
    pair_codepoint: str
    base_short: str
    pair_short: str
    extension: str = "png"

    def format(self) -> str:
        return ".".join(
            [
                str(self.sort_order),
                self.d,
                self.base_codepoint,
                self.pair_codepoint,
                self.base_short,
                self.pair_short,
                self.extension,
            ]
        )

    @property
    def name(self) -> str:
        """Display name of the pair, as used for uploads."""
        return f"{self.base_short}_{self.pair_short}"

    @classmethod
    def parse(cls, filename: str) -> "PairFilename":
        """
        Parse a filename produced by format().

        :raises ValueError: if the filename doesn't follow the format.
        """
        parts = filename.split(".")
        if len(parts) != 7 or not all(parts):
            raise ValueError(f"Not a pair filename: {filename}")

        sort_order, d, base_cp, pair_cp, base_short, pair_short, ext = parts
        if not sort_order.isdigit():
            raise ValueError(f"Bad sort order in pair filename: {filename}")

        return cls(int(sort_order), d, base_cp, pair_cp, base_short, pair_short, ext)


@dataclass(frozen=True)
class AnimatedFilename:
    """Name of a downloaded animation: ``{short_name}.{codepoint}.gif``"""

    short_name: str
    codepoint: str
    extension: str = "gif"

    def format(self) -> str:
        return f"{self.short_name}.{self.codepoint}.{self.extension}"

    @property
    def catalog_codepoint(self) -> str:
        """
        The codepoint in the form used by the emoji catalog. Noto joins
        sequences with underscores where the catalog uses hyphens.
        """
        return self.codepoint.replace("_", "-")

    @classmethod
    def parse(cls, filename: str) -> "AnimatedFilename":
        """
        Parse a filename produced by format(). The short name may itself
        contain dots; codepoint and extension never do.

        :raises ValueError: if the filename doesn't follow the format.
        """
        parts = filename.rsplit(".", 2)
        if len(parts) != 3 or not all(parts):
            raise ValueError(f"Not an animation filename: {filename}")
        return cls(*parts)
