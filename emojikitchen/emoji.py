# SPDX-License-Identifier: MIT
"""Code for emoji and Emoji Kitchen pair parsing."""

import json
from copy import deepcopy
from dataclasses import dataclass, field
from os import PathLike
from typing import Dict, Iterable, List, Optional, Union

from . import logger
from .identifiers import filename_for_pair, image_url_for_pair

#: pairs.txt omits the leading zeros of these two codepoints.
_LEGACY_CODEPOINTS = {
    "a9-fe0f": "00a9-fe0f",
    "ae-fe0f": "00ae-fe0f",
}


class DatasetError(Exception):
    """Raised when one of the static datasets is malformed."""


class UnresolvableCodepoint(DatasetError):
    """Raised when a pair record refers to an emoji missing from the catalog."""

    def __init__(self, codepoint: str, side: str):
        super().__init__(f"[{side.upper()}] emoji data for {codepoint} not found")
        self.codepoint = codepoint
        self.side = side


@dataclass
class EmojiSkinVariation:
    """A skin tone variant of an emoji."""

    codepoint: str


@dataclass
class Emoji:
    """Class representing a single emoji from the emoji-data table."""

    #: Lowercase hex codepoints joined with hyphens, e.g. "1f600".
    codepoint: str

    #: Unicode name, e.g. "GRINNING FACE".
    name: str

    #: Lowercase identifier used in filenames and labels, e.g. "grinning".
    short_name: str

    category: str
    subcategory: str

    #: Position of the emoji in the emoji-data ordering (16-bit).
    sort_order: int

    #: Skin tone variants, keyed by the tone key of emoji-data ("1F3FB" etc).
    skin_variations: Dict[str, EmojiSkinVariation] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: dict) -> "Emoji":
        """
        Build an Emoji from an emoji-data record.

        :raises DatasetError: if a required field is missing or malformed.
        """
        try:
            skin_variations = {
                key: EmojiSkinVariation(codepoint=variant["unified"].lower())
                for key, variant in (record.get("skin_variations") or {}).items()
            }
            sort_order = int(record["sort_order"])
            emoji = cls(
                codepoint=record["unified"].lower(),
                name=record.get("name") or "",
                short_name=record["short_name"].lower(),
                category=record.get("category") or "",
                subcategory=record.get("subcategory") or "",
                sort_order=sort_order,
                skin_variations=skin_variations,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DatasetError(f"Malformed emoji record {record!r}: {e}") from e

        if not 0 <= sort_order <= 0xFFFF:
            raise DatasetError(
                f"Sort order {sort_order} of {emoji.codepoint} is out of range"
            )

        return emoji


def load_catalog(source: Union[str, PathLike, List[dict]]) -> Dict[str, Emoji]:
    """
    Load the emoji catalog, keyed by codepoint.

    :param source: path to an emoji-data JSON file, or its already-parsed
                   list of records.
    :raises OSError: if the file can't be read.
    :raises DatasetError: if the data is malformed.
    """
    if isinstance(source, list):
        records = source
    else:
        with open(source, "r", encoding="utf-8") as f:
            try:
                records = json.load(f)
            except ValueError as e:
                raise DatasetError(f"Failed to parse {source}: {e}") from e

    if not isinstance(records, list):
        raise DatasetError("Emoji data must be a list of records")

    catalog = {}
    for record in records:
        emoji = Emoji.from_record(record)
        if emoji.codepoint in catalog:
            logger.debug(f"Duplicate emoji data for {emoji.codepoint}, keeping last")
        catalog[emoji.codepoint] = emoji

    logger.debug(f"Loaded {len(catalog)} emoji")
    return catalog


def read_pair_lines(path: Union[str, PathLike]) -> List[str]:
    """Read the newline-delimited pair records, skipping blank lines."""
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f.read().strip().split("\n") if line.strip()]


def normalize_codepoint(codepoint: str) -> str:
    codepoint = codepoint.lower()
    return _LEGACY_CODEPOINTS.get(codepoint, codepoint)


@dataclass
class EmojiPair:
    """An Emoji Kitchen combination of two emoji."""

    #: Hex date token of the combination, see identifiers.pair_date.
    d: str
    base: Emoji
    pair: Emoji
    name: str
    image_url: str
    filename: str

    #: Sum of both sort orders. Not truncated to 16 bits.
    sort_order: int

    @classmethod
    def create(cls, d: str, base: Emoji, pair: Emoji) -> "EmojiPair":
        sort_order = base.sort_order + pair.sort_order
        return cls(
            d=d,
            base=deepcopy(base),
            pair=deepcopy(pair),
            name=f"{base.short_name}_{pair.short_name}",
            image_url=image_url_for_pair(d, base.codepoint, pair.codepoint),
            filename=filename_for_pair(
                sort_order,
                d,
                base.codepoint,
                pair.codepoint,
                base.short_name,
                pair.short_name,
            ),
            sort_order=sort_order,
        )

    @classmethod
    def from_pair_string(cls, line: str, catalog: Dict[str, Emoji]) -> "EmojiPair":
        """
        Parse a ``date/codepoint1/codepoint2`` record. Anything after a
        third slash is ignored.

        :raises DatasetError: if the record is malformed.
        :raises UnresolvableCodepoint: if either emoji is not in the catalog.
        """
        parts = line.split("/", 3)
        if len(parts) < 3 or not all(parts[:3]):
            raise DatasetError(f"Malformed pair record: {line!r}")

        d = parts[0]
        try:
            int(d, 16)
        except ValueError:
            raise DatasetError(f"Bad date token in pair record: {line!r}")

        codepoint1 = normalize_codepoint(parts[1])
        codepoint2 = normalize_codepoint(parts[2])

        if codepoint1 not in catalog:
            raise UnresolvableCodepoint(codepoint1, "base")
        if codepoint2 not in catalog:
            raise UnresolvableCodepoint(codepoint2, "pair")

        return cls.create(d, catalog[codepoint1], catalog[codepoint2])


def load_pairs(
    lines: Iterable[str], catalog: Dict[str, Emoji], name: Optional[str] = None
) -> List[EmojiPair]:
    """
    Build the pairs from raw records, in input order.

    :param name: if given, only keep pairs where either emoji has this
                 short name.
    """
    pairs = []
    for line in lines:
        emoji_pair = EmojiPair.from_pair_string(line, catalog)
        if name is None or name in (emoji_pair.base.short_name, emoji_pair.pair.short_name):
            pairs.append(emoji_pair)
    return pairs


def load_kitchen(
    emoji_data: Union[str, PathLike],
    pairs_path: Union[str, PathLike],
    name: Optional[str] = None,
) -> List[EmojiPair]:
    """Load both datasets and return the pairs sorted by sort order."""
    catalog = load_catalog(emoji_data)
    pairs = load_pairs(read_pair_lines(pairs_path), catalog, name)
    pairs.sort(key=lambda p: p.sort_order)
    logger.debug(f"Loaded {len(pairs)} pairs")
    return pairs
