# SPDX-License-Identifier: MIT
"""Writing the JSON manifest of Emoji Kitchen pairs."""

import json
from os import PathLike
from pathlib import Path
from typing import List

from .emoji import Emoji, EmojiPair


def emoji_to_dict(emoji: Emoji) -> dict:
    return {
        "codepoint": emoji.codepoint,
        "name": emoji.name,
        "short_name": emoji.short_name,
        "category": emoji.category,
        "subcategory": emoji.subcategory,
        "sort_order": emoji.sort_order,
        "skin_variations": {
            key: variant.codepoint for key, variant in emoji.skin_variations.items()
        },
    }


def pair_to_dict(pair: EmojiPair) -> dict:
    return {
        "name": pair.name,
        "src": pair.image_url,
        "sort_order": pair.sort_order,
        "d": pair.d,
        "base": emoji_to_dict(pair.base),
        "pair": emoji_to_dict(pair.pair),
    }


def write_manifest(pairs: List[EmojiPair], output: PathLike):
    """Write the pairs, in the given order, as a JSON list to output."""
    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)

    with open(output, "w", encoding="utf-8") as f:
        json.dump([pair_to_dict(p) for p in pairs], f, indent=2, ensure_ascii=False)
