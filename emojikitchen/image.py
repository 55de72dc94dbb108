# SPDX-License-Identifier: MIT
"""Resizing of animated emoji."""

from io import BytesIO
from typing import List

from PIL import GifImagePlugin, Image, ImageSequence, UnidentifiedImageError

from .config import FRAME_DELAY_MS

#: Palette index reserved for transparent pixels in every encoded frame.
TRANSPARENT_INDEX = 255


class ImageTransformError(ValueError):
    """Raised when an animation can't be decoded or encoded."""


def _to_palette(frame: Image.Image) -> Image.Image:
    """Quantize an RGBA frame to 255 colors plus a transparent index."""
    mask = frame.getchannel("A").point(lambda a: 255 if a < 128 else 0)
    out = frame.convert("RGB").convert("P", palette=Image.Palette.ADAPTIVE, colors=255)
    palette = out.getpalette()
    out.putpalette(palette + [0] * (768 - len(palette)))
    out.paste(TRANSPARENT_INDEX, mask=mask)
    return out


def _encode(frames: List[Image.Image]) -> bytes:
    """
    Write every frame with its own delay. Pillow's save_all would fold
    consecutive identical frames into one longer frame.
    """
    frames = [_to_palette(frame) for frame in frames]

    out = BytesIO()
    header, _ = GifImagePlugin.getheader(frames[0], info={"loop": 0})
    for block in header:
        out.write(block)

    for i, frame in enumerate(frames):
        params = {
            "duration": FRAME_DELAY_MS,
            "disposal": 2,
            "transparency": TRANSPARENT_INDEX,
        }
        if i > 0:
            params["include_color_table"] = True
        for block in GifImagePlugin.getdata(frame, **params):
            out.write(block)

    out.write(b";")
    return out.getvalue()


def resize_animation(data: bytes, size: int) -> bytes:
    """
    Resize every frame of an animated GIF to size x size pixels.

    Frames are scaled with nearest-neighbour sampling and re-encoded with a
    fixed delay of FRAME_DELAY_MS and an infinite loop. The output has
    exactly as many frames as the input.

    :raises ImageTransformError: if the data can't be decoded or encoded.
    """
    if size < 1:
        raise ValueError(f"Invalid size: {size}")

    try:
        with Image.open(BytesIO(data)) as im:
            frames = [
                frame.convert("RGBA").resize((size, size), Image.Resampling.NEAREST)
                for frame in ImageSequence.Iterator(im)
            ]
    except (UnidentifiedImageError, OSError, EOFError) as e:
        raise ImageTransformError(f"Failed to decode animation: {e}") from e

    try:
        return _encode(frames)
    except (OSError, ValueError) as e:
        raise ImageTransformError(f"Failed to encode animation: {e}") from e
