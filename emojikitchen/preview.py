# SPDX-License-Identifier: MIT
"""Rough image previews in the terminal using 24-bit ANSI colors."""

from os import PathLike

from PIL import Image

UPPER_HALF_BLOCK = "▀"
RESET = "\x1b[0m"


def _color(pixel, background: bool) -> str:
    r, g, b, a = pixel
    if a < 128:
        return ""
    return f"\x1b[{48 if background else 38};2;{r};{g};{b}m"


def render_ansi(path: PathLike, width: int = 16) -> str:
    """
    Render an image as lines of half-block characters, two pixel rows per
    line. Transparent pixels are left blank.
    """
    with Image.open(path) as im:
        img = im.convert("RGBA")

    height = max(1, round(width * img.height / img.width))
    if height % 2:
        height += 1
    img = img.resize((width, height), Image.Resampling.NEAREST)

    lines = []
    for y in range(0, height, 2):
        line = ""
        for x in range(width):
            top = img.getpixel((x, y))
            bottom = img.getpixel((x, y + 1))
            fg = _color(top, background=False)
            bg = _color(bottom, background=True)
            if not fg and not bg:
                line += " "
            elif fg:
                line += f"{fg}{bg}{UPPER_HALF_BLOCK}{RESET}"
            else:
                # only the bottom half is visible
                line += f"{_color(bottom, background=False)}▄{RESET}"
        lines.append(line)

    return "\n".join(lines)
