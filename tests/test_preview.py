"""
Terminal previews.
"""
from PIL import Image

from emojikitchen.preview import UPPER_HALF_BLOCK, render_ansi


def test_render_opaque(tmp_path):
    path = tmp_path / "red.png"
    Image.new("RGBA", (32, 32), (255, 0, 0, 255)).save(path)

    lines = render_ansi(path, width=4).split("\n")

    assert len(lines) == 2
    assert lines[0].count(UPPER_HALF_BLOCK) == 4
    assert "\x1b[38;2;255;0;0m" in lines[0]


def test_render_transparent(tmp_path):
    path = tmp_path / "clear.png"
    Image.new("RGBA", (8, 8), (0, 0, 0, 0)).save(path)

    assert render_ansi(path, width=4) == "    \n    "
