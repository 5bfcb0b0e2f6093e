"""Text dumps, terminal printing and PPM plots of grids."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, TextIO, Union

from .image import Image

PathLike = Union[str, Path]

PALETTE = (
    0x000000, 0x0074D9, 0xFF4136, 0x2ECC40, 0xFFDC00,
    0xAAAAAA, 0xF012BE, 0xFF851B, 0x7FDBFF, 0x870C25,
)
BACKGROUND = 0x60


class Visu:
    """Writes tasks and image pairs to a text file for later viewing."""

    def __init__(self, filename: PathLike = "visu.txt") -> None:
        self._fh: Optional[TextIO] = open(filename, "w", encoding="utf-8")

    def _out(self) -> TextIO:
        if self._fh is None:
            raise ValueError("visualisation file is closed")
        return self._fh

    def next(self, name: str) -> None:
        self._out().write(f"Task {name}\n")

    def add(self, inp: Image, out: Image) -> None:
        fh = self._out()
        fh.write("Pair\n")
        for img in (inp, out):
            fh.write(f"Image {img.w} {img.h}\n")
            for row in img.rows():
                fh.write("".join(map(str, row)) + "\n")

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> Visu:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def plot(grid: Sequence[Sequence[int]], filename: PathLike = "out.ppm") -> None:
    """Render a colour grid as a binary PPM image about 512 pixels wide."""
    if not grid or not grid[0]:
        raise ValueError("cannot plot an empty grid")
    h = len(grid)
    w = len(grid[0])
    tw = 512 // max(w, h)
    bw = max(1, 10 // max(w, h))
    width = (tw + bw) * w + bw
    height = (tw + bw) * h + bw

    output = bytearray([BACKGROUND]) * (width * height * 3)
    for i, row in enumerate(grid):
        for j, colour in enumerate(row):
            rgb = PALETTE[colour]
            run = bytes((rgb >> 16 & 255, rgb >> 8 & 255, rgb & 255)) * tw
            left = j * (tw + bw) + bw
            for k in range(tw):
                start = ((i * (tw + bw) + bw + k) * width + left) * 3
                output[start:start + 3 * tw] = run

    with open(filename, "wb") as fh:
        fh.write(f"P6\n{width} {height}\n255\n".encode("ascii"))
        fh.write(output)


def format_image(img: Image) -> str:
    """Position, size and rows of ``img``, with '.' for colour 0."""
    lines = [f"[{img.x} {img.y} {img.w} {img.h}]"]
    lines += ["".join(str(c) if c else "." for c in row) for row in img.rows()]
    return "\n".join(lines) + "\n"


def print_image(img: Image) -> None:
    print(format_image(img), end="")