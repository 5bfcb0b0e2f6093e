"""Colour remapping and orientation heuristics that simplify a task."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Sequence

from .image import Image, Point, full

NUM_COLS = 10


@dataclass
class Simplifier:
    """Maps a task's images to a simpler form and answers back again.

    ``inp`` transforms an input, ``out`` transforms an output given its
    input, and ``rec`` undoes ``out`` given the original input.
    """

    inp: Callable[[Image], Image]
    out: Callable[[Image, Image], Image]
    rec: Callable[[Image, Image], Image]

    def __call__(self, a: Image, b: Image) -> tuple[Image, Image]:
        return self.inp(a), self.out(a, b)


def normalize_dummy(train: Sequence[tuple[Image, Image]] = ()) -> Simplifier:
    """A simplifier that leaves every image unchanged."""
    return Simplifier(
        inp=lambda a: a,
        out=lambda a, b: b,
        rec=lambda a, b: b,
    )


def remap_cols(img: Image, cols: Sequence[int]) -> Image:
    """A copy of ``img`` with every colour c replaced by ``cols[c]``."""
    ret = img.copy()
    ret.mask = [cols[c] for c in img.mask]
    return ret


def list_cols(img: Image, extra: int) -> Image:
    """A two-row summary of colours, padded with 9.

    The first row lists the colours of ``img`` not in ``extra``; the second
    lists the colours in the ``extra`` bit mask.
    """
    mask = img.col_mask()
    w = bin(mask).count("1")
    extras = [c for c in range(NUM_COLS) if extra >> c & 1]
    if len(extras) > w:
        raise ValueError("more extra colours than colours in the image")
    ret = full(Point(0, 0), Point(w, 2), 9)
    own = [c for c in range(NUM_COLS) if mask >> c & 1 and not extra >> c & 1]
    for j, c in enumerate(own):
        ret[0, j] = c
    for j, c in enumerate(extras):
        ret[1, j] = c
    return ret


def _aspect(img: Image) -> float:
    if img.w == 0 and img.h == 0:
        return math.nan
    if img.w == 0 or img.h == 0:
        return math.inf
    return max(img.w / img.h, img.h / img.w)


class OrientationPicker:
    """Chooses a rigid transform that brings inputs into a common orientation.

    ``feature_dim`` selects the criterion: 0 none, 1 aspect ratio, 2..11 the
    spread of one colour, 12 cardinal and 13 diagonal placement of two
    colours.
    """

    def __init__(self, ins: Sequence[Image]) -> None:
        self.feature_dim = 0
        best_score = 1.5

        score = 1e3
        for img in ins:
            ratio = _aspect(img)
            if not math.isnan(ratio):
                score = min(score, ratio)
        if score > best_score:
            self.feature_dim = 1
            best_score = score

        for c in range(NUM_COLS):
            score = 1e3
            for img in ins:
                p, q = self.inertia(img, c)
                s = max(p / (q + 1.0), q / (p + 1.0))
                score = min(score, math.sqrt(s))
            if score > best_score:
                self.feature_dim = 2 + c
                best_score = score

        scard = sdiag = 1e3
        for img in ins:
            x, y, cnt = self.color_means(img)
            sx = sy = sxy = syx = 1e3
            pair = self._first_pair(cnt)
            if pair is None:
                scard = sdiag = -1.0
            else:
                a, b = pair
                dx = x[a] - x[b]
                dy = y[a] - y[b]
                sx = min(sx, abs(dx) / (abs(dy) + 1e-1))
                sy = min(sy, abs(dy) / (abs(dx) + 1e-1))
                sxy = min(sxy, abs(dx + dy) / (abs(dx - dy) + 1e-1))
                syx = min(syx, abs(dx - dy) / (abs(dx + dy) + 1e-1))
            scard = min(scard, max(sx, sy))
            sdiag = min(sdiag, max(sxy, syx))
        scard /= 5.0
        sdiag /= 5.0
        if scard > best_score:
            best_score = scard
            self.feature_dim = 12
        if sdiag > best_score:
            best_score = sdiag
            self.feature_dim = 13

    @staticmethod
    def _first_pair(cnt: Sequence[float]) -> tuple[int, int] | None:
        for a in range(1, NUM_COLS):
            for b in range(1, a):
                if cnt[a] and cnt[b]:
                    return a, b
        return None

    def inertia(self, img: Image, c: int) -> tuple[float, float]:
        """Scaled spread of colour ``c`` along x and y; zeros below 4 cells."""
        x = y = xx = yy = 0.0
        cnt = 0
        for i, row in enumerate(img.rows()):
            for j, v in enumerate(row):
                if v == c:
                    x += j
                    xx += j * j
                    y += i
                    yy += i * i
                    cnt += 1
        if cnt < 4:
            return 0.0, 0.0
        return xx * cnt - x * x, yy * cnt - y * y

    def color_means(self, img: Image) -> tuple[list[float], list[float], list[float]]:
        """Mean column, mean row and cell count of each colour."""
        x = [0.0] * NUM_COLS
        y = [0.0] * NUM_COLS
        cnt = [0.0] * NUM_COLS
        for i, row in enumerate(img.rows()):
            for j, c in enumerate(row):
                x[c] += j
                y[c] += i
                cnt[c] += 1
        for c in range(NUM_COLS):
            if cnt[c]:
                x[c] /= cnt[c]
                y[c] /= cnt[c]
        return x, y, cnt

    def get_rigid(self, img: Image) -> int:
        """The rigid-transform id to apply to ``img``."""
        fd = self.feature_dim
        if fd == 0:
            return 0
        if fd == 1:
            return 6 if img.h > img.w else 0
        if 2 <= fd < 12:
            p, q = self.inertia(img, fd - 2)
            return 6 if p > q else 0
        if fd in (12, 13):
            x, y, cnt = self.color_means(img)
            pair = self._first_pair(cnt)
            if pair is None:
                return 0
            a, b = pair
            dx = x[a] - x[b]
            dy = y[a] - y[b]
            if fd == 12:
                if abs(dx) > abs(dy):
                    return 4 if dx < 0 else 0
                return 7 if dy < 0 else 6
            if abs(dx + dy) > abs(dx - dy):
                return 7 if dx + dy < 0 else 0
            return 4 if dx - dy < 0 else 5
        raise ValueError(f"unknown orientation feature {fd}")