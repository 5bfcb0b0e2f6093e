"""Grid transformations: borders, compression, connection, smearing and more."""

from __future__ import annotations

from collections import deque
from typing import Sequence

from .image import Image, Limits, Point, bad_image, empty, full

_DEFAULT_LIMITS = Limits()

_R, _L, _D, _U = (1, 0), (-1, 0), (0, 1), (0, -1)
_X, _Y, _Z, _W = (1, 1), (-1, -1), (1, -1), (-1, 1)
_SMEAR_DIRECTIONS: tuple[tuple[tuple[int, int], ...], ...] = (
    (_R,), (_L,), (_D,), (_U,),
    (_R, _L), (_D, _U),
    (_R, _L, _D, _U),
    (_X,), (_Y,), (_Z,), (_W,),
    (_X, _Y), (_Z, _W),
    (_X, _Y, _Z, _W),
    (_R, _L, _D, _U, _X, _Y, _Z, _W),
)

_NEIGHBOURS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def _too_big(size: Point, limits: Limits) -> bool:
    return max(size.x, size.y) > limits.max_side or size.x * size.y > limits.max_area


def erase_col(img: Image, col: int) -> Image:
    """A copy of ``img`` with every cell of colour ``col`` set to 0."""
    ret = img.copy()
    ret.mask = [0 if c == col else c for c in ret.mask]
    return ret


def make_border(img: Image, bcol: int = 1) -> Image:
    """Mark in ``bcol`` the empty cells touching (8-way) a coloured cell."""
    ret = empty(img.p, img.sz)
    for i in range(img.h):
        for j in range(img.w):
            if img[i, j]:
                continue
            if any(
                img.safe(ni, nj)
                for ni in (i - 1, i, i + 1)
                for nj in (j - 1, j, j + 1)
            ):
                ret[i, j] = bcol
    return ret


def _framed(img: Image, pad: Point, bcol: int, limits: Limits) -> Image:
    size = img.sz + pad + pad
    if _too_big(size, limits):
        return bad_image()
    ret = full(img.p - pad, size, bcol)
    for i, row in enumerate(img.rows()):
        for j, c in enumerate(row):
            ret[i + pad.y, j + pad.x] = c
    return ret


def make_border2(img: Image, usemaj: bool = True, limits: Limits = _DEFAULT_LIMITS) -> Image:
    """Surround ``img`` by a one-cell frame of its majority colour (or 1)."""
    bcol = img.majority_col() if usemaj else 1
    return _framed(img, Point(1, 1), bcol, limits)


def make_border_from(img: Image, bord: Image, limits: Limits = _DEFAULT_LIMITS) -> Image:
    """Surround ``img`` by a frame as thick as ``bord`` is large, in its majority colour."""
    return _framed(img, bord.sz, bord.majority_col(), limits)


def _select(img: Image, rows: list[int], cols: list[int]) -> Image:
    ret = empty(Point(0, 0), Point(len(cols), len(rows)))
    for i, r in enumerate(rows):
        for j, c in enumerate(cols):
            ret[i, j] = img[r, c]
    return ret


def compress2(img: Image) -> Image:
    """Delete all-black rows and columns."""
    rows = [i for i, row in enumerate(img.rows()) if any(row)]
    cols = [j for j in range(img.w) if any(img[i, j] for i in range(img.h))]
    return _select(img, rows, cols)


def compress3(img: Image) -> Image:
    """Collapse runs of identical consecutive rows and columns."""
    if img.w * img.h <= 0:
        return bad_image()
    grid = img.rows()
    rows = [0] + [i for i in range(1, img.h) if grid[i] != grid[i - 1]]
    cols = [0] + [
        j for j in range(1, img.w) if any(row[j] != row[j - 1] for row in grid)
    ]
    return _select(img, rows, cols)


def connect(img: Image, direction: int) -> Image:
    """Fill the gaps between equal colours on a line.

    ``direction`` is 0 for horizontal, 1 for vertical, 2 for both.
    """
    if direction not in (0, 1, 2):
        raise ValueError(f"connect direction must be 0, 1 or 2, not {direction}")
    ret = empty(img.p, img.sz)

    if direction in (0, 2):
        for i in range(img.h):
            last, lastc = -1, -1
            for j in range(img.w):
                c = img[i, j]
                if c:
                    if c == lastc:
                        for k in range(last + 1, j):
                            ret[i, k] = lastc
                    lastc, last = c, j

    if direction in (1, 2):
        for j in range(img.w):
            last, lastc = -1, -1
            for i in range(img.h):
                c = img[i, j]
                if c:
                    if c == lastc:
                        for k in range(last + 1, i):
                            ret[k, j] = lastc
                    lastc, last = c, i

    return ret


def spread_cols(img: Image, skipmaj: bool = False) -> Image:
    """Flood every empty cell with the colour of the nearest coloured cell.

    With ``skipmaj`` the majority colour does not spread.
    """
    ret = img.copy()
    skipcol = img.majority_col() if skipmaj else -1
    done = [[bool(c) for c in row] for row in img.rows()]
    queue: deque[tuple[int, int, int]] = deque(
        (i, j, c)
        for i, row in enumerate(img.rows())
        for j, c in enumerate(row)
        if c and c != skipcol
    )
    while queue:
        i, j, c = queue.popleft()
        for di, dj in _NEIGHBOURS:
            ni, nj = i + di, j + dj
            if 0 <= ni < img.h and 0 <= nj < img.w and not done[ni][nj]:
                ret[ni, nj] = c
                done[ni][nj] = True
                queue.append((ni, nj, c))
    return ret


def split_columns(img: Image) -> list[Image]:
    """Each column as a 1-wide image placed at (column, 0)."""
    if img.w * img.h <= 0:
        return []
    return [
        Image(j, 0, 1, img.h, [img[i, j] for i in range(img.h)])
        for j in range(img.w)
    ]


def split_rows(img: Image) -> list[Image]:
    """Each row as a 1-high image placed at (0, row)."""
    if img.w * img.h <= 0:
        return []
    return [Image(0, i, img.w, 1, row) for i, row in enumerate(img.rows())]


def smear(img: Image, direction: int, limits: Limits = _DEFAULT_LIMITS) -> Image:
    """Drag colours along the directions selected by ``direction`` (0..14)."""
    if not 0 <= direction < len(_SMEAR_DIRECTIONS):
        raise ValueError(f"smear direction must be 0..14, not {direction}")
    ret = img.copy()

    for dx, dy in _SMEAR_DIRECTIONS[direction]:
        for i in range(ret.h):
            step = 1 if i in (0, ret.h - 1) else max(ret.w - 1, 1)
            for j in range(0, ret.w, step):
                if 0 <= i - dy < img.h and 0 <= j - dx < img.w:
                    continue
                steps = limits.max_side
                if dx == -1:
                    steps = min(steps, j + 1)
                if dx == 1:
                    steps = min(steps, img.w - j)
                if dy == -1:
                    steps = min(steps, i + 1)
                if dy == 1:
                    steps = min(steps, img.h - i)
                c = 0
                for k in range(steps):
                    y, x = i + k * dy, j + k * dx
                    if img[y, x]:
                        c = img[y, x]
                    if c:
                        ret[y, x] = c
    return ret


def compose_growing(imgs: Sequence[Image], limits: Limits = _DEFAULT_LIMITS) -> Image:
    """Overlay all images, the ones with fewest coloured cells on top."""
    if not imgs:
        return bad_image()
    if len(imgs) == 1:
        return imgs[0].copy()

    minx = min(img.x for img in imgs)
    miny = min(img.y for img in imgs)
    maxx = max(img.x + img.w for img in imgs)
    maxy = max(img.y + img.h for img in imgs)
    size = Point(maxx - minx, maxy - miny)
    if _too_big(size, limits) or size.x <= 0 or size.y <= 0:
        return bad_image()

    order = sorted(range(len(imgs)), key=lambda k: (imgs[k].count(), k), reverse=True)
    ret = empty(Point(minx, miny), size)
    for k in order:
        img = imgs[k]
        dx, dy = img.x - ret.x, img.y - ret.y
        for i, row in enumerate(img.rows()):
            for j, c in enumerate(row):
                if c:
                    ret[i + dy, j + dx] = c
    return ret


def pick_unique(imgs: Sequence[Image], id: int = 0) -> Image:
    """The single image holding a colour that no other image holds."""
    if id != 0:
        raise ValueError(f"pick_unique supports only id 0, not {id}")
    if not imgs:
        return bad_image()

    masks = [img.col_mask() for img in imgs]
    counts = [sum(mask >> c & 1 for mask in masks) for c in range(10)]
    hits = [
        index
        for index, mask in enumerate(masks)
        for c in range(10)
        if mask >> c & 1 and counts[c] == 1
    ]
    if len(hits) != 1:
        return bad_image()
    return imgs[hits[0]].copy()