"""Grid images, points and pixel specifications."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence, TypeVar

T = TypeVar("T")

_U64 = (1 << 64) - 1
ALL_COLS = (1 << 10) - 1


@dataclass(frozen=True)
class Point:
    """An integer 2-D vector: a position or a size."""

    x: int
    y: int

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: int) -> Point:
        return Point(self.x * factor, self.y * factor)

    def divide(self, factor: int) -> Point:
        """Exact division; both coordinates must be multiples of ``factor``."""
        if self.x % factor or self.y % factor:
            raise ValueError(f"{self} is not divisible by {factor}")
        return Point(self.x // factor, self.y // factor)

    def dot(self, other: Point) -> int:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Point) -> int:
        return self.x * other.y - self.y * other.x


@dataclass(frozen=True)
class Limits:
    """Size limits that operations producing new images must respect."""

    max_side: int = 100
    max_area: int = 40 * 40
    max_pixels: int = 40 * 40 * 5


@dataclass
class Image:
    """A colour grid placed at position (x, y) with size (w, h)."""

    x: int
    y: int
    w: int
    h: int
    mask: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.w < 0 or self.h < 0:
            raise ValueError("image size must not be negative")
        if len(self.mask) != self.w * self.h:
            raise ValueError(
                f"mask holds {len(self.mask)} cells, expected {self.w * self.h}"
            )

    @property
    def p(self) -> Point:
        return Point(self.x, self.y)

    @property
    def sz(self) -> Point:
        return Point(self.w, self.h)

    def _index(self, key: tuple[int, int]) -> int:
        i, j = key
        if not (0 <= i < self.h and 0 <= j < self.w):
            raise IndexError(f"cell ({i}, {j}) outside {self.w}x{self.h} image")
        return i * self.w + j

    def __getitem__(self, key: tuple[int, int]) -> int:
        return self.mask[self._index(key)]

    def __setitem__(self, key: tuple[int, int], value: int) -> None:
        self.mask[self._index(key)] = value

    def safe(self, i: int, j: int) -> int:
        """The colour at row i, column j, or 0 outside the image."""
        if i < 0 or j < 0 or i >= self.h or j >= self.w:
            return 0
        return self.mask[i * self.w + j]

    def rows(self) -> list[list[int]]:
        return [self.mask[i * self.w:(i + 1) * self.w] for i in range(self.h)]

    def copy(self) -> Image:
        return Image(self.x, self.y, self.w, self.h, list(self.mask))

    def count(self) -> int:
        """Number of non-zero cells."""
        return sum(1 for c in self.mask if c)

    def col_mask(self) -> int:
        """Bit mask of the colours present."""
        result = 0
        for c in self.mask:
            result |= 1 << c
        return result

    def majority_col(self, include0: bool = False) -> int:
        """The most frequent colour; 0 is ignored unless ``include0``."""
        counts = Counter(c for c in self.mask if include0 or c)
        best, best_cnt = 0, 0
        for colour in sorted(counts):
            if counts[colour] > best_cnt:
                best, best_cnt = colour, counts[colour]
        return best

    def __lt__(self, other: Image) -> bool:
        if self.sz != other.sz:
            return (self.w, self.h) < (other.w, other.h)
        return self.mask < other.mask


@dataclass
class Spec:
    """A per-cell set of allowed colours, as bit masks."""

    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0
    mask: list[int] = field(default_factory=list)
    bad: bool = False
    anypos: bool = False

    @property
    def p(self) -> Point:
        return Point(self.x, self.y)

    @property
    def sz(self) -> Point:
        return Point(self.w, self.h)

    def __getitem__(self, key: tuple[int, int]) -> int:
        i, j = key
        if not (0 <= i < self.h and 0 <= j < self.w):
            raise IndexError(f"cell ({i}, {j}) outside {self.w}x{self.h} spec")
        return self.mask[i * self.w + j]

    def __setitem__(self, key: tuple[int, int], value: int) -> None:
        i, j = key
        if not (0 <= i < self.h and 0 <= j < self.w):
            raise IndexError(f"cell ({i}, {j}) outside {self.w}x{self.h} spec")
        self.mask[i * self.w + j] = value

    def check(self, img: Image) -> bool:
        """Whether ``img`` fits this specification."""
        if self.bad:
            return False
        if img.sz != self.sz or (not self.anypos and img.p != self.p):
            return False
        return all(allowed >> c & 1 for allowed, c in zip(self.mask, img.mask))


def empty(pos: Point, size: Point) -> Image:
    return full(pos, size, 0)


def full(pos: Point, size: Point, filling: int = 1) -> Image:
    return Image(pos.x, pos.y, size.x, size.y, [filling] * (size.x * size.y))


def from_rows(rows: Sequence[Sequence[int]]) -> Image:
    """Build an image at the origin from a list of equally long rows."""
    h = len(rows)
    w = len(rows[0]) if h else 0
    if any(len(row) != w for row in rows):
        raise ValueError("rows differ in length")
    return Image(0, 0, w, h, [c for row in rows for c in row])


def bad_image() -> Image:
    return Image(0, 0, 0, 0, [])


def dummy_image() -> Image:
    return Image(0, 0, 1, 1, [0])


def hash_image(img: Image) -> int:
    """A 64-bit hash of position, size and contents."""
    base = 137
    r = 1543
    for v in (img.w, img.h, img.x, img.y, *img.mask):
        r = (r * base + v) & _U64
    return r


def check_all(items: Iterable[T], predicate: Callable[[T], object]) -> bool:
    result = True
    for item in items:
        result &= bool(predicate(item))
    return result


def all_equal(items: Sequence[T], key: Callable[[T], object]) -> bool:
    if not items:
        raise ValueError("all_equal needs at least one item")
    need = key(items[0])
    return all(key(item) == need for item in items)