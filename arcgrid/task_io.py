"""Reading task files and writing answer files."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable, Optional, Sequence, TextIO, Union

from .image import Image, Point, bad_image, dummy_image

PathLike = Union[str, Path]

DEFAULT_BASE_PATHS = (
    "/kaggle/working/abstraction-and-reasoning-challenge/",
    "../abstraction-and-reasoning-challenge/",
)

MAX_SIDE = 30
MAX_ANSWERS = 3

_ID_RE = re.compile(r".*/([a-z0-9]{8})\.json")
_TAGS = {"train", "test"}
_IO_TAGS = {"input", "output"}


class TaskFormatError(ValueError):
    """Raised when a task file does not have the expected layout."""


@dataclass
class Sample:
    """One task: training pairs, test pairs and the selected test pair."""

    id: str
    train: list[tuple[Image, Image]] = field(default_factory=list)
    test: list[tuple[Image, Image]] = field(default_factory=list)
    test_in: Image = field(default_factory=bad_image)
    test_out: Image = field(default_factory=bad_image)
    id_ind: int = 0

    def split(self) -> list[Sample]:
        """One sample per test pair, each with that pair selected."""
        return [
            replace(
                self,
                train=list(self.train),
                test=[(test_in, test_out)],
                test_in=test_in,
                test_out=test_out,
                id_ind=index,
            )
            for index, (test_in, test_out) in enumerate(self.test)
        ]


def _parse_image(data: object) -> Image:
    if not isinstance(data, list) or not data:
        raise TaskFormatError("an image must be a non-empty list of rows")
    rows: list[list[int]] = []
    for row in data:
        if not isinstance(row, list) or not row:
            raise TaskFormatError("an image row must be a non-empty list")
        for value in row:
            if not isinstance(value, int) or isinstance(value, bool):
                raise TaskFormatError(f"pixel {value!r} is not an integer")
        rows.append(list(row))
    h = len(rows)
    w = len(rows[0])
    if not 1 <= h <= MAX_SIDE:
        raise TaskFormatError(f"image height {h} out of range")
    if any(len(row) != w for row in rows):
        raise TaskFormatError("image rows differ in length")
    if not 1 <= w <= MAX_SIDE:
        raise TaskFormatError(f"image width {w} out of range")
    return Image(0, 0, w, h, [c for row in rows for c in row])


def load_sample(filename: PathLike) -> Sample:
    """Read one task file; its name must be an 8-character id plus '.json'."""
    match = _ID_RE.search(Path(filename).as_posix())
    if not match:
        raise TaskFormatError(f"cannot take a task id from {filename!s}")
    sample_id = match.group(1)

    try:
        with open(filename, encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise TaskFormatError(f"{filename!s}: {exc}") from exc

    if not isinstance(data, dict) or not data:
        raise TaskFormatError("a task must be a non-empty object")

    images: dict[tuple[str, str], list[Image]] = {
        (t, io): [] for t in _TAGS for io in _IO_TAGS
    }
    for train_test, entries in data.items():
        if not isinstance(entries, list) or not entries:
            raise TaskFormatError(f"{train_test!r} must be a non-empty list")
        for entry in entries:
            if not isinstance(entry, dict) or not entry:
                raise TaskFormatError("a pair must be a non-empty object")
            for input_output, grid in entry.items():
                if train_test not in _TAGS or input_output not in _IO_TAGS:
                    raise TaskFormatError(
                        f"unexpected tag {train_test} {input_output}"
                    )
                images[train_test, input_output].append(_parse_image(grid))

    train_in, train_out = images["train", "input"], images["train", "output"]
    if len(train_in) != len(train_out):
        raise TaskFormatError("training inputs and outputs differ in number")
    test_in, test_out = images["test", "input"], images["test", "output"]
    if len(test_in) == len(test_out):
        test = list(zip(test_in, test_out))
    elif test_out:
        raise TaskFormatError("test inputs and outputs differ in number")
    else:
        test = [(img, bad_image()) for img in test_in]

    return Sample(id=sample_id, train=list(zip(train_in, train_out)), test=test)


def read_all(
    path: PathLike,
    maxn: int = -1,
    base_paths: Sequence[PathLike] = DEFAULT_BASE_PATHS,
) -> list[Sample]:
    """Load every task under the first base path holding ``path``, split per test."""
    directory = next(
        (Path(base) / path for base in base_paths if (Path(base) / path).exists()),
        None,
    )
    if directory is None:
        raise FileNotFoundError(f"{path!s} not found under any base path")

    files = sorted(
        entry for entry in directory.iterdir() if entry.name.endswith(".json")
    )
    if maxn >= 0:
        files = files[:maxn]
    return [part for name in files for part in load_sample(name).split()]


def _check_answer(img: Image) -> None:
    if img.p != Point(0, 0):
        raise ValueError("an answer image must sit at the origin")
    if not (1 <= img.w <= MAX_SIDE and 1 <= img.h <= MAX_SIDE):
        raise ValueError(f"answer size {img.w}x{img.h} out of range")
    if any(not 0 <= c <= 9 for c in img.mask):
        raise ValueError("answer colours must be 0..9")


def _answer_cells(img: Image) -> str:
    _check_answer(img)
    return "|" + "".join("".join(map(str, row)) + "|" for row in img.rows())


def _prepare(imgs: Sequence[Image], scores: Sequence[float]) -> tuple[list[Image], list[float]]:
    if len(imgs) != len(scores):
        raise ValueError("images and scores differ in number")
    if not imgs:
        return [dummy_image()], [-1.0]
    if len(imgs) > MAX_ANSWERS:
        raise ValueError(f"at most {MAX_ANSWERS} answers are allowed")
    return list(imgs), list(scores)


class Writer:
    """A CSV submission file with one line per sample."""

    def __init__(self, filename: PathLike = "submission_part.csv") -> None:
        self.filename = filename
        self.seen: dict[str, int] = {}
        self._fh: Optional[TextIO] = open(filename, "w", encoding="utf-8")
        self._fh.write("output_id,output\n")

    def write(self, sample: Sample, imgs: Iterable[Image]) -> None:
        imgs = list(imgs) or [dummy_image()]
        if len(imgs) > MAX_ANSWERS:
            raise ValueError(f"at most {MAX_ANSWERS} answers are allowed")
        line = (
            f"{sample.id}_{sample.id_ind},"
            + " ".join(_answer_cells(img) for img in imgs)
            + "\n"
        )
        if self._fh is None:
            raise ValueError("writer is closed")
        self._fh.write(line)

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> Writer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def write_answers_with_scores(
    sample: Sample,
    filename: PathLike,
    imgs: Sequence[Image],
    scores: Sequence[float],
) -> None:
    """Write each answer as a pipe-delimited grid followed by its score."""
    imgs, scores = _prepare(imgs, scores)
    lines = [f"{sample.id}_{sample.id_ind}\n"]
    lines += [f"{_answer_cells(img)} {score:.20f}\n" for img, score in zip(imgs, scores)]
    with open(filename, "w", encoding="utf-8") as fh:
        fh.writelines(lines)


def write_json_answers_with_scores(
    sample: Sample,
    filename: PathLike,
    imgs: Sequence[Image],
    scores: Sequence[float],
) -> None:
    """Write the answers and their scores as a JSON document."""
    imgs, scores = _prepare(imgs, scores)
    for img in imgs:
        _check_answer(img)

    parts = ["{\n", f'    "{sample.id}": [\n', "        {"]
    img_sep = " "
    for number, (img, score) in enumerate(zip(imgs, scores), start=1):
        parts.append(f"{img_sep}\n")
        img_sep = ","
        parts.append(f'            "score_{number}": {score:.20f},\n')
        parts.append(f'            "attempt_{number}": [')
        row_sep = " "
        for row in img.rows():
            parts.append(f"{row_sep}\n")
            row_sep = ","
            parts.append("                [")
            dig_sep = " "
            for c in row:
                parts.append(f"{dig_sep}\n")
                dig_sep = ","
                parts.append(f"                    {c}")
            parts.append("\n                ]")
        parts.append("\n            ]")
    parts += ["\n        }\n", "    ]\n", "}\n"]

    with open(filename, "w", encoding="utf-8") as fh:
        fh.write("".join(parts))