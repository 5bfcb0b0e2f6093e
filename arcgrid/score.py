"""Candidate answers: ranking, picking the final answers and scoring them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .image import Image, hash_image

MAX_ANSWERS = 3

_GREEN = "\033[1;32m"
_BLUE = "\033[1;34m"
_YELLOW = "\033[1;33m"
_RED = "\033[1;31m"
_RESET = "\033[0m"

_VERDICTS = {
    3: (_GREEN, "Correct"),
    2: (_YELLOW, "Candidate"),
    1: (_BLUE, "Dimensions"),
    0: (_RED, "Nothing"),
}


@dataclass
class Candidate:
    """A proposed answer: the images for every pair, with the last for the test."""

    imgs: list[Image]
    pis: list[int] = field(default_factory=list)
    score: float = -1.0
    cnt_pieces: int = -1
    sum_depth: int = -1
    max_depth: int = -1

    def __lt__(self, other: Candidate) -> bool:
        # Better candidates sort first.
        return self.score > other.score

    @property
    def answer(self) -> Image:
        if not self.imgs:
            raise ValueError("candidate holds no images")
        return self.imgs[-1]


def score_cands(cands: Iterable[Candidate], test_in: Image, test_out: Image) -> bool:
    """Whether any candidate's test image equals ``test_out`` exactly."""
    return any(cand.answer == test_out for cand in cands)


def score_answers(answers: Sequence[Image], test_in: Image, test_out: Image) -> bool:
    """Whether one of at most three answers matches ``test_out`` in size and cells."""
    if len(answers) > MAX_ANSWERS:
        raise ValueError(f"at most {MAX_ANSWERS} answers are allowed")
    return any(
        answer.sz == test_out.sz and answer.mask == test_out.mask
        for answer in answers
    )


def select_answers(cands: Iterable[Candidate], count: int = MAX_ANSWERS) -> list[Candidate]:
    """The best-scoring candidates whose test images are pairwise distinct."""
    if count < 0:
        raise ValueError("answer count must not be negative")
    chosen: list[Candidate] = []
    if count == 0:
        return chosen
    seen: set[int] = set()
    for cand in sorted(cands):
        h = hash_image(cand.answer)
        if h in seen:
            continue
        seen.add(h)
        chosen.append(cand)
        if len(chosen) == count:
            break
    return chosen


def format_verdict(si: int, sid: str, verdict: int) -> str:
    """A coloured one-line verdict for task number ``si``."""
    try:
        colour, word = _VERDICTS[verdict]
    except KeyError:
        raise ValueError(f"unknown verdict {verdict}") from None
    return "Task #%2d (%s): %s%s%s" % (si, sid, colour, word, _RESET)