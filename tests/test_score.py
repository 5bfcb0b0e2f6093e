import pytest

from arcgrid.image import Image, from_rows, hash_image
from arcgrid.score import (
    Candidate,
    format_verdict,
    score_answers,
    score_cands,
    select_answers,
)


def _img(rows, x=0, y=0):
    img = from_rows(rows)
    img.x, img.y = x, y
    return img


def test_candidate_ordering_puts_higher_score_first():
    low = Candidate([_img([[1]])], [0], 0.25)
    high = Candidate([_img([[2]])], [1], 0.75)
    assert high < low
    assert not low < high
    assert sorted([low, high]) == [high, low]


def test_candidate_defaults():
    cand = Candidate([_img([[1]])], [3], cnt_pieces=2, sum_depth=4, max_depth=3)
    assert cand.score == -1.0
    assert cand.cnt_pieces == 2
    assert cand.answer == _img([[1]])


def test_candidate_without_images_has_no_answer():
    with pytest.raises(ValueError):
        Candidate([]).answer


def test_score_cands_matches_last_image_exactly():
    target = _img([[1, 2], [3, 4]])
    cands = [
        Candidate([target.copy(), _img([[0]])], [], 1.0),
        Candidate([_img([[0]]), target.copy()], [], 0.5),
    ]
    assert score_cands(cands, _img([[0]]), target) is True
    assert score_cands(cands[:1], _img([[0]]), target) is False


def test_score_cands_respects_position():
    target = _img([[5]])
    moved = _img([[5]], x=1)
    assert score_cands([Candidate([moved])], target, target) is False


def test_score_answers_ignores_position():
    target = _img([[1, 1], [0, 2]])
    moved = _img([[1, 1], [0, 2]], x=3, y=4)
    assert score_answers([moved], target, target) is True
    assert score_answers([_img([[1, 1, 0, 2]])], target, target) is False


def test_score_answers_empty_is_false():
    target = _img([[1]])
    assert score_answers([], target, target) is False


def test_score_answers_rejects_too_many():
    target = _img([[1]])
    with pytest.raises(ValueError):
        score_answers([target] * 4, target, target)


def test_select_answers_deduplicates_and_orders():
    a = _img([[1]])
    b = _img([[2]])
    c = _img([[3]])
    d = _img([[4]])
    cands = [
        Candidate([a], [0], 0.1),
        Candidate([b], [1], 0.9),
        Candidate([b.copy()], [2], 0.8),
        Candidate([c], [3], 0.5),
        Candidate([d], [4], 0.3),
    ]
    chosen = select_answers(cands)
    assert [cand.pis for cand in chosen] == [[1], [3], [4]]
    hashes = {hash_image(cand.answer) for cand in chosen}
    assert len(hashes) == len(chosen)


def test_select_answers_count_limits_result():
    cands = [Candidate([_img([[k]])], [k], float(k)) for k in range(1, 6)]
    chosen = select_answers(cands, 2)
    assert [cand.score for cand in chosen] == [5.0, 4.0]
    assert select_answers(cands, 0) == []
    with pytest.raises(ValueError):
        select_answers(cands, -1)


def test_select_answers_keeps_fewer_when_not_enough():
    cands = [Candidate([_img([[7]])], [0], 0.2), Candidate([_img([[7]])], [1], 0.4)]
    chosen = select_answers(cands)
    assert len(chosen) == 1
    assert chosen[0].pis == [1]


@pytest.mark.parametrize(
    "verdict, text",
    [
        (3, "\033[1;32mCorrect\033[0m"),
        (2, "\033[1;33mCandidate\033[0m"),
        (1, "\033[1;34mDimensions\033[0m"),
        (0, "\033[1;31mNothing\033[0m"),
    ],
)
def test_format_verdict(verdict, text):
    line = format_verdict(5, "abcd1234", verdict)
    assert line == "Task # 5 (abcd1234): " + text


def test_format_verdict_rejects_unknown():
    with pytest.raises(ValueError):
        format_verdict(0, "abcd1234", 4)