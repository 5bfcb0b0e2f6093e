import pytest

from arcgrid.image import (
    Image,
    Limits,
    Point,
    Spec,
    all_equal,
    bad_image,
    check_all,
    dummy_image,
    empty,
    from_rows,
    full,
    hash_image,
)


def test_point_arithmetic():
    a, b = Point(3, 4), Point(1, -2)
    assert a + b == Point(4, 2)
    assert a - b == Point(2, 6)
    assert a * 3 == Point(9, 12)
    assert (a + b) - b == a


def test_point_dot_and_cross():
    a, b = Point(3, 4), Point(1, -2)
    assert a.dot(b) == 3 * 1 + 4 * -2
    assert a.cross(b) == 3 * -2 - 4 * 1
    assert a.cross(a) == 0


def test_point_divide():
    assert (Point(2, 5) * 4).divide(4) == Point(2, 5)
    with pytest.raises(ValueError):
        Point(3, 4).divide(2)


def test_limits_defaults():
    lim = Limits()
    assert lim.max_side == 100
    assert lim.max_area == 40 * 40
    assert lim.max_pixels == 40 * 40 * 5


def test_image_indexing_and_rows_round_trip():
    rows = [[1, 2, 3], [4, 5, 6]]
    img = from_rows(rows)
    assert img.sz == Point(3, 2)
    assert img.p == Point(0, 0)
    assert img[1, 0] == 4
    assert img.rows() == rows
    img[0, 2] = 9
    assert img.rows()[0] == [1, 2, 9]


def test_image_out_of_bounds():
    img = from_rows([[1, 2], [3, 4]])
    with pytest.raises(IndexError):
        img[2, 0]
    with pytest.raises(IndexError):
        img[0, -1] = 1
    assert img.safe(-1, 0) == 0
    assert img.safe(0, 2) == 0
    assert img.safe(1, 1) == 4


def test_from_rows_ragged():
    with pytest.raises(ValueError):
        from_rows([[1, 2], [3]])


def test_mask_length_checked():
    with pytest.raises(ValueError):
        Image(0, 0, 2, 2, [1, 2, 3])


def test_copy_is_independent():
    img = from_rows([[1, 0]])
    dup = img.copy()
    dup[0, 1] = 7
    assert img[0, 1] == 0
    assert dup != img


def test_count_and_col_mask():
    img = from_rows([[0, 3, 3], [0, 1, 0]])
    assert img.count() == 3
    assert img.col_mask() == (1 << 0) | (1 << 1) | (1 << 3)


def test_majority_col():
    img = from_rows([[0, 0, 0, 0], [2, 2, 5, 0]])
    assert img.majority_col() == 2
    assert img.majority_col(include0=True) == 0
    assert empty(Point(0, 0), Point(2, 2)).majority_col() == 0


def test_equality_includes_position():
    a = full(Point(0, 0), Point(2, 2), 3)
    b = full(Point(1, 0), Point(2, 2), 3)
    assert a != b
    assert a == full(Point(0, 0), Point(2, 2), 3)


def test_empty_and_full():
    e = empty(Point(2, 3), Point(4, 1))
    assert (e.x, e.y, e.w, e.h) == (2, 3, 4, 1)
    assert e.count() == 0
    f = full(Point(0, 0), Point(3, 2))
    assert f.mask == [1] * 6


def test_bad_and_dummy():
    assert bad_image().sz == Point(0, 0)
    assert bad_image().mask == []
    d = dummy_image()
    assert d.sz == Point(1, 1)
    assert d.mask == [0]


def test_hash_image():
    a = from_rows([[1, 2], [3, 4]])
    assert hash_image(a) == hash_image(a.copy())
    moved = a.copy()
    moved.x = 1
    assert hash_image(moved) != hash_image(a)
    negative = a.copy()
    negative.x = -5
    assert 0 <= hash_image(negative) < 2**64


def test_spec_check():
    img = from_rows([[1, 2]])
    spec = Spec(0, 0, 2, 1, [1 << 1, (1 << 2) | (1 << 3)])
    assert spec.check(img)
    spec[0, 1] = 1 << 3
    assert not spec.check(img)
    spec[0, 1] = 1 << 2
    moved = img.copy()
    moved.y = 4
    assert not spec.check(moved)
    spec.anypos = True
    assert spec.check(moved)
    spec.bad = True
    assert not spec.check(img)


def test_check_all_and_all_equal():
    assert check_all([2, 4, 6], lambda v: v % 2 == 0)
    assert not check_all([2, 3], lambda v: v % 2 == 0)
    assert all_equal(["ab", "cd"], len)
    assert not all_equal(["ab", "c"], len)
    with pytest.raises(ValueError):
        all_equal([], len)