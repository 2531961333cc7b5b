import random

from utils.bresenham import line_pixels, path_arrays


def test_single_point():
    assert list(line_pixels(3, 4, 3, 4)) == [(3, 4)]


def test_horizontal_runs_left_to_right():
    assert list(line_pixels(5, 2, 1, 2)) == [(1, 2), (2, 2), (3, 2), (4, 2), (5, 2)]


def test_vertical_runs_top_to_bottom():
    assert list(line_pixels(2, 5, 2, 1)) == [(2, 1), (2, 2), (2, 3), (2, 4), (2, 5)]


def test_diagonal_up():
    assert list(line_pixels(0, 3, 3, 0)) == [(0, 3), (1, 2), (2, 1), (3, 0)]


def test_shallow_line():
    assert list(line_pixels(0, 0, 5, 2)) == [(0, 0), (1, 0), (2, 1), (3, 1), (4, 2), (5, 2)]
    assert list(line_pixels(0, 2, 5, 0)) == [(0, 2), (1, 2), (2, 1), (3, 1), (4, 0), (5, 0)]


def test_steep_line():
    assert list(line_pixels(0, 0, 2, 5)) == [(0, 0), (0, 1), (1, 2), (1, 3), (2, 4), (2, 5)]


def test_random_segments_are_complete_and_connected():
    rnd = random.Random(0)
    for _ in range(500):
        x1, y1, x2, y2 = (rnd.randint(-12, 12) for _ in range(4))
        pts = list(line_pixels(x1, y1, x2, y2))

        assert (x1, y1) in pts and (x2, y2) in pts
        assert {pts[0], pts[-1]} == {(x1, y1), (x2, y2)}
        assert len(pts) == len(set(pts))
        assert len(pts) == max(abs(x2 - x1), abs(y2 - y1)) + 1
        for (ax, ay), (bx, by) in zip(pts, pts[1:]):
            assert max(abs(ax - bx), abs(ay - by)) == 1

        back = list(line_pixels(x2, y2, x1, y1))
        assert set(back) == set(pts)
        assert back == pts  # canonical order regardless of argument order


def test_path_arrays_drops_out_of_bounds():
    ys, xs = path_arrays(-2, 0, 2, 0, shape_hw=(3, 3))
    assert xs.tolist() == [0, 1, 2]
    assert ys.tolist() == [0, 0, 0]

    ys, xs = path_arrays(-5, -5, -1, -3, shape_hw=(3, 3))
    assert len(xs) == 0 and len(ys) == 0


def test_path_arrays_without_bounds_keeps_everything():
    ys, xs = path_arrays(-1, 0, 1, 0)
    assert xs.tolist() == [-1, 0, 1]
    assert ys.tolist() == [0, 0, 0]
