# utils/bresenham.py
import numpy as np
from typing import Iterator, Optional, Tuple


def line_pixels(x1: int, y1: int, x2: int, y2: int) -> Iterator[Tuple[int, int]]:
    '''
    Yield the (x, y) pixels covered by the segment (x1,y1)-(x2,y2), both ends included.

    Traversal always starts from the lower-x endpoint (lower-y for vertical
    lines), so swapping the endpoints yields the same sequence. Nothing is
    clipped; callers own the bounds.
    '''
    if x1 > x2:
        x1, y1, x2, y2 = x2, y2, x1, y1

    dx, dy = x2 - x1, abs(y2 - y1)
    sy = 1 if y1 < y2 else -1

    if x1 == x2 and y1 == y2:
        yield x1, y1

    elif y1 == y2:
        for x in range(x1, x2 + 1):
            yield x, y1

    elif x1 == x2:
        if y1 > y2:
            y1, y2 = y2, y1
        for y in range(y1, y2 + 1):
            yield x1, y

    elif dx == dy:
        for k in range(dx + 1):
            yield x1 + k, y1 + sy * k

    elif dx > dy:
        # x drives
        e, slope, dy2 = dx, 2 * dx, 2 * dy
        for _ in range(dx):
            yield x1, y1
            x1 += 1
            e -= dy2
            if e < 0:
                y1 += sy
                e += slope
        yield x2, y2

    else:
        # y drives
        e, slope, dx2 = dy, 2 * dy, 2 * dx
        for _ in range(dy):
            yield x1, y1
            y1 += sy
            e -= dx2
            if e < 0:
                x1 += 1
                e += slope
        yield x2, y2


def path_arrays(x1, y1, x2, y2, shape_hw: Optional[Tuple[int, int]] = None):
    '''
    Materialize a segment as (ys, xs) index arrays (row, col).
    With shape_hw, pixels outside the image are dropped.
    '''
    pts = np.array(list(line_pixels(x1, y1, x2, y2)), dtype=np.intp).reshape(-1, 2)
    xs, ys = pts[:, 0], pts[:, 1]
    if shape_hw is not None:
        h, w = shape_hw
        keep = (xs >= 0) & (xs < w) & (ys >= 0) & (ys < h)
        if not keep.all():
            xs, ys = xs[keep], ys[keep]
    return ys, xs  # row, col
