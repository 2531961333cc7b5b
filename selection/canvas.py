# selection/canvas.py
import numpy as np
from typing import Tuple

from utils.bresenham import path_arrays
from scoring.line_integral import line_difference

BACKGROUND = (0, 0, 0, 0xFFFF)  # opaque black

def commit(path, source: np.ndarray, dest: np.ndarray):
    '''Copy source pixels on path into dest; nothing else is touched.'''
    ys, xs = path
    dest[ys, xs] = source[ys, xs]

class CanvasState:
    """
    Target image plus two equally sized buffers:
      trial - where a candidate segment is drawn before the decision
      best  - the accepted approximation, only changed through accept()

    Outside the path being processed, trial and best are always identical.
    """
    def __init__(self, target: np.ndarray, background=BACKGROUND):
        if target.ndim != 3 or target.shape[2] != 4:
            raise ValueError(f"Expected (H, W, 4) RGBA target, got {target.shape}")
        self.target = np.array(target, dtype=np.uint16, copy=True)
        self.target.setflags(write=False)
        self.H, self.W = self.target.shape[:2]
        self.trial = np.empty((self.H, self.W, 4), np.uint16)
        self.best = np.empty((self.H, self.W, 4), np.uint16)
        self.initialize(background)

    def initialize(self, background=BACKGROUND):
        self.trial[...] = background
        self.best[...] = background

    def path(self, x1: int, y1: int, x2: int, y2: int):
        return path_arrays(x1, y1, x2, y2, shape_hw=(self.H, self.W))

    def draw_segment_into_trial(self, path, color):
        ys, xs = path
        self.trial[ys, xs] = color

    def score(self, path) -> Tuple[float, float]:
        '''(trial vs target, best vs target) along path.'''
        ys, xs = path
        return (line_difference(self.target, self.trial, ys, xs),
                line_difference(self.target, self.best, ys, xs))

    def accept(self, path):
        commit(path, self.trial, self.best)

    def reject(self, path):
        commit(path, self.best, self.trial)
