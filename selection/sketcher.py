#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Random-line sketching: draw a random segment in a palette colour onto the
trial buffer, keep it only if it strictly lowers the local error against the
target, otherwise restore the trial pixels from best. Repeat.
'''
import numpy as np
from typing import Callable, Optional, Tuple

from utils.palette import build_palette
from selection.canvas import BACKGROUND, CanvasState

RUNNING = 'running'
TERMINATED = 'terminated'

# hooks are polled on every POLL_EVERY-th iteration, not every one
POLL_EVERY = 50

DEFAULT_PARAMS = dict(
    iter_limit=5_000_000,   # < 0 runs until stopped from outside
    line_len=40,
    dedupe=False,
    background=BACKGROUND,
)

class RunStats:
    def __init__(self):
        self.iters = 0
        self.accepted = 0
        self.total_iters = 0
        self.total_accepted = 0

    def record(self, accepted: bool):
        self.iters += 1
        self.total_iters += 1
        if accepted:
            self.accepted += 1
            self.total_accepted += 1

    def reset_interval(self):
        self.iters = 0
        self.accepted = 0

class LineSketcher:
    def __init__(self, target: np.ndarray, rng: Optional[np.random.Generator] = None,
                 params=None, palette: Optional[np.ndarray] = None):
        P = dict(DEFAULT_PARAMS)
        if params:
            P.update(params)
        self.P = P

        self.line_len = int(P['line_len'])
        if self.line_len <= 0:
            raise ValueError(f'line_len must be positive, got {self.line_len}')

        self.rng = rng if rng is not None else np.random.default_rng()
        self.canvas = CanvasState(target, background=P['background'])
        if palette is None:
            palette = build_palette(self.canvas.target, bool(P['dedupe']))
        if len(palette) == 0:
            raise ValueError('Palette is empty')
        self.palette = palette

        self.stats = RunStats()
        self.state = RUNNING
        self.iteration = 0

    # ---------------------------
    # candidates
    # ---------------------------

    def random_segment(self) -> Tuple[int, int, int, int]:
        '''First endpoint anywhere in the image, second within [-L/2, L/2) of it. Not clamped.'''
        half = self.line_len // 2
        x1 = int(self.rng.integers(self.canvas.W))
        y1 = int(self.rng.integers(self.canvas.H))
        x2 = x1 - half + int(self.rng.integers(self.line_len))
        y2 = y1 - half + int(self.rng.integers(self.line_len))
        return x1, y1, x2, y2

    def random_color(self) -> np.ndarray:
        return self.palette[int(self.rng.integers(len(self.palette)))]

    # ---------------------------
    # accept / reject
    # ---------------------------

    def try_segment(self, segment, color) -> bool:
        canvas = self.canvas
        path = canvas.path(*segment)
        canvas.draw_segment_into_trial(path, color)
        trial_diff, best_diff = canvas.score(path)

        accepted = trial_diff < best_diff
        if accepted:
            canvas.accept(path)   # converges
        else:
            canvas.reject(path)   # diverges
        self.stats.record(accepted)
        return accepted

    def step(self) -> bool:
        segment = self.random_segment()
        color = self.random_color()
        return self.try_segment(segment, color)

    def run(self, on_poll: Optional[Callable] = None, on_done: Optional[Callable] = None) -> np.ndarray:
        '''
        Iterate until iter_limit is exhausted.
          on_poll(i, sketcher) - called after iteration i when i % POLL_EVERY == 0
          on_done(best)        - called once at the end (final snapshot)
        '''
        limit = int(self.P['iter_limit'])
        i = 0
        while limit < 0 or i < limit:
            self.step()
            if on_poll is not None and i % POLL_EVERY == 0:
                on_poll(i, self)
            i += 1
            self.iteration = i

        self.state = TERMINATED
        if on_done is not None:
            on_done(self.canvas.best)
        return self.canvas.best
