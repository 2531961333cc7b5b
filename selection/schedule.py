# selection/schedule.py
import time
from typing import Callable, Optional

STATS_FIELDS = ['frame', 'iter', 'total_iters', 'ips', 'cps', 'pct']

class SnapshotCounters:
    '''Output numbering shared by all frames of one run.'''
    def __init__(self, frame: int = 1, incremental: int = 1):
        self.frame = int(frame)
        self.incremental = int(incremental)

    def next_frame_name(self) -> str:
        name = f'frame_{self.frame:03d}'
        self.frame += 1
        return name

    def next_incremental_name(self) -> str:
        name = f'incr_{self.incremental:03d}'
        self.incremental += 1
        return name

def format_stats(row) -> str:
    return (f"{row['iter']:8d} iters {row['ips']:10.2f} iter/s "
            f"{row['cps']:9.2f} converg/s {row['pct']:6.2f}% c/i")

class TimedReporter:
    """
    on_poll hook for LineSketcher.run(). Because the sketcher only polls every
    POLL_EVERY iterations, the intervals are approximate.

      save(best, name)  - incremental snapshot, when save_interval > 0 has elapsed
      report(row)       - statistics dict (see STATS_FIELDS), every stat_interval
    """
    def __init__(self, counters: SnapshotCounters, save: Callable, report: Optional[Callable] = None,
                 save_interval: float = -1.0, stat_interval: float = 1.0,
                 clock: Optional[Callable[[], float]] = None):
        self.counters = counters
        self.save = save
        self.report = report
        self.save_interval = float(save_interval)
        self.stat_interval = float(stat_interval)
        self.clock = clock if clock is not None else time.monotonic
        self.frame = counters.frame
        self.reset()

    def reset(self):
        '''Restart both timers; call at the start of each frame.'''
        now = self.clock()
        self.last_save = now
        self.last_stat = now
        self.frame = self.counters.frame

    def __call__(self, i: int, sketcher):
        now = self.clock()

        if self.save_interval > 0 and now - self.last_save >= self.save_interval:
            self.save(sketcher.canvas.best, self.counters.next_incremental_name())
            self.last_save = now

        dt = now - self.last_stat
        if dt >= self.stat_interval:
            stats = sketcher.stats
            ips = stats.iters / dt if dt > 0 else 0.0
            cps = stats.accepted / dt if dt > 0 else 0.0
            row = dict(
                frame=self.frame,
                iter=int(i),
                total_iters=stats.total_iters,
                ips=ips,
                cps=cps,
                pct=100.0 * cps / ips if ips > 0 else 0.0,
            )
            if self.report is not None:
                self.report(row)
            stats.reset_interval()
            self.last_stat = now
