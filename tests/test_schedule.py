import numpy as np
import pytest

from selection.schedule import SnapshotCounters, TimedReporter, format_stats
from selection.sketcher import LineSketcher


class FakeClock:
    def __init__(self):
        self.t = 0.0

    def __call__(self):
        return self.t


def _sketcher():
    img = np.full((4, 4, 4), 0xFFFF, np.uint16)
    return LineSketcher(img, rng=np.random.default_rng(0))


def _reporter(clock, save_interval=2.0, stat_interval=1.0, counters=None):
    saves, reports = [], []
    counters = counters or SnapshotCounters()
    rep = TimedReporter(counters, lambda img, name: saves.append(name), reports.append,
                        save_interval=save_interval, stat_interval=stat_interval, clock=clock)
    return rep, saves, reports


def test_intervals_gate_saves_and_reports():
    clock = FakeClock()
    rep, saves, reports = _reporter(clock)
    sk = _sketcher()

    clock.t = 0.5
    rep(0, sk)
    assert saves == [] and reports == []

    clock.t = 1.0
    rep(50, sk)
    assert saves == [] and len(reports) == 1

    clock.t = 2.0
    rep(100, sk)
    assert saves == ['incr_001'] and len(reports) == 2

    clock.t = 4.5
    rep(150, sk)
    assert saves == ['incr_001', 'incr_002']


def test_disabled_save_interval():
    clock = FakeClock()
    rep, saves, _ = _reporter(clock, save_interval=-1)
    clock.t = 1000.0
    rep(0, _sketcher())
    assert saves == []


def test_rates_and_reset():
    clock = FakeClock()
    rep, _, reports = _reporter(clock)
    sk = _sketcher()
    sk.stats.iters, sk.stats.accepted = 100, 25

    clock.t = 2.0
    rep(100, sk)
    row = reports[0]
    assert row['iter'] == 100
    assert row['ips'] == pytest.approx(50.0)
    assert row['cps'] == pytest.approx(12.5)
    assert row['pct'] == pytest.approx(25.0)
    assert sk.stats.iters == 0 and sk.stats.accepted == 0


def test_zero_stat_interval_reports_every_poll():
    clock = FakeClock()
    rep, _, reports = _reporter(clock, stat_interval=0)
    sk = _sketcher()
    rep(0, sk)
    rep(50, sk)
    assert len(reports) == 2
    assert reports[0]['ips'] == 0.0


def test_format_stats():
    line = format_stats(dict(iter=150, ips=1000.0, cps=50.0, pct=5.0))
    assert line == '     150 iters    1000.00 iter/s     50.00 converg/s   5.00% c/i'


def test_counters_survive_frames():
    counters = SnapshotCounters(frame=7)
    assert counters.next_incremental_name() == 'incr_001'
    assert counters.next_frame_name() == 'frame_007'
    assert counters.next_incremental_name() == 'incr_002'
    assert counters.next_frame_name() == 'frame_008'


def test_reset_restarts_timers_and_tracks_frame():
    clock = FakeClock()
    counters = SnapshotCounters(frame=3)
    rep, saves, reports = _reporter(clock, counters=counters)
    counters.next_frame_name()
    clock.t = 10.0
    rep.reset()
    clock.t = 10.5
    rep(0, _sketcher())
    assert saves == [] and reports == []

    clock.t = 11.0
    rep(50, _sketcher())
    assert reports[0]['frame'] == 4
