#!/usr/bin/env python3
# -*- coding: utf-8 -*-
'''
Sketch numbered input frames with random lines.

  python -m scripts.sketch_frames --iter 2000000 -l 40 -p --save 30

Reads input_001.png, input_002.png, ... until one is missing (or --framelimit
frames are done) and writes frame_001.png, ... plus optional incr_NNN.png
snapshots while a frame is being optimized.
'''
import os
import csv
import json
import time
import argparse
import numpy as np
from tqdm import tqdm

from utils.image_io import FatalIOError, load_rgba16, save_png
from selection.sketcher import LineSketcher
from selection.schedule import STATS_FIELDS, SnapshotCounters, TimedReporter, format_stats

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description='Approximate images using randomly placed lines.')
    ap.add_argument('--iter', type=int, default=5000000, help='iteration limit per frame (-1 for infinite)')
    ap.add_argument('--framelimit', type=int, default=0, help='limit for total number of output frames (0 = none)')
    ap.add_argument('--start', type=int, default=1, help='starting frame number')
    ap.add_argument('-l', '--line_len', type=int, default=40, help='line length limit')
    ap.add_argument('-p', '--dedupe', action='store_true', help='remove duplicate colours from palette')
    ap.add_argument('--save', type=float, default=-1.0, help='incremental save interval, in seconds (<= 0 disables)')
    ap.add_argument('--stat', type=float, default=1.0, help='statistics reporting interval, in seconds')
    ap.add_argument('--seed', type=int, default=1234)
    ap.add_argument('--in_dir', default='.')
    ap.add_argument('--in_pattern', default='input_%03d.png')
    ap.add_argument('--out_dir', default='.')
    ap.add_argument('--stats_csv', default=None, help='append statistics reports to this CSV')
    ap.add_argument('--progress', action='store_true', help='show a progress bar per frame')
    ap.add_argument('--recipe', default=None, help='replay parameters from a previous recipe.json')
    return ap

def _apply_recipe(args):
    if not args.recipe:
        return args
    with open(args.recipe, 'r', encoding='utf-8') as f:
        R = json.load(f)

    P = R.get('params', {})
    args.iter       = int(P.get('iter_limit', args.iter))
    args.line_len   = int(P.get('line_len', args.line_len))
    args.dedupe     = bool(P.get('dedupe', args.dedupe))
    args.framelimit = int(P.get('framelimit', args.framelimit))
    args.start      = int(P.get('start', args.start))
    args.save       = float(P.get('save_interval', args.save))
    args.stat       = float(P.get('stat_interval', args.stat))
    if 'seed' in R:
        args.seed = int(R['seed'])
    return args

def _params_from_args(args):
    return dict(iter_limit=args.iter, line_len=args.line_len, dedupe=bool(args.dedupe))

def _write_recipe(out_dir, args, frames, seconds):
    recipe = dict(
        params=dict(
            _params_from_args(args),
            framelimit=args.framelimit, start=args.start,
            save_interval=args.save, stat_interval=args.stat,
        ),
        seed=int(args.seed),
        frames=[os.path.basename(p) for p in frames],
        stats=dict(frames_drawn=len(frames), seconds=seconds),
    )
    path = os.path.join(out_dir, 'recipe.json')
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(recipe, f, indent=2)
    except OSError as e:
        raise FatalIOError(f'Could not write {path}: {e}') from e
    print(f'📦 recipe: {path}')

def sketch_frames(args):
    '''Run every frame; returns the paths of the finished frame images.'''
    os.makedirs(args.out_dir, exist_ok=True)
    rng = np.random.default_rng(args.seed)
    counters = SnapshotCounters(frame=args.start)
    params = _params_from_args(args)

    def save(img, name):
        return save_png(img, name, args.out_dir)

    f = writer = None
    if args.stats_csv:
        try:
            f = open(args.stats_csv, 'w', newline='', encoding='utf-8')
        except OSError as e:
            raise FatalIOError(f'Could not write {args.stats_csv}: {e}') from e
        writer = csv.DictWriter(f, fieldnames=STATS_FIELDS)
        writer.writeheader()

    def report(row):
        tqdm.write(format_stats(row))
        if writer is not None:
            writer.writerow(row)

    reporter = TimedReporter(counters, save, report,
                             save_interval=args.save, stat_interval=args.stat)
    written = []
    frame_num = args.start
    t0 = time.time()
    try:
        while not (args.framelimit > 0 and len(written) >= args.framelimit):
            name = args.in_pattern % frame_num
            print(f'looking for {name}')
            frame_num += 1
            target = load_rgba16(os.path.join(args.in_dir, name))
            if target is None:
                break

            sketcher = LineSketcher(target, rng=rng, params=params)
            print(f'🎨 {len(sketcher.palette)} colours in palette')

            total = args.iter if args.iter >= 0 else None
            with tqdm(total=total, disable=not args.progress, unit='it', leave=False) as bar:
                def on_poll(i, sk):
                    bar.update(sk.stats.total_iters - bar.n)
                    reporter(i, sk)

                reporter.reset()
                sketcher.run(on_poll=on_poll,
                             on_done=lambda best: written.append(save(best, counters.next_frame_name())))
    finally:
        if f is not None:
            f.close()

    dt = time.time() - t0
    _write_recipe(args.out_dir, args, written, dt)
    print(f'✅ frames drawn: {len(written)} in {dt:.2f}s')
    print('end of frames')
    return written

def main(argv=None):
    args = _apply_recipe(build_parser().parse_args(argv))
    try:
        sketch_frames(args)
    except FatalIOError as e:
        print(f'❌ {e}')
        raise SystemExit(1)

if __name__ == '__main__':
    main()
