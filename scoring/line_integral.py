import numpy as np

def line_difference(a, b, ys, xs):
    '''Sum of per-pixel RGBA Euclidean distances between a and b along (ys, xs).'''
    if len(xs) == 0:
        return 0.0
    d = a[ys, xs].astype(np.float64) - b[ys, xs].astype(np.float64)
    return float(np.sqrt((d * d).sum(axis=1)).sum())
