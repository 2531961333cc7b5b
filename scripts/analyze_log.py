import os
import csv
import argparse
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

def read_stats(path):
    rows = {"total_iters": [], "ips": [], "pct": [], "frame": []}
    with open(path, newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            rows["frame"].append(int(row["frame"]))
            rows["total_iters"].append(int(row["total_iters"]))
            rows["ips"].append(float(row["ips"]))
            rows["pct"].append(float(row["pct"]))
    return rows

def plot_stats(rows, out):
    fig, (ax1, ax2) = plt.subplots(2, 1, sharex=True)
    ax1.plot(rows["total_iters"], rows["ips"], label="iter/s")
    ax1.set_ylabel("iter/s")
    ax2.plot(rows["total_iters"], rows["pct"], color="tab:orange", label="accepted %")
    ax2.set_ylabel("accepted %")
    ax2.set_xlabel("iterations (frame)")
    fig.suptitle("Sketch convergence")
    fig.tight_layout()
    fig.savefig(out, dpi=150)
    plt.close(fig)
    return out

def main(argv=None):
    ap = argparse.ArgumentParser(description="Plot a --stats_csv log from scripts.sketch_frames.")
    ap.add_argument("--log", required=True)
    ap.add_argument("--out", default=None)
    args = ap.parse_args(argv)

    rows = read_stats(args.log)
    out = args.out or os.path.join(os.path.dirname(os.path.abspath(args.log)), "stats_plot.png")
    plot_stats(rows, out)
    print(f"✅ saved {out}")

if __name__ == "__main__":
    main()
