import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

# ---------------- Matplotlib Config ----------------
plt.rcParams['font.family'] = 'serif'
plt.rcParams['font.size'] = 12
plt.rcParams['mathtext.fontset'] = 'cm'
plt.rcParams['axes.unicode_minus'] = False

ALGO_STYLES = {
    'bubble': ("o-", "#EE2A25"),
    'counting': ("s--", "#0076AA"),
    'quick': ("^-", "#AE8064"),
    'quick2': ("v--", "#2E8B57"),
    'quickMed': ("D-", "#6A3D9A"),
}


def plot_sweep(results, path):
    """
    Draw median sorting time against sample size, one subplot per sample kind and one line per algorithm.
    Skipped measurements are left out. The figure format follows the extension of `path`.

    Args:
        results (list[SweepResult]): output of sort_sweep.run_sweep
        path (str): where to save the figure

    Returns:
        matplotlib.figure.Figure: the saved figure (already closed)
    """
    kinds = list(dict.fromkeys(r.kind for r in results))
    algos = list(dict.fromkeys(r.algo for r in results))
    assert kinds, "nothing to plot"

    fig, axes = plt.subplots(1, len(kinds), figsize=(4.2 * len(kinds), 3.8), squeeze=False)
    for ax, kind in zip(axes[0], kinds):
        for algo in algos:
            points = [(r.size, r.median_time) for r in results
                      if r.kind == kind and r.algo == algo and not r.skipped]
            if not points:
                continue
            sizes, times = np.array(points, dtype=float).T
            marker, color = ALGO_STYLES.get(algo, ("o-", None))
            ax.plot(sizes, np.maximum(times, 1e-9) * 1e3, marker, label=algo, color=color, linewidth=2.0)
        ax.set_title(kind)
        ax.set_xlabel("n")
        ax.set_ylabel("median time (ms)")
        ax.set_yscale("log")
        ax.grid(False)
        ax.margins(x=0.05)

    # ---------------- Global Legend ----------------
    handles, labels = [], []
    for ax in axes[0]:
        for handle, label in zip(*ax.get_legend_handles_labels()):
            if label not in labels:
                handles.append(handle)
                labels.append(label)
    plt.tight_layout()
    plt.subplots_adjust(bottom=0.28)
    fig.legend(
        handles=handles,
        labels=labels,
        loc="lower center",
        ncol=max(len(labels), 1),
        frameon=True,
        framealpha=0.90,
        facecolor="white",
        edgecolor="#444444",
        bbox_to_anchor=(0.5, 0.02)
    )
    fig.savefig(path, bbox_inches="tight")
    plt.close(fig)
    return fig
