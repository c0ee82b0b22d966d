# randlib/experiments/plot_heatmap.py
"""
Heatmap of state-recovery success: columns = samples observed, rows = bits
revealed per sample, cell = mean success over trials. A red line marks the
theoretical boundary samples = 129 - output_bits (see
randlib.attacker.recover.recovery_threshold); cells right of it should be 1.0,
cells left of it 0.0.

CSV expected columns: samples, output_bits, trial, success

Usage:
    python -m randlib.experiments.plot_heatmap --csv results/experiments_XXXX.csv --out heatmap.png
"""

import argparse
import os

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from randlib.attacker.recover import recovery_threshold

REQUIRED_COLUMNS = {'samples', 'output_bits', 'trial', 'success'}
THRESHOLD_LABEL = 'samples = 129 - output_bits'


def load_results(csv_path):
    df = pd.read_csv(csv_path)
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"CSV is missing columns {sorted(missing)}; found {df.columns.tolist()}")
    return df.astype({'samples': int, 'output_bits': int, 'success': float})


def prepare_pivot(df):
    # rows: output_bits, widest on top; columns: samples ascending
    pivot = df.pivot_table(index='output_bits', columns='samples', values='success', aggfunc='mean')
    return pivot.sort_index(ascending=False).sort_index(axis=1)


def threshold_edges(pivot):
    """x position (between columns) where recovery becomes possible, one per row."""
    samples = np.asarray(pivot.columns, dtype=int)
    edges = []
    for bits in pivot.index:
        first = np.searchsorted(samples, recovery_threshold(int(bits)))
        edges.append(first - 0.5)
    return edges


def disagreements(pivot):
    """Cells whose measured rate contradicts the threshold (NaN cells excluded)."""
    samples = np.asarray(pivot.columns, dtype=int)
    need = np.array([recovery_threshold(int(bits)) for bits in pivot.index])
    expected = (samples[np.newaxis, :] >= need[:, np.newaxis]).astype(float)
    observed = pivot.to_numpy()
    return ~np.isnan(observed) & (observed != expected)


def plot_heatmap(pivot, title='State Recovery Success Rate', out_file=None, show=True):
    data = pivot.to_numpy()
    n_rows, n_cols = data.shape
    fig, ax = plt.subplots(figsize=(0.8 * n_cols + 3, 0.6 * n_rows + 2))
    im = ax.imshow(data, aspect='auto', interpolation='nearest', vmin=0.0, vmax=1.0, cmap='viridis')

    ax.set_xticks(range(n_cols), labels=[str(c) for c in pivot.columns])
    ax.set_yticks(range(n_rows), labels=[str(r) for r in pivot.index])
    ax.set_xlabel('Samples observed')
    ax.set_ylabel('Output bits per sample')
    ax.set_title(title)

    # boundary predicted by the LFSR shift structure
    xs, ys = [], []
    for i, edge in enumerate(threshold_edges(pivot)):
        xs += [edge, edge]
        ys += [i - 0.5, i + 0.5]
    ax.plot(xs, ys, color='red', linewidth=2, label=THRESHOLD_LABEL)
    ax.set_xlim(-0.5, n_cols - 0.5)
    ax.legend(loc='upper right', fontsize=8)

    off = disagreements(pivot)
    for (i, j), val in np.ndenumerate(data):
        text = 'N/A' if np.isnan(val) else f"{val:.2f}" + ('!' if off[i, j] else '')
        ax.text(j, i, text, ha='center', va='center', fontsize=9,
                color='gray' if np.isnan(val) else ('black' if val > 0.5 else 'white'))

    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04).set_label('Mean success rate (0-1)')
    fig.tight_layout()
    if out_file:
        os.makedirs(os.path.dirname(out_file) or '.', exist_ok=True)
        fig.savefig(out_file, dpi=300)
        print(f"Heatmap saved to {out_file}")
    if show:
        plt.show()
    return fig


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument('--csv', required=True, help='Path to experiments CSV')
    parser.add_argument('--out', default='results/heatmap_success_rate.png', help='Output PNG path')
    parser.add_argument('--title', default='State Recovery Success Rate', help='Plot title')
    parser.add_argument('--no-show', action='store_true', help='only write the PNG')
    args = parser.parse_args(argv)

    try:
        pivot = prepare_pivot(load_results(args.csv))
    except ValueError as exc:
        raise SystemExit(str(exc))

    off = disagreements(pivot)
    if off.any():
        print(f"Warning: {int(off.sum())} cell(s) disagree with the recovery threshold")
    fig = plot_heatmap(pivot, title=args.title, out_file=args.out, show=not args.no_show)
    plt.close(fig)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
