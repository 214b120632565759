# well_rng/experiments/plot_heatmap.py
"""
Plots for WELL1024a state-recovery experiments.

Left panel: success rate per (output_bits, sample budget) cell. Cells whose
budget cannot reach 1024 equations (samples * output_bits < 1024) are hatched,
since no solver can recover the state there.
Right panel: mean outputs actually consumed by successful recoveries, per
output width, against the information bound ceil(1024 / output_bits).

CSV columns: samples, output_bits, trial, success, used (as written by
run_experiments; `used` is optional and only feeds the right panel).

Usage:
    python -m well_rng.experiments.plot_heatmap --csv results/experiments_XXXX.csv --out recovery.png
"""

import argparse
import math
import os

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.patches import Rectangle

from well_rng.attacker.recover import STATE_BITS

REQUIRED_COLUMNS = {'samples', 'output_bits', 'trial', 'success'}


def information_bound(output_bits):
    """Fewest outputs that can carry all 1024 state bits."""
    return math.ceil(STATE_BITS / output_bits)


def load_results(csv_path):
    df = pd.read_csv(csv_path)
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise SystemExit(f"CSV is missing columns {sorted(missing)}. Found: {df.columns.tolist()}")
    return df.astype({'samples': int, 'output_bits': int, 'success': float})


def summarize(df):
    """One row per (output_bits, samples): success rate, mean used, bound flag."""
    grouped = df.groupby(['output_bits', 'samples'])
    summary = grouped['success'].mean().rename('success_rate').reset_index()
    if 'used' in df.columns:
        used = df[df['success'] > 0].groupby(['output_bits', 'samples'])['used'].mean()
        summary = summary.merge(used.rename('mean_used').reset_index(), on=['output_bits', 'samples'], how='left')
    else:
        summary['mean_used'] = np.nan
    summary['below_bound'] = summary['samples'] * summary['output_bits'] < STATE_BITS
    return summary


def success_grid(summary):
    grid = summary.pivot(index='output_bits', columns='samples', values='success_rate')
    # widest outputs on top
    return grid.sort_index(ascending=False)


def _draw_success(ax, grid):
    widths = grid.index.tolist()
    budgets = grid.columns.tolist()
    im = ax.imshow(grid.values, aspect='auto', interpolation='nearest', vmin=0.0, vmax=1.0, cmap='viridis')

    for i, bits in enumerate(widths):
        for j, budget in enumerate(budgets):
            rate = grid.values[i, j]
            if budget * bits < STATE_BITS:
                ax.add_patch(Rectangle((j - 0.5, i - 0.5), 1, 1, fill=False, hatch='//',
                                       edgecolor='lightgray', linewidth=0))
            label = 'N/A' if np.isnan(rate) else f"{rate:.2f}"
            colour = 'black' if np.isnan(rate) or rate > 0.5 else 'white'
            ax.text(j, i, label, ha='center', va='center', color=colour, fontsize=9)

    ax.set_xticks(np.arange(len(budgets)))
    ax.set_xticklabels(budgets, rotation=45, ha='right')
    ax.set_yticks(np.arange(len(widths)))
    ax.set_yticklabels(widths)
    ax.set_xlabel('Sample budget (outputs observed)')
    ax.set_ylabel('Output bits revealed')
    ax.set_title('Success rate (hatched: below 1024-bit bound)')
    return im


def _draw_consumption(ax, summary):
    used = summary.dropna(subset=['mean_used']).groupby('output_bits')['mean_used'].mean()
    widths = sorted(summary['output_bits'].unique())
    ax.plot(widths, [information_bound(b) for b in widths], 'k--', label='ceil(1024 / bits)')
    if not used.empty:
        ax.plot(used.index, used.values, 'o-', label='mean outputs used')
    ax.set_xlabel('Output bits revealed')
    ax.set_ylabel('Outputs')
    ax.set_title('Outputs needed to pin the state')
    ax.legend()


def plot_recovery(summary, title='WELL1024a State Recovery', out_file=None, show=True):
    grid = success_grid(summary)
    fig, (ax_grid, ax_used) = plt.subplots(1, 2, figsize=(0.8 * len(grid.columns) + 9, 0.6 * len(grid.index) + 3))
    im = _draw_success(ax_grid, grid)
    fig.colorbar(im, ax=ax_grid, fraction=0.046, pad=0.04).set_label('Mean success rate (0-1)')
    _draw_consumption(ax_used, summary)
    fig.suptitle(title)

    fig.tight_layout()
    if out_file:
        os.makedirs(os.path.dirname(out_file) or '.', exist_ok=True)
        fig.savefig(out_file, dpi=200)
        print(f"Plot saved to {out_file}")
    if show:
        plt.show()
    return fig


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument('--csv', required=True, help='Path to experiments CSV')
    parser.add_argument('--out', default='results/recovery.png', help='Output PNG path')
    parser.add_argument('--title', default='WELL1024a State Recovery', help='Figure title')
    parser.add_argument('--no-show', action='store_true', help='Save without opening a window')
    args = parser.parse_args(argv)

    summary = summarize(load_results(args.csv))
    plot_recovery(summary, title=args.title, out_file=args.out, show=not args.no_show)


if __name__ == '__main__':
    main()
