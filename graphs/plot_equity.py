import argparse
import json
from collections import defaultdict

import matplotlib.pyplot as plt
import numpy as np

# --- CONFIGURATION ---
DATA_FILE = 'equity_data.jsonl'
STREETS = ['FLOP', 'TURN', 'RIVER']


# 1. LOAD THE DATA
def load_records(path):
    records = []
    with open(path, 'r', encoding='utf-8') as f:
        for line_num, line in enumerate(f):
            if line.strip():
                try:
                    records.append(json.loads(line))
                except json.JSONDecodeError:
                    print(f"Skipping invalid JSON on line {line_num + 1}")
    return records


# 2. AVERAGE EQUITY PER PLAYER AND STREET
def equity_table(records):
    """
    Returns (players, streets, table) where table has shape
    (len(players), len(streets), 3) holding mean win/tie/loss.
    Streets a player never reached stay at zero.
    """
    sums = defaultdict(lambda: np.zeros(3))
    counts = defaultdict(int)
    players = []
    for rec in records:
        for p in rec.get('players', []):
            if p['name'] not in players:
                players.append(p['name'])
            key = (p['name'], rec['street'])
            sums[key] += np.array([p['win'], p['tie'], p['loss']])
            counts[key] += 1

    streets = [s for s in STREETS if any(rec['street'] == s for rec in records)]
    table = np.zeros((len(players), len(streets), 3))
    for i, name in enumerate(players):
        for j, street in enumerate(streets):
            n = counts[(name, street)]
            if n:
                table[i, j] = sums[(name, street)] / n
    return players, streets, table


# --- GRAPH: STACKED WIN/TIE/LOSS BARS PER STREET ---
def plot_equity(players, streets, table, out_file='graph_equity_by_street.png', show=False):
    fig, axes = plt.subplots(1, max(len(streets), 1), figsize=(5 * max(len(streets), 1), 6), squeeze=False)
    x = np.arange(len(players))
    colors = ['#2ca02c', '#7f7f7f', '#d62728']

    for j, street in enumerate(streets):
        ax = axes[0, j]
        bottom = np.zeros(len(players))
        for k, label in enumerate(['Win', 'Tie', 'Loss']):
            ax.bar(x, table[:, j, k], bottom=bottom, color=colors[k], edgecolor='black', label=label)
            bottom += table[:, j, k]
        ax.set_title(street, fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels(players)
        ax.set_ylim(0, 1)
        ax.grid(True, axis='y', alpha=0.3)

    axes[0, 0].set_ylabel('Equity vs random hand', fontsize=12)
    axes[0, 0].legend()
    fig.tight_layout()
    fig.savefig(out_file, dpi=300)
    print(f"Saved '{out_file}'")
    if show:
        plt.show()
    return fig


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument('--data', type=str, default=DATA_FILE)
    ap.add_argument('--out', type=str, default='graph_equity_by_street.png')
    ap.add_argument('--show', action='store_true')
    args = ap.parse_args()

    try:
        records = load_records(args.data)
    except FileNotFoundError:
        print(f"Error: Could not find '{args.data}'.")
        raise SystemExit(1)
    print(f"Successfully loaded {len(records)} streets from {args.data}.")

    players, streets, table = equity_table(records)
    plot_equity(players, streets, table, out_file=args.out, show=args.show)


if __name__ == '__main__':
    main()
