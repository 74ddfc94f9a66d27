#!/usr/bin/env python3
"""Standalone script for plotting previously saved generator run results.

Usage:
    python plot_results.py run1.json run2.json --output comparison.png
"""

import sys
import os
import argparse

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from results import RunResult


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Plot test p-values of saved Tausworthe runs'
    )
    parser.add_argument('files', nargs='+', help='JSON result files to plot')
    parser.add_argument('--output', type=str, default=None,
                        help='Save comparison plot to file')
    parser.add_argument('--no-show', action='store_true',
                        help='Do not show interactive plots')

    args = parser.parse_args(argv)

    try:
        import matplotlib.pyplot as plt
    except ImportError:
        print("Error: matplotlib is required. Install with: pip install matplotlib")
        sys.exit(1)

    from visualization import SequencePlotter

    results = []
    for filepath in args.files:
        if not os.path.exists(filepath):
            print(f"Warning: file not found: {filepath}")
            continue
        results.append(RunResult.from_json(filepath))

    if not results:
        print("Error: no valid result files loaded")
        sys.exit(1)

    fig = SequencePlotter.plot_comparison(results, save_path=args.output)

    if args.no_show:
        plt.close(fig)
    else:
        plt.show()

    return fig


if __name__ == '__main__':
    main()
