#!/usr/bin/env python3
"""
Tausworthe Generator - Console Version
Console application for generating and checking Tausworthe deviates
"""
import sys
import argparse
import os
import time
from datetime import datetime

# Add the module directory to the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from constants import DEFAULT_PARAMS_1, DEFAULT_PARAMS_2
from enums import ZeroPolicy
from exceptions import TauswortheError
from normal import box_muller
from parameters import GeneratorParameters
from pipeline import generate_uniform_streams, run_pipeline
from settings import Settings


def build_settings(args):
    """Map parsed CLI arguments onto a Settings object.

    Raises InvalidParameterError before any generation starts.
    """
    settings = Settings()
    settings.set_params_1(GeneratorParameters(args.r, args.q, args.l))
    if args.normal:
        settings.set_params_2(GeneratorParameters(args.r2, args.q2, args.l2))
    settings.set_count(args.count)
    settings.set_normal(args.normal)
    settings.set_zero_policy(ZeroPolicy(args.zero_policy))
    settings.set_alpha(args.alpha)
    settings.set_bins(args.bins)
    settings.set_lag(args.lag)
    settings.set_threads(args.threads)
    settings.set_validate(not args.no_tests)
    return settings


def make_parser():
    parser = argparse.ArgumentParser(
        description='Tausworthe Generator - uniform and normal deviates from a GF(2) feedback sequence',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --r 9 --q 10 --l 15
  python main.py --normal --r 9 --q 10 --r2 3 --q2 10 --zero-policy skip --plot-save ./plots
        """
    )

    r1, q1, l1 = DEFAULT_PARAMS_1
    r2, q2, l2 = DEFAULT_PARAMS_2

    parser.add_argument('--r', type=int, default=r1,
                        help=f'Tap distance of generator 1 (default: {r1})')
    parser.add_argument('--q', type=int, default=q1,
                        help=f'Register width of generator 1 (default: {q1})')
    parser.add_argument('--l', type=int, default=l1,
                        help=f'Window width of generator 1 (default: {l1})')
    parser.add_argument('--r2', type=int, default=r2,
                        help=f'Tap distance of generator 2, used with --normal (default: {r2})')
    parser.add_argument('--q2', type=int, default=q2,
                        help=f'Register width of generator 2 (default: {q2})')
    parser.add_argument('--l2', type=int, default=l2,
                        help=f'Window width of generator 2 (default: {l2})')
    parser.add_argument('--count', '-n', type=int, default=None,
                        help='Number of deviates (default: all complete windows)')
    parser.add_argument('--normal', action='store_true',
                        help='Also produce normal deviates with the Box-Muller transform')
    parser.add_argument('--zero-policy', type=str, choices=[p.value for p in ZeroPolicy],
                        default=ZeroPolicy.RAISE.value,
                        help='Handling of U1 == 0 in the Box-Muller transform (default: raise)')
    parser.add_argument('--alpha', type=float, default=0.05,
                        help='Significance level of the tests (default: 0.05)')
    parser.add_argument('--bins', type=int, default=10,
                        help='Cells of the chi-square uniformity test (default: 10)')
    parser.add_argument('--lag', type=int, default=1,
                        help='Lag of the correlation and lag plot (default: 1)')
    parser.add_argument('--threads', '-t', type=int, default=1,
                        help='Processes for generating independent streams (default: 1)')
    parser.add_argument('--no-tests', action='store_true',
                        help='Skip the hypothesis tests')

    # Export flags
    parser.add_argument('--output-json', type=str, default=None,
                        help='Export results to a JSON file')
    parser.add_argument('--output-csv', type=str, default=None,
                        help='Export test outcomes to a CSV file')

    # Visualization flags
    parser.add_argument('--plot', action='store_true',
                        help='Show plots after the run')
    parser.add_argument('--plot-save', type=str, default=None,
                        help='Save plots to the given directory')
    return parser


def plot_run(settings, save_dir=None, show=False):
    """Regenerate the streams of a run and draw the dashboard."""
    from visualization import SequencePlotter

    streams = generate_uniform_streams(
        settings.get_param_sets(), count=settings.get_count(), threads=settings.get_threads()
    )
    normal_values = None
    if settings.is_normal():
        normal_values = box_muller(
            streams[0], streams[1], zero_policy=settings.get_zero_policy()
        ).values()

    plotter = SequencePlotter(
        uniform=streams[0], normal=normal_values,
        title=f"Tausworthe generator ({settings.get_params_1().label()})"
    )
    fig = plotter.plot_combined_dashboard(save_dir=save_dir, lag=settings.get_lag())

    import matplotlib.pyplot as plt
    if show:
        plt.show()
    else:
        plt.close(fig)
    return fig


def main(argv=None):
    parser = make_parser()
    args = parser.parse_args(argv)

    try:
        settings = build_settings(args)
    except TauswortheError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print("=" * 60)
    print("Tausworthe Generator - Console Application")
    print("=" * 60)
    settings.print()
    if settings.is_normal() and settings.get_params_1().tap_distance == settings.get_params_2().tap_distance:
        print("Warning: both generators use the same tap distance; "
              "the normal deviates will not be independent")
    print("=" * 60)
    print()

    start_time = time.time()
    start_datetime = datetime.now()
    print(f"Start time: {start_datetime.strftime('%d.%m.%Y %H:%M:%S')}")
    print("-" * 60)
    print()

    try:
        run_result = run_pipeline(settings)

        end_datetime = datetime.now()
        elapsed_time = time.time() - start_time

        print()
        print("=" * 60)
        print(f"End time: {end_datetime.strftime('%d.%m.%Y %H:%M:%S')}")
        print(f"Elapsed: {elapsed_time:.2f} s")
        if run_result.any_rejected:
            print(f"At least one test rejected H0 at alpha={settings.get_alpha()}")
        print("=" * 60)

        # Export results
        if args.output_json:
            run_result.to_json(args.output_json)
            print(f"\nResults exported to JSON: {args.output_json}")

        if args.output_csv:
            run_result.to_csv(args.output_csv)
            print(f"Results exported to CSV: {args.output_csv}")

        # Visualization
        if args.plot or args.plot_save:
            try:
                plot_run(settings, save_dir=args.plot_save, show=args.plot)
            except ImportError:
                print("\nWarning: matplotlib is not installed. Install with: pip install matplotlib")

    except TauswortheError as e:
        print()
        print("=" * 60)
        print(f"Error: {e}")
        print(f"Elapsed until error: {time.time() - start_time:.2f} s")
        print("=" * 60)
        sys.exit(1)
    except Exception:
        import traceback
        traceback.print_exc()
        sys.exit(1)

    return run_result


if __name__ == '__main__':
    main()
