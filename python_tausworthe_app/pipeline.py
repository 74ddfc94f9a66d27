"""Run the generator pipeline: uniform streams, optional normal stream, checks."""

import time
from datetime import datetime
from concurrent.futures import ProcessPoolExecutor, as_completed

from enums import DeviateKind
from generator import TauswortheGenerator
from normal import box_muller
from results import RunConfig, RunResult
import validation


def build_uniform(params, count=None):
    """Generate one uniform stream.

    Module-level so it can be pickled for ProcessPoolExecutor. Each call
    owns its own buffers; nothing is shared between workers.
    """
    return TauswortheGenerator(params).uniform_sequence(count=count)


def generate_uniform_streams(param_sets, count=None, threads=1):
    """One UniformSequence per parameter set, in input order.

    With threads > 1 the independent streams are produced in parallel
    processes.
    """
    param_sets = list(param_sets)
    if threads <= 1 or len(param_sets) <= 1:
        return [build_uniform(p, count) for p in param_sets]

    streams = [None] * len(param_sets)
    with ProcessPoolExecutor(max_workers=min(threads, len(param_sets))) as executor:
        futures = {
            executor.submit(build_uniform, p, count): i
            for i, p in enumerate(param_sets)
        }
        for future in as_completed(futures):
            # Errors from a worker propagate to the caller
            streams[futures[future]] = future.result()

    return streams


def _print_outcomes(outcomes):
    for t in outcomes:
        verdict = "REJECT H0" if t.rejected else "do not reject H0"
        print(f"  {t.name:<24} stat={t.statistic:>10.4f}  p={t.p_value:.4f}  -> {verdict}")


def run_pipeline(settings):
    """Run the full pipeline described by a Settings object.

    Returns:
        RunResult with per-stream summaries and test outcomes
    """
    start_time = time.time()

    param_sets = settings.get_param_sets()
    alpha = settings.get_alpha()
    bins = settings.get_bins()
    lag = settings.get_lag()

    print("Generating uniform sequences...")
    print("-" * 60)
    streams = generate_uniform_streams(
        param_sets, count=settings.get_count(), threads=settings.get_threads()
    )
    for i, (params, u) in enumerate(zip(param_sets, streams), start=1):
        print(f"  U{i} ({params.label()}): {len(u)} deviates")

    summaries = []
    outcomes = []
    skipped = []

    named_streams = [(f"u{i}", DeviateKind.UNIFORM, u.values) for i, u in enumerate(streams, start=1)]

    if settings.is_normal():
        print("\nApplying Box-Muller transform...")
        normal_seq = box_muller(streams[0], streams[1], zero_policy=settings.get_zero_policy())
        skipped = normal_seq.skipped
        print(f"  Normal pairs: {len(normal_seq)}")
        if skipped:
            print(f"  Skipped indices (U1 == 0): {skipped}")
        named_streams.append(("z", DeviateKind.NORMAL, normal_seq.values()))

    for stream, kind, values in named_streams:
        summary = validation.describe(values, kind=kind.value)
        summary.stream = stream
        if len(values) > lag + 1:
            summary.lag_correlation = validation.lag_correlation(values, lag=lag)
        summaries.append(summary)

        print(f"\n[{stream}] {kind.value}: n={summary.count}, mean={summary.mean:.6f}, "
              f"var={summary.variance:.6f}, min={summary.minimum:.6f}, max={summary.maximum:.6f}")
        if summary.lag_correlation is not None:
            print(f"  lag-{lag} correlation: {summary.lag_correlation:.6f}")

        if not settings.is_validate():
            continue

        if kind == DeviateKind.UNIFORM:
            stream_outcomes = validation.validate_uniform(values, bins=bins, alpha=alpha)
        else:
            stream_outcomes = validation.validate_normal(values, alpha=alpha)
        for t in stream_outcomes:
            t.stream = stream
        _print_outcomes(stream_outcomes)
        outcomes.extend(stream_outcomes)

    elapsed = time.time() - start_time

    params_1 = param_sets[0]
    params_2 = param_sets[1] if settings.is_normal() else None
    config = RunConfig(
        params_1=(params_1.tap_distance, params_1.register_width, params_1.window_width),
        params_2=None if params_2 is None else (
            params_2.tap_distance, params_2.register_width, params_2.window_width
        ),
        count=len(streams[0]),
        normal=settings.is_normal(),
        zero_policy=settings.get_zero_policy().value,
        alpha=alpha,
        bins=bins,
        lag=lag,
        threads=settings.get_threads(),
        timestamp=datetime.now().isoformat(),
    )

    return RunResult(
        config=config,
        summaries=summaries,
        tests=outcomes,
        wall_clock_seconds=elapsed,
        skipped_indices=list(skipped),
    )
