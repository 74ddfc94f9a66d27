"""Shared fixtures for Tausworthe generator tests."""

import os
import sys
import pytest

# Ensure python_tausworthe_app is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture
def default_params():
    """The (r=9, q=10, l=15) parameter set."""
    from parameters import GeneratorParameters
    return GeneratorParameters(tap_distance=9, register_width=10, window_width=15)


@pytest.fixture
def primitive_params():
    """x^10 + x^3 + 1 is primitive, so the period is 2^10 - 1."""
    from parameters import GeneratorParameters
    return GeneratorParameters(tap_distance=3, register_width=10, window_width=15)


@pytest.fixture
def sample_run_result():
    """A synthetic RunResult for testing visualization and export."""
    from results import RunResult, RunConfig, SequenceSummary, StatOutcome

    config = RunConfig(
        params_1=(9, 10, 15),
        params_2=(3, 10, 15),
        count=2183,
        normal=True,
        zero_policy='raise',
        alpha=0.05,
        bins=10,
        lag=1,
        threads=1,
        timestamp='2026-01-01T00:00:00',
    )

    summaries = [
        SequenceSummary(kind='uniform', count=2183, mean=0.501, variance=0.083,
                        minimum=0.0001, maximum=0.9998, stream='u1', lag_correlation=0.01),
        SequenceSummary(kind='uniform', count=2183, mean=0.497, variance=0.084,
                        minimum=0.0003, maximum=0.9995, stream='u2', lag_correlation=-0.02),
        SequenceSummary(kind='normal', count=4366, mean=0.01, variance=0.99,
                        minimum=-3.4, maximum=3.6, stream='z'),
    ]

    tests = [
        StatOutcome(name='chi_square_uniformity', statistic=8.2, p_value=0.51,
                    alpha=0.05, rejected=False, stream='u1'),
        StatOutcome(name='ks_uniformity', statistic=0.012, p_value=0.88,
                    alpha=0.05, rejected=False, stream='u1'),
        StatOutcome(name='runs_test', statistic=-2.4, p_value=0.016,
                    alpha=0.05, rejected=True, stream='u1'),
        StatOutcome(name='ks_normality', statistic=0.015, p_value=0.3,
                    alpha=0.05, rejected=False, stream='z'),
    ]

    return RunResult(
        config=config,
        summaries=summaries,
        tests=tests,
        wall_clock_seconds=0.25,
    )
