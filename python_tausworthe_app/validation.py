"""Statistical checks of generated sequences (goodness of fit, runs, lag)."""

import math

import numpy as np
from scipy import stats

from exceptions import InvalidParameterError
from normal import NormalSequence
from packer import UniformSequence
from results import SequenceSummary, StatOutcome


def _as_array(values):
    if isinstance(values, NormalSequence):
        values = values.values()
    elif isinstance(values, UniformSequence):
        values = values.values
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1 or arr.size == 0:
        raise InvalidParameterError("expected a non-empty one-dimensional sequence")
    return arr


def _outcome(name, statistic, p_value, alpha):
    return StatOutcome(
        name=name,
        statistic=float(statistic),
        p_value=float(p_value),
        alpha=alpha,
        rejected=bool(p_value < alpha),
    )


def describe(values, kind=None) -> SequenceSummary:
    """Count, mean, variance (ddof=1), min and max of a sequence.

    `kind` defaults to 'normal' for a NormalSequence, 'uniform' otherwise.
    """
    if kind is None:
        kind = 'normal' if isinstance(values, NormalSequence) else 'uniform'
    x = _as_array(values)
    return SequenceSummary(
        kind=kind,
        count=int(x.size),
        mean=float(np.mean(x)),
        variance=float(np.var(x, ddof=1)) if x.size > 1 else 0.0,
        minimum=float(np.min(x)),
        maximum=float(np.max(x)),
    )


def chi_square_uniformity(values, bins=10, alpha=0.05) -> StatOutcome:
    """Pearson chi-square test of equal counts over `bins` cells of [0, 1)."""
    x = _as_array(values)
    if bins < 2:
        raise InvalidParameterError(f"bins must be >= 2, got {bins}")
    observed, _ = np.histogram(x, bins=bins, range=(0.0, 1.0))
    statistic, p_value = stats.chisquare(observed)
    return _outcome('chi_square_uniformity', statistic, p_value, alpha)


def ks_uniformity(values, alpha=0.05) -> StatOutcome:
    """Kolmogorov-Smirnov test against Uniform(0, 1)."""
    x = _as_array(values)
    result = stats.kstest(x, 'uniform')
    return _outcome('ks_uniformity', result.statistic, result.pvalue, alpha)


def ks_normality(values, alpha=0.05) -> StatOutcome:
    """Kolmogorov-Smirnov test against N(0, 1)."""
    x = _as_array(values)
    result = stats.kstest(x, 'norm')
    return _outcome('ks_normality', result.statistic, result.pvalue, alpha)


def runs_test(values, alpha=0.05) -> StatOutcome:
    """Wald-Wolfowitz runs test above/below the median (two-sided).

    Values equal to the median are dropped. Uses the normal approximation
    of the number of runs.
    """
    x = _as_array(values)
    median = np.median(x)
    signs = x[x != median] > median
    n1 = int(np.count_nonzero(signs))
    n2 = int(signs.size - n1)
    if n1 == 0 or n2 == 0:
        raise InvalidParameterError("runs test needs values on both sides of the median")

    runs = 1 + int(np.count_nonzero(signs[1:] != signs[:-1]))
    n = n1 + n2
    expected = 2.0 * n1 * n2 / n + 1.0
    variance = 2.0 * n1 * n2 * (2.0 * n1 * n2 - n) / (n * n * (n - 1))
    z = (runs - expected) / math.sqrt(variance)
    p_value = 2.0 * stats.norm.sf(abs(z))
    return _outcome('runs_test', z, p_value, alpha)


def lag_correlation(values, lag=1) -> float:
    """Pearson correlation between x[i] and x[i + lag]."""
    x = _as_array(values)
    if lag < 1 or lag >= x.size - 1:
        raise InvalidParameterError(f"lag must be in 1..{x.size - 2}, got {lag}")
    return float(np.corrcoef(x[:-lag], x[lag:])[0, 1])


def validate_uniform(values, bins=10, alpha=0.05):
    """Standard battery for a uniform stream."""
    return [
        chi_square_uniformity(values, bins=bins, alpha=alpha),
        ks_uniformity(values, alpha=alpha),
        runs_test(values, alpha=alpha),
    ]


def validate_normal(values, alpha=0.05):
    """Standard battery for a normal stream."""
    return [
        ks_normality(values, alpha=alpha),
        runs_test(values, alpha=alpha),
    ]
