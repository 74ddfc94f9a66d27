"""Box-Muller transform of two uniform streams into standard-normal deviates."""

from collections import namedtuple

import numpy as np

from enums import ZeroPolicy
from exceptions import InvalidParameterError, NumericDomainError
from packer import UniformSequence


NormalDeviatePair = namedtuple('NormalDeviatePair', ['z1', 'z2'])


class NormalSequence:
    """Pairs (Z1, Z2) of standard-normal deviates."""

    def __init__(self, z1, z2, skipped=()):
        z1 = np.array(z1, dtype=np.float64)
        z2 = np.array(z2, dtype=np.float64)
        z1.flags.writeable = False
        z2.flags.writeable = False
        self.z1 = z1
        self.z2 = z2
        self.skipped = list(skipped)

    def __len__(self):
        return len(self.z1)

    def pairs(self):
        for a, b in zip(self.z1.tolist(), self.z2.tolist()):
            yield NormalDeviatePair(a, b)

    def values(self):
        """Z1 and Z2 interleaved as one flat stream."""
        flat = np.empty(2 * len(self), dtype=np.float64)
        flat[0::2] = self.z1
        flat[1::2] = self.z2
        return flat

    def __repr__(self):
        return f"NormalSequence(n={len(self)}, skipped={len(self.skipped)})"


def _as_values(u):
    if isinstance(u, UniformSequence):
        return u.values
    arr = np.asarray(u, dtype=np.float64)
    if arr.ndim != 1:
        raise InvalidParameterError(f"uniform input must be one-dimensional, got shape {arr.shape}")
    return arr


def default_clamp_floor(u1):
    """Half of the packer's grid step 2^-l, or machine epsilon for raw arrays."""
    if isinstance(u1, UniformSequence):
        return 2.0 ** -(u1.window_width + 1)
    return float(np.finfo(np.float64).eps)


def _resolve_zero_policy(zero_policy, clamp_floor):
    """Check the zero policy and clamp floor before any computation."""
    try:
        policy = ZeroPolicy(zero_policy)
    except ValueError:
        raise InvalidParameterError(f"Unknown zero policy: {zero_policy!r}") from None
    if clamp_floor is not None:
        if policy != ZeroPolicy.CLAMP:
            raise InvalidParameterError(
                f"clamp_floor is only used with ZeroPolicy.CLAMP, got {policy.value!r}"
            )
        if not 0.0 < float(clamp_floor) < 1.0:
            raise InvalidParameterError(f"clamp floor must lie in (0, 1), got {clamp_floor}")
    return policy


def box_muller(u1, u2, zero_policy=ZeroPolicy.RAISE, clamp_floor=None) -> NormalSequence:
    """Polar Box-Muller transform.

    Z1 = sqrt(-2 ln U1) cos(2 pi U2), Z2 = sqrt(-2 ln U1) sin(2 pi U2),
    for i < min(len(U1), len(U2)).

    U1 == 0 has no logarithm. With ZeroPolicy.RAISE a NumericDomainError
    lists the indices; SKIP drops them and records them in
    NormalSequence.skipped; CLAMP replaces them by clamp_floor.

    Args:
        u1, u2: UniformSequence or 1-D array-like of values in [0, 1)
        zero_policy: ZeroPolicy or its string value
        clamp_floor: replacement in (0, 1) for U1 == 0 (CLAMP only)
    """
    zero_policy = _resolve_zero_policy(zero_policy, clamp_floor)
    a = _as_values(u1)
    b = _as_values(u2)
    n = min(len(a), len(b))
    a = a[:n]
    b = b[:n]

    nan_idx = np.flatnonzero(np.isnan(a) | np.isnan(b))
    if nan_idx.size:
        raise NumericDomainError(
            f"NaN uniform value at indices {nan_idx.tolist()[:10]}", indices=nan_idx.tolist()
        )
    neg_idx = np.flatnonzero(a < 0.0)
    if neg_idx.size:
        raise NumericDomainError(
            f"Negative U1 at indices {neg_idx.tolist()[:10]}: logarithm undefined",
            indices=neg_idx.tolist()
        )
    if np.any(a >= 1.0) or np.any((b < 0.0) | (b >= 1.0)):
        raise InvalidParameterError("uniform values must lie in [0, 1)")

    zero_idx = np.flatnonzero(a == 0.0)
    skipped = []
    if zero_idx.size:
        if zero_policy == ZeroPolicy.RAISE:
            raise NumericDomainError(
                f"U1 == 0 at {zero_idx.size} index(es) {zero_idx.tolist()[:10]}: "
                f"ln(0) is undefined",
                indices=zero_idx.tolist()
            )
        elif zero_policy == ZeroPolicy.SKIP:
            keep = a != 0.0
            a = a[keep]
            b = b[keep]
            skipped = zero_idx.tolist()
        else:
            floor = default_clamp_floor(u1) if clamp_floor is None else float(clamp_floor)
            a = np.where(a == 0.0, floor, a)

    magnitude = np.sqrt(-2.0 * np.log(a))
    angle = 2.0 * np.pi * b
    z1 = magnitude * np.cos(angle)
    z2 = magnitude * np.sin(angle)

    return NormalSequence(z1, z2, skipped=skipped)


class NormalGenerator:
    """Two independently owned generators composed by the Box-Muller transform.

    Independence of the streams depends on choosing distinct tap
    distances; the transform itself cannot check it beyond distinct_taps.
    """

    def __init__(self, first, second):
        self.first = first
        self.second = second

    @property
    def distinct_taps(self) -> bool:
        return self.first.params.tap_distance != self.second.params.tap_distance

    def normal_sequence(self, zero_policy=ZeroPolicy.RAISE, count=None) -> NormalSequence:
        u1 = self.first.uniform_sequence(count=count)
        u2 = self.second.uniform_sequence(count=count)
        return box_muller(u1, u2, zero_policy=zero_policy)
