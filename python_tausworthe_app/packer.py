"""Uniform deviate packer: fixed-width bit windows -> reals in [0, 1)."""

import numbers

import numpy as np

from constants import MAX_PERIOD, MAX_WINDOW_WIDTH
from exceptions import InvalidParameterError, IndexExhaustionError


def decode_window(bits) -> int:
    """Positional binary value of a bit window, first bit most significant.

    Leading zeros keep their weight: [0, 0, 1, 0, 1] -> 5.
    """
    value = 0
    for b in bits:
        value = value * 2 + int(b)
    return value


def available_windows(window_width, last_index) -> int:
    """Number of complete windows the packer emits.

    Nominally floor((MAX_PERIOD - l) / l), capped so that no window reads
    past the last defined sequence index.
    """
    nominal = (MAX_PERIOD - window_width) // window_width
    return min(nominal, last_index // window_width)


class UniformSequence:
    """Read-only ordered Uniform(0,1) deviates."""

    def __init__(self, values, window_width, params=None):
        values = np.array(values, dtype=np.float64)
        values.flags.writeable = False
        self.values = values
        self.window_width = window_width
        self.params = params

    def __len__(self):
        return len(self.values)

    def __iter__(self):
        return iter(self.values.tolist())

    def __getitem__(self, index):
        return self.values[index]

    def __repr__(self):
        return f"UniformSequence(n={len(self)}, l={self.window_width})"


def pack_uniform(sequence, window_width, count=None) -> UniformSequence:
    """Pack consecutive, non-overlapping l-bit windows starting at index 1.

    Args:
        sequence: FeedbackSequence
        window_width: bits per deviate (l)
        count: number of deviates to emit (default: all complete windows)

    Returns:
        UniformSequence with values k / 2^l
    """
    if isinstance(window_width, bool) or not isinstance(window_width, numbers.Integral):
        raise InvalidParameterError(f"window width must be an integer, got {window_width!r}")
    l = int(window_width)
    last_index = len(sequence)
    if l <= 1 or l > MAX_WINDOW_WIDTH or l > last_index:
        raise InvalidParameterError(
            f"Invalid window width l={l}: expected 1 < l <= {min(MAX_WINDOW_WIDTH, last_index)}"
        )

    available = available_windows(l, last_index)
    if count is None:
        count = available
    elif isinstance(count, bool) or not isinstance(count, numbers.Integral) or count < 0:
        raise InvalidParameterError(f"count must be a non-negative integer, got {count!r}")
    elif count > available:
        raise IndexExhaustionError(
            f"Requested {count} windows of {l} bits, only {available} fit "
            f"in the defined range 1..{last_index}",
            requested=count, available=available
        )

    windows = np.asarray(sequence.bits[:count * l], dtype=np.int64).reshape(count, l)

    # Same multiply-and-add accumulation as decode_window, one column at a time
    acc = np.zeros(count, dtype=np.int64)
    for j in range(l):
        acc = acc * 2 + windows[:, j]

    values = acc.astype(np.float64) / float(2 ** l)
    return UniformSequence(values, l, params=getattr(sequence, 'params', None))
