"""Tausworthe feedback sequence generator.

The binary sequence follows B[i] = B[i-r] XOR B[i-q] over GF(2), seeded with
q ones. It is computed once into a pre-sized buffer of MAX_PERIOD + 1 slots
(slot 0 unused, indices are 1-based as in the recurrence definition).
"""

import numpy as np

from constants import MAX_PERIOD
from exceptions import IndexExhaustionError
from packer import pack_uniform


class FeedbackSequence:
    """Immutable binary sequence produced by one generator run."""

    def __init__(self, buffer, params):
        buffer.flags.writeable = False
        self._buffer = buffer
        self.params = params
        self.last_index = params.last_index

    def __len__(self):
        return self.last_index

    @property
    def bits(self):
        """Defined part of the sequence as a read-only 0-based view."""
        return self._buffer[1:self.last_index + 1]

    def bit(self, i):
        """Bit at 1-based index i."""
        if not 1 <= i <= self.last_index:
            raise IndexExhaustionError(
                f"Index {i} outside the defined range 1..{self.last_index}",
                requested=i, available=self.last_index
            )
        return int(self._buffer[i])

    def window(self, start, width):
        """Bits start .. start + width - 1 (1-based)."""
        end = start + width - 1
        if start < 1 or end > self.last_index:
            raise IndexExhaustionError(
                f"Window {start}..{end} outside the defined range 1..{self.last_index}",
                requested=end, available=self.last_index
            )
        return self._buffer[start:end + 1]

    def satisfies_recurrence(self) -> bool:
        """Check the seed and B[i] = B[i-r] XOR B[i-q] over the whole defined range."""
        r = self.params.tap_distance
        q = self.params.register_width
        buf = self._buffer
        last = self.last_index

        if not np.all(buf[1:q + 1] == 1):
            return False

        expected = buf[q + 1 - r:last + 1 - r] ^ buf[1:last + 1 - q]
        return bool(np.array_equal(buf[q + 1:last + 1], expected))

    def observed_period(self):
        """Smallest p > 0 after which the all-ones seed state recurs.

        Returns None when the seed state does not recur inside the defined
        range (e.g. q=15, whose maximal period does not fit).
        """
        q = self.params.register_width
        ones_in_window = np.convolve(
            self.bits.astype(np.int32), np.ones(q, dtype=np.int32), mode='valid'
        )
        # window k covers indices k+1 .. k+q; k=0 is the seed itself
        hits = np.flatnonzero(ones_in_window[1:] == q)
        if hits.size == 0:
            return None
        return int(hits[0]) + 1


def generate_feedback_sequence(params) -> FeedbackSequence:
    """Run the recurrence for the given GeneratorParameters."""
    r = params.tap_distance
    q = params.register_width
    last = params.last_index

    buf = np.zeros(MAX_PERIOD + 1, dtype=np.uint8)
    buf[1:q + 1] = 1

    # Blocks of r positions only read earlier blocks, since r < q
    i = q + 1
    while i <= last:
        end = min(i + r, last + 1)
        buf[i:end] = buf[i - r:end - r] ^ buf[i - q:end - q]
        i = end

    return FeedbackSequence(buf, params)


class TauswortheGenerator:
    """One independently owned generator instance.

    Sequences are recomputed on every call; nothing is cached or shared
    between instances.
    """

    def __init__(self, params):
        self.params = params

    def feedback_sequence(self) -> FeedbackSequence:
        return generate_feedback_sequence(self.params)

    def uniform_sequence(self, count=None):
        """Uniform(0,1) deviates packed from a fresh feedback sequence."""
        return pack_uniform(
            self.feedback_sequence(), self.params.window_width, count=count
        )

    def __repr__(self):
        return f"TauswortheGenerator({self.params.label()})"
