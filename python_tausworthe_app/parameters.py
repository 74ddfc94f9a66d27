"""Generator parameter set with up-front validation."""

import numbers
from dataclasses import dataclass, asdict

from constants import MAX_PERIOD, MAX_REGISTER_WIDTH, MAX_WINDOW_WIDTH
from exceptions import InvalidParameterError


def _require_int(name, value):
    # bool is an Integral subclass but never a meaningful width
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(
            f"{name} must be an integer, got {value!r} ({type(value).__name__})"
        )
    return int(value)


def validate_window_width(window_width):
    """Check 1 < l <= 15 and return l as a plain int."""
    l = _require_int("window width l", window_width)
    if not 1 < l <= MAX_WINDOW_WIDTH:
        raise InvalidParameterError(
            f"Invalid window width l={l}: expected 1 < l <= {MAX_WINDOW_WIDTH}"
        )
    return l


@dataclass(frozen=True)
class GeneratorParameters:
    """Tap distance r, register width q and window width l.

    Bounds: 0 < r < q <= 15 and 1 < l <= 15. The binary sequence then has
    period at most 2^q - 1, which fits in the 2^15 - 1 buffer.
    """
    tap_distance: int
    register_width: int
    window_width: int

    def __post_init__(self):
        r = _require_int("tap distance r", self.tap_distance)
        q = _require_int("register width q", self.register_width)
        l = validate_window_width(self.window_width)

        if not 0 < r < q:
            raise InvalidParameterError(
                f"Invalid tap distance r={r}: expected 0 < r < q (q={q})"
            )
        if q > MAX_REGISTER_WIDTH:
            raise InvalidParameterError(
                f"Invalid register width q={q}: expected q <= {MAX_REGISTER_WIDTH}"
            )

        # Normalize numpy integers to int
        object.__setattr__(self, 'tap_distance', r)
        object.__setattr__(self, 'register_width', q)
        object.__setattr__(self, 'window_width', l)

    @property
    def period(self) -> int:
        """Maximal period 2^q - 1 of the recurrence."""
        return 2 ** self.register_width - 1

    @property
    def last_index(self) -> int:
        """Last sequence index filled by the recurrence (1-based)."""
        return MAX_PERIOD - self.register_width

    def label(self) -> str:
        return f"r={self.tap_distance}, q={self.register_width}, l={self.window_width}"

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> 'GeneratorParameters':
        return cls(
            tap_distance=d['tap_distance'],
            register_width=d['register_width'],
            window_width=d['window_width'],
        )

    @classmethod
    def from_tuple(cls, values) -> 'GeneratorParameters':
        r, q, l = values
        return cls(tap_distance=r, register_width=q, window_width=l)
