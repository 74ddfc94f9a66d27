from enum import Enum


class ZeroPolicy(Enum):
    RAISE = "raise"
    SKIP = "skip"
    CLAMP = "clamp"


class DeviateKind(Enum):
    UNIFORM = "uniform"
    NORMAL = "normal"
