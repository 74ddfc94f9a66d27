"""Structured result data model for generator runs with JSON/CSV export."""

import json
import csv
from dataclasses import dataclass, field, asdict
from typing import List, Optional, Tuple


@dataclass
class StatOutcome:
    """Result of one hypothesis test on a generated sequence."""
    name: str
    statistic: float
    p_value: float
    alpha: float
    rejected: bool  # null hypothesis rejected at level alpha
    stream: str = "u1"


@dataclass
class SequenceSummary:
    """Descriptive statistics of one generated stream."""
    kind: str
    count: int
    mean: float
    variance: float
    minimum: float
    maximum: float
    stream: str = "u1"
    lag_correlation: Optional[float] = None


@dataclass
class RunConfig:
    """Captures all parameters of a generator run."""
    params_1: Tuple[int, int, int]  # (r, q, l)
    count: int
    normal: bool
    zero_policy: str
    alpha: float
    bins: int
    lag: int
    threads: int
    timestamp: str
    params_2: Optional[Tuple[int, int, int]] = None


@dataclass
class RunResult:
    """Complete run result container."""
    config: RunConfig
    summaries: List[SequenceSummary]
    tests: List[StatOutcome]
    wall_clock_seconds: float
    skipped_indices: List[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        d = asdict(self)
        # Convert tuples to lists for JSON
        d['config']['params_1'] = list(d['config']['params_1'])
        if d['config']['params_2'] is not None:
            d['config']['params_2'] = list(d['config']['params_2'])
        return d

    def to_json(self, filepath: str) -> None:
        """Export results to a JSON file."""
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def to_csv(self, filepath: str) -> None:
        """Export test outcomes to a CSV file."""
        if not self.tests:
            return
        fieldnames = ['stream', 'name', 'statistic', 'p_value', 'alpha', 'rejected']
        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for t in self.tests:
                row = {k: getattr(t, k) for k in fieldnames}
                writer.writerow(row)

    def tests_for(self, stream: str) -> List[StatOutcome]:
        return [t for t in self.tests if t.stream == stream]

    @property
    def any_rejected(self) -> bool:
        return any(t.rejected for t in self.tests)

    @classmethod
    def from_json(cls, filepath: str) -> 'RunResult':
        """Load results from a JSON file."""
        with open(filepath, 'r', encoding='utf-8') as f:
            d = json.load(f)

        config_d = d['config']
        config_d['params_1'] = tuple(config_d['params_1'])
        if config_d.get('params_2') is not None:
            config_d['params_2'] = tuple(config_d['params_2'])
        config = RunConfig(**config_d)

        summaries = [SequenceSummary(**s) for s in d['summaries']]
        tests = [StatOutcome(**t) for t in d['tests']]

        return cls(
            config=config,
            summaries=summaries,
            tests=tests,
            wall_clock_seconds=d['wall_clock_seconds'],
            skipped_indices=d.get('skipped_indices', [])
        )
