"""
Spiral runner: configuration and a driver that samples the Cantor spiral.

Config files are YAML with a top-level `spiral:` mapping, for example:

    spiral:
      count: 1000
      constructor: extended
      start_index: 0
      dps: 30
      metrics_every: 250
      coverage_bound: 10
"""

from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union
import time

import mpmath as mp
import yaml

from .coverage import coverage_summary
from .logging import SpiralLogger
from .rationals import CONSTRUCTORS, as_pair, to_mpf
from .spiral import SpiralIterator


@dataclass
class SpiralConfig:
    """Configuration for one enumeration run."""
    count: int = 100                # Values to emit
    constructor: str = "fraction"   # Key of rationals.CONSTRUCTORS
    start_index: int = 0            # Values to skip before emitting
    dps: int = 30                   # Decimal digits for value_decimal
    metrics_every: int = 1000       # Metrics record every N values
    coverage_bound: int = 0         # 0 disables the coverage check

    def validate(self):
        # bool is an int subclass; `count: true` is not a count
        for name in ("count", "start_index", "coverage_bound"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, "
                                 f"got {value!r}")
        for name in ("dps", "metrics_every"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, "
                                 f"got {value!r}")
        if not isinstance(self.constructor, str) or \
                self.constructor not in CONSTRUCTORS:
            raise ValueError(
                f"Unknown rational constructor {self.constructor!r}. "
                f"Available: {sorted(CONSTRUCTORS)}"
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def config_from_dict(data: Optional[Dict[str, Any]]) -> SpiralConfig:
    """Build a validated SpiralConfig from the `spiral:` mapping."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"spiral: expected a mapping, got {type(data).__name__}")
    data = dict(data)
    known = {f.name for f in fields(SpiralConfig)}
    unknown = sorted(str(k) for k in set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}")
    return SpiralConfig(**data).validate()


def load_config(config_path: Union[str, Path]) -> SpiralConfig:
    with open(config_path, 'r') as f:
        try:
            doc = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{config_path}: invalid YAML: {e}") from e
    if not isinstance(doc, dict):
        raise ValueError(f"{config_path}: expected a mapping at top level")
    return config_from_dict(doc.get("spiral"))


def value_record(index: int, value, dps: int = 30) -> Dict[str, Any]:
    """JSON-ready description of one emitted value."""
    n, d = as_pair(value)
    approx = to_mpf(value, dps)
    return {
        "index": index,
        "numerator": n,
        "denominator": d,
        "value": str(value),
        "value_float": float(approx),
        "value_decimal": mp.nstr(approx, dps),
    }


def _walk_metrics(it: SpiralIterator, t_start: float) -> Dict[str, Any]:
    return {
        "emitted": it.emitted,
        "lattice_steps": it.steps,
        "skipped_zero": it.skipped_zero,
        "skipped_duplicate": it.skipped_duplicate,
        "seen_size": it.seen_count,
        "p": it.state.p,
        "q": it.state.q,
        "direction": it.state.direction.value,
        "elapsed_sec": time.time() - t_start,
    }


def run_spiral(config: SpiralConfig,
               logger: Optional[SpiralLogger] = None) -> Dict[str, Any]:
    """Emit `config.count` spiral values after skipping `config.start_index`.

    Each value goes to logger.log_value, walk counters to logger.log_metrics
    every `metrics_every` values and once at the end.

    Returns:
        Summary dict of the walk counters plus first/last emitted values.
    """
    config.validate()
    t_start = time.time()
    it = SpiralIterator(config.constructor)

    for _ in range(config.start_index):
        next(it)

    first = last = None
    for offset in range(config.count):
        value = next(it)
        if first is None:
            first = value
        last = value

        if logger is not None:
            logger.log_value(
                value_record(config.start_index + offset, value, config.dps)
            )
            if (offset + 1) % config.metrics_every == 0:
                logger.log_metrics(_walk_metrics(it, t_start))

    if logger is not None:
        logger.log_metrics({**_walk_metrics(it, t_start), "final": True})

    summary: Dict[str, Any] = {
        "constructor": config.constructor,
        "start_index": config.start_index,
        "count": config.count,
        "first": None if first is None else str(first),
        "last": None if last is None else str(last),
        "emitted": it.emitted,
        "lattice_steps": it.steps,
        "skipped_zero": it.skipped_zero,
        "skipped_duplicate": it.skipped_duplicate,
    }

    if config.coverage_bound:
        summary["coverage"] = coverage_summary(config.coverage_bound,
                                               config.constructor)

    summary["wall_time_sec"] = time.time() - t_start
    return summary
