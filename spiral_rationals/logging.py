"""
Structured logging for spiral enumeration runs.

Produces:
  - manifest.json: One-time run metadata (git hash, config, node info)
  - values.jsonl:  One record per emitted rational
  - metrics.jsonl: Walk counters and timing snapshots
"""

import json
import hashlib
import subprocess
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Any


@dataclass
class RunManifest:
    """Run-level metadata, saved once per run."""
    run_id: str
    timestamp: str
    git_commit: str
    config_hash: str
    node_name: str
    python_version: str
    package_version: str
    config: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save(self, path: Path):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2, default=str)


def _get_git_commit() -> str:
    """Get current git commit hash, or 'unknown'."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True, text=True, timeout=5,
        )
        return result.stdout.strip() if result.returncode == 0 else "unknown"
    except (OSError, subprocess.SubprocessError):
        return "unknown"


def _config_hash(config: Dict[str, Any]) -> str:
    """Deterministic hash of config dict."""
    s = json.dumps(config, sort_keys=True, default=str)
    return hashlib.sha256(s.encode()).hexdigest()[:16]


def create_manifest(run_id: str, config: Dict[str, Any]) -> RunManifest:
    """Create a RunManifest with auto-detected metadata."""
    import platform
    import sys
    from . import __version__

    return RunManifest(
        run_id=run_id,
        timestamp=time.strftime("%Y-%m-%dT%H:%M:%S%z"),
        git_commit=_get_git_commit(),
        config_hash=_config_hash(config),
        node_name=platform.node(),
        python_version=sys.version,
        package_version=__version__,
        config=config,
    )


class SpiralLogger:
    """Structured JSONL logger for one enumeration run.

    Writes two files:
      - values.jsonl   (every emitted value)
      - metrics.jsonl  (walk counters / timing)
    """

    def __init__(self, output_dir: Path, flush_every: int = 100):
        self.output_dir = Path(output_dir)
        self.flush_every = flush_every

        self.output_dir.mkdir(parents=True, exist_ok=True)

        self._values_path = self.output_dir / "values.jsonl"
        self._metrics_path = self.output_dir / "metrics.jsonl"

        # Append mode so repeated runs into one directory accumulate
        self._values_f = open(self._values_path, 'a')
        self._metrics_f = open(self._metrics_path, 'a')

        self._values_count = 0
        self._metrics_count = 0

    @property
    def values_path(self) -> Path:
        return self._values_path

    @property
    def metrics_path(self) -> Path:
        return self._metrics_path

    def log_value(self, record: Dict[str, Any]):
        """Log one emitted rational."""
        self._values_f.write(json.dumps(record, default=str) + "\n")
        self._values_count += 1

        if self._values_count % self.flush_every == 0:
            self._values_f.flush()

    def log_metrics(self, record: Dict[str, Any]):
        """Log walk counters / timing."""
        record["timestamp"] = time.time()
        self._metrics_f.write(json.dumps(record, default=str) + "\n")
        self._metrics_f.flush()
        self._metrics_count += 1

    def close(self):
        """Flush and close all log files."""
        for f in [self._values_f, self._metrics_f]:
            if not f.closed:
                f.flush()
                f.close()

    @property
    def summary(self) -> Dict[str, int]:
        return {
            "values_logged": self._values_count,
            "metrics_logged": self._metrics_count,
        }

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
