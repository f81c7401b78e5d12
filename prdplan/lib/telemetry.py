"""
Decomposition pattern telemetry.

Each successful decomposition can emit one summary record to a sink
supplied by the caller (e.g. a pattern-learning store). Emission is
best-effort: a failing sink is logged and never aborts decomposition.
"""

import json
import logging
from collections import Counter
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class DecompositionPattern:
    """Summary of one decomposition."""
    project_type: str
    task_count: int
    task_type_counts: dict[str, int]
    average_dependency_count: float
    project_name: str
    timestamp: str  # ISO timestamp


PatternSink = Callable[[DecompositionPattern], None]


def build_pattern(project_name: str, project_type: str, tasks: list, now: Optional[datetime] = None) -> DecompositionPattern:
    """Summarize tasks into a DecompositionPattern."""
    counts = Counter(t.type for t in tasks)
    total_deps = sum(len(t.dependencies) for t in tasks)
    return DecompositionPattern(
        project_type=project_type,
        task_count=len(tasks),
        task_type_counts=dict(counts),
        average_dependency_count=total_deps / len(tasks) if tasks else 0.0,
        project_name=project_name,
        timestamp=(now or datetime.now()).isoformat(),
    )


def emit_pattern(sink: Optional[PatternSink], pattern: DecompositionPattern) -> bool:
    """Hand pattern to sink. Returns False (and logs) if the sink fails."""
    if sink is None:
        return False
    try:
        sink(pattern)
    except Exception as e:
        logger.warning(f"Pattern sink failed for {pattern.project_name}: {e}")
        return False
    logger.debug(f"Recorded decomposition pattern for {pattern.project_name}")
    return True


class JsonlPatternSink:
    """Append patterns to a JSONL file, one record per line."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def __call__(self, pattern: DecompositionPattern) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a") as f:
            f.write(json.dumps(asdict(pattern)) + "\n")
            f.flush()


def load_patterns(path: Path) -> list[DecompositionPattern]:
    """Load all recorded patterns. Skips corrupted lines."""
    path = Path(path)
    if not path.exists():
        return []

    patterns = []
    for line_num, line in enumerate(path.read_text().splitlines(), 1):
        if not line.strip():
            continue
        try:
            patterns.append(DecompositionPattern(**json.loads(line)))
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Skipping corrupted pattern line {line_num} in {path}: {e}")
    return patterns
