"""
Configuration loader for prdplan.

Loads scheduling knobs from an optional prdplan.env file.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import envparse

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "prdplan.env"


@dataclass
class DecomposerConfig:
    """Tunables for scheduling, milestones and risk thresholds."""
    hours_per_day: float = 8
    default_task_hours: float = 16  # Used when a task has no estimate
    coordination_buffer: float = 1.2  # Applied to the critical path only
    milestone_days_per_task: float = 2
    milestone_phase_slots: int = 6
    critical_task_ratio: float = 0.3
    max_direct_dependencies: int = 3
    pattern_log_path: Optional[Path] = None  # JSONL sink for decomposition patterns


# env key -> (field name, converter)
_ENV_FIELDS = {
    "HOURS_PER_DAY": ("hours_per_day", float),
    "DEFAULT_TASK_HOURS": ("default_task_hours", float),
    "COORDINATION_BUFFER": ("coordination_buffer", float),
    "MILESTONE_DAYS_PER_TASK": ("milestone_days_per_task", float),
    "MILESTONE_PHASE_SLOTS": ("milestone_phase_slots", int),
    "CRITICAL_TASK_RATIO": ("critical_task_ratio", float),
    "MAX_DIRECT_DEPENDENCIES": ("max_direct_dependencies", int),
}


def config_from_env(env: dict, base_dir: Optional[Path] = None) -> DecomposerConfig:
    """Build a DecomposerConfig from parsed env values.

    Unknown keys are ignored. Values that fail to convert, or that are not
    positive, keep the default and log a warning.
    """
    config = DecomposerConfig()

    for key, (field_name, convert) in _ENV_FIELDS.items():
        raw = env.get(key)
        if raw is None or raw == "":
            continue
        try:
            value = convert(raw)
        except ValueError:
            logger.warning(f"Invalid {key} '{raw}', using default {getattr(config, field_name)}")
            continue
        if value <= 0:
            logger.warning(f"{key} must be positive, got {raw}; using default {getattr(config, field_name)}")
            continue
        setattr(config, field_name, value)

    pattern_log = env.get("PATTERN_LOG_PATH", "")
    if pattern_log:
        path = Path(pattern_log).expanduser()
        if not path.is_absolute() and base_dir is not None:
            path = base_dir / path
        config.pattern_log_path = path

    return config


def load_config(config_dir: Optional[Path]) -> DecomposerConfig:
    """Load prdplan.env from config_dir and return DecomposerConfig.

    If config_dir is None or the file doesn't exist, returns defaults.

    Raises:
        ValueError: if the env file has invalid syntax
    """
    if config_dir is None:
        return DecomposerConfig()

    env_path = Path(config_dir) / CONFIG_FILENAME
    if not env_path.exists():
        return DecomposerConfig()

    env = envparse.load_env(str(env_path))
    return config_from_env(env, base_dir=Path(config_dir))
