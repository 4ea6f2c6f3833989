"""
Configuration for the analysis engine and the preference learner.

Every heuristic constant used by the package lives in one of the two
dictionaries below. Components take an optional partial dict that is
merged over these defaults, and `load_config` reads overrides from YAML:

    analysis:
      phrase_size: 8
      repeat_threshold: 0.85
    learner:
      similarity_threshold: 0.6
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml


# =============================================================================
# DEFAULTS
# =============================================================================

ANALYSIS_CONFIG: Dict[str, Any] = {
    # Segmentation
    "phrase_size": 4,            # Measures per phrase in fixed-window fallback
    "boundary_interval": 4,      # Boundaries only fall on multiples of this
    "long_note_duration": 2.0,   # A note this long closes a phrase

    # Feature extraction
    "short_duration": 0.5,       # <= this is class "S"
    "medium_duration": 1.0,      # <= this is class "M", longer is "L"
    "default_semitone": 60,      # Used for pitch strings that don't parse

    # Relationships
    "interval_tolerance": 1,     # Semitones
    "repeat_threshold": 0.8,
    "similar_threshold": 0.6,
    "contrast_threshold": 0.3,

    # Patterns
    "melodic_prefix": 4,         # Intervals per melodic key
    "rhythmic_prefix": 8,        # Duration classes per rhythmic key
}

LEARNER_CONFIG: Dict[str, Any] = {
    "accept_reward": 1.0,
    "modify_reward": 0.5,
    "reject_reward": -1.0,
    "similarity_threshold": 0.7,  # Above this a customization counts as "modified"
    "element_count_scale": 5,
}

# Sizes and divisors, must be >= 1
POSITIVE_INT_KEYS = {
    "phrase_size",
    "boundary_interval",
    "melodic_prefix",
    "rhythmic_prefix",
    "element_count_scale",
}


# =============================================================================
# HELPERS
# =============================================================================

def merge_config(defaults: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Return a copy of `defaults` with `overrides` applied.

    Raises:
        ValueError: If `overrides` contains a key that has no default,
            or a size key that is not a positive integer
    """
    merged = defaults.copy()
    if not overrides:
        return merged

    unknown = sorted(set(overrides) - set(defaults))
    if unknown:
        raise ValueError(
            f"Unknown configuration keys: {unknown}. "
            f"Valid keys are: {sorted(defaults)}"
        )
    for key in sorted(POSITIVE_INT_KEYS & set(overrides)):
        value = overrides[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f"Configuration key '{key}' must be a positive integer. Got: {value!r}")

    merged.update(overrides)
    return merged


def load_config(path: Union[str, Path]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Load analysis and learner settings from a YAML file.

    Args:
        path: YAML file with optional `analysis` and `learner` sections

    Returns:
        (analysis_config, learner_config), both complete dictionaries

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file has unknown sections or keys
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file must contain a mapping. Got: {type(raw).__name__}")

    unknown_sections = sorted(set(raw) - {"analysis", "learner"})
    if unknown_sections:
        raise ValueError(
            f"Unknown config sections: {unknown_sections}. "
            f"Valid sections are: ['analysis', 'learner']"
        )

    analysis = merge_config(ANALYSIS_CONFIG, raw.get("analysis"))
    learner = merge_config(LEARNER_CONFIG, raw.get("learner"))
    return analysis, learner
