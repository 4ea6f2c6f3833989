"""
Pattern Module - Recurring Melodic and Rhythmic Openings

Two passes over the structures build one shared map from pattern key to
occurrences:

    melodic:  first 4 intervals, joined by commas     e.g. "2,2,1,-5"
    rhythmic: first 8 duration classes, namespaced   e.g. "rhythm:MMSSMMML"

Only keys seen in at least two structures are reported, in first-seen
order (all melodic keys before rhythmic ones).
"""

from typing import Any, Dict, List, Optional, Tuple

from scorevis.analysis.features import StructureFeatures
from scorevis.config import ANALYSIS_CONFIG, merge_config
from scorevis.data.schema import PatternMatch, PatternOccurrence, PatternType

RHYTHM_KEY_PREFIX = "rhythm:"


def melodic_key(features: StructureFeatures, length: int = ANALYSIS_CONFIG["melodic_prefix"]) -> str:
    return ",".join(str(i) for i in features.pitch.intervals[:length])


def rhythmic_key(features: StructureFeatures, length: int = ANALYSIS_CONFIG["rhythmic_prefix"]) -> str:
    return features.rhythm.pattern[:length]


def detect_patterns(
    features: List[StructureFeatures],
    config: Optional[Dict[str, Any]] = None
) -> List[PatternMatch]:
    """
    Find melodic/rhythmic openings shared by two or more structures.

    Args:
        features: Per-structure features, in structure order
        config: Partial analysis config merged over ANALYSIS_CONFIG

    Returns:
        PatternMatch list; every match has at least two occurrences
    """
    config = merge_config(ANALYSIS_CONFIG, config)

    # key -> (pattern, type, occurrences); dicts keep insertion order
    seen: Dict[str, Tuple[str, PatternType, List[PatternOccurrence]]] = {}

    def record(key: str, pattern: str, pattern_type: PatternType, position: int, f: StructureFeatures):
        if key not in seen:
            seen[key] = (pattern, pattern_type, [])
        seen[key][2].append(PatternOccurrence(structure_id=f.structure.id, position=position))

    for position, f in enumerate(features):
        pattern = melodic_key(f, config["melodic_prefix"])
        if pattern:
            record(pattern, pattern, PatternType.MELODIC, position, f)

    for position, f in enumerate(features):
        pattern = rhythmic_key(f, config["rhythmic_prefix"])
        if pattern:
            record(RHYTHM_KEY_PREFIX + pattern, pattern, PatternType.RHYTHMIC, position, f)

    return [
        PatternMatch(pattern=pattern, occurrences=occurrences, type=pattern_type)
        for pattern, pattern_type, occurrences in seen.values()
        if len(occurrences) > 1
    ]
