"""
Relationship Module - Pairwise Similarity and Classification of Structures

For every unordered pair of structures (i < j) this module computes

    similarity = (pitch_similarity + rhythm_similarity) / 2

and classifies the pair:

    similarity > 0.8  → REPEAT
    similarity > 0.6  → SIMILAR
    similarity < 0.3  → CONTRAST
    otherwise         → TRANSITION

Pitch similarity compares interval sequences position by position with a
one-semitone tolerance. Rhythm similarity is the longest common subsequence
of the S/M/L duration patterns, normalised by the longer pattern.

The pair loop is O(n^2) in the number of structures, which is bounded by
the number of measures / 4.
"""

from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from scorevis.analysis.features import StructureFeatures
from scorevis.config import ANALYSIS_CONFIG, merge_config
from scorevis.data.schema import RelationshipType, StructureAnalysis, StructureRelationship


# =============================================================================
# CONSTANTS
# =============================================================================

RELATIONSHIP_LABELS = {
    RelationshipType.SIMILAR: "Similar",
    RelationshipType.CONTRAST: "Contrast",
    RelationshipType.TRANSITION: "Transition",
    RelationshipType.REPEAT: "Repeat",
}

DESCRIPTION_TEMPLATES = {
    RelationshipType.REPEAT: "Phrase {first} and {second} are nearly identical ({percent}% similar)",
    RelationshipType.SIMILAR: "Phrase {first} and {second} share similar melodic/rhythmic patterns ({percent}% similar)",
    RelationshipType.CONTRAST: "Phrase {first} and {second} provide strong contrast ({percent}% similar)",
    RelationshipType.TRANSITION: "Phrase {first} transitions to {second} with moderate variation ({percent}% similar)",
}


# =============================================================================
# SIMILARITY MEASURES
# =============================================================================

def sequence_similarity(
    seq1: Sequence[int],
    seq2: Sequence[int],
    tolerance: int = ANALYSIS_CONFIG["interval_tolerance"]
) -> float:
    """
    Fraction of aligned positions whose intervals differ by at most `tolerance`.

    Only the common prefix is compared, but the count is divided by the
    longer length, so extra intervals on one side lower the score.

    Examples:
        sequence_similarity([2, 2, -4], [2, 3, -4]) → 1.0
        sequence_similarity([2, 2], [2, 2, 5, 5])   → 0.5
        sequence_similarity([], [1])                → 0.0
    """
    if len(seq1) == 0 or len(seq2) == 0:
        return 0.0

    common = min(len(seq1), len(seq2))
    a = np.asarray(seq1[:common])
    b = np.asarray(seq2[:common])
    matches = int(np.count_nonzero(np.abs(a - b) <= tolerance))

    return matches / max(len(seq1), len(seq2))


def longest_common_subsequence(str1: str, str2: str) -> int:
    """Length of the longest common subsequence, by the standard DP table."""
    m, n = len(str1), len(str2)
    dp = np.zeros((m + 1, n + 1), dtype=int)

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if str1[i - 1] == str2[j - 1]:
                dp[i, j] = dp[i - 1, j - 1] + 1
            else:
                dp[i, j] = max(dp[i - 1, j], dp[i, j - 1])

    return int(dp[m, n])


def string_similarity(str1: str, str2: str) -> float:
    """LCS length divided by the longer string's length (0.0 if either is empty)."""
    if not str1 or not str2:
        return 0.0
    return longest_common_subsequence(str1, str2) / max(len(str1), len(str2))


# =============================================================================
# CLASSIFICATION
# =============================================================================

def classify_relationship(
    similarity: float,
    config: Optional[Dict[str, Any]] = None
) -> RelationshipType:
    """Map a combined similarity to a relationship type (thresholds checked in order)."""
    config = merge_config(ANALYSIS_CONFIG, config)
    if similarity > config["repeat_threshold"]:
        return RelationshipType.REPEAT
    if similarity > config["similar_threshold"]:
        return RelationshipType.SIMILAR
    if similarity < config["contrast_threshold"]:
        return RelationshipType.CONTRAST
    return RelationshipType.TRANSITION


def round_percent(similarity: float) -> str:
    """Similarity as a whole percentage, halves rounded up (0.625 → "63")."""
    return str(int(similarity * 100 + 0.5))


def describe_relationship(
    relationship_type: RelationshipType,
    first: int,
    second: int,
    similarity: float
) -> str:
    """Human-readable description for a pair at 1-based positions `first` and `second`."""
    return DESCRIPTION_TEMPLATES[relationship_type].format(
        first=first,
        second=second,
        percent=round_percent(similarity),
    )


def get_structure_type_label(relationship_type: RelationshipType) -> str:
    """Display label for a relationship type, e.g. REPEAT → "Repeat"."""
    return RELATIONSHIP_LABELS[RelationshipType(relationship_type)]


# =============================================================================
# PAIRWISE ANALYSIS
# =============================================================================

def compare_features(
    f1: StructureFeatures,
    f2: StructureFeatures,
    config: Optional[Dict[str, Any]] = None
) -> float:
    """Combined (unweighted mean) pitch and rhythm similarity of two structures."""
    config = merge_config(ANALYSIS_CONFIG, config)
    pitch_sim = sequence_similarity(
        f1.pitch.intervals, f2.pitch.intervals, config["interval_tolerance"]
    )
    rhythm_sim = string_similarity(f1.rhythm.pattern, f2.rhythm.pattern)
    return (pitch_sim + rhythm_sim) / 2


def find_relationships(
    features: List[StructureFeatures],
    config: Optional[Dict[str, Any]] = None
) -> List[StructureRelationship]:
    """
    Relate every pair of structures.

    Returns:
        n(n-1)/2 relationships, ordered by (i, j) with i < j
    """
    config = merge_config(ANALYSIS_CONFIG, config)
    relationships = []

    for i in range(len(features)):
        for j in range(i + 1, len(features)):
            f1, f2 = features[i], features[j]
            similarity = compare_features(f1, f2, config)
            relationship_type = classify_relationship(similarity, config)

            relationships.append(StructureRelationship(
                id1=f1.structure.id,
                id2=f2.structure.id,
                type=relationship_type,
                similarity=similarity,
                description=describe_relationship(relationship_type, i + 1, j + 1, similarity),
            ))

    return relationships


# =============================================================================
# LOOKUP
# =============================================================================

def relationship_for(
    analysis: StructureAnalysis,
    structure_id: str
) -> Optional[StructureRelationship]:
    """First relationship (in generation order) that involves `structure_id`."""
    for relationship in analysis.relationships:
        if relationship.involves(structure_id):
            return relationship
    return None


def relationship_type_for(
    analysis: StructureAnalysis,
    structure_id: str
) -> Optional[RelationshipType]:
    """
    Relationship type a recommender should use for `structure_id`.

    The analysis is passed in explicitly instead of being cached on the
    engine, so callers decide which run they are asking about.
    """
    relationship = relationship_for(analysis, structure_id)
    return relationship.type if relationship else None
