"""
Analysis Subpackage - Rule-based structure analysis

This package contains the structure analysis pipeline:
    - pitch.py: Pitch strings → semitone numbers
    - features.py: Pitch/rhythm feature extraction per structure
    - segmenter.py: Phrase segmentation (boundaries or fixed windows)
    - relationships.py: Pairwise similarity and classification
    - patterns.py: Recurring melodic/rhythmic openings
    - grouping.py: Similarity groups (A, B, ...) and form string
    - engine.py: StructureAnalysisEngine combining all of the above

Usage:
    from scorevis.analysis import StructureAnalysisEngine, relationship_type_for

    analysis = StructureAnalysisEngine().analyze(score)
    relationship_type_for(analysis, "phrase_2")  # RelationshipType.REPEAT
"""

from scorevis.analysis.engine import StructureAnalysisEngine
from scorevis.analysis.features import StructureFeatures, extract_pitch_sequence, extract_rhythm_sequence
from scorevis.analysis.pitch import pitch_to_number
from scorevis.analysis.relationships import (
    find_relationships,
    get_structure_type_label,
    relationship_for,
    relationship_type_for,
)
from scorevis.analysis.patterns import detect_patterns
from scorevis.analysis.segmenter import segment
