"""
Structure Analysis Engine - Main Entry Point for Score Analysis

This module combines all analysis components into one pipeline:

    MusicXMLData
         │
         ▼
    ┌─────────────┐
    │  segmenter  │ → phrase_1 .. phrase_n
    └─────────────┘
         │
         ▼
    ┌─────────────┐
    │  features   │ → PitchSequence + RhythmSequence per phrase
    └─────────────┘
         │
         ├──────────────────┬──────────────────┐
         ▼                  ▼                  ▼
    relationships       patterns           grouping
         │                  │                  │
         └──────────────────┴──────────────────┘
                            ▼
                    StructureAnalysis

The engine is synchronous and keeps no state between calls. Each call
returns a fresh StructureAnalysis; callers that need to look up a
structure's relationship later keep that value and pass it to
`relationship_type_for`.
"""

import logging
from typing import Any, Dict, List, Optional

from scorevis.analysis.features import StructureFeatures, extract_features
from scorevis.analysis.grouping import assign_similarity_groups, describe_form
from scorevis.analysis.patterns import detect_patterns
from scorevis.analysis.relationships import find_relationships
from scorevis.analysis.segmenter import segment
from scorevis.config import ANALYSIS_CONFIG, merge_config
from scorevis.data.schema import (
    MusicStructure,
    MusicXMLData,
    StructureAnalysis,
    validate_structures,
)

logger = logging.getLogger(__name__)


class StructureAnalysisEngine:
    """
    Segments a score and relates its phrases to each other.

    Example:
        >>> engine = StructureAnalysisEngine()
        >>> analysis = engine.analyze(score)
        >>> analysis.form
        'AABA'
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Args:
            config: Partial analysis config merged over ANALYSIS_CONFIG
        """
        self.config = merge_config(ANALYSIS_CONFIG, config)

    def analyze(self, score: MusicXMLData) -> StructureAnalysis:
        """
        Run the full pipeline on a score.

        Returns:
            Structures, pairwise relationships, recurring patterns,
            similarity groups and the resulting form string
        """
        structures = segment(score, self.config)
        return self._analyze(score, structures)

    def analyze_structures(
        self,
        score: MusicXMLData,
        structures: List[MusicStructure]
    ) -> StructureAnalysis:
        """
        Relate caller-supplied structures, e.g. after AI refinement.

        Raises:
            InvalidSegmentInput: If the structures overlap, are out of
                range, or otherwise break the segment invariants
        """
        validate_structures(structures, score.total_measures)
        ordered = [
            s.model_copy(deep=True)
            for s in sorted(structures, key=lambda s: (s.start_measure, s.end_measure))
        ]
        return self._analyze(score, ordered)

    def extract_all_features(
        self,
        score: MusicXMLData,
        structures: List[MusicStructure]
    ) -> List[StructureFeatures]:
        """Features for each structure, from the measures it spans."""
        return [
            extract_features(
                s,
                score.measures[s.start_measure - 1:s.end_measure],
                self.config,
            )
            for s in structures
        ]

    def _analyze(self, score: MusicXMLData, structures: List[MusicStructure]) -> StructureAnalysis:
        features = self.extract_all_features(score, structures)
        relationships = find_relationships(features, self.config)
        patterns = detect_patterns(features, self.config)
        groups = assign_similarity_groups(features, relationships)

        logger.info(
            "Analyzed '%s': %d structures, %d relationships, %d patterns",
            score.title, len(structures), len(relationships), len(patterns)
        )

        return StructureAnalysis(
            structures=structures,
            relationships=relationships,
            patterns=patterns,
            groups=groups,
            form=describe_form(structures),
        )


# =============================================================================
# TESTING
# =============================================================================

if __name__ == "__main__":
    from scorevis.data.schema import Measure, Note

    logging.basicConfig(level=logging.DEBUG)

    motif = [("C4", 1.0), ("D4", 1.0), ("E4", 1.0), ("F4", 1.0)]
    answer = [("G4", 0.5), ("F4", 0.5), ("E4", 2.0), ("C4", 1.0)]

    measures = []
    for number, phrase in enumerate([motif, motif, answer, motif] * 4, 1):
        notes = [Note(pitch=p, duration=d, measure=number, beat=b) for b, (p, d) in enumerate(phrase, 1)]
        measures.append(Measure(number=number, notes=notes))

    score = MusicXMLData(title="Demo", measures=measures)
    analysis = StructureAnalysisEngine().analyze(score)

    print("=" * 60)
    print(f"Form: {analysis.form}")
    print("=" * 60)
    for r in analysis.relationships:
        print(f"  {r.id1} ~ {r.id2}: {r.type.value:<10} {r.description}")
    for p in analysis.patterns:
        print(f"  {p.type.value:<8} '{p.pattern}' x{len(p.occurrences)}")
