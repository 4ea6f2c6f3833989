"""Tests for scorevis/analysis/relationships.py"""

import pytest

from scorevis.analysis.engine import StructureAnalysisEngine
from scorevis.analysis.relationships import (
    classify_relationship,
    describe_relationship,
    find_relationships,
    get_structure_type_label,
    longest_common_subsequence,
    relationship_for,
    relationship_type_for,
    round_percent,
    sequence_similarity,
    string_similarity,
)
from scorevis.data.schema import RelationshipType, StructureAnalysis

from tests.helpers import PHRASE_A, PHRASE_B, make_features, make_score


class TestSequenceSimilarity:

    def test_within_tolerance(self):
        assert sequence_similarity([2, 2, -4], [2, 3, -4]) == 1.0

    def test_outside_tolerance(self):
        assert sequence_similarity([0, 0, 0], [5, 5, 5]) == 0.0

    def test_divides_by_longer(self):
        assert sequence_similarity([2, 2], [2, 2, 5, 5]) == 0.5

    def test_empty(self):
        assert sequence_similarity([], [1]) == 0.0
        assert sequence_similarity([1], []) == 0.0
        assert sequence_similarity([], []) == 0.0


class TestStringSimilarity:

    def test_lcs(self):
        assert longest_common_subsequence("ABCBDAB", "BDCABA") == 4
        assert longest_common_subsequence("SMLS", "SLS") == 3
        assert longest_common_subsequence("SSSS", "LLLL") == 0
        assert longest_common_subsequence("", "SML") == 0

    def test_normalized_by_longer(self):
        assert string_similarity("SMLS", "SLS") == 0.75
        assert string_similarity("MMMM", "MMMM") == 1.0

    def test_empty(self):
        assert string_similarity("", "S") == 0.0
        assert string_similarity("", "") == 0.0


class TestClassification:

    @pytest.mark.parametrize("similarity,expected", [
        (1.0, RelationshipType.REPEAT),
        (0.81, RelationshipType.REPEAT),
        (0.8, RelationshipType.SIMILAR),
        (0.61, RelationshipType.SIMILAR),
        (0.6, RelationshipType.TRANSITION),
        (0.3, RelationshipType.TRANSITION),
        (0.29, RelationshipType.CONTRAST),
        (0.0, RelationshipType.CONTRAST),
    ])
    def test_thresholds(self, similarity, expected):
        assert classify_relationship(similarity) == expected

    def test_every_similarity_gets_exactly_one_type(self):
        for step in range(101):
            assert classify_relationship(step / 100) in set(RelationshipType)

    def test_description(self):
        assert describe_relationship(RelationshipType.REPEAT, 1, 2, 0.95) == \
            "Phrase 1 and 2 are nearly identical (95% similar)"
        assert describe_relationship(RelationshipType.TRANSITION, 2, 4, 0.456) == \
            "Phrase 2 transitions to 4 with moderate variation (46% similar)"

    def test_description_rounds_halves_up(self):
        # (0.75 + 0.5) / 2
        assert describe_relationship(RelationshipType.SIMILAR, 1, 3, 0.625) == \
            "Phrase 1 and 3 share similar melodic/rhythmic patterns (63% similar)"
        assert round_percent(0.125) == "13"
        assert round_percent(0.0) == "0"
        assert round_percent(1.0) == "100"

    def test_partial_config_override(self):
        assert classify_relationship(0.85, {"repeat_threshold": 0.9}) == RelationshipType.SIMILAR
        assert classify_relationship(0.2, {"repeat_threshold": 0.9}) == RelationshipType.CONTRAST

    def test_labels(self):
        assert get_structure_type_label(RelationshipType.REPEAT) == "Repeat"
        assert get_structure_type_label("contrast") == "Contrast"


class TestFindRelationships:

    def test_pair_count_and_order(self):
        features = [make_features(f"phrase_{i}", [i], "M") for i in range(1, 6)]
        relationships = find_relationships(features)

        assert len(relationships) == 10
        assert [(r.id1, r.id2) for r in relationships[:4]] == [
            ("phrase_1", "phrase_2"),
            ("phrase_1", "phrase_3"),
            ("phrase_1", "phrase_4"),
            ("phrase_1", "phrase_5"),
        ]

    def test_identical_phrases_repeat(self):
        analysis = StructureAnalysisEngine().analyze(make_score(PHRASE_A + PHRASE_A))

        assert len(analysis.relationships) == 1
        relationship = analysis.relationships[0]
        assert relationship.similarity == pytest.approx(1.0)
        assert relationship.type == RelationshipType.REPEAT
        assert "100% similar" in relationship.description

    def test_disjoint_phrases_contrast(self):
        analysis = StructureAnalysisEngine().analyze(make_score(PHRASE_A + PHRASE_B))

        relationship = analysis.relationships[0]
        assert relationship.similarity < 0.3
        assert relationship.type == RelationshipType.CONTRAST

    def test_similarity_bounds(self):
        features = [
            make_features("a", [2, 2, 1], "MMMM"),
            make_features("b", [2, 2, 1, 5, 7], "MMMMLLSS"),
            make_features("c", [], ""),
            make_features("d", [-12], "L"),
            make_features("e", [2, 3, 0], "MMSM"),
        ]
        for r in find_relationships(features):
            assert 0.0 <= r.similarity <= 1.0

    def test_partial_match(self):
        features = [
            make_features("a", [2, 2, 1, 5], "MMMM"),
            make_features("b", [2, 2, 8, 8], "MMSS"),
        ]
        relationship = find_relationships(features)[0]
        # pitch 2/4, rhythm 2/4
        assert relationship.similarity == pytest.approx(0.5)
        assert relationship.type == RelationshipType.TRANSITION


class TestRelationshipLookup:

    def test_first_relationship_involving_structure(self):
        analysis = StructureAnalysisEngine().analyze(
            make_score(PHRASE_A + PHRASE_A + PHRASE_B + PHRASE_A)
        )
        assert relationship_type_for(analysis, "phrase_1") == RelationshipType.REPEAT
        assert relationship_type_for(analysis, "phrase_3") == RelationshipType.CONTRAST

        relationship = relationship_for(analysis, "phrase_4")
        assert (relationship.id1, relationship.id2) == ("phrase_1", "phrase_4")

    def test_unknown_structure(self):
        assert relationship_type_for(StructureAnalysis(), "phrase_1") is None
