"""Tests for scorevis/data/schema.py and scorevis/data/visual.py"""

import pytest
from pydantic import ValidationError

from scorevis.data.schema import (
    InvalidSegmentInput,
    MusicStructure,
    MusicXMLData,
    Note,
    PatternMatch,
    PatternOccurrence,
    PatternType,
    PitchSequence,
    RhythmSequence,
    StructureLevel,
    parse_structures,
    validate_structures,
)
from scorevis.data.visual import UserAction


def phrase(structure_id, start, end, level=StructureLevel.PHRASE):
    return MusicStructure(id=structure_id, level=level, start_measure=start, end_measure=end)


class TestScoreInput:

    def test_accepts_camel_case_layout(self):
        score = MusicXMLData.model_validate({
            "title": "Minuet",
            "timeSignature": "3/4",
            "keySignature": "G",
            "measures": [
                {"number": 1, "notes": [{"pitch": "G4", "duration": 1, "measure": 1, "beat": 1}]},
                {"number": 2, "notes": []},
            ],
        })
        assert score.time_signature == "3/4"
        assert score.total_measures == 2
        assert score.measures[0].notes[0].pitch == "G4"

    def test_rejects_malformed_score(self):
        with pytest.raises(ValidationError):
            MusicXMLData.model_validate({"measures": "not a list"})

    def test_rejects_non_numeric_duration(self):
        with pytest.raises(ValidationError):
            Note(pitch="C4", duration="long", measure=1, beat=1)

    def test_note_is_immutable(self):
        note = Note(pitch="C4", duration=1.0, measure=1, beat=1)
        with pytest.raises(ValidationError):
            note.pitch = "D4"

    def test_malformed_pitch_is_tolerated(self):
        note = Note(pitch="???", duration=1.0, measure=1)
        assert note.pitch == "???"


class TestFeatureModels:

    def test_interval_count_must_match(self):
        with pytest.raises(ValidationError):
            PitchSequence(pitches=["C4", "D4"], intervals=[2, 2])

    def test_empty_pitch_sequence(self):
        seq = PitchSequence()
        assert seq.intervals == []
        assert seq.contour.value == "stable"

    def test_rhythm_pattern_characters(self):
        assert RhythmSequence(pattern="SML").pattern == "SML"
        with pytest.raises(ValidationError):
            RhythmSequence(pattern="SXL")

    def test_pattern_match_needs_two_occurrences(self):
        with pytest.raises(ValidationError):
            PatternMatch(
                pattern="2,2",
                occurrences=[PatternOccurrence(structure_id="phrase_1", position=0)],
                type=PatternType.MELODIC,
            )


class TestSerialization:

    def test_dump_by_alias(self):
        data = phrase("phrase_1", 1, 4).model_dump(by_alias=True, mode="json")
        assert data["startMeasure"] == 1
        assert data["endMeasure"] == 4
        assert data["level"] == "phrase"
        assert data["similarityGroup"] is None

    def test_user_action_reward_optional(self):
        action = UserAction.model_validate({
            "structureId": "phrase_1",
            "selectedScheme": {"id": "s1", "layout": "grid"},
            "isCustomized": True,
        })
        assert action.reward is None
        assert action.recommended_schemes == []


class TestParseStructures:

    def test_valid_structures(self):
        structures = parse_structures([
            {"id": "phrase_1", "level": "phrase", "startMeasure": 1, "endMeasure": 4},
            {"id": "phrase_2", "level": "phrase", "start_measure": 5, "end_measure": 8},
        ])
        assert [s.id for s in structures] == ["phrase_1", "phrase_2"]

    def test_unknown_level_is_invalid_segment_input(self):
        with pytest.raises(InvalidSegmentInput, match="#1"):
            parse_structures([
                {"id": "x", "level": "movement", "startMeasure": 1, "endMeasure": 4},
            ])

    def test_missing_field_is_invalid_segment_input(self):
        with pytest.raises(InvalidSegmentInput, match="#2"):
            parse_structures([
                {"id": "a", "level": "phrase", "startMeasure": 1, "endMeasure": 4},
                {"id": "b", "level": "phrase", "startMeasure": 5},
            ])


class TestValidateStructures:

    def test_partition_passes(self):
        validate_structures([phrase("a", 1, 4), phrase("b", 5, 8)], total_measures=8)

    def test_start_after_end(self):
        with pytest.raises(InvalidSegmentInput, match="starts after it ends"):
            validate_structures([phrase("a", 4, 2)], total_measures=8)

    def test_out_of_range(self):
        with pytest.raises(InvalidSegmentInput, match="outside"):
            validate_structures([phrase("a", 5, 9)], total_measures=8)
        with pytest.raises(InvalidSegmentInput, match="outside"):
            validate_structures([phrase("a", 0, 2)], total_measures=8)

    def test_overlap_same_level(self):
        with pytest.raises(InvalidSegmentInput, match="overlap"):
            validate_structures([phrase("a", 1, 4), phrase("b", 4, 8)], total_measures=8)

    def test_overlap_detected_regardless_of_order(self):
        with pytest.raises(InvalidSegmentInput, match="overlap"):
            validate_structures([phrase("b", 3, 8), phrase("a", 1, 4)], total_measures=8)

    def test_different_levels_may_nest(self):
        validate_structures(
            [phrase("p", 1, 8, StructureLevel.PERIOD), phrase("a", 1, 4), phrase("b", 5, 8)],
            total_measures=8,
        )

    def test_duplicate_ids(self):
        with pytest.raises(InvalidSegmentInput, match="Duplicate"):
            validate_structures([phrase("a", 1, 4), phrase("a", 5, 8)], total_measures=8)
