"""
Schema definitions for scores and structure analysis results.

This module defines the Pydantic models that validate data coming in from the
file-parsing collaborator (MusicXMLData) and describe everything the analysis
engine hands back (structures, relationships, patterns, groups).

Python attribute names are snake_case. Every model also accepts and emits the
camelCase names used by the parser and export collaborators, so
`MusicStructure.model_validate({"startMeasure": 1, ...})` and
`structure.model_dump(by_alias=True)` both work.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional
import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# VALID OPTIONS
# =============================================================================

# One character per note: S(hort), M(edium), L(ong)
RHYTHM_PATTERN_REGEX = re.compile(r'^[SML]*$')


class StructureLevel(str, Enum):
    """Granularity of a structure in the musical hierarchy."""
    MOTIVE = "motive"
    SUB_PHRASE = "sub_phrase"
    PHRASE = "phrase"
    PERIOD = "period"
    THEME = "theme"


class Contour(str, Enum):
    """Coarse shape of a melodic line."""
    ASCENDING = "ascending"
    DESCENDING = "descending"
    WAVE = "wave"
    STABLE = "stable"


class RelationshipType(str, Enum):
    REPEAT = "repeat"
    SIMILAR = "similar"
    CONTRAST = "contrast"
    TRANSITION = "transition"


class PatternType(str, Enum):
    MELODIC = "melodic"
    RHYTHMIC = "rhythmic"
    COMBINED = "combined"


class EmotionType(str, Enum):
    HAPPY = "happy"
    SAD = "sad"
    EXCITED = "excited"
    PEACEFUL = "peaceful"
    TENSE = "tense"


# =============================================================================
# ERRORS
# =============================================================================

class InvalidSegmentInput(ValueError):
    """Raised when externally supplied structures break the segment invariants."""


# =============================================================================
# BASE MODEL
# =============================================================================

class CamelModel(BaseModel):
    """Base model accepting both snake_case and camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# SCORE INPUT
# =============================================================================

class Note(CamelModel):
    """
    A single pitched note as extracted from the source score.

    Rests are dropped by the parser, so every Note has a pitch. The pitch
    string is not validated here: malformed pitches are tolerated and
    resolved to a default semitone during feature extraction.

    Example:
        >>> Note(pitch="C#4", duration=1.0, measure=3, beat=2)
    """

    model_config = ConfigDict(frozen=True)

    pitch: str = Field(
        ...,
        description="Letter + optional accidental + octave",
        examples=["C4", "F#5", "Bb3"]
    )

    duration: float = Field(
        ...,
        ge=0,
        description="Duration in beats (quarter note = 1.0)",
        examples=[0.5, 1.0, 2.0]
    )

    measure: int = Field(
        ...,
        description="1-based measure number the note belongs to"
    )

    beat: int = Field(
        default=1,
        description="Beat within the measure"
    )


class Measure(CamelModel):
    """One measure of the score; list order is performance order."""

    number: int = Field(..., ge=1, description="1-based measure number")
    notes: List[Note] = Field(default_factory=list)
    chords: Optional[List[str]] = None


class MusicXMLData(CamelModel):
    """
    A parsed score, as supplied by the file-parsing collaborator.

    The analysis core never reads files itself; it only consumes this model.
    """

    title: str = ""
    composer: str = ""
    time_signature: str = "4/4"
    key_signature: str = "C"
    measures: List[Measure] = Field(default_factory=list)

    @property
    def total_measures(self) -> int:
        return len(self.measures)


# =============================================================================
# STRUCTURES
# =============================================================================

class StructureEmotion(CamelModel):
    """Emotion attached to a structure by an external recognizer."""

    structure_id: str
    primary: EmotionType
    secondary: Optional[EmotionType] = None
    confidence: float = Field(..., ge=0.0, le=1.0)
    features: List[str] = Field(default_factory=list)


class MusicStructure(CamelModel):
    """
    A span of measures at one level of the musical hierarchy.

    The segmenter only produces PHRASE level structures with
    start_beat=1 and end_beat=4. Other levels may be supplied by callers
    (for example after AI refinement) and are checked by
    `validate_structures`.

    Attributes:
        id: Unique identifier, e.g. "phrase_1"
        level: Hierarchy level
        start_measure: First measure (1-based, inclusive)
        end_measure: Last measure (1-based, inclusive)
        notes: Copy of the notes inside the measure range
        parent: Id of the enclosing structure, if any
        children: Ids of enclosed structures
        similarity_group: Group label ("A", "B", ...) once grouped
    """

    id: str = Field(..., min_length=1)
    level: StructureLevel
    start_measure: int
    end_measure: int
    start_beat: int = 1
    end_beat: int = 4
    notes: List[Note] = Field(default_factory=list)
    parent: Optional[str] = None
    children: List[str] = Field(default_factory=list)
    emotion: Optional[StructureEmotion] = None
    similarity_group: Optional[str] = None
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    @property
    def measure_count(self) -> int:
        return self.end_measure - self.start_measure + 1


# =============================================================================
# FEATURES
# =============================================================================

class PitchSequence(CamelModel):
    """Pitches of a structure, their successive intervals and contour."""

    pitches: List[str] = Field(default_factory=list)
    intervals: List[int] = Field(default_factory=list)
    contour: Contour = Contour.STABLE

    @model_validator(mode="after")
    def check_interval_count(self) -> "PitchSequence":
        """Ensure there is exactly one interval between each pair of pitches"""
        expected = max(len(self.pitches) - 1, 0)
        if len(self.intervals) != expected:
            raise ValueError(
                f"Expected {expected} intervals for {len(self.pitches)} pitches. "
                f"Got: {len(self.intervals)}"
            )
        return self


class RhythmSequence(CamelModel):
    """Durations of a structure, their S/M/L classes and note density."""

    durations: List[float] = Field(default_factory=list)
    pattern: str = ""
    density: float = Field(default=0.0, ge=0.0)

    @field_validator('pattern')
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Ensure the pattern only uses the S, M and L duration classes"""
        if not RHYTHM_PATTERN_REGEX.match(v):
            raise ValueError(
                f"Rhythm pattern must only contain S, M and L. Got: '{v}'"
            )
        return v


# =============================================================================
# ANALYSIS RESULTS
# =============================================================================

class StructureRelationship(CamelModel):
    """Similarity and relationship type between two structures (id1 before id2)."""

    id1: str
    id2: str
    type: RelationshipType
    similarity: float = Field(..., ge=0.0, le=1.0)
    description: str = ""

    def involves(self, structure_id: str) -> bool:
        return structure_id in (self.id1, self.id2)


class PatternOccurrence(CamelModel):
    structure_id: str
    position: int = Field(..., ge=0, description="Index of the structure in the analysis")


class PatternMatch(CamelModel):
    """A melodic or rhythmic prefix shared by at least two structures."""

    pattern: str
    occurrences: List[PatternOccurrence] = Field(..., min_length=2)
    type: PatternType


class SimilarityGroup(CamelModel):
    """Structures that repeat or resemble each other, labelled A, B, C, ..."""

    group_id: str
    structure_ids: List[str] = Field(default_factory=list)
    similarity_score: float = Field(default=1.0, ge=0.0, le=1.0)
    common_features: List[str] = Field(default_factory=list)


class StructureAnalysis(CamelModel):
    """
    Everything one analysis run produces.

    This value replaces any "last analysis" cache: callers keep it and
    pass it on to whatever needs to look up relationships later.
    """

    structures: List[MusicStructure] = Field(default_factory=list)
    relationships: List[StructureRelationship] = Field(default_factory=list)
    patterns: List[PatternMatch] = Field(default_factory=list)
    groups: List[SimilarityGroup] = Field(default_factory=list)
    form: str = ""


# =============================================================================
# VALIDATION AT THE BOUNDARY
# =============================================================================

def parse_structures(raw: Iterable[Dict[str, Any]]) -> List[MusicStructure]:
    """
    Validate structure dictionaries coming from an external source.

    Args:
        raw: Dicts in either snake_case or camelCase layout

    Returns:
        List of MusicStructure models, in input order

    Raises:
        InvalidSegmentInput: If any entry is malformed
    """
    structures = []
    for index, item in enumerate(raw):
        try:
            structures.append(MusicStructure.model_validate(item))
        except ValidationError as e:
            raise InvalidSegmentInput(
                f"Structure #{index + 1} is malformed: {e.error_count()} validation error(s)\n{e}"
            ) from e
    return structures


def validate_structures(structures: List[MusicStructure], total_measures: int) -> None:
    """
    Check the segment invariants for a caller-supplied structure list.

    Every structure must satisfy 1 <= start_measure <= end_measure <= total_measures,
    ids must be unique, and structures of the same level must not overlap.

    Raises:
        InvalidSegmentInput: Describing the first violation found
    """
    seen_ids = set()
    by_level: Dict[StructureLevel, List[MusicStructure]] = {}

    for s in structures:
        if s.id in seen_ids:
            raise InvalidSegmentInput(f"Duplicate structure id: '{s.id}'")
        seen_ids.add(s.id)

        if s.start_measure > s.end_measure:
            raise InvalidSegmentInput(
                f"Structure '{s.id}' starts after it ends: "
                f"{s.start_measure} > {s.end_measure}"
            )
        if s.start_measure < 1 or s.end_measure > total_measures:
            raise InvalidSegmentInput(
                f"Structure '{s.id}' spans measures {s.start_measure}-{s.end_measure}, "
                f"outside the score range 1-{total_measures}"
            )
        by_level.setdefault(s.level, []).append(s)

    for level, group in by_level.items():
        ordered = sorted(group, key=lambda s: s.start_measure)
        for prev, curr in zip(ordered, ordered[1:]):
            if curr.start_measure <= prev.end_measure:
                raise InvalidSegmentInput(
                    f"{level.value} structures '{prev.id}' ({prev.start_measure}-{prev.end_measure}) "
                    f"and '{curr.id}' ({curr.start_measure}-{curr.end_measure}) overlap"
                )
