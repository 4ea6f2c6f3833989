"""
Builders shared by the test modules.

Scores are described as a list of measures, each measure a list of
(pitch, duration) tuples.
"""

from typing import List, Sequence, Tuple

from scorevis.analysis.features import StructureFeatures
from scorevis.data.schema import (
    Measure,
    MusicStructure,
    MusicXMLData,
    Note,
    PitchSequence,
    RhythmSequence,
    StructureLevel,
)
from scorevis.data.visual import (
    Animation,
    AnimationKind,
    ElementType,
    LayoutType,
    UserAction,
    VisualElement,
    VisualScheme,
)

# Phrase "A": C4 D4 E4 F4, quarter notes → intervals [2, 2, 1], pattern "MMMM"
PHRASE_A = [[("C4", 1.0)], [("D4", 1.0)], [("E4", 1.0)], [("F4", 1.0)]]
# Phrase "B": large leaps, eighth notes → intervals [-21, 21, -21], pattern "SSSS"
PHRASE_B = [[("A5", 0.5)], [("C4", 0.5)], [("A5", 0.5)], [("C4", 0.5)]]


def make_measure(number: int, notes: Sequence[Tuple[str, float]]) -> Measure:
    return Measure(
        number=number,
        notes=[
            Note(pitch=pitch, duration=duration, measure=number, beat=beat)
            for beat, (pitch, duration) in enumerate(notes, 1)
        ],
    )


def make_score(measures: Sequence[Sequence[Tuple[str, float]]], title: str = "Test") -> MusicXMLData:
    return MusicXMLData(
        title=title,
        measures=[make_measure(number, notes) for number, notes in enumerate(measures, 1)],
    )


def make_features(structure_id: str, intervals: List[int], pattern: str) -> StructureFeatures:
    """Features built directly, without going through a score."""
    pitches = ["C4"] * (len(intervals) + 1) if intervals else []
    return StructureFeatures(
        structure=MusicStructure(
            id=structure_id,
            level=StructureLevel.PHRASE,
            start_measure=1,
            end_measure=1,
        ),
        pitch=PitchSequence(pitches=pitches, intervals=intervals),
        rhythm=RhythmSequence(durations=[1.0] * len(pattern), pattern=pattern, density=1.0),
    )


def make_scheme(
    scheme_id: str,
    layout: str,
    elements: Sequence[Tuple[str, str, str]]
) -> VisualScheme:
    """elements: (shape type, color, animation type) tuples."""
    return VisualScheme(
        id=scheme_id,
        layout=LayoutType(layout),
        elements=[
            VisualElement(
                id=f"element_{i}",
                type=ElementType(shape),
                color=color,
                animation=Animation(type=AnimationKind(animation)),
            )
            for i, (shape, color, animation) in enumerate(elements, 1)
        ],
    )


def make_action(
    selected: VisualScheme,
    recommended: Sequence[VisualScheme] = (),
    is_customized: bool = False,
    structure_id: str = "phrase_1",
) -> UserAction:
    return UserAction(
        structure_id=structure_id,
        recommended_schemes=list(recommended),
        selected_scheme=selected,
        is_customized=is_customized,
    )
