"""
Feature Extraction Module - Pitch and Rhythm Features per Structure

Given the measures covered by one structure, this module produces:
    - PitchSequence: pitch strings, semitone intervals, melodic contour
    - RhythmSequence: durations, S/M/L duration-class string, note density

All functions are pure. Empty input gives empty sequences, a "stable"
contour and zero density instead of raising.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from scorevis.analysis.pitch import DEFAULT_SEMITONE, pitch_to_number
from scorevis.config import ANALYSIS_CONFIG, merge_config
from scorevis.data.schema import (
    Contour,
    Measure,
    MusicStructure,
    Note,
    PitchSequence,
    RhythmSequence,
)


# =============================================================================
# CONSTANTS
# =============================================================================

# Average interval (semitones) beyond which a line counts as rising/falling
CONTOUR_SLOPE = 1
# Any leap larger than this makes a flat-on-average line a "wave"
CONTOUR_LEAP = 3

SHORT, MEDIUM, LONG = "S", "M", "L"


@dataclass
class StructureFeatures:
    """A structure together with the features extracted from its measures."""
    structure: MusicStructure
    pitch: PitchSequence
    rhythm: RhythmSequence


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def flatten_notes(measures: Sequence[Measure]) -> List[Note]:
    """All notes of the given measures, in performance order."""
    return [note for measure in measures for note in measure.notes]


def classify_contour(intervals: Sequence[int]) -> Contour:
    """
    Classify a melodic line from its intervals.

    Rules, in order:
        average > 1         → ASCENDING
        average < -1        → DESCENDING
        any |interval| > 3  → WAVE
        otherwise           → STABLE (also for no intervals at all)
    """
    if len(intervals) == 0:
        return Contour.STABLE

    average = float(np.mean(intervals))
    if average > CONTOUR_SLOPE:
        return Contour.ASCENDING
    if average < -CONTOUR_SLOPE:
        return Contour.DESCENDING
    if any(abs(i) > CONTOUR_LEAP for i in intervals):
        return Contour.WAVE
    return Contour.STABLE


def classify_duration(
    duration: float,
    short_duration: float = ANALYSIS_CONFIG["short_duration"],
    medium_duration: float = ANALYSIS_CONFIG["medium_duration"],
) -> str:
    """Map a duration in beats to its class: S (<= 0.5), M (<= 1), else L."""
    if duration <= short_duration:
        return SHORT
    if duration <= medium_duration:
        return MEDIUM
    return LONG


# =============================================================================
# EXTRACTION
# =============================================================================

def extract_pitch_sequence(
    measures: Sequence[Measure],
    default_semitone: int = DEFAULT_SEMITONE
) -> PitchSequence:
    """
    Extract pitches, intervals and contour from a run of measures.

    Example:
        C4 E4 G4 → intervals [4, 3], average 3.5 → ASCENDING
    """
    notes = flatten_notes(measures)
    pitches = [n.pitch for n in notes]
    numbers = np.array(
        [pitch_to_number(p, default=default_semitone) for p in pitches],
        dtype=int
    )
    intervals = np.diff(numbers).tolist() if len(numbers) > 1 else []

    return PitchSequence(
        pitches=pitches,
        intervals=intervals,
        contour=classify_contour(intervals),
    )


def extract_rhythm_sequence(
    measures: Sequence[Measure],
    short_duration: float = ANALYSIS_CONFIG["short_duration"],
    medium_duration: float = ANALYSIS_CONFIG["medium_duration"],
) -> RhythmSequence:
    """
    Extract durations, the duration-class pattern and density.

    Density is notes per measure, and 0.0 when there are no measures.
    """
    notes = flatten_notes(measures)
    durations = [n.duration for n in notes]
    pattern = "".join(
        classify_duration(d, short_duration, medium_duration) for d in durations
    )
    density = len(notes) / len(measures) if measures else 0.0

    return RhythmSequence(durations=durations, pattern=pattern, density=density)


def extract_features(
    structure: MusicStructure,
    measures: Sequence[Measure],
    config: Optional[Dict[str, Any]] = None
) -> StructureFeatures:
    """
    Extract both feature sequences for one structure.

    Args:
        structure: The structure the features belong to
        measures: The measures it spans (already sliced by the caller)
        config: Partial analysis config merged over ANALYSIS_CONFIG
    """
    config = merge_config(ANALYSIS_CONFIG, config)
    return StructureFeatures(
        structure=structure,
        pitch=extract_pitch_sequence(measures, config["default_semitone"]),
        rhythm=extract_rhythm_sequence(
            measures, config["short_duration"], config["medium_duration"]
        ),
    )
