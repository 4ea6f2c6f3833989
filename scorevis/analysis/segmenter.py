"""
Segmenter Module - Phrase-Level Segmentation of a Score

Splits a score into non-overlapping PHRASE structures that together cover
every measure exactly once, in order.

Two modes:
    1. BOUNDARIES: if the boundary heuristic finds at least one interior
       boundary, phrases are the spans between consecutive boundaries.
    2. FIXED: otherwise, windows of `phrase_size` measures (4 by default),
       with the last window truncated.

The boundary heuristic is coarse and kept for compatibility with existing
analyses. It is not a model of "true" phrase boundaries:

    A new phrase starts at measure p (1-based) when p is a multiple of 4
    AND (measure p-1 holds a note of duration >= 2 OR measure p is empty).

Example (8 measures, measure 3 ends on a half note):
    boundaries = [0, 3, 8]  →  phrase_1 = 1-3, phrase_2 = 4-8
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from scorevis.config import ANALYSIS_CONFIG, merge_config
from scorevis.data.schema import Measure, MusicStructure, MusicXMLData, Note, StructureLevel

logger = logging.getLogger(__name__)


# =============================================================================
# BOUNDARY DETECTION
# =============================================================================

def detect_phrase_boundaries(
    measures: Sequence[Measure],
    boundary_interval: int = ANALYSIS_CONFIG["boundary_interval"],
    long_note_duration: float = ANALYSIS_CONFIG["long_note_duration"],
) -> List[int]:
    """
    Find phrase boundaries as 0-based measure offsets.

    The result always starts with 0 and ends with len(measures); anything
    in between is an interior boundary, i.e. the offset of the first
    measure of a new phrase.
    """
    boundaries = [0]

    for position in range(2, len(measures) + 1):
        if position % boundary_interval != 0:
            continue

        previous = measures[position - 2]
        current = measures[position - 1]

        has_long_note = any(n.duration >= long_note_duration for n in previous.notes)
        has_rest = len(current.notes) == 0

        if has_long_note or has_rest:
            boundaries.append(position - 1)

    boundaries.append(len(measures))
    return boundaries


def fixed_windows(total_measures: int, phrase_size: int) -> List[Tuple[int, int]]:
    """1-based inclusive (start, end) spans of `phrase_size` measures."""
    spans = []
    for start in range(1, total_measures + 1, phrase_size):
        spans.append((start, min(start + phrase_size - 1, total_measures)))
    return spans


def extract_notes_from_range(measures: Sequence[Measure], start: int, end: int) -> List[Note]:
    """Notes of measures[start:end] (0-based, end exclusive)."""
    notes: List[Note] = []
    for measure in measures[start:min(end, len(measures))]:
        notes.extend(measure.notes)
    return notes


# =============================================================================
# SEGMENTATION
# =============================================================================

def segment(score: MusicXMLData, config: Optional[Dict[str, Any]] = None) -> List[MusicStructure]:
    """
    Partition a score into phrase structures.

    Args:
        score: Parsed score
        config: Partial analysis config merged over ANALYSIS_CONFIG

    Returns:
        Phrases "phrase_1", "phrase_2", ... ordered by start_measure.
        An empty score gives an empty list.
    """
    config = merge_config(ANALYSIS_CONFIG, config)
    measures = score.measures
    if not measures:
        return []

    boundaries = detect_phrase_boundaries(
        measures,
        boundary_interval=config["boundary_interval"],
        long_note_duration=config["long_note_duration"],
    )

    if len(boundaries) > 2:
        spans = [(start + 1, end) for start, end in zip(boundaries, boundaries[1:])]
        logger.debug("Segmenting %d measures at detected boundaries %s", len(measures), boundaries[1:-1])
    else:
        spans = fixed_windows(len(measures), config["phrase_size"])
        logger.debug("No phrase boundaries found, using %d-measure windows", config["phrase_size"])

    structures = []
    for index, (start, end) in enumerate(spans, 1):
        structures.append(MusicStructure(
            id=f"phrase_{index}",
            level=StructureLevel.PHRASE,
            start_measure=start,
            end_measure=end,
            start_beat=1,
            end_beat=4,
            notes=extract_notes_from_range(measures, start - 1, end),
        ))

    return structures
