"""
Data Subpackage

This package holds the Pydantic schemas shared by every other subpackage:
    - schema.py: Notes, measures, scores, structures and analysis results
    - visual.py: Visual elements, schemes and user feedback actions

The core data structure is the MusicStructure, which contains:
    - id: e.g. "phrase_1"
    - level: motive, sub_phrase, phrase, period or theme
    - start_measure / end_measure: 1-based inclusive measure span
    - notes: the notes inside that span
"""

from scorevis.data.schema import (
    InvalidSegmentInput,
    MusicStructure,
    MusicXMLData,
    Measure,
    Note,
    RelationshipType,
    StructureAnalysis,
)
from scorevis.data.visual import UserAction, VisualElement, VisualScheme
