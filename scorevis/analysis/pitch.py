"""
Pitch Module - Symbolic Pitch to Semitone Conversion

Converts pitch strings like "C4", "F#5" or "Bb3" into integer semitone
numbers so that melodic intervals can be computed by subtraction.

Numbering:
    semitone = letter value + octave * 12 + accidental
    C=0, D=2, E=4, F=5, G=7, A=9, B=11;  '#' adds 1, 'b' subtracts 1

So "C4" is 48 and "A4" is 57. The scale is only used for differences,
so it does not need to line up with MIDI note numbers.
"""

from typing import Optional
import re


# =============================================================================
# CONSTANTS
# =============================================================================

NOTE_VALUES = {
    "C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11,
}

ACCIDENTAL_OFFSETS = {
    "#": 1,
    "b": -1,
}

CHROMATIC_SCALE = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

PITCH_REGEX = re.compile(r'^([A-G])(#|b)?(\d+)$')

# Fallback for pitch strings that don't match PITCH_REGEX
DEFAULT_SEMITONE = 60


# =============================================================================
# CORE FUNCTIONS
# =============================================================================

def pitch_to_number(pitch: str, default: Optional[int] = None) -> int:
    """
    Convert a pitch string to a semitone number.

    Examples:
        pitch_to_number("C4")   → 48
        pitch_to_number("C#4")  → 49
        pitch_to_number("Bb3")  → 46
        pitch_to_number("H2")   → 60  (malformed, default)

    Args:
        pitch: Letter A-G, optional '#' or 'b', then the octave digits
        default: Value for malformed strings (DEFAULT_SEMITONE if None)

    Returns:
        Semitone number
    """
    match = PITCH_REGEX.match(pitch) if isinstance(pitch, str) else None
    if not match:
        return DEFAULT_SEMITONE if default is None else default

    letter, accidental, octave = match.groups()
    number = NOTE_VALUES[letter] + int(octave) * 12
    if accidental:
        number += ACCIDENTAL_OFFSETS[accidental]
    return number


def number_to_pitch(number: int) -> str:
    """
    Convert a semitone number back to a pitch string, spelled with sharps.

    Only non-negative numbers round-trip through pitch_to_number.

    Examples:
        number_to_pitch(48) → "C4"
        number_to_pitch(46) → "A#3"
    """
    octave, index = divmod(number, 12)
    return f"{CHROMATIC_SCALE[index]}{octave}"


def is_valid_pitch(pitch: str) -> bool:
    """Check whether a pitch string is in the letter/accidental/octave format."""
    return isinstance(pitch, str) and PITCH_REGEX.match(pitch) is not None
