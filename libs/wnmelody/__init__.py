"""Wren Melody

Deterministic selection, equal-temperament tuning and note collections.
"""

__version__ = "0.1.0"

from .angular import (
    TAU,
    PHI,
    angular,
    angular_normalized,
    select_index,
    select_from,
    odds,
)
from .pitch import (
    CONCERT_PITCH,
    NOTES_PER_OCTAVE,
    Note,
    EqualTemperament,
    equal_temperament,
    TWELVE_TONE_EQUAL_TEMPERAMENT,
    frequency,
    octave,
    note_from_name,
)
from .notelist import NoteList
from .scales import (
    SCALES,
    ARPEGGIOS,
    PROGRESSIONS,
    scale,
    arpeggio,
    progression,
)

__all__ = [
    # Angular generator
    "TAU",
    "PHI",
    "angular",
    "angular_normalized",
    "select_index",
    "select_from",
    "odds",
    # Pitch
    "CONCERT_PITCH",
    "NOTES_PER_OCTAVE",
    "Note",
    "EqualTemperament",
    "equal_temperament",
    "TWELVE_TONE_EQUAL_TEMPERAMENT",
    "frequency",
    "octave",
    "note_from_name",
    # Note collections
    "NoteList",
    "SCALES",
    "ARPEGGIOS",
    "PROGRESSIONS",
    "scale",
    "arpeggio",
    "progression",
]
