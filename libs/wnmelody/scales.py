"""Named scales, arpeggios and chord progressions.

Table entries are frozen NoteLists of semitone offsets from the root. Use
``scale()``/``arpeggio()`` (or ``.clone()``) to get a copy that can be
translated and extended.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from .notelist import NoteList


def _table(entries: Dict[str, Tuple[int, ...]]) -> Mapping[str, NoteList]:
    return MappingProxyType({name: NoteList(notes).frozen() for name, notes in entries.items()})


# Scale patterns (semitones from root)
SCALES: Mapping[str, NoteList] = _table({
    "major": (0, 2, 4, 5, 7, 9, 11),
    "minor": (0, 2, 3, 5, 7, 8, 10),
    "harmonic_minor": (0, 2, 3, 5, 7, 8, 11),
    "major_blues": (0, 2, 4, 7, 9, 10),
    "minor_blues": (0, 2, 3, 7, 8, 10),
    "dorian": (0, 2, 3, 5, 7, 9, 10),
    "mixolydian": (0, 2, 4, 5, 7, 9, 10),
})


# Arpeggio intervals from root (semitones)
ARPEGGIOS: Mapping[str, NoteList] = _table({
    "major": (0, 4, 7),
    "minor": (0, 3, 7),
    "diminished": (0, 3, 6),
    "diminished_seven": (0, 3, 6, 9),
    "augmented": (0, 4, 8),
    "major_six": (0, 4, 7, 9),
    "minor_six": (0, 3, 7, 9),
    "major_seven": (0, 4, 7, 10),
    "minor_seven": (0, 3, 7, 10),
    "major_nine": (0, 4, 7, 10, 14),
    "minor_nine": (0, 3, 7, 10, 14),
    "major_major_seven": (0, 4, 7, 11),
    "minor_major_seven": (0, 3, 7, 11),
    "major_major_nine": (0, 4, 7, 11, 13),
    "minor_major_nine": (0, 3, 7, 11, 13),
})


# Common progressions (scale degrees, 1-indexed)
PROGRESSIONS: Mapping[str, Tuple[Tuple[int, str], ...]] = MappingProxyType({
    "pop1": ((1, "major"), (5, "major"), (6, "minor"), (4, "major")),  # I-V-vi-IV
    "pop2": ((1, "major"), (4, "major"), (5, "major"), (1, "major")),  # I-IV-V-I
    "blues": ((1, "major_seven"), (4, "major_seven"), (1, "major_seven"), (5, "major_seven")),  # I7-IV7-I7-V7
    "jazz": ((2, "minor_seven"), (5, "major_seven"), (1, "major_major_seven"), (1, "major_major_seven")),  # ii7-V7-Imaj7
})


def scale(name: str) -> NoteList:
    """Return a mutable copy of a named scale."""
    if name not in SCALES:
        raise ValueError(f"Unknown scale type: {name}")
    return SCALES[name].clone()


def arpeggio(name: str) -> NoteList:
    """Return a mutable copy of a named arpeggio."""
    if name not in ARPEGGIOS:
        raise ValueError(f"Unknown arpeggio type: {name}")
    return ARPEGGIOS[name].clone()


def progression(name: str, root: int = 0, scale_name: str = "major") -> List[NoteList]:
    """Convert a progression name to a list of chords rooted on scale degrees.

    Returns:
        One NoteList per chord, each translated onto its degree of the scale
        starting at ``root``.
    """
    if name not in PROGRESSIONS:
        raise ValueError(f"Unknown progression: {name}")

    degrees = scale(scale_name).translate(root)

    chords = []
    for degree, arpeggio_name in PROGRESSIONS[name]:
        # Scale degree to note (1-indexed -> 0-indexed)
        chords.append(arpeggio(arpeggio_name).translate(degrees[degree - 1]))
    return chords


__all__ = [
    "SCALES",
    "ARPEGGIOS",
    "PROGRESSIONS",
    "scale",
    "arpeggio",
    "progression",
]
