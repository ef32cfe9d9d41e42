"""Pitch helpers: equal temperament tuning and note names.

Notes are integer semitone offsets from C. ``frequency`` turns them into Hz.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

CONCERT_PITCH = 440.0
NOTES_PER_OCTAVE = 12


class Note(IntEnum):
    """Pitch classes as semitone offsets from C (enharmonics are aliases)."""
    C = 0
    C_SHARP = 1
    D_FLAT = 1
    D = 2
    D_SHARP = 3
    E_FLAT = 3
    E = 4
    F_FLAT = 4
    F = 5
    E_SHARP = 5
    F_SHARP = 6
    G_FLAT = 6
    G = 7
    G_SHARP = 8
    A_FLAT = 8
    A = 9
    A_SHARP = 10
    B_FLAT = 10
    B = 11
    C_FLAT = 11
    B_SHARP = 12


@dataclass(frozen=True)
class EqualTemperament:
    """Frequency ratio of note ``n`` in an equal-tempered scale."""

    notes_per_octave: float
    adjuster: float = 0.0

    def __post_init__(self) -> None:
        if self.notes_per_octave <= 0:
            raise ValueError(f"notes_per_octave must be positive, got {self.notes_per_octave}")

    def __call__(self, n: float) -> float:
        return 2.0 ** (math.floor(n + self.adjuster) / self.notes_per_octave)


def equal_temperament(n: float, notes_per_octave: float, adjuster: float = 0.0) -> float:
    return EqualTemperament(notes_per_octave, adjuster)(n)


# Calibration constant: keeps note 9 on A for the standard tuning.
TWELVE_TONE_EQUAL_TEMPERAMENT = EqualTemperament(NOTES_PER_OCTAVE, 0.3764)


def frequency(note: int, concert_pitch: float = CONCERT_PITCH) -> float:
    """Convert a note offset to Hz, with ``Note.A`` (9) at ``concert_pitch``."""
    ratio = TWELVE_TONE_EQUAL_TEMPERAMENT(note) / TWELVE_TONE_EQUAL_TEMPERAMENT(Note.A)
    return concert_pitch * ratio


def octave(note: int, octave_augment: int, notes_per_octave: int = NOTES_PER_OCTAVE) -> int:
    return note + octave_augment * notes_per_octave


def note_from_name(name: str) -> int:
    """Convert a note name to its offset from C (e.g., 'C' -> 0, 'F#' -> 6, 'Bb' -> 10).

    Accidentals are applied arithmetically, so 'Cb' -> -1 and 'B#' -> 12.
    """
    note_map = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

    name = name.strip()
    if not name:
        raise ValueError("Empty note name")

    base_note = name[0].upper()
    accidental = name[1:]

    if base_note not in note_map:
        raise ValueError(f"Invalid note name: {name}")
    if accidental.strip("#b"):
        raise ValueError(f"Invalid accidental in note name: {name}")

    return note_map[base_note] + accidental.count("#") - accidental.count("b")


__all__ = [
    "CONCERT_PITCH",
    "NOTES_PER_OCTAVE",
    "Note",
    "EqualTemperament",
    "equal_temperament",
    "TWELVE_TONE_EQUAL_TEMPERAMENT",
    "frequency",
    "octave",
    "note_from_name",
]
