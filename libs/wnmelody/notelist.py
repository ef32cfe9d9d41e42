"""Ordered note collections for chords, scales and arpeggios.

A NoteList owns its notes: constructing one copies the input and ``clone()``
returns an independent copy. Mutating methods work in place and return the
list itself so authoring code can chain them::

    chord = ARPEGGIOS["minor_seven"].clone().translate(Note.A).extend(2)

Shared constants are frozen; mutating one raises ``TypeError`` instead of
silently changing every piece that uses it.
"""

from __future__ import annotations

import operator
from functools import total_ordering
from typing import Iterable, Iterator, List, Union, overload

from .pitch import NOTES_PER_OCTAVE


def _as_note(value: object) -> int:
    try:
        return int(operator.index(value))  # type: ignore[arg-type]
    except TypeError:
        raise TypeError(f"Notes are whole semitone offsets, got {value!r}") from None


@total_ordering
class NoteList:
    """An ordered list of integer note offsets with value semantics."""

    __slots__ = ("_notes", "_frozen")

    def __init__(self, notes: Iterable[int] = ()) -> None:
        self._notes: List[int] = [_as_note(note) for note in notes]
        self._frozen = False

    # ---------- Copies ----------

    def clone(self) -> "NoteList":
        """Return a mutable copy sharing no storage with this list."""
        return NoteList(self._notes)

    def frozen(self) -> "NoteList":
        """Return a read-only copy."""
        copy = NoteList(self._notes)
        copy._frozen = True
        return copy

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise TypeError("NoteList is read-only; clone() it before mutating")

    # ---------- Mutation ----------

    def push(self, *notes: int) -> "NoteList":
        self._check_mutable()
        self._notes.extend(_as_note(note) for note in notes)
        return self

    def translate(self, amount: int) -> "NoteList":
        self._check_mutable()
        amount = _as_note(amount)
        self._notes = [note + amount for note in self._notes]
        return self

    def translate_octave(self, octave_amount: int, notes_per_octave: int = NOTES_PER_OCTAVE) -> "NoteList":
        return self.translate(octave_amount * notes_per_octave)

    def extend(self, number_of_octaves: int, notes_per_octave: int = NOTES_PER_OCTAVE) -> "NoteList":
        """Append a copy of the current notes for each of the next octaves."""
        self._check_mutable()
        number_of_octaves, notes_per_octave = _as_note(number_of_octaves), _as_note(notes_per_octave)
        original = list(self._notes)
        for octave in range(1, number_of_octaves + 1):
            offset = octave * notes_per_octave
            self._notes.extend(note + offset for note in original)
        return self

    def extend_root(self, number_of_octaves: int = 1, notes_per_octave: int = NOTES_PER_OCTAVE) -> "NoteList":
        """Append only the first note, raised by ``number_of_octaves``."""
        self._check_mutable()
        if not self._notes:
            raise ValueError("Cannot extend the root of an empty NoteList")
        offset = _as_note(number_of_octaves) * _as_note(notes_per_octave)
        self._notes.append(self._notes[0] + offset)
        return self

    def sort(self) -> "NoteList":
        self._check_mutable()
        self._notes.sort()
        return self

    # ---------- Lookup ----------

    def find(self, note: int) -> int:
        """Index of the first occurrence of ``note``, or -1."""
        try:
            return self._notes.index(note)
        except ValueError:
            return -1

    def contains(self, note: int) -> bool:
        return note in self._notes

    def to_list(self) -> List[int]:
        return list(self._notes)

    # ---------- Container protocol ----------

    def __contains__(self, note: object) -> bool:
        return note in self._notes

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._notes))

    @overload
    def __getitem__(self, index: int) -> int: ...

    @overload
    def __getitem__(self, index: slice) -> "NoteList": ...

    def __getitem__(self, index: Union[int, slice]) -> Union[int, "NoteList"]:
        if isinstance(index, slice):
            return NoteList(self._notes[index])
        return self._notes[index]

    def __setitem__(self, index: int, note: int) -> None:
        self._check_mutable()
        self._notes[index] = _as_note(note)

    # ---------- Comparison ----------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NoteList):
            return NotImplemented
        return self._notes == other._notes

    def __lt__(self, other: "NoteList") -> bool:
        if not isinstance(other, NoteList):
            return NotImplemented
        return self._notes < other._notes

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        suffix = ", frozen" if self._frozen else ""
        return f"NoteList({self._notes!r}{suffix})"


__all__ = ["NoteList"]
