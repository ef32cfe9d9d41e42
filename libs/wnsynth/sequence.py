"""Sequence combinators for assembling pieces.

A sequence is a zero-argument callable that emits notes into a buffer it
captured. Passages, verses and repeats are built purely by nesting ``chain``
and ``repeat``::

    song = chain(repeat(first_passage, 2), second_passage)
    song()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Protocol, Tuple

from wnmelody.angular import angular_normalized, select_from
from wnmelody.notelist import NoteList
from wnmelody.pitch import frequency

from .voices import Voice

Sequence = Callable[[], None]


class NoteSink(Protocol):
    def add_note(self, frequency: float, amplitude: float, duration: float, voice: Voice) -> None:
        ...

    def add_rest(self, duration: float) -> None:
        ...


@dataclass(frozen=True)
class Chain:
    """Run each step once, in order."""

    steps: Tuple[Sequence, ...]

    def __call__(self) -> None:
        for step in self.steps:
            step()


@dataclass(frozen=True)
class Repeat:
    sequence: Sequence
    times: int

    def __post_init__(self) -> None:
        if self.times < 0:
            raise ValueError(f"Cannot repeat a sequence {self.times} times")

    def __call__(self) -> None:
        for _ in range(self.times):
            self.sequence()


def chain(*sequences: Sequence) -> Chain:
    return Chain(tuple(sequences))


def repeat(sequence: Sequence, times: int) -> Repeat:
    return Repeat(sequence, times)


@dataclass
class Position:
    """Note counter shared by the steps of one track."""

    index: int = 0


def arpeggio_sequence(
    sink: NoteSink,
    position: Position,
    notes: Iterable[int],
    count: int,
    k: float,
    voice: Voice,
    note_duration: float = 1 / 12.0,
    amplitude_base: float = 0.3,
    amplitude_range: float = 0.3,
    tuning: Callable[[int], float] = frequency,
) -> Sequence:
    """Build a sequence playing ``count`` notes picked from ``notes``.

    The n-th note of the track (``position.index``) picks its pitch with
    ``select_from(n, k + 1, notes)`` and its amplitude with
    ``angular_normalized(n, k + 4)``, so a track is fully determined by its
    notes and ``k``. The notes are copied when the sequence is built.
    """
    if count < 0:
        raise ValueError(f"Invalid note count: {count} (must be >= 0)")
    chord = NoteList(notes).frozen()

    def play() -> None:
        for _ in range(count):
            i = position.index
            note = select_from(i, k + 1, chord)
            amplitude = angular_normalized(i, k + 4) * amplitude_range + amplitude_base
            sink.add_note(tuning(note), amplitude, note_duration, voice)
            position.index += 1

    return play


__all__ = [
    "Sequence",
    "NoteSink",
    "Chain",
    "Repeat",
    "chain",
    "repeat",
    "Position",
    "arpeggio_sequence",
]
