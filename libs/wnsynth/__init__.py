"""Wren Synthesis

Voice algebra, waveform rendering and sequence combinators.
"""

__version__ = "0.1.0"

from . import voices
from .voices import Voice, get_voice, VOICES
from .render import (
    DEFAULT_SAMPLE_RATE,
    NoteEvent,
    BufferExport,
    WaveformBuffer,
    mix_buffers,
)
from .sequence import (
    Sequence,
    Chain,
    Repeat,
    chain,
    repeat,
    Position,
    arpeggio_sequence,
)

__all__ = [
    # Voices
    "voices",
    "Voice",
    "get_voice",
    "VOICES",
    # Rendering
    "DEFAULT_SAMPLE_RATE",
    "NoteEvent",
    "BufferExport",
    "WaveformBuffer",
    "mix_buffers",
    # Sequencing
    "Sequence",
    "Chain",
    "Repeat",
    "chain",
    "repeat",
    "Position",
    "arpeggio_sequence",
]
