"""Sample-accurate rendering of note events into a waveform buffer.

The buffer keeps a running duration cursor. Every note is evaluated at
absolute time ``cursor + s / sample_rate`` so continuous voices keep their
phase across note boundaries instead of clicking.
"""

from __future__ import annotations

import math
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from wncore.config import get_settings
from wncore.logging import get_logger

from .voices import Voice, silent

DEFAULT_SAMPLE_RATE = 48_000
SUPPORTED_CHANNELS = 1

logger = get_logger(__name__)


class NoteEvent(NamedTuple):
    """One note of a timeline: what to play, how loud and for how long."""

    frequency: float  # Hz
    amplitude: float  # 0..1
    duration: float  # seconds
    voice: Voice


class BufferExport(NamedTuple):
    """What a codec needs to persist a buffer."""

    samples: np.ndarray
    sample_rate: int
    channels: int


def sample_count(duration: float, sample_rate: int) -> int:
    """Number of samples spanned by ``duration`` seconds (half rounds up)."""
    return int(math.floor(sample_rate * duration + 0.5))


def validate_note(frequency: float, amplitude: float, duration: float) -> None:
    if not (math.isfinite(frequency) and frequency >= 0):
        raise ValueError(f"Invalid frequency: {frequency} (must be finite and >= 0)")
    if not 0.0 <= amplitude <= 1.0:
        raise ValueError(f"Invalid amplitude: {amplitude} (expected 0..1)")
    if not (math.isfinite(duration) and duration > 0):
        raise ValueError(f"Invalid duration: {duration} (must be finite and positive)")


def render_chunk(
    frequency: float,
    amplitude: float,
    duration: float,
    voice: Voice,
    start: float,
    sample_rate: int,
) -> np.ndarray:
    """Evaluate ``voice`` for one note starting at absolute time ``start``."""
    count = sample_count(duration, sample_rate)
    time = start + np.arange(count, dtype=np.float64) / sample_rate
    samples = np.asarray(voice(frequency, time), dtype=np.float64)
    return np.broadcast_to(samples, time.shape) * amplitude


class WaveformBuffer:
    """Growable mono sample buffer with a duration cursor.

    All mutation of one buffer is serialized, so several threads may feed
    the same buffer; samples land in the order the calls acquire it.
    """

    def __init__(self, sample_rate: int = DEFAULT_SAMPLE_RATE, channels: int = SUPPORTED_CHANNELS):
        if not (math.isfinite(sample_rate) and sample_rate > 0):
            raise ValueError(f"Invalid sample rate: {sample_rate} (must be positive)")
        if channels != SUPPORTED_CHANNELS:
            raise ValueError(f"Invalid channel count: {channels} (expected {SUPPORTED_CHANNELS})")
        self._sample_rate = int(sample_rate)
        self._channels = channels
        self._chunks: List[np.ndarray] = []
        self._length = 0
        self._duration = 0.0
        self._lock = threading.Lock()

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def channels(self) -> int:
        return self._channels

    @property
    def duration(self) -> float:
        """Seconds rendered so far (the duration cursor)."""
        return self._duration

    @property
    def samples(self) -> np.ndarray:
        """Read-only view of all samples rendered so far."""
        with self._lock:
            view = self._consolidate().view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return (
            f"WaveformBuffer(sample_rate={self._sample_rate}, samples={self._length}, "
            f"duration={self._duration:.6f})"
        )

    # Callers must hold self._lock. Chunks are never written in place, so the
    # consolidated array can be handed out as a read-only view.
    def _consolidate(self) -> np.ndarray:
        if len(self._chunks) != 1:
            merged = np.concatenate(self._chunks) if self._chunks else np.zeros(0, dtype=np.float64)
            self._chunks = [merged]
        return self._chunks[0]

    def _snapshot(self) -> Tuple[np.ndarray, float]:
        with self._lock:
            return self._consolidate(), self._duration

    def _check_compatible(self, other: "WaveformBuffer") -> None:
        if other.sample_rate != self._sample_rate:
            raise ValueError(
                f"Sample rate mismatch: {other.sample_rate} Hz buffer cannot join a {self._sample_rate} Hz buffer"
            )

    # ---------- Rendering ----------

    def add_note(self, frequency: float, amplitude: float, duration: float, voice: Voice) -> None:
        """Append ``round(sample_rate * duration)`` samples of ``voice`` and advance the cursor."""
        validate_note(frequency, amplitude, duration)
        with self._lock:
            chunk = render_chunk(frequency, amplitude, duration, voice, self._duration, self._sample_rate)
            self._chunks.append(chunk)
            self._length += len(chunk)
            self._duration += duration

    def add_rest(self, duration: float) -> None:
        """Append silence; takes exactly as many samples as a note would."""
        self.add_note(0.0, 0.0, duration, silent)

    def add_events(self, events: Iterable[NoteEvent], max_workers: Optional[int] = None) -> None:
        """Render a batch of events in order.

        Events are validated before anything is rendered. With more than one
        worker the notes are evaluated on a thread pool; each note still sees
        the same absolute start time as it would sequentially, so the result
        is identical to calling ``add_note`` for each event.
        """
        batch = [NoteEvent(*event) for event in events]
        for event in batch:
            validate_note(event.frequency, event.amplitude, event.duration)

        workers = max_workers if max_workers is not None else get_settings().WN_RENDER_WORKERS
        if workers < 1:
            raise ValueError(f"Invalid worker count: {workers} (must be >= 1)")

        with self._lock:
            starts = []
            cursor = self._duration
            for event in batch:
                starts.append(cursor)
                cursor += event.duration

            jobs = [
                (event.frequency, event.amplitude, event.duration, event.voice, start, self._sample_rate)
                for event, start in zip(batch, starts)
            ]
            if workers > 1 and len(jobs) > 1:
                with ThreadPoolExecutor(max_workers=workers) as executor:
                    chunks = list(executor.map(lambda job: render_chunk(*job), jobs))
            else:
                chunks = [render_chunk(*job) for job in jobs]

            self._chunks.extend(chunks)
            self._length += sum(len(chunk) for chunk in chunks)
            self._duration = cursor

        logger.debug(
            "Rendered %d events with %d worker(s); cursor at %.6fs",
            len(batch),
            workers,
            cursor,
            extra={
                "events": len(batch),
                "workers": workers,
                "cursor_seconds": cursor,
                "sample_rate": self._sample_rate,
            },
        )

    # ---------- Combining ----------

    def append(self, other: "WaveformBuffer") -> None:
        """Concatenate ``other`` after this buffer's samples."""
        self._check_compatible(other)
        theirs, their_duration = other._snapshot()
        with self._lock:
            self._chunks.append(theirs)
            self._length += len(theirs)
            self._duration += their_duration

    def mix(self, other: "WaveformBuffer", weight: float = 0.5) -> None:
        """Blend ``other`` into this buffer: ``(1 - weight) * self + weight * other``.

        The result is truncated to the shorter buffer, and the cursor follows
        whichever buffer was shorter.
        """
        if not 0.0 <= weight <= 1.0:
            raise ValueError(f"Invalid mix weight: {weight} (expected 0..1)")
        self._check_compatible(other)

        theirs, their_duration = other._snapshot()
        with self._lock:
            mine = self._consolidate()
            n = min(len(mine), len(theirs))
            # lerp form: mixing a buffer with itself is an exact identity
            mixed = mine[:n] + weight * (theirs[:n] - mine[:n])
            if len(theirs) < len(mine):
                self._duration = their_duration
            self._chunks = [mixed]
            self._length = n

        logger.debug(
            "Mixed %d samples at weight %.4f",
            n,
            weight,
            extra={"samples": n, "weight": weight, "sample_rate": self._sample_rate},
        )

    def copy(self) -> "WaveformBuffer":
        samples, duration = self._snapshot()
        clone = WaveformBuffer(self._sample_rate, self._channels)
        clone._chunks = [samples]
        clone._length = len(samples)
        clone._duration = duration
        return clone

    def clear(self) -> None:
        with self._lock:
            self._chunks = []
            self._length = 0
            self._duration = 0.0

    def export(self) -> BufferExport:
        """Hand the rendered samples to a codec as (samples, sample_rate, channels)."""
        return BufferExport(np.array(self.samples), self._sample_rate, self._channels)


def mix_buffers(buffers: Sequence[WaveformBuffer]) -> WaveformBuffer:
    """Mix several buffers into a new one.

    The shortest buffer (first one on ties) is the base; the others are mixed
    in, in input order, with weights 1/2, 1/3, 1/4, ... so each later buffer
    has progressively less influence.
    """
    if not buffers:
        return WaveformBuffer()

    base_index = min(range(len(buffers)), key=lambda index: len(buffers[index]))
    result = buffers[base_index].copy()

    divisor = 2.0
    for index, buffer in enumerate(buffers):
        if index == base_index:
            continue
        result.mix(buffer, 1.0 / divisor)
        divisor += 1.0

    logger.debug(
        "Mixed %d buffers down to %d samples",
        len(buffers),
        len(result),
        extra={"buffers": len(buffers), "samples": len(result), "base_index": base_index},
    )
    return result


__all__ = [
    "DEFAULT_SAMPLE_RATE",
    "SUPPORTED_CHANNELS",
    "NoteEvent",
    "BufferExport",
    "sample_count",
    "validate_note",
    "render_chunk",
    "WaveformBuffer",
    "mix_buffers",
]
