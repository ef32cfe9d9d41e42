"""Audio I/O helpers for Wren.

Hands rendered sample buffers to soundfile for WAV persistence. Rendering
never depends on this module: it only consumes the exported
(samples, sample_rate, channels) triple. Waveforms are read back as float64
arrays in range [-1.0, 1.0].
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
import soundfile as sf

from .config import get_settings
from .logging import get_logger


DEFAULT_SAMPLE_RATE = 48_000
SUPPORTED_CHANNELS = 1

logger = get_logger(__name__)


def validate_format(sample_rate: int, channels: int, subtype: str) -> None:
    if sample_rate <= 0:
        raise ValueError(f"Invalid sample rate: {sample_rate} (must be positive)")
    if channels != SUPPORTED_CHANNELS:
        raise ValueError(f"Invalid channel count: {channels} (expected {SUPPORTED_CHANNELS})")
    if not sf.check_format("WAV", subtype):
        raise ValueError(f"Invalid subtype: {subtype} (not writable as WAV)")


def write_wav(
    path: str,
    audio: Sequence[float],
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    subtype: Optional[str] = None,
) -> None:
    """Write mono audio to WAV.

    Integer PCM subtypes cannot represent values outside [-1, 1], so samples
    are clipped first and a warning reports how many were out of range.
    """
    subtype = subtype or get_settings().WN_WAV_SUBTYPE
    samples = np.asarray(audio, dtype=np.float64)
    if samples.ndim != 1:
        raise ValueError(f"Expected mono audio with shape (samples,), got {samples.shape}")
    validate_format(sample_rate, SUPPORTED_CHANNELS, subtype)

    if subtype.startswith("PCM"):
        out_of_range = int(np.count_nonzero(np.abs(samples) > 1.0))
        if out_of_range:
            logger.warning(
                "Clipping %d samples outside [-1, 1] before %s encoding",
                out_of_range,
                subtype,
                extra={"clipped": out_of_range, "subtype": subtype},
            )
            samples = np.clip(samples, -1.0, 1.0)

    sf.write(path, samples, sample_rate, subtype=subtype)
    logger.info(
        "Wrote %d samples at %d Hz to %s (%s)",
        len(samples),
        sample_rate,
        path,
        subtype,
        extra={"samples": len(samples), "sample_rate": sample_rate, "path": path, "subtype": subtype},
    )


def write_export(path: str, export: Tuple[Sequence[float], int, int], subtype: Optional[str] = None) -> None:
    """Write a (samples, sample_rate, channels) export triple to WAV."""
    samples, sample_rate, channels = export
    if channels != SUPPORTED_CHANNELS:
        raise ValueError(f"Invalid channel count: {channels} (expected {SUPPORTED_CHANNELS})")
    write_wav(path, samples, sample_rate, subtype=subtype)


def read_wav(path: str) -> Tuple[np.ndarray, int]:
    """Read a mono WAV file and return (audio, sample_rate).

    Audio is returned as a float64 np.ndarray with shape (samples,).
    """
    audio, sr = sf.read(path, dtype="float64", always_2d=True)
    if audio.shape[1] != SUPPORTED_CHANNELS:
        raise ValueError(f"Expected a mono file, got {audio.shape[1]} channels: {path}")
    return audio[:, 0], sr


__all__ = [
    "DEFAULT_SAMPLE_RATE",
    "SUPPORTED_CHANNELS",
    "validate_format",
    "write_wav",
    "write_export",
    "read_wav",
]
