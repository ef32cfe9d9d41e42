"""Voice algebra: waveform functions and their combinators.

A voice is any callable ``voice(frequency, time) -> sample`` where ``time`` is
absolute elapsed seconds. Think of it as a graphing function ``y = f(x)`` with
``x = frequency * time * tau``. Voices are evaluated with numpy, so ``time``
may be a scalar or an array of sample times and the result broadcasts.

Every voice here is pure: the same (frequency, time) always gives the same
sample. Combinators are frozen dataclasses holding the voices they combine,
so composites compare by value and are safe to share between threads.

Fractional powers use ``signed_power`` throughout: the sign of the base is
mirrored onto the result instead of producing NaN for negative bases.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Callable, Mapping

import numpy as np
from numpy.typing import ArrayLike

TAU = 2.0 * np.pi

Voice = Callable[[float, ArrayLike], ArrayLike]


def phase(frequency: float, time: ArrayLike) -> np.ndarray:
    return frequency * np.asarray(time, dtype=np.float64) * TAU


def signed_power(values: ArrayLike, exponent: float) -> np.ndarray:
    """``sign(v) * |v| ** exponent``, defined for negative bases."""
    values = np.asarray(values, dtype=np.float64)
    return np.sign(values) * np.abs(values) ** exponent


# ---------- Base waveforms ----------

@dataclass(frozen=True)
class XForm:
    """Lift a unary phase function ``f(x)`` into a voice."""

    function: Callable[[np.ndarray], np.ndarray]

    def __call__(self, frequency: float, time: ArrayLike) -> np.ndarray:
        return self.function(phase(frequency, time))


def x_form(function: Callable[[np.ndarray], np.ndarray]) -> XForm:
    return XForm(function)


@dataclass(frozen=True)
class Silent:
    def __call__(self, frequency: float, time: ArrayLike) -> np.ndarray:
        return np.zeros(np.shape(time))


def _sine(x: np.ndarray) -> np.ndarray:
    return np.sin(x)


def _cosine(x: np.ndarray) -> np.ndarray:
    return np.cos(x)


def _square(x: np.ndarray) -> np.ndarray:
    return np.where(np.sin(x) > 0, 1.0, -1.0)


def _sawtooth(x: np.ndarray) -> np.ndarray:
    return np.fmod(x, 2.0) - 1.0


def _triangle(x: np.ndarray) -> np.ndarray:
    # peaks at tan(1) ~ 1.557, outside [-1, 1]
    return np.tan(np.sin(x))


def _mushy(x: np.ndarray) -> np.ndarray:
    return np.sin(x + np.cos(x))


def _circular(x: np.ndarray) -> np.ndarray:
    return signed_power(np.sin(x), 0.5)


def _rock_organ(x: np.ndarray) -> np.ndarray:
    return (np.sin(2.0 * x) + np.sin(2.0 * x / 3.0)) * 0.5


sine = x_form(_sine)
cosine = x_form(_cosine)
square = x_form(_square)
sawtooth = x_form(_sawtooth)
triangle = x_form(_triangle)
mushy = x_form(_mushy)
circular = x_form(_circular)
rock_organ = x_form(_rock_organ)
silent = Silent()


# ---------- Combinators ----------

@dataclass(frozen=True)
class Split:
    """``a`` while a reference sine is positive, ``b`` otherwise."""

    a: Voice
    b: Voice

    def __call__(self, frequency: float, time: ArrayLike) -> np.ndarray:
        gate = sine(frequency, time) > 0
        return np.where(gate, self.a(frequency, time), self.b(frequency, time))


@dataclass(frozen=True)
class Mix:
    """Switch between voices every half ``interval`` seconds, ``b`` first."""

    a: Voice
    b: Voice
    interval: float

    def __post_init__(self) -> None:
        if not (np.isfinite(self.interval) and self.interval > 0):
            raise ValueError(f"Mix interval must be finite and positive, got {self.interval}")

    def __call__(self, frequency: float, time: ArrayLike) -> np.ndarray:
        gate = np.fmod(np.asarray(time, dtype=np.float64), self.interval) > self.interval * 0.5
        return np.where(gate, self.a(frequency, time), self.b(frequency, time))


@dataclass(frozen=True)
class Multiply:
    a: Voice
    b: Voice

    def __call__(self, frequency: float, time: ArrayLike) -> np.ndarray:
        return np.multiply(self.a(frequency, time), self.b(frequency, time))


@dataclass(frozen=True)
class Granularize:
    """Quantize the output of ``voice`` into steps of ``2 / levels``."""

    voice: Voice
    levels: float

    def __post_init__(self) -> None:
        if not (np.isfinite(self.levels) and self.levels > 0):
            raise ValueError(f"Granularize needs a finite, positive number of levels, got {self.levels}")

    def __call__(self, frequency: float, time: ArrayLike) -> np.ndarray:
        step = 2.0 / self.levels
        shifted = np.asarray(self.voice(frequency, time), dtype=np.float64) + 1.0
        return np.floor(shifted / step) * step - 1.0


@dataclass(frozen=True)
class Exponentiate:
    voice: Voice
    exponent: float

    def __call__(self, frequency: float, time: ArrayLike) -> np.ndarray:
        return signed_power(self.voice(frequency, time), self.exponent)


def split(a: Voice, b: Voice) -> Split:
    return Split(a, b)


def mix(a: Voice, b: Voice, interval: float) -> Mix:
    return Mix(a, b, interval)


def multiply(a: Voice, b: Voice) -> Multiply:
    return Multiply(a, b)


def granularize(voice: Voice, levels: float) -> Granularize:
    return Granularize(voice, levels)


def exponentiate(voice: Voice, exponent: float) -> Exponentiate:
    return Exponentiate(voice, exponent)


def cube(voice: Voice) -> Exponentiate:
    return Exponentiate(voice, 3.0)


# ---------- Parametric timbres ----------

@dataclass(frozen=True)
class Zappy:
    """``sin(x + sin(x ** exponent))``; works best with rational exponents."""

    exponent: float

    def __call__(self, frequency: float, time: ArrayLike) -> np.ndarray:
        x = phase(frequency, time)
        return np.sin(x + np.sin(signed_power(x, self.exponent)))


@dataclass(frozen=True)
class Organ:
    multiplier: float
    divisor: float

    def __post_init__(self) -> None:
        if not np.isfinite(self.divisor) or self.divisor == 0:
            raise ValueError(f"Organ divisor must be finite and non-zero, got {self.divisor}")

    def __call__(self, frequency: float, time: ArrayLike) -> np.ndarray:
        x = phase(frequency, time)
        return ((self.divisor - 1.0) * np.sin(x) + np.sin(x * self.multiplier)) / self.divisor


@dataclass(frozen=True)
class Clarinet:
    multiplier: float

    def __call__(self, frequency: float, time: ArrayLike) -> np.ndarray:
        x = phase(frequency, time)
        return np.sin(x + np.sin(self.multiplier * x))


def zappy(exponent: float) -> Zappy:
    return Zappy(exponent)


@lru_cache(maxsize=None)
def zappy_ratio(dividend: int, divisor: int) -> Zappy:
    """Memoized ``zappy(dividend / divisor)``."""
    if divisor == 0:
        raise ValueError("zappy_ratio divisor must be non-zero")
    return Zappy(dividend / divisor)


def organ(multiplier: float, divisor: float) -> Organ:
    return Organ(multiplier, divisor)


def clarinet(multiplier: float) -> Clarinet:
    return Clarinet(multiplier)


sine_split_sawtooth = split(sine, sawtooth)
square_split_sawtooth = split(square, sawtooth)
sine_x_sawtooth = multiply(sine, sawtooth)
sine_cubed = cube(sine)
zappy_1_2 = zappy_ratio(1, 2)
zappy_3_2 = zappy_ratio(3, 2)


VOICES: Mapping[str, Voice] = MappingProxyType({
    "sine": sine,
    "cosine": cosine,
    "square": square,
    "sawtooth": sawtooth,
    "triangle": triangle,
    "mushy": mushy,
    "circular": circular,
    "rock_organ": rock_organ,
    "silent": silent,
    "sine_split_sawtooth": sine_split_sawtooth,
    "square_split_sawtooth": square_split_sawtooth,
    "sine_x_sawtooth": sine_x_sawtooth,
    "sine_cubed": sine_cubed,
    "zappy_1_2": zappy_1_2,
    "zappy_3_2": zappy_3_2,
})


def get_voice(name: str) -> Voice:
    if name not in VOICES:
        raise ValueError(f"Unknown voice: {name}")
    return VOICES[name]


__all__ = [
    "TAU",
    "Voice",
    "phase",
    "signed_power",
    "XForm",
    "x_form",
    "Silent",
    "Split",
    "Mix",
    "Multiply",
    "Granularize",
    "Exponentiate",
    "Zappy",
    "Organ",
    "Clarinet",
    "split",
    "mix",
    "multiply",
    "granularize",
    "exponentiate",
    "cube",
    "zappy",
    "zappy_ratio",
    "organ",
    "clarinet",
    "sine",
    "cosine",
    "square",
    "sawtooth",
    "triangle",
    "mushy",
    "circular",
    "rock_organ",
    "silent",
    "sine_split_sawtooth",
    "square_split_sawtooth",
    "sine_x_sawtooth",
    "sine_cubed",
    "zappy_1_2",
    "zappy_3_2",
    "VOICES",
    "get_voice",
]
