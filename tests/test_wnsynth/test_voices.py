"""Tests for the voice algebra."""

import math

import numpy as np
import pytest

from wnsynth import voices
from wnsynth.voices import (
    Split,
    Zappy,
    circular,
    clarinet,
    cube,
    exponentiate,
    get_voice,
    granularize,
    mix,
    multiply,
    organ,
    sawtooth,
    silent,
    sine,
    sine_cubed,
    sine_split_sawtooth,
    split,
    square,
    triangle,
    x_form,
    zappy,
    zappy_ratio,
)

TIMES = np.linspace(0.0, 2.0, 9601)
FREQUENCIES = (1.0, 55.0, 261.6256, 440.0, 1234.5)


class TestBaseVoices:
    """Tests for the base waveforms."""

    def test_sine_quarter_period(self):
        assert float(sine(1.0, 0.25)) == pytest.approx(1.0)
        assert float(sine(1.0, 0.0)) == 0.0

    def test_scalar_and_array_time(self):
        values = sine(440.0, TIMES)
        assert values.shape == TIMES.shape
        assert float(sine(440.0, TIMES[17])) == pytest.approx(values[17])

    def test_square_is_bipolar(self):
        values = square(440.0, TIMES)
        assert set(np.unique(values)) <= {-1.0, 1.0}

    def test_sawtooth_range(self):
        values = sawtooth(220.0, TIMES)
        assert np.all(values >= -1.0)
        assert np.all(values < 1.0)

    def test_triangle_may_exceed_unit_range(self):
        values = triangle(1.0, np.array([0.25]))
        assert values[0] == pytest.approx(np.tan(1.0))

    def test_silent(self):
        assert np.array_equal(silent(440.0, TIMES), np.zeros_like(TIMES))
        assert float(silent(440.0, 0.3)) == 0.0

    def test_x_form(self):
        doubled = x_form(lambda x: np.sin(2.0 * x))
        np.testing.assert_allclose(doubled(220.0, TIMES), sine(440.0, TIMES), atol=1e-9)

    def test_circular_mirrors_sign(self):
        values = circular(3.0, TIMES)
        assert not np.any(np.isnan(values))
        np.testing.assert_array_equal(np.sign(values), np.sign(sine(3.0, TIMES)))
        np.testing.assert_allclose(values, exponentiate(sine, 0.5)(3.0, TIMES))


class TestCombinators:
    """Tests for voice combinators."""

    def test_purity(self):
        voice = mix(split(sine, sawtooth), granularize(multiply(sine, triangle), 6), 0.25)
        first = voice(330.0, TIMES)
        second = voice(330.0, TIMES)
        np.testing.assert_array_equal(first, second)

    def test_sine_squared_stays_in_range(self):
        squared = multiply(sine, sine)
        for frequency in FREQUENCIES:
            values = squared(frequency, TIMES)
            assert np.max(np.abs(values)) <= 1.0
            assert np.min(values) >= 0.0

    def test_split_gates_on_sine(self):
        voice = split(sine, silent)
        values = voice(5.0, TIMES)
        reference = sine(5.0, TIMES)
        assert np.all(values >= 0.0)
        np.testing.assert_array_equal(values[reference > 0], reference[reference > 0])

    def test_mix_switches_on_time(self):
        voice = mix(square, silent, 1.0)
        # first half of each interval plays the second voice
        assert float(voice(1.0, 0.25)) == 0.0
        assert float(voice(1.0, 0.5)) == 0.0
        assert float(voice(1.0, 0.75)) == -1.0
        assert float(voice(1.0, 1.25)) == 0.0

    def test_mix_rejects_bad_interval(self):
        with pytest.raises(ValueError):
            mix(sine, square, 0.0)

    def test_granularize_levels(self):
        values = granularize(sine, 4)(3.0, TIMES)
        assert np.all(np.isin(values, [-1.0, -0.5, 0.0, 0.5, 1.0]))

    def test_granularize_rejects_zero_levels(self):
        with pytest.raises(ValueError):
            granularize(sine, 0)

    def test_non_finite_parameters_rejected(self):
        for bad in (math.nan, math.inf):
            with pytest.raises(ValueError):
                granularize(sine, bad)
            with pytest.raises(ValueError):
                mix(sine, square, bad)
            with pytest.raises(ValueError):
                organ(2.0, bad)

    def test_cube(self):
        np.testing.assert_allclose(cube(sine)(7.0, TIMES), sine(7.0, TIMES) ** 3, atol=1e-12)
        np.testing.assert_allclose(sine_cubed(7.0, TIMES), sine(7.0, TIMES) ** 3, atol=1e-12)

    def test_fractional_exponent_keeps_sign(self):
        values = exponentiate(sawtooth, 1.5)(2.0, TIMES)
        assert not np.any(np.isnan(values))
        np.testing.assert_array_equal(np.sign(values), np.sign(sawtooth(2.0, TIMES)))

    def test_value_equality(self):
        assert split(sine, sawtooth) == sine_split_sawtooth
        assert split(sine, sawtooth) == Split(sine, sawtooth)
        assert split(sawtooth, sine) != sine_split_sawtooth


class TestParametricVoices:
    """Tests for zappy, organ and clarinet."""

    def test_zappy_ratio_is_memoized(self):
        assert zappy_ratio(3, 2) is zappy_ratio(3, 2)
        assert zappy_ratio(1, 2) == zappy(0.5)
        assert voices.zappy_1_2 == Zappy(0.5)

    def test_zappy_in_range(self):
        values = voices.zappy_3_2(110.0, TIMES)
        assert not np.any(np.isnan(values))
        assert np.max(np.abs(values)) <= 1.0

    def test_zappy_ratio_zero_divisor(self):
        with pytest.raises(ValueError):
            zappy_ratio(1, 0)

    def test_organ(self):
        voice = organ(2.0, 4.0)
        x = 2.0 * np.pi * 3.0 * TIMES
        np.testing.assert_allclose(voice(3.0, TIMES), (3.0 * np.sin(x) + np.sin(2.0 * x)) / 4.0, atol=1e-12)
        assert np.max(np.abs(voice(3.0, TIMES))) <= 1.0

    def test_organ_zero_divisor(self):
        with pytest.raises(ValueError):
            organ(2.0, 0.0)

    def test_clarinet(self):
        values = clarinet(3.0)(220.0, TIMES)
        assert np.max(np.abs(values)) <= 1.0

    def test_rock_organ_range(self):
        assert np.max(np.abs(voices.rock_organ(440.0, TIMES))) <= 1.0


class TestRegistry:
    """Tests for the named voice registry."""

    def test_get_voice(self):
        assert get_voice("sine") is sine
        assert get_voice("zappy_3_2") is voices.zappy_3_2

    def test_every_named_voice_renders(self):
        for name, voice in voices.VOICES.items():
            values = np.asarray(voice(440.0, TIMES))
            assert values.shape == TIMES.shape, name
            assert np.all(np.isfinite(values)), name

    def test_unknown_voice(self):
        with pytest.raises(ValueError):
            get_voice("theremin")

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            voices.VOICES["sine"] = square  # type: ignore[index]
