"""Tests for configuration, logging and the WAV codec adapter."""

import json
import logging

import numpy as np
import pytest
import soundfile as sf
from pydantic import ValidationError

from wncore.audio import read_wav, validate_format, write_export, write_wav
from wncore.config import get_settings
from wncore.logging import JsonFormatter, get_logger, setup_logging
from wnsynth import WaveformBuffer
from wnsynth.voices import sine


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("WN_LOG_LEVEL", "WN_WAV_SUBTYPE", "WN_RENDER_WORKERS", "WN_ENV"):
            monkeypatch.delenv(name, raising=False)
        s = get_settings()
        assert s.WN_LOG_LEVEL == "INFO"
        assert s.WN_WAV_SUBTYPE == "PCM_16"
        assert s.WN_RENDER_WORKERS == 1
        assert s.WN_ENV == "development"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("WN_RENDER_WORKERS", "4")
        monkeypatch.setenv("WN_LOG_LEVEL", "debug")
        s = get_settings()
        assert s.WN_RENDER_WORKERS == 4
        assert s.WN_LOG_LEVEL == "debug"

    def test_memoized(self):
        assert get_settings() is get_settings()

    def test_invalid_worker_count(self, monkeypatch):
        monkeypatch.setenv("WN_RENDER_WORKERS", "0")
        with pytest.raises(ValidationError):
            get_settings()


class TestLogging:
    """Tests for JSON logging setup."""

    def test_json_formatter(self):
        record = logging.LogRecord("wnsynth.render", logging.INFO, __file__, 1, "rendered %d notes", (12,), None)
        payload = json.loads(JsonFormatter().format(record))
        assert payload["level"] == "INFO"
        assert payload["name"] == "wnsynth.render"
        assert payload["message"] == "rendered 12 notes"
        assert "time" in payload

    def test_json_formatter_includes_extra_fields(self):
        record = logging.LogRecord("wnsynth.render", logging.DEBUG, __file__, 1, "mixed", (), None)
        record.samples = 24000
        record.weight = 0.5
        payload = json.loads(JsonFormatter().format(record))
        assert payload["samples"] == 24000
        assert payload["weight"] == 0.5
        assert "args" not in payload
        assert "levelno" not in payload

    def test_render_logs_carry_buffer_context(self, caplog):
        buffer = WaveformBuffer(sample_rate=8000)
        with caplog.at_level(logging.DEBUG, logger="wnsynth.render"):
            buffer.add_events([(440.0, 0.5, 0.25, sine), (220.0, 0.5, 0.25, sine)], max_workers=1)
            buffer.mix(buffer.copy(), 0.25)

        rendered, mixed = caplog.records[-2:]
        assert rendered.events == 2
        assert rendered.workers == 1
        assert rendered.cursor_seconds == 0.5
        assert rendered.sample_rate == 8000
        assert mixed.samples == 4000
        assert mixed.weight == 0.25
        payload = json.loads(JsonFormatter().format(mixed))
        assert payload["samples"] == 4000

    def test_setup_logging(self, monkeypatch):
        monkeypatch.setenv("WN_LOG_LEVEL", "WARNING")
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging()
            assert root.level == logging.WARNING
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JsonFormatter)

            setup_logging("debug")
            assert root.level == logging.DEBUG
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_get_logger(self):
        assert get_logger("wnsynth") is logging.getLogger("wnsynth")


class TestAudio:
    """Tests for WAV persistence."""

    def test_export_round_trip(self, tmp_path):
        buffer = WaveformBuffer(sample_rate=48000)
        buffer.add_note(440.0, 0.5, 0.25, sine)
        buffer.add_rest(0.25)
        path = str(tmp_path / "take.wav")

        write_export(path, buffer.export())

        audio, sr = read_wav(path)
        assert sr == 48000
        assert len(audio) == len(buffer)
        np.testing.assert_allclose(audio, buffer.samples, atol=1e-4)
        assert sf.info(path).subtype == "PCM_16"

    def test_clips_for_pcm(self, tmp_path, caplog):
        path = str(tmp_path / "loud.wav")
        with caplog.at_level(logging.WARNING, logger="wncore.audio"):
            write_wav(path, np.array([0.0, 1.5, -1.5, 0.5]), 8000)
        audio, _ = read_wav(path)
        assert np.max(np.abs(audio)) <= 1.0
        assert any("Clipping 2 samples" in message for message in caplog.messages)

    def test_subtype_from_settings(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WN_WAV_SUBTYPE", "FLOAT")
        path = str(tmp_path / "float.wav")
        write_wav(path, np.array([0.0, 1.5, -0.25]), 8000)
        audio, _ = read_wav(path)
        assert sf.info(path).subtype == "FLOAT"
        np.testing.assert_allclose(audio, [0.0, 1.5, -0.25])

    def test_validate_format(self):
        validate_format(48000, 1, "PCM_24")
        with pytest.raises(ValueError):
            validate_format(0, 1, "PCM_16")
        with pytest.raises(ValueError):
            validate_format(48000, 2, "PCM_16")
        with pytest.raises(ValueError):
            validate_format(48000, 1, "NOT_A_SUBTYPE")

    def test_rejects_multichannel(self, tmp_path):
        with pytest.raises(ValueError):
            write_wav(str(tmp_path / "stereo.wav"), np.zeros((10, 2)), 8000)
        with pytest.raises(ValueError):
            write_export(str(tmp_path / "stereo.wav"), (np.zeros(10), 8000, 2))
