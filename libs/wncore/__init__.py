"""Wren core: configuration, logging and the WAV codec adapter."""

__version__ = "0.1.0"
