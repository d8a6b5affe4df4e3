"""On-demand TTS inference endpoint controller."""

__version__ = "1.0.0"
