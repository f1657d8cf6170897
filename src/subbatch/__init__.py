"""subbatch: batch video-to-subtitle transcription."""

__version__ = "0.1.0"
