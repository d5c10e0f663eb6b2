"""Audio package."""

from .cues import Cue, ToneShape, ToneEmitter, SilentEmitter

__all__ = [
    "Cue",
    "ToneShape",
    "ToneEmitter",
    "SilentEmitter",
]
