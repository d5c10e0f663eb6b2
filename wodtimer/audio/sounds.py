"""Tone synthesis and playback for timer cues using numpy + QSoundEffect.

Every cue is generated programmatically as a WAV file (sine waves shaped
by an ADSR envelope) and cached on disk, so later launches only load
the files.

Cue tones
---------
- ``countdown_tick`` — short low blip, pre-start seconds 10..4
- ``countdown_bell`` — short high bell, pre-start 3-2-1
- ``start_bell``     — long high bell when the workout begins
- ``phase_bell``     — long bell on every Tabata work/rest switch
- ``round_warning``  — short high bell, last 3 s of an EMOM/OTM round
"""

from __future__ import annotations

import io
import wave
from pathlib import Path
from typing import Callable

import numpy as np
from loguru import logger

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR
from .cues import Cue


SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _envelope(
    length: int,
    attack: int,
    decay: int,
    sustain_level: float,
    release: int,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.full(length, sustain_level, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    r_start = max(length - release, d_end)
    if r_start < length:
        env[r_start:] = np.linspace(env[r_start], 0.0, length - r_start)
    return env


def _tone(freq: float, duration_s: float, overtone: float = 0.0) -> np.ndarray:
    """Sine at *freq* Hz, optionally blended with its octave."""
    t = np.arange(int(SAMPLE_RATE * duration_s)) / SAMPLE_RATE
    wave_ = np.sin(2 * np.pi * freq * t)
    if overtone:
        wave_ = wave_ + overtone * np.sin(2 * np.pi * freq * 2 * t)
        wave_ /= 1.0 + overtone
    return wave_


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Float samples in -1..1 → 16-bit mono PCM WAV bytes."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


def _ms(seconds: float) -> int:
    return int(SAMPLE_RATE * seconds)


# ═══════════════════════════════════════════════════════════════════════════
#  CUE GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_tick() -> bytes:
    """Short low blip (440 Hz, 120 ms)."""
    tone = _tone(440.0, 0.12) * 0.5
    env = _envelope(len(tone), _ms(0.005), _ms(0.03), 0.6, _ms(0.06))
    return _to_wav_bytes(tone * env)


def _generate_countdown_bell() -> bytes:
    """Brighter bell for 3-2-1 (880 Hz with octave shimmer, 250 ms)."""
    tone = _tone(880.0, 0.25, overtone=0.3) * 0.6
    env = _envelope(len(tone), _ms(0.005), _ms(0.06), 0.5, _ms(0.15))
    return _to_wav_bytes(tone * env)


def _generate_start_bell() -> bytes:
    """Long high bell for "go" (1320 Hz, 900 ms, slow release)."""
    tone = _tone(1320.0, 0.9, overtone=0.25) * 0.7
    env = _envelope(len(tone), _ms(0.01), _ms(0.15), 0.55, _ms(0.6))
    return _to_wav_bytes(tone * env)


def _generate_phase_bell() -> bytes:
    """Work/rest switch: two quick strikes of a 1046 Hz bell."""
    strike = _tone(1046.5, 0.3, overtone=0.3) * 0.65
    strike = strike * _envelope(len(strike), _ms(0.005), _ms(0.08), 0.4, _ms(0.2))
    gap = np.zeros(_ms(0.08))
    return _to_wav_bytes(np.concatenate([strike, gap, strike]))


def _generate_round_warning() -> bytes:
    """Short high bell before a round boundary (990 Hz, 150 ms)."""
    tone = _tone(990.0, 0.15, overtone=0.2) * 0.55
    env = _envelope(len(tone), _ms(0.005), _ms(0.04), 0.5, _ms(0.08))
    return _to_wav_bytes(tone * env)


_GENERATORS: dict[Cue, Callable[[], bytes]] = {
    Cue.COUNTDOWN_TICK: _generate_tick,
    Cue.COUNTDOWN_BELL: _generate_countdown_bell,
    Cue.START_BELL: _generate_start_bell,
    Cue.PHASE_BELL: _generate_phase_bell,
    Cue.ROUND_WARNING: _generate_round_warning,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Tone emitter backed by cached WAV files and ``QSoundEffect``.

    Playback problems (no audio device, unreadable cache) are logged and
    swallowed; ``play`` never raises.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        engine = TimerEngine(emitter=mgr)
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[Cue, QSoundEffect] = {}

        try:
            self._ensure_wav_files()
        except OSError as exc:
            logger.warning("Could not cache cue sounds in {}: {}", self._sounds_dir, exc)
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def play(self, cue: Cue) -> None:
        """Play the tone for *cue*.  No-op if it failed to load.

        Muting is the engine's job (``TimerEngine.toggle_sound``).
        """
        effect = self._effects.get(cue)
        if effect is None:
            return
        try:
            effect.play()
        except Exception as exc:
            logger.debug("Playback failed for {}: {}", cue.value, exc)

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    # ── internal ──────────────────────────────────────────────────────

    def _path_for(self, cue: Cue) -> Path:
        return self._sounds_dir / f"{cue.value}.wav"

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for cue, gen_fn in _GENERATORS.items():
            path = self._path_for(cue)
            if not path.exists():
                path.write_bytes(gen_fn())

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for cue in Cue:
            path = self._path_for(cue)
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[cue] = effect
