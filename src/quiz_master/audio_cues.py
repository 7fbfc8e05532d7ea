"""Audio cues: fire-and-forget success/failure sounds for answered questions."""

import logging
import threading
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050
CORRECT = "correct"
WRONG = "wrong"

# (frequency Hz, duration s) notes for each cue
TONE_PATTERNS = {
    CORRECT: [(660.0, 0.09), (880.0, 0.14)],
    WRONG: [(220.0, 0.12), (165.0, 0.2)],
}

SPOKEN_CUES = {
    CORRECT: "Correct!",
    WRONG: "Wrong.",
}


class CuePlayer:
    """Base cue player. ``play`` never raises and never blocks for long."""

    def __init__(self, muted: bool = False, volume: float = 0.4):
        self.muted = muted
        self.volume = volume

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        return self.muted

    def play(self, kind: str):
        if self.muted:
            return
        try:
            self._play(kind)
        except Exception as e:
            logger.debug(f"Cue '{kind}' failed: {e}")

    def _play(self, kind: str):
        raise NotImplementedError


class NullCuePlayer(CuePlayer):
    """Silent player."""

    def _play(self, kind: str):
        pass


class ToneCuePlayer(CuePlayer):
    """Plays synthesized chimes through sounddevice."""

    def __init__(self, muted: bool = False, volume: float = 0.4, sample_rate: int = SAMPLE_RATE):
        super().__init__(muted=muted, volume=volume)
        self.sample_rate = sample_rate

    def synthesize(self, kind: str) -> np.ndarray:
        """Render a cue as a float32 mono buffer in [-volume, volume]."""
        notes = []
        for freq, duration in TONE_PATTERNS[kind]:
            t = np.arange(int(duration * self.sample_rate)) / self.sample_rate
            # short linear fade in/out to avoid clicks
            fade = np.minimum(1.0, np.minimum(t, duration - t) / 0.01)
            notes.append(np.sin(2 * np.pi * freq * t) * fade)
        return (np.concatenate(notes) * self.volume).astype(np.float32)

    def _play(self, kind: str):
        try:
            import sounddevice as sd
        except (ImportError, OSError) as e:
            logger.warning(f"sounddevice not available, cue skipped: {e}")
            return
        # sd.play returns immediately; playback continues in the background
        sd.play(self.synthesize(kind), samplerate=self.sample_rate)


class SpokenCuePlayer(CuePlayer):
    """Speaks the cue with pyttsx3 on a background thread."""

    def __init__(self, muted: bool = False, volume: float = 0.4, rate: int = 180,
                 blocking: bool = False):
        super().__init__(muted=muted, volume=volume)
        self.rate = rate
        self.blocking = blocking
        self._lock = threading.Lock()

    def _speak(self, text: str):
        with self._lock:
            try:
                import pyttsx3
                # A fresh engine per utterance; pyttsx3 does not restart a finished loop.
                engine = pyttsx3.init()
                engine.setProperty("rate", self.rate)
                engine.setProperty("volume", self.volume)
                engine.say(text)
                engine.runAndWait()
            except Exception as e:
                logger.debug(f"Spoken cue failed: {e}")

    def _play(self, kind: str):
        text = SPOKEN_CUES[kind]
        if self.blocking:
            self._speak(text)
            return
        threading.Thread(target=self._speak, args=(text,), daemon=True).start()


def build_cue_player(audio_cfg: Optional[dict] = None) -> CuePlayer:
    """Create the cue player named by ``audio.backend`` in the config."""
    audio_cfg = audio_cfg or {}
    backend = audio_cfg.get("backend", "tone")
    muted = bool(audio_cfg.get("muted", False))
    volume = float(audio_cfg.get("volume", 0.4))
    if backend == "tone":
        return ToneCuePlayer(muted=muted, volume=volume)
    if backend == "voice":
        return SpokenCuePlayer(muted=muted, volume=volume)
    if backend != "none":
        logger.warning(f"Unknown audio backend '{backend}', audio disabled.")
    return NullCuePlayer(muted=muted, volume=volume)
