"""
RODA Audio Engine - synthesized arcade feedback sounds.

Two sounds, both generated at startup from simple oscillators:
- wheel_tick: short metallic click played on every segment crossing
- win: C-E-G-C-C square arpeggio with a bright closing sweep
"""

from typing import Dict, List, Optional, Tuple
import array
import logging
import math
import random

import pygame

from roda.config.settings import AudioSettings

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

# Ramps end at this gain instead of zero (exponential ramps cannot reach 0)
RAMP_FLOOR = 0.01

# (frequency Hz, start s)
WIN_MELODY: List[Tuple[float, float]] = [
    (523.25, 0.0),    # C5
    (659.25, 0.12),   # E5
    (783.99, 0.24),   # G5
    (1046.50, 0.36),  # C6
    (1046.50, 0.48),  # C6
]
WIN_NOTE_DECAY = 0.25
WIN_NOTE_LENGTH = 0.3
WIN_SWEEP = (1046.50, 2093.0, 0.6, 0.85)  # from Hz, to Hz, start s, end s


def square(t: float, freq: float) -> float:
    """Square wave oscillator."""
    return 1 if (t * freq) % 1 < 0.5 else -1


def triangle(t: float, freq: float) -> float:
    """Triangle wave oscillator."""
    p = (t * freq) % 1
    return 4 * abs(p - 0.5) - 1


def sine(t: float, freq: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * freq * t)


def noise(rng: random.Random) -> float:
    """White noise generator."""
    return rng.random() * 2 - 1


def exp_ramp(start: float, end: float, t: float, duration: float) -> float:
    """Exponential ramp from ``start`` to ``end`` over ``duration`` seconds."""
    if t >= duration:
        return end
    return start * (end / start) ** (t / duration)


def sweep_phase(f0: float, f1: float, t: float, duration: float) -> float:
    """Phase (in cycles) of an exponential frequency sweep at time ``t``.

    Integral of f0 * (f1/f0)^(t/T); past ``duration`` the frequency holds
    at ``f1``.
    """
    ratio = f1 / f0
    k = math.log(ratio) / duration
    if t <= duration:
        return f0 * (math.exp(k * t) - 1) / k
    return f0 * (ratio - 1) / k + f1 * (t - duration)


def _to_pcm(samples: List[float], gain: float = 1.0) -> array.array:
    """Clip float samples to [-1, 1] and pack them as 16-bit PCM."""
    pcm = array.array('h')
    for s in samples:
        s = max(-1.0, min(1.0, s * gain))
        pcm.append(int(s * 32767))
    return pcm


def synth_wheel_tick(rng: Optional[random.Random] = None) -> array.array:
    """Mechanical tick: square sweep, triangle body and a noise burst."""
    rng = rng or random.Random()
    length = 0.03
    noise_len = 0.02
    samples = []
    for i in range(int(SAMPLE_RATE * length)):
        t = i / SAMPLE_RATE
        val = 0.0

        # Bright metallic click, 1200 -> 400 Hz
        if t < 0.02:
            val += square(sweep_phase(1200, 400, t, 0.02), 1) * exp_ramp(0.3, RAMP_FLOOR, t, 0.02)

        # Body, 150 -> 50 Hz
        val += triangle(sweep_phase(150, 50, t, 0.03), 1) * exp_ramp(0.2, RAMP_FLOOR, t, 0.03)

        if t < noise_len:
            decay = math.exp(-t / (noise_len * 0.3))
            val += noise(rng) * decay * exp_ramp(0.15, RAMP_FLOOR, t, noise_len)

        samples.append(val)
    return _to_pcm(samples)


def synth_win() -> array.array:
    """Victory jingle: square arpeggio with triangle octave, then a sweep."""
    f0, f1, sweep_start, sweep_end = WIN_SWEEP
    total = sweep_end
    samples = []
    for i in range(int(SAMPLE_RATE * total)):
        t = i / SAMPLE_RATE
        val = 0.0

        for freq, start in WIN_MELODY:
            local = t - start
            if 0 <= local < WIN_NOTE_LENGTH:
                val += square(local, freq) * exp_ramp(0.15, RAMP_FLOOR, local, WIN_NOTE_DECAY)
                val += triangle(local, freq * 2) * exp_ramp(0.05, RAMP_FLOOR, local, WIN_NOTE_DECAY)

        if sweep_start <= t < sweep_end:
            local = t - sweep_start
            span = sweep_end - sweep_start
            phase = sweep_phase(f0, f1, local, span)
            val += math.sin(2 * math.pi * phase) * exp_ramp(0.2, RAMP_FLOOR, local, span)

        samples.append(val)
    return _to_pcm(samples)


class AudioEngine:
    """
    Feedback audio engine for RODA.

    Sounds are synthesized once in ``init()`` and played through the pygame
    mixer. When the mixer cannot be opened (no audio device, CI) every
    ``play_*`` call becomes a silent no-op.
    """

    def __init__(self, settings: Optional[AudioSettings] = None):
        self.settings = settings or AudioSettings()
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._enabled = self.settings.enabled
        self._volume_master = self.settings.volume
        self._generated = False

    def init(self) -> bool:
        """Initialize the audio system."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 512)
            pygame.mixer.init()
            pygame.mixer.set_num_channels(16)
            self._initialized = True
            logger.info("Audio engine initialized")
            self._generate_all_sounds()
            return True
        except Exception as e:
            logger.error(f"Failed to initialize audio: {e}")
            return False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (auto-converted to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def _generate_all_sounds(self) -> None:
        if self._generated:
            return
        self._sounds["wheel_tick"] = self._create_sound(synth_wheel_tick())
        self._sounds["win"] = self._create_sound(synth_win())
        self._generated = True
        logger.info(f"Generated {len(self._sounds)} sounds")

    # ===== PLAYBACK =====

    def play(self, sound_name: str, volume: float = 1.0) -> Optional[pygame.mixer.Channel]:
        """Play a sound effect."""
        if not self._initialized or not self._enabled:
            return None

        sound = self._sounds.get(sound_name)
        if not sound:
            logger.warning(f"Sound not found: {sound_name}")
            return None

        sound.set_volume(volume * self._volume_master)
        return sound.play()

    def play_wheel_tick(self) -> None:
        self.play("wheel_tick", self.settings.tick_volume)

    def play_win(self) -> None:
        self.play("win")

    # ===== STATE =====

    def is_enabled(self) -> bool:
        """Whether feedback sounds are currently on."""
        return self._enabled

    def toggle_audio(self) -> bool:
        """Flip sound on/off. Returns the new enabled state."""
        self._enabled = not self._enabled
        if self._initialized and not self._enabled:
            pygame.mixer.stop()
        logger.info(f"Audio {'enabled' if self._enabled else 'disabled'}")
        return self._enabled

    def set_volume(self, volume: float) -> None:
        """Set master volume (0.0 - 1.0)."""
        self._volume_master = max(0.0, min(1.0, volume))

    def get_volume(self) -> float:
        return self._volume_master

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            self._sounds.clear()
            self._generated = False
            logger.info("Audio engine cleaned up")


# Global audio engine instance
_audio_engine: Optional[AudioEngine] = None


def get_audio_engine(settings: Optional[AudioSettings] = None) -> AudioEngine:
    """Get the global audio engine instance.

    ``settings`` only applies when the instance is first created.
    """
    global _audio_engine
    if _audio_engine is None:
        _audio_engine = AudioEngine(settings)
    return _audio_engine
