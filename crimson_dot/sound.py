import os
import logging

import pygame

logger = logging.getLogger(__name__)

# Configure mixer pre-init from environment; conservative defaults reduce underruns
_AUDIO_FREQ = int(os.getenv("CRIMSON_DOT_AUDIO_FREQ", "22050"))
_AUDIO_CHANNELS = int(os.getenv("CRIMSON_DOT_AUDIO_CHANNELS", "2"))
_AUDIO_BUFFER = int(os.getenv("CRIMSON_DOT_AUDIO_BUF", "512"))

ASSETS_DIR = os.path.join(os.path.dirname(__file__), "assets")
SOUNDS_DIR = os.path.join(ASSETS_DIR, "sounds")
MUSIC_FILE = os.path.join(ASSETS_DIR, "music.ogg")


class SoundManager:
    """Named sound effects and background music with a safe no-op fallback.

    Environment variables:
      - CRIMSON_DOT_AUDIO_FREQ (Hz, default 22050)
      - CRIMSON_DOT_AUDIO_BUF (samples, default 512)
      - CRIMSON_DOT_AUDIO_CHANNELS (1 or 2, default 2)
      - CRIMSON_DOT_MUTED (1 to start muted)

    `play_effect(name)` is the fire-and-forget capability handed to the
    simulation; it records the attempt even when audio is unavailable, which
    keeps headless runs and tests observable.
    """
    def __init__(self, sounds_dir=SOUNDS_DIR, music_file=MUSIC_FILE):
        self.enabled = False
        self.muted = os.getenv("CRIMSON_DOT_MUTED", "") == "1"
        self.music_playing = False
        self.last_played = None
        self.assets = {}
        self.sounds_dir = sounds_dir
        self.music_file = music_file
        try:
            pygame.mixer.pre_init(_AUDIO_FREQ, -16, _AUDIO_CHANNELS, _AUDIO_BUFFER)
            pygame.mixer.init()
            self.enabled = True
        except pygame.error as e:
            logger.warning("Audio disabled: %s", e)

    def load(self, name, path):
        """Load a sound asset into memory for quicker playback. Returns True on success."""
        self.assets[name] = None
        if not self.enabled:
            return False
        try:
            self.assets[name] = pygame.mixer.Sound(path)
            return True
        except (pygame.error, FileNotFoundError) as e:
            logger.debug("Could not load sound '%s' from %s: %s", name, path, e)
            return False

    def play_effect(self, name):
        """Play a named effect; no-op if muted or audio is unavailable."""
        self.last_played = name
        if not self.enabled or self.muted:
            return
        if name not in self.assets:
            self.load(name, os.path.join(self.sounds_dir, f"{name}.wav"))
        snd = self.assets.get(name)
        if snd:
            snd.play()

    def start_music(self):
        if self.muted or self.music_playing:
            return
        self.music_playing = True
        if not self.enabled or not os.path.exists(self.music_file):
            return
        try:
            pygame.mixer.music.load(self.music_file)
            pygame.mixer.music.play(-1)
        except pygame.error as e:
            logger.warning("Could not start music: %s", e)

    def stop_music(self):
        self.music_playing = False
        if self.enabled and pygame.mixer.get_init():
            pygame.mixer.music.stop()

    def toggle_mute(self):
        """Flip mute; music follows the new setting."""
        self.muted = not self.muted
        if self.muted:
            self.stop_music()
        else:
            self.start_music()
        return self.muted

    def check_output(self):
        """Return diagnostic info: (enabled:bool, init_info:dict)."""
        info = {"mixer_init": pygame.mixer.get_init() if self.enabled else None}
        return (self.enabled, info)
