"""Loading and caching of the game's images and sounds."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Union

import pygame

_SOUND_FILES = {
    "title_theme": "music/title_theme.ogg",
    "arkanoid": "music/arkanoid.ogg",
    "hit_wall": "sounds/hit_wall0.ogg",
    "hit_brick": "sounds/hit_brick0.ogg",
    "fire_bullet": "sounds/laser0.ogg",
    "paddle": "sounds/hit_fast0.ogg",
    "magnet": "sounds/ball_stick0.ogg",
    "bullet_hit0": "sounds/bullet_hit0.ogg",
    "bullet_hit1": "sounds/bullet_hit1.ogg",
    "bullet_hit2": "sounds/bullet_hit2.ogg",
    "bullet_hit3": "sounds/bullet_hit3.ogg",
    "chime": "sounds/chime.ogg",
    "start": "sounds/arkanoid_start.ogg",
    "portal": "sounds/portal_exit0.ogg",
    "bat_extend": "sounds/bat_extend0.ogg",
    "bat_gun": "sounds/bat_gun0.ogg",
    "bat_small": "sounds/bat_small0.ogg",
    "magnet_barrel": "sounds/magnet0.ogg",
    "multiball": "sounds/multiball0.ogg",
    "speed_up": "sounds/speed_up0.ogg",
    "powerup": "sounds/powerup0.ogg",
    "extra_life": "sounds/extra_life0.ogg",
}


class Assets:
    """Images and sounds found under an asset directory, loaded on first use.

    Images are looked up as ``images/<name>.png``; sounds by their game name.
    Anything that is missing or cannot be decoded is reported as ``None``.
    """

    def __init__(self, root: Union[str, Path, None] = None) -> None:
        self.root = Path(root) if root is not None else Path("assets")
        self._images: Dict[str, Optional[pygame.Surface]] = {}
        self._sounds: Dict[str, Optional[pygame.mixer.Sound]] = {}

    def image(self, name: str) -> Optional[pygame.Surface]:
        """The image called ``name``, or None if it cannot be loaded."""
        if name not in self._images:
            path = self.root / "images" / f"{name}.png"
            try:
                surface = pygame.image.load(str(path))
            except (pygame.error, OSError):
                surface = None
            if surface is not None and pygame.display.get_surface() is not None:
                surface = surface.convert_alpha()
            self._images[name] = surface
        return self._images[name]

    def sound(self, name: str) -> Optional[pygame.mixer.Sound]:
        """The sound called ``name``, or None if audio or the file is unavailable."""
        if name not in _SOUND_FILES:
            raise KeyError(name)
        try:
            if not pygame.mixer.get_init():
                return None
        except (pygame.error, NotImplementedError):
            return None
        if name not in self._sounds:
            try:
                loaded = pygame.mixer.Sound(str(self.root / _SOUND_FILES[name]))
            except (pygame.error, OSError):
                loaded = None
            self._sounds[name] = loaded
        return self._sounds[name]

    def play(self, name: str, loop: bool = False) -> Optional[pygame.mixer.Channel]:
        """Start the sound ``name``, looping forever if ``loop``; return its channel."""
        sound = self.sound(name)
        if sound is None:
            return None
        return sound.play(loops=-1 if loop else 0)