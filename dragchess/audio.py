"""Move sounds."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Union

import pygame

from dragchess.types import MoveType

_log = logging.getLogger(__name__)

_SOUND_NAMES: Dict[MoveType, Optional[str]] = {
    MoveType.NONE: None,
    MoveType.MOVESELF: "move-self",
    MoveType.CAPTURE: "capture",
    MoveType.CASTLE: "castle",
    MoveType.PROMOTEPAWN: "move-self",
    MoveType.GAMEOVER: None,
}


def sound_name_for(move_type: MoveType) -> Optional[str]:
    """The name of the sound a move of ``move_type`` makes, or None for silence."""
    return _SOUND_NAMES[move_type]


class Audio:
    """Loads the move sounds and plays the one that fits a move."""

    def __init__(self, asset_dir: Union[str, Path] = "assets") -> None:
        self.asset_dir = Path(asset_dir)
        self._sounds: Dict[str, "pygame.mixer.Sound"] = {}
        for name in sorted({n for n in _SOUND_NAMES.values() if n is not None}):
            sound = self._load(self.asset_dir / f"{name}.mp3")
            if sound is not None:
                self._sounds[name] = sound

    @staticmethod
    def _load(path: Path) -> Optional["pygame.mixer.Sound"]:
        if not path.is_file():
            _log.error("could not load %s into sound buffer", path.name)
            return None
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            return pygame.mixer.Sound(str(path))
        except (pygame.error, NotImplementedError, OSError):
            _log.error("could not load %s into sound buffer", path.name)
            return None

    @property
    def loaded(self) -> frozenset:
        """Names of the sounds that were loaded."""
        return frozenset(self._sounds)

    def play(self, move_type: MoveType) -> Optional[str]:
        """Play the sound for ``move_type`` if it was loaded; return its name."""
        name = sound_name_for(move_type)
        if name is not None:
            sound = self._sounds.get(name)
            if sound is not None:
                sound.play()
        return name