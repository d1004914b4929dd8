from __future__ import annotations

import random
from typing import Optional

from ybot.game.types import Coordinates

from .base import GameView, YBot


class RandomBot(YBot):
    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return "random_bot"

    def choose_move(self, game: GameView) -> Optional[Coordinates]:
        if game.next_player is None:
            return None
        cells = list(game.available_cells())
        assert cells, "No legal moves available"
        return Coordinates.from_index(self._rng.choice(cells), game.board_size)
