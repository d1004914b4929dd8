from __future__ import annotations

import abc
from typing import Iterable, Optional, Protocol

from ybot.game.types import Coordinates, Player


class GameView(Protocol):
    """Read-only view of a game that bots build their search state from."""

    @property
    def board_size(self) -> int: ...

    @property
    def total_cells(self) -> int: ...

    @property
    def next_player(self) -> Optional[Player]: ...

    def get_neighbors(self, coords: Coordinates) -> list[Coordinates]: ...

    def board_map(self) -> Iterable[tuple[Coordinates, Player]]: ...

    def available_cells(self) -> Iterable[int]: ...


class YBot(abc.ABC):
    @abc.abstractmethod
    def choose_move(self, game: GameView) -> Optional[Coordinates]:
        """Return the cell this bot wants to play, or None if the game is over."""

    @property
    def name(self) -> str:
        return self.__class__.__name__
