from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .types import ALL_SIDES, Coordinates, Player

DEFAULT_BOARD_SIZE = 7


def parse_coordinates(text: str, size: int) -> Optional[Coordinates]:
    """Parse a coordinate string like '3,2,1' or '(3, 2, 1)' into Coordinates.

    Returns None if the string is malformed or the cell is off the board.
    """
    text = text.strip().strip("()")
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 3:
        return None
    try:
        coords = Coordinates(*(int(p) for p in parts))
    except ValueError:
        return None
    if not coords.is_valid(size):
        return None
    return coords


def format_coordinates(coords: Coordinates) -> str:
    """Format Coordinates as a string like '3,2,1'."""
    return f"{coords.x},{coords.y},{coords.z}"


@dataclass
class Move:
    coords: Coordinates
    player: Player
    elapsed: Optional[float] = None

    def __str__(self) -> str:
        return f"{self.player}: {format_coordinates(self.coords)}"


class Board:
    """Triangular Game Y board of a given size. Tracks stone placement."""

    def __init__(self, size: int = DEFAULT_BOARD_SIZE) -> None:
        self.size = size
        self._grid: dict[Coordinates, Player] = {}

    def place(self, coords: Coordinates, player: Player) -> None:
        assert self.is_empty(coords), f"{format_coordinates(coords)} is occupied"
        self._grid[coords] = player

    def remove(self, coords: Coordinates) -> None:
        del self._grid[coords]

    def get(self, coords: Coordinates) -> Optional[Player]:
        return self._grid.get(coords)

    def is_empty(self, coords: Coordinates) -> bool:
        return coords not in self._grid

    def is_on_grid(self, coords: Coordinates) -> bool:
        return coords.is_valid(self.size)

    def items(self) -> Iterator[tuple[Coordinates, Player]]:
        return iter(self._grid.items())

    @property
    def total_cells(self) -> int:
        return self.size * (self.size + 1) // 2

    @property
    def occupied_count(self) -> int:
        return len(self._grid)


class GameY:
    """Full game state for Game Y: connect all three sides to win."""

    def __init__(self, size: int = DEFAULT_BOARD_SIZE) -> None:
        assert size >= 1, "Board size must be positive"
        self.board = Board(size)
        self.current_player = Player.BLUE
        self.moves: list[Move] = []
        self._winner: Optional[Player] = None
        self._is_over = False

    @property
    def board_size(self) -> int:
        return self.board.size

    @property
    def total_cells(self) -> int:
        return self.board.total_cells

    @property
    def is_over(self) -> bool:
        return self._is_over

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def next_player(self) -> Optional[Player]:
        """The player to move, or None once the game has ended."""
        if self._is_over:
            return None
        return self.current_player

    def get_neighbors(self, coords: Coordinates) -> list[Coordinates]:
        return [n for n in coords.neighbors() if self.board.is_on_grid(n)]

    def board_map(self) -> Iterator[tuple[Coordinates, Player]]:
        return self.board.items()

    def available_cells(self) -> list[int]:
        """Indices of every empty cell, in index order."""
        size = self.board_size
        cells = []
        for idx in range(self.total_cells):
            coords = Coordinates.from_index(idx, size)
            if coords.is_valid(size) and self.board.is_empty(coords):
                cells.append(idx)
        return cells

    def legal_moves(self) -> list[Coordinates]:
        if self._is_over:
            return []
        size = self.board_size
        return [Coordinates.from_index(idx, size) for idx in self.available_cells()]

    def apply_move(self, coords: Coordinates, elapsed: Optional[float] = None) -> None:
        """Place a stone for the current player and advance the turn."""
        assert not self._is_over, "Game is already over"
        assert self.board.is_on_grid(coords), f"{coords} is off the grid"
        assert self.board.is_empty(coords), f"{format_coordinates(coords)} is occupied"

        player = self.current_player
        self.board.place(coords, player)
        self.moves.append(Move(coords=coords, player=player, elapsed=elapsed))

        if self._check_win(coords, player):
            self._winner = player
            self._is_over = True
        elif self.board.occupied_count == self.total_cells:
            self._is_over = True

        self.current_player = self.current_player.other

    def undo_move(self) -> Optional[Move]:
        """Undo the last move. Returns the undone Move, or None if no moves."""
        if not self.moves:
            return None
        move = self.moves.pop()
        self.board.remove(move.coords)
        self.current_player = move.player
        self._winner = None
        self._is_over = False
        return move

    def resign(self, player: Player) -> None:
        """End the game with `player` conceding."""
        self._winner = player.other
        self._is_over = True

    def _check_win(self, coords: Coordinates, player: Player) -> bool:
        """Check if the group containing `coords` now touches all three sides."""
        sides = 0
        seen = {coords}
        frontier = [coords]
        while frontier:
            current = frontier.pop()
            sides |= current.sides
            if sides == ALL_SIDES:
                return True
            for n in self.get_neighbors(current):
                if n not in seen and self.board.get(n) is player:
                    seen.add(n)
                    frontier.append(n)
        return False
