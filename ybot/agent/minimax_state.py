"""Mutable search board for the minimax bot.

A MinimaxState is built once per ``choose_move`` call from a game view and is
then mutated in place by make/undo for the whole search. Neighbor lists, edge
masks and coordinates are computed up front so the hot loops only touch flat
lists and the availability bit set.
"""

from __future__ import annotations

from typing import Iterator

from ybot.game.types import ALL_SIDES, Coordinates, Player

from .base import GameView
from .bitset import FixedBitSet

EMPTY = 0


def owner_id(player: Player) -> int:
    """Board owner value for `player`; 0 is reserved for empty cells."""
    return player.value + 1


class MinimaxState:
    def __init__(self, game: GameView, bot_player: Player) -> None:
        size = game.board_size
        total_cells = game.total_cells

        self.size = size
        self.board: list[int] = [EMPTY] * total_cells
        self.available_mask = FixedBitSet(total_cells)
        self.coords_cache: list[Coordinates] = []
        self.neighbors_cache: list[list[int]] = [[] for _ in range(total_cells)]
        self.edges_cache: list[int] = [0] * total_cells

        self.bot_id = owner_id(bot_player)
        self.human_id = owner_id(bot_player.other)

        # Scratch buffers shared by every check_win call
        self.visited: list[bool] = [False] * total_cells
        self.stack: list[int] = []
        self._unvisited: list[bool] = [False] * total_cells

        valid = [False] * total_cells
        for idx in range(total_cells):
            coords = Coordinates.from_index(idx, size)
            self.coords_cache.append(coords)
            if not coords.is_valid(size):
                continue
            valid[idx] = True
            for n in game.get_neighbors(coords):
                if n.is_valid(size):
                    self.neighbors_cache[idx].append(n.to_index(size))
            self.edges_cache[idx] = coords.sides

        for coords, player in game.board_map():
            self.board[coords.to_index(size)] = owner_id(player)

        for idx in game.available_cells():
            if valid[idx]:
                self.available_mask.insert(idx)

    @property
    def total_cells(self) -> int:
        return len(self.board)

    def make_move(self, idx: int, player: int) -> None:
        assert idx in self.available_mask, f"Cell {idx} is not available"
        self.board[idx] = player
        self.available_mask.set(idx, False)

    def undo_move(self, idx: int) -> None:
        assert self.board[idx] != EMPTY, f"Cell {idx} is not occupied"
        self.board[idx] = EMPTY
        self.available_mask.set(idx, True)

    def available_cells(self) -> Iterator[int]:
        return self.available_mask.ones()

    def occupied_cells(self) -> Iterator[int]:
        return self.available_mask.zeroes()

    def check_win(self, player: int) -> bool:
        """Return True if some group of `player` touches all three sides."""
        visited = self.visited
        visited[:] = self._unvisited

        board = self.board
        edges = self.edges_cache
        for idx in range(len(board)):
            if board[idx] == player and edges[idx] and not visited[idx]:
                if self.dfs_collect_edges(idx, player) == ALL_SIDES:
                    return True
        return False

    def dfs_collect_edges(self, start: int, player: int) -> int:
        """OR together the edge masks of the group containing `start`.

        Stops as soon as all three sides are reached.
        """
        board = self.board
        edges = self.edges_cache
        neighbors = self.neighbors_cache
        visited = self.visited
        stack = self.stack

        stack.clear()
        stack.append(start)
        visited[start] = True
        mask = 0

        while stack:
            idx = stack.pop()
            mask |= edges[idx]
            if mask == ALL_SIDES:
                return mask
            for n in neighbors[idx]:
                if board[n] == player and not visited[n]:
                    visited[n] = True
                    stack.append(n)

        return mask
