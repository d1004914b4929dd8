from __future__ import annotations

import enum
from typing import NamedTuple


class Player(enum.Enum):
    BLUE = 0
    RED = 1

    @property
    def other(self) -> Player:
        return Player.RED if self is Player.BLUE else Player.BLUE

    def __str__(self) -> str:
        return self.name.capitalize()


# Side bits, one per board edge
SIDE_A = 0b001
SIDE_B = 0b010
SIDE_C = 0b100
ALL_SIDES = SIDE_A | SIDE_B | SIDE_C


class Coordinates(NamedTuple):
    """Barycentric cell position; valid cells satisfy x + y + z == size - 1."""

    x: int
    y: int
    z: int

    @classmethod
    def from_index(cls, idx: int, size: int) -> Coordinates:
        """Decode a row-major cell index (row 0 is the apex)."""
        row = 0
        while (row + 1) * (row + 2) // 2 <= idx:
            row += 1
        col = idx - row * (row + 1) // 2
        return cls(size - 1 - row, row - col, col)

    def to_index(self, size: int) -> int:
        row = size - 1 - self.x
        return row * (row + 1) // 2 + self.z

    def is_valid(self, size: int) -> bool:
        return (
            self.x >= 0
            and self.y >= 0
            and self.z >= 0
            and self.x + self.y + self.z == size - 1
        )

    def touches_side_a(self) -> bool:
        return self.x == 0

    def touches_side_b(self) -> bool:
        return self.y == 0

    def touches_side_c(self) -> bool:
        return self.z == 0

    @property
    def sides(self) -> int:
        """Bit mask of the board sides this cell lies on."""
        mask = 0
        if self.touches_side_a():
            mask |= SIDE_A
        if self.touches_side_b():
            mask |= SIDE_B
        if self.touches_side_c():
            mask |= SIDE_C
        return mask

    def neighbors(self) -> list[Coordinates]:
        """The six adjacent triples, including ones off the board."""
        x, y, z = self
        return [
            Coordinates(x - 1, y + 1, z),
            Coordinates(x - 1, y, z + 1),
            Coordinates(x + 1, y - 1, z),
            Coordinates(x, y - 1, z + 1),
            Coordinates(x + 1, y, z - 1),
            Coordinates(x, y + 1, z - 1),
        ]
