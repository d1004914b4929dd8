import pytest

from ybot.game.board import (
    Board,
    GameY,
    format_coordinates,
    parse_coordinates,
)
from ybot.game.types import Coordinates, Player


def play(game: GameY, *indices: int) -> GameY:
    for idx in indices:
        game.apply_move(Coordinates.from_index(idx, game.board_size))
    return game


class TestParseCoordinates:
    def test_valid(self):
        assert parse_coordinates("2,1,0", 4) == Coordinates(2, 1, 0)
        assert parse_coordinates(" (1, 1, 1) ", 4) == Coordinates(1, 1, 1)

    def test_invalid(self):
        assert parse_coordinates("", 4) is None
        assert parse_coordinates("1,1", 4) is None
        assert parse_coordinates("a,b,c", 4) is None
        assert parse_coordinates("1,1,0", 4) is None  # sum too small
        assert parse_coordinates("-1,2,2", 4) is None


def test_format_coordinates():
    assert format_coordinates(Coordinates(3, 2, 1)) == "3,2,1"


class TestBoard:
    def test_place_and_get(self):
        b = Board(4)
        c = Coordinates(1, 1, 1)
        b.place(c, Player.BLUE)
        assert b.get(c) is Player.BLUE
        assert not b.is_empty(c)

    def test_remove(self):
        b = Board(4)
        c = Coordinates(1, 1, 1)
        b.place(c, Player.BLUE)
        b.remove(c)
        assert b.is_empty(c)

    def test_total_cells(self):
        assert Board(1).total_cells == 1
        assert Board(7).total_cells == 28

    def test_is_on_grid(self):
        b = Board(3)
        assert b.is_on_grid(Coordinates(2, 0, 0))
        assert not b.is_on_grid(Coordinates(3, 0, 0))


class TestGameY:
    def test_initial_state(self):
        g = GameY(4)
        assert g.current_player is Player.BLUE
        assert g.next_player is Player.BLUE
        assert not g.is_over
        assert g.winner is None
        assert len(g.legal_moves()) == 10
        assert g.available_cells() == list(range(10))

    def test_alternating_turns(self):
        g = play(GameY(4), 4)
        assert g.current_player is Player.RED
        play(g, 5)
        assert g.current_player is Player.BLUE

    def test_neighbors_on_board_only(self):
        g = GameY(3)
        apex = Coordinates(2, 0, 0)
        assert set(g.get_neighbors(apex)) == {Coordinates(1, 1, 0), Coordinates(1, 0, 1)}

    def test_board_map_and_available(self):
        g = play(GameY(3), 0, 5)
        assert dict(g.board_map()) == {
            Coordinates(2, 0, 0): Player.BLUE,
            Coordinates(0, 0, 2): Player.RED,
        }
        assert g.available_cells() == [1, 2, 3, 4]

    def test_left_edge_win(self):
        # Blue: apex, (1,1,0), (0,2,0) connects all three sides
        g = play(GameY(3), 0, 2, 1, 5, 3)
        assert g.is_over
        assert g.winner is Player.BLUE
        assert g.next_player is None

    def test_single_cell_board(self):
        g = play(GameY(1), 0)
        assert g.winner is Player.BLUE

    def test_no_premature_win(self):
        g = play(GameY(4), 1, 2, 3)
        assert not g.is_over

    def test_disconnected_corners_do_not_win(self):
        # Blue holds all three corners of a size-3 board, none adjacent
        g = play(GameY(3), 0, 1, 3, 4, 5)
        assert g.winner is not Player.BLUE

    def test_undo_move(self):
        g = play(GameY(4), 4, 5)
        move = g.undo_move()
        assert move is not None
        assert move.coords == Coordinates.from_index(5, 4)
        assert g.current_player is Player.RED
        assert g.board.is_empty(move.coords)

    def test_undo_reverses_win(self):
        g = play(GameY(3), 0, 2, 1, 5, 3)
        assert g.is_over
        g.undo_move()
        assert not g.is_over
        assert g.winner is None

    def test_undo_empty_returns_none(self):
        assert GameY(3).undo_move() is None

    def test_resign(self):
        g = GameY(3)
        g.resign(Player.BLUE)
        assert g.is_over
        assert g.winner is Player.RED

    def test_cannot_play_on_occupied(self):
        g = play(GameY(3), 0)
        with pytest.raises(AssertionError):
            play(g, 0)

    def test_cannot_play_off_grid(self):
        with pytest.raises(AssertionError):
            GameY(3).apply_move(Coordinates(3, 0, 0))

    def test_cannot_play_after_game_over(self):
        g = play(GameY(3), 0, 2, 1, 5, 3)
        with pytest.raises(AssertionError):
            play(g, 4)

    def test_legal_moves_empty_after_game_over(self):
        g = play(GameY(3), 0, 2, 1, 5, 3)
        assert g.legal_moves() == []
