from ybot.agent.random_bot import RandomBot
from ybot.game.types import Player
from ybot.ui.play_tab import (
    GameSession,
    _apply_human_move,
    _new_game_with_color,
    _resign,
    _undo_move,
)


def _session() -> GameSession:
    return GameSession(bot=RandomBot(seed=1))


def test_new_game_as_blue():
    session = _session()
    result = _new_game_with_color("Blue", "RandomBot", 5, session)
    assert session.human_player is Player.BLUE
    assert session.game.board_size == 5
    assert len(session.game.moves) == 0  # no bot opening move
    assert "You are Blue" in result[4]


def test_new_game_as_red_bot_goes_first():
    session = _session()
    result = _new_game_with_color("Red", "RandomBot", 5, session)
    assert session.human_player is Player.RED
    assert len(session.game.moves) == 1
    assert session.game.moves[0].player is Player.BLUE
    assert session.game.current_player is Player.RED
    assert "You are Red" in result[4]


def test_new_game_random_assigns_valid_color():
    session = _session()
    colors_seen = set()
    for _ in range(50):
        _new_game_with_color("Random", "RandomBot", 3, session)
        colors_seen.add(session.human_player)
    assert Player.BLUE in colors_seen
    assert Player.RED in colors_seen


def test_human_move_gets_bot_reply():
    session = _session()
    _new_game_with_color("Blue", "RandomBot", 5, session)
    result = _apply_human_move("2,1,1", session)
    assert len(session.game.moves) == 2
    assert session.game.moves[1].player is Player.RED
    assert result[4] == ""


def test_invalid_coordinate_reports_error():
    session = _session()
    _new_game_with_color("Blue", "RandomBot", 5, session)
    result = _apply_human_move("9,9,9", session)
    assert "Invalid coordinate" in result[1]
    assert len(session.game.moves) == 0


def test_occupied_cell_reports_error():
    session = _session()
    _new_game_with_color("Blue", "RandomBot", 5, session)
    _apply_human_move("2,1,1", session)
    result = _apply_human_move("2,1,1", session)
    assert "already occupied" in result[1]


def test_undo_removes_move_pair():
    session = _session()
    _new_game_with_color("Blue", "RandomBot", 5, session)
    _apply_human_move("2,1,1", session)
    _undo_move(session)
    assert len(session.game.moves) == 0
    assert session.game.current_player is Player.BLUE


def test_resign_hands_win_to_bot():
    session = _session()
    _new_game_with_color("Blue", "RandomBot", 5, session)
    _resign(session)
    assert session.game.is_over
    assert session.game_over_banner == "AI wins!"


def test_game_over_banner_win():
    session = _session()
    session.human_player = Player.BLUE
    session.game._is_over = True
    session.game._winner = Player.BLUE
    assert session.game_over_banner == "You win!"


def test_game_over_banner_empty_when_playing():
    assert _session().game_over_banner == ""
