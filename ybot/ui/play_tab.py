"""Play tab: Human vs bot with interactive SVG board."""

from __future__ import annotations

import random as _random
import time as _time
from dataclasses import dataclass, field
from typing import Optional

import gradio as gr

from ybot.agent.base import YBot
from ybot.agent.minimax_bot import MinimaxBot
from ybot.agent.random_bot import RandomBot
from ybot.game.board import (
    DEFAULT_BOARD_SIZE,
    GameY,
    format_coordinates,
    parse_coordinates,
)
from ybot.game.types import Player
from ybot.ui.board_component import render_board_svg

BOT_CHOICES: dict[str, YBot] = {
    "MinimaxBot (0.5s)": MinimaxBot(max_time_ms=500),
    "MinimaxBot (1s)": MinimaxBot(max_time_ms=1000),
    "MinimaxBot (3s)": MinimaxBot(max_time_ms=3000),
    "RandomBot": RandomBot(),
}

BOARD_SIZES = [5, 7, 9, 11]


@dataclass
class GameSession:
    """Per-tab game state held in gr.State."""

    game: GameY = field(default_factory=GameY)
    bot: YBot = field(default_factory=lambda: MinimaxBot(max_time_ms=1000))
    human_player: Player = field(default=Player.BLUE)
    _turn_start: float = field(default_factory=_time.time)

    def reset(self, human_player: Optional[Player] = None, size: Optional[int] = None) -> None:
        self.game = GameY(size if size is not None else self.game.board_size)
        self._turn_start = _time.time()
        if human_player is not None:
            self.human_player = human_player

    def mark_turn_start(self) -> None:
        """Record the moment the current player's clock starts."""
        self._turn_start = _time.time()

    def elapsed_since_turn_start(self) -> float:
        return _time.time() - self._turn_start

    @property
    def game_over_banner(self) -> str:
        """Short text for the SVG overlay banner. Empty if game is not over."""
        g = self.game
        if not g.is_over:
            return ""
        if g.winner is not None:
            if g.winner == self.human_player:
                return "You win!"
            return "AI wins!"
        return "Draw!"

    @property
    def status_text(self) -> str:
        g = self.game
        if g.is_over:
            if g.winner is not None:
                who = "You win!" if g.winner == self.human_player else "AI wins!"
                return f"Game over: {who} ({g.winner} connected all three sides)"
            return "Game over: Draw!"
        if g.current_player == self.human_player:
            return f"Your turn ({g.current_player})"
        return f"AI is thinking... ({g.current_player})"

    @property
    def move_history_table(self) -> list[list[str]]:
        rows: list[list[str]] = []
        for i, move in enumerate(self.game.moves):
            t = f"{move.elapsed:.2f}" if move.elapsed is not None else "-"
            rows.append([str(i + 1), str(move.player), format_coordinates(move.coords), t])
        return rows


def _make_board_html(session: GameSession) -> str:
    clickable = (
        not session.game.is_over
        and session.game.current_player == session.human_player
    )
    return render_board_svg(
        session.game,
        clickable=clickable,
        game_over_message=session.game_over_banner,
    )


def _bot_reply(session: GameSession) -> None:
    """Let the bot move if it is its turn."""
    game = session.game
    if game.is_over or game.current_player == session.human_player:
        return
    t0 = _time.time()
    bot_move = session.bot.choose_move(game)
    if bot_move is not None:
        game.apply_move(bot_move, elapsed=_time.time() - t0)
    session.mark_turn_start()  # human's clock starts now


def _outputs(session: GameSession, status: Optional[str] = None):
    return (
        _make_board_html(session),
        status if status is not None else session.status_text,
        session.move_history_table,
        session,
    )


def _apply_human_move(coord_text: str, session: GameSession):
    """Process a human move, then let the bot respond."""
    if session.game.is_over:
        return _outputs(session) + ("",)

    if session.game.current_player != session.human_player:
        return _outputs(session, "Wait, it's the AI's turn.") + ("",)

    coords = parse_coordinates(coord_text, session.game.board_size)
    if coords is None:
        return _outputs(
            session, f"Invalid coordinate: '{coord_text}'. Use format like 3,2,1."
        ) + ("",)

    if not session.game.board.is_empty(coords):
        return _outputs(session, f"{format_coordinates(coords)} is already occupied.") + ("",)

    session.game.apply_move(coords, elapsed=session.elapsed_since_turn_start())
    _bot_reply(session)
    return _outputs(session) + ("",)


def _new_game_with_color(
    color_choice: str,
    bot_choice: str,
    size: int,
    session: GameSession,
):
    """Start a new game. color_choice is 'Blue', 'Red', or 'Random'."""
    if color_choice == "Random":
        human = _random.choice([Player.BLUE, Player.RED])
    elif color_choice == "Red":
        human = Player.RED
    else:
        human = Player.BLUE

    session.bot = BOT_CHOICES.get(bot_choice, RandomBot())
    session.reset(human_player=human, size=int(size))

    # Blue moves first, so a Red human waits for the bot's opening move
    _bot_reply(session)
    session.mark_turn_start()

    return _outputs(session) + (f"You are {human}.",)


def _undo_move(session: GameSession):
    """Undo the last move pair (bot + human)."""
    if not session.game.moves:
        return _outputs(session, "Nothing to undo.")

    last = session.game.moves[-1]
    if last.player != session.human_player:
        session.game.undo_move()  # undo bot
    if session.game.moves:
        session.game.undo_move()  # undo human

    # Undoing past the bot's opening move hands the turn back to the bot
    _bot_reply(session)
    return _outputs(session)


def _resign(session: GameSession):
    if not session.game.is_over:
        session.game.resign(session.human_player)
    return _outputs(session)


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    session_state = gr.State(GameSession())

    with gr.Row():
        # Left: board
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(GameY(DEFAULT_BOARD_SIZE)),
                label="Board",
            )
        # Right: controls
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Your turn (Blue)",
                label="Status",
                interactive=False,
                lines=2,
            )
            color_info = gr.Textbox(
                value="You are Blue.",
                label="Color",
                interactive=False,
                lines=1,
            )

            gr.Markdown("### New Game")
            color_choice = gr.Radio(
                choices=["Random", "Blue", "Red"],
                value="Random",
                label="Play as",
            )
            bot_choice = gr.Dropdown(
                choices=list(BOT_CHOICES.keys()),
                value=list(BOT_CHOICES.keys())[1],
                label="Opponent",
            )
            size_choice = gr.Dropdown(
                choices=BOARD_SIZES,
                value=DEFAULT_BOARD_SIZE,
                label="Board size",
            )
            new_game_btn = gr.Button("New Game", variant="primary")

            with gr.Row():
                undo_btn = gr.Button("Undo")
                resign_btn = gr.Button("Resign", variant="stop")

            gr.Markdown("### Enter Move")
            coord_input = gr.Textbox(
                label="Coordinate x,y,z (e.g. 3,2,1)",
                placeholder="3,2,1",
                elem_id="coord-input",
                lines=1,
            )
            coord_submit = gr.Button(
                "Submit Move",
                elem_id="coord-submit",
            )

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move", "Time (s)"],
                datatype=["number", "str", "str", "str"],
                interactive=False,
                column_count=4,
            )

    # Outputs shared by most callbacks
    board_outputs = [board_html, status_text, move_table, session_state]

    coord_submit.click(
        fn=_apply_human_move,
        inputs=[coord_input, session_state],
        outputs=board_outputs + [coord_input],
    )

    new_game_btn.click(
        fn=_new_game_with_color,
        inputs=[color_choice, bot_choice, size_choice, session_state],
        outputs=board_outputs + [color_info],
    )

    undo_btn.click(
        fn=_undo_move,
        inputs=[session_state],
        outputs=board_outputs,
    )

    resign_btn.click(
        fn=_resign,
        inputs=[session_state],
        outputs=board_outputs,
    )
