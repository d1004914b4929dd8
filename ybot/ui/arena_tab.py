"""Arena tab: bot vs bot with live board updates."""

from __future__ import annotations

import time
from typing import Generator

import gradio as gr

from ybot.agent.base import YBot
from ybot.agent.minimax_bot import MinimaxBot
from ybot.agent.random_bot import RandomBot
from ybot.game.board import DEFAULT_BOARD_SIZE, GameY, format_coordinates
from ybot.game.types import Player
from ybot.ui.board_component import render_board_svg

ARENA_BOTS: dict[str, YBot] = {
    "MinimaxBot (0.2s)": MinimaxBot(max_time_ms=200),
    "MinimaxBot (0.5s)": MinimaxBot(max_time_ms=500),
    "MinimaxBot (1s)": MinimaxBot(max_time_ms=1000),
    "RandomBot": RandomBot(),
}

MOVE_DELAY = 0.4  # seconds between moves


def _result_message(game: GameY) -> str:
    if not game.is_over:
        return ""
    if game.winner is not None:
        return f"{game.winner} wins!"
    return "Draw!"


def _move_table(game: GameY) -> list[list[str]]:
    return [
        [str(i + 1), str(move.player), format_coordinates(move.coords)]
        for i, move in enumerate(game.moves)
    ]


def play_match(blue: YBot, red: YBot, size: int = DEFAULT_BOARD_SIZE) -> Generator[GameY, None, None]:
    """Play a full game between two bots, yielding the game after every move."""
    game = GameY(size)
    while not game.is_over:
        bot = blue if game.current_player is Player.BLUE else red
        move = bot.choose_move(game)
        assert move is not None, f"{bot.name} returned no move in a live game"
        game.apply_move(move)
        yield game


def _run_arena(
    blue_name: str,
    red_name: str,
    size: int,
    delay: float,
) -> Generator:
    """Generator that yields board updates after each move."""
    blue = ARENA_BOTS.get(blue_name, RandomBot())
    red = ARENA_BOTS.get(red_name, RandomBot())
    size = int(size)

    yield (
        render_board_svg(GameY(size), clickable=False),
        f"Game started: {blue_name} (Blue) vs {red_name} (Red)",
        [],
    )

    for game in play_match(blue, red, size):
        result = _result_message(game)
        last = game.moves[-1]
        if result:
            status = f"Game over: {result} ({len(game.moves)} moves)"
        else:
            status = (
                f"Move {len(game.moves)}: {last.player} played "
                f"{format_coordinates(last.coords)}"
            )

        yield (
            render_board_svg(game, clickable=False, game_over_message=result),
            status,
            _move_table(game),
        )

        if not game.is_over:
            time.sleep(delay)


def build_arena_tab() -> None:
    """Construct the Arena tab UI inside a gr.Blocks context."""

    with gr.Row():
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(GameY(DEFAULT_BOARD_SIZE), clickable=False),
                label="Board",
            )
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Select two bots and click Start.",
                label="Status",
                interactive=False,
                lines=2,
            )

            gr.Markdown("### Setup")
            blue_choice = gr.Dropdown(
                choices=list(ARENA_BOTS.keys()),
                value="MinimaxBot (0.5s)",
                label="Blue Bot",
            )
            red_choice = gr.Dropdown(
                choices=list(ARENA_BOTS.keys()),
                value="RandomBot",
                label="Red Bot",
            )
            size_choice = gr.Dropdown(
                choices=[5, 7, 9, 11],
                value=DEFAULT_BOARD_SIZE,
                label="Board size",
            )
            delay_slider = gr.Slider(
                minimum=0.1,
                maximum=2.0,
                value=MOVE_DELAY,
                step=0.1,
                label="Delay between moves (sec)",
            )
            start_btn = gr.Button("Start", variant="primary")

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move"],
                datatype=["number", "str", "str"],
                interactive=False,
                column_count=3,
            )

    start_btn.click(
        fn=_run_arena,
        inputs=[blue_choice, red_choice, size_choice, delay_slider],
        outputs=[board_html, status_text, move_table],
    )
