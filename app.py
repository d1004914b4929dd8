"""ybot: Gradio web app entry point."""

import logging

import gradio as gr

from ybot.ui.arena_tab import build_arena_tab
from ybot.ui.board_component import BOARD_CLICK_JS
from ybot.ui.play_tab import build_play_tab

with gr.Blocks(title="ybot") as demo:
    gr.Markdown("# ybot")
    gr.Markdown("Game Y: connect all three sides of the triangle to win.")

    with gr.Tab("Play"):
        build_play_tab()

    with gr.Tab("Arena"):
        build_arena_tab()

    # Bind board click handler JS on page load
    demo.load(fn=None, js=BOARD_CLICK_JS)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    demo.launch(theme=gr.themes.Soft())
