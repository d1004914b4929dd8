"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

import math
from typing import Optional

from ybot.game.board import GameY, format_coordinates
from ybot.game.types import Coordinates, Player

# Layout constants
CELL_SIZE = 48
ROW_HEIGHT = CELL_SIZE * math.sqrt(3) / 2
MARGIN = 48
SLOT_RADIUS = 20
STONE_RADIUS = 18
CLICK_RADIUS = 22  # Invisible click target radius

# Colors
BG_COLOR = "#E8D5A8"
LINE_COLOR = "#4A3728"
SLOT_COLOR = "#F4E7C5"
BLUE_STONE = "#2563EB"
RED_STONE = "#DC2626"
LAST_MOVE_COLOR = "#FFFFFF"
WIN_BANNER = "#4ADE80"
LOSS_BANNER = "#F87171"
NEUTRAL_BANNER = "#FFFFFF"


def board_dimensions(size: int) -> tuple[int, int]:
    width = int(2 * MARGIN + CELL_SIZE * max(size - 1, 0))
    height = int(2 * MARGIN + ROW_HEIGHT * max(size - 1, 0))
    return width, height


def _coord(coords: Coordinates, size: int) -> tuple[float, float]:
    """Convert barycentric coordinates to SVG pixel coordinates (apex on top)."""
    row = size - 1 - coords.x
    col = coords.z
    x = MARGIN + CELL_SIZE * (col + (size - 1 - row) / 2)
    y = MARGIN + ROW_HEIGHT * row
    return round(x, 1), round(y, 1)


def _banner_color(message: str) -> str:
    if "win" in message.lower() and "ai" not in message.lower():
        return WIN_BANNER
    if message.lower().startswith("ai"):
        return LOSS_BANNER
    return NEUTRAL_BANNER


def render_board_svg(
    game: GameY,
    clickable: bool = True,
    highlight_last: bool = True,
    game_over_message: str = "",
) -> str:
    """Render the board as an SVG string."""
    size = game.board_size
    width, height = board_dimensions(size)
    parts: list[str] = []

    # SVG header
    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" '
        f'id="gamey-board">'
    )

    # Background
    parts.append(f'<rect width="{width}" height="{height}" fill="{BG_COLOR}" rx="4"/>')

    cells = [Coordinates.from_index(i, size) for i in range(game.total_cells)]

    # Adjacency lines (each edge drawn once)
    for coords in cells:
        x1, y1 = _coord(coords, size)
        for n in game.get_neighbors(coords):
            if n.to_index(size) <= coords.to_index(size):
                continue
            x2, y2 = _coord(n, size)
            parts.append(
                f'<line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
                f'stroke="{LINE_COLOR}" stroke-width="1" opacity="0.4"/>'
            )

    # Side labels: A along the bottom, B on the right, C on the left
    apex_x, apex_y = _coord(Coordinates(size - 1, 0, 0), size)
    left_x, left_y = _coord(Coordinates(0, size - 1, 0), size)
    right_x, right_y = _coord(Coordinates(0, 0, size - 1), size)
    labels = [
        ("A", (left_x + right_x) / 2, left_y + MARGIN * 0.7),
        ("B", (apex_x + right_x) / 2 + MARGIN * 0.6, (apex_y + right_y) / 2),
        ("C", (apex_x + left_x) / 2 - MARGIN * 0.6, (apex_y + left_y) / 2),
    ]
    for text, x, y in labels:
        parts.append(
            f'<text x="{round(x, 1)}" y="{round(y, 1)}" text-anchor="middle" '
            f'font-size="16" font-family="monospace" fill="{LINE_COLOR}">{text}</text>'
        )

    # Empty slots and stones
    last: Optional[Coordinates] = game.moves[-1].coords if game.moves else None

    for coords in cells:
        x, y = _coord(coords, size)
        parts.append(
            f'<circle cx="{x}" cy="{y}" r="{SLOT_RADIUS}" '
            f'fill="{SLOT_COLOR}" stroke="{LINE_COLOR}" stroke-width="1"/>'
        )
        player = game.board.get(coords)
        if player is None:
            continue
        fill = BLUE_STONE if player is Player.BLUE else RED_STONE
        parts.append(f'<circle cx="{x}" cy="{y}" r="{STONE_RADIUS}" fill="{fill}"/>')
        # Last move marker
        if highlight_last and coords == last:
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="5" fill="{LAST_MOVE_COLOR}" opacity="0.8"/>'
            )

    # Clickable cell targets (invisible circles)
    if clickable and not game.is_over:
        for coords in cells:
            if not game.board.is_empty(coords):
                continue
            x, y = _coord(coords, size)
            coord_str = format_coordinates(coords)
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="{CLICK_RADIUS}" '
                f'fill="transparent" class="board-click" '
                f'data-coord="{coord_str}" style="cursor:pointer">'
                f'<title>{coord_str}</title></circle>'
            )

    # Game-over banner
    if game_over_message:
        color = _banner_color(game_over_message)
        parts.append(
            f'<rect x="0" y="{height / 2 - 28}" width="{width}" height="56" '
            f'fill="rgba(0, 0, 0, 0.6)"/>'
        )
        parts.append(
            f'<text x="{width / 2}" y="{height / 2 + 9}" text-anchor="middle" '
            f'font-size="28" font-weight="bold" font-family="sans-serif" '
            f'fill="{color}">{game_over_message}</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts)


# JavaScript that handles clicks on the SVG and writes the coordinate to
# a hidden Gradio Textbox, then triggers the submit button.
BOARD_CLICK_JS = """
() => {
    // Debounce to avoid double-fire
    if (window._gameyClickBound) return;
    window._gameyClickBound = true;

    document.addEventListener('click', function(e) {
        const circle = e.target.closest('.board-click');
        if (!circle) return;
        const coord = circle.getAttribute('data-coord');
        if (!coord) return;

        const container = document.querySelector('#coord-input textarea, #coord-input input');
        if (container) {
            // Native setter so Gradio picks up the change
            const nativeSetter = Object.getOwnPropertyDescriptor(
                window.HTMLInputElement.prototype, 'value'
            )?.set || Object.getOwnPropertyDescriptor(
                window.HTMLTextAreaElement.prototype, 'value'
            )?.set;
            if (nativeSetter) {
                nativeSetter.call(container, coord);
            } else {
                container.value = coord;
            }
            container.dispatchEvent(new Event('input', { bubbles: true }));
            const btn = document.querySelector('#coord-submit');
            if (btn) btn.click();
        }
    });
}
"""
