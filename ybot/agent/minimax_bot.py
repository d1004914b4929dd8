"""Minimax bot: tactical scan, then iterative-deepening alpha-beta search.

Search pipeline for one ``choose_move`` call:
  1. Build a MinimaxState snapshot from the game view.
  2. Greedy scan: play an instant win, or block the opponent's instant win.
  3. Otherwise iterate depth 1, 2, ... with alpha-beta minimax until the time
     budget runs out or a forced win is confirmed. The previous depth's best
     move is searched first at the next depth.

The time budget is soft: it is checked between depths only, so a single depth
always runs to completion once started.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Optional

from ybot.game.types import Coordinates

from .base import GameView, YBot
from .minimax_state import MinimaxState

logger = logging.getLogger(__name__)

WIN_SCORE = 100_000
LOSE_SCORE = -WIN_SCORE

# Integer infinity (all evaluations are bounded by WIN_SCORE)
INFINITY = 10_000_000

MAX_DEPTH = 100

# Scores this close to WIN_SCORE end the deepening loop
WIN_MARGIN = 100

DEFAULT_MAX_TIME_MS = int(os.getenv("YBOT_MINIMAX_TIME_MS", "1000"))

# Evaluation weights
EDGE_WEIGHT = 5
CONNECTION_WEIGHT = 25
WELL_CONNECTED_BONUS = 40
CENTER_BASE = 50
CENTER_WEIGHT = 5


# ---------------------------------------------------------------------------
# Tactical scan
# ---------------------------------------------------------------------------

def greedy_search(state: MinimaxState) -> Optional[Coordinates]:
    """Return an instant win, else a forced block, else None.

    A win anywhere on the board beats a block found earlier in scan order.
    Every probe is undone, so the state is unchanged on return.
    """
    block: Optional[int] = None

    for idx in state.available_cells():
        state.make_move(idx, state.bot_id)
        wins = state.check_win(state.bot_id)
        state.undo_move(idx)
        if wins:
            logger.info("Instant win found at cell %d", idx)
            return state.coords_cache[idx]

        if block is None:
            state.make_move(idx, state.human_id)
            loses = state.check_win(state.human_id)
            state.undo_move(idx)
            if loses:
                block = idx

    if block is not None:
        logger.info("Blocking immediate threat at cell %d", block)
        return state.coords_cache[block]
    return None


# ---------------------------------------------------------------------------
# Evaluation (positive = bot advantage)
# ---------------------------------------------------------------------------

def evaluate_state(state: MinimaxState) -> int:
    """Static evaluation from the bot's point of view.

    Won positions return WIN_SCORE / LOSE_SCORE without running the heuristic.
    """
    if state.check_win(state.bot_id):
        return WIN_SCORE
    if state.check_win(state.human_id):
        return LOSE_SCORE

    bot_score = evaluate_position_strength(state, state.bot_id)
    human_score = evaluate_position_strength(state, state.human_id)
    return bot_score - human_score


def evaluate_position_strength(state: MinimaxState, player: int) -> int:
    """Heuristic strength of `player`'s stones.

    Combines side coverage, same-owner adjacency and a center-control term
    that fades as the board fills up.
    """
    board = state.board
    score = 0
    edges_touched = 0
    total_connections = 0
    center_control = 0
    pieces_on_board = 0

    for idx in state.occupied_cells():
        pieces_on_board += 1
        if board[idx] != player:
            continue

        edges_touched |= state.edges_cache[idx]

        neighbors = 0
        for n in state.neighbors_cache[idx]:
            if board[n] == player:
                neighbors += 1
        total_connections += neighbors
        if neighbors >= 2:
            score += WELL_CONNECTED_BONUS

        x, y, z = state.coords_cache[idx]
        center_control += CENTER_BASE - (abs(x - y) + abs(y - z) + abs(z - x))

    edges_count = bin(edges_touched).count("1")
    game_progress = pieces_on_board / state.total_cells
    center_weight = (1.0 - game_progress) * CENTER_WEIGHT

    score += edges_count * EDGE_WEIGHT
    score += total_connections * CONNECTION_WEIGHT
    score += int(center_control * center_weight)
    return score


# ---------------------------------------------------------------------------
# Minimax with alpha-beta
# ---------------------------------------------------------------------------

def minimax(
    state: MinimaxState,
    depth: int,
    alpha: int,
    beta: int,
    maximizing_player: bool,
) -> int:
    """Depth-limited minimax with alpha-beta pruning.

    Maximizing plies place the bot's stone, minimizing plies the opponent's.
    A full board is scored like a depth-0 leaf.
    """
    if depth == 0 or not state.available_mask.any():
        return evaluate_state(state)

    if maximizing_player:
        best_score = -INFINITY
        for idx in state.available_cells():
            state.make_move(idx, state.bot_id)
            score = minimax(state, depth - 1, alpha, beta, False)
            state.undo_move(idx)

            best_score = max(best_score, score)
            alpha = max(alpha, score)
            if beta <= alpha:
                break
        return best_score

    worst_score = INFINITY
    for idx in state.available_cells():
        state.make_move(idx, state.human_id)
        score = minimax(state, depth - 1, alpha, beta, True)
        state.undo_move(idx)

        worst_score = min(worst_score, score)
        beta = min(beta, score)
        if beta <= alpha:
            break
    return worst_score


# ---------------------------------------------------------------------------
# Root search (one depth iteration)
# ---------------------------------------------------------------------------

def search_best_move(
    state: MinimaxState,
    depth: int,
    pv_move: Optional[int] = None,
) -> tuple[int, int]:
    """Search every root move at `depth`. Returns (best_move, best_score).

    The PV move from the previous iteration is tried first; on equal scores
    the earliest move in scan order is kept.
    """
    moves = list(state.available_cells())
    assert moves, "No available moves"

    if pv_move is not None and pv_move in moves:
        pos = moves.index(pv_move)
        moves[0], moves[pos] = moves[pos], moves[0]

    # TODO: order the remaining moves (e.g. by connectivity to own groups)

    best_score = -INFINITY
    best_move = moves[0]

    for idx in moves:
        state.make_move(idx, state.bot_id)
        score = minimax(state, depth - 1, -INFINITY, INFINITY, False)
        state.undo_move(idx)

        if score > best_score:
            best_score = score
            best_move = idx

    return best_move, best_score


def iterative_deepening_search(state: MinimaxState, max_time_ms: int) -> int:
    """Deepen from depth 1 until time runs out or a win is confirmed.

    Returns the best move of the last completed depth.
    """
    start = time.monotonic()
    time_limit = max_time_ms / 1000.0

    fallback = next(state.available_cells(), None)
    assert fallback is not None, "No available moves"
    best_move = fallback
    pv_move: Optional[int] = None

    # Deeper than the number of empty cells searches nothing new
    max_depth = min(MAX_DEPTH, sum(1 for _ in state.available_cells()))

    for depth in range(1, max_depth + 1):
        # Depth 1 always runs so a searched move is returned even at a 0 budget
        if depth > 1 and time.monotonic() - start >= time_limit:
            logger.debug("Time limit reached at depth %d", depth - 1)
            break

        logger.debug("Searching at depth %d...", depth)
        move, score = search_best_move(state, depth, pv_move)
        best_move = move
        pv_move = move
        logger.debug("Depth %d: best move = %d, score = %d", depth, move, score)

        if score >= WIN_SCORE - WIN_MARGIN:
            logger.debug("Winning move found at depth %d", depth)
            break

        if time.monotonic() - start >= time_limit:
            logger.debug("Time limit reached after depth %d", depth)
            break

    return best_move


# ---------------------------------------------------------------------------
# MinimaxBot
# ---------------------------------------------------------------------------

class MinimaxBot(YBot):
    """Alpha-beta bot with a per-move wall-clock budget in milliseconds."""

    def __init__(self, max_time_ms: Optional[int] = None) -> None:
        if max_time_ms is None:
            max_time_ms = DEFAULT_MAX_TIME_MS
        assert max_time_ms >= 0, "Time budget must be non-negative"
        self.max_time_ms = max_time_ms

    @property
    def name(self) -> str:
        return "minimax_bot"

    def choose_move(self, game: GameView) -> Optional[Coordinates]:
        bot_player = game.next_player
        if bot_player is None:
            return None

        state = MinimaxState(game, bot_player)

        coords = greedy_search(state)
        if coords is not None:
            return coords

        best_move = iterative_deepening_search(state, self.max_time_ms)
        return state.coords_cache[best_move]
