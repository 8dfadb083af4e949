"""
The machine opponent: minimax search with alpha-beta pruning, bounded by depth and by wall-clock time.

The search never touches the live board. It takes one snapshot from the Game and walks the tree on that scratch
copy with make / undo.
"""

import asyncio
import logging
import sys
import time
from typing import Callable, Optional

from mrchess.ai.evaluate import evaluate
from mrchess.chess import rules
from mrchess.chess.board import Board
from mrchess.chess.game import Game
from mrchess.chess.moves import Move
from mrchess.chess.pieces import Color, opposite
from mrchess.core import shared_types
from mrchess.core.config import AISettings
from mrchess.core.events import Signal

logger = logging.getLogger(__name__)

# Mate sentinels: the extremes of a float, not scaled by the distance to the mate.
MIN_SCORE = -sys.float_info.max
MAX_SCORE = sys.float_info.max
STALEMATE_SCORE = 0.0

Clock = Callable[[], float]


def to_domain_color(color: shared_types.Color) -> Color:
    return Color[color.name]


class ChessAI:
    """
    Picks moves for the machine side of a Game.
    ---

    Collaborators are handed in explicitly: the game to play in, the settings (difficulty, budget, color)
    and optionally the clock used for the time budget (tests replace it).
    """

    def __init__(
        self,
        game: Game,
        settings: Optional[AISettings] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.game = game
        self.settings = settings if settings is not None else AISettings()
        self._clock = clock
        self._search_start = 0.0

        self.is_thinking = False
        self.nodes_searched = 0

        # -- notifications ---
        self.thinking_changed: Signal[[bool]] = Signal("thinking_changed")
        self.move_selected: Signal[[Move]] = Signal("move_selected")

    @property
    def machine_color(self) -> Color:
        return to_domain_color(self.settings.machine_color)

    @property
    def search_depth(self) -> int:
        return self.settings.search_depth

    def _elapsed(self) -> float:
        return self._clock() - self._search_start

    def _time_is_up(self) -> bool:
        return self._elapsed() >= self.settings.time_limit

    # --- SEARCH ---
    def calculate_best_move(self) -> Optional[Move]:
        """
        Root of the search
        ----

        Every legal move of the machine is tried in scan order and scored with `minimax()`.
        Only a strictly better score replaces the current best, so the first of equally good moves wins.

        NOTE: When the time budget runs out the loop stops and the best move so far is returned. At least one move is
        always scored, so there is a move whenever the machine has a legal one. None means the machine cannot move.
        """
        board = self.game.snapshot()
        moves = rules.legal_moves(board, self.machine_color)
        if not moves:
            return None

        depth = self.search_depth
        self.nodes_searched = 0
        self._search_start = self._clock()
        logger.debug(
            "Searching %d root moves at depth %d (budget %.2fs)",
            len(moves),
            depth,
            self.settings.time_limit,
        )

        best_move: Optional[Move] = None
        best_score = MIN_SCORE
        for move in moves:
            if best_move is not None and self._time_is_up():
                logger.info(
                    "Time limit of %.2fs reached, returning best move found so far",
                    self.settings.time_limit,
                )
                break

            board.make_move(move)
            try:
                score = self.minimax(board, depth - 1, MIN_SCORE, MAX_SCORE, False)
            finally:
                board.undo_move()

            if best_move is None or score > best_score:
                best_move, best_score = move, score

        logger.debug(
            "Search done: %d nodes in %.3fs, best %s (%.2f)",
            self.nodes_searched,
            self._elapsed(),
            best_move.to_uci() if best_move else None,
            best_score,
        )
        return best_move

    def minimax(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
    ) -> float:
        """
        Score of the position for the machine, assuming best play of both sides for `depth` more plies.

        The maximizing side is the machine, the minimizing side its opponent. Branches that can no longer influence
        the result (beta <= alpha) are cut off.
        """
        self.nodes_searched += 1

        if self._time_is_up():
            return evaluate(board, self.machine_color)
        if depth == 0:
            return evaluate(board, self.machine_color)

        color = self.machine_color if maximizing else opposite(self.machine_color)
        moves = rules.legal_moves(board, color)
        if not moves:
            if rules.is_king_in_check(board, color):
                return MIN_SCORE if maximizing else MAX_SCORE
            return STALEMATE_SCORE

        if maximizing:
            max_eval = MIN_SCORE
            for move in moves:
                board.make_move(move)
                try:
                    score = self.minimax(board, depth - 1, alpha, beta, False)
                finally:
                    board.undo_move()
                max_eval = max(max_eval, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
            return max_eval

        min_eval = MAX_SCORE
        for move in moves:
            board.make_move(move)
            try:
                score = self.minimax(board, depth - 1, alpha, beta, True)
            finally:
                board.undo_move()
            min_eval = min(min_eval, score)
            beta = min(beta, score)
            if beta <= alpha:
                break
        return min_eval

    # --- ASYNC ENTRYPOINT ---
    async def think_and_move(self) -> Optional[Move]:
        """
        Think (artificial delay), search and announce the selected move through `move_selected`.

        A request while the machine is already thinking is ignored. Executing the move is up to the caller.
        """
        if self.is_thinking:
            logger.debug("Already thinking, request ignored")
            return None

        self.is_thinking = True
        self.thinking_changed.emit(True)
        if self.settings.show_thinking:
            logger.info("AI is thinking...")

        try:
            await asyncio.sleep(self.settings.thinking_delay)
            best_move = self.calculate_best_move()
        finally:
            self.is_thinking = False
            self.thinking_changed.emit(False)

        if best_move is None:
            logger.warning("AI could not find a valid move")
            return None

        if self.settings.show_thinking:
            logger.info("AI selected move: %s", best_move.to_uci())
        self.move_selected.emit(best_move)
        return best_move
