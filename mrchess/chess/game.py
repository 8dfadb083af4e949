"""
The Game class is the entrypoint into the domain layer.
It owns the live Board, runs every request through the rules engine and tells the outside world what happened.

State machine of a single move:

    AWAITING_MOVE -> EXECUTING -> CHECK_DECLARED | CHECKMATE_DECLARED | STALEMATE_DECLARED | CONTINUE

CHECKMATE_DECLARED and STALEMATE_DECLARED are terminal. The other two wait for the next move again.
"""

import logging
import threading
from enum import Enum, auto
from typing import Optional, Self

from mrchess.chess import rules
from mrchess.chess.board import Board
from mrchess.chess.fen import board_from_fen, board_to_fen
from mrchess.chess.moves import Move, MoveList
from mrchess.chess.pieces import FEN_TO_PIECE, Color, PieceType, opposite
from mrchess.chess.rules import Outcome
from mrchess.chess.square import Square
from mrchess.core.events import Signal
from mrchess.core.exceptions import GameStateError
from mrchess.core.models import GameModel
from mrchess.core.shared_types import Status

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    AWAITING_MOVE = auto()
    EXECUTING = auto()
    CONTINUE = auto()
    CHECK_DECLARED = auto()
    CHECKMATE_DECLARED = auto()
    STALEMATE_DECLARED = auto()


OUTCOME_TO_PHASE: dict[Outcome, GamePhase] = {
    Outcome.CONTINUE: GamePhase.CONTINUE,
    Outcome.CHECK_DECLARED: GamePhase.CHECK_DECLARED,
    Outcome.CHECKMATE_DECLARED: GamePhase.CHECKMATE_DECLARED,
    Outcome.STALEMATE_DECLARED: GamePhase.STALEMATE_DECLARED,
}


class Game:
    """
    Rules engine bound to the live board.
    ---

    Every read and write of the board happens while holding `self._lock`. The exposure check temporarily changes the
    live board, so nobody may look at it halfway. Illegal requests are refused by returning False (or an empty list),
    never by raising.
    """

    def __init__(self, board: Optional[Board] = None) -> None:
        self._board = board if board is not None else Board.standard()
        self._lock = threading.RLock()
        self.phase = GamePhase.AWAITING_MOVE
        self.starting_fen = board_to_fen(self._board)
        self._declare_if_finished()

        # -- notifications ---
        self.move_made: Signal[[Move]] = Signal("move_made")
        self.check_declared: Signal[[Color]] = Signal("check_declared")
        self.checkmate_declared: Signal[[Color]] = Signal("checkmate_declared")
        self.stalemate_declared: Signal[[]] = Signal("stalemate_declared")

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """Start from an arbitrary position. Raises InvalidFENError for garbage input."""
        return cls(board_from_fen(fen))

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """
        Rebuild a game from what the Service layer stores: the starting position plus the moves played since.

        Replaying the moves (instead of loading the current FEN) restores the history and the has-moved flags as well.
        """
        game = cls.from_fen(model.starting_fen)
        for uci in model.moves_uci:
            from_square = Square.from_algebraic(uci[:2])
            to_square = Square.from_algebraic(uci[2:4])
            promotion = FEN_TO_PIECE[uci[4]] if len(uci) == 5 else PieceType.QUEEN
            if not game.try_make_move(from_square, to_square, promotion):
                raise GameStateError(f"Stored move {uci!r} is not legal in this game.")
        return game

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        with self._lock:
            history = self._board.history
            winner = self._board.winner
            return GameModel(
                starting_fen=self.starting_fen,
                current_fen=board_to_fen(self._board),
                moves_uci=[move.to_uci() for move in history],
                moves_san=[move.to_algebraic() for move in history],
                status=self.status.value,
                winner=winner.name.lower() if winner is not None else None,
            )

    # --- LIFECYCLE ---
    def new_game(self) -> None:
        """Reset the live board to the standard starting position"""
        with self._lock:
            self._board.reset()
            self.phase = GamePhase.AWAITING_MOVE
            self.starting_fen = board_to_fen(self._board)
        logger.info("New game started")

    def _declare_if_finished(self) -> None:
        """A position set up without any legal move for the side to move is over before it started"""
        board = self._board
        if board.game_over or rules.has_legal_move(board, board.side_to_move):
            return

        board.game_over = True
        if rules.is_king_in_check(board, board.side_to_move):
            board.winner = opposite(board.side_to_move)
            self.phase = GamePhase.CHECKMATE_DECLARED
            logger.info("Position is checkmate: %s wins", board.winner.name.lower())
        else:
            self.phase = GamePhase.STALEMATE_DECLARED
            logger.info("Position is stalemate")

    # --- QUERIES ---
    @property
    def side_to_move(self) -> Color:
        return self._board.side_to_move

    @property
    def game_over(self) -> bool:
        return self._board.game_over

    @property
    def winner(self) -> Optional[Color]:
        return self._board.winner

    @property
    def status(self) -> Status:
        """Status as reported across the boundary"""
        with self._lock:
            if self._board.game_over:
                return Status.CHECKMATE if self._board.winner is not None else Status.STALEMATE
            if rules.is_king_in_check(self._board, self._board.side_to_move):
                return Status.CHECK
            return Status.IN_PROGRESS

    @property
    def history(self) -> list[Move]:
        """Copy of the executed moves. The records themselves must not be changed anymore."""
        with self._lock:
            return list(self._board.history)

    def snapshot(self) -> Board:
        """Scratch copy of the live board. Use this for anything that wants to try moves out (the search)."""
        with self._lock:
            return self._board.copy()

    def to_fen(self) -> str:
        with self._lock:
            return board_to_fen(self._board)

    def piece_at(self, square: Square) -> Optional[tuple[PieceType, Color]]:
        with self._lock:
            piece = self._board.piece(square)
            return (piece.type, piece.color) if piece is not None else None

    def is_legal_move(self, from_square: Square, to_square: Square) -> bool:
        with self._lock:
            return rules.is_legal_move(self._board, from_square, to_square)

    def legal_moves(self, color: Optional[Color] = None) -> MoveList:
        """All legal moves for a color (defaults to the side to move)"""
        with self._lock:
            return rules.legal_moves(self._board, color or self._board.side_to_move)

    def legal_moves_for_square(self, square: Square) -> MoveList:
        """Move preview for a single piece. Empty for an empty square."""
        with self._lock:
            piece = self._board.piece(square)
            if piece is None:
                return MoveList()
            return rules.legal_moves_for_piece(self._board, piece)

    def is_king_in_check(self, color: Color) -> bool:
        with self._lock:
            return rules.is_king_in_check(self._board, color)

    def is_checkmate(self, color: Color) -> bool:
        with self._lock:
            return rules.is_checkmate(self._board, color)

    def is_stalemate(self, color: Color) -> bool:
        with self._lock:
            return rules.is_stalemate(self._board, color)

    def can_castle(self, color: Color, king_side: bool) -> bool:
        """Castling rights only. NOTE: castling moves are never generated."""
        with self._lock:
            return self._board.castling_rights.can_castle(color, king_side)

    # --- MOVES ---
    def try_make_move(
        self,
        from_square: Square,
        to_square: Square,
        promotion: PieceType = PieceType.QUEEN,
    ) -> bool:
        """Attempt to move the piece on `from_square`. False (and nothing happens) if the move is not legal."""
        with self._lock:
            move = rules.build_move(self._board, from_square, to_square)
        if move is None:
            return False
        move.promotion_piece = promotion
        return self.apply_move(move)

    def apply_move(self, move: Move) -> bool:
        """Execute a move record, ex. the one selected by the machine opponent. Validated against the live board first."""
        with self._lock:
            if self._board.game_over:
                logger.debug("Refused %s: game is over", move.to_uci())
                return False
            if not rules.is_legal_move(self._board, move.from_square, move.to_square):
                logger.debug("Refused illegal move %s", move.to_uci())
                return False

            # the record might come from a scratch board: reset what execution derives
            piece = self._board.piece(move.from_square)
            assert piece is not None
            move.piece_type = piece.type
            move.color = piece.color

            self.phase = GamePhase.EXECUTING
            outcome = rules.execute_move(self._board, move)
            self.phase = OUTCOME_TO_PHASE[outcome]
            in_check = self._board.side_to_move

        self._notify(move, outcome, in_check)
        return True

    def _notify(self, move: Move, outcome: Outcome, in_check: Color) -> None:
        """
        Fan out the notifications. Called after the lock is released, so listeners may query the game.
        `in_check` is the opponent of the mover, as it was right after the move.
        """
        if outcome in (Outcome.CHECK_DECLARED, Outcome.CHECKMATE_DECLARED):
            logger.info("%s is in check", in_check.name.lower())
            self.check_declared.emit(in_check)
        if outcome == Outcome.CHECKMATE_DECLARED:
            logger.info("Checkmate! %s loses", in_check.name.lower())
            self.checkmate_declared.emit(in_check)
        if outcome == Outcome.STALEMATE_DECLARED:
            logger.info("Stalemate! Game is a draw")
            self.stalemate_declared.emit()
        self.move_made.emit(move)
