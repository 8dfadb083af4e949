"""
Rules engine: legality of moves, check / checkmate / stalemate detection and move execution.

All functions work on whatever Board they are handed. The live game board (see `Game`) and the scratch boards of the
search go through exactly the same rules.

Legality is checked in the following order (see `is_legal_move()`):
1. there must be a piece of the moving color on the starting square
2. the target must be on the board and not hold a piece of the same color
3. the geometry must fit the piece's movement pattern
4. sliding pieces need a clear path
5. pawns push onto empty squares and only step diagonally to take something
6. the move must not leave (or put) your own king under attack
"""

import logging
from enum import Enum, auto
from typing import Optional

from mrchess.chess.board import Board
from mrchess.chess.moves import Move, MoveList
from mrchess.chess.pieces import Color, Piece, PieceType, opposite
from mrchess.chess.square import Square, all_squares, squares_between

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """What happened to the game after a move got executed"""

    CONTINUE = auto()
    CHECK_DECLARED = auto()
    CHECKMATE_DECLARED = auto()
    STALEMATE_DECLARED = auto()


# --- GEOMETRY HELPERS ---
def is_path_clear(board: Board, from_square: Square, to_square: Square) -> bool:
    """Every square strictly in between must be empty"""
    return all(board.is_empty(square) for square in squares_between(from_square, to_square))


def _needs_clear_path(piece: Piece) -> bool:
    """Knights jump"""
    return piece.type != PieceType.KNIGHT


def _pawn_occupancy_ok(board: Board, piece: Piece, to_square: Square) -> bool:
    """A pawn pushes onto an empty square, and only moves diagonally when it takes an opponent's piece"""
    target = board.piece(to_square)
    if to_square.file == piece.position.file:
        return target is None
    return target is not None and target.color != piece.color


# --- ATTACKS ---
def can_piece_attack_square(board: Board, piece: Piece, square: Square) -> bool:
    if not piece.matches_attack_pattern(square):
        return False
    if _needs_clear_path(piece) and not is_path_clear(board, piece.position, square):
        return False
    return True


def is_square_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """Is any piece of `by_color` eyeing the given square?"""
    return any(
        can_piece_attack_square(board, piece, square)
        for piece in board.pieces(by_color)
        if piece.position != square
    )


def is_king_in_check(board: Board, color: Color) -> bool:
    """NOTE: a board without a king of this color is never in check"""
    king_square = board.locate_king(color)
    if king_square is None:
        return False
    return is_square_attacked(board, king_square, opposite(color))


# --- LEGALITY ---
def would_expose_king(board: Board, from_square: Square, to_square: Square) -> bool:
    """
    Exposure check
    ---
    Make the move on the board itself, look whether the mover's king is attacked, and put everything back.
    """
    moving_piece = board.piece(from_square)
    assert moving_piece is not None
    with board.trial_move(from_square, to_square):
        return is_king_in_check(board, moving_piece.color)


def is_legal_for(board: Board, from_square: Square, to_square: Square, color: Color) -> bool:
    """Legality of a move, as if it were `color` to move"""
    piece = board.piece(from_square)
    if piece is None or piece.color != color:
        return False

    if not to_square.is_within_bounds():
        return False

    target = board.piece(to_square)
    if target is not None and target.color == piece.color:
        return False

    if not piece.matches_movement_pattern(to_square):
        return False

    if _needs_clear_path(piece) and not is_path_clear(board, from_square, to_square):
        return False

    if piece.type == PieceType.PAWN and not _pawn_occupancy_ok(board, piece, to_square):
        return False

    return not would_expose_king(board, from_square, to_square)


def is_legal_move(board: Board, from_square: Square, to_square: Square) -> bool:
    """Legality of a move for the side that is to move"""
    return is_legal_for(board, from_square, to_square, board.side_to_move)


# --- MOVE GENERATION ---
def legal_moves_for_piece(board: Board, piece: Piece) -> MoveList:
    """All target squares in scan order that this piece may legally go to. Captures are flagged already."""
    return MoveList(
        Move(
            piece.position,
            target,
            piece.type,
            piece.color,
            is_capture=not board.is_empty(target),
        )
        for target in all_squares()
        if is_legal_for(board, piece.position, target, piece.color)
    )


def legal_moves(board: Board, color: Color) -> MoveList:
    """Every legal move of the given color. Order: pieces file-major then rank, and per piece the targets in that same order."""
    moves = MoveList()
    for piece in board.pieces(color):
        moves.extend(legal_moves_for_piece(board, piece))
    return moves


def has_legal_move(board: Board, color: Color) -> bool:
    """Same as `bool(legal_moves(...))`, but stops at the first move found"""
    return any(
        is_legal_for(board, piece.position, target, color)
        for piece in board.pieces(color)
        for target in all_squares()
    )


def is_checkmate(board: Board, color: Color) -> bool:
    return is_king_in_check(board, color) and not has_legal_move(board, color)


def is_stalemate(board: Board, color: Color) -> bool:
    return not is_king_in_check(board, color) and not has_legal_move(board, color)


def is_playable_setup(board: Board) -> bool:
    """
    Exactly one king per color, and the side that just moved is not left in check.
    Otherwise the side to move could take a king.
    """
    for color in Color:
        kings = [piece for piece in board.pieces(color) if piece.type == PieceType.KING]
        if len(kings) != 1:
            return False
    return not is_king_in_check(board, opposite(board.side_to_move))


def build_move(board: Board, from_square: Square, to_square: Square) -> Optional[Move]:
    """Create the Move record for the piece on `from_square`. None if there is nothing there."""
    piece = board.piece(from_square)
    if piece is None:
        return None
    return Move(from_square, to_square, piece.type, piece.color)


# --- EXECUTION ---
def execute_move(board: Board, move: Move) -> Outcome:
    """
    Execute a move that has already been validated
    -----

    1. capture the occupant of the target square, relocate the mover, revoke castling rights, promote (`Board.apply`)
    2. does the move put the opponent in check?
    3. yes --> is it checkmate? the game is over and the mover won
    4. no --> is it stalemate? the game is over without a winner
    5. append to history, update the move counters and hand the turn to the opponent (also when the game is over)
    """
    mover = board.side_to_move
    opponent = opposite(mover)

    board.apply(move)

    outcome = Outcome.CONTINUE
    move.causes_check = is_king_in_check(board, opponent)
    move.causes_checkmate = move.causes_check and not has_legal_move(board, opponent)
    if move.causes_check:
        if move.causes_checkmate:
            board.game_over = True
            board.winner = mover
            outcome = Outcome.CHECKMATE_DECLARED
        else:
            outcome = Outcome.CHECK_DECLARED
    elif is_stalemate(board, opponent):
        board.game_over = True
        outcome = Outcome.STALEMATE_DECLARED

    board.history.append(move)
    _update_move_counters(board, move)
    board.side_to_move = opponent

    logger.debug(
        "%s played %s (%s)", mover.name.lower(), move.to_algebraic(), outcome.name
    )
    return outcome


def _update_move_counters(board: Board, move: Move) -> None:
    """FEN bookkeeping: half-moves since the last pawn move or capture, and the turn number (goes up after black moved)"""
    if move.piece_type == PieceType.PAWN or move.is_capture:
        board.halfmove_clock = 0
    else:
        board.halfmove_clock += 1

    if move.color == Color.BLACK:
        board.fullmove_number += 1
