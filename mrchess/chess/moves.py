"""
Move records and collections of them.

A Move is created transiently by move generation. The rules engine fills in the remaining flags while executing it,
after which it is appended to the board history and treated as immutable.
"""

from dataclasses import dataclass
from typing import Optional, Self

from mrchess.chess.notation import algebraic_notation
from mrchess.chess.pieces import FEN_TO_PIECE, PIECE_TO_FEN, Color, Piece, PieceType
from mrchess.chess.square import Square


@dataclass
class Move:
    """basic definition of a move + the metadata that gets derived when executing it"""

    from_square: Square
    to_square: Square
    piece_type: PieceType
    color: Color

    # special moves
    is_capture: bool = False
    is_castling: bool = False
    is_en_passant: bool = False
    is_promotion: bool = False
    promotion_piece: PieceType = PieceType.QUEEN

    # game state (set by execution)
    causes_check: bool = False
    causes_checkmate: bool = False
    captured_piece: Optional[Piece] = None

    @classmethod
    def from_uci(cls, uci: str, piece_type: PieceType, color: Color) -> Self:
        """
        Universal Chess Interface:
        ---
        One of the standard chess notations for moves

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e7e8q" : (pawn) moves from e7 to e8 and promotes to a queen (the q)

        NOTE: The notation does not tell which piece moves, so the caller (who has the board) supplies it.
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        move = cls(from_sq, to_sq, piece_type, color)
        if len(uci) == 5:
            move.promotion_piece = FEN_TO_PIECE[uci[4]]
        return move

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        piece_char = PIECE_TO_FEN[self.promotion_piece] if self.is_promotion else ""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}{piece_char}"

    def to_algebraic(self) -> str:
        """Standard algebraic notation. Only meaningful once the move has been executed (flags are set by then)."""
        return algebraic_notation(self)

    def same_squares(self, from_square: Square, to_square: Square) -> bool:
        return self.from_square == from_square and self.to_square == to_square


class MoveList(list[Move]):
    """Moves in generation order (file-major, then rank) with some convenience filters."""

    def find_move(self, from_square: Square, to_square: Square) -> Optional[Move]:
        return next(
            (move for move in self if move.same_squares(from_square, to_square)),
            None,
        )

    def for_piece(self, piece_type: PieceType) -> "MoveList":
        return MoveList(move for move in self if move.piece_type == piece_type)

    def captures(self) -> "MoveList":
        return MoveList(move for move in self if move.is_capture)

    def checks(self) -> "MoveList":
        """NOTE: only executed moves know whether they gave check"""
        return MoveList(move for move in self if move.causes_check)

    def to_uci(self) -> list[str]:
        return [move.to_uci() for move in self]
