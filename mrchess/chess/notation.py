"""
Standard algebraic notation (SAN) for moves that have already been executed.

examples: "e4", "Nf3", "exd5", "Qxf7#", "e8=Q+", "O-O"

NOTE: No disambiguation (e.g. "Nbd2") is done. Two knights that can reach the same square render the same.
"""

from typing import TYPE_CHECKING

from mrchess.chess.pieces import PieceType
from mrchess.chess.square import Square

if TYPE_CHECKING:
    from mrchess.chess.moves import Move

PIECE_LETTERS: dict[PieceType, str] = {
    PieceType.KING: "K",
    PieceType.QUEEN: "Q",
    PieceType.ROOK: "R",
    PieceType.BISHOP: "B",
    PieceType.KNIGHT: "N",
    PieceType.PAWN: "",
}

KING_SIDE_CASTLE = "O-O"
QUEEN_SIDE_CASTLE = "O-O-O"
CAPTURE_MARKER = "x"
CHECK_MARKER = "+"
CHECKMATE_MARKER = "#"


def castling_notation(from_square: Square, to_square: Square) -> str:
    return KING_SIDE_CASTLE if to_square.file > from_square.file else QUEEN_SIDE_CASTLE


def algebraic_notation(move: "Move") -> str:
    """
    Assemble the notation from the flags set on the move
    ----

    piece letter (none for pawns) + capture marker (pawns prefix their origin file) + destination square
    + promotion suffix + check / checkmate suffix
    """
    if move.is_castling:
        return castling_notation(move.from_square, move.to_square)

    notation: list[str] = [PIECE_LETTERS[move.piece_type]]

    if move.is_capture:
        if move.piece_type == PieceType.PAWN:
            notation.append(move.from_square.file_name())
        notation.append(CAPTURE_MARKER)

    notation.append(move.to_square.to_algebraic())

    if move.is_promotion:
        notation.append(f"={PIECE_LETTERS[move.promotion_piece]}")

    if move.causes_checkmate:
        notation.append(CHECKMATE_MARKER)
    elif move.causes_check:
        notation.append(CHECK_MARKER)

    return "".join(notation)
