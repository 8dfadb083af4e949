"""
Castling rights bookkeeping.

NOTE: Castling itself is never generated as a move. Only the rights are tracked (and revoked), so a host can query them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Self

from mrchess.chess.pieces import Color, Piece, PieceType
from mrchess.chess.square import BOARD_DIMENSIONS, Square

QUEEN_SIDE_ROOK_FILE = 0
KING_SIDE_ROOK_FILE = BOARD_DIMENSIONS[0] - 1


class CastlingDirection(Enum):
    """The four castling directions. Values represent their encodings in FEN string."""

    WHITE_KING_SIDE = "K"
    WHITE_QUEEN_SIDE = "Q"
    BLACK_KING_SIDE = "k"
    BLACK_QUEEN_SIDE = "q"


CASTLING_ORDER: tuple[CastlingDirection, ...] = (
    CastlingDirection.WHITE_KING_SIDE,
    CastlingDirection.WHITE_QUEEN_SIDE,
    CastlingDirection.BLACK_KING_SIDE,
    CastlingDirection.BLACK_QUEEN_SIDE,
)


def castling_direction(color: Color, king_side: bool) -> CastlingDirection:
    if color == Color.WHITE:
        return (
            CastlingDirection.WHITE_KING_SIDE
            if king_side
            else CastlingDirection.WHITE_QUEEN_SIDE
        )
    return (
        CastlingDirection.BLACK_KING_SIDE
        if king_side
        else CastlingDirection.BLACK_QUEEN_SIDE
    )


def _all_rights() -> dict[CastlingDirection, bool]:
    return {direction: True for direction in CastlingDirection}


@dataclass
class CastlingRights:
    """
    Four independent rights (white/black x king-side/queen-side) plus a latch per color for "the king has moved".

    Rights are one-way latches: once revoked they are never restored.
    """

    rights: dict[CastlingDirection, bool] = field(default_factory=_all_rights)
    king_moved: dict[Color, bool] = field(
        default_factory=lambda: {Color.WHITE: False, Color.BLACK: False}
    )

    @classmethod
    def from_fen(cls, castle_fen: str) -> Self:
        """parse the part of the FEN string that encodes castling rights"""
        rights = {
            direction: (direction.value in castle_fen)
            for direction in CastlingDirection
        }
        return cls(rights=rights)

    def to_fen(self) -> str:
        """create the part of the FEN string that encodes castling rights"""
        castling_chars = "".join(
            [
                direction.value
                for direction in CASTLING_ORDER
                if self.rights[direction]
            ]
        )
        return castling_chars or "-"

    def can_castle(self, color: Color, king_side: bool) -> bool:
        """Rights only: whether the squares in between are free is not part of this query."""
        if self.king_moved[color]:
            return False
        return self.rights[castling_direction(color, king_side)]

    def revoke(self, direction: CastlingDirection) -> None:
        self.rights[direction] = False

    def revoke_all(self, color: Color) -> None:
        self.revoke(castling_direction(color, king_side=True))
        self.revoke(castling_direction(color, king_side=False))

    def update_for_move(self, piece: Piece, from_square: Square) -> None:
        """
        Revoke rights after the given piece moved away from `from_square`
        ----

        1. King moves --> revoke both rights of that color (and latch the king as moved)
        2. Rook moves from the a-file --> revoke queen-side, from the h-file --> revoke king-side
        """
        if piece.type == PieceType.KING:
            self.king_moved[piece.color] = True
            self.revoke_all(piece.color)
        elif piece.type == PieceType.ROOK:
            if from_square.file == QUEEN_SIDE_ROOK_FILE:
                self.revoke(castling_direction(piece.color, king_side=False))
            if from_square.file == KING_SIDE_ROOK_FILE:
                self.revoke(castling_direction(piece.color, king_side=True))

    def copy(self) -> "CastlingRights":
        return CastlingRights(dict(self.rights), dict(self.king_moved))
