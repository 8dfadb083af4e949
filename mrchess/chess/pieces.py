"""Defines the types of chess pieces and their raw movement patterns"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Self

from mrchess.chess.square import Square


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()


def opposite(color: Color) -> Color:
    return Color.BLACK if color == Color.WHITE else Color.WHITE


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


# NOTE: The King's weight only exists to make the search care about it. It is never traded.
PIECE_POINTS: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 100,
}


def forward_direction(color: Color) -> int:
    """White moves UP the board, black moves DOWN"""
    return 1 if color == Color.WHITE else -1


# --- STRATEGY PATTERN: MOVEMENT PATTERNS (by absolute file / rank delta) ---
# Pawns are not symmetric, so they are handled by the Piece itself.
PatternFn = Callable[[int, int], bool]
MOVEMENT_PATTERNS: dict[PieceType, PatternFn] = {
    PieceType.KNIGHT: lambda abs_df, abs_dr: (abs_df, abs_dr) in {(1, 2), (2, 1)},
    PieceType.BISHOP: lambda abs_df, abs_dr: abs_df == abs_dr,
    PieceType.ROOK: lambda abs_df, abs_dr: abs_df == 0 or abs_dr == 0,
    PieceType.QUEEN: lambda abs_df, abs_dr: (
        abs_df == 0 or abs_dr == 0 or abs_df == abs_dr
    ),
    PieceType.KING: lambda abs_df, abs_dr: abs_df <= 1 and abs_dr <= 1,
}


@dataclass
class Piece:
    type: PieceType
    color: Color
    position: Square
    has_moved: bool = False

    @classmethod
    def from_fen(cls, character: str, position: Square) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color, position)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    def value_points(self) -> int:
        return PIECE_POINTS[self.type]

    def matches_movement_pattern(self, target: Square) -> bool:
        """
        Could the piece reach the target square, purely by its geometry?
        ---

        Ignores occupancy and whatever stands in between. That is checked by the rules engine.
        """
        df = target.file - self.position.file
        dr = target.rank - self.position.rank
        if self.type == PieceType.PAWN:
            return self._matches_pawn_pattern(df, dr)
        pattern: PatternFn = MOVEMENT_PATTERNS[self.type]
        return pattern(abs(df), abs(dr))

    def matches_attack_pattern(self, target: Square) -> bool:
        """Same as the movement pattern, except that a pawn only attacks its two forward diagonals."""
        if self.type != PieceType.PAWN:
            return self.matches_movement_pattern(target)
        df = target.file - self.position.file
        dr = target.rank - self.position.rank
        return abs(df) == 1 and dr == forward_direction(self.color)

    def _matches_pawn_pattern(self, df: int, dr: int) -> bool:
        """
        A pawn:
        - moves by a single square forward.
        - It can move by two in their first move
        - takes diagonally (whether there is something to take is not checked here)
        """
        direction = forward_direction(self.color)
        if df == 0:
            if dr == direction:
                return True
            return (not self.has_moved) and dr == 2 * direction
        return abs(df) == 1 and dr == direction

    def promote_to(self, new_type: PieceType) -> None:
        self.type = new_type
