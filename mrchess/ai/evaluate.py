"""
Static evaluation of a position, seen from the side the machine plays.

Positive scores favor the machine, negative scores its opponent.
"""

from mrchess.chess import rules
from mrchess.chess.board import Board
from mrchess.chess.pieces import Color, Piece, PieceType, forward_direction, opposite
from mrchess.chess.square import Square

# Piece-square tables, indexed [row][file]. Row 0 is the back rank of the piece's own color.
PieceSquareTable = tuple[tuple[int, ...], ...]

PAWN_TABLE: PieceSquareTable = (
    (0, 0, 0, 0, 0, 0, 0, 0),
    (50, 50, 50, 50, 50, 50, 50, 50),
    (10, 10, 20, 30, 30, 20, 10, 10),
    (5, 5, 10, 25, 25, 10, 5, 5),
    (0, 0, 0, 20, 20, 0, 0, 0),
    (5, -5, -10, 0, 0, -10, -5, 5),
    (5, 10, 10, -20, -20, 10, 10, 5),
    (0, 0, 0, 0, 0, 0, 0, 0),
)

KNIGHT_TABLE: PieceSquareTable = (
    (-50, -40, -30, -30, -30, -30, -40, -50),
    (-40, -20, 0, 0, 0, 0, -20, -40),
    (-30, 0, 10, 15, 15, 10, 0, -30),
    (-30, 5, 15, 20, 20, 15, 5, -30),
    (-30, 0, 15, 20, 20, 15, 0, -30),
    (-30, 5, 10, 15, 15, 10, 5, -30),
    (-40, -20, 0, 5, 5, 0, -20, -40),
    (-50, -40, -30, -30, -30, -30, -40, -50),
)

# NOTE: only pawns and knights have a table, the other pieces get no positional bonus
PIECE_SQUARE_TABLES: dict[PieceType, PieceSquareTable] = {
    PieceType.PAWN: PAWN_TABLE,
    PieceType.KNIGHT: KNIGHT_TABLE,
}

MATERIAL_SCALE = 100
CENTER_SQUARES = (Square(3, 3), Square(3, 4), Square(4, 3), Square(4, 4))  # d4, d5, e4, e5

KING_SHIELD_BONUS = 10
CENTER_BONUS = 5

KING_SAFETY_WEIGHT = 0.1
CENTER_CONTROL_WEIGHT = 0.05
MOBILITY_WEIGHT = 0.02


def positional_bonus(piece: Piece) -> int:
    table = PIECE_SQUARE_TABLES.get(piece.type)
    if table is None:
        return 0
    row = piece.position.rank if piece.color == Color.WHITE else 7 - piece.position.rank
    return table[row][piece.position.file]


def piece_value(piece: Piece) -> float:
    return piece.value_points() * MATERIAL_SCALE + positional_bonus(piece)


def material_score(board: Board, machine_color: Color) -> float:
    return sum(
        piece_value(piece) if piece.color == machine_color else -piece_value(piece)
        for piece in board.pieces()
    )


def king_safety(board: Board, color: Color) -> float:
    """Bonus for every own pawn standing directly in front of the king (the file of the king and both neighbours)"""
    king_square = board.locate_king(color)
    if king_square is None:
        return 0

    safety = 0
    direction = forward_direction(color)
    for df in (-1, 0, 1):
        shield = board.piece(king_square.offset(df, direction))
        if shield is not None and shield.type == PieceType.PAWN and shield.color == color:
            safety += KING_SHIELD_BONUS
    return safety


def center_control(board: Board, machine_color: Color) -> float:
    score = 0
    for square in CENTER_SQUARES:
        piece = board.piece(square)
        if piece is not None:
            score += CENTER_BONUS if piece.color == machine_color else -CENTER_BONUS
    return score


def mobility(board: Board, machine_color: Color) -> int:
    """Difference in the number of legal moves of both sides"""
    return len(rules.legal_moves(board, machine_color)) - len(
        rules.legal_moves(board, opposite(machine_color))
    )


def evaluate(board: Board, machine_color: Color) -> float:
    """
    Score a position
    ----

    1. material: every piece is worth its points * 100 plus its piece-square bonus
    2. king safety: pawn shield in front of the king
    3. center control: occupation of d4, d5, e4, e5
    4. mobility: who has more legal moves

    Each term is counted for the machine and against its opponent.
    """
    opponent = opposite(machine_color)
    score = material_score(board, machine_color)
    score += king_safety(board, machine_color) * KING_SAFETY_WEIGHT
    score -= king_safety(board, opponent) * KING_SAFETY_WEIGHT
    score += center_control(board, machine_color) * CENTER_CONTROL_WEIGHT
    score += mobility(board, machine_color) * MOBILITY_WEIGHT
    return score
