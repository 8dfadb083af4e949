"""Unit tests for mrchess/chess/pieces.py"""

import pytest

from mrchess.chess.pieces import Color, Piece, PieceType, opposite
from mrchess.chess.square import Square


def make_piece(character: str, square_name: str, has_moved: bool = False) -> Piece:
    piece = Piece.from_fen(character, Square.from_algebraic(square_name))
    piece.has_moved = has_moved
    return piece


def test_opposite() -> None:
    assert opposite(Color.WHITE) == Color.BLACK
    assert opposite(Color.BLACK) == Color.WHITE


@pytest.mark.parametrize(
    "character, piece_type, color",
    [
        ("P", PieceType.PAWN, Color.WHITE),
        ("n", PieceType.KNIGHT, Color.BLACK),
        ("B", PieceType.BISHOP, Color.WHITE),
        ("r", PieceType.ROOK, Color.BLACK),
        ("Q", PieceType.QUEEN, Color.WHITE),
        ("k", PieceType.KING, Color.BLACK),
    ],
)
def test_from_fen(character: str, piece_type: PieceType, color: Color) -> None:
    piece = Piece.from_fen(character, Square(0, 0))
    assert piece.type == piece_type
    assert piece.color == color
    assert piece.to_fen() == character


@pytest.mark.parametrize(
    "character, points",
    [("P", 1), ("N", 3), ("B", 3), ("R", 5), ("Q", 9), ("K", 100)],
)
def test_value_points(character: str, points: int) -> None:
    assert Piece.from_fen(character, Square(0, 0)).value_points() == points


# --- MOVEMENT PATTERNS ---
def test_white_pawn_pattern() -> None:
    pawn = make_piece("P", "e2")
    assert pawn.matches_movement_pattern(Square.from_algebraic("e3"))
    assert pawn.matches_movement_pattern(Square.from_algebraic("e4"))
    assert pawn.matches_movement_pattern(Square.from_algebraic("d3"))
    assert pawn.matches_movement_pattern(Square.from_algebraic("f3"))
    assert not pawn.matches_movement_pattern(Square.from_algebraic("e1"))
    assert not pawn.matches_movement_pattern(Square.from_algebraic("e5"))
    assert not pawn.matches_movement_pattern(Square.from_algebraic("d4"))


def test_pawn_loses_double_step_after_moving() -> None:
    pawn = make_piece("P", "e3", has_moved=True)
    assert pawn.matches_movement_pattern(Square.from_algebraic("e4"))
    assert not pawn.matches_movement_pattern(Square.from_algebraic("e5"))


def test_black_pawn_moves_down() -> None:
    pawn = make_piece("p", "d7")
    assert pawn.matches_movement_pattern(Square.from_algebraic("d6"))
    assert pawn.matches_movement_pattern(Square.from_algebraic("d5"))
    assert pawn.matches_movement_pattern(Square.from_algebraic("c6"))
    assert not pawn.matches_movement_pattern(Square.from_algebraic("d8"))


def test_pawn_only_attacks_diagonally() -> None:
    pawn = make_piece("P", "e4", has_moved=True)
    assert pawn.matches_attack_pattern(Square.from_algebraic("d5"))
    assert pawn.matches_attack_pattern(Square.from_algebraic("f5"))
    assert not pawn.matches_attack_pattern(Square.from_algebraic("e5"))
    assert not pawn.matches_attack_pattern(Square.from_algebraic("d3"))


@pytest.mark.parametrize(
    "character, origin, reachable, unreachable",
    [
        ("N", "d4", ["b3", "b5", "c2", "c6", "e2", "e6", "f3", "f5"], ["d5", "e5", "d6"]),
        ("B", "c1", ["a3", "h6", "d2", "b2"], ["c2", "d1", "d3"]),
        ("R", "a1", ["a8", "h1", "a2"], ["b2", "c3"]),
        ("Q", "d1", ["d8", "a1", "h5", "a4"], ["e3", "c3"]),
        ("K", "e1", ["d1", "f1", "d2", "e2", "f2"], ["e3", "g1", "c1"]),
    ],
)
def test_piece_patterns(
    character: str, origin: str, reachable: list[str], unreachable: list[str]
) -> None:
    piece = make_piece(character, origin)
    for name in reachable:
        assert piece.matches_movement_pattern(Square.from_algebraic(name)), name
        assert piece.matches_attack_pattern(Square.from_algebraic(name)), name
    for name in unreachable:
        assert not piece.matches_movement_pattern(Square.from_algebraic(name)), name


def test_promote() -> None:
    pawn = make_piece("P", "e7", has_moved=True)
    pawn.promote_to(PieceType.QUEEN)
    assert pawn.type == PieceType.QUEEN
    assert pawn.value_points() == 9
