"""Unit tests for mrchess/ai/evaluate.py"""

import pytest

from mrchess.ai.evaluate import (
    center_control,
    evaluate,
    king_safety,
    material_score,
    mobility,
    positional_bonus,
)
from mrchess.chess.board import Board
from mrchess.chess.fen import board_from_fen
from mrchess.chess.pieces import Color
from mrchess.chess.square import Square


def test_starting_position_is_balanced() -> None:
    board = Board.standard()
    assert evaluate(board, Color.BLACK) == pytest.approx(0.0)
    assert evaluate(board, Color.WHITE) == pytest.approx(0.0)


def test_score_flips_with_the_machine_color() -> None:
    board = board_from_fen("r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1 w kq - 3 9")
    assert evaluate(board, Color.WHITE) == pytest.approx(-evaluate(board, Color.BLACK))


def test_extra_queen() -> None:
    board = board_from_fen("4k3/8/8/8/8/8/8/Q3K3 w - - 0 1")
    assert material_score(board, Color.BLACK) == -900
    assert king_safety(board, Color.WHITE) == 0
    assert mobility(board, Color.BLACK) == 5 - 22
    assert evaluate(board, Color.BLACK) == pytest.approx(-900 - 17 * 0.02)


@pytest.mark.parametrize(
    "placement, square_name, bonus",
    [
        ("8/8/8/8/4P3/8/8/8", "e4", 25),
        ("8/8/8/4p3/8/8/8/8", "e5", 25),  # mirrored for black
        ("8/8/8/8/8/5N2/8/8", "f3", 10),
        ("8/8/8/8/8/8/8/N7", "a1", -50),
        ("8/8/8/8/8/2B5/8/8", "c3", 0),  # no table
    ],
)
def test_positional_bonus(placement: str, square_name: str, bonus: int) -> None:
    piece = Board.from_fen(placement).piece(Square.from_algebraic(square_name))
    assert piece is not None
    assert positional_bonus(piece) == bonus


def test_king_safety_counts_pawn_shield() -> None:
    board = Board.standard()
    assert king_safety(board, Color.WHITE) == 30
    board.remove_piece(Square.from_algebraic("e2"))
    assert king_safety(board, Color.WHITE) == 20

    castled = Board.from_fen("6k1/5ppp/8/8/8/8/P7/K7")
    assert king_safety(castled, Color.BLACK) == 30
    assert king_safety(castled, Color.WHITE) == 10


def test_king_safety_without_king() -> None:
    assert king_safety(Board.from_fen("8/8/8/8/8/8/PPP5/8"), Color.WHITE) == 0


def test_center_control() -> None:
    board = Board.from_fen("4k3/8/8/3p4/4P3/8/8/4K3")
    assert center_control(board, Color.BLACK) == 0

    board = Board.from_fen("4k3/8/8/3pp3/4P3/8/8/4K3")
    assert center_control(board, Color.BLACK) == 5
    assert center_control(board, Color.WHITE) == -5
