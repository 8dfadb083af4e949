"""Unit tests for mrchess/chess/moves.py"""

import pytest

from mrchess.chess.moves import Move, MoveList
from mrchess.chess.pieces import Color, PieceType
from mrchess.chess.square import Square


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


@pytest.mark.parametrize(
    "uci, from_name, to_name",
    [("e2e4", "e2", "e4"), ("g8f6", "g8", "f6"), ("a7a8", "a7", "a8")],
)
def test_from_uci(uci: str, from_name: str, to_name: str) -> None:
    move = Move.from_uci(uci, PieceType.PAWN, Color.WHITE)
    assert move.from_square == sq(from_name)
    assert move.to_square == sq(to_name)
    assert move.to_uci() == uci


def test_uci_with_promotion() -> None:
    move = Move.from_uci("e7e8n", PieceType.PAWN, Color.WHITE)
    assert move.promotion_piece == PieceType.KNIGHT

    # the suffix is only written once the move actually promoted
    assert move.to_uci() == "e7e8"
    move.is_promotion = True
    assert move.to_uci() == "e7e8n"


def test_default_flags() -> None:
    move = Move(sq("g1"), sq("f3"), PieceType.KNIGHT, Color.WHITE)
    assert not move.is_capture
    assert not move.is_castling
    assert not move.is_en_passant
    assert not move.is_promotion
    assert move.promotion_piece == PieceType.QUEEN
    assert not move.causes_check
    assert not move.causes_checkmate
    assert move.captured_piece is None


@pytest.fixture
def move_list() -> MoveList:
    knight = Move(sq("g1"), sq("f3"), PieceType.KNIGHT, Color.WHITE)
    capture = Move(sq("e4"), sq("d5"), PieceType.PAWN, Color.WHITE, is_capture=True)
    check = Move(sq("d1"), sq("h5"), PieceType.QUEEN, Color.WHITE, causes_check=True)
    return MoveList([knight, capture, check])


def test_move_list_find(move_list: MoveList) -> None:
    found = move_list.find_move(sq("e4"), sq("d5"))
    assert found is not None
    assert found.piece_type == PieceType.PAWN
    assert move_list.find_move(sq("e4"), sq("e5")) is None


def test_move_list_filters(move_list: MoveList) -> None:
    assert move_list.for_piece(PieceType.KNIGHT).to_uci() == ["g1f3"]
    assert move_list.captures().to_uci() == ["e4d5"]
    assert move_list.checks().to_uci() == ["d1h5"]
    assert isinstance(move_list.captures(), MoveList)
