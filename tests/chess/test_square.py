"""Unit tests for mrchess/chess/square.py"""

import pytest

from mrchess.chess.square import Square, all_squares, squares_between


@pytest.mark.parametrize(
    "name, expected",
    [
        ("a1", Square(0, 0)),
        ("e4", Square(4, 3)),
        ("h8", Square(7, 7)),
        ("b7", Square(1, 6)),
    ],
)
def test_from_algebraic(name: str, expected: Square) -> None:
    assert Square.from_algebraic(name) == expected
    assert expected.to_algebraic() == name


def test_within_bounds() -> None:
    assert Square(0, 0).is_within_bounds()
    assert Square(7, 7).is_within_bounds()
    assert not Square(8, 0).is_within_bounds()
    assert not Square(0, -1).is_within_bounds()


def test_scan_order_is_file_major() -> None:
    """a1, a2, ..., a8, b1, ... h8"""
    squares = list(all_squares())
    assert len(squares) == 64
    assert squares[0] == Square(0, 0)
    assert squares[1] == Square(0, 1)
    assert squares[8] == Square(1, 0)
    assert squares[-1] == Square(7, 7)
    assert squares == sorted(squares)


@pytest.mark.parametrize(
    "from_name, to_name, expected",
    [
        ("a1", "a4", ["a2", "a3"]),
        ("h8", "e8", ["g8", "f8"]),
        ("c1", "f4", ["d2", "e3"]),
        ("e4", "e5", []),
        ("b1", "c3", []),  # knight jump: nothing in between
    ],
)
def test_squares_between(from_name: str, to_name: str, expected: list[str]) -> None:
    found = squares_between(Square.from_algebraic(from_name), Square.from_algebraic(to_name))
    assert [square.to_algebraic() for square in found] == expected
