"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

# Chess board is always 8x8.
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True, order=True)
class Square:
    """
    Zero-based (file, rank) coordinate. a1 is (0, 0), h8 is (7, 7).

    NOTE: ordering of squares is file-major, then rank. That is also the order in which the board gets scanned.
    """

    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        file = ord(sq[0]) - ord("a")
        rank = int(sq[1:]) - 1
        return cls(file, rank)

    def to_algebraic(self) -> str:
        return f"{self.file_name()}{self.rank + 1}"

    def file_name(self) -> str:
        return chr(self.file + ord("a"))

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_DIMENSIONS[0]) and (
            0 <= self.rank < BOARD_DIMENSIONS[1]
        )

    def offset(self, df: int, dr: int) -> Square:
        return Square(self.file + df, self.rank + dr)


def all_squares() -> Iterator[Square]:
    """Every square of the board in canonical scan order (file-major, rank-minor)"""
    for file in range(BOARD_DIMENSIONS[0]):
        for rank in range(BOARD_DIMENSIONS[1]):
            yield Square(file, rank)


def sign(value: int) -> int:
    return (value > 0) - (value < 0)


def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    Squares strictly in between the two squares, walking a unit step in the sign of each axis.

    Only meaningful for squares on a common file, rank or diagonal. For anything else (a knight jump)
    the walk would never hit the target, so an empty list is returned.
    """
    df = to_square.file - from_square.file
    dr = to_square.rank - from_square.rank
    if not (df == 0 or dr == 0 or abs(df) == abs(dr)):
        return []

    step_file, step_rank = sign(df), sign(dr)
    squares_found: list[Square] = []
    square = from_square.offset(step_file, step_rank)
    while square != to_square:
        squares_found.append(square)
        square = square.offset(step_file, step_rank)
    return squares_found
