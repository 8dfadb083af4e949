"""
The Board is the single source of truth of a game: where the pieces are, whose turn it is, castling rights and the move history.

It only knows how to change the position. Which changes are allowed is decided by the rules engine (`mrchess.chess.rules`).
"""

from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Iterator, Optional, Self

from mrchess.chess.castling import CastlingRights
from mrchess.chess.moves import Move
from mrchess.chess.pieces import Color, Piece, PieceType, opposite
from mrchess.chess.square import BOARD_DIMENSIONS, Square, all_squares

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
PAWN_STARTING_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}
PROMOTION_RANK: dict[Color, int] = {Color.WHITE: BOARD_DIMENSIONS[1] - 1, Color.BLACK: 0}

Grid = dict[Square, Optional[Piece]]


def empty_grid() -> Grid:
    return {square: None for square in all_squares()}


def reaches_promotion_rank(piece: Piece, square: Square) -> bool:
    return piece.type == PieceType.PAWN and square.rank == PROMOTION_RANK[piece.color]


@dataclass
class UndoRecord:
    """Everything needed to take back a move made with `Board.make_move()`"""

    move: Move
    moving_piece: Piece
    captured_piece: Optional[Piece]
    had_moved: bool
    original_type: PieceType
    castling_rights: CastlingRights
    side_to_move: Color


@dataclass
class Board:
    grid: Grid = field(default_factory=empty_grid)
    side_to_move: Color = Color.WHITE
    game_over: bool = False
    winner: Optional[Color] = None
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    # declared for completeness. En passant is never generated.
    en_passant_target: Optional[Square] = None
    history: list[Move] = field(default_factory=list)
    halfmove_clock: int = 0
    fullmove_number: int = 1
    _undo_log: list[UndoRecord] = field(default_factory=list, init=False, repr=False)

    # -- CREATION LOGIC ---
    @classmethod
    def standard(cls) -> Self:
        """A fresh board in the standard starting position, white to move"""
        board = cls()
        board.reset()
        return board

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.

        NOTE: A pawn that is not on its starting rank is marked as moved (it lost the right to a double step).
        """
        board = cls()
        board._place_from_fen(fen_str)
        return board

    def reset(self) -> None:
        """Initialize to the standard starting position. Wipes everything that happened before."""
        self.grid = empty_grid()
        self._place_from_fen(STARTING_POSITION)
        self.side_to_move = Color.WHITE
        self.game_over = False
        self.winner = None
        self.castling_rights = CastlingRights()
        self.en_passant_target = None
        self.history = []
        self.halfmove_clock = 0
        self.fullmove_number = 1
        self._undo_log = []

    def _place_from_fen(self, fen_str: str) -> None:
        fen_by_ranks = fen_str.split("/")
        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = BOARD_DIMENSIONS[1] - 1 - rank_idx
            # ... but the first character is the a-file, so reads in normal direction
            file = 0
            for character in fen_one_rank:
                if character.isalpha():
                    square = Square(file, rank)
                    piece = Piece.from_fen(character, square)
                    if piece.type == PieceType.PAWN:
                        piece.has_moved = rank != PAWN_STARTING_RANK[piece.color]
                    self.place_piece(piece, square)
                    file += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    file += int(character)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(BOARD_DIMENSIONS[0]):
            piece = self.piece(Square(file, rank))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def copy(self) -> Self:
        """Scratch copy: shares nothing mutable with the original"""
        return deepcopy(self)

    # -- QUERIES ---
    def piece(self, square: Square) -> Optional[Piece]:
        """Whatever stands on the square. Squares off the board are simply empty."""
        return self.grid.get(square)

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def pieces(self, color: Optional[Color] = None) -> list[Piece]:
        """Pieces in canonical scan order (file-major, then rank), optionally of one color only"""
        return [
            piece
            for piece in self.grid.values()
            if piece is not None and (color is None or piece.color == color)
        ]

    def locate_king(self, color: Color) -> Optional[Square]:
        return next(
            (
                piece.position
                for piece in self.pieces(color)
                if piece.type == PieceType.KING
            ),
            None,
        )

    def count_pieces(self, color: Color) -> int:
        return len(self.pieces(color))

    # -- MUTATIONS ---
    def place_piece(self, piece: Piece, square: Square) -> None:
        self.grid[square] = piece
        piece.position = square

    def remove_piece(self, square: Square) -> Optional[Piece]:
        piece = self.grid[square]
        self.grid[square] = None
        return piece

    def relocate(self, from_square: Square, to_square: Square) -> Optional[Piece]:
        """Move whatever stands on `from_square` to `to_square`. Returns the piece that was standing there (if any)."""
        moving_piece = self.grid[from_square]
        captured_piece = self.grid[to_square]
        self.grid[to_square] = moving_piece
        self.grid[from_square] = None
        if moving_piece is not None:
            moving_piece.position = to_square
        return captured_piece

    @contextmanager
    def trial_move(self, from_square: Square, to_square: Square) -> Iterator[None]:
        """
        Temporarily relocate a piece, without creating any new pieces.
        ---

        Both squares and the position field of the moving piece are restored on exit, even if the body raises.
        NOTE: Callers must make sure nobody else reads the board in the meantime (see `Game` for the lock).
        """
        moving_piece = self.grid[from_square]
        captured_piece = self.grid[to_square]
        self.relocate(from_square, to_square)
        try:
            yield
        finally:
            self.grid[from_square] = moving_piece
            self.grid[to_square] = captured_piece
            if moving_piece is not None:
                moving_piece.position = from_square
            if captured_piece is not None:
                captured_piece.position = to_square

    def apply(self, move: Move) -> UndoRecord:
        """
        Change the position according to the move
        ----

        1. capture whatever stands on the target square
        2. relocate the moving piece and mark it as moved
        3. revoke castling rights where needed
        4. promote a pawn reaching the final rank

        Side to move, history and move counters are NOT touched here.
        """
        moving_piece = self.grid[move.from_square]
        assert moving_piece is not None, f"No piece to move on {move.from_square}"

        record = UndoRecord(
            move=move,
            moving_piece=moving_piece,
            captured_piece=self.grid[move.to_square],
            had_moved=moving_piece.has_moved,
            original_type=moving_piece.type,
            castling_rights=self.castling_rights.copy(),
            side_to_move=self.side_to_move,
        )

        move.captured_piece = record.captured_piece
        move.is_capture = record.captured_piece is not None

        self.relocate(move.from_square, move.to_square)
        moving_piece.has_moved = True

        self.castling_rights.update_for_move(moving_piece, move.from_square)

        if reaches_promotion_rank(moving_piece, move.to_square):
            move.is_promotion = True
            moving_piece.promote_to(move.promotion_piece)

        return record

    def make_move(self, move: Move) -> None:
        """Reversible version of a move, used by the search. Take back with `undo_move()`"""
        record = self.apply(move)
        self._undo_log.append(record)
        self.side_to_move = opposite(self.side_to_move)

    def undo_move(self) -> Move:
        """Reverse the last move made with `make_move()`"""
        record = self._undo_log.pop()
        move = record.move
        moving_piece = record.moving_piece

        self.grid[move.from_square] = moving_piece
        self.grid[move.to_square] = record.captured_piece
        moving_piece.position = move.from_square
        moving_piece.has_moved = record.had_moved
        moving_piece.type = record.original_type
        if record.captured_piece is not None:
            record.captured_piece.position = move.to_square

        self.castling_rights = record.castling_rights
        self.side_to_move = record.side_to_move
        return move

    @property
    def undo_depth(self) -> int:
        return len(self._undo_log)
