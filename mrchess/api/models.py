"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from mrchess.chess import rules
from mrchess.chess.fen import board_from_fen, is_valid_fen, is_valid_square
from mrchess.core.exceptions import InvalidRequestError
from mrchess.core.shared_types import Color, PieceType, Status

# Pieces a pawn may promote to
PROMOTION_CHOICES = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)


def _validate_square_name(value: str) -> str:
    """Square names are given in algebraic notation: 'a1' - 'h8'"""
    if len(value) != 2 or not is_valid_square(value):
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        )
    return value


# --- REQUEST MODELS ---
class NewGameRequest(BaseModel):
    starting_fen: Optional[str] = None

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        value = value.strip()
        if not is_valid_fen(value):
            raise InvalidRequestError(f"Cannot interpret {value!r} as a FEN string.")
        if not rules.is_playable_setup(board_from_fen(value)):
            raise InvalidRequestError(
                f"Position {value!r} needs exactly one king per color, and the side not to move may not be in check."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str
    promote_to: Optional[PieceType] = None

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)

    @field_validator("promote_to")
    @classmethod
    def validate_promotion(cls, value: Optional[PieceType]) -> Optional[PieceType]:
        if value is not None and value not in PROMOTION_CHOICES:
            raise InvalidRequestError(f"A pawn cannot promote to a {value.value}.")
        return value


class LegalMovesRequest(BaseModel):
    """Without a square: all legal moves of the side to move. With a square: the moves of that piece only."""

    game_id: UUID
    square: Optional[str] = None

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _validate_square_name(value)


class AIMoveRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    fen_state: str
    starting_state: str
    side_to_move: Color
    status: Status
    winner: Optional[Color] = None
    move_history: list[str]
    move_history_san: list[str]


class MoveResponse(BaseModel):
    accepted: bool
    move_san: Optional[str] = None
    game: GameResponse


class LegalMovesResponse(BaseModel):
    game_id: UUID
    color: Color
    legal_moves: list[str]


class AIMoveResponse(BaseModel):
    move_uci: Optional[str] = None
    move_san: Optional[str] = None
    nodes_searched: int
    game: GameResponse
