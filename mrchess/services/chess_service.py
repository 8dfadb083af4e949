"""Orchestration of communication from the API layer to the rules engine, the machine opponent and persistence (and the reverse direction)."""

import logging
import time
from typing import Optional
from uuid import UUID

from mrchess.ai.search import ChessAI, Clock, to_domain_color
from mrchess.api.models import (
    AIMoveRequest,
    AIMoveResponse,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
    NewGameRequest,
)
from mrchess.chess import pieces
from mrchess.chess.fen import FENState
from mrchess.chess.game import Game
from mrchess.chess.square import Square
from mrchess.core.config import AISettings
from mrchess.core.exceptions import GameStateError, NotYourTurnError, RepositoryError
from mrchess.core.models import GameModel
from mrchess.core.shared_types import Color, Status
from mrchess.db.repository import GameRepository

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for a game against the machine."""

    def __init__(
        self,
        repository: GameRepository,
        settings: Optional[AISettings] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.repo = repository
        self.settings = settings if settings is not None else AISettings()
        self._clock = clock

    # -- API routes logic ---
    def new_game(self, request: NewGameRequest) -> GameResponse:
        """Start a game from the standard starting position, or from the supplied FEN."""
        game = Game.from_fen(request.starting_fen) if request.starting_fen else Game()
        stored_game, game_id = self.repo.create_game(game.to_model())
        logger.info("Created game %s", game_id)
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Legal moves of the side to move, or of the single piece on the requested square (for move previews)."""
        game = self._load_game(request.game_id)

        color = game.side_to_move
        if request.square is None:
            moves = game.legal_moves()
        else:
            square = Square.from_algebraic(request.square)
            moves = game.legal_moves_for_square(square)
            occupant = game.piece_at(square)
            if occupant is not None:
                color = occupant[1]

        return LegalMovesResponse(
            game_id=request.game_id,
            color=Color[color.name],
            legal_moves=moves.to_uci(),
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----
        An illegal move is not an error: the response reports it as not accepted and the game is left untouched.
        """
        game = self._load_game(request.game_id)
        self._ensure_in_progress(request.game_id, game)

        promotion = (
            pieces.PieceType[request.promote_to.name]
            if request.promote_to is not None
            else pieces.PieceType.QUEEN
        )
        accepted = game.try_make_move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
            promotion,
        )
        if not accepted:
            logger.debug(
                "Game %s: refused %s%s", request.game_id, request.from_square, request.to_square
            )
            return MoveResponse(
                accepted=False,
                game=self._create_game_response(request.game_id, game.to_model()),
            )

        after_move = self._store(request.game_id, game)
        return MoveResponse(
            accepted=True,
            move_san=after_move.moves_san[-1],
            game=self._create_game_response(request.game_id, after_move),
        )

    async def request_ai_move(self, request: AIMoveRequest) -> AIMoveResponse:
        """
        Let the machine think, then execute its move on the game.
        ----
        When the game is over (or the machine has nothing to play) no move is returned, and the game reports its final status.
        """
        game = self._load_game(request.game_id)
        if game.game_over:
            return AIMoveResponse(
                nodes_searched=0,
                game=self._create_game_response(request.game_id, self._store(request.game_id, game)),
            )

        machine_color = to_domain_color(self.settings.machine_color)
        if game.side_to_move != machine_color:
            raise NotYourTurnError(
                f"It is {game.side_to_move.name.lower()} to move, the machine plays {machine_color.name.lower()}."
            )

        ai = ChessAI(game, self.settings, clock=self._clock)
        move = await ai.think_and_move()
        if move is None:
            logger.warning("Game %s: machine found no move to play", request.game_id)
            return AIMoveResponse(
                nodes_searched=ai.nodes_searched,
                game=self._create_game_response(request.game_id, self._store(request.game_id, game)),
            )

        if not game.apply_move(move):
            raise GameStateError(f"Machine selected a move that cannot be played: {move.to_uci()!r}")

        after_move = self._store(request.game_id, game)
        return AIMoveResponse(
            move_uci=move.to_uci(),
            move_san=move.to_algebraic(),
            nodes_searched=ai.nodes_searched,
            game=self._create_game_response(request.game_id, after_move),
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with {request.game_id=} not found.")
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        state = FENState.from_fen(model.current_fen)
        return GameResponse(
            game_id=game_id,
            fen_state=model.current_fen,
            starting_state=model.starting_fen,
            side_to_move=Color[state.color_to_move.name],
            status=Status(model.status),
            winner=Color(model.winner) if model.winner is not None else None,
            move_history=model.moves_uci,
            move_history_san=model.moves_san,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model

    def _load_game(self, game_id: UUID) -> Game:
        return Game.from_model(self._fetch_game(game_id))

    def _store(self, game_id: UUID, game: Game) -> GameModel:
        model = game.to_model()
        if self.repo.update_game(game_id, model) is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return model

    @staticmethod
    def _ensure_in_progress(game_id: UUID, game: Game) -> None:
        if game.game_over:
            raise GameStateError(
                f"Game {game_id} is already over ({game.status.value})."
            )
