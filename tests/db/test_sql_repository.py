"""Unit tests for mrchess/db/sql_repository.py"""

from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from mrchess.core.config import DatabaseSettings
from mrchess.core.shared_types import Status
from mrchess.db.database import create_session_factory, get_db
from mrchess.db.schema import DBGame
from mrchess.db.sql_repository import GameModel, SQLGameRepository

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


@pytest.fixture
def model() -> GameModel:
    return GameModel(
        starting_fen=STARTING_FEN,
        current_fen="rnbqkbnr/pppppppp/8/8/8/5N2/PPPPPPPP/RNBQKB1R b KQkq - 1 1",
        moves_uci=["g1f3"],
        moves_san=["Nf3"],
        status=Status.IN_PROGRESS,
    )


def test_create_game(db_session_repo: Session, model: GameModel) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    repo = SQLGameRepository(db_session_repo)
    record_in_db, game_id = repo.create_game(model)
    assert isinstance(record_in_db, GameModel)
    assert record_in_db == model

    stored = db_session_repo.scalar(select(DBGame).where(DBGame.id == game_id))
    assert stored is not None
    assert stored.created_at is not None


def test_get_game_by_id(db_session_repo: Session, model: GameModel) -> None:
    """Create a game, then fetch it from db."""
    repo = SQLGameRepository(db_session_repo)
    expected_game, game_id = repo.create_game(model)
    game_found = repo.get_game(game_id)
    assert isinstance(game_found, GameModel)
    assert game_found == expected_game


def test_get_unknown_game(db_session_repo: Session) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    repo = SQLGameRepository(db_session_repo)
    assert repo.get_game(uuid4()) is None


def test_update_game(db_session_repo: Session, model: GameModel) -> None:
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(model)

    model.moves_uci = [*model.moves_uci, "e7e5"]
    model.moves_san = [*model.moves_san, "e5"]
    model.status = Status.CHECK
    model.winner = None
    updated = repo.update_game(game_id, model)

    assert updated == model
    assert repo.get_game(game_id) == model


def test_update_finished_game(db_session_repo: Session, model: GameModel) -> None:
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(model)

    model.status = Status.CHECKMATE
    model.winner = "black"
    fetched = repo.update_game(game_id, model)
    assert fetched is not None
    assert fetched.winner == "black"
    assert fetched.status == "checkmate"


def test_update_unknown_game(db_session_repo: Session, model: GameModel) -> None:
    assert SQLGameRepository(db_session_repo).update_game(uuid4(), model) is None


def test_delete_game(db_session_repo: Session, model: GameModel) -> None:
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(model)

    assert repo.delete_game(game_id) == model
    assert repo.get_game(game_id) is None
    assert repo.delete_game(game_id) is None


def test_session_from_settings(model: GameModel) -> None:
    """Sessions built from the configuration create the tables on first use."""
    session_factory = create_session_factory(DatabaseSettings(url="sqlite:///:memory:"))
    sessions = get_db(session_factory)
    db = next(sessions)
    try:
        repo = SQLGameRepository(db)
        _, game_id = repo.create_game(model)
        assert repo.get_game(game_id) == model
    finally:
        sessions.close()
