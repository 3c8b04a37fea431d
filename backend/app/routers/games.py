from fastapi import APIRouter, Depends, Query

from app.database import get_store
from app.dependencies.auth import verify_api_key
from app.schemas.base import MessageResponse
from app.schemas.games import GameCreate, GameResponse, GameUpdate, ScoreUpdate, TimeUpdate
from app.services.game_state_machine import GameStateMachine
from app.store import DocumentStore

router = APIRouter(prefix="/games", tags=["games"], dependencies=[Depends(verify_api_key)])


@router.get("", response_model=list[GameResponse])
async def list_games(
    status: str | None = Query(None),
    team_id: str | None = Query(None, alias="teamId"),
    date: str | None = Query(None),
    limit: int | None = Query(None, ge=1, le=500),
    store: DocumentStore = Depends(get_store),
):
    games = await GameStateMachine(store).list_games(
        status=status, team_id=team_id, date=date, limit=limit
    )
    return [GameResponse.model_validate(g) for g in games]


@router.post("", response_model=GameResponse, status_code=201)
async def create_game(data: GameCreate, store: DocumentStore = Depends(get_store)):
    game = await GameStateMachine(store).create_game(data)
    return GameResponse.model_validate(game)


@router.get("/{game_id}", response_model=GameResponse)
async def get_game(game_id: str, store: DocumentStore = Depends(get_store)):
    game = await GameStateMachine(store).get_game(game_id)
    return GameResponse.model_validate(game)


@router.put("/{game_id}", response_model=GameResponse)
async def update_game(game_id: str, data: GameUpdate, store: DocumentStore = Depends(get_store)):
    game = await GameStateMachine(store).update_game(game_id, data)
    return GameResponse.model_validate(game)


@router.delete("/{game_id}", response_model=MessageResponse)
async def delete_game(game_id: str, store: DocumentStore = Depends(get_store)):
    await GameStateMachine(store).delete_game(game_id)
    return MessageResponse(message="Game deleted successfully")


@router.put("/{game_id}/start", response_model=GameResponse)
async def start_game(game_id: str, store: DocumentStore = Depends(get_store)):
    game = await GameStateMachine(store).start_game(game_id)
    return GameResponse.model_validate(game)


@router.put("/{game_id}/stop", response_model=GameResponse)
async def stop_game(game_id: str, store: DocumentStore = Depends(get_store)):
    game = await GameStateMachine(store).stop_game(game_id)
    return GameResponse.model_validate(game)


@router.put("/{game_id}/update-score", response_model=GameResponse)
async def update_score(
    game_id: str,
    data: ScoreUpdate | None = None,
    store: DocumentStore = Depends(get_store),
):
    data = data or ScoreUpdate()
    game = await GameStateMachine(store).update_score(
        game_id, home_score=data.home_score, away_score=data.away_score
    )
    return GameResponse.model_validate(game)


@router.put("/{game_id}/update-time", response_model=GameResponse)
async def update_time(
    game_id: str,
    data: TimeUpdate | None = None,
    store: DocumentStore = Depends(get_store),
):
    data = data or TimeUpdate()
    game = await GameStateMachine(store).update_time(game_id, data.current_game_time)
    return GameResponse.model_validate(game)


@router.put("/{game_id}/next-period", response_model=GameResponse)
async def next_period(game_id: str, store: DocumentStore = Depends(get_store)):
    game = await GameStateMachine(store).advance_period(game_id)
    return GameResponse.model_validate(game)
