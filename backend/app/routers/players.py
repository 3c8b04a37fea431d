from fastapi import APIRouter, Depends, Query

from app.database import get_store
from app.dependencies.auth import verify_api_key
from app.schemas.base import MessageResponse
from app.schemas.players import PlayerCreate, PlayerResponse, PlayerUpdate
from app.services.players import PlayerService
from app.store import DocumentStore

router = APIRouter(prefix="/players", tags=["players"], dependencies=[Depends(verify_api_key)])


@router.get("", response_model=list[PlayerResponse])
async def list_players(
    team_id: str | None = Query(None, alias="teamId"),
    position: str | None = Query(None),
    limit: int | None = Query(None, ge=1, le=500),
    store: DocumentStore = Depends(get_store),
):
    players = await PlayerService(store).list_players(
        team_id=team_id, position=position, limit=limit
    )
    return [PlayerResponse.model_validate(p) for p in players]


@router.post("", response_model=PlayerResponse, status_code=201)
async def create_player(data: PlayerCreate, store: DocumentStore = Depends(get_store)):
    player = await PlayerService(store).create_player(data)
    return PlayerResponse.model_validate(player)


@router.get("/{player_id}", response_model=PlayerResponse)
async def get_player(player_id: str, store: DocumentStore = Depends(get_store)):
    player = await PlayerService(store).get_player(player_id)
    return PlayerResponse.model_validate(player)


@router.put("/{player_id}", response_model=PlayerResponse)
async def update_player(
    player_id: str, data: PlayerUpdate, store: DocumentStore = Depends(get_store)
):
    player = await PlayerService(store).update_player(player_id, data)
    return PlayerResponse.model_validate(player)


@router.delete("/{player_id}", response_model=MessageResponse)
async def delete_player(player_id: str, store: DocumentStore = Depends(get_store)):
    await PlayerService(store).delete_player(player_id)
    return MessageResponse(message="Player deleted successfully")
