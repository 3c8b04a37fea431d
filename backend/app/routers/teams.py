from fastapi import APIRouter, Depends, Query

from app.database import get_store
from app.dependencies.auth import verify_api_key
from app.schemas.base import MessageResponse
from app.schemas.teams import TeamCreate, TeamResponse, TeamUpdate
from app.services.teams import TeamService
from app.store import DocumentStore

router = APIRouter(prefix="/teams", tags=["teams"], dependencies=[Depends(verify_api_key)])


@router.get("", response_model=list[TeamResponse])
async def list_teams(
    division: str | None = Query(None),
    limit: int | None = Query(None, ge=1, le=500),
    store: DocumentStore = Depends(get_store),
):
    teams = await TeamService(store).list_teams(division=division, limit=limit)
    return [TeamResponse.model_validate(t) for t in teams]


@router.post("", response_model=TeamResponse, status_code=201)
async def create_team(data: TeamCreate, store: DocumentStore = Depends(get_store)):
    team = await TeamService(store).create_team(data)
    return TeamResponse.model_validate(team)


@router.get("/{team_id}", response_model=TeamResponse)
async def get_team(team_id: str, store: DocumentStore = Depends(get_store)):
    team = await TeamService(store).get_team(team_id)
    return TeamResponse.model_validate(team)


@router.put("/{team_id}", response_model=TeamResponse)
async def update_team(team_id: str, data: TeamUpdate, store: DocumentStore = Depends(get_store)):
    team = await TeamService(store).update_team(team_id, data)
    return TeamResponse.model_validate(team)


@router.delete("/{team_id}", response_model=MessageResponse)
async def delete_team(team_id: str, store: DocumentStore = Depends(get_store)):
    await TeamService(store).delete_team(team_id)
    return MessageResponse(message="Team deleted successfully")
