"""Tests for team and player records."""

import pytest

from app.errors import ConflictError, NotFoundError, ReferenceNotFoundError, ValidationError
from app.schemas.players import PlayerCreate, PlayerUpdate
from app.schemas.teams import TeamCreate, TeamUpdate
from app.services.players import PlayerService
from app.services.teams import TeamService


class TestTeams:
    @pytest.mark.asyncio
    async def test_crud(self, store, teams) -> None:
        service = TeamService(store)

        west = await service.list_teams(division="west")
        assert [t["team_id"] for t in west] == ["perth"]

        updated = await service.update_team("perth", TeamUpdate(abbreviation="PER"))
        assert updated["abbreviation"] == "PER"
        assert updated["team_name"] == "Perth Thunder"

        await service.delete_team("melbourne")
        with pytest.raises(NotFoundError):
            await service.get_team("melbourne")

    @pytest.mark.asyncio
    async def test_name_required_and_unique_id(self, store, teams) -> None:
        service = TeamService(store)
        with pytest.raises(ValidationError, match="Team name is required"):
            await service.create_team(TeamCreate(division="west"))
        with pytest.raises(ConflictError):
            await service.create_team(TeamCreate(team_id="perth", team_name="Perth Again"))


class TestPlayers:
    @pytest.mark.asyncio
    async def test_team_must_exist(self, store, teams) -> None:
        service = PlayerService(store)
        with pytest.raises(ReferenceNotFoundError):
            await service.create_player(PlayerCreate(team_id="sydney", player_name="Alex"))
        with pytest.raises(ValidationError, match="Team ID is required"):
            await service.create_player(PlayerCreate(player_name="Alex"))

    @pytest.mark.asyncio
    async def test_list_and_move(self, store, player) -> None:
        service = PlayerService(store)
        await service.create_player(
            PlayerCreate(player_id="g30", team_id="perth", player_name="Sam Lee", position="goalie")
        )

        forwards = await service.list_players(team_id="perth", position="forward")
        assert [p["player_id"] for p in forwards] == ["p17"]

        moved = await service.update_player("p17", PlayerUpdate(team_id="melbourne"))
        assert moved["team_id"] == "melbourne"
        with pytest.raises(ReferenceNotFoundError):
            await service.update_player("p17", PlayerUpdate(team_id="sydney"))

        await service.delete_player("g30")
        assert [p["player_id"] for p in await service.list_players()] == ["p17"]
