"""Tests for the game lifecycle and in-progress state."""

import pytest

from app.errors import (
    ConflictError,
    NotFoundError,
    ReferenceNotFoundError,
    StateError,
    ValidationError,
)
from app.schemas.games import GameCreate, GameUpdate
from app.schemas.teams import TeamCreate
from app.services.game_state_machine import (
    CANCELLED,
    COMPLETED,
    IN_PROGRESS,
    SCHEDULED,
    GameStateMachine,
    can_transition,
    is_valid_game_time,
    period_clock,
)
from app.services.teams import TeamService


def test_transition_table() -> None:
    assert can_transition(SCHEDULED, "start")
    assert can_transition(SCHEDULED, "cancel")
    assert can_transition(IN_PROGRESS, "stop")
    assert not can_transition(IN_PROGRESS, "start")
    assert not can_transition(COMPLETED, "start")
    assert not can_transition(CANCELLED, "start")


def test_period_clock() -> None:
    assert [period_clock(p) for p in range(1, 6)] == ["20:00", "20:00", "20:00", "5:00", "5:00"]


@pytest.mark.parametrize("value", ["20:00", "5:00", "0:07", "12:34"])
def test_valid_game_times(value: str) -> None:
    assert is_valid_game_time(value)


@pytest.mark.parametrize("value", ["", "1234", "12:3", "12:60", "123:00", "ab:cd"])
def test_invalid_game_times(value: str) -> None:
    assert not is_valid_game_time(value)


class TestCreateGame:
    @pytest.mark.asyncio
    async def test_initial_state(self, scheduled_game: dict) -> None:
        assert scheduled_game["status"] == SCHEDULED
        assert scheduled_game["current_period"] == 1
        assert scheduled_game["current_game_time"] == "20:00"
        assert scheduled_game["home_score"] == 0
        assert scheduled_game["away_score"] == 0
        assert scheduled_game["home_team_name"] == "Perth Thunder"
        assert scheduled_game["away_team_name"] == "Melbourne Ice"

    @pytest.mark.asyncio
    async def test_required_fields(self, store, teams) -> None:
        machine = GameStateMachine(store)
        with pytest.raises(ValidationError, match="Home team ID is required"):
            await machine.create_game(GameCreate(away_team_id="melbourne", game_date="2024-10-05"))
        with pytest.raises(ValidationError, match="Away team ID is required"):
            await machine.create_game(GameCreate(home_team_id="perth", game_date="2024-10-05"))
        with pytest.raises(ValidationError, match="Game date is required"):
            await machine.create_game(GameCreate(home_team_id="perth", away_team_id="melbourne"))

    @pytest.mark.asyncio
    async def test_unknown_team(self, store, teams) -> None:
        with pytest.raises(ReferenceNotFoundError):
            await GameStateMachine(store).create_game(
                GameCreate(home_team_id="perth", away_team_id="sydney", game_date="2024-10-05")
            )

    @pytest.mark.asyncio
    async def test_duplicate_id(self, store, scheduled_game: dict) -> None:
        with pytest.raises(ConflictError):
            await GameStateMachine(store).create_game(
                GameCreate(
                    game_id=scheduled_game["game_id"],
                    home_team_id="perth",
                    away_team_id="melbourne",
                    game_date="2024-10-06",
                )
            )

    @pytest.mark.asyncio
    async def test_generated_id(self, store, teams) -> None:
        game = await GameStateMachine(store).create_game(
            GameCreate(home_team_id="perth", away_team_id="melbourne", game_date="2024-10-05")
        )
        assert game["game_id"]


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start_and_stop(self, store, scheduled_game: dict) -> None:
        machine = GameStateMachine(store)

        started = await machine.start_game("g1")
        assert started["status"] == IN_PROGRESS
        assert started["start_time"] is not None

        stopped = await machine.stop_game("g1")
        assert stopped["status"] == COMPLETED
        assert stopped["end_time"] is not None

    @pytest.mark.asyncio
    async def test_start_twice(self, store, live_game: dict) -> None:
        with pytest.raises(StateError, match="Game is already in progress"):
            await GameStateMachine(store).start_game("g1")

    @pytest.mark.asyncio
    async def test_start_completed(self, store, live_game: dict) -> None:
        machine = GameStateMachine(store)
        await machine.stop_game("g1")
        with pytest.raises(StateError, match="Cannot start a completed game"):
            await machine.start_game("g1")

    @pytest.mark.asyncio
    async def test_stop_scheduled(self, store, scheduled_game: dict) -> None:
        with pytest.raises(StateError, match="Can only stop a game that is in progress"):
            await GameStateMachine(store).stop_game("g1")

    @pytest.mark.asyncio
    async def test_missing_game(self, store) -> None:
        with pytest.raises(NotFoundError):
            await GameStateMachine(store).start_game("nope")

    @pytest.mark.asyncio
    async def test_cancel_scheduled_game(self, store, scheduled_game: dict) -> None:
        machine = GameStateMachine(store)
        cancelled = await machine.update_game("g1", GameUpdate(status=CANCELLED))
        assert cancelled["status"] == CANCELLED

        with pytest.raises(StateError):
            await machine.start_game("g1")

    @pytest.mark.asyncio
    async def test_cancel_live_game_rejected(self, store, live_game: dict) -> None:
        with pytest.raises(StateError):
            await GameStateMachine(store).update_game("g1", GameUpdate(status=CANCELLED))

    @pytest.mark.asyncio
    async def test_status_update_limited_to_cancel(self, store, scheduled_game: dict) -> None:
        with pytest.raises(ValidationError):
            await GameStateMachine(store).update_game("g1", GameUpdate(status=COMPLETED))

    @pytest.mark.asyncio
    async def test_update_renames_changed_team(self, store, scheduled_game: dict) -> None:
        await TeamService(store).create_team(TeamCreate(team_id="sydney", team_name="Sydney Bears"))
        updated = await GameStateMachine(store).update_game(
            "g1", GameUpdate(away_team_id="sydney", venue="Cockburn Ice Arena")
        )
        assert updated["away_team_name"] == "Sydney Bears"
        assert updated["venue"] == "Cockburn Ice Arena"


class TestInProgressState:
    @pytest.mark.asyncio
    async def test_score_requires_live_game(self, store, scheduled_game: dict) -> None:
        with pytest.raises(StateError, match="Can only update score for a game in progress"):
            await GameStateMachine(store).update_score("g1", home_score=1)

    @pytest.mark.asyncio
    async def test_state_checked_before_payload(self, store, scheduled_game: dict) -> None:
        with pytest.raises(StateError):
            await GameStateMachine(store).update_score("g1")

    @pytest.mark.asyncio
    async def test_score_requires_a_value(self, store, live_game: dict) -> None:
        with pytest.raises(ValidationError, match="Either homeScore or awayScore"):
            await GameStateMachine(store).update_score("g1")

    @pytest.mark.asyncio
    async def test_partial_score_update(self, store, live_game: dict) -> None:
        machine = GameStateMachine(store)
        await machine.update_score("g1", home_score=2, away_score=1)
        updated = await machine.update_score("g1", home_score="3")
        assert updated["home_score"] == 3
        assert updated["away_score"] == 1

    @pytest.mark.asyncio
    async def test_negative_score(self, store, live_game: dict) -> None:
        with pytest.raises(ValidationError):
            await GameStateMachine(store).update_score("g1", away_score=-1)

    @pytest.mark.asyncio
    async def test_update_time(self, store, live_game: dict) -> None:
        machine = GameStateMachine(store)
        updated = await machine.update_time("g1", "12:34")
        assert updated["current_game_time"] == "12:34"

        with pytest.raises(ValidationError):
            await machine.update_time("g1", "12:3")
        with pytest.raises(ValidationError):
            await machine.update_time("g1", None)

    @pytest.mark.asyncio
    async def test_advance_period_to_maximum(self, store, live_game: dict) -> None:
        machine = GameStateMachine(store)
        await machine.update_time("g1", "0:00")

        game = await machine.advance_period("g1")
        assert (game["current_period"], game["current_game_time"]) == (2, "20:00")
        game = await machine.advance_period("g1")
        assert (game["current_period"], game["current_game_time"]) == (3, "20:00")
        game = await machine.advance_period("g1")
        assert (game["current_period"], game["current_game_time"]) == (4, "5:00")
        game = await machine.advance_period("g1")
        assert (game["current_period"], game["current_game_time"]) == (5, "5:00")

        with pytest.raises(StateError, match="Already at maximum period"):
            await machine.advance_period("g1")

    @pytest.mark.asyncio
    async def test_advance_period_requires_live_game(self, store, scheduled_game: dict) -> None:
        with pytest.raises(StateError):
            await GameStateMachine(store).advance_period("g1")


class TestListGames:
    @pytest.mark.asyncio
    async def test_filters(self, store, teams) -> None:
        machine = GameStateMachine(store)
        for game_id, date in [("a", "2024-10-12"), ("b", "2024-10-05")]:
            await machine.create_game(
                GameCreate(
                    game_id=game_id,
                    home_team_id="perth",
                    away_team_id="melbourne",
                    game_date=date,
                )
            )
        await machine.start_game("a")

        scheduled = await machine.list_games(status=SCHEDULED)
        assert [g["game_id"] for g in scheduled] == ["b"]

        by_date = await machine.list_games(date="2024-10-12")
        assert [g["game_id"] for g in by_date] == ["a"]

        assert len(await machine.list_games(team_id="melbourne")) == 2
        assert await machine.list_games(team_id="sydney") == []
