"""pytest configuration and fixtures."""

import os

# Set environment before the app modules read settings
os.environ["STORE_BACKEND"] = "memory"
os.environ["API_KEY"] = ""
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import get_store  # noqa: E402
from app.main import app  # noqa: E402
from app.schemas.games import GameCreate  # noqa: E402
from app.schemas.players import PlayerCreate  # noqa: E402
from app.schemas.teams import TeamCreate  # noqa: E402
from app.schemas.templates import CategoryCreate, TemplateCreate  # noqa: E402
from app.services.categories import CategoryService  # noqa: E402
from app.services.game_state_machine import GameStateMachine  # noqa: E402
from app.services.players import PlayerService  # noqa: E402
from app.services.teams import TeamService  # noqa: E402
from app.services.templates import TemplateService  # noqa: E402
from app.store import MemoryStore  # noqa: E402

GOAL_TEMPLATE = (
    "GOAL! {{playerName}} (#{{playerNumber}}) scores for {{team}} in the {{period}}. "
    "{{homeTeam}} {{homeScore}} - {{awayScore}} {{awayTeam}}"
)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest_asyncio.fixture
async def teams(store: MemoryStore) -> tuple[dict, dict]:
    service = TeamService(store)
    home = await service.create_team(
        TeamCreate(team_id="perth", team_name="Perth Thunder", division="west")
    )
    away = await service.create_team(
        TeamCreate(team_id="melbourne", team_name="Melbourne Ice", division="east")
    )
    return home, away


@pytest_asyncio.fixture
async def player(store: MemoryStore, teams) -> dict:
    return await PlayerService(store).create_player(
        PlayerCreate(
            player_id="p17",
            team_id="perth",
            player_name="Jane Smith",
            jersey_number="17",
            position="forward",
        )
    )


@pytest_asyncio.fixture
async def scheduled_game(store: MemoryStore, teams) -> dict:
    return await GameStateMachine(store).create_game(
        GameCreate(
            game_id="g1",
            home_team_id="perth",
            away_team_id="melbourne",
            game_date="2024-10-05",
        )
    )


@pytest_asyncio.fixture
async def live_game(store: MemoryStore, scheduled_game: dict) -> dict:
    return await GameStateMachine(store).start_game(scheduled_game["game_id"])


@pytest_asyncio.fixture
async def goal_template(store: MemoryStore) -> dict:
    await CategoryService(store).create_category(CategoryCreate(category_id="goals", name="Goals"))
    return await TemplateService(store).create_template(
        TemplateCreate(
            template_id="goal-standard",
            category_id="goals",
            event_type="goal",
            name="Standard goal",
            text=GOAL_TEMPLATE,
            is_default=True,
        )
    )


@pytest.fixture
def client(store: MemoryStore):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
