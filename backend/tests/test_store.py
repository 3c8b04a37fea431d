"""Tests for the in-memory document store."""

import pytest

from app.store import ConditionalCheckFailedError, MemoryStore, column_names, key_field


def test_key_field_comes_from_mapped_primary_key() -> None:
    assert key_field("games") == "game_id"
    assert key_field("template_variables") == "variable_name"
    assert "home_score" in column_names("games")


def test_unknown_table_raises() -> None:
    with pytest.raises(KeyError, match="Unknown table"):
        key_field("fixtures")


@pytest.mark.asyncio
async def test_conditional_put_rejects_existing_key(store: MemoryStore) -> None:
    await store.put("teams", {"team_id": "t1", "team_name": "One"}, if_not_exists=True)

    with pytest.raises(ConditionalCheckFailedError):
        await store.put("teams", {"team_id": "t1", "team_name": "Other"}, if_not_exists=True)

    assert (await store.get("teams", "t1"))["team_name"] == "One"


@pytest.mark.asyncio
async def test_plain_put_overwrites(store: MemoryStore) -> None:
    await store.put("teams", {"team_id": "t1", "team_name": "One"})
    await store.put("teams", {"team_id": "t1", "team_name": "Other"})
    assert (await store.get("teams", "t1"))["team_name"] == "Other"


@pytest.mark.asyncio
async def test_unknown_fields_are_dropped(store: MemoryStore) -> None:
    item = await store.put("teams", {"team_id": "t1", "team_name": "One", "mascot": "bolt"})
    assert "mascot" not in item


@pytest.mark.asyncio
async def test_returned_items_are_copies(store: MemoryStore) -> None:
    item = await store.put("teams", {"team_id": "t1", "team_name": "One"})
    item["team_name"] = "Changed"
    fetched = await store.get("teams", "t1")
    fetched["team_name"] = "Changed again"
    assert (await store.get("teams", "t1"))["team_name"] == "One"


@pytest.mark.asyncio
async def test_update_missing_item_returns_none(store: MemoryStore) -> None:
    assert await store.update("teams", "nope", {"team_name": "x"}) is None


@pytest.mark.asyncio
async def test_query_sorts_and_filters_on_sort_field() -> None:
    store = MemoryStore(
        {
            "games": [
                {"game_id": "a", "status": "scheduled", "game_date": "2024-10-12"},
                {"game_id": "b", "status": "scheduled", "game_date": "2024-10-05"},
                {"game_id": "c", "status": "completed", "game_date": "2024-09-28"},
                {"game_id": "d", "status": "scheduled"},
            ]
        }
    )

    ascending = await store.query("games", "status", "scheduled", sort_field="game_date")
    assert [g["game_id"] for g in ascending] == ["b", "a", "d"]

    descending = await store.query(
        "games", "status", "scheduled", sort_field="game_date", descending=True, limit=1
    )
    assert [g["game_id"] for g in descending] == ["d"]

    same_day = await store.query(
        "games", "status", "scheduled", sort_field="game_date", sort_value="2024-10-05"
    )
    assert [g["game_id"] for g in same_day] == ["b"]


@pytest.mark.asyncio
async def test_scan_with_filters_and_delete(store: MemoryStore) -> None:
    await store.put("teams", {"team_id": "t1", "team_name": "One", "division": "west"})
    await store.put("teams", {"team_id": "t2", "team_name": "Two", "division": "east"})

    west = await store.scan("teams", {"division": "west"})
    assert [t["team_id"] for t in west] == ["t1"]

    await store.delete("teams", "t1")
    await store.delete("teams", "t1")
    assert [t["team_id"] for t in await store.scan("teams")] == ["t2"]
