from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response

from app.database import get_store
from app.dependencies.auth import verify_api_key
from app.errors import ValidationError
from app.schemas.base import MessageResponse
from app.schemas.events import (
    EventCreate,
    EventResponse,
    EventUpdate,
    GeneratedTextResponse,
    GenerateTextRequest,
)
from app.services.events import EventService
from app.store import DocumentStore

router = APIRouter(prefix="/events", tags=["events"], dependencies=[Depends(verify_api_key)])

GENERATE_TEXT = "generate-text"


def _check_action(action: str | None) -> None:
    if action and action != GENERATE_TEXT:
        raise ValidationError(f"Unsupported action: {action}")


@router.get("", response_model=list[EventResponse])
async def list_events(
    game_id: str | None = Query(None, alias="gameId"),
    event_type: str | None = Query(None, alias="eventType"),
    limit: int | None = Query(None, ge=1, le=500),
    store: DocumentStore = Depends(get_store),
):
    events = await EventService(store).list_events(
        game_id=game_id, event_type=event_type, limit=limit
    )
    return [EventResponse.model_validate(e) for e in events]


@router.post("")
async def create_event(
    response: Response,
    action: str | None = Query(None),
    body: dict[str, Any] | None = Body(None),
    store: DocumentStore = Depends(get_store),
):
    _check_action(action)
    service = EventService(store)

    if action == GENERATE_TEXT:
        result = await service.generate_text(GenerateTextRequest.model_validate(body or {}))
        return GeneratedTextResponse.model_validate(result)

    event = await service.create_event(EventCreate.model_validate(body or {}))
    response.status_code = 201
    return EventResponse.model_validate(event)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: str, store: DocumentStore = Depends(get_store)):
    event = await EventService(store).get_event(event_id)
    return EventResponse.model_validate(event)


@router.put("/{event_id}")
async def update_event(
    event_id: str,
    action: str | None = Query(None),
    body: dict[str, Any] | None = Body(None),
    store: DocumentStore = Depends(get_store),
):
    _check_action(action)
    service = EventService(store)

    if action == GENERATE_TEXT:
        template_id = (body or {}).get("templateId")
        result = await service.generate_text_for_event(event_id, template_id)
        return GeneratedTextResponse.model_validate(result)

    event = await service.update_event(event_id, EventUpdate.model_validate(body or {}))
    return EventResponse.model_validate(event)


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(event_id: str, store: DocumentStore = Depends(get_store)):
    await EventService(store).delete_event(event_id)
    return MessageResponse(message="Event deleted successfully")
