from fastapi import APIRouter, Depends, Query

from app.database import get_store
from app.dependencies.auth import verify_api_key
from app.schemas.base import MessageResponse
from app.schemas.templates import TemplateCreate, TemplateResponse, TemplateUpdate
from app.services.templates import TemplateService
from app.store import DocumentStore

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=list[TemplateResponse])
async def list_templates(
    category_id: str | None = Query(None, alias="categoryId"),
    event_type: str | None = Query(None, alias="eventType"),
    store: DocumentStore = Depends(get_store),
):
    templates = await TemplateService(store).list_templates(
        category_id=category_id, event_type=event_type
    )
    return [TemplateResponse.model_validate(t) for t in templates]


@router.post(
    "",
    response_model=TemplateResponse,
    status_code=201,
    dependencies=[Depends(verify_api_key)],
)
async def create_template(data: TemplateCreate, store: DocumentStore = Depends(get_store)):
    template = await TemplateService(store).create_template(data)
    return TemplateResponse.model_validate(template)


@router.get(
    "/{template_id}", response_model=TemplateResponse, dependencies=[Depends(verify_api_key)]
)
async def get_template(template_id: str, store: DocumentStore = Depends(get_store)):
    template = await TemplateService(store).get_template(template_id)
    return TemplateResponse.model_validate(template)


@router.put(
    "/{template_id}", response_model=TemplateResponse, dependencies=[Depends(verify_api_key)]
)
async def update_template(
    template_id: str, data: TemplateUpdate, store: DocumentStore = Depends(get_store)
):
    template = await TemplateService(store).update_template(template_id, data)
    return TemplateResponse.model_validate(template)


@router.delete(
    "/{template_id}", response_model=MessageResponse, dependencies=[Depends(verify_api_key)]
)
async def delete_template(template_id: str, store: DocumentStore = Depends(get_store)):
    await TemplateService(store).delete_template(template_id)
    return MessageResponse(message="Template deleted successfully")


@router.put(
    "/{template_id}/default",
    response_model=MessageResponse,
    dependencies=[Depends(verify_api_key)],
)
async def set_default_template(template_id: str, store: DocumentStore = Depends(get_store)):
    result = await TemplateService(store).set_default_template(template_id)
    return MessageResponse(**result)
