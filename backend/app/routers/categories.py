from fastapi import APIRouter, Depends, Query

from app.database import get_store
from app.dependencies.auth import verify_api_key
from app.schemas.base import MessageResponse
from app.schemas.templates import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    VariableResponse,
)
from app.services.categories import CategoryService
from app.store import DocumentStore

router = APIRouter(prefix="/categories", tags=["categories"])
variables_router = APIRouter(prefix="/variables", tags=["variables"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(store: DocumentStore = Depends(get_store)):
    categories = await CategoryService(store).list_categories()
    return [CategoryResponse.model_validate(c) for c in categories]


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str, store: DocumentStore = Depends(get_store)):
    category = await CategoryService(store).get_category(category_id)
    return CategoryResponse.model_validate(category)


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=201,
    dependencies=[Depends(verify_api_key)],
)
async def create_category(data: CategoryCreate, store: DocumentStore = Depends(get_store)):
    category = await CategoryService(store).create_category(data)
    return CategoryResponse.model_validate(category)


@router.put(
    "/{category_id}", response_model=CategoryResponse, dependencies=[Depends(verify_api_key)]
)
async def update_category(
    category_id: str, data: CategoryUpdate, store: DocumentStore = Depends(get_store)
):
    category = await CategoryService(store).update_category(category_id, data)
    return CategoryResponse.model_validate(category)


@router.delete(
    "/{category_id}", response_model=MessageResponse, dependencies=[Depends(verify_api_key)]
)
async def delete_category(category_id: str, store: DocumentStore = Depends(get_store)):
    await CategoryService(store).delete_category(category_id)
    return MessageResponse(message="Category deleted successfully")


@variables_router.get("", response_model=list[VariableResponse])
async def list_variables(
    category: str | None = Query(None),
    store: DocumentStore = Depends(get_store),
):
    variables = await CategoryService(store).list_variables(category)
    return [VariableResponse.model_validate(v) for v in variables]
