from datetime import datetime

from app.schemas.base import ApiModel


class TemplateCreate(ApiModel):
    template_id: str | None = None
    category_id: str | None = None
    event_type: str | None = None
    name: str | None = None
    text: str | None = None
    description: str | None = None
    is_default: bool | None = None


class TemplateUpdate(ApiModel):
    category_id: str | None = None
    event_type: str | None = None
    name: str | None = None
    text: str | None = None
    description: str | None = None
    is_default: bool | None = None


class TemplateResponse(ApiModel):
    template_id: str
    category_id: str
    event_type: str
    name: str | None = None
    text: str
    description: str | None = None
    is_default: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CategoryCreate(ApiModel):
    category_id: str | None = None
    name: str | None = None
    description: str | None = None
    display_order: int | None = None


class CategoryUpdate(ApiModel):
    name: str | None = None
    description: str | None = None
    display_order: int | None = None


class CategoryResponse(ApiModel):
    category_id: str
    name: str
    description: str | None = None
    display_order: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VariableResponse(ApiModel):
    variable_name: str
    category: str
    description: str | None = None
    example: str | None = None
