import logging

from app.errors import ConflictError, NotFoundError, ReferenceNotFoundError, ValidationError
from app.schemas.templates import CategoryCreate, CategoryUpdate
from app.services.records import build_changes, new_id, utc_now
from app.store import ConditionalCheckFailedError, DocumentStore

logger = logging.getLogger(__name__)

TABLE = "template_categories"
VARIABLES_TABLE = "template_variables"


class CategoryService:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def get_category(self, category_id: str) -> dict:
        category = await self.store.get(TABLE, category_id)
        if category is None:
            raise NotFoundError(f"Category with ID {category_id} not found")
        return category

    async def require_category(self, category_id: str) -> dict:
        category = await self.store.get(TABLE, category_id)
        if category is None:
            raise ReferenceNotFoundError(f"Category with ID {category_id} not found")
        return category

    async def list_categories(self) -> list[dict]:
        categories = await self.store.scan(TABLE)
        return sorted(
            categories,
            key=lambda c: (c.get("display_order") is None, c.get("display_order") or 0, c["name"]),
        )

    async def create_category(self, data: CategoryCreate) -> dict:
        if not data.name:
            raise ValidationError("Category name is required")

        now = utc_now()
        category = {
            **data.model_dump(exclude_none=True),
            "category_id": data.category_id or new_id(),
            "created_at": now,
            "updated_at": now,
        }
        try:
            created = await self.store.put(TABLE, category, if_not_exists=True)
        except ConditionalCheckFailedError:
            raise ConflictError(
                f"Category with ID {category['category_id']} already exists"
            ) from None
        logger.info("Created template category %s", created["category_id"])
        return created

    async def update_category(self, category_id: str, data: CategoryUpdate) -> dict:
        await self.get_category(category_id)
        changes = build_changes(data.model_dump(exclude_unset=True), "category_id")
        return await self.store.update(TABLE, category_id, changes)

    async def delete_category(self, category_id: str) -> None:
        await self.get_category(category_id)
        await self.store.delete(TABLE, category_id)
        logger.info("Deleted template category %s", category_id)

    async def list_variables(self, category: str | None = None) -> list[dict]:
        """Substitution keys documented for template authors."""
        if category:
            return await self.store.query(VARIABLES_TABLE, "category", category)
        return await self.store.scan(VARIABLES_TABLE)
