import logging
import time

from app.errors import ConflictError, NotFoundError, ValidationError
from app.schemas.templates import TemplateCreate, TemplateUpdate
from app.services.categories import CategoryService
from app.services.records import build_changes, utc_now
from app.store import ConditionalCheckFailedError, DocumentStore

logger = logging.getLogger(__name__)

TABLE = "templates"


def normalize_event_type(event_type: str) -> str:
    return event_type.strip().lower()


class TemplateService:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store
        self.categories = CategoryService(store)

    async def get_template(self, template_id: str) -> dict:
        template = await self.store.get(TABLE, template_id)
        if template is None:
            raise NotFoundError(f"Template with ID {template_id} not found")
        return template

    async def list_templates(
        self, category_id: str | None = None, event_type: str | None = None
    ) -> list[dict]:
        if category_id:
            templates = await self.store.query(TABLE, "category_id", category_id)
            if event_type:
                wanted = normalize_event_type(event_type)
                templates = [t for t in templates if t["event_type"] == wanted]
            return templates
        if event_type:
            return await self.templates_for_event_type(event_type)
        return await self.store.scan(TABLE)

    async def templates_for_event_type(self, event_type: str) -> list[dict]:
        return await self.store.query(TABLE, "event_type", normalize_event_type(event_type))

    async def create_template(self, data: TemplateCreate) -> dict:
        if not data.category_id:
            raise ValidationError("Category ID is required")
        if not data.event_type:
            raise ValidationError("Event type is required")
        if not data.text:
            raise ValidationError("Template text is required")
        await self.categories.require_category(data.category_id)

        now = utc_now()
        template = {
            **data.model_dump(exclude_none=True),
            "template_id": data.template_id or f"{data.category_id}-{int(time.time() * 1000)}",
            "event_type": normalize_event_type(data.event_type),
            "is_default": False,
            "created_at": now,
            "updated_at": now,
        }
        try:
            created = await self.store.put(TABLE, template, if_not_exists=True)
        except ConditionalCheckFailedError:
            raise ConflictError(
                f"Template with ID {template['template_id']} already exists"
            ) from None
        logger.info(
            "Created template %s in category %s", created["template_id"], created["category_id"]
        )

        if data.is_default:
            await self.set_default_template(created["template_id"])
            created = await self.get_template(created["template_id"])
        return created

    async def update_template(self, template_id: str, data: TemplateUpdate) -> dict:
        existing = await self.get_template(template_id)
        payload = data.model_dump(exclude_unset=True)
        if data.category_id:
            await self.categories.require_category(data.category_id)
        if data.event_type:
            payload["event_type"] = normalize_event_type(data.event_type)

        # Setting the default goes through the category-wide reassignment
        make_default = payload.pop("is_default", None)
        moved = bool(data.category_id) and data.category_id != existing["category_id"]
        if make_default is None and moved and existing.get("is_default"):
            # A default carried into another category takes over there
            make_default = True
        if make_default:
            if any(v is not None for v in payload.values()):
                await self.store.update(TABLE, template_id, build_changes(payload, "template_id"))
            await self.set_default_template(template_id)
            return await self.get_template(template_id)
        if make_default is False:
            payload["is_default"] = False

        changes = build_changes(payload, "template_id")
        return await self.store.update(TABLE, template_id, changes)

    async def delete_template(self, template_id: str) -> None:
        await self.get_template(template_id)
        await self.store.delete(TABLE, template_id)
        logger.info("Deleted template %s", template_id)

    async def set_default_template(self, template_id: str) -> dict:
        """Make ``template_id`` the only default in its category.

        Each sibling is updated independently. A failure part way through
        leaves earlier updates in place, and concurrent calls for the same
        category resolve per item with the last write winning.
        """
        template = await self.get_template(template_id)
        category_id = template["category_id"]

        siblings = await self.store.query(TABLE, "category_id", category_id)
        now = utc_now()
        for item in siblings:
            is_target = item["template_id"] == template_id
            if not is_target and not item.get("is_default"):
                continue
            await self.store.update(
                TABLE, item["template_id"], {"is_default": is_target, "updated_at": now}
            )

        logger.info("Template %s set as default for category %s", template_id, category_id)
        return {"message": f"Template {template_id} set as default for category {category_id}"}
