import uuid
from typing import Any

from app.errors import ValidationError
from app.models.base import utc_now

__all__ = ["utc_now", "new_id", "build_changes"]


def new_id() -> str:
    return str(uuid.uuid4())


def build_changes(data: dict[str, Any], key_field: str) -> dict[str, Any]:
    """Turn a request payload into a partial update.

    Drops the primary key and null values. Raises ValidationError when nothing
    is left to write.
    """
    changes = {k: v for k, v in data.items() if k != key_field and v is not None}
    if not changes:
        raise ValidationError("No valid attributes to update")
    changes["updated_at"] = utc_now()
    return changes
