# academy/crud/collection_crud.py
"""Helpers shared by the entity repositories: load/save a typed collection."""
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel

from academy.storage import Storage

ModelT = TypeVar("ModelT", bound=BaseModel)


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def load_collection(store: Storage, key: str, schema: Type[ModelT]) -> List[ModelT]:
    return [schema.model_validate(record) for record in store.load(key)]


def save_collection(store: Storage, key: str, items: List[BaseModel]) -> None:
    store.save(key, [item.model_dump(mode="json", by_alias=True) for item in items])


def find_index(items: List[ModelT], item_id: str) -> Optional[int]:
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    return None


def apply_update(item: ModelT, update: BaseModel) -> ModelT:
    """
    Returns a copy of `item` with the fields explicitly set on `update`.
    Fields sent as None are ignored.
    """
    update_data = {
        key: value
        for key, value in update.model_dump(exclude_unset=True).items()
        if value is not None
    }
    return item.model_copy(update=update_data)
