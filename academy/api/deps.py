# academy/api/deps.py
from typing import Dict
from fastapi import HTTPException
from academy.database import SessionLocal
from academy.storage import SqlStorage, Storage

_store = SqlStorage(SessionLocal)


def get_store() -> Storage:
    """Dependency returning the shared storage; tests override it."""
    return _store


def ensure_valid(errors: Dict[str, str]) -> None:
    """Turns field-level validation messages into a 422 response."""
    if errors:
        raise HTTPException(
            status_code=422,
            detail={"errors": errors},
        )
