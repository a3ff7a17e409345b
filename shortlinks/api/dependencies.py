"""Dependency providers for API routes."""

from fastapi import Depends

from ..core.config import Settings, get_settings
from ..core.database import get_db
from ..core.storage import URLStore
from ..services import AliasAssigner, LinkResolver


def get_assigner(
    store: URLStore = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AliasAssigner:
    """Build an assigner bound to the current store and settings."""
    return AliasAssigner(
        store,
        alias_length=settings.alias_length,
        max_retries=settings.max_retries,
    )


def get_resolver(store: URLStore = Depends(get_db)) -> LinkResolver:
    """Build a resolver bound to the current store."""
    return LinkResolver(store)
