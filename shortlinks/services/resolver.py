"""Resolve aliases back to their URLs."""

import logging

from starlette.concurrency import run_in_threadpool

from ..core.errors import (
    AliasNotFoundError,
    LinkNotFoundError,
    StorageError,
    StorageFailureError,
)
from ..core.storage import URLGetter

logger = logging.getLogger(__name__)


class LinkResolver:
    """Look up the URL bound to an alias."""

    def __init__(self, store: URLGetter):
        self.store = store

    async def resolve(self, alias: str) -> str:
        """Return the URL bound to ``alias``.

        Raises:
            LinkNotFoundError: Nothing is bound to the alias.
            StorageFailureError: The store failed.
        """
        try:
            url = await run_in_threadpool(self.store.get_url, alias)
        except AliasNotFoundError as e:
            logger.info(f"Alias not found: {alias}")
            raise LinkNotFoundError("Short URL not found", alias=alias) from e
        except StorageError as e:
            logger.error(f"Failed to get url for alias {alias}: {e}")
            raise StorageFailureError("Failed to get url", alias=alias) from e

        logger.debug(f"Resolved alias {alias} -> {url}")
        return url
