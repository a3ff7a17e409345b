"""Alias assignment service.

Binds a URL to either the alias the caller asked for or a freshly generated
one. The store decides whether an alias is free: every attempt is a single
``save_url`` call, and a collision comes back as ``AliasExistsError``.
Nothing here looks an alias up before trying to claim it.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from starlette.concurrency import run_in_threadpool

from ..core.errors import (
    AliasExistsError,
    AliasSpaceExhaustedError,
    AliasTakenError,
    AssignmentCancelledError,
    StorageError,
    StorageFailureError,
)
from ..core.storage import URLSaver
from ..utils.shortener import generate_alias

logger = logging.getLogger(__name__)

DEFAULT_ALIAS_LENGTH = 6
DEFAULT_MAX_RETRIES = 5


@dataclass(frozen=True)
class Assignment:
    """A URL successfully bound to an alias."""

    alias: str
    id: int


class AliasAssigner:
    """Assign aliases to URLs."""

    def __init__(
        self,
        store: URLSaver,
        alias_length: int = DEFAULT_ALIAS_LENGTH,
        max_retries: int = DEFAULT_MAX_RETRIES,
        generator: Callable[[int], str] = generate_alias,
    ):
        """Initialize the assigner.

        Args:
            store: Store that atomically claims aliases.
            alias_length: Length of generated aliases.
            max_retries: Generated candidates to try before giving up.
            generator: Produces a candidate of the given length.
        """
        if alias_length <= 0:
            raise ValueError("alias_length must be positive")
        if max_retries <= 0:
            raise ValueError("max_retries must be positive")
        self.store = store
        self.alias_length = alias_length
        self.max_retries = max_retries
        self.generator = generator

    async def assign(
        self,
        url: str,
        alias: Optional[str] = "",
        is_cancelled: Optional[Callable[[], Awaitable[bool]]] = None,
    ) -> Assignment:
        """Bind ``url`` to an alias.

        Args:
            url: Target URL, already validated.
            alias: Alias requested by the caller. Empty means generate one.
            is_cancelled: Polled between generated attempts; when it returns
                True no further saves are issued.

        Returns:
            The bound alias and the id the store assigned.

        Raises:
            AliasTakenError: The requested alias is already bound.
            AliasSpaceExhaustedError: Every generated candidate collided.
            AssignmentCancelledError: The caller went away mid-retry.
            StorageFailureError: The store failed for another reason.
        """
        if alias:
            return await self._assign_requested(url, alias)
        return await self._assign_generated(url, is_cancelled)

    async def _assign_requested(self, url: str, alias: str) -> Assignment:
        try:
            link_id = await run_in_threadpool(self.store.save_url, url, alias)
        except AliasExistsError as e:
            logger.info(f"Requested alias already exists: {alias}")
            raise AliasTakenError(
                f"Alias '{alias}' already exists", alias=alias
            ) from e
        except StorageError as e:
            logger.error(f"Failed to save url for alias {alias}: {e}")
            raise StorageFailureError("Failed to save url", alias=alias) from e

        logger.info(f"URL added: alias={alias} id={link_id}")
        return Assignment(alias=alias, id=link_id)

    async def _assign_generated(
        self,
        url: str,
        is_cancelled: Optional[Callable[[], Awaitable[bool]]],
    ) -> Assignment:
        for attempt in range(1, self.max_retries + 1):
            if attempt > 1 and is_cancelled is not None and await is_cancelled():
                logger.info(f"Assignment cancelled before attempt {attempt}")
                raise AssignmentCancelledError("Request cancelled")

            candidate = self.generator(self.alias_length)
            try:
                link_id = await run_in_threadpool(
                    self.store.save_url, url, candidate
                )
            except AliasExistsError:
                logger.info(
                    f"Alias collision, retrying: alias={candidate} "
                    f"attempt={attempt}/{self.max_retries}"
                )
                continue
            except StorageError as e:
                logger.error(f"Failed to save url: {e}")
                raise StorageFailureError("Failed to save url") from e

            logger.info(f"URL added: alias={candidate} id={link_id}")
            return Assignment(alias=candidate, id=link_id)

        logger.error(
            f"Failed to generate unique alias after {self.max_retries} attempts"
        )
        raise AliasSpaceExhaustedError(
            "Failed to generate unique alias", attempts=self.max_retries
        )
