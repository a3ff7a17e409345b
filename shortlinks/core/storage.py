"""Storage contracts consumed by the link services.

A store is the only owner of persisted links and the only arbiter of alias
uniqueness. ``save_url`` must claim the alias and insert the row in one
atomic step: of any number of concurrent saves for the same alias, at most
one succeeds and the rest raise ``AliasExistsError``.
"""

from typing import Protocol, runtime_checkable


class URLSaver(Protocol):
    """Binds a URL to an alias."""

    def save_url(self, url: str, alias: str) -> int:
        """Persist the binding and return its id.

        Raises:
            AliasExistsError: The alias is already bound.
            StorageError: Any other failure.
        """
        ...


class URLGetter(Protocol):
    """Looks up the URL bound to an alias."""

    def get_url(self, alias: str) -> str:
        """Return the bound URL.

        Raises:
            AliasNotFoundError: Nothing is bound to the alias.
            StorageError: Any other failure.
        """
        ...


@runtime_checkable
class URLStore(URLSaver, URLGetter, Protocol):
    """Full store contract the API dependency providers are typed against."""
