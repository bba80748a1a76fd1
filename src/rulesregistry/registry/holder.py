"""Reference holder for swapping in a rebuilt registry."""

import logging
from typing import Callable

from .registry import ContentRegistry

logger = logging.getLogger(__name__)


class RegistryHolder:
    """Holds the live registry and replaces it wholesale on reload.

    Readers take ``holder.current`` once per request and keep using that
    instance; a reload builds the replacement first and only then rebinds
    the single attribute, so readers never see a half-built registry.
    """

    def __init__(self, registry: ContentRegistry):
        self._current = registry

    @property
    def current(self) -> ContentRegistry:
        return self._current

    def swap(self, registry: ContentRegistry) -> ContentRegistry:
        """Replace the live registry, returning the previous one."""
        previous = self._current
        self._current = registry
        logger.info(f"Swapped registry: {len(previous)} -> {len(registry)} records")
        return previous

    def reload(self, factory: Callable[[], ContentRegistry]) -> ContentRegistry:
        """Build a new registry with the factory and swap it in.

        If the factory raises, the live registry is left untouched and the
        error propagates.
        """
        registry = factory()
        self.swap(registry)
        return registry
