"""
Category Registry

Central registry of category handlers. The pipeline looks up the handler
for a requested category here and dispatches on it.
"""

import logging

from dosekit.categories.base import CategoryHandler
from dosekit.errors import UnsupportedCategoryError
from dosekit.models.samples import SampleCategory

logger = logging.getLogger(__name__)


class CategoryRegistry:
    """
    Registry of CategoryHandler values, one per SampleCategory.

    Usage:
        registry.register(INSULIN_HANDLER)
        handler = registry.get(SampleCategory.INSULIN)
    """

    def __init__(self) -> None:
        self._handlers: dict[SampleCategory, CategoryHandler] = {}

    def register(self, handler: CategoryHandler) -> None:
        """
        Register a handler.

        Raises:
            ValueError: If the category already has a handler
        """
        if handler.category in self._handlers:
            raise ValueError(
                f"Category '{handler.category.value}' already registered "
                f"for {self._handlers[handler.category].sample_type}"
            )
        self._handlers[handler.category] = handler
        logger.info(f"Registered category handler: {handler}")

    def unregister(self, category: SampleCategory) -> bool:
        """
        Remove the handler for a category.

        Returns:
            True if a handler was removed, False if none was registered
        """
        if category not in self._handlers:
            return False
        del self._handlers[category]
        logger.info(f"Unregistered category handler: {category.value}")
        return True

    def get(self, category: SampleCategory) -> CategoryHandler:
        """
        Get the handler for a category.

        Raises:
            UnsupportedCategoryError: If no handler is registered
        """
        handler = self._handlers.get(category)
        if handler is None:
            raise UnsupportedCategoryError(
                category.value, f"No handler registered for category '{category.value}'"
            )
        return handler

    def is_registered(self, category: SampleCategory) -> bool:
        return category in self._handlers

    def list_categories(self) -> list[SampleCategory]:
        return list(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)


category_registry = CategoryRegistry()


def register_all_categories(registry: CategoryRegistry | None = None) -> CategoryRegistry:
    """
    Register every built-in category handler that is not yet registered.

    Safe to call more than once. Call at application startup.

    Args:
        registry: Registry to populate (default: the global registry)

    Returns:
        The populated registry
    """
    from dosekit.categories.insulin import INSULIN_HANDLER

    target = category_registry if registry is None else registry

    for handler in (INSULIN_HANDLER,):
        if not target.is_registered(handler.category):
            target.register(handler)

    logger.info(f"Category registration complete: {len(target)} handler(s) available")
    return target
