"""Per-category filter, classify and transform handlers."""

from dosekit.categories.base import CategoryHandler
from dosekit.categories.registry import (
    CategoryRegistry,
    category_registry,
    register_all_categories,
)

__all__ = [
    "CategoryHandler",
    "CategoryRegistry",
    "category_registry",
    "register_all_categories",
]
