"""Tests for the category handler registry."""

import pytest

from dosekit.categories.base import CategoryHandler
from dosekit.categories.filters import pass_through
from dosekit.categories.insulin import INSULIN_HANDLER
from dosekit.categories.registry import CategoryRegistry, register_all_categories
from dosekit.errors import UnsupportedCategoryError
from dosekit.models.samples import SampleCategory


@pytest.fixture
def carbs_handler():
    """A minimal handler for a second category."""
    return CategoryHandler(
        category=SampleCategory.CARBS,
        sample_type="HKQuantityTypeIdentifierDietaryCarbohydrates",
        filter_samples=pass_through,
        classify=lambda sample: "carbs",
        transformers={"carbs": lambda sample: {"type": "food"}},
    )


class TestCategoryRegistry:
    """Test handler registration and lookup."""

    @pytest.fixture
    def empty_registry(self):
        return CategoryRegistry()

    def test_register_and_get(self, empty_registry):
        empty_registry.register(INSULIN_HANDLER)

        assert empty_registry.get(SampleCategory.INSULIN) is INSULIN_HANDLER
        assert empty_registry.is_registered(SampleCategory.INSULIN)
        assert len(empty_registry) == 1

    def test_duplicate_registration_rejected(self, empty_registry):
        empty_registry.register(INSULIN_HANDLER)

        with pytest.raises(ValueError) as exc_info:
            empty_registry.register(INSULIN_HANDLER)

        assert "already registered" in str(exc_info.value)

    def test_get_unregistered_raises(self, empty_registry):
        with pytest.raises(UnsupportedCategoryError) as exc_info:
            empty_registry.get(SampleCategory.WORKOUT)

        assert exc_info.value.category == "workout"

    def test_unregister(self, empty_registry):
        empty_registry.register(INSULIN_HANDLER)

        assert empty_registry.unregister(SampleCategory.INSULIN) is True
        assert empty_registry.unregister(SampleCategory.INSULIN) is False
        assert not empty_registry.is_registered(SampleCategory.INSULIN)

    def test_list_categories(self, empty_registry, carbs_handler):
        empty_registry.register(INSULIN_HANDLER)
        empty_registry.register(carbs_handler)

        assert empty_registry.list_categories() == [
            SampleCategory.INSULIN,
            SampleCategory.CARBS,
        ]


class TestRegisterAllCategories:
    def test_registers_insulin(self):
        registry = register_all_categories(CategoryRegistry())
        assert registry.list_categories() == [SampleCategory.INSULIN]

    def test_safe_to_call_twice(self):
        registry = CategoryRegistry()

        register_all_categories(registry)
        register_all_categories(registry)

        assert len(registry) == 1


class TestCategoryHandler:
    """Test dispatch through a handler value."""

    def test_dispatch_on_classification(self, make_sample):
        bolus = INSULIN_HANDLER.transform(make_sample(4.0, reason=2))
        assert bolus["type"] == "bolus"

    def test_custom_handler_dispatch(self, make_sample, carbs_handler):
        assert carbs_handler.transform(make_sample()) == {"type": "food"}

    def test_insulin_consumed_keys(self):
        assert "HKInsulinDeliveryReason" in INSULIN_HANDLER.consumed_metadata_keys
