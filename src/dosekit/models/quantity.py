"""Physical quantities carried by raw samples and their metadata."""

from pydantic import BaseModel, ConfigDict, Field

from dosekit.constants import UNIT_TABLE
from dosekit.errors import IncompatibleUnitError


class Quantity(BaseModel):
    """
    A numeric value paired with its unit.

    Units listed in UNIT_TABLE convert within their dimension (amount or
    rate). Unlisted units are only compatible with the identical unit string.
    """

    model_config = ConfigDict(frozen=True)

    value: float = Field(description="Numeric value")
    unit: str = Field(min_length=1, description="Unit string (e.g., 'IU', 'IU/hr')")

    def is_compatible_with(self, unit: str) -> bool:
        """Check whether this quantity can be expressed in the given unit."""
        if unit == self.unit:
            return True
        own = UNIT_TABLE.get(self.unit)
        other = UNIT_TABLE.get(unit)
        if own is None or other is None:
            return False
        return own[0] == other[0]

    def value_in(self, unit: str) -> float:
        """
        Convert the value to the given unit.

        Args:
            unit: Target unit string

        Returns:
            Value expressed in the target unit

        Raises:
            IncompatibleUnitError: If the units do not share a dimension
        """
        if unit == self.unit:
            return self.value
        if not self.is_compatible_with(unit):
            raise IncompatibleUnitError(self.unit, unit)
        own_factor = UNIT_TABLE[self.unit][1]
        target_factor = UNIT_TABLE[unit][1]
        return self.value * own_factor / target_factor

    def __str__(self) -> str:
        return f"{self.value} {self.unit}"
