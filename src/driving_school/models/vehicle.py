"""Vehicle record."""

from typing import Literal, TypedDict

from .people import Category


VehicleStatus = Literal["available", "maintenance", "unavailable"]
FuelType = Literal["gasoline", "ethanol", "diesel", "flex"]
Transmission = Literal["manual", "automatic"]


class VehicleData(TypedDict, total=False):
    """
    Vehicle record.

    Examples:
        >>> vehicle: VehicleData = {
        ...     "id": "vehicle_1",
        ...     "brand": "Volkswagen",
        ...     "model": "Gol",
        ...     "year": 2022,
        ...     "plate": "ABC-1234",
        ...     "category": "B",
        ...     "status": "available",
        ...     "fuel_type": "flex",
        ...     "transmission": "manual",
        ...     "color": "Branco",
        ... }
    """

    id: str
    brand: str
    model: str
    year: int
    plate: str
    category: Category
    status: VehicleStatus
    fuel_type: FuelType
    transmission: Transmission
    color: str
