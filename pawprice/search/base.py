"""Places provider interface."""

from abc import ABC, abstractmethod

from pawprice.core.distance import Coordinate
from pawprice.search.models import PlaceResult

# Words that mark a business as pet care when found in its name or categories
PET_CARE_KEYWORDS = (
    "groom",
    "pet",
    "dog",
    "cat",
    "animal",
    "paw",
    "vet",
    "kennel",
    "puppy",
    "kitty",
)


class PlacesProvider(ABC):
    """Finds pet-care businesses around a coordinate.

    Implementations raise ``PlacesProviderError`` on transport or API
    failures and return an empty list when the area simply has no matches.
    """

    name: str = "places"

    @property
    def configured(self) -> bool:
        """Whether the provider has the credentials it needs."""
        return True

    @abstractmethod
    async def nearby(
        self, center: Coordinate, radius_miles: float, pet_type: str
    ) -> list[PlaceResult]:
        """Search for groomers within ``radius_miles`` of ``center``."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
