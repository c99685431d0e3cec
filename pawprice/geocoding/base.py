"""Geocoder interface."""

from abc import ABC, abstractmethod

from pawprice.core.distance import GeocodedLocation


class Geocoder(ABC):
    """Resolves free text to a coordinate and canonical address.

    Implementations make exactly one provider request per call and never
    retry. They raise ``LocationNotFoundError`` when the provider has no
    match and ``GeocodingProviderError`` for every other failure.
    """

    name: str = "geocoder"

    @abstractmethod
    async def geocode(self, location: str) -> GeocodedLocation:
        """Geocode ``location``."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
