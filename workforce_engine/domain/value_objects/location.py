"""
Location value objects and great-circle distance.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

EARTH_RADIUS_KM = 6371.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two points given in degrees."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    # rounding can push a just outside [0, 1] for near-antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair, optionally time-stamped."""

    latitude: float
    longitude: float
    recorded_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate coordinates."""
        if not -90 <= self.latitude <= 90:
            raise ValueError("Latitude must be between -90 and 90")
        if not -180 <= self.longitude <= 180:
            raise ValueError("Longitude must be between -180 and 180")

    def distance_to(self, latitude: float, longitude: float) -> float:
        """Distance in kilometres to the given coordinates."""
        return haversine_distance(self.latitude, self.longitude, latitude, longitude)


@dataclass(frozen=True)
class Location:
    """Job site or customer address value object."""

    address: str
    city: str
    state: str
    zip_code: str
    latitude: float
    longitude: float
    landmark: Optional[str] = None
    access_instructions: Optional[str] = None

    def __post_init__(self):
        """Validate coordinates."""
        if not -90 <= self.latitude <= 90:
            raise ValueError("Latitude must be between -90 and 90")
        if not -180 <= self.longitude <= 180:
            raise ValueError("Longitude must be between -180 and 180")

    @property
    def full_address(self) -> str:
        """Get formatted full address."""
        return f"{self.address}, {self.city}, {self.state} {self.zip_code}"

    def distance_to(self, latitude: float, longitude: float) -> float:
        """Distance in kilometres to the given coordinates."""
        return haversine_distance(self.latitude, self.longitude, latitude, longitude)
