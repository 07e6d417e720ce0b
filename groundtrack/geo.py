"""Geographic placement of simulated ground tracks.

Tracks are integrated on a local flat-earth plane in nautical miles east and
north of the start point. This module anchors such a track at a real start
position by a geodesic forward calculation on the WGS84 ellipsoid, so a map
layer can draw it.

The local plane is only accurate for distances a single turn covers (a few
NM); no attempt is made to correct the flat-earth integration itself.
"""

from dataclasses import dataclass
from math import atan2, hypot
from typing import List

from pyproj import Geod

from .models import TrackPoint
from .unit import Angle, Degree, Length, Meter, NauticalMile, Radian

# WGS84 geodesic calculator
_WGS84 = Geod(ellps="WGS84")


class Latitude(Degree):
    """Latitude in degrees, positive north."""


class Longitude(Degree):
    """Longitude in degrees, positive east."""


@dataclass
class GeoPoint:
    """A WGS84 position.

    Attributes:
        latitude (Latitude): Latitude, stored in radians like every angle unit.
        longitude (Longitude): Longitude, stored in radians.

    Example:
        >>> start = GeoPoint.from_deg(37.5665, 126.9780)
        >>> start.forward(Degree(0), NauticalMile(1)).to_deg()  # (37.583..., 126.978)
    """

    latitude: Latitude
    longitude: Longitude

    @classmethod
    def from_deg(cls, lat: float, lon: float) -> "GeoPoint":
        """Create a GeoPoint from decimal degrees."""
        return cls(Latitude(lat), Longitude(lon))

    def to_deg(self) -> tuple[float, float]:
        """(latitude, longitude) in decimal degrees."""
        return self.latitude.to(Degree), self.longitude.to(Degree)

    def distance_to(self, other: "GeoPoint") -> Meter:
        """Geodesic distance to ``other`` on the WGS84 ellipsoid."""
        _az12, _az21, dist = _WGS84.inv(
            float(self.longitude),
            float(self.latitude),
            float(other.longitude),
            float(other.latitude),
            radians=True,
        )
        return Meter(dist)

    def forward(self, azimuth: Angle, distance: Length) -> "GeoPoint":
        """
        Point reached travelling ``distance`` along ``azimuth`` from here.

        Args:
            azimuth: Bearing from true north, clockwise
            distance: Distance along the geodesic

        Returns:
            New GeoPoint; this one is unchanged
        """
        lon, lat, _back_az = _WGS84.fwd(
            float(self.longitude),
            float(self.latitude),
            float(azimuth),
            float(distance),
            radians=True,
        )
        return GeoPoint(latitude=Latitude.from_si(lat), longitude=Longitude.from_si(lon))


def track_to_geopoints(track: List[TrackPoint], origin: GeoPoint) -> List[GeoPoint]:
    """
    Place every track point relative to ``origin``.

    Each point is reached by one geodesic from the origin along the bearing
    and distance of its local east/north offset.

    Args:
        track: Simulated track with positions in NM from the start
        origin: Geographic position of the start of the track

    Returns:
        One GeoPoint per track point
    """
    points = []
    for point in track:
        distance = hypot(point.x, point.y)
        if distance == 0:
            points.append(GeoPoint(origin.latitude, origin.longitude))
            continue
        bearing = Radian(atan2(point.x, point.y))
        points.append(origin.forward(bearing, NauticalMile(distance)))
    return points
