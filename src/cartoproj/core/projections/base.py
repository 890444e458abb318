"""
Base class for projections.

A projection converts between geodetic longitude/latitude (degrees) and its
own grid coordinates. Each concrete projection implements forward() and
inverse() on plain floats; project() and unproject() apply them to Point
shapes, either in place or on a copy.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

from pyproj import CRS

from cartoproj.core.projections.registry import ProjectionRegistry, projection_registry
from cartoproj.models.shapes import Point
from cartoproj.models.spheroid import Spheroid

logger = logging.getLogger(__name__)

UNKNOWN_PROJECTION_NAME = "Unknown"


class Projection(ABC):
    """
    Abstract projection.

    Construction registers the projection name and caches every derived
    constant, so one instance can be reused for any number of transforms.
    Instances are not modified after construction.

    Attributes:
        r_major: Semi-major axis of the spheroid (meters)
        r_minor: Semi-minor axis of the spheroid (meters)
        radius: Radius of the mean sphere (meters)
        e, es, esp: Eccentricity, its square, and the second eccentricity squared
        e0, e1, e2, e3: Meridian distance series constants
        false_easting: Constant added to projected x
        false_northing: Constant added to projected y
        lat_origin: Latitude of origin (radians)
        lon_center: Central meridian (radians)
        ml0: Meridian distance at lat_origin (meters)
        scale_factor: Scale at the central meridian
        spherical: True when the spherical form of the equations applies
    """

    def __init__(self, name: str, registry: Optional[ProjectionRegistry] = None):
        """
        Initialize the projection and register its name.

        Args:
            name: Projection name ("Geographic", "HRAP", "UTM", ...)
            registry: Registry to assign the id from, defaults to the process-wide one
        """
        self._name = name
        self._registry = registry if registry is not None else projection_registry
        self._id = self._registry.register(name)
        self._datum = ""
        self._zone = 0
        self.spheroid: Optional[Spheroid] = None

        self.r_major = 0.0
        self.r_minor = 0.0
        self.radius = 0.0
        self.e = 0.0
        self.es = 0.0
        self.esp = 0.0
        self.e0 = 0.0
        self.e1 = 0.0
        self.e2 = 0.0
        self.e3 = 0.0
        self.false_easting = 0.0
        self.false_northing = 0.0
        self.lat_origin = 0.0
        self.lon_center = 0.0
        self.ml0 = 0.0
        self.scale_factor = 1.0
        self.spherical = False

    @property
    def name(self) -> str:
        """Projection name."""
        return self._name

    @property
    def id(self) -> int:
        """Registry id shared by every projection with the same name."""
        return self._id

    @property
    def datum(self) -> str:
        """Datum name, empty when the projection has none."""
        return self._datum

    @property
    def zone(self) -> int:
        """Zone number, 0 when the projection is not zoned."""
        return self._zone

    def _set_spheroid(self, datum: str, strict: Optional[bool] = None) -> None:
        """
        Set the datum and spheroid axes from a datum name.

        Args:
            datum: Datum name; unrecognized names fall back to NAD27 unless strict
            strict: Raise on an unrecognized datum, defaults to settings.strict_datum
        """
        spheroid = Spheroid.from_datum(datum, strict=strict)
        self.spheroid = spheroid
        self._datum = spheroid.datum
        self.r_major = spheroid.r_major
        self.r_minor = spheroid.r_minor
        self.radius = spheroid.radius

    @abstractmethod
    def forward(self, lon: float, lat: float) -> Tuple[float, float]:
        """
        Project geodetic coordinates.

        Args:
            lon: Longitude in decimal degrees
            lat: Latitude in decimal degrees

        Returns:
            Projected (x, y)
        """

    @abstractmethod
    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        """
        Un-project grid coordinates.

        Args:
            x: Projected x
            y: Projected y

        Returns:
            (longitude, latitude) in decimal degrees
        """

    def project(self, point: Point, reuse: bool = False) -> Point:
        """
        Project a longitude/latitude point to this projection.

        Args:
            point: Point holding longitude (x) and latitude (y)
            reuse: Overwrite the given point instead of returning a copy

        Returns:
            The projected point
        """
        x, y = self.forward(point.x, point.y)
        return _store(point, x, y, reuse)

    def unproject(self, point: Point, reuse: bool = False) -> Point:
        """
        Un-project a point in this projection to longitude/latitude.

        Args:
            point: Point in projected coordinates
            reuse: Overwrite the given point instead of returning a copy

        Returns:
            The point with longitude (x) and latitude (y)
        """
        lon, lat = self.inverse(point.x, point.y)
        return _store(point, lon, lat, reuse)

    def kilometers_per_unit(self, point: Point, reuse: bool = False) -> Point:
        """
        Estimate kilometers per projection unit at a location.

        Projections without a scale estimate return the point unchanged.

        Args:
            point: Location in projected units
            reuse: Overwrite the given point instead of returning a new one

        Returns:
            Point whose x and y hold the scale in each direction
        """
        return point if reuse else point.copy()

    def to_crs(self) -> Optional[CRS]:
        """Equivalent pyproj CRS, or None when PROJ has no definition for it."""
        return None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Projection):
            return NotImplemented
        return (
            self._datum.casefold() == other._datum.casefold()
            and self._name.casefold() == other._name.casefold()
            and self._zone == other._zone
        )

    def __hash__(self) -> int:
        return hash((self._name.casefold(), self._datum.casefold(), self._zone))

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name='{self._name}', id={self._id}, "
            f"datum='{self._datum}', zone={self._zone})"
        )


def _store(point: Point, x: float, y: float, reuse: bool) -> Point:
    target = point if reuse else point.copy()
    target.set_xy(x, y)
    return target


def projections_equal(a: Optional[Projection], b: Optional[Projection]) -> bool:
    """
    Compare two projections by datum, name (case-insensitive) and zone.

    Args:
        a: First projection
        b: Second projection

    Returns:
        True if both are given and equal
    """
    if a is None or b is None:
        return False
    return a == b


def need_to_project(a: Optional[Projection], b: Optional[Projection]) -> bool:
    """
    Decide whether data in projection a must be reprojected to show in b.

    Args:
        a: Source projection
        b: Destination projection

    Returns:
        False if either is missing or Unknown, or if they are equal; True otherwise
    """
    if a is None or b is None:
        return False
    unknown = UNKNOWN_PROJECTION_NAME.casefold()
    if a.name.casefold() == unknown or b.name.casefold() == unknown:
        return False
    if a == b:
        return False
    return True
