"""
Universal Transverse Mercator (UTM) projection.

Forward and inverse equations follow the GCTP tmfor/tminv routines
(Snyder, Map Projections - A Working Manual, USGS PP 1395): a truncated
power series for the ellipsoid, and closed-form equations when the
spheroid is effectively a sphere (es < 1e-5).

Descriptor format:
    UTM,zone[,datum,false_easting,false_northing,central_longitude,origin_latitude,scale]

Empty or non-numeric optional tokens use the defaults: datum NAD83, false
easting 500000, false northing 0 (10000000 for a negative, southern zone),
central longitude 6*|zone| - 183, origin latitude 0, scale 0.9996.
"""

import logging
import math
from typing import List, NamedTuple, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator
from pyproj import CRS

from cartoproj.core.config import settings
from cartoproj.core.errors import (
    InvalidZoneError,
    ProjectionConfigurationError,
    ProjectionConvergenceError,
)
from cartoproj.core.projections.base import Projection
from cartoproj.core.projections.gctp import (
    D2R,
    HALF_PI,
    R2D,
    adjust_longitude,
    asinz,
    e0fn,
    e1fn,
    e2fn,
    e3fn,
    mlfn,
    sign,
)
from cartoproj.core.projections.registry import ProjectionRegistry

logger = logging.getLogger(__name__)

DEFAULT_DATUM = "NAD83"
DEFAULT_FALSE_EASTING = 500000.0
SOUTHERN_FALSE_NORTHING = 10000000.0
DEFAULT_SCALE_FACTOR = 0.9996

# Below this eccentricity squared the spherical equations are used
SPHERICAL_ES_LIMIT = 0.00001


class UTMParameters(BaseModel):
    """
    Validated UTM construction parameters.

    Attributes:
        zone: Zone number, negative for the southern hemisphere
        datum: Datum name
        false_easting: False easting in meters
        false_northing: False northing in meters, None for the zone default
        central_longitude: Central meridian in degrees, None for the zone default
        origin_latitude: Latitude of origin in degrees
        scale_factor: Scale at the central meridian
    """

    zone: int
    datum: str = DEFAULT_DATUM
    false_easting: float = DEFAULT_FALSE_EASTING
    false_northing: Optional[float] = None
    central_longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    origin_latitude: float = Field(default=0.0, ge=-90, le=90)
    scale_factor: float = Field(default=DEFAULT_SCALE_FACTOR, gt=0)

    @field_validator("zone")
    @classmethod
    def validate_zone(cls, v: int) -> int:
        """Zone magnitude must be 1..60."""
        if not 1 <= abs(v) <= 60:
            raise ValueError(f"UTM zone must be between 1 and 60, got {v}")
        return v

    @property
    def is_southern(self) -> bool:
        return self.zone < 0

    def resolved_false_northing(self) -> float:
        if self.false_northing is not None:
            return self.false_northing
        return SOUTHERN_FALSE_NORTHING if self.is_southern else 0.0

    def resolved_central_longitude(self) -> float:
        if self.central_longitude is not None:
            return self.central_longitude
        return float((6 * abs(self.zone)) - 183)


class FootpointResult(NamedTuple):
    """Outcome of the footpoint latitude iteration."""

    phi: float
    converged: bool
    iterations: int


def footpoint_latitude(
    con: float,
    e0: float,
    e1: float,
    e2: float,
    e3: float,
    max_iterations: int = 6,
    tolerance: float = 1.0e-10,
) -> FootpointResult:
    """
    Solve for the footpoint latitude by fixed-point iteration.

    Iterates phi = (con + e1*sin(2phi) - e2*sin(4phi) + e3*sin(6phi)) / e0
    starting from phi = con.

    Args:
        con: Rectifying latitude (meridian distance / semi-major axis)
        e0, e1, e2, e3: Meridian distance series constants
        max_iterations: Maximum number of steps
        tolerance: Step size in radians that counts as converged

    Returns:
        FootpointResult with the last estimate and whether it converged
    """
    phi = con
    for i in range(1, max_iterations + 1):
        delta_phi = (
            (con + e1 * math.sin(2.0 * phi) - e2 * math.sin(4.0 * phi) + e3 * math.sin(6.0 * phi))
            / e0
        ) - phi
        phi += delta_phi
        if abs(delta_phi) <= tolerance:
            return FootpointResult(phi, True, i)
    return FootpointResult(phi, False, max_iterations)


def central_meridian(zone: int) -> float:
    """
    Central meridian of a UTM zone in degrees.

    Args:
        zone: Zone number (sign ignored)

    Raises:
        InvalidZoneError: If the zone magnitude is outside 1..60
    """
    if isinstance(zone, bool) or not 1 <= abs(zone) <= 60:
        raise InvalidZoneError(zone)
    return float((6 * abs(zone)) - 183)


class UTMProjection(Projection):
    """
    Universal Transverse Mercator projection for one zone.

    Attributes:
        strict_convergence: Raise ProjectionConvergenceError when the inverse
            does not converge; otherwise return (0, 0)
        max_iterations: Footpoint iteration cap
        tolerance: Footpoint convergence tolerance (radians)
    """

    def __init__(
        self,
        zone: int,
        datum: str = DEFAULT_DATUM,
        false_easting: Optional[float] = None,
        false_northing: Optional[float] = None,
        central_longitude: Optional[float] = None,
        origin_latitude: Optional[float] = None,
        scale_factor: Optional[float] = None,
        strict_datum: Optional[bool] = None,
        strict_convergence: Optional[bool] = None,
        max_iterations: Optional[int] = None,
        tolerance: Optional[float] = None,
        registry: Optional[ProjectionRegistry] = None,
    ):
        """
        Initialize a UTM projection.

        Args:
            zone: Zone number 1..60, negative for the southern hemisphere
            datum: Datum name ("NAD83", "NAD27" or "Sphere")
            false_easting: False easting in meters (default 500000)
            false_northing: False northing in meters (default by hemisphere)
            central_longitude: Central meridian in degrees (default from zone)
            origin_latitude: Latitude of origin in degrees (default 0)
            scale_factor: Central meridian scale (default 0.9996)
            strict_datum: Raise on unrecognized datum, defaults to settings
            strict_convergence: Raise on inverse non-convergence, defaults to settings
            max_iterations: Footpoint iteration cap, defaults to settings
            tolerance: Footpoint tolerance in radians, defaults to settings
            registry: Registry for the projection id

        Raises:
            InvalidZoneError: If the zone magnitude is outside 1..60
            ProjectionConfigurationError: If another parameter is invalid
        """
        if isinstance(zone, bool) or not isinstance(zone, int) or not 1 <= abs(zone) <= 60:
            raise InvalidZoneError(zone)

        try:
            params = UTMParameters(
                zone=zone,
                datum=datum or DEFAULT_DATUM,
                false_easting=DEFAULT_FALSE_EASTING if false_easting is None else false_easting,
                false_northing=false_northing,
                central_longitude=central_longitude,
                origin_latitude=0.0 if origin_latitude is None else origin_latitude,
                scale_factor=DEFAULT_SCALE_FACTOR if scale_factor is None else scale_factor,
            )
        except ValidationError as e:
            raise ProjectionConfigurationError(
                f"Invalid UTM parameters: {e}",
                details={"zone": zone},
            ) from e

        super().__init__("UTM", registry)
        self.parameters = params
        self._zone = params.zone
        self._set_spheroid(params.datum, strict=strict_datum)

        self.false_easting = params.false_easting
        self.false_northing = params.resolved_false_northing()
        self.lon_center = params.resolved_central_longitude() * D2R
        self.lat_origin = params.origin_latitude * D2R
        self.scale_factor = params.scale_factor

        temp = self.r_minor / self.r_major
        self.es = 1.0 - temp * temp
        self.e = math.sqrt(self.es)
        self.e0 = e0fn(self.es)
        self.e1 = e1fn(self.es)
        self.e2 = e2fn(self.es)
        self.e3 = e3fn(self.es)
        self.ml0 = self.r_major * mlfn(self.e0, self.e1, self.e2, self.e3, self.lat_origin)
        self.esp = self.es / (1.0 - self.es)
        self.spherical = self.es < SPHERICAL_ES_LIMIT

        self.strict_convergence = (
            settings.strict_convergence if strict_convergence is None else strict_convergence
        )
        self.max_iterations = settings.utm_max_iterations if max_iterations is None else max_iterations
        self.tolerance = settings.utm_convergence_tolerance if tolerance is None else tolerance

    @property
    def central_longitude(self) -> float:
        """Central meridian in degrees."""
        return self.lon_center * R2D

    @classmethod
    def parse(cls, descriptor: str, **kwargs) -> "UTMProjection":
        """
        Build a UTM projection from a comma-separated descriptor.

        Args:
            descriptor: e.g. "UTM,13" or "UTM,19,NAD83,500000.0,0.0,,,.9996"
            **kwargs: Extra constructor arguments (strictness, registry)

        Returns:
            UTMProjection for the descriptor

        Raises:
            ProjectionConfigurationError: If fewer than 2 tokens are given
            InvalidZoneError: If the zone is not an integer in 1..60 (by magnitude)
        """
        tokens = [token.strip() for token in descriptor.split(",")]
        if len(tokens) < 2:
            raise ProjectionConfigurationError(
                "UTM projection requires at least 2 parameters",
                descriptor=descriptor,
            )

        try:
            zone = int(tokens[1])
        except ValueError:
            raise InvalidZoneError(tokens[1], descriptor=descriptor) from None

        datum = tokens[2] if len(tokens) > 2 and tokens[2] else DEFAULT_DATUM

        return cls(
            zone,
            datum=datum,
            false_easting=_optional_float(tokens, 3),
            false_northing=_optional_float(tokens, 4),
            central_longitude=_optional_float(tokens, 5),
            origin_latitude=_optional_float(tokens, 6),
            scale_factor=_optional_float(tokens, 7),
            **kwargs,
        )

    def forward(self, lon: float, lat: float) -> Tuple[float, float]:
        lon = lon * D2R
        lat = lat * D2R

        delta_lon = adjust_longitude(lon - self.lon_center)
        sin_phi = math.sin(lat)
        cos_phi = math.cos(lat)

        if self.spherical:
            b = cos_phi * math.sin(delta_lon)
            if abs(abs(b) - 1.0) < 0.0000000001:
                logger.warning("Point projects into infinity")
                return 0.0, 0.0
            x = 0.5 * self.r_major * self.scale_factor * math.log((1.0 + b) / (1.0 - b))
            con = math.acos(cos_phi * math.cos(delta_lon) / math.sqrt(1.0 - b * b))
            if lat < 0:
                con = -con
            y = self.r_major * self.scale_factor * (con - self.lat_origin)
            return x, y

        esp = self.esp
        al = cos_phi * delta_lon
        als = al * al
        c = esp * cos_phi * cos_phi
        tq = math.tan(lat)
        t = tq * tq
        con = 1.0 - self.es * sin_phi * sin_phi
        n = self.r_major / math.sqrt(con)
        ml = self.r_major * mlfn(self.e0, self.e1, self.e2, self.e3, lat)

        x = (
            self.scale_factor
            * n
            * al
            * (1.0 + als / 6.0 * (1.0 - t + c + als / 20.0 * (5.0 - 18.0 * t + t * t + 72.0 * c - 58.0 * esp)))
            + self.false_easting
        )
        y = (
            self.scale_factor
            * (
                ml
                - self.ml0
                + n
                * tq
                * (
                    als
                    * (
                        0.5
                        + als
                        / 24.0
                        * (5.0 - t + 9.0 * c + 4.0 * c * c + als / 30.0 * (61.0 - 58.0 * t + t * t + 600.0 * c - 330.0 * esp))
                    )
                )
            )
            + self.false_northing
        )
        return x, y

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        """
        Un-project UTM coordinates to longitude/latitude.

        Raises:
            ProjectionConvergenceError: If the footpoint latitude does not
                converge and strict_convergence is set
        """
        if self.spherical:
            f = math.exp(x / (self.r_major * self.scale_factor))
            g = 0.5 * (f - 1 / f)
            temp = self.lat_origin + y / (self.r_major * self.scale_factor)
            h = math.cos(temp)
            con = math.sqrt((1.0 - h * h) / (1.0 + g * g))
            lat = asinz(con)
            if temp < 0:
                lat = -lat
            if g == 0 and h == 0:
                lon = self.lon_center
            else:
                lon = adjust_longitude(math.atan2(g, h) + self.lon_center)
            return lon * R2D, lat * R2D

        x = x - self.false_easting
        y = y - self.false_northing
        con = (self.ml0 + y / self.scale_factor) / self.r_major

        footpoint = footpoint_latitude(
            con,
            self.e0,
            self.e1,
            self.e2,
            self.e3,
            max_iterations=self.max_iterations,
            tolerance=self.tolerance,
        )
        if not footpoint.converged:
            return self._convergence_failure(x + self.false_easting, y + self.false_northing, footpoint)

        phi = footpoint.phi
        if abs(phi) >= HALF_PI:
            return self.lon_center * R2D, HALF_PI * sign(y) * R2D

        esp = self.esp
        sin_phi = math.sin(phi)
        cos_phi = math.cos(phi)
        tan_phi = math.tan(phi)
        c = esp * cos_phi * cos_phi
        cs = c * c
        t = tan_phi * tan_phi
        ts = t * t
        con = 1.0 - self.es * sin_phi * sin_phi
        n = self.r_major / math.sqrt(con)
        r = n * (1.0 - self.es) / con
        d = x / (n * self.scale_factor)
        ds = d * d

        lat = phi - (n * tan_phi * ds / r) * (
            0.5
            - ds
            / 24.0
            * (5.0 + 3.0 * t + 10.0 * c - 4.0 * cs - 9.0 * esp - ds / 30.0 * (61.0 + 90.0 * t + 298.0 * c + 45.0 * ts - 252.0 * esp - 3.0 * cs))
        )
        lon = adjust_longitude(
            self.lon_center
            + (d * (1.0 - ds / 6.0 * (1.0 + 2.0 * t + c - ds / 20.0 * (5.0 - 2.0 * c + 28.0 * t - 3.0 * cs + 8.0 * esp + 24.0 * ts))) / cos_phi)
        )
        return lon * R2D, lat * R2D

    def _convergence_failure(
        self, easting: float, northing: float, footpoint: FootpointResult
    ) -> Tuple[float, float]:
        if self.strict_convergence:
            raise ProjectionConvergenceError(
                "Latitude failed to converge",
                projection=str(self),
                iterations=footpoint.iterations,
                details={"easting": easting, "northing": northing},
            )
        logger.warning(
            f"Latitude failed to converge after {footpoint.iterations} iterations "
            f"for ({easting}, {northing}), using (0, 0)"
        )
        return 0.0, 0.0

    def to_crs(self) -> Optional[CRS]:
        return CRS.from_proj4(
            f"+proj=tmerc +lat_0={self.lat_origin * R2D!r} +lon_0={self.central_longitude!r} "
            f"+k={self.scale_factor!r} +x_0={self.false_easting!r} +y_0={self.false_northing!r} "
            f"+a={self.r_major!r} +b={self.r_minor!r} +units=m +no_defs +type=crs"
        )

    def __repr__(self) -> str:
        return (
            f"UTMProjection(zone={self._zone}, datum='{self._datum}', "
            f"central_longitude={self.central_longitude:.6f}, scale_factor={self.scale_factor})"
        )


def _optional_float(tokens: List[str], i: int) -> Optional[float]:
    if i >= len(tokens):
        return None
    try:
        return float(tokens[i])
    except ValueError:
        return None
