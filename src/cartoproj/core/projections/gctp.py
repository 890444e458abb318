"""
Numerical helpers from the General Cartographic Transformation Package (GCTP).

These routines are shared by every projection and reproduce the GCTP
floating-point behavior so round trips stay bit-for-bit stable.
"""

import math

TWO_PI = math.pi * 2.0
HALF_PI = math.pi * 0.5

# Degree/radian factors as used by GCTP (not math.radians/math.degrees)
D2R = 1.745329251994328e-2
R2D = 57.2957795131

_MAXLONG = 2147483647.0
_DBLLONG = 4.61168601e18


def sign(x: float) -> int:
    """Return -1 for negative values and 1 otherwise (including zero)."""
    if x < 0.0:
        return -1
    return 1


def adjust_longitude(x: float) -> float:
    """
    Reduce a longitude in radians into [-pi, pi].

    Small overshoots subtract 2*pi scaled by sign(x); large values remove
    whole turns at increasing magnitudes. At most five reductions are made.

    Args:
        x: Angle in radians

    Returns:
        Equivalent angle in radians
    """
    if not math.isfinite(x):
        return x
    count = 0
    while True:
        if abs(x) <= math.pi:
            break
        elif int(abs(x / math.pi)) < 2:
            x = x - (sign(x) * TWO_PI)
        elif int(abs(x / TWO_PI)) < _MAXLONG:
            x = x - (int(x / TWO_PI) * TWO_PI)
        elif int(abs(x / (_MAXLONG * TWO_PI))) < _MAXLONG:
            x = x - (int(x / (_MAXLONG * TWO_PI)) * (TWO_PI * _MAXLONG))
        elif int(abs(x / (_DBLLONG * TWO_PI))) < _MAXLONG:
            x = x - (int(x / (_DBLLONG * TWO_PI)) * (TWO_PI * _DBLLONG))
        else:
            x = x - (sign(x) * TWO_PI)
        count += 1
        if count > 4:
            break
    return x


def asinz(con: float) -> float:
    """Arc sine with the argument clamped to [-1, 1] to absorb roundoff."""
    if abs(con) > 1.0:
        con = 1.0 if con > 1.0 else -1.0
    return math.asin(con)


# Series constants for the distance along a meridian, from the
# eccentricity squared.


def e0fn(x: float) -> float:
    return 1.0 - 0.25 * x * (1.0 + x / 16.0 * (3.0 + 1.25 * x))


def e1fn(x: float) -> float:
    return 0.375 * x * (1.0 + 0.25 * x * (1.0 + 0.46875 * x))


def e2fn(x: float) -> float:
    return 0.05859375 * x * x * (1.0 + 0.75 * x)


def e3fn(x: float) -> float:
    return x * x * x * (35.0 / 3072.0)


def mlfn(e0: float, e1: float, e2: float, e3: float, phi: float) -> float:
    """
    Distance along a meridian from the equator to latitude phi.

    The result is in units of the semi-major axis.
    """
    return (
        e0 * phi
        - e1 * math.sin(2.0 * phi)
        + e2 * math.sin(4.0 * phi)
        - e3 * math.sin(6.0 * phi)
    )
