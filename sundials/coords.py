"""
Equatorial/horizontal coordinates and the sunrise equation.

Render frame: +x east, +y up, -z north (so south is +z).
"""
import math
from dataclasses import dataclass

import numpy as np

# Altitude of the sun's centre at sunrise/sunset. Refraction and the solar
# disc (-0.833 deg) are not modelled.
SUNSET_ALTITUDE = 0.0


@dataclass(frozen=True)
class EquatorialCoords:
    right_asc: float  # radians
    declination: float  # radians


@dataclass(frozen=True)
class HorizontalCoords:
    azimuth: float  # radians, 0 north, +pi/2 east
    altitude: float  # radians, > 0 above the horizon


def to_horizontal(declination: float, hour_angle: float, latitude: float) -> HorizontalCoords:
    """
    declination, hour_angle, latitude in radians.
    https://en.wikipedia.org/wiki/Astronomical_coordinate_systems
    """
    cd, sd = math.cos(declination), math.sin(declination)
    ch, sh = math.cos(hour_angle), math.sin(hour_angle)
    cp, sp = math.cos(latitude), math.sin(latitude)

    azimuth = -math.atan2(cd * sh, -sp * cd * ch + cp * sd)
    altitude = math.asin(max(-1.0, min(1.0, sp * sd + cp * cd * ch)))
    return HorizontalCoords(azimuth=azimuth, altitude=altitude)


def horizontal_to_point(azimuth: float, altitude: float, radius: float = 15.0) -> np.ndarray:
    """Point at distance `radius` from the origin in the given direction."""
    return np.array([
        radius * math.sin(azimuth) * math.cos(altitude),
        radius * math.sin(altitude),
        -radius * math.cos(azimuth) * math.cos(altitude),
    ], dtype=float)


def sunset_hour_angle(declination: float, latitude: float) -> float | None:
    """
    Sunset hour angle (omega_0) in radians; negate it for sunrise.
    https://en.wikipedia.org/wiki/Sunrise_equation
    None when the sun stays above or below the horizon all day.
    """
    numerator = math.sin(SUNSET_ALTITUDE) - math.sin(latitude) * math.sin(declination)
    denominator = math.cos(latitude) * math.cos(declination)
    if denominator == 0 or abs(numerator) > abs(denominator):
        return None
    return math.acos(numerator / denominator)


def sunset_hour_angle_no_null(declination: float, latitude: float) -> float:
    """
    Like sunset_hour_angle but never None. In polar day the next sunset is
    taken to be at midnight (pi); in polar night it coincides with sunrise (0).
    This is an approximation that keeps hour curves continuous near the poles.
    """
    h0 = sunset_hour_angle(declination, latitude)
    if h0 is not None:
        return h0
    if abs(latitude + declination) > abs(latitude - declination):
        return math.pi
    return 0.0


def polar_day_declination(latitude: float) -> float:
    """Declination (deg) beyond which a latitude (deg) has polar day."""
    if latitude >= 0:
        return 90 - latitude
    return -90 - latitude
