"""
Low-precision solar ephemeris.

Following https://en.wikipedia.org/wiki/Position_of_the_Sun and
https://aa.usno.navy.mil/faq/sun_approx. All angles are in radians and all
day counts are fractional days since noon on 2000-01-01.
"""
import math

from sundials.coords import EquatorialCoords
from sundials.timebase import utc_to_tt

TWO_PI = 2 * math.pi


def mean_longitude(d_tt: float) -> float:
    """Mean longitude of the sun, L."""
    return (math.radians(280.459) + math.radians(0.98564736) * d_tt) % TWO_PI


def mean_anomaly(d_tt: float) -> float:
    """Mean anomaly of the sun, g."""
    return (math.radians(357.529) + math.radians(0.98560028) * d_tt) % TWO_PI


def obliquity_of_ecliptic(d_tt: float) -> float:
    """Mean obliquity of the ecliptic, epsilon."""
    return math.radians(23.4393) - math.radians(3.6e-7) * d_tt


def ecliptic_longitude(d_tt: float) -> float:
    """Geocentric apparent ecliptic longitude (aberration included), lambda."""
    L = mean_longitude(d_tt)
    g = mean_anomaly(d_tt)
    return L + math.radians(1.915) * math.sin(g) + math.radians(0.020) * math.sin(2 * g)


def sun_equatorial_from_tt(d_tt: float) -> EquatorialCoords:
    lam = ecliptic_longitude(d_tt)
    eps = obliquity_of_ecliptic(d_tt)

    right_asc = math.atan2(math.cos(eps) * math.sin(lam), math.cos(lam))
    declination = math.asin(math.sin(eps) * math.sin(lam))
    return EquatorialCoords(right_asc=right_asc, declination=declination)


def sun_equatorial(d_utc: float) -> EquatorialCoords:
    """
    Sun's right ascension and declination at a UTC day count.
    d_utc stays within a second of UT1 since leap seconds absorb the drift.
    """
    return sun_equatorial_from_tt(utc_to_tt(d_utc))
