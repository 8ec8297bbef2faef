"""
Sidereal time and the sun's horizontal position from UTC.

Sidereal time follows https://aa.usno.navy.mil/faq/GAST. This is mean solar
time corrected for the equation of the equinoxes.
"""
import math

from sundials.coords import HorizontalCoords, to_horizontal
from sundials.ephemeris import mean_longitude, obliquity_of_ecliptic, sun_equatorial
from sundials.timebase import civil_instant, utc_to_tt


def greenwich_mean_sidereal_time(d_utc: float) -> float:
    """GMST in radians for a UTC day count."""
    d_midnight = math.trunc(d_utc + 0.5) - 0.5
    hours = (d_utc - d_midnight) * 24
    # centuries since the epoch
    T = utc_to_tt(d_utc) / 36525
    gmst = 6.697375 + 0.065707485828 * d_midnight + 1.0027379 * hours + 0.0854103 * T + 0.0000258 * T ** 2
    return gmst * math.pi / 12


def equation_of_equinoxes(d_tt: float) -> float:
    """Nutation in right ascension, radians."""
    omega = math.radians(125.04) - math.radians(0.052954) * d_tt
    L = mean_longitude(d_tt)
    delta_psi = (-0.000319 * math.sin(omega) - 0.000024 * math.sin(2 * L)) * math.pi / 12
    return delta_psi * math.cos(obliquity_of_ecliptic(d_tt))


def greenwich_apparent_sidereal_time(d_utc: float) -> float:
    return greenwich_mean_sidereal_time(d_utc) + equation_of_equinoxes(utc_to_tt(d_utc))


def sun_horizontal_from_utc(day: float, minutes: float, latitude: float, longitude: float) -> HorizontalCoords:
    """
    Sun's azimuth/altitude at a given UTC time.

    day: 0..364
    minutes: minutes since 00:00 UTC
    latitude, longitude: degrees
    """
    d_utc = civil_instant(day, minutes)
    sun = sun_equatorial(d_utc)

    # local sidereal time, then hour angle
    lmst = greenwich_apparent_sidereal_time(d_utc) + math.radians(longitude)
    hour_angle = lmst - sun.right_asc

    return to_horizontal(sun.declination, hour_angle, math.radians(latitude))


def sun_horizontal_from_standard_time(day: float, minutes: float, latitude: float, longitude: float,
                                      time_zone: float) -> HorizontalCoords:
    """Same as sun_horizontal_from_utc with `minutes` on a clock `time_zone` minutes ahead of UTC."""
    return sun_horizontal_from_utc(day, minutes - time_zone, latitude, longitude)
