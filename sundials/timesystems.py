"""
Sun position under civil and historical hour systems.

Reference: https://www.bcgnomonics.com/types-of-hours

Each model takes (day, minutes, latitude, longitude) with latitude/longitude in
degrees. The declination is estimated once near the model's origin instead
of being recomputed for each sample; it changes too slowly over a few hours
for the error to matter. Sunrise and sunset refer to the centre of the sun
crossing the horizon, without refraction.
"""
import enum
import math
from dataclasses import dataclass

from sundials.coords import HorizontalCoords, sunset_hour_angle_no_null, to_horizontal
from sundials.ephemeris import sun_equatorial
from sundials.sidereal import sun_horizontal_from_standard_time, sun_horizontal_from_utc
from sundials.timebase import EPOCH_2023, MINUTES_PER_DAY

TWO_PI = 2 * math.pi


@dataclass(frozen=True)
class DeclinationClamp:
    """Optional bounds (radians) applied to every declination estimate."""
    minimum: float | None = None
    maximum: float | None = None


NO_CLAMP = DeclinationClamp()


def clamp(value: float, bounds: DeclinationClamp) -> float:
    if bounds.minimum is not None and value < bounds.minimum:
        value = bounds.minimum
    if bounds.maximum is not None and value > bounds.maximum:
        value = bounds.maximum
    return value


def _declination(day_offset: float, day: float, longitude: float, bounds: DeclinationClamp) -> float:
    """Clamped declination at EPOCH_2023 + day_offset on `day`, shifted to local mean time."""
    d_utc = EPOCH_2023 + day_offset - longitude / 360 + day
    return clamp(sun_equatorial(d_utc).declination, bounds)


def _current(day: float, hour_angle: float, latitude: float, longitude: float,
             bounds: DeclinationClamp) -> HorizontalCoords:
    # re-estimate the declination at the instant matching the hour angle
    declination = _declination(0.5 + hour_angle / TWO_PI, day, longitude, bounds)
    return to_horizontal(declination, hour_angle, math.radians(latitude))


def _is_pole(latitude: float) -> bool:
    return abs(latitude) == 90


# -----------------------------
# Hour systems
# -----------------------------

def sun_horizontal_from_apparent_solar_time(day: float, minutes: float, latitude: float, longitude: float,
                                            bounds: DeclinationClamp = NO_CLAMP) -> HorizontalCoords:
    """
    minutes: 0..1440 of local apparent solar time, 720 being solar noon.
    The declination is taken at local mean time rather than UTC, which is at
    most about a quarter of an hour off.
    """
    declination = _declination(minutes / MINUTES_PER_DAY, day, longitude, bounds)
    hour_angle = (minutes - 12 * 60) / MINUTES_PER_DAY * TWO_PI
    return to_horizontal(declination, hour_angle, math.radians(latitude))


def sun_horizontal_from_babylonian_time(day: float, minutes: float, latitude: float, longitude: float,
                                        bounds: DeclinationClamp = NO_CLAMP) -> HorizontalCoords | None:
    """
    minutes: 0..1440 since sunrise.
    Assumes sunrise to sunrise is a mean day, so the sunrise declination is
    estimated at 18:00, halfway between today's and tomorrow's sunrise.
    """
    if _is_pole(latitude):
        return None

    sunrise_declination = _declination(0.75, day, longitude, bounds)
    sunrise = -sunset_hour_angle_no_null(sunrise_declination, math.radians(latitude))
    hour_angle = sunrise + minutes / MINUTES_PER_DAY * TWO_PI
    return _current(day, hour_angle, latitude, longitude, bounds)


def sun_horizontal_from_italian_time(day: float, minutes: float, latitude: float, longitude: float,
                                     bounds: DeclinationClamp = NO_CLAMP) -> HorizontalCoords | None:
    """minutes: 0..1440 since the previous sunset, estimated at 06:00."""
    if _is_pole(latitude):
        return None

    sunset_declination = _declination(0.25, day, longitude, bounds)
    sunset = sunset_hour_angle_no_null(sunset_declination, math.radians(latitude))
    hour_angle = sunset - TWO_PI + minutes / MINUTES_PER_DAY * TWO_PI
    return _current(day, hour_angle, latitude, longitude, bounds)


def sun_horizontal_from_seasonal_time(day: float, minutes: float, latitude: float, longitude: float,
                                      bounds: DeclinationClamp = NO_CLAMP) -> HorizontalCoords | None:
    """
    minutes: 0..720, sunrise to sunset split into twelve equal hours of
    60 'minutes' each, whatever their real length.
    """
    if _is_pole(latitude):
        return None

    noon_declination = _declination(0.5, day, longitude, bounds)
    sunset = sunset_hour_angle_no_null(noon_declination, math.radians(latitude))
    sunrise = -sunset
    hour_angle = sunrise + (sunset - sunrise) * minutes / 720
    return _current(day, hour_angle, latitude, longitude, bounds)


# -----------------------------
# Dispatch
# -----------------------------

class TimeSystem(enum.Enum):
    UTC = "utc"
    STANDARD = "standard"
    APPARENT = "apparent"
    BABYLONIAN = "babylonian"
    ITALIAN = "italian"
    SEASONAL = "seasonal"


def minutes_range(system: TimeSystem) -> int:
    """Length of the minutes axis for a time system."""
    if system is TimeSystem.SEASONAL:
        return 720
    return MINUTES_PER_DAY


def sun_horizontal(system: TimeSystem, day: float, minutes: float, latitude: float, longitude: float,
                   bounds: DeclinationClamp = NO_CLAMP, time_zone: float = 0.0) -> HorizontalCoords | None:
    """Sun position for `minutes` read on a clock of the given time system."""
    if system is TimeSystem.UTC:
        return sun_horizontal_from_utc(day, minutes, latitude, longitude)
    if system is TimeSystem.STANDARD:
        return sun_horizontal_from_standard_time(day, minutes, latitude, longitude, time_zone)
    if system is TimeSystem.APPARENT:
        return sun_horizontal_from_apparent_solar_time(day, minutes, latitude, longitude, bounds)
    if system is TimeSystem.BABYLONIAN:
        return sun_horizontal_from_babylonian_time(day, minutes, latitude, longitude, bounds)
    if system is TimeSystem.ITALIAN:
        return sun_horizontal_from_italian_time(day, minutes, latitude, longitude, bounds)
    if system is TimeSystem.SEASONAL:
        return sun_horizontal_from_seasonal_time(day, minutes, latitude, longitude, bounds)
    raise ValueError(f"unknown time system: {system!r}")
