"""
Sundial construction: hour curves, date curves and style hour lines on a flat
plate of any slant and rotation, for any of the supported hour systems.

The plate passes through the origin, which is also the foot of a polar
style. The nodus is the point on the style `style_length` from the foot;
its shadow traces the hour curves through the year.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np
from numpy.linalg import norm

from sundials.coords import horizontal_to_point
from sundials.curves import extract_close_and_pad
from sundials.geometry import (
    EPS,
    DialPlane,
    Plane,
    line_plane_intersection_with_dir,
    line_sphere_intersection,
    shadow_direction,
    style_dir,
    sun_dir_at_equinox,
    three_plane_intersection,
)
from sundials.timebase import longitude_to_time_zone, minutes_to_clock_string
from sundials.timesystems import NO_CLAMP, DeclinationClamp, TimeSystem, minutes_range, sun_horizontal

logger = logging.getLogger(__name__)

ORIGIN = np.zeros(3)

# day indexes (2023) of the equinox and solstices
DATE_LINES = [(78, "March equinox"),
              (171, "June solstice"),
              (355, "December solstice")]


@dataclass(frozen=True)
class DialOptions:
    latitude: float  # degrees, +N
    longitude: float  # degrees, +E
    slant: float = 0.0  # degrees; 0 horizontal plate, 90 vertical wall
    rotation: float = 180.0  # azimuth the plate faces, degrees
    style_length: float = 5.0
    time_system: TimeSystem = TimeSystem.APPARENT
    hour_step: int = 60  # minutes between hour curves
    day_step: int = 7  # days between samples on an hour curve
    clamp: DeclinationClamp = NO_CLAMP
    time_zone: float | None = None  # minutes ahead of UTC; None derives it from longitude
    radius: float = 15.0

    @property
    def zone(self) -> float:
        if self.time_zone is None:
            return longitude_to_time_zone(self.longitude)
        return self.time_zone


@dataclass(eq=False)
class Dial:
    options: DialOptions
    plate: DialPlane
    style: np.ndarray
    nodus: np.ndarray
    hour_curves: Dict[float, List[np.ndarray]] = field(default_factory=dict)
    date_curves: List[dict] = field(default_factory=list)
    style_lines: Dict[float, Tuple[np.ndarray, np.ndarray]] = field(default_factory=dict)
    equinox_noon: np.ndarray | None = None


# -----------------------------
# Shadows
# -----------------------------

def nodus_position(plate: DialPlane, latitude: float, style_length: float) -> Tuple[np.ndarray, np.ndarray]:
    """(style unit vector, nodus point) with the nodus on the lit face of the plate."""
    style = style_dir(math.radians(latitude))
    if float(np.dot(style, plate.n)) < 0:
        style = -style
    return style, style_length * style


def nodus_shadow(nodus: np.ndarray, sun: np.ndarray, plate: DialPlane) -> np.ndarray | None:
    """
    Shadow of the nodus on the plate for a unit sun direction.
    None if the sun is down, the plate is in its own shade, or the shadow
    misses the plate.
    """
    if sun[1] <= 0:
        return None
    if float(np.dot(plate.n, sun)) <= 0:
        return None
    hit = line_plane_intersection_with_dir(plate.plane, nodus, -sun)
    if hit is None or hit[1] != 1:
        return None
    return hit[0]


def _sun_direction(options: DialOptions, day: float, minutes: float) -> np.ndarray | None:
    coords = sun_horizontal(options.time_system, day, minutes, options.latitude, options.longitude,
                            options.clamp, options.zone)
    if coords is None:
        return None
    return horizontal_to_point(coords.azimuth, coords.altitude, 1.0)


def sun_marker(options: DialOptions, day: float, minutes: float) -> np.ndarray | None:
    """Sun position at render distance `options.radius`."""
    sun = _sun_direction(options, day, minutes)
    if sun is None:
        return None
    return options.radius * sun


# -----------------------------
# Curves
# -----------------------------

def hour_minutes(system: TimeSystem, step: int) -> List[int]:
    """Clock readings that get an hour curve."""
    span = minutes_range(system)
    if system is TimeSystem.SEASONAL:
        # sunrise and sunset are both hour lines
        return list(range(0, span + 1, step))
    return list(range(0, span, step))


def hour_curve(options: DialOptions, plate: DialPlane, nodus: np.ndarray, minutes: float) -> List[np.ndarray]:
    """Nodus shadow at a fixed clock reading, sampled through the year."""
    days = range(0, 365, options.day_step)
    points = []
    for day in days:
        sun = _sun_direction(options, day, minutes)
        points.append(None if sun is None else nodus_shadow(nodus, sun, plate))
    return extract_close_and_pad(points, len(days) + 1, ORIGIN)


def date_curve(options: DialOptions, plate: DialPlane, nodus: np.ndarray, day: int,
               samples: int = 96) -> List[np.ndarray]:
    """Nodus shadow through one day."""
    span = minutes_range(options.time_system)
    points = []
    for i in range(samples):
        sun = _sun_direction(options, day, span * i / samples)
        points.append(None if sun is None else nodus_shadow(nodus, sun, plate))
    # seasonal hours stop at sunset, so the day does not wrap around
    return extract_close_and_pad(points, samples + 1, ORIGIN,
                                 dont_close=options.time_system is TimeSystem.SEASONAL)


def style_hour_line(time_angle: float, latitude: float, plate: DialPlane,
                    radius: float) -> Tuple[np.ndarray, np.ndarray] | None:
    """
    Straight hour line cast by the style on an equinox, from the foot to
    `radius` away. time_angle: 0 to 2 pi from midnight; latitude: radians.
    None when the plate is unlit or the style lies in the plate.
    """
    sun = sun_dir_at_equinox(time_angle, latitude)
    if sun[1] <= 0 or float(np.dot(plate.n, sun)) <= 0:
        return None

    direction = shadow_direction(time_angle, latitude, plate.n)
    if norm(direction) < EPS:
        return None

    ends = line_sphere_intersection(ORIGIN, radius, ORIGIN, direction)
    # the shadow falls on the side away from the sun
    end = min(ends, key=lambda p: float(np.dot(p, sun)))
    return ORIGIN.copy(), end


def equinox_noon_point(plate: DialPlane, nodus: np.ndarray, latitude: float) -> np.ndarray | None:
    """
    Where the noon line crosses the equinox line: the plate, the equatorial
    plane through the nodus and the meridian plane meet there.
    """
    equator = Plane.from_normal_and_point(style_dir(math.radians(latitude)), nodus)
    meridian = Plane.from_normal_and_point(np.array([1.0, 0.0, 0.0]), ORIGIN)
    return three_plane_intersection(plate.plane, equator, meridian)


# -----------------------------
# Dial construction
# -----------------------------

def build_dial(options: DialOptions) -> Dial:
    if options.hour_step <= 0:
        raise ValueError("hour_step must be positive")
    if options.day_step <= 0:
        raise ValueError("day_step must be positive")

    plate = DialPlane.from_slant_rotation(options.slant, options.rotation)
    style, nodus = nodus_position(plate, options.latitude, options.style_length)
    dial = Dial(options=options, plate=plate, style=style, nodus=nodus)

    for minutes in hour_minutes(options.time_system, options.hour_step):
        curve = hour_curve(options, plate, nodus, minutes)
        if all(np.array_equal(p, curve[0]) for p in curve):
            logger.debug("hour curve %s not visible", minutes_to_clock_string(minutes))
        dial.hour_curves[minutes] = curve

    for day, label in DATE_LINES:
        dial.date_curves.append({"label": label,
                                 "day": day,
                                 "points": date_curve(options, plate, nodus, day)})

    if options.time_system is TimeSystem.APPARENT:
        phi = math.radians(options.latitude)
        for minutes in hour_minutes(options.time_system, options.hour_step):
            line = style_hour_line(minutes / 1440 * 2 * math.pi, phi, plate, options.radius)
            if line is not None:
                dial.style_lines[minutes] = line

    dial.equinox_noon = equinox_noon_point(plate, nodus, options.latitude)

    logger.debug("built dial: %d hour curves, %d style lines",
                 len(dial.hour_curves), len(dial.style_lines))
    return dial
