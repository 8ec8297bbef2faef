# tests/test_dial.py
from __future__ import annotations

import math

import numpy as np
import pytest

from sundials.coords import horizontal_to_point
from sundials.dial import (
    DialOptions,
    build_dial,
    date_curve,
    equinox_noon_point,
    hour_curve,
    hour_minutes,
    nodus_position,
    nodus_shadow,
    style_hour_line,
    sun_marker,
)
from sundials.geometry import DialPlane, sun_dir_at_equinox
from sundials.timesystems import TimeSystem

LONDON = DialOptions(latitude=51.5, longitude=0.0, day_step=14)


def _degenerate(curve) -> bool:
    return all(np.array_equal(p, curve[0]) for p in curve)


# ─────────────────────────────────────────────────────────────────────────────
# Shadows
# ─────────────────────────────────────────────────────────────────────────────

def test_nodus_on_lit_side() -> None:
    for slant, rotation in [(0, 180), (90, 180), (90, 0), (45, 90)]:
        plate = DialPlane.from_slant_rotation(slant, rotation)
        style, nodus = nodus_position(plate, 51.5, 5.0)
        assert np.linalg.norm(nodus) == pytest.approx(5.0)
        assert float(np.dot(nodus, plate.n)) >= 0


def test_nodus_shadow_absent_when_dark_or_behind() -> None:
    plate = DialPlane.from_slant_rotation(90, 180)  # south wall
    _, nodus = nodus_position(plate, 51.5, 5.0)
    below = horizontal_to_point(math.pi, -0.1, 1.0)
    north = horizontal_to_point(0.0, 0.3, 1.0)
    assert nodus_shadow(nodus, below, plate) is None
    assert nodus_shadow(nodus, north, plate) is None

    south = horizontal_to_point(math.pi, 0.5, 1.0)
    shadow = nodus_shadow(nodus, south, plate)
    assert shadow is not None
    assert float(np.dot(shadow, plate.n)) == pytest.approx(0.0, abs=1e-9)


def test_sun_marker_at_render_radius() -> None:
    marker = sun_marker(LONDON, 100, 700)
    assert np.linalg.norm(marker) == pytest.approx(LONDON.radius)
    pole = DialOptions(latitude=90.0, longitude=0.0, time_system=TimeSystem.ITALIAN)
    assert sun_marker(pole, 100, 700) is None


def test_style_hour_line() -> None:
    phi = math.radians(51.5)
    plate = DialPlane.from_slant_rotation(0, 180)
    foot, end = style_hour_line(math.pi, phi, plate, 10.0)
    assert np.allclose(foot, 0)
    assert np.linalg.norm(end) == pytest.approx(10.0)
    # noon shadow points north
    assert end[2] < 0
    assert style_hour_line(0.0, phi, plate, 10.0) is None


def test_equinox_noon_point_matches_nodus_shadow() -> None:
    phi = math.radians(LONDON.latitude)
    plate = DialPlane.from_slant_rotation(0, 180)
    _, nodus = nodus_position(plate, LONDON.latitude, 5.0)
    expected = nodus_shadow(nodus, sun_dir_at_equinox(math.pi, phi), plate)
    assert np.allclose(equinox_noon_point(plate, nodus, LONDON.latitude), expected)


def test_equinox_noon_point_absent_on_east_wall() -> None:
    plate = DialPlane.from_slant_rotation(90, 90)
    _, nodus = nodus_position(plate, 51.5, 5.0)
    assert equinox_noon_point(plate, nodus, 51.5) is None


# ─────────────────────────────────────────────────────────────────────────────
# Curves
# ─────────────────────────────────────────────────────────────────────────────

def test_hour_minutes() -> None:
    assert hour_minutes(TimeSystem.APPARENT, 60) == list(range(0, 1440, 60))
    assert hour_minutes(TimeSystem.SEASONAL, 60)[-1] == 720


def test_apparent_noon_curve_on_meridian() -> None:
    plate = DialPlane.from_slant_rotation(0, 180)
    _, nodus = nodus_position(plate, LONDON.latitude, LONDON.style_length)
    curve = hour_curve(LONDON, plate, nodus, 720)
    assert len(curve) == len(range(0, 365, LONDON.day_step)) + 1
    assert not _degenerate(curve)
    # closed: visible every sampled day
    assert np.array_equal(curve[0], curve[-1])
    for p in curve:
        assert abs(p[0]) < 1e-9
        assert abs(p[1]) < 1e-9


def test_midnight_curve_is_degenerate() -> None:
    plate = DialPlane.from_slant_rotation(0, 180)
    _, nodus = nodus_position(plate, LONDON.latitude, LONDON.style_length)
    curve = hour_curve(LONDON, plate, nodus, 0)
    assert _degenerate(curve)
    assert np.allclose(curve[0], 0)


def test_date_curve_length() -> None:
    plate = DialPlane.from_slant_rotation(0, 180)
    _, nodus = nodus_position(plate, LONDON.latitude, LONDON.style_length)
    curve = date_curve(LONDON, plate, nodus, 171, samples=48)
    assert len(curve) == 49
    assert not _degenerate(curve)


# ─────────────────────────────────────────────────────────────────────────────
# Whole dials
# ─────────────────────────────────────────────────────────────────────────────

@pytest.mark.slow
def test_build_dial_apparent() -> None:
    dial = build_dial(LONDON)
    assert sorted(dial.hour_curves) == list(range(0, 1440, 60))
    assert len(dial.date_curves) == 3
    assert 720 in dial.style_lines and 0 not in dial.style_lines
    assert dial.equinox_noon is not None


@pytest.mark.slow
@pytest.mark.parametrize("system", list(TimeSystem))
def test_build_dial_every_system(system: TimeSystem) -> None:
    options = DialOptions(latitude=45.0, longitude=9.0, slant=90, rotation=170,
                          time_system=system, hour_step=120, day_step=30)
    dial = build_dial(options)
    assert dial.hour_curves
    lengths = {len(c) for c in dial.hour_curves.values()}
    assert lengths == {len(range(0, 365, 30)) + 1}
    if system is not TimeSystem.APPARENT:
        assert dial.style_lines == {}


def test_build_dial_at_pole_has_no_babylonian_curves() -> None:
    options = DialOptions(latitude=90.0, longitude=0.0, time_system=TimeSystem.BABYLONIAN,
                          hour_step=240, day_step=60)
    dial = build_dial(options)
    assert all(_degenerate(c) for c in dial.hour_curves.values())


@pytest.mark.parametrize("field", ["hour_step", "day_step"])
def test_build_dial_rejects_bad_steps(field: str) -> None:
    options = DialOptions(latitude=10.0, longitude=0.0, **{field: 0})
    with pytest.raises(ValueError):
        build_dial(options)


def test_zone_defaults_to_longitude() -> None:
    assert DialOptions(latitude=0.0, longitude=-75.0).zone == -300
    assert DialOptions(latitude=0.0, longitude=-75.0, time_zone=-240).zone == -240
