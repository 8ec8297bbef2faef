"""
Plate, gnomon and shadow geometry.

Vectors are numpy arrays of shape (3,) in the render frame: +x east, +y up,
-z north. A plane is {X : n.X + constant = 0} with n a unit normal.
"""
import math
from dataclasses import dataclass

import numpy as np
from numpy.linalg import norm

from sundials.coords import horizontal_to_point

EPS = 1e-12


# -----------------------------
# Linear algebra & planes
# -----------------------------

def unit(v: np.ndarray) -> np.ndarray:
    v = np.asarray(v, dtype=float)
    n = norm(v)
    if n == 0:
        return v
    return v / n


@dataclass(frozen=True, eq=False)
class Plane:
    normal: np.ndarray  # unit normal
    constant: float

    @staticmethod
    def from_normal_and_point(normal: np.ndarray, point: np.ndarray) -> "Plane":
        n = unit(normal)
        if not np.any(n):
            raise ValueError("plane normal must be non-zero")
        return Plane(normal=n, constant=-float(np.dot(point, n)))

    def distance_to_point(self, point: np.ndarray) -> float:
        """Signed distance, positive on the side the normal points to."""
        return float(np.dot(self.normal, point)) + self.constant

    def coplanar_point(self) -> np.ndarray:
        return self.normal * -self.constant


@dataclass(eq=False)
class DialPlane:
    """The sundial plate through the origin and its in-plane axes (u right, v up)."""
    n: np.ndarray  # unit outward normal
    u: np.ndarray  # unit axis along the plate to the right, always horizontal
    v: np.ndarray  # unit axis along the plate, upward or away from the viewer

    @staticmethod
    def from_slant_rotation(slant_deg: float, rotation_deg: float) -> "DialPlane":
        """
        slant: 0 for a horizontal plate, 90 for a vertical wall.
        rotation: azimuth the plate faces (180 = south).
        """
        slant = math.radians(slant_deg)
        rotation = math.radians(rotation_deg)
        n = unit(horizontal_to_point(rotation, math.pi / 2 - slant, 1.0))

        # right hand side of someone facing the plate
        u = unit(np.array([-math.cos(rotation), 0.0, -math.sin(rotation)]))
        v = unit(np.cross(n, u))
        return DialPlane(n=n, u=u, v=v)

    @property
    def plane(self) -> Plane:
        return Plane(normal=self.n, constant=0.0)

    def project_uv(self, P: np.ndarray) -> tuple[float, float]:
        return float(np.dot(P, self.u)), float(np.dot(P, self.v))


# -----------------------------
# Sun & style (gnomon)
# -----------------------------

def sun_dir_at_equinox(time_angle: float, latitude: float) -> np.ndarray:
    """
    Direction to the sun on an equinox, when its path is square to the style.
    Ignores the elliptical orbit and the equation of time.
    time_angle: 0 to 2 pi, midnight to midnight. latitude: radians.
    """
    return np.array([
        math.sin(time_angle),
        -math.cos(time_angle) * math.cos(latitude),
        -math.cos(time_angle) * math.sin(latitude),
    ], dtype=float)


def style_dir(latitude: float) -> np.ndarray:
    """Unit vector of a polar style, pointing at the celestial pole."""
    return np.array([0.0, math.sin(latitude), -math.cos(latitude)], dtype=float)


def shadow_direction(time_angle: float, latitude: float, plate_normal: np.ndarray) -> np.ndarray:
    """
    Direction of the style's shadow on the plate at an equinox.

    The shadow is where the plane through the sun and the style meets the
    plate, so it is perpendicular to both plane normals. Degenerate (zero)
    when the style lies in the plate at that instant.
    """
    sun = sun_dir_at_equinox(time_angle, latitude)
    style = style_dir(latitude)
    return np.cross(np.cross(sun, style), plate_normal)


# -----------------------------
# Intersections
# -----------------------------

def _ray_plane_distance(origin: np.ndarray, direction: np.ndarray, plane: Plane) -> float | None:
    """Parameter t >= 0 at which origin + t direction meets the plane."""
    denom = float(np.dot(plane.normal, direction))
    if abs(denom) < EPS:
        # ray in the plane starts on it; otherwise it never meets it
        if abs(plane.distance_to_point(origin)) < EPS:
            return 0.0
        return None
    t = -plane.distance_to_point(origin) / denom
    return t if t >= 0 else None


def line_plane_intersection_with_dir(plane: Plane, line_point: np.ndarray,
                                     line_direction: np.ndarray) -> tuple[np.ndarray, int] | None:
    """
    Meet an infinite line with a plane.
    Returns (point, 1) if it lies along +line_direction, (point, -1) if along
    the opposite direction, or None if the line is parallel to the plane.
    """
    line_point = np.asarray(line_point, dtype=float)
    line_direction = np.asarray(line_direction, dtype=float)

    # a ray only runs one way, so try both
    t = _ray_plane_distance(line_point, line_direction, plane)
    if t is not None:
        return line_point + t * line_direction, 1

    t = _ray_plane_distance(line_point, -line_direction, plane)
    if t is not None:
        return line_point - t * line_direction, -1

    return None


def line_plane_intersection(plane: Plane, line_point: np.ndarray, line_direction: np.ndarray) -> np.ndarray | None:
    hit = line_plane_intersection_with_dir(plane, line_point, line_direction)
    if hit is None:
        return None
    return hit[0]


def line_sphere_parameters(sphere_origin: np.ndarray, sphere_radius: float,
                           line_point: np.ndarray, line_direction: np.ndarray) -> list[float]:
    """Values of lambda where line_point + lambda line_direction is on the sphere."""
    offset = np.asarray(line_point, dtype=float) - np.asarray(sphere_origin, dtype=float)
    d = np.asarray(line_direction, dtype=float)

    a = float(np.dot(d, d))
    b = 2 * float(np.dot(offset, d))
    c = float(np.dot(offset, offset)) - sphere_radius ** 2

    discriminant = b ** 2 - 4 * a * c
    if a == 0 or discriminant < 0:
        return []

    root = math.sqrt(discriminant)
    return [(-b - root) / (2 * a), (-b + root) / (2 * a)]


def line_sphere_intersection(sphere_origin: np.ndarray, sphere_radius: float,
                             line_point: np.ndarray, line_direction: np.ndarray) -> list[np.ndarray]:
    """Both points where the line meets the sphere (equal if tangent), or []."""
    roots = line_sphere_parameters(sphere_origin, sphere_radius, line_point, line_direction)
    d = np.asarray(line_direction, dtype=float)
    return [np.asarray(line_point, dtype=float) + lam * d for lam in roots]


def three_plane_intersection(p1: Plane, p2: Plane, p3: Plane) -> np.ndarray | None:
    """
    Single point common to three planes, None if there is no unique one.
    https://stackoverflow.com/a/62141424
    """
    n1, n2, n3 = p1.normal, p2.normal, p3.normal
    det = float(np.dot(n1, np.cross(n2, n3)))
    if abs(det) < EPS:
        return None

    f1 = np.cross(n2, n3) * float(np.dot(p1.coplanar_point(), n1))
    f2 = np.cross(n3, n1) * float(np.dot(p2.coplanar_point(), n2))
    f3 = np.cross(n1, n2) * float(np.dot(p3.coplanar_point(), n3))
    return (f1 + f2 + f3) / det
