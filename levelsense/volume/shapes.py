"""
Volume formulas for individual tank shapes.

Every function takes already-validated dimensions in meters and a liquid
level measured up from the lowest point of the tank, and returns cubic
meters. Levels are clamped into the shape's height where a formula would
otherwise leave its domain.
"""

from __future__ import annotations

import math


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


# ===== Helpers =====


def circular_segment_area(radius: float, height: float) -> float:
    """
    Area of a circular segment of the given height.

    Args:
        radius: Circle radius.
        height: Segment height, measured from the bottom of the circle.

    Returns:
        0 for height <= 0, the full circle for height >= 2 * radius.
    """
    if height <= 0:
        return 0.0
    if height >= 2 * radius:
        return math.pi * radius * radius
    theta = 2 * math.acos(_clamp((radius - height) / radius, -1.0, 1.0))
    return radius * radius / 2 * (theta - math.sin(theta))


def spherical_cap_volume(radius: float, height: float) -> float:
    """
    Volume of a spherical cap of the given height.

    Returns:
        0 for height <= 0, the full sphere for height >= 2 * radius.
    """
    h = _clamp(height, 0.0, 2 * radius)
    return math.pi / 3 * h * h * (3 * radius - h)


def elliptical_segment_area(a: float, b: float, height: float) -> float:
    """
    Area of an ellipse segment cut by a horizontal line.

    A = a b acos((b - h) / b) - (b - h) sqrt(b² - (b - h)²). Non-decreasing
    in height for a >= b (major axis horizontal).

    Args:
        a: Horizontal semi-axis.
        b: Vertical semi-axis.
        height: Segment height from the bottom of the ellipse.
    """
    h = _clamp(height, 0.0, 2 * b)
    y = b - h
    return a * b * math.acos(_clamp(y / b, -1.0, 1.0)) - y * math.sqrt(max(0.0, b * b - y * y))


# ===== Shapes =====


def vertical_cylinder_volume(radius: float, level: float) -> float:
    """V = π r² level."""
    return math.pi * radius * radius * level


def horizontal_cylinder_volume(radius: float, length: float, level: float) -> float:
    """Circular segment area times the drum length."""
    return circular_segment_area(radius, level) * length


def rectangular_volume(length: float, width: float, level: float) -> float:
    """V = length × width × level."""
    return length * width * level


def spherical_volume(radius: float, level: float) -> float:
    """Spherical cap filled to the level."""
    return spherical_cap_volume(radius, level)


def conical_volume(radius: float, height: float, level: float) -> float:
    """
    Apex-down cone filled from the apex.

    The liquid surface radius grows linearly with level.
    """
    liquid_radius = level / height * radius
    return math.pi / 3 * liquid_radius * liquid_radius * level


def frustum_volume(r1: float, r2: float, height: float) -> float:
    """Volume of a cone frustum between radii r1 and r2."""
    return math.pi / 3 * height * (r1 * r1 + r1 * r2 + r2 * r2)


def silo_cone_height(radius: float, outlet_radius: float, cone_angle: float) -> float:
    """
    Height of a silo's conical hopper.

    Args:
        radius: Cylinder radius.
        outlet_radius: Radius of the outlet at the bottom of the cone.
        cone_angle: Cone angle in degrees; the height is
            (radius - outlet_radius) / tan(cone_angle).
    """
    return (radius - outlet_radius) / math.tan(math.radians(cone_angle))


def silo_volume(radius: float, outlet_radius: float, cone_height: float, level: float) -> float:
    """
    Cone-bottomed cylinder.

    Below the cone height the liquid fills a frustum from the outlet up to
    the interpolated radius at the level; above it, the full frustum plus
    a cylinder.
    """
    if level <= cone_height:
        surface_radius = outlet_radius + level / cone_height * (radius - outlet_radius)
        return frustum_volume(outlet_radius, surface_radius, level)
    cone = frustum_volume(outlet_radius, radius, cone_height)
    return cone + vertical_cylinder_volume(radius, level - cone_height)


def horizontal_elliptical_volume(a: float, b: float, length: float, level: float) -> float:
    """Elliptical segment area times the tank length."""
    return elliptical_segment_area(a, b, level) * length


def vertical_elliptical_volume(a: float, b: float, level: float) -> float:
    """V = π a b level."""
    return math.pi * a * b * level


def horizontal_capsule_volume(radius: float, cylinder_length: float, level: float) -> float:
    """
    Horizontal cylinder with hemispherical ends.

    Segment area times the straight length, plus a spherical cap at the
    level for each of the two ends.
    """
    return circular_segment_area(radius, level) * cylinder_length + 2 * spherical_cap_volume(radius, level)


def vertical_capsule_volume(radius: float, cylinder_length: float, level: float) -> float:
    """
    Vertical cylinder with hemispherical ends, in three zones.

    Bottom hemisphere up to the radius, straight cylinder up to radius +
    cylinder_length, then the top hemisphere.
    """
    hemisphere = 2 / 3 * math.pi * radius ** 3
    if level <= radius:
        return spherical_cap_volume(radius, level)
    if level <= radius + cylinder_length:
        return hemisphere + vertical_cylinder_volume(radius, level - radius)
    top = _clamp(level - radius - cylinder_length, 0.0, radius)
    top_volume = spherical_cap_volume(radius, radius + top) - hemisphere
    return hemisphere + vertical_cylinder_volume(radius, cylinder_length) + top_volume


def dish_ends_volume(radius: float, length: float, dish_radius: float, level: float) -> float:
    """
    Horizontal cylinder with two dished ends.

    Each end adds a spherical cap of dish_radius at the level.
    """
    return horizontal_cylinder_volume(radius, length, level) + 2 * spherical_cap_volume(dish_radius, level)


def linear_volume(level: float, height: float, capacity: float) -> float:
    """Capacity scaled by the level's fraction of the height."""
    return level / height * capacity
