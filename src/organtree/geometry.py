"""Geometry rules for growth direction, insertion angles, and tropism."""

from __future__ import annotations

from dataclasses import dataclass
from math import cos, sin, sqrt
from typing import Tuple

Vector3 = Tuple[float, float, float]

ORIGIN: Vector3 = (0.0, 0.0, 0.0)
DOWN: Vector3 = (0.0, 0.0, -1.0)
UP: Vector3 = (0.0, 0.0, 1.0)


@dataclass(frozen=True)
class TropismInputs:
    gravity_vector: Vector3
    parent_vector: Vector3


@dataclass(frozen=True)
class GrowthDirectionWeights:
    gravity: float
    inertia: float


def _scale(vector: Vector3, weight: float) -> Vector3:
    return (vector[0] * weight, vector[1] * weight, vector[2] * weight)


def _add(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _sub(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _cross(a: Vector3, b: Vector3) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def norm(vector: Vector3) -> float:
    return sqrt(vector[0] ** 2 + vector[1] ** 2 + vector[2] ** 2)


def normalize(vector: Vector3) -> Vector3:
    length = norm(vector)
    if length <= 0:
        return DOWN
    return _scale(vector, 1.0 / length)


def distance(a: Vector3, b: Vector3) -> float:
    return norm(_sub(a, b))


def advance_point(origin: Vector3, heading: Vector3, length: float) -> Vector3:
    """Move ``length`` along a unit ``heading`` starting at ``origin``."""

    return _add(origin, _scale(heading, length))


def orthogonal(vector: Vector3) -> Vector3:
    """Any unit vector perpendicular to ``vector``."""

    ax, ay, az = (abs(component) for component in vector)
    if ax <= ay and ax <= az:
        axis: Vector3 = (1.0, 0.0, 0.0)
    elif ay <= az:
        axis = (0.0, 1.0, 0.0)
    else:
        axis = (0.0, 0.0, 1.0)
    return normalize(_cross(vector, axis))


def insertion_heading(parent_vector: Vector3, theta: float, phi: float) -> Vector3:
    """Heading leaving ``parent_vector`` at insertion angle ``theta``, rolled by ``phi``."""

    p = normalize(parent_vector)
    u = orthogonal(p)
    w = _cross(p, u)
    radial = _add(_scale(u, cos(phi)), _scale(w, sin(phi)))
    return normalize(_add(_scale(p, cos(theta)), _scale(radial, sin(theta))))


def compute_growth_direction(inputs: TropismInputs, weights: GrowthDirectionWeights) -> Vector3:
    """Combine tropism vectors to compute a unit growth direction."""

    combined = _add(
        _scale(inputs.gravity_vector, weights.gravity),
        _scale(inputs.parent_vector, weights.inertia),
    )
    return normalize(combined)
