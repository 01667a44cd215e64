import math
from dataclasses import dataclass
from enum import Enum


def angle_from_degrees(degrees):
    """Convert an angle in degrees to radians."""
    return degrees * math.pi / 180


class DegenerateTriangleError(ValueError):
    """Raised when the two points a triangle is built from coincide."""


class TriangleClass(Enum):
    """
    The two golden-ratio Robinson triangles: the "acute" one (36, 72, 72)
    and the "obtuse" one (108, 36, 36).

    base_angle is the rotation used when a triangle is built from a start
    point and a middle point, side_angle gives the height of the apex above
    the stored base edge.
    """

    ACUTE = "acute"
    OBTUSE = "obtuse"

    @property
    def base_angle(self):
        if self is TriangleClass.ACUTE:
            return angle_from_degrees(36)
        return angle_from_degrees(108)

    @property
    def side_angle(self):
        if self is TriangleClass.ACUTE:
            return angle_from_degrees(72)
        return angle_from_degrees(36)


@dataclass(frozen=True)
class Triangle:
    """
    A Robinson triangle stored by its base edge start -> end.

    The third vertex (the apex) is never stored, it is derived from the
    base edge and kind.side_angle and always lies to the left of the
    direction start -> end. Points are complex numbers x + 1j*y.
    """

    kind: TriangleClass
    start: complex
    end: complex
    mirrored: bool = False

    def __post_init__(self):
        if not isinstance(self.kind, TriangleClass):
            raise TypeError(f"kind must be a TriangleClass, got {self.kind!r}")

    @classmethod
    def from_endpoints(cls, kind, start, end, mirrored=False):
        """Build a triangle from its two base points."""
        return cls(kind, complex(start), complex(end), mirrored)

    @classmethod
    def from_middle(cls, kind, start, middle, mirrored=False):
        """
        Build a triangle from its start point and a middle point.

        The end point is the start point rotated about the middle point by
        +kind.base_angle. The rotation sign does not depend on mirrored.
        """
        start, middle = complex(start), complex(middle)
        side_length = abs(start - middle)
        if side_length == 0:
            raise DegenerateTriangleError(f"start and middle point coincide at {start}")

        direction = (start - middle) / side_length * complex(math.cos(kind.base_angle), math.sin(kind.base_angle))
        end = middle + side_length * direction
        return cls(kind, start, end, mirrored)

    @property
    def apex(self):
        """The third vertex, offset from the base midpoint along the left normal."""
        side_length = abs(self.end - self.start)
        if side_length == 0:
            raise DegenerateTriangleError(f"start and end point coincide at {self.start}")

        mid_point = 0.5 * (self.start + self.end)
        # (start.y - end.y, end.x - start.x) is 1j * (end - start)
        direction = 1j * (self.end - self.start) / side_length
        length = 0.5 * side_length * math.tan(self.kind.side_angle)
        return mid_point + length * direction

    def vertices(self):
        """Return all 3 vertices of the triangle."""
        return [self.start, self.apex, self.end]

    def path_points(self):
        """Points in drawing order: move to start, line to apex, line to end."""
        return (self.start, self.apex, self.end)

    @property
    def area(self):
        a, b, c = self.vertices()
        return 0.5 * abs(((b - a).conjugate() * (c - a)).imag)
