import numpy as np
from numba import njit, config
from scipy.spatial import KDTree

from penrose_triangle import Triangle, TriangleClass

# Enable Numba disk caching
config.CACHE_DIR = '.numba_cache'

# Golden ratio
phi = (5 ** 0.5 + 1) / 2

# Constants
TOL = 1e-5

ACUTE = TriangleClass.ACUTE
OBTUSE = TriangleClass.OBTUSE


def golden_point(p, q):
    """Point on the segment p -> q splitting it in the golden ratio, closer to p."""
    return phi / (1 + phi) * p + 1 / (1 + phi) * q


def deflate_one(triangle):
    """
    Replace one Robinson triangle by its smaller children.

    An acute triangle gives 1 acute + 1 obtuse, an obtuse triangle gives
    1 acute + 2 obtuse. The rule is picked by (kind, mirrored), and every
    child's apex is derived again from its own start/end pair.
    """
    start, end, apex = triangle.start, triangle.end, triangle.apex
    mirrored = triangle.mirrored

    if triangle.kind is ACUTE:
        if not mirrored:
            p = golden_point(start, apex)
            return [
                Triangle(ACUTE, p, start, mirrored),
                Triangle(OBTUSE, end, apex, mirrored),
            ]
        p = golden_point(end, apex)
        return [
            Triangle(ACUTE, end, p, mirrored),
            Triangle(OBTUSE, apex, start, mirrored),
        ]

    if not mirrored:
        base = golden_point(end, start)
        side = golden_point(apex, start)
        return [
            Triangle(ACUTE, apex, side, not mirrored),
            Triangle(OBTUSE, start, base, not mirrored),
            Triangle(OBTUSE, end, apex, mirrored),
        ]
    base = golden_point(start, end)
    side = golden_point(apex, end)
    return [
        Triangle(ACUTE, side, apex, not mirrored),
        Triangle(OBTUSE, base, end, not mirrored),
        Triangle(OBTUSE, apex, start, mirrored),
    ]


def deflate(triangles, levels=0):
    """
    Deflate a whole collection `levels` times.

    Every triangle of one generation is replaced before the next generation
    starts; children keep the order of their parents. levels <= 0 returns
    the input unchanged.
    """
    triangles = list(triangles)
    for _ in range(levels):
        new_triangles = []
        for triangle in triangles:
            new_triangles.extend(deflate_one(triangle))
        triangles = new_triangles
    return triangles


def build_initial_fan(center=0j, radius=1.0):
    """
    Create the initial "wheel" of 10 acute triangles around `center`.

    The first triangle starts straight above the center in screen space
    (center - 1j*radius); each next one starts where the previous one ends,
    so the ten bases close into a decagon and every apex is the center.
    Mirror flags alternate False, True, False, ...
    """
    center = complex(center)
    triangles = [Triangle.from_middle(ACUTE, center - 1j * radius, center)]
    for i in range(1, 10):
        triangles.append(Triangle.from_middle(ACUTE, triangles[i - 1].end, center, mirrored=i % 2 == 1))
    return triangles


def filter_by_class(triangles, kind):
    return [t for t in triangles if t.kind is kind]


def triangles_to_array(triangles):
    """Return an (N, 3, 2) array holding start, apex and end of every triangle."""
    coords = np.empty((len(triangles), 3, 2), dtype=np.float64)
    for i, triangle in enumerate(triangles):
        for j, v in enumerate(triangle.path_points()):
            coords[i, j, 0] = v.real
            coords[i, j, 1] = v.imag
    return coords


@njit(cache=True)
def triangle_areas(coords):
    """Unsigned area of each triangle in an (N, 3, 2) coordinate array."""
    n = coords.shape[0]
    areas = np.empty(n, dtype=np.float64)
    for i in range(n):
        ax, ay = coords[i, 0, 0], coords[i, 0, 1]
        bx, by = coords[i, 1, 0], coords[i, 1, 1]
        cx, cy = coords[i, 2, 0], coords[i, 2, 1]
        areas[i] = 0.5 * abs((bx - ax) * (cy - ay) - (by - ay) * (cx - ax))
    return areas


def total_area(triangles):
    triangles = list(triangles)
    if not triangles:
        return 0.0
    return float(triangle_areas(triangles_to_array(triangles)).sum())


def unique_vertices(triangles, tol=TOL):
    """
    Deduplicate the vertices shared between neighbouring triangles.

    Args:
        triangles: iterable of Triangle
        tol: points closer than this are treated as the same vertex

    Returns:
        (M, 2) array of unique vertex coordinates
    """
    triangles = list(triangles)
    if not triangles:
        return np.empty((0, 2), dtype=np.float64)

    nodes = triangles_to_array(triangles).reshape(-1, 2)

    tree = KDTree(nodes)
    pairs = tree.query_pairs(r=tol)

    # Union-find to merge duplicates
    parent = np.arange(len(nodes))

    def find(x):
        root = x
        while parent[root] != root:
            root = parent[root]
        while x != root:
            next_x = parent[x]
            parent[x] = root
            x = next_x
        return root

    for i, j in pairs:
        ri, rj = find(i), find(j)
        if ri != rj:
            parent[rj] = ri

    roots = np.unique([find(i) for i in range(len(nodes))])
    return nodes[roots]


class PenroseTiling:
    """
    Builds a Penrose tiling of Robinson triangles: an initial fan of ten
    acute triangles deflated `divisions` times.
    """

    def __init__(self, divisions=4, radius=1.0, center=0j):
        """
        Args:
            divisions: Number of deflation levels
            radius: Distance from the center to the corners of the initial decagon
            center: Center of the initial fan, as a complex number
        """
        if divisions < 0:
            raise ValueError("divisions must be >= 0")
        if radius <= 0:
            raise ValueError("radius must be > 0")

        self.divisions = divisions
        self.radius = radius
        self.center = complex(center)

        self.triangles = []

    def create_initial_tiles(self):
        self.triangles = build_initial_fan(self.center, self.radius)

    def subdivide_all(self):
        """Perform all deflation levels, stores results in an array"""
        self.triangles = deflate(self.triangles, self.divisions)

    def make_tiling(self):
        """Generate the complete Penrose tiling."""
        self.create_initial_tiles()
        self.subdivide_all()
        return self.triangles

    def get_statistics(self):
        """Return statistics about the tiling."""
        acute_count = len(filter_by_class(self.triangles, ACUTE))
        obtuse_count = len(filter_by_class(self.triangles, OBTUSE))
        total = len(self.triangles)

        return {
            'total': total,
            'acute': acute_count,
            'obtuse': obtuse_count,
            'acute_ratio': acute_count / total if total > 0 else 0,
            'obtuse_ratio': obtuse_count / total if total > 0 else 0,
            'obtuse_to_acute_ratio': obtuse_count / acute_count if acute_count > 0 else 0,
            'area': total_area(self.triangles),
            'vertices': len(unique_vertices(self.triangles)),
        }
