import argparse

import matplotlib.pyplot as plt
from matplotlib.patches import PathPatch
from matplotlib.path import Path

from penrose_deflation import PenroseTiling, filter_by_class
from penrose_triangle import TriangleClass

# Range of the iteration stepper
MIN_LEVELS = 1
MAX_LEVELS = 7

# Default configuration
DEFAULT_CONFIG = {
    'acute-colour': 'yellow',
    'obtuse-colour': 'green',
    'stroke-colour': 'black',
    'stroke-width': 0.5,
    'tile-opacity': 1.0,
    'figsize': (8, 8),
    'dpi': 100,
    'margin': 1.05,
    'invert-y': True,
}

TRIANGLE_CODES = [Path.MOVETO, Path.LINETO, Path.LINETO]


def clamp_levels(levels, lowest=MIN_LEVELS, highest=MAX_LEVELS):
    if lowest > highest:
        raise ValueError(f"empty level range {lowest}..{highest}")
    return max(lowest, min(highest, int(levels)))


def triangle_path(triangle):
    """
    Path tracing two sides of the triangle: move to start, line to apex,
    line to end. The fill closes it back to start.
    """
    xy = [[v.real, v.imag] for v in triangle.path_points()]
    return Path(xy, TRIANGLE_CODES)


def class_path(triangles, kind):
    """One compound path holding every triangle of the given class."""
    return Path.make_compound_path(*[triangle_path(t) for t in filter_by_class(triangles, kind)])


def draw_tiling(triangles, ax=None, config=None, title=None):
    """
    Draw the tiling with matplotlib: both classes filled with their own
    colour, then every triangle stroked on top.

    Args:
        triangles: list of Triangle
        ax: Optional axes to draw into, a new figure is made otherwise
        config: Dictionary of rendering options overriding DEFAULT_CONFIG
        title: Plot title

    Returns:
        fig, ax
    """
    cfg = dict(DEFAULT_CONFIG)
    if config:
        cfg.update(config)

    if ax is None:
        fig, ax = plt.subplots(figsize=cfg['figsize'], dpi=cfg['dpi'])
    else:
        fig = ax.figure

    fills = {
        TriangleClass.ACUTE: cfg['acute-colour'],
        TriangleClass.OBTUSE: cfg['obtuse-colour'],
    }
    for kind, colour in fills.items():
        path = class_path(triangles, kind)
        ax.add_patch(PathPatch(path, facecolor=colour, edgecolor='none', alpha=cfg['tile-opacity']))
    for kind in fills:
        path = class_path(triangles, kind)
        ax.add_patch(PathPatch(path, facecolor='none', edgecolor=cfg['stroke-colour'],
                               linewidth=cfg['stroke-width']))

    if triangles:
        xs = [v.real for t in triangles for v in t.path_points()]
        ys = [v.imag for t in triangles for v in t.path_points()]
        cx, cy = 0.5 * (min(xs) + max(xs)), 0.5 * (min(ys) + max(ys))
        half = 0.5 * cfg['margin'] * max(max(xs) - min(xs), max(ys) - min(ys))
        ax.set_xlim(cx - half, cx + half)
        ax.set_ylim(cy - half, cy + half)

    # Screen space: y grows downwards, the first fan triangle points up
    if cfg['invert-y']:
        ax.invert_yaxis()

    ax.set_aspect('equal', adjustable='box')
    ax.axis('off')
    if title:
        ax.set_title(title, fontsize=16, pad=20)
    return fig, ax


def build_parser():
    parser = argparse.ArgumentParser(description='Penrose Robinson Triangle Tiling')
    parser.add_argument('-s', '--levels', type=int, default=MIN_LEVELS, metavar='levels',
                        help=f'Number of deflation iterations ({MIN_LEVELS}-{MAX_LEVELS})')
    parser.add_argument('--radius', type=float, default=150.0,
                        help="Radius of the initial decagon fan.")
    parser.add_argument('--output', default=None,
                        help="Save the figure to this file (format from the extension).")
    parser.add_argument('--no-show', action='store_true',
                        help="Do not open a window.")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    print("=" * 60)
    print("PENROSE ROBINSON TRIANGLE TILING")
    print("=" * 60)

    levels = clamp_levels(args.levels)
    if levels != args.levels:
        print(f"  Levels clamped from {args.levels} to {levels}")

    print(f"\nGenerating Penrose tiling with {levels} deflation levels...")
    tiling = PenroseTiling(divisions=levels, radius=args.radius)
    tiling.make_tiling()
    print(f"✓ Generated {len(tiling.triangles)} triangles")

    stats = tiling.get_statistics()
    print("-" * 40)
    print(f"acute triangles  = {stats['acute']}")
    print(f"obtuse triangles = {stats['obtuse']}")
    print(f"obtuse / acute   = {stats['obtuse_to_acute_ratio']: .6f}")
    print(f"unique vertices  = {stats['vertices']}")
    print(f"total area       = {stats['area']: .6f}")
    print("-" * 40)

    fig, _ = draw_tiling(tiling.triangles, title=f"Penrose Tiling ({levels} levels)")
    if args.output:
        fig.savefig(args.output, dpi=150, bbox_inches='tight')
        print(f"✓ Saved figure to {args.output}")
    if not args.no_show:
        plt.show()
    plt.close(fig)
    return tiling


if __name__ == "__main__":
    main()
