"""
Escape-time computation functions using Numba JIT compilation.

This module contains the performance-critical functions of the explorer.
Every pixel goes through the same three steps:
- xy_to_point: map a pixel to a point on the complex plane
- escape_time: iterate z² + c and produce a smoothed escape count
- palette_color (see colormaps.py): turn the count into a BGRA color

The kernels at the bottom of the file run those steps over a whole
image. They call exactly the same JIT functions as the public Python
wrappers, so a rendered pixel is bit-for-bit equal to composing the
wrappers by hand.
"""

import math

import numpy as np
from numba import njit, prange

from .colormaps import palette_color
from .results import BOUNDED, Escaped


# Iteration budget used by the reference explorer
DEFAULT_MAX_ITER = 2048

# Bailout radii. 16 keeps the smoothing formula accurate; 2 is the
# minimal radius at which escape is guaranteed.
BAILOUT_REFERENCE = 16.0
BAILOUT_MINIMAL = 2.0


@njit(cache=True)
def xy_to_point(x, y, center_re, center_im, scale, width, height):
    """
    Map pixel coordinates to a point on the complex plane.

    The viewport is normalized by its longer side, so the shorter side
    is letterboxed instead of stretched. Pixel row 0 is the top of the
    image while the imaginary axis grows upward.

    Returns:
        (re, im) of the point under the pixel
    """
    greater_dim = float(max(width, height))
    width_ratio = width / greater_dim
    height_ratio = height / greater_dim
    nx = (x / greater_dim - 0.5 * width_ratio) * scale
    ny = (0.5 * height_ratio - y / greater_dim) * scale
    return center_re + nx, center_im + ny


@njit(cache=True)
def point_to_xy(re, im, center_re, center_im, scale, width, height):
    """Inverse of xy_to_point: pixel coordinates of a plane point."""
    greater_dim = float(max(width, height))
    width_ratio = width / greater_dim
    height_ratio = height / greater_dim
    x = ((re - center_re) / scale + 0.5 * width_ratio) * greater_dim
    y = (0.5 * height_ratio - (im - center_im) / scale) * greater_dim
    return x, y


@njit(cache=True)
def escape_time(cr, ci, max_iter, bailout):
    """
    Iterate z² + c from z = 0 and report whether and when it escapes.

    No cardioid or periodicity shortcuts: points inside the set always
    run the full budget.

    Args:
        cr, ci: Real and imaginary parts of c
        max_iter: Iteration budget
        bailout: Escape radius (|z| >= bailout counts as escaped)

    Returns:
        (escaped, count). count is the smoothed iteration count
        k + 1 - log2(ln|z|), clamped at zero, and is 0.0 when the
        point did not escape.
    """
    zr = 0.0
    zi = 0.0
    for i in range(max_iter):
        zr, zi = zr * zr - zi * zi + cr, 2.0 * zr * zi + ci
        norm = math.hypot(zr, zi)
        if norm >= bailout:
            count = i + 1.0 - math.log2(math.log(norm))
            return True, max(count, 0.0)
    return False, 0.0


@njit(cache=True)
def shade_pixel(x, y, center_re, center_im, scale, width, height,
                max_iter, bailout, palette_id, sqrt_passes):
    """Full per-pixel pipeline: map, evaluate, color. Returns (b, g, r, a)."""
    cr, ci = xy_to_point(x, y, center_re, center_im, scale, width, height)
    escaped, count = escape_time(cr, ci, max_iter, bailout)
    return palette_color(escaped, count, max_iter, palette_id, sqrt_passes)


@njit(parallel=True, cache=True)
def render_bgra(out, center_re, center_im, scale, max_iter, bailout,
                palette_id, sqrt_passes):
    """
    Render the whole image into `out` (height, width, 4) uint8, in place.

    Rows are distributed over the Numba thread pool; each pixel is
    written exactly once, so no two threads touch the same memory.
    """
    height, width = out.shape[0], out.shape[1]
    for py in prange(height):
        for px in range(width):
            b, g, r, a = shade_pixel(px, py, center_re, center_im, scale,
                                     width, height, max_iter, bailout,
                                     palette_id, sqrt_passes)
            out[py, px, 0] = b
            out[py, px, 1] = g
            out[py, px, 2] = r
            out[py, px, 3] = a


@njit(nogil=True, cache=True)
def render_rows(out, row_start, row_stop, center_re, center_im, scale,
                max_iter, bailout, palette_id, sqrt_passes):
    """
    Render rows [row_start, row_stop) of `out` in place.

    Releases the GIL so that several bands can be rendered concurrently
    from a thread pool.
    """
    height, width = out.shape[0], out.shape[1]
    for py in range(row_start, row_stop):
        for px in range(width):
            b, g, r, a = shade_pixel(px, py, center_re, center_im, scale,
                                     width, height, max_iter, bailout,
                                     palette_id, sqrt_passes)
            out[py, px, 0] = b
            out[py, px, 1] = g
            out[py, px, 2] = r
            out[py, px, 3] = a


def evaluate_point(c, max_iter=DEFAULT_MAX_ITER, bailout=BAILOUT_REFERENCE):
    """
    Evaluate a single point of the complex plane.

    Args:
        c: Complex number to test
        max_iter: Iteration budget
        bailout: Escape radius

    Returns:
        Escaped(count) if the orbit left the bailout disc, BOUNDED otherwise

    Raises:
        ValueError if bailout is below BAILOUT_MINIMAL, where the
        smoothing formula is undefined
    """
    if not bailout >= BAILOUT_MINIMAL:
        raise ValueError(f"bailout must be >= {BAILOUT_MINIMAL}, got {bailout}")
    c = complex(c)
    escaped, count = escape_time(c.real, c.imag, int(max_iter), float(bailout))
    if escaped:
        return Escaped(count)
    return BOUNDED


def warmup_jit():
    """
    Warm up JIT compilation with a tiny dummy image.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real render.
    """
    dummy = np.zeros((2, 2, 4), dtype=np.uint8)
    render_bgra(dummy, -0.5, 0.0, 4.0, 4, BAILOUT_REFERENCE, 0, 1)
    render_rows(dummy, 0, 2, -0.5, 0.0, 4.0, 4, BAILOUT_REFERENCE, 0, 1)
    xy_to_point(0.0, 0.0, -0.5, 0.0, 4.0, 2, 2)
