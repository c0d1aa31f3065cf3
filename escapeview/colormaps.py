"""
Palette definitions for the escape-time explorer.

A palette is a pure function of a normalized escape value t in [0, 1]
returning an (r, g, b) triple of 8-bit channel values. Palettes are
JIT-compiled so the render kernels can call them per pixel.

To add a new palette:
1. Define a JIT-compiled palette_xxx(t) function returning (r, g, b)
2. Give it an id, dispatch to it in palette_rgb and register it in PALETTES
"""

import math

from numba import njit

from .results import Escaped


PALETTE_SINUSOIDAL = 0
PALETTE_BANDED = 1

# Bounded points are always opaque black, whatever the palette
INSIDE_COLOR = (0, 0, 0, 255)


@njit(cache=True)
def palette_sinusoidal(t):
    """
    Sinusoidal palette: three phase-shifted sin² waves.

    Smoothly cycling and non-monotonic, so neighbouring escape bands
    stay distinguishable even deep in the zoom.
    """
    half_pi = math.pi / 2.0
    r = int(math.sin(half_pi * t) ** 2 * 255.0)
    g = int(math.sin(3.0 * half_pi * t) ** 2 * 255.0)
    b = int(math.sin(7.0 * half_pi * t) ** 2 * 255.0)
    return r, g, b


@njit(cache=True)
def palette_banded(t):
    """
    Banded linear palette: deep blue -> cyan -> white.

    Monotonic dark-to-light gradient in three bands:
    [0, 0.1) blue ramps up, [0.1, 0.5) green ramps up,
    [0.5, 1] red ramps up.
    """
    if t < 0.1:
        return 0, 0, int(255.0 * t / 0.1)
    elif t < 0.5:
        return 0, int(255.0 * (t - 0.1) / 0.4), 255
    return int(255.0 * (t - 0.5) / 0.5), 255, 255


@njit(cache=True)
def palette_rgb(t, palette_id):
    """Dispatch to the palette selected by palette_id."""
    if palette_id == PALETTE_BANDED:
        return palette_banded(t)
    return palette_sinusoidal(t)


@njit(cache=True)
def palette_color(escaped, count, max_iter, palette_id, sqrt_passes):
    """
    Color one escape result.

    Args:
        escaped: Whether the point escaped
        count: Smoothed iteration count (ignored for bounded points)
        max_iter: Iteration budget used to normalize the count
        palette_id: PALETTE_SINUSOIDAL or PALETTE_BANDED
        sqrt_passes: How many times to apply the square-root compression

    Returns:
        (b, g, r, a) with a always 255
    """
    if not escaped:
        return 0, 0, 0, 255
    t = min(max(count / max_iter, 0.0), 1.0)
    for _ in range(sqrt_passes):
        t = math.sqrt(t)
    r, g, b = palette_rgb(t, palette_id)
    return b, g, r, 255


# Registry of all available palettes.
# Keys are names used in settings and on the command line.
PALETTES = {
    'sinusoidal': PALETTE_SINUSOIDAL,
    'banded': PALETTE_BANDED,
}


def get_palette_id(name):
    """
    Get a palette id by name.

    Raises:
        KeyError if name not found
    """
    return PALETTES[name]


def list_palette_names():
    """Get list of available palette names."""
    return list(PALETTES.keys())


def color_palette(result, max_iter, palette='sinusoidal', sqrt_passes=1):
    """
    Map an escape result to an opaque BGRA color.

    Args:
        result: Escaped(count) or BOUNDED (see compute.py)
        max_iter: Iteration budget the result was computed with
        palette: Palette name from PALETTES
        sqrt_passes: 1 or 2 square-root compressions

    Returns:
        (b, g, r, a) tuple of ints
    """
    if not isinstance(result, Escaped):
        return INSIDE_COLOR
    return tuple(palette_color(True, float(result.count), int(max_iter),
                               get_palette_id(palette), int(sqrt_passes)))
