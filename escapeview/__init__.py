"""
Escape-time Fractal Explorer Package

An interactive Mandelbrot set explorer: drag to pan, scroll to zoom.
Rendering is done by Numba JIT-compiled kernels into BGRA buffers;
pygame provides the window.

Quick Start:
    from escapeview import run
    run()

Or from command line:
    python -m escapeview

Package Structure:
    - compute.py: JIT-compiled viewport mapping, escape time and render kernels
    - colormaps.py: Palettes (sinusoidal, banded)
    - results.py: Escaped / Bounded escape results
    - view.py: ViewState (center, scale, pixel size)
    - events.py: Abstract interaction events
    - interaction.py: Pan/zoom state machine
    - renderer.py: Full-frame renderer (prange or thread pool)
    - session.py: Owns the view state and current image
    - config.py: Settings loading and validation
    - app.py: pygame window and event loop

Controls:
    - Scroll: Zoom in/out at mouse position
    - Drag: Pan around
    - R: Reset to default view
    - S: Save a screenshot
    - ESC: Quit
"""

from .app import run, ExplorerApp
from .colormaps import PALETTES, color_palette, list_palette_names
from .compute import evaluate_point
from .config import ConfigurationError, RenderSettings, load_settings
from .events import ButtonPress, ButtonRelease, CursorMove, Resize, Scroll
from .interaction import InteractionState, apply_event
from .renderer import FractalRenderer
from .results import BOUNDED, Bounded, Escaped
from .session import ExplorerSession
from .view import ViewState

__version__ = "1.0.0"
__all__ = [
    "run",
    "ExplorerApp",
    "PALETTES",
    "color_palette",
    "list_palette_names",
    "evaluate_point",
    "ConfigurationError",
    "RenderSettings",
    "load_settings",
    "ButtonPress",
    "ButtonRelease",
    "CursorMove",
    "Resize",
    "Scroll",
    "InteractionState",
    "apply_event",
    "FractalRenderer",
    "BOUNDED",
    "Bounded",
    "Escaped",
    "ExplorerSession",
    "ViewState",
]
