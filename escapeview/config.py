"""
Render and interaction settings.

Defaults live in settings.json next to this file. A user settings file
can be passed on the command line; its known keys are merged over the
defaults. Command-line flags override both.
"""

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Optional

from .colormaps import PALETTES
from .compute import BAILOUT_MINIMAL, BAILOUT_REFERENCE, DEFAULT_MAX_ITER

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')

ZOOM_ANCHORED = 'anchored'
ZOOM_UNANCHORED = 'unanchored'
ZOOM_POLICIES = (ZOOM_ANCHORED, ZOOM_UNANCHORED)

BACKEND_NUMBA = 'numba'
BACKEND_THREADS = 'threads'
BACKENDS = (BACKEND_NUMBA, BACKEND_THREADS)


class ConfigurationError(ValueError):
    """Raised for view dimensions or settings the explorer cannot work with."""


@dataclass(frozen=True)
class RenderSettings:
    """
    Everything that changes how a view is turned into pixels or how
    gestures move the view.

    Attributes:
        max_iter: Iteration budget per pixel
        bailout: Escape radius; 16 is the reference, 2 the minimal variant
        palette: Palette name (see colormaps.PALETTES)
        sqrt_passes: Square-root compressions applied before the palette
        zoom_policy: 'anchored' keeps the point under the cursor fixed,
            'unanchored' only rescales around the center
        backend: 'numba' (prange kernel) or 'threads' (thread pool of
            nogil row kernels)
        workers: Worker count for the render pass (None = all cores)
    """

    max_iter: int = DEFAULT_MAX_ITER
    bailout: float = BAILOUT_REFERENCE
    palette: str = 'sinusoidal'
    sqrt_passes: int = 1
    zoom_policy: str = ZOOM_ANCHORED
    backend: str = BACKEND_NUMBA
    workers: Optional[int] = None

    def validate(self):
        """Return self if every field is usable, raise ConfigurationError otherwise."""
        if self.max_iter < 1:
            raise ConfigurationError(f"max_iter must be >= 1, got {self.max_iter}")
        if not self.bailout >= BAILOUT_MINIMAL:
            raise ConfigurationError(
                f"bailout must be >= {BAILOUT_MINIMAL}, got {self.bailout}"
            )
        if self.palette not in PALETTES:
            raise ConfigurationError(
                f"unknown palette {self.palette!r}, choose from {sorted(PALETTES)}"
            )
        if self.sqrt_passes not in (1, 2):
            raise ConfigurationError(f"sqrt_passes must be 1 or 2, got {self.sqrt_passes}")
        if self.zoom_policy not in ZOOM_POLICIES:
            raise ConfigurationError(
                f"unknown zoom policy {self.zoom_policy!r}, choose from {ZOOM_POLICIES}"
            )
        if self.backend not in BACKENDS:
            raise ConfigurationError(
                f"unknown backend {self.backend!r}, choose from {BACKENDS}"
            )
        if self.workers is not None and self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")
        return self

    def updated(self, **changes):
        """Copy with the given fields replaced; None values are ignored."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes).validate()


def _read_json(path):
    try:
        with open(path, 'r') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load settings from %s: %s", path, e)
        return None


def load_settings(path=None):
    """
    Load settings, merging a user file over the packaged defaults.

    Unknown keys are logged and ignored. A missing or malformed file
    falls back to the defaults; values that fail validation raise
    ConfigurationError.

    Args:
        path: Optional user settings file (JSON object)

    Returns:
        Validated RenderSettings
    """
    known = {f.name for f in fields(RenderSettings)}
    values = {}
    for source in (DEFAULT_SETTINGS_PATH, path):
        if source is None:
            continue
        data = _read_json(source)
        if data is None:
            continue
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a JSON object", source)
            continue
        for key, value in data.items():
            if key in known:
                values[key] = value
            else:
                logger.warning("Ignoring unknown setting %r in %s", key, source)
    settings = RenderSettings(**values).validate()
    logger.debug("Loaded settings: %s", settings)
    return settings
