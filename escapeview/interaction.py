"""
Pan and zoom state machine.

apply_event is a pure function from (state, event) to (new state,
whether the view changed and must be re-rendered). The state is Idle
while no pan anchor is set and Panning while one is.
"""

from __future__ import annotations

import cmath
import logging
import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .config import ZOOM_ANCHORED, ZOOM_UNANCHORED, ConfigurationError
from .events import (
    PRIMARY_BUTTON,
    ButtonPress,
    ButtonRelease,
    CursorMove,
    Resize,
    Scroll,
)
from .view import ViewState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InteractionState:
    """
    Current view plus cursor tracking.

    Attributes:
        view: The ViewState being displayed
        cursor: Last known cursor position in pixels
        anchor: Cursor position captured at button press, None when idle
    """

    view: ViewState = ViewState()
    cursor: Tuple[float, float] = (0.0, 0.0)
    anchor: Optional[Tuple[float, float]] = None

    @property
    def panning(self) -> bool:
        return self.anchor is not None


def resize(state: InteractionState, width: int, height: int) -> InteractionState:
    """Apply new window dimensions, clamping degenerate sizes to 1 pixel."""
    if width < 1 or height < 1:
        logger.warning("Clamping viewport size %dx%d to at least 1x1", width, height)
        width, height = max(int(width), 1), max(int(height), 1)
    return replace(state, view=state.view.resized(width, height))


def pan(view: ViewState, start: Tuple[float, float], end: Tuple[float, float]) -> ViewState:
    """Move the view so that the plane point under `start` ends up under `end`."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if dx == 0 and dy == 0:
        return view
    displacement = complex(-dx, dy) / view.greater_dim * view.scale
    return view.moved(view.center + displacement)


def zoom(view: ViewState, cursor: Tuple[float, float], delta: float,
         policy: str = ZOOM_ANCHORED) -> ViewState:
    """
    Zoom by exp(delta).

    Anchored: the plane point under the cursor stays under the cursor and
    the scale is divided by the factor. Unanchored: the scale is multiplied
    by the factor and the center does not move. A zoom that would leave
    the range of positive finite doubles leaves the view unchanged.
    """
    if policy not in (ZOOM_ANCHORED, ZOOM_UNANCHORED):
        raise ConfigurationError(f"unknown zoom policy {policy!r}")
    try:
        factor = math.exp(delta)
    except OverflowError:
        factor = math.inf
    if not 0.0 < factor < math.inf:
        logger.warning("Ignoring scroll delta %r: zoom factor out of range", delta)
        return view

    if policy == ZOOM_UNANCHORED:
        scale = view.scale * factor
        center = view.center
    else:
        point_under_cursor = view.xy_to_point(cursor[0], cursor[1])
        center_diff = view.center - point_under_cursor
        scale = view.scale / factor
        center = point_under_cursor + center_diff / factor

    # Stop at the limits of double precision instead of producing a
    # zero or infinite scale
    if not (0.0 < scale < math.inf and cmath.isfinite(center)):
        logger.warning("Zoom limit reached at scale %g; ignoring scroll", view.scale)
        return view
    return view.moved(center, scale)


def apply_event(state: InteractionState, event,
                zoom_policy: str = ZOOM_ANCHORED) -> Tuple[InteractionState, bool]:
    """
    Advance the interaction state by one event.

    Args:
        state: Current InteractionState
        event: One of the events in events.py
        zoom_policy: 'anchored' or 'unanchored'

    Returns:
        (new_state, needs_render)
    """
    if isinstance(event, Resize):
        return resize(state, event.width, event.height), True

    if isinstance(event, CursorMove):
        return replace(state, cursor=(float(event.x), float(event.y))), False

    if isinstance(event, ButtonPress):
        if event.button != PRIMARY_BUTTON or state.panning:
            return state, False
        return replace(state, anchor=state.cursor), False

    if isinstance(event, ButtonRelease):
        if event.button != PRIMARY_BUTTON or not state.panning:
            return state, False
        view = pan(state.view, state.anchor, state.cursor)
        return replace(state, view=view, anchor=None), True

    if isinstance(event, Scroll):
        view = zoom(state.view, state.cursor, event.delta, zoom_policy)
        return replace(state, view=view), True

    logger.debug("Ignoring unsupported event %r", event)
    return state, False
