"""Property-based checks of the viewport, pan and zoom invariants."""

from __future__ import annotations

import math

import pytest

from escapeview.events import ButtonPress, ButtonRelease, CursorMove, Scroll
from escapeview.interaction import InteractionState, apply_event
from escapeview.view import ViewState

try:
    from hypothesis import given
    from hypothesis import strategies as st
except ModuleNotFoundError:  # pragma: no cover - environment-specific fallback
    pytest.skip("hypothesis is required for property-based tests", allow_module_level=True)


SIZES = st.integers(min_value=1, max_value=4000)
COORDS = st.floats(min_value=-2.0, max_value=2.0, allow_nan=False)
SCALES = st.floats(min_value=1e-6, max_value=10.0, allow_nan=False)
DELTAS = st.floats(min_value=-3.0, max_value=3.0, allow_nan=False)


@st.composite
def views(draw):
    return ViewState(
        center=complex(draw(COORDS), draw(COORDS)),
        scale=draw(SCALES),
        width=draw(SIZES),
        height=draw(SIZES),
    )


@st.composite
def view_and_pixel(draw):
    view = draw(views())
    x = draw(st.floats(min_value=0.0, max_value=float(view.width), allow_nan=False))
    y = draw(st.floats(min_value=0.0, max_value=float(view.height), allow_nan=False))
    return view, (x, y)


@given(view=views())
def test_center_pixel_maps_to_center(view: ViewState) -> None:
    point = view.xy_to_point(view.width / 2, view.height / 2)
    assert point.real == pytest.approx(view.center.real, abs=1e-12)
    assert point.imag == pytest.approx(view.center.imag, abs=1e-12)


@given(start=view_and_pixel(), end=view_and_pixel())
def test_pan_keeps_grabbed_point_under_cursor(start, end) -> None:
    view, p1 = start
    _, p2 = end
    grabbed = view.xy_to_point(*p1)
    state = InteractionState(view=view)
    for event in (CursorMove(*p1), ButtonPress(), CursorMove(*p2), ButtonRelease()):
        state, _ = apply_event(state, event)
    moved = state.view.xy_to_point(*p2)
    tolerance = 1e-9 * max(1.0, view.scale)
    assert abs(moved - grabbed) <= tolerance + 1e-12 * abs(grabbed)


@given(start=view_and_pixel(), delta=DELTAS)
def test_anchored_zoom_keeps_point_under_cursor(start, delta: float) -> None:
    view, cursor = start
    anchored = view.xy_to_point(*cursor)
    state = InteractionState(view=view, cursor=cursor)
    state, needs_render = apply_event(state, Scroll(delta))
    assert needs_render
    assert state.view.scale == pytest.approx(view.scale / math.exp(delta), rel=1e-12)
    x, y = state.view.point_to_xy(anchored)
    greater_dim = max(view.width, view.height)
    assert x == pytest.approx(cursor[0], abs=1e-6 * greater_dim)
    assert y == pytest.approx(cursor[1], abs=1e-6 * greater_dim)
