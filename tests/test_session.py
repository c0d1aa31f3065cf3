from __future__ import annotations

import numpy as np

from escapeview.config import RenderSettings
from escapeview.events import ButtonPress, ButtonRelease, CursorMove, Resize, Scroll
from escapeview.session import ExplorerSession
from escapeview.view import ViewState

SMALL = RenderSettings(max_iter=32)


def test_session_renders_placeholder_on_start() -> None:
    session = ExplorerSession(SMALL)
    assert session.generation == 1
    assert session.image.shape == (10, 10, 4)


def test_resize_replaces_the_buffer() -> None:
    session = ExplorerSession(SMALL)
    before = session.image
    assert session.handle(Resize(40, 30)) is True
    assert session.generation == 2
    assert session.image.shape == (30, 40, 4)
    assert session.image is not before


def test_cursor_moves_do_not_regenerate() -> None:
    session = ExplorerSession(SMALL)
    assert session.handle(CursorMove(3, 4)) is False
    assert session.handle(ButtonPress()) is False
    assert session.generation == 1


def test_drag_and_scroll_regenerate_once_each() -> None:
    session = ExplorerSession(SMALL)
    session.handle(Resize(20, 20))
    for event in (CursorMove(5, 5), ButtonPress(), CursorMove(15, 8), ButtonRelease(), Scroll(1.0)):
        session.handle(event)
    assert session.generation == 4
    assert session.view.scale < 4.0


def test_bgra_bytes_is_row_major_with_four_channels() -> None:
    session = ExplorerSession(SMALL, view=ViewState(width=6, height=3))
    raw = session.bgra_bytes()
    assert len(raw) == 6 * 3 * 4
    assert raw == np.ascontiguousarray(session.image).tobytes()


def test_reset_restores_default_view_and_keeps_size() -> None:
    session = ExplorerSession(SMALL)
    session.handle(Resize(24, 16))
    session.handle(Scroll(2.0))
    session.reset()
    assert session.view == ViewState(width=24, height=16)
    assert session.image.shape == (16, 24, 4)


def test_unanchored_policy_is_forwarded() -> None:
    session = ExplorerSession(RenderSettings(max_iter=32, zoom_policy="unanchored"))
    session.handle(CursorMove(1, 1))
    session.handle(Scroll(1.0))
    assert session.view.center == complex(-0.5, 0.0)


def test_long_zoom_sequences_never_break_the_session() -> None:
    session = ExplorerSession(SMALL, view=ViewState(width=4, height=4))
    session.handle(CursorMove(1, 2))
    for _ in range(800):
        session.handle(Scroll(1.0))
    session.handle(Scroll(800.0))
    assert 0.0 < session.view.scale
    assert session.image.shape == (4, 4, 4)
    assert np.all(session.image[:, :, 3] == 255)
