from __future__ import annotations

import numpy as np
import pytest

from escapeview.colormaps import color_palette
from escapeview.compute import evaluate_point
from escapeview.config import RenderSettings
from escapeview.renderer import FractalRenderer
from escapeview.view import ViewState

SMALL = RenderSettings(max_iter=64)


def test_buffer_layout_is_height_width_bgra() -> None:
    buffer = FractalRenderer(SMALL).render(ViewState(width=7, height=5))
    assert buffer.shape == (5, 7, 4)
    assert buffer.dtype == np.uint8
    assert np.all(buffer[:, :, 3] == 255)


def test_single_pixel_render_equals_direct_composition() -> None:
    view = ViewState(center=complex(-0.5, 0.0), scale=4.0, width=1, height=1)
    buffer = FractalRenderer().render(view)
    expected = color_palette(evaluate_point(view.xy_to_point(0, 0), 2048), 2048)
    assert tuple(int(v) for v in buffer[0, 0]) == expected


@pytest.mark.parametrize("palette", ["sinusoidal", "banded"])
def test_every_pixel_equals_direct_composition(palette: str) -> None:
    settings = RenderSettings(max_iter=64, palette=palette, bailout=2.0)
    view = ViewState(center=complex(-0.7, 0.2), scale=3.0, width=9, height=6)
    buffer = FractalRenderer(settings).render(view)
    for y in range(view.height):
        for x in range(view.width):
            result = evaluate_point(view.xy_to_point(x, y), 64, 2.0)
            assert tuple(int(v) for v in buffer[y, x]) == color_palette(result, 64, palette)


def test_view_inside_the_set_is_black() -> None:
    view = ViewState(center=0j, scale=1e-3, width=4, height=4)
    buffer = FractalRenderer(SMALL).render(view)
    assert np.all(buffer[:, :, :3] == 0)
    assert np.all(buffer[:, :, 3] == 255)


def test_render_is_deterministic_across_backends_and_worker_counts() -> None:
    view = ViewState(center=complex(-0.75, 0.1), scale=0.5, width=37, height=23)
    reference = FractalRenderer(RenderSettings(max_iter=200)).render(view)

    variants = [
        RenderSettings(max_iter=200, workers=1),
        RenderSettings(max_iter=200, workers=2),
        RenderSettings(max_iter=200, backend="threads", workers=1),
        RenderSettings(max_iter=200, backend="threads", workers=3),
        RenderSettings(max_iter=200, backend="threads"),
    ]
    for settings in variants:
        assert FractalRenderer(settings).render(view).tobytes() == reference.tobytes()


def test_each_render_returns_a_fresh_buffer() -> None:
    renderer = FractalRenderer(SMALL)
    first = renderer.render(ViewState(width=4, height=4))
    second = renderer.render(ViewState(width=4, height=4))
    assert first is not second
    assert np.array_equal(first, second)



def test_warmup_compiles_without_error() -> None:
    FractalRenderer(SMALL).warmup()
