"""
Full-frame renderer.

The FractalRenderer class turns a ViewState into a BGRA pixel buffer:
- Every pixel is mapped, evaluated and colored independently
- Work is spread over a Numba prange kernel or a thread pool of
  nogil row kernels; both produce byte-identical buffers
- Each render allocates a fresh buffer, the previous one is never touched
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor

import numba
import numpy as np

from .colormaps import get_palette_id
from .compute import render_bgra, render_rows, warmup_jit
from .config import BACKEND_THREADS, RenderSettings

logger = logging.getLogger(__name__)


class FractalRenderer:
    """
    Renders views of the Mandelbrot set into BGRA buffers.

    Usage:
        renderer = FractalRenderer(RenderSettings(max_iter=512))
        buffer = renderer.render(ViewState(width=800, height=600))
        # buffer.shape == (600, 800, 4), channels B, G, R, A

    Attributes:
        settings: The RenderSettings in use
    """

    # Rows per thread-pool task; amortizes scheduling over many pixels
    ROWS_PER_TASK = 8

    def __init__(self, settings=None):
        """
        Initialize the renderer.

        Args:
            settings: RenderSettings (default: RenderSettings())
        """
        self.settings = (settings or RenderSettings()).validate()
        self._palette_id = get_palette_id(self.settings.palette)

    def warmup(self):
        """Compile the kernels ahead of the first real render."""
        start = time.perf_counter()
        warmup_jit()
        logger.debug("JIT warmup took %.2fs", time.perf_counter() - start)

    def render(self, view):
        """
        Render a view.

        Args:
            view: ViewState with center, scale and pixel dimensions

        Returns:
            numpy uint8 array of shape (height, width, 4), B, G, R, A order
        """
        start = time.perf_counter()
        out = np.empty((view.height, view.width, 4), dtype=np.uint8)
        args = (view.center.real, view.center.imag, view.scale,
                self.settings.max_iter, self.settings.bailout,
                self._palette_id, self.settings.sqrt_passes)

        if self.settings.backend == BACKEND_THREADS:
            self._render_threaded(out, args)
        else:
            self._render_numba(out, args)

        logger.debug(
            "Rendered %dx%d at center=%r scale=%g in %.3fs",
            view.width, view.height, view.center, view.scale,
            time.perf_counter() - start,
        )
        return out

    def _render_numba(self, out, args):
        """Render with the prange kernel, honoring the worker limit."""
        workers = self.settings.workers
        if workers is None:
            render_bgra(out, *args)
            return
        previous = numba.get_num_threads()
        numba.set_num_threads(min(workers, numba.config.NUMBA_NUM_THREADS))
        try:
            render_bgra(out, *args)
        finally:
            numba.set_num_threads(previous)

    def _render_threaded(self, out, args):
        """Render disjoint bands of rows on a thread pool."""
        height = out.shape[0]
        bands = [
            (row, min(row + self.ROWS_PER_TASK, height))
            for row in range(0, height, self.ROWS_PER_TASK)
        ]
        with ThreadPoolExecutor(max_workers=self.settings.workers) as pool:
            futures = [
                pool.submit(render_rows, out, row_start, row_stop, *args)
                for row_start, row_stop in bands
            ]
            for future in futures:
                future.result()

