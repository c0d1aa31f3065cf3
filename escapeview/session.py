"""
Explorer session: the single owner of view state and the current image.

The session feeds each event through interaction.apply_event and, when
the view changed, re-renders synchronously. The caller blocks until the
new buffer is ready; renders are never cancelled, so a large viewport
stalls input handling for the duration of a render.
"""

import logging

from .config import RenderSettings
from .interaction import InteractionState, apply_event
from .renderer import FractalRenderer
from .view import ViewState

logger = logging.getLogger(__name__)


class ExplorerSession:
    """
    Holds the interaction state, the renderer and the last rendered buffer.

    Attributes:
        state: Current InteractionState
        image: Last rendered BGRA buffer, shape (height, width, 4)
        generation: Number of renders performed so far; increases by one
            with every new buffer
    """

    def __init__(self, settings=None, view=None, renderer=None):
        self.settings = (settings or RenderSettings()).validate()
        self.renderer = renderer or FractalRenderer(self.settings)
        self.state = InteractionState(view=view or ViewState())
        self.image = None
        self.generation = 0
        self.regenerate()

    @property
    def view(self):
        return self.state.view

    def handle(self, event):
        """
        Process one interaction event.

        Returns:
            True if a new image was rendered
        """
        self.state, needs_render = apply_event(
            self.state, event, self.settings.zoom_policy
        )
        if needs_render:
            self.regenerate()
        return needs_render

    def regenerate(self):
        """Render the current view, replacing the stored image."""
        self.image = self.renderer.render(self.state.view)
        self.generation += 1
        logger.debug("Generation %d ready (%dx%d)", self.generation,
                     self.state.view.width, self.state.view.height)
        return self.image

    def reset(self):
        """Return to the default view, keeping the current window size."""
        view = self.state.view
        self.state = InteractionState(
            view=ViewState(width=view.width, height=view.height),
            cursor=self.state.cursor,
        )
        return self.regenerate()

    def bgra_bytes(self):
        """The current image as raw bytes, row-major, top row first."""
        return self.image.tobytes()
