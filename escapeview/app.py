"""
Main application module for the escape-time explorer.

Contains the ExplorerApp class which handles:
- Window setup and main loop
- Decoding pygame input into the abstract events of events.py
- Displaying each rendered buffer
- Keyboard shortcuts (reset, screenshot, quit)
"""

import logging
import os
from datetime import datetime

import pygame

from .events import ButtonPress, ButtonRelease, CursorMove, Resize, Scroll
from .session import ExplorerSession

logger = logging.getLogger(__name__)


def translate_event(event):
    """
    Convert a pygame event into an explorer event.

    Only the left button and the vertical wheel axis are forwarded.

    Returns:
        An event from events.py, or None if the event is not relevant
    """
    if event.type == pygame.VIDEORESIZE:
        return Resize(event.w, event.h)
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        return ButtonPress(event.button)
    if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
        return ButtonRelease(event.button)
    if event.type == pygame.MOUSEMOTION:
        x, y = event.pos
        return CursorMove(float(x), float(y))
    if event.type == pygame.MOUSEWHEEL and event.y != 0:
        return Scroll(float(event.y))
    return None


class ExplorerApp:
    """
    Main application class for the explorer.

    Handles the pygame window and event loop and hands every event to
    an ExplorerSession, which owns the view and the rendered image.
    """

    # Default configuration
    DEFAULT_WIDTH = 800
    DEFAULT_HEIGHT = 600
    CAPTION = "Mandelbrot fractal viewer - Scroll to zoom, drag to pan, R to reset"

    def __init__(self, settings=None, width=None, height=None, screenshot_dir=None):
        """
        Initialize the application.

        Args:
            settings: RenderSettings (default: RenderSettings())
            width: Window width in pixels (default 800)
            height: Window height in pixels (default 600)
            screenshot_dir: Where S saves PNGs (default: current directory)
        """
        self.width = width or self.DEFAULT_WIDTH
        self.height = height or self.DEFAULT_HEIGHT
        self.settings = settings
        self.screenshot_dir = screenshot_dir or os.getcwd()

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None

        self.session = None
        self.current_surface = None
        self.shown_generation = 0
        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._init_session()

        self.running = True
        while self.running:
            self._handle_events()
            self._draw()
            self.clock.tick(60)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create a resizable window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.width, self.height),
            pygame.RESIZABLE
        )
        pygame.display.set_caption("Compiling (first run only)...")
        self.clock = pygame.time.Clock()

    def _init_session(self):
        """Create the session and render at the real window size."""
        self.session = ExplorerSession(self.settings)
        self.session.renderer.warmup()
        width, height = self.screen.get_size()
        self.session.handle(Resize(width, height))
        pygame.display.set_caption(self.CAPTION)

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue
            if event.type == pygame.KEYDOWN:
                self._handle_key(event)
                continue

            explorer_event = translate_event(event)
            if explorer_event is None:
                continue
            if self.session.handle(explorer_event):
                pygame.display.set_caption(self.CAPTION)

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_r:
            self.session.reset()
        elif event.key == pygame.K_s:
            self._save_screenshot()
        elif event.key == pygame.K_ESCAPE:
            self.running = False

    def _surface(self):
        """Copy the current BGRA buffer into a pygame surface."""
        view = self.session.view
        return pygame.image.frombytes(
            self.session.bgra_bytes(), (view.width, view.height), 'BGRA'
        )

    def _save_screenshot(self):
        """Save the current image as a timestamped PNG."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = os.path.join(self.screenshot_dir, f"mandelbrot_{timestamp}.png")
        pygame.image.save(self._surface(), filename)
        pygame.display.set_caption(f"Saved: {os.path.basename(filename)}")
        logger.info("Screenshot saved to %s", filename)

    def _draw(self):
        """Draw the current frame, rebuilding the surface only for new renders."""
        if self.session.generation != self.shown_generation:
            self.current_surface = self._surface()
            self.shown_generation = self.session.generation
        self.screen.fill((0, 0, 0))
        self.screen.blit(self.current_surface, (0, 0))
        pygame.display.flip()


def run(settings=None, width=None, height=None):
    """
    Run the explorer.

    Args:
        settings: RenderSettings (default: RenderSettings())
        width: Window width (default 800)
        height: Window height (default 600)
    """
    app = ExplorerApp(settings, width, height)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
