"""
Abstract interaction events consumed by the explorer.

The host window decodes its own platform events into these values
(see app.translate_event for the pygame mapping).
"""

from dataclasses import dataclass

PRIMARY_BUTTON = 1  # Left mouse button, pygame numbering


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class ButtonPress:
    button: int = PRIMARY_BUTTON


@dataclass(frozen=True)
class ButtonRelease:
    button: int = PRIMARY_BUTTON


@dataclass(frozen=True)
class CursorMove:
    x: float
    y: float


@dataclass(frozen=True)
class Scroll:
    """Vertical wheel movement; positive values zoom in."""

    delta: float
