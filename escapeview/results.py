"""Escape-time results: a point either escaped with a smoothed count or stayed bounded."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Bounded:
    """Escape result for a point that stayed bounded for the whole budget."""


BOUNDED = Bounded()


@dataclass(frozen=True)
class Escaped:
    """Escape result carrying the smoothed (fractional) iteration count."""

    count: float
