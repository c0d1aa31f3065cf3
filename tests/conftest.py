from __future__ import annotations

import os
import sys
from pathlib import Path

# No window is ever opened by the tests, but importing pygame-backed
# modules must not try to reach a real display.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_ROOT))
