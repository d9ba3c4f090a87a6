"""Serverless entrypoint exposing the meal planner ASGI app."""

import sys
from pathlib import Path

_SRC_DIR = Path(__file__).resolve().parent.parent / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from meal_planner.api.asgi import app  # noqa: E402

__all__ = ["app"]
