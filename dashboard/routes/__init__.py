"""Dashboard routes."""

from .api import api_bp
from .deescalation import deescalation_bp

__all__ = [
    "api_bp",
    "deescalation_bp",
]
