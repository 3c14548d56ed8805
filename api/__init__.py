"""
HTTP API for the question paper solver.
"""

from .routes import router, get_bootstrap

__all__ = ["router", "get_bootstrap"]
