"""
Tasky API package.

Marks 'src.tasky_api' as a Python package and exposes the FastAPI app and its
factory for convenience imports (src.tasky_api.app, src.tasky_api.create_app).
"""

from .main import app, create_app  # noqa: F401
