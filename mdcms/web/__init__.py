"""
HTTP layer.

FastAPI routes, HTTP Basic admin guard and Jinja2 templates around the
article service.
"""

from .app import create_app
from .auth import credentials_checker

__all__ = ["create_app", "credentials_checker"]
