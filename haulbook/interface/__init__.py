"""Mini README: Web interface for Haulbook.

Exports the FastAPI application factory that serves the bookkeeping API and
the browser dashboard. Request schemas live in ``schemas``.
"""

from .web_app import create_application

__all__ = ["create_application"]
