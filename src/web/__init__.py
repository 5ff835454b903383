"""Server-rendered pages for customers and truck owners."""

from web.views import router

__all__ = ["router"]
