"""Web (HTML) routes."""

from googlelogin.web.router import web_router

__all__ = ["web_router"]
