"""Google OAuth sign-in for a FastAPI web app."""

__version__ = "0.1.0"
