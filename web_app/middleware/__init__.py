"""Middleware for QuickLink web app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
