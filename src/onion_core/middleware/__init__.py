"""Middleware components."""

from .logging import LoggingMiddleware
from .pipeline import Pipeline, compose
from .validation import check_middleware, check_middlewares

__all__ = [
    "LoggingMiddleware",
    "Pipeline",
    "check_middleware",
    "check_middlewares",
    "compose",
]
