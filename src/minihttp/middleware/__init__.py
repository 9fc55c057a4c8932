"""
Middleware wrapped around the router.

    Middleware           base class, __call__(request, next) -> response
    MiddlewarePipeline   chains middleware around a final handler
    LoggingMiddleware    access log, text or json
"""

from .base import Middleware, MiddlewarePipeline, NextHandler
from .logging import LoggingMiddleware, RequestLog

__all__ = [
    "Middleware",
    "MiddlewarePipeline",
    "NextHandler",
    "LoggingMiddleware",
    "RequestLog",
]
