from src.middleware.auth import BasicAuthMiddleware
from src.middleware.request_logging import RequestLoggingMiddleware

__all__ = ["BasicAuthMiddleware", "RequestLoggingMiddleware"]
