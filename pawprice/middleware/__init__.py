"""HTTP middleware."""

from pawprice.middleware.correlation import CorrelationMiddleware
from pawprice.middleware.errors import (
    ErrorHandlingMiddleware,
    ErrorRenderer,
    register_exception_handlers,
)
from pawprice.middleware.metrics import MetricsMiddleware
from pawprice.middleware.security import SecurityHeadersMiddleware

__all__ = [
    "CorrelationMiddleware",
    "ErrorHandlingMiddleware",
    "ErrorRenderer",
    "MetricsMiddleware",
    "SecurityHeadersMiddleware",
    "register_exception_handlers",
]
